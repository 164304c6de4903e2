"""Transaction construction settings sent alongside a swap request."""

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import Field

from jupiter_swap_api_client.serde_helpers import JupiterModel, PubkeyStr


class PriorityLevel(str, Enum):
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "veryHigh"


class AutoMultiplier(JupiterModel):
    """Multiply the service's automatic priority fee estimate."""

    auto_multiplier: int = Field(..., ge=1)


class JitoTipLamports(JupiterModel):
    """Pay a fixed Jito tip instead of a compute budget priority fee."""

    jito_tip_lamports: int = Field(..., ge=0)


class PriorityLevelSettings(JupiterModel):
    priority_level: PriorityLevel
    max_lamports: int = Field(..., ge=0)
    global_fee_market: Optional[bool] = Field(None, alias="global")


class PriorityLevelWithMaxLamports(JupiterModel):
    """Let the service pick a fee for a priority level, capped at max_lamports."""

    priority_level_with_max_lamports: PriorityLevelSettings


# Wire forms: "auto", a lamport amount, or one of the tagged objects above
PrioritizationFeeLamports = Union[
    Literal["auto"],
    int,
    AutoMultiplier,
    JitoTipLamports,
    PriorityLevelWithMaxLamports,
]

ComputeUnitPriceMicroLamports = Union[Literal["auto"], int]


class DynamicSlippageSettings(JupiterModel):
    min_bps: Optional[int] = Field(None, ge=0, le=65_535)
    max_bps: Optional[int] = Field(None, ge=0, le=65_535)


class TransactionConfig(JupiterModel):
    """How the service should build the swap transaction.

    Flags with a default are always sent; optional settings are omitted
    until set.
    """

    wrap_and_unwrap_sol: bool = True
    allow_optimized_wrapped_sol_token_account: bool = False
    fee_account: Optional[PubkeyStr] = None
    destination_token_account: Optional[PubkeyStr] = None
    tracking_account: Optional[PubkeyStr] = None
    compute_unit_price_micro_lamports: Optional[ComputeUnitPriceMicroLamports] = None
    prioritization_fee_lamports: Optional[PrioritizationFeeLamports] = None
    dynamic_compute_unit_limit: bool = False
    as_legacy_transaction: bool = False
    use_shared_accounts: Optional[bool] = None
    use_token_ledger: bool = False
    skip_user_accounts_rpc_calls: bool = False
    program_authority_id: Optional[int] = Field(None, ge=0, le=255)
    dynamic_slippage: Optional[DynamicSlippageSettings] = None
    blockhash_slots_to_expiry: Optional[int] = Field(None, ge=0, le=255)
    correct_last_valid_block_height: bool = False

"""Swap request and response contracts.

``/swap`` returns one ready-to-sign transaction. ``/swap-instructions``
returns the instructions that make it up; that payload is decoded into an
internal wire model first and then converted into solders ``Instruction``
values so callers can compose their own transaction.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from pydantic import (
    ConfigDict,
    Field,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction

from jupiter_swap_api_client.quote import QuoteResponse
from jupiter_swap_api_client.serde_helpers import (
    Base64Bytes,
    JupiterModel,
    PubkeyStr,
    TokenId,
    omit_absent_fields,
    to_pubkey,
)
from jupiter_swap_api_client.transaction_config import (
    ComputeUnitPriceMicroLamports,
    DynamicSlippageSettings,
    PrioritizationFeeLamports,
    TransactionConfig,
)

_CONFIG_KEYS = {
    key: name
    for name, info in TransactionConfig.model_fields.items()
    for key in (name, info.alias)
    if key
}


class SwapRequest(JupiterModel):
    """Request to build a swap transaction for a quote.

    The transaction config is flattened into the top level of the JSON
    body, next to ``userPublicKey`` and ``quoteResponse``.
    """

    user_public_key: PubkeyStr
    quote_response: QuoteResponse
    config: TransactionConfig = Field(default_factory=TransactionConfig)

    @model_validator(mode="before")
    @classmethod
    def _nest_config(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "config" in data:
            return data
        data = dict(data)
        config = {}
        for key in list(data):
            if key in _CONFIG_KEYS:
                config[_CONFIG_KEYS[key]] = data.pop(key)
        if config:
            data["config"] = config
        return data

    @model_serializer(mode="wrap")
    def _serialize_wire(
        self, handler: SerializerFunctionWrapHandler, info: SerializationInfo
    ) -> dict[str, Any]:
        data = omit_absent_fields(self, handler(self), info)
        data.update(data.pop("config", None) or {})
        return data

    @classmethod
    def new(
        cls,
        user_public_key: TokenId,
        quote_response: QuoteResponse,
        config: Optional[TransactionConfig] = None,
    ) -> "SwapRequest":
        return cls(
            user_public_key=str(user_public_key),
            quote_response=quote_response,
            config=config or TransactionConfig(),
        )

    def with_config(self, config: TransactionConfig) -> "SwapRequest":
        return self.model_copy(update={"config": config})

    def with_prioritization_fee_lamports(self, fee: PrioritizationFeeLamports) -> "SwapRequest":
        """Set the priority fee: lamports, "auto", or one of the tagged fee models."""
        return self._with_config(prioritization_fee_lamports=fee)

    def with_compute_unit_price_micro_lamports(
        self, price: ComputeUnitPriceMicroLamports
    ) -> "SwapRequest":
        return self._with_config(compute_unit_price_micro_lamports=price)

    def with_dynamic_compute_unit_limit(self, enabled: bool = True) -> "SwapRequest":
        return self._with_config(dynamic_compute_unit_limit=enabled)

    def with_dynamic_slippage(
        self, min_bps: Optional[int] = None, max_bps: Optional[int] = None
    ) -> "SwapRequest":
        return self._with_config(
            dynamic_slippage=DynamicSlippageSettings(min_bps=min_bps, max_bps=max_bps)
        )

    def _with_config(self, **changes: Any) -> "SwapRequest":
        values = {name: getattr(self.config, name) for name in TransactionConfig.model_fields}
        values.update(changes)
        return self.with_config(TransactionConfig.model_validate(values))


class JitoPrioritization(JupiterModel):
    lamports: int


class ComputeBudgetPrioritization(JupiterModel):
    micro_lamports: int
    estimated_micro_lamports: Optional[int] = None


class PrioritizationType(JupiterModel):
    """Which priority mechanism the service applied; exactly one key is set."""

    jito: Optional[JitoPrioritization] = None
    compute_budget: Optional[ComputeBudgetPrioritization] = None


class DynamicSlippageReport(JupiterModel):
    model_config = ConfigDict(extra="allow")

    slippage_bps: Optional[int] = None
    other_amount: Optional[int] = None
    simulated_incurred_slippage_bps: Optional[int] = None
    amplification_ratio: Optional[Decimal] = None
    category_name: Optional[str] = None
    heuristic_max_slippage_bps: Optional[int] = None


class UiSimulationError(JupiterModel):
    error_code: str
    error: str


class SwapResponse(JupiterModel):
    """Serialized, unsigned swap transaction."""

    swap_transaction: Base64Bytes
    last_valid_block_height: int = Field(..., ge=0)
    prioritization_fee_lamports: int = 0
    compute_unit_limit: int = 0
    prioritization_type: Optional[PrioritizationType] = None
    dynamic_slippage_report: Optional[DynamicSlippageReport] = None
    simulation_error: Optional[UiSimulationError] = None

    def versioned_transaction(self) -> VersionedTransaction:
        """Deserialize the transaction bytes for signing."""
        return VersionedTransaction.from_bytes(self.swap_transaction)


class AccountMetaInternal(JupiterModel):
    pubkey: PubkeyStr
    is_signer: bool
    is_writable: bool

    def to_account_meta(self) -> AccountMeta:
        return AccountMeta(to_pubkey(self.pubkey), self.is_signer, self.is_writable)


class InstructionInternal(JupiterModel):
    program_id: PubkeyStr
    accounts: list[AccountMetaInternal]
    data: Base64Bytes

    def to_instruction(self) -> Instruction:
        accounts = [account.to_account_meta() for account in self.accounts]
        return Instruction(to_pubkey(self.program_id), self.data, accounts)


class SwapInstructionsResponseInternal(JupiterModel):
    """``/swap-instructions`` payload as it appears on the wire."""

    token_ledger_instruction: Optional[InstructionInternal] = None
    compute_budget_instructions: list[InstructionInternal]
    setup_instructions: list[InstructionInternal]
    swap_instruction: InstructionInternal
    cleanup_instruction: Optional[InstructionInternal] = None
    other_instructions: list[InstructionInternal] = Field(default_factory=list)
    address_lookup_table_addresses: list[PubkeyStr]
    prioritization_fee_lamports: int = 0
    compute_unit_limit: int = 0
    prioritization_type: Optional[PrioritizationType] = None
    dynamic_slippage_report: Optional[DynamicSlippageReport] = None
    simulation_error: Optional[UiSimulationError] = None

    def to_public(self) -> "SwapInstructionsResponse":
        def convert(instructions: list[InstructionInternal]) -> tuple[Instruction, ...]:
            return tuple(instruction.to_instruction() for instruction in instructions)

        return SwapInstructionsResponse(
            token_ledger_instruction=(
                self.token_ledger_instruction.to_instruction()
                if self.token_ledger_instruction
                else None
            ),
            compute_budget_instructions=convert(self.compute_budget_instructions),
            setup_instructions=convert(self.setup_instructions),
            swap_instruction=self.swap_instruction.to_instruction(),
            cleanup_instruction=(
                self.cleanup_instruction.to_instruction() if self.cleanup_instruction else None
            ),
            other_instructions=convert(self.other_instructions),
            address_lookup_table_addresses=tuple(
                to_pubkey(address) for address in self.address_lookup_table_addresses
            ),
            prioritization_fee_lamports=self.prioritization_fee_lamports,
            compute_unit_limit=self.compute_unit_limit,
            prioritization_type=self.prioritization_type,
            dynamic_slippage_report=self.dynamic_slippage_report,
            simulation_error=self.simulation_error,
        )


@dataclass(frozen=True)
class SwapInstructionsResponse:
    """Instructions needed to execute a swap, ready to compose into a transaction."""

    swap_instruction: Instruction
    compute_budget_instructions: tuple[Instruction, ...] = ()
    setup_instructions: tuple[Instruction, ...] = ()
    token_ledger_instruction: Optional[Instruction] = None
    cleanup_instruction: Optional[Instruction] = None
    other_instructions: tuple[Instruction, ...] = ()
    address_lookup_table_addresses: tuple[Pubkey, ...] = ()
    prioritization_fee_lamports: int = 0
    compute_unit_limit: int = 0
    prioritization_type: Optional[PrioritizationType] = None
    dynamic_slippage_report: Optional[DynamicSlippageReport] = None
    simulation_error: Optional[UiSimulationError] = None

    @property
    def instructions(self) -> list[Instruction]:
        """All instructions in execution order."""
        ordered: list[Instruction] = list(self.compute_budget_instructions)
        if self.token_ledger_instruction is not None:
            ordered.append(self.token_ledger_instruction)
        ordered.extend(self.setup_instructions)
        ordered.append(self.swap_instruction)
        if self.cleanup_instruction is not None:
            ordered.append(self.cleanup_instruction)
        ordered.extend(self.other_instructions)
        return ordered

"""Quote request and response contracts."""

from enum import Enum
from typing import Any, Optional

from pydantic import ConfigDict, Field, field_serializer, field_validator

from jupiter_swap_api_client.route_plan_with_metadata import RoutePlanWithMetadata
from jupiter_swap_api_client.serde_helpers import (
    DecimalStr,
    JupiterModel,
    PubkeyStr,
    TokenId,
    U64Str,
)


class SwapMode(str, Enum):
    """Which side of the swap the amount fixes."""

    EXACT_IN = "ExactIn"
    EXACT_OUT = "ExactOut"


class QuoteRequest(JupiterModel):
    """Request for a swap quote.

    Only the mints and the amount are required. Every other refinement is
    absent until set, and absent refinements are not sent. ``quote_args``
    is an open bag of extra query parameters applied after the structured
    fields when the request is sent.
    """

    input_mint: PubkeyStr
    output_mint: PubkeyStr
    amount: U64Str
    swap_mode: Optional[SwapMode] = None
    slippage_bps: Optional[int] = Field(None, ge=0, le=65_535)
    auto_slippage: Optional[bool] = None
    max_auto_slippage_bps: Optional[int] = Field(None, ge=0, le=65_535)
    compute_auto_slippage: Optional[bool] = None
    auto_slippage_collision_usd_value: Optional[int] = Field(None, ge=0)
    minimize_slippage: Optional[bool] = None
    platform_fee_bps: Optional[int] = Field(None, ge=0, le=255)
    dexes: Optional[list[str]] = None
    excluded_dexes: Optional[list[str]] = None
    only_direct_routes: Optional[bool] = None
    as_legacy_transaction: Optional[bool] = None
    restrict_intermediate_tokens: Optional[bool] = None
    max_accounts: Optional[int] = Field(None, ge=0)
    quote_type: Optional[str] = None
    prefer_liquid_dexes: Optional[bool] = None
    quote_args: Optional[dict[str, str]] = Field(None, exclude=True)

    @field_validator("dexes", "excluded_dexes", mode="before")
    @classmethod
    def _split_dexes(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [dex.strip() for dex in value.split(",") if dex.strip()]
        return value

    @field_serializer("dexes", "excluded_dexes")
    def _join_dexes(self, value: Optional[list[str]]) -> Optional[str]:
        if value is None:
            return None
        return ",".join(value)

    @classmethod
    def new(cls, input_mint: TokenId, output_mint: TokenId, amount: int) -> "QuoteRequest":
        """Create a quote request from the required fields only."""
        return cls(input_mint=str(input_mint), output_mint=str(output_mint), amount=amount)

    def with_slippage_bps(self, slippage_bps: int) -> "QuoteRequest":
        return self._with(slippage_bps=slippage_bps)

    def with_swap_mode(self, swap_mode: SwapMode) -> "QuoteRequest":
        return self._with(swap_mode=SwapMode(swap_mode))

    def with_dexes(self, dexes: list[str]) -> "QuoteRequest":
        return self._with(dexes=list(dexes))

    def with_excluded_dexes(self, dexes: list[str]) -> "QuoteRequest":
        return self._with(excluded_dexes=list(dexes))

    def with_only_direct_routes(self, only_direct_routes: bool = True) -> "QuoteRequest":
        return self._with(only_direct_routes=only_direct_routes)

    def with_max_accounts(self, max_accounts: int) -> "QuoteRequest":
        return self._with(max_accounts=max_accounts)

    def with_quote_args(self, quote_args: dict[str, str]) -> "QuoteRequest":
        """Replace the extra query bag."""
        return self._with(quote_args=dict(quote_args))

    def with_quote_arg(self, key: str, value: str) -> "QuoteRequest":
        """Add one extra query parameter, keeping the ones already set."""
        quote_args = dict(self.quote_args or {})
        quote_args[key] = value
        return self._with(quote_args=quote_args)

    def _with(self, **changes: Any) -> "QuoteRequest":
        # Re-validate so refinements obey the same field constraints
        data = self.model_dump()
        data["quote_args"] = self.quote_args
        data.update(changes)
        return type(self).model_validate(data)


class PlatformFee(JupiterModel):
    """Integrator fee taken from the swap output."""

    amount: U64Str
    fee_bps: int


class QuoteResponse(JupiterModel):
    """A priced swap proposal, including every hop of its route.

    Keys the client does not model are kept and sent back unchanged when
    the quote is embedded in a swap request.
    """

    model_config = ConfigDict(extra="allow")

    input_mint: PubkeyStr
    in_amount: U64Str
    output_mint: PubkeyStr
    out_amount: U64Str
    other_amount_threshold: U64Str
    swap_mode: SwapMode
    slippage_bps: int
    computed_auto_slippage: Optional[int] = None
    uses_quote_minimizing_slippage: Optional[bool] = None
    platform_fee: Optional[PlatformFee] = None
    price_impact_pct: DecimalStr
    route_plan: RoutePlanWithMetadata
    context_slot: int = 0
    time_taken: float = 0.0

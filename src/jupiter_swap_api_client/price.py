"""Price API v2 contracts.

Prices are decimals sent as strings and stay strings here, so nothing is
lost to float rounding. Extra info is only returned when requested with
``showExtraInfo=true``.
"""

from typing import Iterable, Optional

from pydantic import Field

from jupiter_swap_api_client.serde_helpers import JupiterModel, TokenId, U64Str

# Prices are quoted against USDC unless a vs token is given
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
SOL_MINT = "So11111111111111111111111111111111111111112"


class PriceRequest(JupiterModel):
    """Request parameters for the price API."""

    ids: str = Field(..., description="Comma-separated token mints")
    vs_token: Optional[str] = Field(None, description="Token to price against (USDC when absent)")
    show_extra_info: Optional[bool] = None

    @classmethod
    def new_single(cls, token_mint: TokenId) -> "PriceRequest":
        return cls(ids=str(token_mint))

    @classmethod
    def new_multiple(cls, token_mints: Iterable[TokenId]) -> "PriceRequest":
        return cls(ids=",".join(str(mint) for mint in token_mints))

    def with_vs_token(self, vs_token: TokenId) -> "PriceRequest":
        return self.model_copy(update={"vs_token": str(vs_token)})

    def with_extra_info(self, show_extra_info: bool = True) -> "PriceRequest":
        return self.model_copy(update={"show_extra_info": show_extra_info})

    @property
    def token_ids(self) -> list[str]:
        return [token for token in self.ids.split(",") if token]


class LastSwappedPrice(JupiterModel):
    last_jupiter_sell_at: Optional[U64Str] = None
    last_jupiter_sell_price: Optional[str] = None
    last_jupiter_buy_at: Optional[U64Str] = None
    last_jupiter_buy_price: Optional[str] = None


class QuotedPrice(JupiterModel):
    buy_price: Optional[str] = None
    buy_at: Optional[U64Str] = None
    sell_price: Optional[str] = None
    sell_at: Optional[U64Str] = None


class PriceImpactRatio(JupiterModel):
    """Price impact per notional trade size, e.g. {"10": 0.01, "100": 0.2}."""

    depth: dict[str, float]
    timestamp: int = Field(..., ge=0)


class DepthInfo(JupiterModel):
    buy_price_impact_ratio: Optional[PriceImpactRatio] = None
    sell_price_impact_ratio: Optional[PriceImpactRatio] = None


class PriceExtraInfo(JupiterModel):
    last_swapped_price: Optional[LastSwappedPrice] = None
    quoted_price: Optional[QuotedPrice] = None
    confidence_level: Optional[str] = None
    depth: Optional[DepthInfo] = None


class TokenPrice(JupiterModel):
    """Price of a single token."""

    id: str
    price_type: str = Field(..., alias="type")
    price: str
    extra_info: Optional[PriceExtraInfo] = None


class PriceResponse(JupiterModel):
    """Prices keyed by token mint; a token the service cannot price maps to None."""

    data: dict[str, Optional[TokenPrice]]
    time_taken: float

    def get(self, token_id: TokenId) -> Optional[TokenPrice]:
        return self.data.get(str(token_id))

"""Legacy price API v1 contracts.

v1 accepts token symbols as well as mints, returns prices as floats and
reports failures in a 200 body shaped ``{"error": ..., "addresses": [...]}``.
No client operation calls v1; the schema is kept for callers still holding
v1 payloads.
"""

from typing import Iterable, Optional, Union

from pydantic import ValidationError

from jupiter_swap_api_client.serde_helpers import JupiterModel, TokenId


class PriceV1Request(JupiterModel):
    ids: str
    vs_token: Optional[str] = None

    @classmethod
    def new_single(cls, token_id: TokenId) -> "PriceV1Request":
        """Symbol (e.g. "SOL") or mint."""
        return cls(ids=str(token_id))

    @classmethod
    def new_multiple(cls, token_ids: Iterable[TokenId]) -> "PriceV1Request":
        return cls(ids=",".join(str(token_id) for token_id in token_ids))

    def with_vs_token(self, vs_token: TokenId) -> "PriceV1Request":
        return self.model_copy(update={"vs_token": str(vs_token)})


class TokenV1Price(JupiterModel):
    id: str
    mint_symbol: str = ""
    vs_token: str
    vs_token_symbol: str
    price: float


class PriceV1Response(JupiterModel):
    data: dict[str, TokenV1Price]
    time_taken: float


class PriceV1Error(JupiterModel):
    """Error body returned with a success status."""

    error: str
    addresses: Optional[list[str]] = None


def decode_price_v1(body: Union[str, bytes]) -> Union[PriceV1Response, PriceV1Error]:
    """Decode a v1 body, which may be either a price map or an error.

    Raises pydantic's ValidationError if it is neither.
    """
    try:
        return PriceV1Error.model_validate_json(body)
    except ValidationError:
        return PriceV1Response.model_validate_json(body)

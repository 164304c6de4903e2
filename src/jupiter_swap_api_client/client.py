"""Jupiter swap API client.

Wraps the quote, swap, swap-instructions and price endpoints of the
Jupiter aggregator. API docs: https://station.jup.ag/docs/apis/swap-api
"""

import logging
from typing import Iterable, Optional

import httpx

from jupiter_swap_api_client.classifier import Classified, unwrap
from jupiter_swap_api_client.config import get_settings
from jupiter_swap_api_client.price import PriceRequest, PriceResponse
from jupiter_swap_api_client.quote import QuoteRequest, QuoteResponse
from jupiter_swap_api_client.serde_helpers import TokenId
from jupiter_swap_api_client.swap import (
    SwapInstructionsResponse,
    SwapInstructionsResponseInternal,
    SwapRequest,
    SwapResponse,
)
from jupiter_swap_api_client.transport import HttpTransport, encode_query

logger = logging.getLogger(__name__)


class JupiterSwapApiClient:
    """Async client for the Jupiter swap and price APIs.

    The client holds configuration only. Every call is an independent
    round trip, so one instance can serve concurrent calls.

    Each operation raises ``RequestFailed`` for a non-2xx status and
    ``DeserializationError`` when a 2xx body does not decode. The
    ``*_classified`` variants return the same outcomes as values instead.
    """

    def __init__(
        self,
        base_path: Optional[str] = None,
        timeout: Optional[float] = None,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            base_path: API base URL (default: JUPITER_BASE_PATH setting)
            timeout: HTTP timeout in seconds (default: JUPITER_TIMEOUT setting)
            api_key: Optional API key sent as x-api-key
            transport: Optional httpx transport, e.g. for tests or proxies
        """
        settings = get_settings()
        self.http = HttpTransport(
            base_path=base_path or settings.base_path,
            timeout=timeout if timeout is not None else settings.timeout,
            api_key=api_key if api_key is not None else settings.api_key,
            transport=transport,
        )

    @property
    def base_path(self) -> str:
        return self.http.base_path

    async def quote_classified(self, quote_request: QuoteRequest) -> Classified[QuoteResponse]:
        params = encode_query(quote_request, quote_request.quote_args)
        logger.debug(
            f"Quote {quote_request.input_mint[:8]}... -> {quote_request.output_mint[:8]}... "
            f"amount={quote_request.amount}"
        )
        return await self.http.get("/quote", QuoteResponse, params=params)

    async def quote(self, quote_request: QuoteRequest) -> QuoteResponse:
        """Get a quote for swapping ``amount`` of input_mint into output_mint."""
        return unwrap(await self.quote_classified(quote_request))

    async def swap_classified(
        self,
        swap_request: SwapRequest,
        extra_args: Optional[dict[str, str]] = None,
    ) -> Classified[SwapResponse]:
        params = encode_query(extra=extra_args)
        return await self.http.post("/swap", SwapResponse, json=swap_request, params=params)

    async def swap(
        self,
        swap_request: SwapRequest,
        extra_args: Optional[dict[str, str]] = None,
    ) -> SwapResponse:
        """Build a serialized swap transaction for a quote.

        Args:
            swap_request: User key, quote and transaction config
            extra_args: Additional query parameters sent with the request

        Returns:
            SwapResponse with the unsigned transaction bytes
        """
        return unwrap(await self.swap_classified(swap_request, extra_args))

    async def swap_instructions_classified(
        self, swap_request: SwapRequest
    ) -> Classified[SwapInstructionsResponse]:
        result = await self.http.post(
            "/swap-instructions", SwapInstructionsResponseInternal, json=swap_request
        )
        if isinstance(result, Exception):
            return result
        return result.map(SwapInstructionsResponseInternal.to_public)

    async def swap_instructions(self, swap_request: SwapRequest) -> SwapInstructionsResponse:
        """Get the individual instructions for a swap instead of a full transaction."""
        return unwrap(await self.swap_instructions_classified(swap_request))

    async def get_prices_classified(
        self, price_request: PriceRequest
    ) -> Classified[PriceResponse]:
        return await self.http.get(
            "/price/v2", PriceResponse, params=encode_query(price_request)
        )

    async def get_prices(self, price_request: PriceRequest) -> PriceResponse:
        """Get prices for one or more tokens from the Price API v2.

        Prices are in USDC unless the request sets a vs token.
        """
        return unwrap(await self.get_prices_classified(price_request))

    async def get_token_price(self, token_mint: TokenId) -> PriceResponse:
        """Get the USDC price of a single token."""
        return await self.get_prices(PriceRequest.new_single(token_mint))

    async def get_token_prices(self, token_mints: Iterable[TokenId]) -> PriceResponse:
        """Get USDC prices for several tokens in one call."""
        return await self.get_prices(PriceRequest.new_multiple(token_mints))

    async def get_token_pair_price(
        self, token_mint: TokenId, vs_token: TokenId
    ) -> PriceResponse:
        """Get the price of a token in terms of another token."""
        request = PriceRequest.new_single(token_mint).with_vs_token(vs_token)
        return await self.get_prices(request)

    async def get_detailed_price(self, token_mint: TokenId) -> PriceResponse:
        """Get the price of a token including extra info (depth, confidence, last swaps)."""
        request = PriceRequest.new_single(token_mint).with_extra_info(True)
        return await self.get_prices(request)

"""Typed async client for the Jupiter swap and price APIs."""

__version__ = "0.1.0"

from jupiter_swap_api_client.classifier import Classified, Success, classify_response, unwrap
from jupiter_swap_api_client.client import JupiterSwapApiClient
from jupiter_swap_api_client.errors import ClientError, DeserializationError, RequestFailed
from jupiter_swap_api_client.price import (
    SOL_MINT,
    USDC_MINT,
    PriceExtraInfo,
    PriceRequest,
    PriceResponse,
    TokenPrice,
)
from jupiter_swap_api_client.price_v1 import (
    PriceV1Error,
    PriceV1Request,
    PriceV1Response,
    TokenV1Price,
    decode_price_v1,
)
from jupiter_swap_api_client.quote import PlatformFee, QuoteRequest, QuoteResponse, SwapMode
from jupiter_swap_api_client.route_plan_with_metadata import (
    RoutePlanStep,
    RoutePlanWithMetadata,
    SwapInfo,
)
from jupiter_swap_api_client.swap import (
    SwapInstructionsResponse,
    SwapRequest,
    SwapResponse,
)
from jupiter_swap_api_client.transaction_config import (
    AutoMultiplier,
    DynamicSlippageSettings,
    JitoTipLamports,
    PriorityLevel,
    PriorityLevelSettings,
    PriorityLevelWithMaxLamports,
    TransactionConfig,
)

__all__ = [
    # Client
    "JupiterSwapApiClient",
    # Classification and errors
    "Classified",
    "Success",
    "classify_response",
    "unwrap",
    "ClientError",
    "RequestFailed",
    "DeserializationError",
    # Quote
    "QuoteRequest",
    "QuoteResponse",
    "PlatformFee",
    "SwapMode",
    "RoutePlanStep",
    "RoutePlanWithMetadata",
    "SwapInfo",
    # Swap
    "SwapRequest",
    "SwapResponse",
    "SwapInstructionsResponse",
    "TransactionConfig",
    "AutoMultiplier",
    "JitoTipLamports",
    "PriorityLevel",
    "PriorityLevelSettings",
    "PriorityLevelWithMaxLamports",
    "DynamicSlippageSettings",
    # Price
    "PriceRequest",
    "PriceResponse",
    "TokenPrice",
    "PriceExtraInfo",
    "SOL_MINT",
    "USDC_MINT",
    # Price v1 (legacy)
    "PriceV1Request",
    "PriceV1Response",
    "PriceV1Error",
    "TokenV1Price",
    "decode_price_v1",
]

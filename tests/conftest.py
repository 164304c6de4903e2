"""Pytest configuration and fixtures."""

import copy
import os
from typing import Callable

import httpx
import pytest

# Set test environment
os.environ["JUPITER_BASE_PATH"] = "https://jupiter.test/v6"
os.environ["JUPITER_TIMEOUT"] = "5"
os.environ.pop("JUPITER_API_KEY", None)

from jupiter_swap_api_client.client import JupiterSwapApiClient
from jupiter_swap_api_client.config import get_settings

SOL_MINT = "So11111111111111111111111111111111111111112"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
USDT_MINT = "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB"
USER_PUBKEY = "JUP6LkbZbjS1jKKwapdHNy74zcZ3tLUZoi5QNyVTaV4"
TOKEN_PROGRAM = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
COMPUTE_BUDGET_PROGRAM = "ComputeBudget111111111111111111111111111111"
SYSTEM_PROGRAM = "11111111111111111111111111111111"
WHIRLPOOL_PROGRAM = "whirLbMiicVdio4qvUfM5KAg6Ct8VwpYzGff3uctyCc"
RAYDIUM_PROGRAM = "675kPX9MHTjS2zt1qfr1NYHuzeLXfQM9H24wFSUt1Mp8"
AMM_KEY_1 = "3QYYvFWgSuGK8bbxMSAYkCqE8QfSuFtByagnZAuekia2"
AMM_KEY_2 = "CNC5TaeNQEoSPfQKZ7GgfM4R8WYAJRKRSHFCHkf2H7ko"

# Captured /quote response: SOL -> USDT on Whirlpool, then USDT -> USDC on Aquifer
QUOTE_RESPONSE = {
    "inputMint": SOL_MINT,
    "inAmount": "100000000",
    "outputMint": USDC_MINT,
    "outAmount": "13882709",
    "otherAmountThreshold": "13811907",
    "swapMode": "ExactIn",
    "slippageBps": 50,
    "platformFee": {"amount": "0", "feeBps": 0},
    "priceImpactPct": "-0.00011902847845983851",
    "routePlan": [
        {
            "swapInfo": {
                "ammKey": AMM_KEY_1,
                "label": "Whirlpool",
                "inputMint": SOL_MINT,
                "outputMint": USDT_MINT,
                "inAmount": "100000000",
                "outAmount": "13889289",
                "feeAmount": "4000",
                "feeMint": SOL_MINT,
                "marketIncurredSlippageBpsF64": "4.239272860805456",
            },
            "percent": 100,
            "bps": 10000,
        },
        {
            "swapInfo": {
                "ammKey": AMM_KEY_2,
                "label": "Aquifer",
                "inputMint": USDT_MINT,
                "outputMint": USDC_MINT,
                "inAmount": "13889289",
                "outAmount": "13882709",
                "feeAmount": "10",
                "feeMint": USDT_MINT,
            },
            "percent": 100,
            "bps": 10000,
            "usdValue": 13.882608757455545,
        },
    ],
    "contextSlot": 299283763,
    "timeTaken": 0.0123,
    "swapUsdValue": "13.88",
}

SWAP_RESPONSE = {
    "swapTransaction": "AQID",
    "lastValidBlockHeight": 279632475,
    "prioritizationFeeLamports": 9999,
    "computeUnitLimit": 388876,
    "prioritizationType": {
        "computeBudget": {"microLamports": 25715, "estimatedMicroLamports": 785154}
    },
    "dynamicSlippageReport": {
        "slippageBps": 50,
        "otherAmount": 20612318,
        "simulatedIncurredSlippageBps": -18,
        "amplificationRatio": "1.5",
        "categoryName": "lst",
        "heuristicMaxSlippageBps": 100,
    },
}

SWAP_INSTRUCTIONS_RESPONSE = {
    "computeBudgetInstructions": [
        {"programId": COMPUTE_BUDGET_PROGRAM, "accounts": [], "data": "AsBcFQA="},
    ],
    "setupInstructions": [
        {
            "programId": TOKEN_PROGRAM,
            "accounts": [
                {"pubkey": USER_PUBKEY, "isSigner": True, "isWritable": True},
                {"pubkey": USDC_MINT, "isSigner": False, "isWritable": False},
                {"pubkey": SYSTEM_PROGRAM, "isSigner": False, "isWritable": False},
            ],
            "data": "AQ==",
        }
    ],
    "swapInstruction": {
        "programId": USER_PUBKEY,
        "accounts": [
            {"pubkey": TOKEN_PROGRAM, "isSigner": False, "isWritable": False},
            {"pubkey": USER_PUBKEY, "isSigner": True, "isWritable": False},
            {"pubkey": WHIRLPOOL_PROGRAM, "isSigner": False, "isWritable": True},
        ],
        "data": "AQID",
    },
    "cleanupInstruction": {
        "programId": TOKEN_PROGRAM,
        "accounts": [{"pubkey": USER_PUBKEY, "isSigner": True, "isWritable": True}],
        "data": "CQ==",
    },
    "otherInstructions": [],
    "addressLookupTableAddresses": [RAYDIUM_PROGRAM, WHIRLPOOL_PROGRAM],
    "prioritizationFeeLamports": 5000,
    "computeUnitLimit": 1400000,
}

PRICE_RESPONSE = {
    "data": {
        "MINT1": {"id": "MINT1", "type": "derivedPrice", "price": "1.23"},
    },
    "timeTaken": 0.01,
}

PRICE_RESPONSE_EXTRA_INFO = {
    "data": {
        SOL_MINT: {
            "id": SOL_MINT,
            "type": "derivedPrice",
            "price": "132.176540000",
            "extraInfo": {
                "lastSwappedPrice": {
                    "lastJupiterSellAt": "1726231876",
                    "lastJupiterSellPrice": "132.1815918927837",
                    "lastJupiterBuyAt": "1726231877",
                    "lastJupiterBuyPrice": "132.05133138121352",
                },
                "quotedPrice": {
                    "buyPrice": "132.17654",
                    "buyAt": "1726231878",
                    "sellPrice": "132.1333",
                    "sellAt": "1726231878",
                },
                "confidenceLevel": "high",
                "depth": {
                    "buyPriceImpactRatio": {
                        "depth": {"10": 0.0116, "100": 0.0275, "1000": 0.1431},
                        "timestamp": 1726231876,
                    },
                    "sellPriceImpactRatio": {
                        "depth": {"10": 0.0209, "100": 0.0566, "1000": 0.1877},
                        "timestamp": 1726231876,
                    },
                },
            },
        },
        USDT_MINT: None,
    },
    "timeTaken": 0.0034,
}


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Re-read settings from the environment for each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def quote_json() -> dict:
    return copy.deepcopy(QUOTE_RESPONSE)


@pytest.fixture
def swap_json() -> dict:
    return copy.deepcopy(SWAP_RESPONSE)


@pytest.fixture
def swap_instructions_json() -> dict:
    return copy.deepcopy(SWAP_INSTRUCTIONS_RESPONSE)


@pytest.fixture
def price_json() -> dict:
    return copy.deepcopy(PRICE_RESPONSE)


@pytest.fixture
def price_extra_info_json() -> dict:
    return copy.deepcopy(PRICE_RESPONSE_EXTRA_INFO)


class RecordingHandler:
    """MockTransport handler that records requests and replays a fixed response."""

    def __init__(self, status_code: int = 200, json=None, text: str = None):
        self.status_code = status_code
        self.json = json
        self.text = text
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.json)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def make_client() -> Callable[..., tuple[JupiterSwapApiClient, RecordingHandler]]:
    """Build a client whose transport answers every call with one canned response."""

    def _make(status_code: int = 200, json=None, text: str = None, **kwargs):
        handler = RecordingHandler(status_code, json=json, text=text)
        client = JupiterSwapApiClient(transport=httpx.MockTransport(handler), **kwargs)
        return client, handler

    return _make

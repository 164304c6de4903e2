"""Tests for query encoding and the HTTP transport adapter."""

import json

import httpx
import pytest

from jupiter_swap_api_client.classifier import Success
from jupiter_swap_api_client.errors import DeserializationError, RequestFailed
from jupiter_swap_api_client.price import PriceRequest, PriceResponse
from jupiter_swap_api_client.quote import QuoteRequest
from jupiter_swap_api_client.serde_helpers import JupiterModel
from jupiter_swap_api_client.transport import HttpTransport, encode_query

from conftest import SOL_MINT, USDC_MINT, RecordingHandler


class TestEncodeQuery:
    """Two-phase encoding: structured fields, then the extra-argument bag."""

    def test_structured_fields_only(self):
        request = QuoteRequest.new(SOL_MINT, USDC_MINT, 1000).with_slippage_bps(50)

        assert encode_query(request) == [
            ("inputMint", SOL_MINT),
            ("outputMint", USDC_MINT),
            ("amount", "1000"),
            ("slippageBps", "50"),
        ]

    def test_bag_overwrites_colliding_key_in_place(self):
        request = QuoteRequest.new(SOL_MINT, USDC_MINT, 1000).with_slippage_bps(50)

        query = encode_query(request, {"slippageBps": "75", "platform": "test"})

        assert query == [
            ("inputMint", SOL_MINT),
            ("outputMint", USDC_MINT),
            ("amount", "1000"),
            ("slippageBps", "75"),
            ("platform", "test"),
        ]

    def test_no_duplicate_keys(self):
        request = QuoteRequest.new(SOL_MINT, USDC_MINT, 1000)

        query = encode_query(request, {"amount": "5"})

        assert [key for key, _ in query].count("amount") == 1
        assert dict(query)["amount"] == "5"

    def test_booleans_and_lists(self):
        request = (
            QuoteRequest.new(SOL_MINT, USDC_MINT, 1)
            .with_only_direct_routes(False)
            .with_dexes(["Whirlpool", "Meteora DLMM"])
        )

        query = dict(encode_query(request))
        assert query["onlyDirectRoutes"] == "false"
        assert query["dexes"] == "Whirlpool,Meteora DLMM"

    def test_bag_only(self):
        assert encode_query(extra={"a": "1"}) == [("a", "1")]
        assert encode_query() == []

    def test_nested_value_is_rejected(self):
        class Nested(JupiterModel):
            ids: str
            filters: dict[str, int]

        with pytest.raises(TypeError):
            encode_query(Nested(ids="A", filters={"x": 1}))


class TestHttpTransport:
    """Tests for HttpTransport.execute."""

    @pytest.mark.asyncio
    async def test_get_with_query(self, price_json):
        handler = RecordingHandler(json=price_json)
        transport = HttpTransport("https://jupiter.test/v6/", transport=httpx.MockTransport(handler))

        result = await transport.get("/price/v2", PriceResponse, params=[("ids", "MINT1")])

        assert isinstance(result, Success)
        request = handler.last
        assert request.method == "GET"
        assert request.url.path == "/v6/price/v2"
        assert request.url.params.multi_items() == [("ids", "MINT1")]
        assert request.headers["accept"] == "application/json"
        assert "x-api-key" not in request.headers

    @pytest.mark.asyncio
    async def test_post_model_body(self, price_json):
        handler = RecordingHandler(json=price_json)
        transport = HttpTransport("https://jupiter.test", transport=httpx.MockTransport(handler))

        await transport.post("/echo", PriceResponse, json=PriceRequest.new_single("MINT1"))

        assert handler.last.method == "POST"
        assert json.loads(handler.last.content) == {"ids": "MINT1"}

    @pytest.mark.asyncio
    async def test_api_key_header(self, price_json):
        handler = RecordingHandler(json=price_json)
        transport = HttpTransport(
            "https://jupiter.test", api_key="secret", transport=httpx.MockTransport(handler)
        )

        await transport.get("/price/v2", PriceResponse)

        assert handler.last.headers["x-api-key"] == "secret"

    @pytest.mark.asyncio
    async def test_failure_status(self):
        handler = RecordingHandler(status_code=429, text="Too Many Requests")
        transport = HttpTransport("https://jupiter.test", transport=httpx.MockTransport(handler))

        result = await transport.get("/quote", PriceResponse)

        assert result == RequestFailed(429, "Too Many Requests")
        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("dns failure", request=request)

        transport = HttpTransport("https://jupiter.test", transport=httpx.MockTransport(handler))

        result = await transport.get("/quote", PriceResponse)

        assert isinstance(result, DeserializationError)
        assert isinstance(result.source, httpx.ConnectError)

"""HTTP transport adapter: one typed request in, one classified response out."""

import logging
from typing import Any, Mapping, Optional

import httpx
from pydantic import BaseModel

from jupiter_swap_api_client.classifier import Classified, M, classify_response
from jupiter_swap_api_client.errors import DeserializationError
from jupiter_swap_api_client.serde_helpers import JupiterModel

logger = logging.getLogger(__name__)

QueryParams = list[tuple[str, str]]


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_query_value(item) for item in value)
    return str(value)


def encode_query(
    structured: Optional[JupiterModel] = None,
    extra: Optional[Mapping[str, str]] = None,
) -> QueryParams:
    """Encode query parameters from a request model and an extra-argument bag.

    Structured fields are encoded first. Bag entries are applied after them:
    a colliding key is overwritten in place, any other key is appended.
    """
    params: dict[str, str] = {}

    if structured is not None:
        for key, value in structured.to_wire().items():
            if value is None:
                continue
            if isinstance(value, dict):
                raise TypeError(f"Nested value for query parameter {key!r} cannot be encoded")
            params[key] = _query_value(value)

    for key, value in (extra or {}).items():
        params[key] = str(value)

    return list(params.items())


class HttpTransport:
    """Issues exactly one HTTP call per request against a base URL.

    A fresh ``httpx.AsyncClient`` is opened per call, so the adapter holds
    no session state. Pass ``transport`` to plug in a custom httpx transport.
    """

    def __init__(
        self,
        base_path: str,
        timeout: float = 30.0,
        api_key: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_path = base_path.rstrip("/")
        self.timeout = timeout
        self.api_key = api_key
        self.transport = transport

    def _get_headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    async def execute(
        self,
        method: str,
        path: str,
        schema: type[M],
        params: Optional[QueryParams] = None,
        json: Optional[Any] = None,
    ) -> Classified[M]:
        """Send the request and classify the response against ``schema``."""
        url = f"{self.base_path}{path}"
        if isinstance(json, BaseModel):
            json = json.model_dump(mode="json", by_alias=True)

        logger.debug(f"{method} {url} params={params or []}")

        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=self._get_headers(),
            transport=self.transport,
        ) as client:
            request = client.build_request(method, url, params=params, json=json)
            try:
                response = await client.send(request, stream=True)
            except httpx.HTTPError as e:
                return DeserializationError(e)

            try:
                return await classify_response(response, schema)
            finally:
                await response.aclose()

    async def get(
        self, path: str, schema: type[M], params: Optional[QueryParams] = None
    ) -> Classified[M]:
        return await self.execute("GET", path, schema, params=params)

    async def post(
        self,
        path: str,
        schema: type[M],
        json: Any,
        params: Optional[QueryParams] = None,
    ) -> Classified[M]:
        return await self.execute("POST", path, schema, params=params, json=json)

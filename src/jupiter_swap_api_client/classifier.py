"""Turn a raw HTTP response into a decoded value or a typed error.

Classification is a single pass with two steps: check the status, then
decode the body. The result is a value of ``Classified``; errors are
returned, not raised, so call sites see every outcome.
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from jupiter_swap_api_client.errors import DeserializationError, RequestFailed

T = TypeVar("T")
U = TypeVar("U")
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class Success(Generic[T]):
    """A 2xx response decoded into the expected schema."""

    value: T

    def map(self, fn: Callable[[T], U]) -> "Success[U]":
        return Success(fn(self.value))


Classified = Union[Success[T], RequestFailed, DeserializationError]


async def classify_response(response: httpx.Response, schema: type[M]) -> Classified[M]:
    """Classify a response whose body has not been consumed yet.

    Args:
        response: Response received from the transport (streamed or not)
        schema: Pydantic model the success body must decode into

    Returns:
        Success with the decoded model, RequestFailed for a non-2xx status,
        or DeserializationError when a 2xx body does not decode
    """
    if not response.is_success:
        try:
            await response.aread()
            body = response.text
        except httpx.HTTPError:
            body = ""
        return RequestFailed(response.status_code, body)

    try:
        content = await response.aread()
        value = schema.model_validate_json(content)
    except (httpx.HTTPError, ValidationError, ValueError) as e:
        return DeserializationError(e)

    return Success(value)


def unwrap(result: Classified[T]) -> T:
    """Return the decoded value or raise the classified error."""
    if isinstance(result, Success):
        return result.value
    raise result

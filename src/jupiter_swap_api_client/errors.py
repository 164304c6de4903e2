"""Errors surfaced by the Jupiter client.

There are exactly two: the service answered with a failure status, or it
answered with a success status and a body that does not match the schema.
"""


class ClientError(Exception):
    """Base class for Jupiter client errors."""


class RequestFailed(ClientError):
    """Non-2xx response. ``body`` is the raw text and may not be JSON."""

    def __init__(self, status: int, body: str):
        super().__init__(f"Request failed with status {status}: {body}")
        self.status = status
        self.body = body

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RequestFailed):
            return NotImplemented
        return (self.status, self.body) == (other.status, other.body)

    def __hash__(self) -> int:
        return hash((self.status, self.body))


class DeserializationError(ClientError):
    """2xx response whose body could not be decoded into the expected schema."""

    def __init__(self, source: Exception):
        super().__init__(f"Failed to deserialize response: {source}")
        self.source = source
        self.__cause__ = source

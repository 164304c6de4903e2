"""Wire base model and field codecs shared by every Jupiter schema.

The service speaks lower camel case JSON, sends u64 amounts as strings,
and treats a missing key differently from an explicit null. The helpers
here keep those rules in one place so the schema modules only declare
fields.
"""

import base64
import binascii
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any, Union

import base58
from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    PlainSerializer,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    model_serializer,
)
from pydantic.alias_generators import to_camel
from solders.pubkey import Pubkey

U64_MAX = 2**64 - 1


def parse_u64(value: Any) -> int:
    """Parse a wire u64, sent as a decimal string (or, leniently, a JSON integer)."""
    if isinstance(value, bool):
        raise ValueError("expected an unsigned 64-bit integer, got a boolean")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        if not (value.isascii() and value.isdigit()):
            raise ValueError(f"Failed to parse u64 from {value!r}")
        number = int(value)
    else:
        raise ValueError(f"expected an unsigned 64-bit integer string, got {type(value).__name__}")

    if number < 0 or number > U64_MAX:
        raise ValueError(f"{number} is out of range for u64")
    return number


def _check_decimal(value: str) -> str:
    try:
        Decimal(value)
    except InvalidOperation as e:
        raise ValueError(f"Invalid decimal string: {value!r}") from e
    return value


def _check_pubkey(value: str) -> str:
    try:
        raw = base58.b58decode(value)
    except ValueError as e:
        raise ValueError(f"Invalid base58 public key: {value!r}") from e
    if len(raw) != 32:
        raise ValueError(f"Public key must be 32 bytes, got {len(raw)}: {value!r}")
    return value


def _coerce_pubkey(value: Any) -> Any:
    # Accept solders Pubkey objects wherever an address string is expected
    if isinstance(value, Pubkey):
        return str(value)
    return value


def _decode_base64(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 payload: {e}") from e
    raise ValueError(f"expected a base64 string, got {type(value).__name__}")


# u64 carried as a JSON string, e.g. "1000000". Decoding also accepts a plain
# JSON integer.
U64Str = Annotated[
    int,
    BeforeValidator(parse_u64),
    PlainSerializer(lambda v: str(v), return_type=str),
]

# Decimal kept verbatim as its wire string so it re-encodes byte-for-byte
DecimalStr = Annotated[str, AfterValidator(_check_decimal)]

# Base58 Solana address, kept as a string
PubkeyStr = Annotated[str, BeforeValidator(_coerce_pubkey), AfterValidator(_check_pubkey)]

# Binary payload carried as base64 text
Base64Bytes = Annotated[
    bytes,
    BeforeValidator(_decode_base64),
    PlainSerializer(lambda v: base64.b64encode(v).decode("ascii"), return_type=str),
]

TokenId = Union[Pubkey, str]


def to_pubkey(value: TokenId) -> Pubkey:
    """Convert an address string (or Pubkey) to a solders Pubkey."""
    if isinstance(value, Pubkey):
        return value
    return Pubkey.from_string(_check_pubkey(value))


class JupiterModel(BaseModel):
    """Base for every wire model.

    Field names are snake_case in Python and camelCase on the wire. A
    declared field holding ``None`` is left out of the serialized payload
    entirely; keys captured as extras are emitted as received.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    @model_serializer(mode="wrap")
    def _serialize_wire(
        self, handler: SerializerFunctionWrapHandler, info: SerializationInfo
    ) -> dict[str, Any]:
        data = handler(self)
        return omit_absent_fields(self, data, info)

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the JSON-ready dict the service expects."""
        return self.model_dump(mode="json", by_alias=True)


def omit_absent_fields(model: BaseModel, data: dict[str, Any], info: SerializationInfo) -> dict[str, Any]:
    for name, field in type(model).model_fields.items():
        if getattr(model, name) is None:
            key = field.alias if info.by_alias and field.alias else name
            data.pop(key, None)
    return data

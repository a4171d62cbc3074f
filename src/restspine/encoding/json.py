"""JSON encoding and decoding for request and response bodies.

The codec serializes anything pydantic understands (models, dataclasses,
dicts, lists, datetimes, UUIDs...) to compact JSON and validates response
bytes into a requested type. An optional key strategy rewrites object keys
on the way out and in, e.g. to talk to a camelCase API from snake_case
Python models.

Example:
    >>> from restspine.encoding.json import JSONCodec, KeyStrategy
    >>> codec = JSONCodec(encode_keys=KeyStrategy.CAMEL_CASE)
    >>> codec.encode({"user_name": "ada", "is_admin": False})
    b'{"userName":"ada","isAdmin":false}'
    >>> JSONCodec().decode(b'{"a": [1, 2]}', dict[str, list[int]])
    {'a': [1, 2]}
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, TypeVar

import pydantic_core
from pydantic import TypeAdapter
from pydantic.alias_generators import to_camel, to_snake

T = TypeVar("T")


class KeyStrategy(str, Enum):
    """How object keys are rewritten by the codec."""

    IDENTITY = "identity"
    SNAKE_CASE = "snake_case"
    CAMEL_CASE = "camel_case"

    @property
    def converter(self) -> Callable[[str], str] | None:
        if self is KeyStrategy.SNAKE_CASE:
            return to_snake
        if self is KeyStrategy.CAMEL_CASE:
            return to_camel
        return None


def convert_keys(value: Any, converter: Callable[[str], str]) -> Any:
    """Recursively rewrite the keys of every mapping in a JSON-compatible value."""
    if isinstance(value, dict):
        return {
            (converter(key) if isinstance(key, str) else key): convert_keys(item, converter)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [convert_keys(item, converter) for item in value]
    return value


@lru_cache(maxsize=256)
def _adapter(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


def _type_adapter(type_: Any) -> TypeAdapter[Any]:
    try:
        return _adapter(type_)
    except TypeError:
        # unhashable generic aliases
        return TypeAdapter(type_)


@dataclass(frozen=True)
class JSONCodec:
    """Encoder/decoder pair configured once per client.

    Attributes:
        encode_keys: Key strategy applied to outgoing objects
        decode_keys: Key strategy applied to incoming objects before validation
        by_alias: Serialize pydantic models by field alias
        exclude_none: Drop None-valued fields of pydantic models
    """

    encode_keys: KeyStrategy = KeyStrategy.IDENTITY
    decode_keys: KeyStrategy = KeyStrategy.IDENTITY
    by_alias: bool = True
    exclude_none: bool = False

    def encode(self, value: Any) -> bytes:
        """Encode a value to compact JSON bytes.

        Raises:
            pydantic_core.PydanticSerializationError: If the value is not serializable
        """
        converter = self.encode_keys.converter
        if converter is None:
            return pydantic_core.to_json(value, by_alias=self.by_alias, exclude_none=self.exclude_none)
        plain = pydantic_core.to_jsonable_python(
            value, by_alias=self.by_alias, exclude_none=self.exclude_none
        )
        return pydantic_core.to_json(convert_keys(plain, converter))

    def decode(self, data: bytes, type_: type[T]) -> T:
        """Decode JSON bytes and validate them as ``type_``.

        Raises:
            pydantic.ValidationError: If the payload is malformed or does not match
        """
        adapter = _type_adapter(type_)
        converter = self.decode_keys.converter
        if converter is None:
            return adapter.validate_json(data)
        plain = pydantic_core.from_json(data)
        return adapter.validate_python(convert_keys(plain, converter))


__all__ = [
    "JSONCodec",
    "KeyStrategy",
    "convert_keys",
]

"""
Object body encoding and decoding

Write side:
- bytes-like values are stored verbatim
- str is stored as UTF-8
- anything else is serialized to compact JSON via pydantic-core
  (dicts, lists, scalars, pydantic models, dataclasses, datetimes, ...);
  non-finite floats are rejected

Read side:
- decode_body() parses JSON into a requested shape with a pydantic TypeAdapter,
  returning a new value so nothing caller-owned is mutated on failure
"""

import json
from typing import Any, TypeVar, overload

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticUserError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from core.exceptions import DecodingError, EncodingError

T = TypeVar("T")

CONTENT_TYPE_BINARY = "application/octet-stream"
CONTENT_TYPE_TEXT = "text/plain; charset=utf-8"
CONTENT_TYPE_JSON = "application/json"


def encode_body(value: Any) -> tuple[bytes, str]:
    """
    Encode a value for storage

    Args:
        value: bytes, bytearray, memoryview, str, or any JSON-serializable value

    Returns:
        (body, content_type)

    Raises:
        EncodingError: If a structured value cannot be serialized (including
            NaN or Infinity floats)

    Example:
        >>> encode_body({"id": "ABC"})
        (b'{"id":"ABC"}', 'application/json')
    """
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value), CONTENT_TYPE_BINARY

    if isinstance(value, str):
        return value.encode("utf-8"), CONTENT_TYPE_TEXT

    try:
        # NaN and Infinity have no JSON form
        text = json.dumps(
            to_jsonable_python(value), allow_nan=False, ensure_ascii=False, separators=(",", ":")
        )
        return text.encode("utf-8"), CONTENT_TYPE_JSON
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise EncodingError(type(value), str(e)) from e


@overload
def decode_body(data: bytes, shape: None = None) -> Any: ...


@overload
def decode_body(data: bytes, shape: type[T]) -> T: ...


def decode_body(data: bytes, shape: Any = None) -> Any:
    """
    Decode a JSON body

    Args:
        data: Raw object body
        shape: Target type (pydantic model, dataclass, TypedDict, builtin or
            generic alias such as list[int]); None returns plain JSON values

    Returns:
        Newly built value of the requested shape

    Raises:
        DecodingError: If the body is not valid JSON for the shape, or the
            shape is not a type pydantic can validate
    """
    if shape is None:
        try:
            return json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodingError(Any, str(e)) from e

    try:
        return TypeAdapter(shape).validate_json(data)
    except (ValidationError, PydanticUserError) as e:
        raise DecodingError(shape, str(e)) from e

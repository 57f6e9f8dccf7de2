"""
Object storage exceptions

Hierarchy:
- ObjectStoreError: base for everything raised by this package
  - ConfigurationError: missing/invalid configuration (fatal at construction)
  - EncodingError: value could not be serialized before a write
  - DecodingError: stored bytes could not be decoded into the requested shape
  - StorageError: any failure of a storage operation
    - StorageNotFoundError: backend reported the object does not exist
    - StorageTimeoutError: operation deadline expired

StorageError keeps the original exception as ``cause`` (and ``__cause__``),
so callers can inspect backend details without this layer altering them.
"""

from typing import get_origin

NOT_FOUND_CODES = frozenset({"NoSuchKey", "NotFound", "404"})


class ObjectStoreError(Exception):
    """Base exception for object storage"""


class ConfigurationError(ObjectStoreError):
    """Required configuration is missing or invalid"""


class EncodingError(ObjectStoreError, ValueError):
    """Value could not be serialized to JSON"""

    def __init__(self, value_type: type, reason: str) -> None:
        self.value_type = value_type
        self.reason = reason
        super().__init__(f"Cannot encode {value_type.__name__} as JSON: {reason}")


class DecodingError(ObjectStoreError, ValueError):
    """Bytes could not be decoded into the requested shape"""

    def __init__(self, shape: object, reason: str) -> None:
        self.shape = shape
        self.reason = reason
        # Generic aliases (list[int]) report the origin's __name__
        name = repr(shape) if get_origin(shape) else getattr(shape, "__name__", repr(shape))
        super().__init__(f"Cannot decode JSON into {name}: {reason}")


class StorageError(ObjectStoreError):
    """
    Storage operation failed

    Attributes:
        operation: Operation name (Delete, Get, Put, Keys, URL, Find)
        key: Object key (or listing prefix) involved
        cause: Underlying exception, unaltered
        code: Backend error code when the backend provides one
    """

    def __init__(
        self,
        operation: str,
        key: str | None,
        cause: BaseException | None = None,
        code: str | None = None,
    ) -> None:
        self.operation = operation
        self.key = key
        self.cause = cause
        self.code = code
        reason = str(cause) if cause is not None else "unknown error"
        super().__init__(f"{operation} failed for key={key!r}: {reason}")

    @property
    def is_not_found(self) -> bool:
        return self.code in NOT_FOUND_CODES


class StorageNotFoundError(StorageError):
    """Object does not exist"""


class StorageTimeoutError(StorageError):
    """Operation deadline expired before the backend answered"""


__all__ = [
    "ObjectStoreError",
    "ConfigurationError",
    "EncodingError",
    "DecodingError",
    "StorageError",
    "StorageNotFoundError",
    "StorageTimeoutError",
    "NOT_FOUND_CODES",
]

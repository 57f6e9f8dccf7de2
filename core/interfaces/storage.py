from abc import ABC, abstractmethod
from typing import Any, TypeVar

T = TypeVar("T")


class BaseStorageClient(ABC):
    """
    Abstract interface for bucket-bound object storage

    One bucket is bound at construction; every operation targets it.
    All failures surface as core.exceptions.StorageError (or a subclass).

    Implementations:
    - S3StorageClient (AWS, LocalStack, MinIO)
    """

    @abstractmethod
    async def connect(self) -> None:
        """Initialize storage client"""

    @abstractmethod
    async def close(self) -> None:
        """Close client"""

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    @abstractmethod
    async def delete(self, key: str) -> None:
        """
        Delete the object at key

        Deleting a missing key follows backend semantics (S3 succeeds).
        """

    @abstractmethod
    async def get(self, key: str) -> bytes:
        """
        Fetch an object body

        Args:
            key: Object key

        Returns:
            Full object body

        Raises:
            StorageNotFoundError: If the object does not exist
        """

    @abstractmethod
    async def put(self, key: str, value: Any) -> None:
        """
        Write an object, replacing any existing one

        Args:
            key: Object key
            value: bytes (verbatim), str (UTF-8) or any JSON-serializable value
        """

    @abstractmethod
    async def keys(self, prefix: str, start_after: str = "", max_keys: int = 1000) -> list[str]:
        """
        List one page of keys

        Args:
            prefix: Key prefix filter
            start_after: Exclusive start cursor (pass the last key of the previous page)
            max_keys: Maximum number of keys returned

        Returns:
            Keys in ascending lexicographic order; empty list if none match
        """

    @abstractmethod
    async def url(self, key: str, expiry_minutes: int) -> str:
        """
        Presign a GET URL for key

        The object's existence is not checked; expiry is enforced by the backend.
        """

    @abstractmethod
    async def find(self, key: str, shape: type[T] | None = None) -> T | Any:
        """
        Fetch an object and decode its JSON body into shape

        Args:
            key: Object key
            shape: Target type; None returns plain JSON values

        Returns:
            New instance of shape
        """

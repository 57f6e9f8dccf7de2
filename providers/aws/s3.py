"""
AWS S3 implementation of storage client

Works with AWS, LocalStack and other S3-compatible services
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, TypeVar

import aioboto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import ClientError

from config.loader import StorageConfig, load_storage_config
from core.exceptions import (
    NOT_FOUND_CODES,
    StorageError,
    StorageNotFoundError,
    StorageTimeoutError,
)
from core.interfaces.storage import BaseStorageClient
from core.utils.codec import decode_body, encode_body
from core.utils.log import trace

logger = logging.getLogger(__name__)

T = TypeVar("T")


def to_storage_error(operation: str, key: str | None, error: Exception) -> StorageError:
    """Wrap a backend/transport exception without altering it"""
    if isinstance(error, StorageError):
        return error

    if isinstance(error, TimeoutError):
        return StorageTimeoutError(operation, key, error)

    if isinstance(error, ClientError):
        code = str(error.response.get("Error", {}).get("Code", "")) or None
        if code in NOT_FOUND_CODES:
            return StorageNotFoundError(operation, key, error, code=code)
        return StorageError(operation, key, error, code=code)

    return StorageError(operation, key, error)


class S3StorageClient(BaseStorageClient):
    """
    AWS S3 implementation bound to a single bucket

    Features:
    - Six operations: delete, get, put, keys, url, find
    - One TRACE log record per call (success or failure)
    - Optional per-operation deadline (StorageConfig.timeout_seconds)
    - No retries or caching beyond what botocore itself does

    Usage:
        async with S3StorageClient() as storage:
            await storage.put("users/ABC/_.json", {"id": "ABC"})
            user = await storage.find("users/ABC/_.json", User)
    """

    def __init__(self, config: StorageConfig | None = None):
        self.config = config or load_storage_config()
        self.bucket = self.config.bucket
        self.session = aioboto3.Session(
            profile_name=self.config.profile,
            region_name=self.config.region,
        )
        self.client = None

    async def connect(self) -> None:
        """Initialize S3 client (also used for presigning)"""
        try:
            # Create client context manager
            self.client = self.session.client(
                "s3",
                endpoint_url=self.config.endpoint_url,
                aws_access_key_id=self.config.access_key_id,
                aws_secret_access_key=self.config.secret_access_key,
                aws_session_token=self.config.session_token,
                config=BotoConfig(
                    signature_version="s3v4",
                    s3={"addressing_style": self.config.addressing_style},
                ),
            )

            # Enter async context
            self.client = await self.client.__aenter__()

            logger.info(
                f"✓ Connected to S3: {self.config.endpoint_url or 'AWS'} (bucket={self.bucket})"
            )
        except Exception as e:
            self.client = None
            logger.error(f"✗ Failed to connect to S3: {e}")
            raise

    @asynccontextmanager
    async def _operation(self, op: str, key: str | None, fields: dict[str, Any]) -> AsyncIterator[Any]:
        """
        Run one storage call: deadline, error wrapping and the TRACE record

        The body may add result fields to ``fields`` before the record is written.
        """
        if not self.client:
            not_connected = RuntimeError("S3 client not connected")
            trace(logger, op, not_connected, **fields)
            raise not_connected

        error: BaseException | None = None
        try:
            async with asyncio.timeout(self.config.timeout_seconds):
                yield self.client
        except StorageError as e:
            error = e
            raise
        except asyncio.CancelledError as e:
            error = e
            raise
        except Exception as e:
            error = to_storage_error(op, key, e)
            raise error from e
        finally:
            trace(logger, op, error, **fields)

    async def delete(self, key: str) -> None:
        """Delete object from the bound bucket"""
        async with self._operation("Delete", key, {"key": key}) as client:
            await client.delete_object(Bucket=self.bucket, Key=key)

    async def get(self, key: str) -> bytes:
        """
        Download object body

        The response stream is closed on every path, including read failures.
        """
        fields: dict[str, Any] = {"key": key, "body": None}
        async with self._operation("Get", key, fields) as client:
            response = await client.get_object(Bucket=self.bucket, Key=key)
            async with response["Body"] as stream:
                body = await stream.read()
            fields["body"] = body
        return body

    async def put(self, key: str, value: Any) -> None:
        """
        Upload object, replacing any existing one

        Args:
            key: Object key (path)
            value: bytes (verbatim), str (UTF-8) or a value serialized to JSON

        Raises:
            StorageError: cause is EncodingError if value is not serializable
                (raised before any request is sent)
        """
        fields: dict[str, Any] = {"key": key, "body": None}
        async with self._operation("Put", key, fields) as client:
            body, content_type = encode_body(value)
            fields["body"] = body
            await client.put_object(
                Bucket=self.bucket, Key=key, Body=body, ContentType=content_type
            )

    async def keys(self, prefix: str, start_after: str = "", max_keys: int = 1000) -> list[str]:
        """
        List one page of object keys

        Args:
            prefix: Key prefix filter
            start_after: Exclusive cursor; omitted from the request when empty
            max_keys: Page size cap (S3 caps pages at 1000 regardless)

        Returns:
            Keys in ascending lexicographic order (empty list if none match)
        """
        fields: dict[str, Any] = {
            "prefix": prefix,
            "after": start_after,
            "size": max_keys,
            "keys": [],
        }
        async with self._operation("Keys", prefix, fields) as client:
            if max_keys < 0:
                raise ValueError(f"max_keys must be >= 0, got {max_keys}")

            params = {"Bucket": self.bucket, "Prefix": prefix, "MaxKeys": max_keys}
            if start_after:
                params["StartAfter"] = start_after

            response = await client.list_objects_v2(**params)
            keys = [obj["Key"] for obj in response.get("Contents", [])]
            fields["keys"] = keys
        return keys

    async def url(self, key: str, expiry_minutes: int) -> str:
        """
        Presign a GET URL valid for expiry_minutes

        Signing succeeds for missing keys; fetching the URL will fail later.
        """
        fields: dict[str, Any] = {"key": key, "exp": expiry_minutes, "url": ""}
        async with self._operation("URL", key, fields) as client:
            if expiry_minutes <= 0:
                raise ValueError(f"expiry_minutes must be positive, got {expiry_minutes}")

            url = await client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=expiry_minutes * 60,
            )
            fields["url"] = url
        return url

    async def find(self, key: str, shape: type[T] | None = None) -> T | Any:
        """
        Download object and decode its JSON body into shape

        Raises:
            StorageError: cause is DecodingError if the body does not fit shape
        """
        fields: dict[str, Any] = {"key": key, "body": None}
        async with self._operation("Find", key, fields):
            body = await self.get(key)
            value = decode_body(body, shape)
            # Logged only once decoding succeeded
            fields["body"] = value
        return value

    async def close(self) -> None:
        """Close client"""
        if self.client:
            try:
                await self.client.__aexit__(None, None, None)
                logger.info("✓ S3 connection closed")
            except Exception as e:
                logger.error(f"Error closing S3 client: {e}")
            finally:
                self.client = None

"""
Storage configuration loader with Pydantic validation

Resolves the client configuration once, at startup:
settings (environment / .env / storage.yaml) → load options → optional hooks → StorageConfig
"""

import logging
from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from config.settings import Settings, get_settings
from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Mutates the load options before validation (region, endpoint, credentials, ...)
ConfigHook = Callable[[dict[str, Any]], None]


class StorageConfig(BaseModel):
    """Resolved, immutable object storage client configuration"""

    model_config = ConfigDict(frozen=True)

    bucket: str
    region: str | None = None
    endpoint_url: str | None = None
    profile: str | None = None
    access_key_id: str | None = None
    secret_access_key: str | None = None
    session_token: str | None = None
    addressing_style: Literal["auto", "path", "virtual"] = "auto"
    timeout_seconds: float | None = None

    @field_validator("bucket")
    @classmethod
    def bucket_not_empty(cls, v):
        if not v or not v.strip():
            raise ValueError("Bucket name cannot be empty")
        return v

    @field_validator("endpoint_url")
    @classmethod
    def endpoint_url_valid(cls, v):
        if v and not v.startswith(("http://", "https://")):
            raise ValueError("Endpoint URL must start with http:// or https://")
        return v or None

    @field_validator("timeout_seconds")
    @classmethod
    def timeout_positive(cls, v):
        if v is not None and v <= 0:
            raise ValueError("Timeout must be positive")
        return v


def with_region(region: str) -> ConfigHook:
    """Override the SDK region"""

    def hook(options: dict[str, Any]) -> None:
        options["region"] = region

    return hook


def with_endpoint_url(endpoint_url: str) -> ConfigHook:
    """Point the client at an S3-compatible endpoint (LocalStack, MinIO)"""

    def hook(options: dict[str, Any]) -> None:
        options["endpoint_url"] = endpoint_url

    return hook


def with_profile(profile: str) -> ConfigHook:
    """Use a named profile from the shared AWS config files"""

    def hook(options: dict[str, Any]) -> None:
        options["profile"] = profile

    return hook


def with_credentials(
    access_key_id: str, secret_access_key: str, session_token: str | None = None
) -> ConfigHook:
    """Use static credentials instead of the SDK credential chain"""

    def hook(options: dict[str, Any]) -> None:
        options["access_key_id"] = access_key_id
        options["secret_access_key"] = secret_access_key
        options["session_token"] = session_token

    return hook


def with_timeout(seconds: float | None) -> ConfigHook:
    """Set (or with None, remove) the per-operation deadline"""

    def hook(options: dict[str, Any]) -> None:
        options["timeout_seconds"] = seconds

    return hook


def with_addressing_style(style: str) -> ConfigHook:
    """Force path-style or virtual-hosted-style bucket addressing"""

    def hook(options: dict[str, Any]) -> None:
        options["addressing_style"] = style

    return hook


def load_storage_config(*hooks: ConfigHook, settings: Settings | None = None) -> StorageConfig:
    """
    Resolve storage configuration from settings and optional hooks

    Args:
        *hooks: Applied in order to the load options before validation
        settings: Settings to read (defaults to the process singleton)

    Returns:
        StorageConfig: Validated configuration

    Raises:
        ConfigurationError: If S3_BUCKET is missing/empty or an option is invalid

    Example:
        >>> config = load_storage_config(with_endpoint_url("http://localhost:4566"))
        >>> print(config.bucket)
        bytelyon-db
    """
    settings = settings or get_settings()

    if not settings.S3_BUCKET or not settings.S3_BUCKET.strip():
        logger.error("✗ S3_BUCKET environment variable must be set")
        raise ConfigurationError("S3_BUCKET environment variable must be set")

    options: dict[str, Any] = {
        "bucket": settings.S3_BUCKET,
        "region": settings.AWS_REGION,
        "endpoint_url": settings.AWS_ENDPOINT_URL,
        "profile": settings.AWS_PROFILE,
        "access_key_id": settings.AWS_ACCESS_KEY_ID,
        "secret_access_key": settings.AWS_SECRET_ACCESS_KEY,
        "session_token": settings.AWS_SESSION_TOKEN,
        "addressing_style": settings.S3_ADDRESSING_STYLE,
        "timeout_seconds": settings.S3_REQUEST_TIMEOUT_SECONDS,
    }

    for hook in hooks:
        hook(options)

    try:
        config = StorageConfig(**options)
    except ValidationError as e:
        logger.error(f"✗ Invalid storage configuration: {e}")
        raise ConfigurationError(f"Invalid storage configuration: {e}") from e

    logger.info(
        f"✓ Storage config resolved: bucket={config.bucket} "
        f"region={config.region or 'default'} endpoint={config.endpoint_url or 'AWS'}"
    )
    return config


# Convenience exports
__all__ = [
    "ConfigHook",
    "StorageConfig",
    "load_storage_config",
    "with_region",
    "with_endpoint_url",
    "with_profile",
    "with_credentials",
    "with_timeout",
    "with_addressing_style",
]

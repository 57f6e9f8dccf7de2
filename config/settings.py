"""
Application Settings - Load from .env / environment + YAML defaults

Design Philosophy:
- Bucket, region, endpoint and credentials → environment / .env (per deployment)
- Non-secret client tuning (addressing style, timeouts) → config/providers/storage.yaml

Anything left unset (credentials, region, profile) falls through to the
AWS SDK discovery chain.

Uses Pydantic for validation and type safety
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

STORAGE_YAML = Path(__file__).parent / "providers" / "storage.yaml"


@lru_cache(maxsize=None)
def load_storage_yaml(path: Path = STORAGE_YAML) -> dict[str, Any]:
    """
    Load storage.yaml, falling back to an empty dict if missing or invalid

    Example:
        >>> load_storage_yaml()["s3"]["addressing_style"]
        'auto'
    """
    try:
        with open(path) as f:
            return yaml.safe_load(f) or {}
    except (FileNotFoundError, yaml.YAMLError):
        return {}


def _s3_yaml() -> dict[str, Any]:
    return load_storage_yaml().get("s3") or {}


class Settings(BaseSettings):
    """
    Application settings

    Usage:
        from config.settings import get_settings

        settings = get_settings()
        print(settings.S3_BUCKET)  # From environment / .env
        print(settings.S3_ADDRESSING_STYLE)  # From storage.yaml
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields in .env
    )

    # ============================================
    # ENVIRONMENT (.env only)
    # ============================================
    ENVIRONMENT: str = Field(default="local", description="Environment: local, dev, staging, prod")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level (TRACE for per-call records)")

    # ============================================
    # CLOUD PROVIDER (.env only)
    # ============================================
    CLOUD_PROVIDER: str = Field(
        default="aws",
        description="Cloud provider: aws, localstack, opensource, gcp, azure",
    )

    # ============================================
    # OBJECT STORAGE
    # ============================================
    S3_BUCKET: str = Field(default="", description="Target bucket (required)")

    # ============================================
    # AWS (.env only - None defers to the SDK chain)
    # ============================================
    AWS_REGION: str | None = Field(default=None)
    AWS_PROFILE: str | None = Field(default=None)
    AWS_ENDPOINT_URL: str | None = Field(default=None)  # For LocalStack / MinIO
    AWS_ACCESS_KEY_ID: str | None = Field(default=None)
    AWS_SECRET_ACCESS_KEY: str | None = Field(default=None)
    AWS_SESSION_TOKEN: str | None = Field(default=None)

    # ============================================
    # S3 CLIENT TUNING (from YAML)
    # ============================================
    @property
    def S3_ADDRESSING_STYLE(self) -> str:
        """Bucket addressing style (auto, path, virtual) from storage.yaml"""
        return _s3_yaml().get("addressing_style", "auto")

    @property
    def S3_REQUEST_TIMEOUT_SECONDS(self) -> float | None:
        """Per-operation deadline from storage.yaml (None = no deadline)"""
        return _s3_yaml().get("request_timeout_seconds")

    @property
    def S3_PRESIGN_EXPIRY_MINUTES(self) -> int:
        """Default presigned URL lifetime from storage.yaml"""
        return _s3_yaml().get("presign_expiry_minutes", 15)


# Singleton pattern
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """
    Get application settings (singleton)

    Returns:
        Settings instance

    Example:
        >>> settings = get_settings()
        >>> print(settings.S3_BUCKET)
        bytelyon-db
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance

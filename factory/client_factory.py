"""
Client factory - Auto-create clients based on configuration

Dependency injection pattern for cloud-agnostic code
"""

import logging

from config.loader import ConfigHook, load_storage_config
from config.settings import get_settings
from core.interfaces.storage import BaseStorageClient

logger = logging.getLogger(__name__)


def create_storage_client(*hooks: ConfigHook) -> BaseStorageClient:
    """
    Create storage client based on CLOUD_PROVIDER config

    Args:
        *hooks: Configuration hooks (with_region, with_endpoint_url, ...)

    Returns:
        BaseStorageClient: S3-compatible client (not yet connected)

    Raises:
        ConfigurationError: If S3_BUCKET is missing or a hook sets an invalid option
        ValueError: If CLOUD_PROVIDER is not an S3-compatible provider

    Examples:
        >>> # .env: CLOUD_PROVIDER=aws, S3_BUCKET=bytelyon-db
        >>> client = create_storage_client()  # Returns S3StorageClient
        >>>
        >>> # .env: CLOUD_PROVIDER=localstack
        >>> client = create_storage_client(with_endpoint_url("http://localhost:4566"))
    """
    settings = get_settings()
    provider = settings.CLOUD_PROVIDER.lower()

    if provider in ["aws", "localstack", "opensource"]:
        # For opensource: any S3-compatible endpoint (MinIO, LocalStack)
        from providers.aws.s3 import S3StorageClient

        config = load_storage_config(*hooks, settings=settings)
        logger.info(f"✓ Creating S3StorageClient ({provider})")
        return S3StorageClient(config)

    raise ValueError(
        f"Unsupported cloud provider: {provider}. "
        f"Supported: aws, localstack, opensource"
    )

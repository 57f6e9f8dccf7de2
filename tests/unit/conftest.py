"""
Unit test fixtures

S3StorageClient instances here talk to tests.unit.fakes.FakeS3Client
instead of a real bucket.
"""

import pytest

from config.loader import StorageConfig
from providers.aws.s3 import S3StorageClient
from tests.unit.fakes import FakeS3Client


@pytest.fixture
def storage_config():
    """Minimal resolved config (no deadline)"""
    return StorageConfig(bucket="bytelyon-db", region="us-east-1")


@pytest.fixture
def fake_s3(storage_config):
    return FakeS3Client(storage_config.bucket)


@pytest.fixture
def storage(storage_config, fake_s3):
    """S3StorageClient wired to the in-memory fake (already 'connected')"""
    client = S3StorageClient(storage_config)
    client.client = fake_s3
    return client

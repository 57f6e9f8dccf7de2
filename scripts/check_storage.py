#!/usr/bin/env python3
"""
Smoke-check the configured object storage bucket

Writes a scratch object, reads it back through every operation, then deletes it.

Usage:
    S3_BUCKET=my-bucket uv run python scripts/check_storage.py
    S3_BUCKET=my-bucket LOG_LEVEL=TRACE uv run python scripts/check_storage.py
"""

import asyncio
import logging
import sys
import uuid
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config.settings import get_settings
from core.exceptions import ObjectStoreError, StorageNotFoundError
from core.utils.log import configure_logging
from factory.client_factory import create_storage_client

logger = logging.getLogger(__name__)


async def main() -> int:
    """Main entry point"""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    check_id = uuid.uuid4().hex
    prefix = f"healthchecks/{check_id}/"
    key = f"{prefix}_.json"
    payload = {"id": check_id}

    try:
        storage = create_storage_client()
    except ObjectStoreError as e:
        logger.error(f"✗ {e}")
        return 1

    async with storage:
        try:
            await storage.put(key, payload)
            logger.info(f"✓ Put {key}")

            body = await storage.get(key)
            logger.info(f"✓ Get {key} ({len(body)} bytes)")

            found = await storage.find(key)
            if found != payload:
                logger.error(f"✗ Find {key}: expected {payload}, got {found}")
                return 1
            logger.info(f"✓ Find {key}: {found}")

            keys = await storage.keys(prefix, "", 10)
            if keys != [key]:
                logger.error(f"✗ Keys {prefix}: expected [{key}], got {keys}")
                return 1
            logger.info(f"✓ Keys {prefix}: {keys}")

            url = await storage.url(key, settings.S3_PRESIGN_EXPIRY_MINUTES)
            logger.info(f"✓ URL ({settings.S3_PRESIGN_EXPIRY_MINUTES}m): {url}")
        except ObjectStoreError as e:
            logger.error(f"✗ Storage check failed: {e}")
            return 1
        finally:
            await storage.delete(key)
            logger.info(f"✓ Delete {key}")

        try:
            await storage.get(key)
        except StorageNotFoundError:
            logger.info("✓ Deleted object is gone")
        else:
            logger.error(f"✗ {key} still readable after delete")
            return 1

    logger.info(f"✓ Storage check passed for bucket {storage.bucket}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))

"""
Logging helpers

- TRACE level (below DEBUG) for per-call storage records
- trace(): one structured record per storage operation
- configure_logging(): console handler with the service log format
"""

import logging
import sys
from typing import Any

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Longest rendering of a single field in the message text
_MAX_FIELD_CHARS = 256


def _render(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        text = bytes(value).decode("utf-8", errors="backslashreplace")
    else:
        text = str(value)
    if len(text) > _MAX_FIELD_CHARS:
        return f"{text[:_MAX_FIELD_CHARS]}...({len(text)} chars)"
    return text


def trace(logger: logging.Logger, op: str, error: BaseException | None = None, **fields: Any) -> None:
    """
    Emit one TRACE record for a storage operation

    The full field values are attached as ``record.storage`` for structured
    handlers; the message text carries a truncated rendering.

    Args:
        logger: Module logger
        op: Operation name (Delete, Get, Put, Keys, URL, Find)
        error: Exception raised by the operation, if any
        **fields: Operation-specific fields (key, body, keys, url, ...)
    """
    if not logger.isEnabledFor(TRACE):
        return

    parts = [op]
    parts.extend(f"{name}={_render(value)}" for name, value in fields.items())
    if error is not None:
        parts.append(f"error={error!r}")

    logger.log(
        TRACE,
        " ".join(parts),
        extra={"storage": {"op": op, "error": error, **fields}},
    )


def configure_logging(level: str | int = "INFO") -> None:
    """
    Configure root logging to stdout

    Args:
        level: Level name ("TRACE", "DEBUG", "INFO", ...) or number
    """
    if isinstance(level, str):
        name = level.upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    # No-op for handlers if the root logger is already configured
    logging.basicConfig(level=level, handlers=[console])
    logging.getLogger().setLevel(level)

"""Logging helpers for sqlexpand.

The library never configures handlers. Records carry their structured data
in ``extra_fields``; attach ``StructuredFormatter`` to a handler on the
``sqlexpand`` logger to emit them as JSON lines.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import msgspec

if TYPE_CHECKING:
    from logging import LogRecord

__all__ = ("StructuredFormatter", "get_logger", "log_with_context")


class StructuredFormatter(logging.Formatter):
    """Render a record and its ``extra_fields`` as one JSON object."""

    def format(self, record: LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_entry.update(getattr(record, "extra_fields", {}))

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        # bound parameter values msgspec cannot encode are logged by repr
        return msgspec.json.encode(log_entry, enc_hook=repr).decode()


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the ``sqlexpand`` namespace.

    Args:
        name: Logger name. If not provided, returns the root sqlexpand logger.

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger("sqlexpand")
    if not name.startswith("sqlexpand"):
        name = f"sqlexpand.{name}"
    return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: int, message: str, *args: Any, **extra_fields: Any) -> None:
    """Log a message with structured extra fields.

    Args:
        logger: The logger to use
        level: Log level
        message: Log message, %-formatted with ``args``
        *args: Message arguments
        **extra_fields: Fields stored on the record as ``extra_fields``
    """
    if logger.isEnabledFor(level):
        logger.log(level, message, *args, extra={"extra_fields": extra_fields}, stacklevel=2)

r"""Opt-in structured (JSON) logging for aresclient.

aresclient only emits records through the standard ``logging`` module and
never installs handlers. Applications that ship logs to an aggregator can
attach ``StructuredFormatter`` to get one JSON object per record, including
the per-call fields the executor passes through ``extra`` and an optional
correlation ID.

Example:
    ```python
    import logging

    from aresclient.utils.structured_logging import StructuredFormatter, set_correlation_id

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("aresclient")
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

    set_correlation_id("checkout-42")
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from typing import Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "aresclient_correlation_id", default=None
)

# Attributes present on every LogRecord; anything else came from ``extra``.
_RECORD_ATTRIBUTES = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "taskName",
}


def get_correlation_id() -> str | None:
    """Return the correlation ID of the current context, if any."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Attach ``correlation_id`` to every structured record emitted from
    the current context (thread or asyncio task).

    Example:
        ```pycon
        >>> from aresclient.utils.structured_logging import (
        ...     clear_correlation_id,
        ...     get_correlation_id,
        ...     set_correlation_id,
        ... )
        >>> set_correlation_id("req-1")
        >>> get_correlation_id()
        'req-1'
        >>> clear_correlation_id()
        >>> get_correlation_id() is None
        True

        ```
    """
    _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    """Remove the correlation ID from the current context."""
    _correlation_id.set(None)


class StructuredFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Every object carries ``timestamp`` (UTC, millisecond precision),
    ``level``, ``logger``, ``message``, ``module``, ``function`` and
    ``line``, plus ``correlation_id`` when set, ``exception`` when the
    record has exception info, and any field passed through ``extra``.
    Values that are not JSON-serializable are rendered with ``str``.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        correlation_id = get_correlation_id()
        if correlation_id is not None:
            payload["correlation_id"] = correlation_id
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        payload.update(
            {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRIBUTES}
        )
        return json.dumps(payload, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002
        seconds = time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
        return f"{seconds}.{int(record.msecs):03d}Z"


def log_structured(logger: logging.Logger, level: int, message: str, **fields: Any) -> None:
    """Log ``message`` with ``fields`` attached as structured data.

    Args:
        logger: The logger to emit through.
        level: The logging level, e.g. ``logging.INFO``.
        message: The log message.
        **fields: Extra fields, rendered as top-level JSON keys by
            ``StructuredFormatter``.
    """
    logger.log(level, message, extra=fields)

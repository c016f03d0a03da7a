r"""Exceptions raised by aresclient.

Ordinary failures (HTTP errors, network errors, serialization errors) are
reported through ``ApiResponse`` envelopes. The exceptions below cover
the cases that escape a call: cancellation, and serialization errors
raised by the standalone ``serialize``/``deserialize`` helpers.
"""

from __future__ import annotations

__all__ = ["AresClientError", "RequestCancelledError", "SerializationError"]

import asyncio


class AresClientError(Exception):
    """Base class for errors raised by aresclient."""


class SerializationError(AresClientError, ValueError):
    """Raised when a value cannot be encoded to JSON, or a JSON payload
    cannot be decoded into the requested type.

    Args:
        message: Description of the serialization problem.
        target: Optional name of the type involved in the conversion.

    Example:
        ```pycon
        >>> from aresclient.exceptions import SerializationError
        >>> error = SerializationError("Invalid JSON: Expecting value", target="Item")
        >>> str(error)
        'Invalid JSON: Expecting value'
        >>> error.target
        'Item'

        ```
    """

    def __init__(self, message: str, target: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.target = target


class RequestCancelledError(asyncio.CancelledError):
    """Raised when the cancel event of a request is set while the
    request is in flight or waiting before a retry.

    It derives from ``asyncio.CancelledError`` so cancellation through an
    event and cancellation of the surrounding task are handled the same
    way by callers, and so ``except Exception`` blocks never capture it.

    Args:
        method: The HTTP method of the cancelled request.
        url: The URL of the cancelled request.
    """

    def __init__(self, method: str, url: str) -> None:
        super().__init__(f"{method} request to {url} was cancelled")
        self.method = method
        self.url = url

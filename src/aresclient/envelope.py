r"""Uniform result envelope returned by every aresclient request.

Instead of raising on HTTP errors, network errors or malformed payloads,
the client returns an ``ApiResponse`` describing the outcome. Callers
branch on ``success`` and read ``data`` or ``error_message``.
"""

from __future__ import annotations

__all__ = ["ApiResponse"]

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    r"""Outcome of a single client call.

    Args:
        success: ``True`` if the final HTTP response had a 2xx status and
            its body was decoded into the requested type.
        data: The decoded body. Only populated when ``success`` is ``True``.
        error_message: Human-readable summary of the failure. Only
            populated when ``success`` is ``False``.
        error_data: Raw response body or exception detail, when available.
            Only populated when ``success`` is ``False``.
        status_code: Status code of the final HTTP response, or ``None`` if
            no response was received.

    Example:
        ```pycon
        >>> from aresclient.envelope import ApiResponse
        >>> response = ApiResponse.ok({"id": 1}, status_code=200)
        >>> response.success, response.data
        (True, {'id': 1})
        >>> failure = ApiResponse.fail("URL cannot be null.")
        >>> failure.success, failure.data, failure.error_message
        (False, None, 'URL cannot be null.')

        ```
    """

    success: bool
    data: T | None = None
    error_message: str | None = None
    error_data: str | None = None
    status_code: int | None = None

    def __post_init__(self) -> None:
        if self.success and (self.error_message is not None or self.error_data is not None):
            msg = "a successful ApiResponse cannot carry error details"
            raise ValueError(msg)
        if not self.success and self.data is not None:
            msg = "a failed ApiResponse cannot carry data"
            raise ValueError(msg)

    @classmethod
    def ok(cls, data: T | None, status_code: int | None = None) -> ApiResponse[T]:
        """Create a successful envelope.

        Args:
            data: The decoded response body.
            status_code: Status code of the HTTP response.

        Returns:
            An envelope with ``success=True``.
        """
        return cls(success=True, data=data, status_code=status_code)

    @classmethod
    def fail(
        cls,
        message: str,
        error_data: str | None = None,
        status_code: int | None = None,
    ) -> ApiResponse[Any]:
        """Create a failed envelope.

        Args:
            message: Human-readable summary of the failure.
            error_data: Raw response body or exception detail.
            status_code: Status code of the HTTP response, if one was received.

        Returns:
            An envelope with ``success=False`` and no data.
        """
        return cls(
            success=False,
            error_message=message,
            error_data=error_data,
            status_code=status_code,
        )

r"""Retry configuration and its defaults."""

from __future__ import annotations

__all__ = [
    "DEFAULT_MAX_RETRIES",
    "RETRY_STATUS_CODES",
    "RetryConfig",
    "validate_retry_params",
]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from aresclient.backoff.base import BaseBackoffStrategy

# Total attempts = DEFAULT_MAX_RETRIES + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 3

# 429: Too Many Requests, 503: Service Unavailable. Every other status is
# final and returned to the caller without retry.
RETRY_STATUS_CODES = (429, 503)


def validate_retry_params(
    max_retries: int,
    jitter_factor: float = 0.0,
    max_wait_time: float | None = None,
) -> None:
    """Validate retry parameters.

    Args:
        max_retries: Number of retries after the first attempt. Must be >= 0.
        jitter_factor: Random jitter factor. Must be >= 0.
        max_wait_time: Optional cap on a single wait. Must be > 0 if provided.

    Raises:
        ValueError: If a parameter is out of range.

    Example:
        ```pycon
        >>> from aresclient.retry.config import validate_retry_params
        >>> validate_retry_params(max_retries=3)
        >>> validate_retry_params(max_retries=-1)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: max_retries must be >= 0, got -1

        ```
    """
    if max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)
    if jitter_factor < 0:
        msg = f"jitter_factor must be >= 0, got {jitter_factor}"
        raise ValueError(msg)
    if max_wait_time is not None and max_wait_time <= 0:
        msg = f"max_wait_time must be > 0, got {max_wait_time}"
        raise ValueError(msg)


@dataclass(frozen=True)
class RetryConfig:
    r"""Configuration of the retry policy.

    With the defaults a request is attempted up to 4 times, a retry
    happens only on transport errors and on 429/503 responses, and the
    waits before the retries are 2, 4 and 8 seconds.

    Args:
        max_retries: Number of retries after the first attempt.
        status_forcelist: Status codes treated as transient.
        backoff_strategy: Strategy computing the wait before each retry.
            ``None`` means ``ExponentialBackoff()``.
        max_wait_time: Optional cap on a single wait, in seconds.
        jitter_factor: Random extra fraction added to each wait.
        respect_retry_after: Whether the ``Retry-After`` header of a
            throttled response overrides the backoff strategy.
        retry_if: Optional predicate ``(response, exception) -> bool``
            replacing the default classification. Exactly one of its
            arguments is not ``None``.

    Example:
        ```pycon
        >>> from aresclient.retry import RetryConfig
        >>> config = RetryConfig()
        >>> config.max_retries, config.status_forcelist
        (3, (429, 503))
        >>> config.merge(max_retries=0).max_retries
        0

        ```
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    status_forcelist: tuple[int, ...] = RETRY_STATUS_CODES
    backoff_strategy: BaseBackoffStrategy | None = None
    max_wait_time: float | None = None
    jitter_factor: float = 0.0
    respect_retry_after: bool = False
    retry_if: Callable[[httpx.Response | None, Exception | None], bool] | None = None

    def __post_init__(self) -> None:
        validate_retry_params(
            max_retries=self.max_retries,
            jitter_factor=self.jitter_factor,
            max_wait_time=self.max_wait_time,
        )

    def merge(self, **overrides: Any) -> RetryConfig:
        """Return a copy with the non-``None`` ``overrides`` applied."""
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})

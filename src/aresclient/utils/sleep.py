r"""Computation of the wait inserted before a retry."""

from __future__ import annotations

__all__ = ["calculate_sleep_time"]

import logging
import random
from typing import TYPE_CHECKING

from aresclient.backoff.exponential import ExponentialBackoff
from aresclient.utils.retry_after import parse_retry_after

if TYPE_CHECKING:
    import httpx

    from aresclient.backoff.base import BaseBackoffStrategy

logger: logging.Logger = logging.getLogger(__name__)


def calculate_sleep_time(
    attempt: int,
    *,
    backoff_strategy: BaseBackoffStrategy | None = None,
    response: httpx.Response | None = None,
    respect_retry_after: bool = False,
    max_wait_time: float | None = None,
    jitter_factor: float = 0.0,
) -> float:
    """Calculate the wait before the retry with index ``attempt``.

    The base delay comes from the ``Retry-After`` header of ``response``
    when ``respect_retry_after`` is enabled and the header is valid, and
    from ``backoff_strategy`` otherwise. The result is then capped at
    ``max_wait_time`` and finally increased by a random jitter of up to
    ``jitter_factor`` times the delay.

    Args:
        attempt: 0-based retry index.
        backoff_strategy: Strategy computing the base delay. Defaults to
            ``ExponentialBackoff()`` (2, 4, 8 seconds).
        response: The retryable response that triggered the retry, if any.
        respect_retry_after: Whether to honour the ``Retry-After`` header.
        max_wait_time: Optional cap on the delay, in seconds.
        jitter_factor: Maximum extra random fraction of the delay.

    Returns:
        The delay in seconds.

    Example:
        ```pycon
        >>> from aresclient.utils.sleep import calculate_sleep_time
        >>> calculate_sleep_time(0), calculate_sleep_time(1), calculate_sleep_time(2)
        (2.0, 4.0, 8.0)
        >>> calculate_sleep_time(2, max_wait_time=5.0)
        5.0

        ```
    """
    delay: float | None = None
    if respect_retry_after and response is not None:
        delay = parse_retry_after(response.headers.get("Retry-After"))
        if delay is not None:
            logger.debug(f"Using Retry-After header value: {delay:.2f}s")
    if delay is None:
        strategy = backoff_strategy if backoff_strategy is not None else ExponentialBackoff()
        delay = strategy.calculate(attempt)

    if max_wait_time is not None and delay > max_wait_time:
        logger.debug(f"Capping wait from {delay:.2f}s to {max_wait_time:.2f}s")
        delay = max_wait_time

    if jitter_factor > 0:
        delay += random.uniform(0, jitter_factor) * delay  # noqa: S311
    return delay

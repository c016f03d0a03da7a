r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["DEFAULT_BASE_DELAY", "ExponentialBackoff"]

from aresclient.backoff.base import BaseBackoffStrategy

# With the default base the waits before the 1st, 2nd and 3rd retries are
# 2, 4 and 8 seconds, i.e. 2 ** n for the n-th retry.
DEFAULT_BASE_DELAY = 2.0


class ExponentialBackoff(BaseBackoffStrategy):
    """Doubles the wait after each retry.

    The delay for retry index ``attempt`` is
    ``base_delay * 2 ** attempt``, optionally capped by ``max_delay``.

    Args:
        base_delay: Delay before the first retry, in seconds.
        max_delay: Optional upper bound for any single delay, in seconds.

    Example:
        ```pycon
        >>> from aresclient.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff()
        >>> [backoff.calculate(i) for i in range(3)]
        [2.0, 4.0, 8.0]
        >>> ExponentialBackoff(base_delay=1.0, max_delay=5.0).calculate(10)
        5.0

        ```
    """

    def __init__(self, base_delay: float = DEFAULT_BASE_DELAY, max_delay: float | None = None) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ValueError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)
        self.base_delay = base_delay
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_delay={self.base_delay}, max_delay={self.max_delay})"

    def calculate(self, attempt: int) -> float:
        delay = self.base_delay * (2**attempt)
        if self.max_delay is not None:
            return min(delay, self.max_delay)
        return delay

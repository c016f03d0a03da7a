r"""Fixed-delay backoff strategy."""

from __future__ import annotations

__all__ = ["ConstantBackoff"]

from aresclient.backoff.base import BaseBackoffStrategy


class ConstantBackoff(BaseBackoffStrategy):
    """Waits the same amount of time before every retry.

    ``ConstantBackoff(0.0)`` retries immediately, which is handy in tests
    and for endpoints that recover instantly.

    Args:
        delay: The delay in seconds used for every retry.

    Example:
        ```pycon
        >>> from aresclient.backoff import ConstantBackoff
        >>> ConstantBackoff(delay=0.5).calculate(7)
        0.5

        ```
    """

    def __init__(self, delay: float = 1.0) -> None:
        if delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise ValueError(msg)
        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(delay={self.delay})"

    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        return self.delay

r"""Base class for the delays inserted between retry attempts."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Computes how long to wait before a retry.

    Subclasses receive the 0-based index of the retry about to happen:
    ``0`` precedes the second attempt, ``1`` the third, and so on.
    """

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Return the wait in seconds before the given retry.

        Args:
            attempt: 0-based retry index.

        Returns:
            The delay in seconds, never negative.
        """

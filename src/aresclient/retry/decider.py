r"""Classification of attempt outcomes into retryable and final."""

from __future__ import annotations

__all__ = ["RetryDecider"]

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

logger: logging.Logger = logging.getLogger(__name__)


class RetryDecider:
    """Decides whether the outcome of an attempt is transient.

    A response is transient when its status code is in
    ``status_forcelist``. A transport exception (``httpx.RequestError``)
    is always transient. When ``retry_if`` is given it replaces both rules.

    Args:
        status_forcelist: Status codes treated as transient.
        retry_if: Optional custom predicate ``(response, exception) -> bool``.

    Example:
        ```pycon
        >>> import httpx
        >>> from aresclient.retry import RetryDecider
        >>> decider = RetryDecider(status_forcelist=(429, 503))
        >>> decider.is_retryable_response(httpx.Response(503))
        True
        >>> decider.is_retryable_response(httpx.Response(500))
        False

        ```
    """

    def __init__(
        self,
        status_forcelist: tuple[int, ...],
        retry_if: Callable[[httpx.Response | None, Exception | None], bool] | None = None,
    ) -> None:
        self.status_forcelist = status_forcelist
        self.retry_if = retry_if

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(status_forcelist={self.status_forcelist}, retry_if={self.retry_if})"

    def is_retryable_response(self, response: httpx.Response) -> bool:
        if self.retry_if is not None:
            return bool(self.retry_if(response, None))
        return response.status_code in self.status_forcelist

    def is_retryable_exception(self, exception: Exception) -> bool:
        if self.retry_if is not None:
            return bool(self.retry_if(None, exception))
        return True

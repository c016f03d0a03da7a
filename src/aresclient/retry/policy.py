r"""Asynchronous retry policy wrapping a single-attempt send.

The policy knows nothing about how a request is built. It receives a
zero-argument coroutine factory performing exactly one network attempt
and calls it until the outcome is final or the retry budget is spent.
"""

from __future__ import annotations

__all__ = ["AsyncRetryPolicy"]

import logging
from typing import TYPE_CHECKING

import httpx

from aresclient.retry.config import RetryConfig
from aresclient.retry.decider import RetryDecider
from aresclient.utils.cancellation import run_cancellable, sleep_cancellable
from aresclient.utils.sleep import calculate_sleep_time

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Awaitable, Callable

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryPolicy:
    r"""Retries transient failures of an asynchronous send.

    An attempt is retried when it raises ``httpx.RequestError`` (connection
    refused, DNS failure, timeout, ...) or returns a response whose status
    is in ``config.status_forcelist``. Any other response is returned
    immediately, and any other exception propagates immediately. Once
    ``config.max_retries`` retries have been made, the last response is
    returned even if it is still transient, and the last transport error
    is re-raised.

    Args:
        config: The retry configuration. Defaults to ``RetryConfig()``.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from aresclient.retry import AsyncRetryPolicy, RetryConfig
        >>> async def main():
        ...     policy = AsyncRetryPolicy(RetryConfig(max_retries=2))
        ...     async with httpx.AsyncClient() as client:
        ...         request = client.build_request("GET", "https://api.example.com/data")
        ...         return await policy.execute(
        ...             lambda: client.send(request), url=str(request.url), method="GET"
        ...         )
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(self, config: RetryConfig | None = None) -> None:
        self.config = config if config is not None else RetryConfig()
        self.decider = RetryDecider(
            status_forcelist=self.config.status_forcelist,
            retry_if=self.config.retry_if,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(config={self.config!r})"

    async def execute(
        self,
        send_once: Callable[[], Awaitable[httpx.Response]],
        *,
        url: str,
        method: str,
        cancel_event: asyncio.Event | None = None,
    ) -> httpx.Response:
        """Run ``send_once`` with automatic retries.

        Args:
            send_once: Zero-argument callable performing one attempt.
            url: The request URL, used for logging.
            method: The HTTP method, used for logging.
            cancel_event: Optional event aborting the in-flight attempt or
                the pending backoff wait when set.

        Returns:
            The final response, whatever its status code.

        Raises:
            httpx.RequestError: If the last attempt failed at the transport
                level, or a transport error was classified as final.
            RequestCancelledError: If ``cancel_event`` was set.
        """
        max_retries = self.config.max_retries
        attempt = 0
        while True:
            response: httpx.Response | None = None
            try:
                response = await run_cancellable(send_once, cancel_event, method=method, url=url)
            except httpx.RequestError as exc:
                if attempt >= max_retries or not self.decider.is_retryable_exception(exc):
                    logger.debug(
                        f"{method} request to {url} failed after {attempt + 1} attempts: "
                        f"{type(exc).__name__}: {exc}"
                    )
                    raise
                logger.debug(
                    f"{method} request to {url} raised {type(exc).__name__} "
                    f"(attempt {attempt + 1}/{max_retries + 1})"
                )
            else:
                if attempt >= max_retries or not self.decider.is_retryable_response(response):
                    if attempt > 0:
                        logger.debug(
                            f"{method} request to {url} finished with status "
                            f"{response.status_code} on attempt {attempt + 1}"
                        )
                    return response
                logger.debug(
                    f"{method} request to {url} returned retryable status {response.status_code} "
                    f"(attempt {attempt + 1}/{max_retries + 1})"
                )

            sleep_time = calculate_sleep_time(
                attempt,
                backoff_strategy=self.config.backoff_strategy,
                response=response,
                respect_retry_after=self.config.respect_retry_after,
                max_wait_time=self.config.max_wait_time,
                jitter_factor=self.config.jitter_factor,
            )
            if response is not None:
                await response.aclose()
            logger.debug(f"Waiting {sleep_time:.2f}s before retrying {method} request to {url}")
            await sleep_cancellable(sleep_time, cancel_event, method=method, url=url)
            attempt += 1

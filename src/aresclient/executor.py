r"""Request execution pipeline.

``RequestExecutor`` turns one call into an ``ApiResponse``: it builds the
request, hands the network send to the retry policy, classifies the final
outcome and decodes the body. HTTP errors, transport errors and
serialization errors all end up in the envelope. Cancellation does not:
``asyncio.CancelledError`` (and its subclass ``RequestCancelledError``)
always propagates to the caller.
"""

from __future__ import annotations

__all__ = ["NULL_URL_MESSAGE", "RequestExecutor"]

import logging
import time
from typing import TYPE_CHECKING, Any, TypeVar

import httpx

from aresclient.core.request_builder import build_request
from aresclient.envelope import ApiResponse
from aresclient.exceptions import SerializationError
from aresclient.retry.policy import AsyncRetryPolicy
from aresclient.serialization.serializer import deserialize
from aresclient.utils.structured_logging import log_structured

if TYPE_CHECKING:
    import asyncio

    from aresclient.core.config import ClientConfig
    from aresclient.serialization.options import SerializationOptions

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")

NULL_URL_MESSAGE = "URL cannot be null."


def _describe_exception(exc: Exception) -> str:
    return f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__


class RequestExecutor:
    r"""Executes calls against a shared transport and returns envelopes.

    The executor holds only immutable configuration and the shared
    transport, so one instance can serve any number of concurrent calls.

    Args:
        transport: The ``httpx.AsyncClient`` used to send requests. The
            executor never closes it.
        config: The client configuration.
        retry_policy: Optional retry policy. Defaults to a policy built
            from ``config.retry``.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from aresclient.core import ClientConfig
        >>> from aresclient.executor import RequestExecutor
        >>> async def main():
        ...     async with httpx.AsyncClient() as transport:
        ...         executor = RequestExecutor(transport, ClientConfig())
        ...         return await executor.execute("GET", "https://api.example.com/items/1")
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        transport: httpx.AsyncClient,
        config: ClientConfig,
        retry_policy: AsyncRetryPolicy | None = None,
    ) -> None:
        self.transport = transport
        self.config = config
        self.retry_policy = retry_policy if retry_policy is not None else AsyncRetryPolicy(config.retry)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(config={self.config!r}, retry_policy={self.retry_policy!r})"

    async def execute(
        self,
        method: str,
        url: str | httpx.URL | None,
        *,
        body: Any = None,
        response_type: type[T] | Any = Any,
        bearer_token: str | None = None,
        serialization: SerializationOptions | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> ApiResponse[T]:
        """Execute one call and return its envelope.

        Args:
            method: The HTTP method.
            url: Absolute URL, or URL relative to ``config.base_url``.
            body: Optional request body, sent as JSON for POST, PUT and PATCH.
            response_type: Type the response body is decoded into.
            bearer_token: Optional bearer token for the ``Authorization``
                header.
            serialization: Options overriding ``config.serialization`` for
                this call.
            cancel_event: Optional event aborting the call when set.

        Returns:
            The envelope describing the outcome.

        Raises:
            asyncio.CancelledError: If the task running the call is
                cancelled, or ``cancel_event`` is set
                (``RequestCancelledError``).
        """
        method = method.upper()
        if url is None:
            logger.debug(f"Rejecting {method} request without URL")
            return ApiResponse.fail(NULL_URL_MESSAGE)

        options = serialization if serialization is not None else self.config.serialization
        try:
            request = build_request(
                self.transport,
                method,
                url,
                body=body,
                bearer_token=bearer_token,
                serialization=options,
                headers=self.config.headers,
            )
        except httpx.InvalidURL as exc:
            return ApiResponse.fail(f"Invalid URL: {exc}")
        except SerializationError as exc:
            return ApiResponse.fail(f"JSON serialization failed: {exc}")

        target = str(request.url)
        start_time = time.monotonic()
        response: httpx.Response | None = None
        try:
            response = await self.retry_policy.execute(
                lambda: self.transport.send(request),
                url=target,
                method=method,
                cancel_event=cancel_event,
            )
            result = self._classify(response, response_type, options)
        except httpx.TimeoutException as exc:
            result = ApiResponse.fail(
                f"Request timed out: {str(exc) or type(exc).__name__}", error_data=_describe_exception(exc)
            )
        except httpx.RequestError as exc:
            result = ApiResponse.fail(
                f"Request failed: {str(exc) or type(exc).__name__}", error_data=_describe_exception(exc)
            )
        except Exception as exc:
            logger.exception(f"Unexpected error during {method} request to {target}")
            result = ApiResponse.fail(f"Unexpected error: {exc}", error_data=_describe_exception(exc))
        finally:
            if response is not None:
                await response.aclose()

        log_structured(
            logger,
            logging.DEBUG,
            f"{method} request to {target} completed (success={result.success})",
            method=method,
            url=target,
            status_code=result.status_code,
            success=result.success,
            elapsed=round(time.monotonic() - start_time, 3),
        )
        return result

    def _classify(
        self,
        response: httpx.Response,
        response_type: Any,
        options: SerializationOptions,
    ) -> ApiResponse[Any]:
        status_code = response.status_code
        body = response.text
        if response.is_success:
            try:
                data = deserialize(response.content, response_type, options)
            except SerializationError as exc:
                return ApiResponse.fail(
                    f"JSON deserialization failed: {exc}",
                    error_data=body or None,
                    status_code=status_code,
                )
            return ApiResponse.ok(data, status_code=status_code)

        reason = f" ({response.reason_phrase})" if response.reason_phrase else ""
        return ApiResponse.fail(
            f"HTTP Error {status_code}{reason}: {body}",
            error_data=body or None,
            status_code=status_code,
        )

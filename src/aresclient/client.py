r"""Asynchronous client facade returning ``ApiResponse`` envelopes.

``AsyncApiClient`` binds an HTTP verb to each method and delegates to a
``RequestExecutor``. Configuration is explicit: build one
``ClientConfig``, create one client, and reuse it for many calls.
"""

from __future__ import annotations

__all__ = ["AsyncApiClient"]

from typing import TYPE_CHECKING, Any, TypeVar

from aresclient.core.config import ClientConfig
from aresclient.executor import RequestExecutor
from aresclient.retry.policy import AsyncRetryPolicy

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Sequence
    from types import TracebackType
    from typing import Self

    import httpx

    from aresclient.envelope import ApiResponse
    from aresclient.serialization.options import SerializationOptions

T = TypeVar("T")


class AsyncApiClient:
    r"""Asynchronous JSON API client with automatic retries.

    Every method returns an ``ApiResponse`` instead of raising on HTTP,
    network or serialization errors. Only cancellation propagates.

    When no ``client`` is given, the ``httpx.AsyncClient`` is created from
    ``config`` on entering the ``async with`` block and closed on exit, and
    calls outside the block raise ``RuntimeError``. An injected ``client``
    is used as-is, works without ``async with`` and is never closed.

    Args:
        config: The client configuration. Defaults to ``ClientConfig()``.
        client: Optional ``httpx.AsyncClient`` to send requests through.
        retry_policy: Optional retry policy replacing the one built from
            ``config.retry``.

    Example:
        ```pycon
        >>> import asyncio
        >>> from dataclasses import dataclass
        >>> from aresclient import AsyncApiClient, ClientConfig
        >>> @dataclass
        ... class Post:
        ...     id: int
        ...     title: str
        ...
        >>> async def main():
        ...     config = ClientConfig(base_url="https://jsonplaceholder.typicode.com")
        ...     async with AsyncApiClient(config=config) as client:
        ...         response = await client.get("posts/1", Post)
        ...     return response.data if response.success else response.error_message
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        *,
        config: ClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
        retry_policy: AsyncRetryPolicy | None = None,
    ) -> None:
        self._config = config if config is not None else ClientConfig()
        self._retry_policy = retry_policy if retry_policy is not None else AsyncRetryPolicy(self._config.retry)
        self._owns_client = client is None
        self._client = client
        self._executor: RequestExecutor | None = None
        if client is not None:
            self._executor = RequestExecutor(client, self._config, self._retry_policy)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(config={self._config!r})"

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> Self:
        if self._owns_client and self._client is None:
            self._client = self._config.create_transport()
            self._executor = RequestExecutor(self._client, self._config, self._retry_policy)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying transport if this client created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._executor = None

    def _ensure_executor(self) -> RequestExecutor:
        if self._executor is None:
            msg = "AsyncApiClient must be used within an async context manager (async with statement)"
            raise RuntimeError(msg)
        return self._executor

    async def request(
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
        r"""Send a request with any HTTP method.

        Args:
            method: The HTTP method.
            url: Absolute URL, or URL relative to ``config.base_url``.
            body: Optional request body, sent as JSON for POST, PUT and PATCH.
            response_type: Type the response body is decoded into.
            bearer_token: Optional bearer token.
            serialization: Per-call serialization options.
            cancel_event: Optional event aborting the call when set.

        Returns:
            The envelope describing the outcome.

        Raises:
            RuntimeError: If an owning client is used outside ``async with``.
            asyncio.CancelledError: If the call is cancelled.
        """
        return await self._ensure_executor().execute(
            method,
            url,
            body=body,
            response_type=response_type,
            bearer_token=bearer_token,
            serialization=serialization,
            cancel_event=cancel_event,
        )

    async def get(
        self,
        url: str | httpx.URL | None,
        response_type: type[T] | Any = Any,
        *,
        bearer_token: str | None = None,
        serialization: SerializationOptions | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> ApiResponse[T]:
        r"""Send a GET request and decode the body into ``response_type``."""
        return await self.request(
            "GET",
            url,
            response_type=response_type,
            bearer_token=bearer_token,
            serialization=serialization,
            cancel_event=cancel_event,
        )

    async def post(
        self,
        url: str | httpx.URL | None,
        body: Any = None,
        response_type: type[T] | Any = Any,
        *,
        bearer_token: str | None = None,
        serialization: SerializationOptions | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> ApiResponse[T]:
        r"""Send ``body`` as JSON with a POST request.

        Example:
            ```pycon
            >>> import asyncio
            >>> from aresclient import AsyncApiClient
            >>> async def main():
            ...     async with AsyncApiClient() as client:
            ...         return await client.post("https://httpbin.org/post", {"item_name": "Lamp"})
            ...
            >>> asyncio.run(main()).success  # doctest: +SKIP
            True

            ```
        """
        return await self.request(
            "POST",
            url,
            body=body,
            response_type=response_type,
            bearer_token=bearer_token,
            serialization=serialization,
            cancel_event=cancel_event,
        )

    async def put(
        self,
        url: str | httpx.URL | None,
        body: Any = None,
        response_type: type[T] | Any = Any,
        *,
        bearer_token: str | None = None,
        serialization: SerializationOptions | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> ApiResponse[T]:
        r"""Send ``body`` as JSON with a PUT request."""
        return await self.request(
            "PUT",
            url,
            body=body,
            response_type=response_type,
            bearer_token=bearer_token,
            serialization=serialization,
            cancel_event=cancel_event,
        )

    async def delete(
        self,
        url: str | httpx.URL | None,
        response_type: type[T] | Any = Any,
        *,
        bearer_token: str | None = None,
        serialization: SerializationOptions | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> ApiResponse[T]:
        r"""Send a DELETE request. A ``204 No Content`` response decodes to
        the default value of ``response_type``."""
        return await self.request(
            "DELETE",
            url,
            response_type=response_type,
            bearer_token=bearer_token,
            serialization=serialization,
            cancel_event=cancel_event,
        )

    async def patch(
        self,
        url: str | httpx.URL | None,
        body: Any = None,
        response_type: type[T] | Any = Any,
        *,
        bearer_token: str | None = None,
        serialization: SerializationOptions | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> ApiResponse[T]:
        r"""Send ``body`` as JSON with a PATCH request."""
        return await self.request(
            "PATCH",
            url,
            body=body,
            response_type=response_type,
            bearer_token=bearer_token,
            serialization=serialization,
            cancel_event=cancel_event,
        )

    async def post_expecting_array(
        self,
        url: str | httpx.URL | None,
        body: Sequence[Any] | None = None,
        item_type: type[T] | Any = Any,
        *,
        bearer_token: str | None = None,
        serialization: SerializationOptions | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> ApiResponse[list[T]]:
        r"""Send a POST request whose response is a JSON array of
        ``item_type``.

        Equivalent to ``post(url, body, list[item_type])``.
        """
        return await self.post(
            url,
            body,
            list[item_type],
            bearer_token=bearer_token,
            serialization=serialization,
            cancel_event=cancel_event,
        )

r"""Module-level functions for one-off calls.

Each function runs a single call through an ``AsyncApiClient``. When no
``client`` is given, a temporary ``httpx.AsyncClient`` is created from
``config`` and closed after the call. For many calls, create one
``AsyncApiClient`` and reuse it instead.
"""

from __future__ import annotations

__all__ = ["delete", "get", "patch", "post", "post_expecting_array", "put", "request"]

from typing import TYPE_CHECKING, Any, TypeVar

from aresclient.client import AsyncApiClient

if TYPE_CHECKING:
    import asyncio
    from collections.abc import Sequence

    import httpx

    from aresclient.core.config import ClientConfig
    from aresclient.envelope import ApiResponse
    from aresclient.serialization.options import SerializationOptions

T = TypeVar("T")


async def request(
    method: str,
    url: str | httpx.URL | None,
    *,
    body: Any = None,
    response_type: type[T] | Any = Any,
    bearer_token: str | None = None,
    serialization: SerializationOptions | None = None,
    cancel_event: asyncio.Event | None = None,
    config: ClientConfig | None = None,
    client: httpx.AsyncClient | None = None,
) -> ApiResponse[T]:
    r"""Send one request and return its envelope.

    Args:
        method: The HTTP method.
        url: Absolute URL, or URL relative to ``config.base_url``.
        body: Optional request body, sent as JSON for POST, PUT and PATCH.
        response_type: Type the response body is decoded into.
        bearer_token: Optional bearer token.
        serialization: Per-call serialization options.
        cancel_event: Optional event aborting the call when set.
        config: Optional client configuration.
        client: Optional ``httpx.AsyncClient``. If ``None``, a temporary one
            is created and closed after the call.

    Returns:
        The envelope describing the outcome.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresclient import api
        >>> response = asyncio.run(api.get("https://httpbin.org/get"))  # doctest: +SKIP
        >>> response.success  # doctest: +SKIP
        True

        ```
    """
    async with AsyncApiClient(config=config, client=client) as api_client:
        return await api_client.request(
            method,
            url,
            body=body,
            response_type=response_type,
            bearer_token=bearer_token,
            serialization=serialization,
            cancel_event=cancel_event,
        )


async def get(url: str | httpx.URL | None, response_type: type[T] | Any = Any, **kwargs: Any) -> ApiResponse[T]:
    r"""Send a GET request. See ``request`` for the keyword arguments."""
    return await request("GET", url, response_type=response_type, **kwargs)


async def post(
    url: str | httpx.URL | None, body: Any = None, response_type: type[T] | Any = Any, **kwargs: Any
) -> ApiResponse[T]:
    r"""Send a POST request. See ``request`` for the keyword arguments."""
    return await request("POST", url, body=body, response_type=response_type, **kwargs)


async def put(
    url: str | httpx.URL | None, body: Any = None, response_type: type[T] | Any = Any, **kwargs: Any
) -> ApiResponse[T]:
    r"""Send a PUT request. See ``request`` for the keyword arguments."""
    return await request("PUT", url, body=body, response_type=response_type, **kwargs)


async def delete(url: str | httpx.URL | None, response_type: type[T] | Any = Any, **kwargs: Any) -> ApiResponse[T]:
    r"""Send a DELETE request. See ``request`` for the keyword arguments."""
    return await request("DELETE", url, response_type=response_type, **kwargs)


async def patch(
    url: str | httpx.URL | None, body: Any = None, response_type: type[T] | Any = Any, **kwargs: Any
) -> ApiResponse[T]:
    r"""Send a PATCH request. See ``request`` for the keyword arguments."""
    return await request("PATCH", url, body=body, response_type=response_type, **kwargs)


async def post_expecting_array(
    url: str | httpx.URL | None,
    body: Sequence[Any] | None = None,
    item_type: type[T] | Any = Any,
    **kwargs: Any,
) -> ApiResponse[list[T]]:
    r"""Send a POST request whose response is a JSON array of ``item_type``."""
    return await request("POST", url, body=body, response_type=list[item_type], **kwargs)

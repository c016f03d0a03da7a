r"""Construction of the outgoing ``httpx.Request`` for one call."""

from __future__ import annotations

__all__ = ["BODY_METHODS", "build_request"]

import logging
from typing import TYPE_CHECKING, Any

import httpx

from aresclient.serialization.serializer import serialize

if TYPE_CHECKING:
    from collections.abc import Mapping

    from aresclient.serialization.options import SerializationOptions

logger: logging.Logger = logging.getLogger(__name__)

# Only these methods carry a JSON body. A body given to GET or DELETE is
# dropped.
BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


def build_request(
    client: httpx.AsyncClient,
    method: str,
    url: str | httpx.URL,
    *,
    body: Any = None,
    bearer_token: str | None = None,
    serialization: SerializationOptions | None = None,
    headers: Mapping[str, str] | None = None,
) -> httpx.Request:
    r"""Build the request sent (possibly several times) for one call.

    Args:
        client: The transport, used to resolve ``url`` against its base URL.
        method: The HTTP method.
        url: Absolute URL, or URL relative to the client's base URL.
        body: Optional value serialized as the JSON body of POST, PUT and
            PATCH requests.
        bearer_token: Optional token sent as ``Authorization: Bearer <token>``.
        serialization: Options used to encode ``body``.
        headers: Extra headers, e.g. the client-level defaults.

    Returns:
        The request. Its content is fully materialized so it can be re-sent.

    Raises:
        httpx.InvalidURL: If ``url`` is malformed or does not resolve to an
            absolute http(s) URL.
        SerializationError: If ``body`` cannot be encoded.

    Example:
        ```pycon
        >>> import httpx
        >>> from aresclient.core.request_builder import build_request
        >>> request = build_request(
        ...     httpx.AsyncClient(), "POST", "https://api.example.com/items",
        ...     body={"item_name": "Lamp"}, bearer_token="secret",
        ... )
        >>> request.headers["Authorization"], request.content
        ('Bearer secret', b'{"item_name":"Lamp"}')

        ```
    """
    method = method.upper()
    request_headers = {"Accept": "application/json", **(headers or {})}
    if bearer_token:
        request_headers["Authorization"] = f"Bearer {bearer_token}"

    content: bytes | None = None
    if body is not None:
        if method in BODY_METHODS:
            content = serialize(body, serialization)
            request_headers["Content-Type"] = "application/json"
        else:
            logger.debug(f"Ignoring request body for {method} request to {url}")

    request = client.build_request(method, url, headers=request_headers, content=content)
    if request.url.scheme not in ("http", "https") or not request.url.host:
        msg = f"{str(request.url)!r} is not an absolute http(s) URL"
        raise httpx.InvalidURL(msg)
    return request

r"""aresclient - resilient JSON HTTP client returning result envelopes.

aresclient issues GET/POST/PUT/DELETE/PATCH requests with httpx, retries
transient failures (transport errors, 429 and 503 responses) with
exponential backoff, encodes and decodes JSON payloads into typed values,
and reports every outcome through a uniform ``ApiResponse`` envelope
instead of raising.

Key Features:
    - Uniform ``ApiResponse`` with ``success``, ``data``, ``error_message``
      and ``error_data``
    - Bounded retries with exponential backoff (2, 4, 8 seconds by default)
    - Typed decoding into dataclasses, pydantic models and builtin types
    - Configurable key naming, date format and unknown-field handling
    - Bearer token authentication
    - Cancellation through task cancellation or an ``asyncio.Event``

Example:
    ```pycon
    >>> import asyncio
    >>> from aresclient import AsyncApiClient, ClientConfig
    >>> async def main():
    ...     async with AsyncApiClient(config=ClientConfig(base_url="https://httpbin.org")) as client:
    ...         return await client.get("get", bearer_token="secret")
    ...
    >>> response = asyncio.run(main())  # doctest: +SKIP
    >>> response.success  # doctest: +SKIP
    True

    ```
"""

from __future__ import annotations

__all__ = [
    "ApiResponse",
    "AresClientError",
    "AsyncApiClient",
    "AsyncRetryPolicy",
    "ClientConfig",
    "NamingConvention",
    "RequestCancelledError",
    "RequestExecutor",
    "RetryConfig",
    "SerializationError",
    "SerializationOptions",
    "UnknownFields",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from aresclient.client import AsyncApiClient
from aresclient.core.config import ClientConfig
from aresclient.envelope import ApiResponse
from aresclient.exceptions import AresClientError, RequestCancelledError, SerializationError
from aresclient.executor import RequestExecutor
from aresclient.retry import AsyncRetryPolicy, RetryConfig
from aresclient.serialization import NamingConvention, SerializationOptions, UnknownFields

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

r"""Client configuration and its defaults.

A ``ClientConfig`` is built once and shared by every call made through a
client. It is immutable, so sharing it between concurrent calls is safe.
Per-call variations are expressed with ``merge``.
"""

from __future__ import annotations

__all__ = ["DEFAULT_HEADERS", "DEFAULT_TIMEOUT", "ClientConfig"]

from dataclasses import dataclass, field, replace
from typing import Any

import httpx

from aresclient.core.validation import validate_base_url, validate_timeout
from aresclient.retry.config import RetryConfig
from aresclient.serialization.options import SerializationOptions

# Per-attempt timeout in seconds. A timeout is a transport error and is
# retried like any connection failure.
DEFAULT_TIMEOUT = 30.0

DEFAULT_HEADERS: dict[str, str] = {"Accept": "application/json"}


@dataclass(frozen=True)
class ClientConfig:
    r"""Configuration shared by all the calls of a client.

    Args:
        base_url: Optional absolute URL that relative request URLs are
            resolved against.
        timeout: Per-attempt timeout in seconds, or an ``httpx.Timeout``.
        headers: Extra headers sent with every request. ``Accept:
            application/json`` is always sent.
        follow_redirects: Whether redirects are followed by the transport.
        serialization: Default serialization options, overridable per call.
        retry: Retry policy configuration.

    Example:
        ```pycon
        >>> from aresclient.core import ClientConfig
        >>> from aresclient.retry import RetryConfig
        >>> config = ClientConfig(base_url="https://api.example.com")
        >>> config.timeout
        30.0
        >>> config.merge(retry=RetryConfig(max_retries=0)).retry.max_retries
        0

        ```
    """

    base_url: str | None = None
    timeout: float | httpx.Timeout = DEFAULT_TIMEOUT
    headers: dict[str, str] = field(default_factory=dict)
    follow_redirects: bool = True
    serialization: SerializationOptions = field(default_factory=SerializationOptions)
    retry: RetryConfig = field(default_factory=RetryConfig)

    def __post_init__(self) -> None:
        validate_timeout(self.timeout)
        validate_base_url(self.base_url)

    def merge(self, **overrides: Any) -> ClientConfig:
        """Return a copy with the non-``None`` ``overrides`` applied.

        Example:
            ```pycon
            >>> from aresclient.core import ClientConfig
            >>> config = ClientConfig(timeout=10.0)
            >>> config.merge(timeout=5.0, base_url=None).timeout
            5.0
            >>> config.timeout
            10.0

            ```
        """
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})

    def build_headers(self) -> dict[str, str]:
        """Return the default headers of every request."""
        return {**DEFAULT_HEADERS, **self.headers}

    def create_transport(self) -> httpx.AsyncClient:
        """Create the ``httpx.AsyncClient`` described by this config."""
        kwargs: dict[str, Any] = {
            "timeout": self.timeout,
            "headers": self.build_headers(),
            "follow_redirects": self.follow_redirects,
        }
        if self.base_url is not None:
            kwargs["base_url"] = self.base_url
        return httpx.AsyncClient(**kwargs)

r"""Validation of client-level parameters."""

from __future__ import annotations

__all__ = ["validate_base_url", "validate_timeout"]

import httpx


def validate_timeout(timeout: float | httpx.Timeout) -> None:
    """Validate the per-attempt timeout.

    Args:
        timeout: Seconds to wait for the server, or an ``httpx.Timeout``.

    Raises:
        ValueError: If ``timeout`` is a number <= 0.

    Example:
        ```pycon
        >>> from aresclient.core.validation import validate_timeout
        >>> validate_timeout(30.0)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if isinstance(timeout, (int, float)) and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_base_url(base_url: str | None) -> None:
    """Validate the optional base URL.

    Args:
        base_url: An absolute ``http``/``https`` URL, or ``None``.

    Raises:
        ValueError: If ``base_url`` is not an absolute HTTP(S) URL.
    """
    if base_url is None:
        return
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as exc:
        msg = f"base_url is not a valid URL: {base_url!r} ({exc})"
        raise ValueError(msg) from exc
    if url.scheme not in ("http", "https") or not url.host:
        msg = f"base_url must be an absolute http(s) URL, got {base_url!r}"
        raise ValueError(msg)

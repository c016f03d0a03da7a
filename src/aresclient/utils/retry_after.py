r"""Parsing of the ``Retry-After`` response header (RFC 7231)."""

from __future__ import annotations

__all__ = ["parse_retry_after"]

import logging
import math
from contextlib import suppress
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime

logger: logging.Logger = logging.getLogger(__name__)


def parse_retry_after(value: str | None) -> float | None:
    """Convert a ``Retry-After`` header value into seconds.

    Both the delta-seconds form (``"120"``) and the HTTP-date form
    (``"Wed, 21 Oct 2015 07:28:00 GMT"``) are understood. Dates in the
    past yield ``0.0``. Non-finite values (``"inf"``, ``"nan"``) are
    rejected.

    Args:
        value: The raw header value, or ``None`` if the header is absent.

    Returns:
        The number of seconds to wait, or ``None`` if the header is absent
        or unparsable.

    Example:
        ```pycon
        >>> from aresclient.utils.retry_after import parse_retry_after
        >>> parse_retry_after("120")
        120.0
        >>> parse_retry_after(None) is None
        True
        >>> parse_retry_after("soon") is None
        True
        >>> parse_retry_after("inf") is None
        True

        ```
    """
    if value is None:
        return None

    with suppress(ValueError):
        seconds = float(value)
        if not math.isfinite(seconds):
            logger.debug(f"Ignoring non-finite Retry-After header: {value!r}")
            return None
        return max(0.0, seconds)

    try:
        retry_at = parsedate_to_datetime(value)
    except (ValueError, TypeError, OverflowError):
        logger.debug(f"Ignoring unparsable Retry-After header: {value!r}")
        return None
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=timezone.utc)
    return max(0.0, (retry_at - datetime.now(timezone.utc)).total_seconds())

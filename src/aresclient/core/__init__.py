r"""Client configuration, validation and request construction."""

from __future__ import annotations

__all__ = [
    "BODY_METHODS",
    "DEFAULT_HEADERS",
    "DEFAULT_TIMEOUT",
    "ClientConfig",
    "build_request",
    "validate_base_url",
    "validate_timeout",
]

from aresclient.core.config import DEFAULT_HEADERS, DEFAULT_TIMEOUT, ClientConfig
from aresclient.core.request_builder import BODY_METHODS, build_request
from aresclient.core.validation import validate_base_url, validate_timeout

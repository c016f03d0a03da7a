r"""Retry policy: configuration, outcome classification and the retry
loop."""

from __future__ import annotations

__all__ = [
    "DEFAULT_MAX_RETRIES",
    "RETRY_STATUS_CODES",
    "AsyncRetryPolicy",
    "RetryConfig",
    "RetryDecider",
]

from aresclient.retry.config import DEFAULT_MAX_RETRIES, RETRY_STATUS_CODES, RetryConfig
from aresclient.retry.decider import RetryDecider
from aresclient.retry.policy import AsyncRetryPolicy

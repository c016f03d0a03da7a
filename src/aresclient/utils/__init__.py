r"""Internal utilities: cancellation, retry delays and logging."""

from __future__ import annotations

__all__ = [
    "calculate_sleep_time",
    "check_cancelled",
    "parse_retry_after",
    "run_cancellable",
    "sleep_cancellable",
]

from aresclient.utils.cancellation import check_cancelled, run_cancellable, sleep_cancellable
from aresclient.utils.retry_after import parse_retry_after
from aresclient.utils.sleep import calculate_sleep_time

r"""Backoff strategies used to space out retry attempts."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy", "ConstantBackoff", "ExponentialBackoff"]

from aresclient.backoff.base import BaseBackoffStrategy
from aresclient.backoff.constant import ConstantBackoff
from aresclient.backoff.exponential import ExponentialBackoff

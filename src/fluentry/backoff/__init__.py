r"""Backoff strategies, policy and clock used to space out retries."""

from __future__ import annotations

__all__ = [
    "BackoffPolicy",
    "BaseBackoffStrategy",
    "Clock",
    "ExponentialBackoff",
    "MonotonicClock",
]

from fluentry.backoff.base import BaseBackoffStrategy
from fluentry.backoff.clock import Clock, MonotonicClock
from fluentry.backoff.exponential import ExponentialBackoff
from fluentry.backoff.policy import BackoffPolicy

r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from fluentry.backoff.base import BaseBackoffStrategy
from fluentry.core.config import (
    DEFAULT_INITIAL_INTERVAL,
    DEFAULT_MAX_INTERVAL,
    DEFAULT_MULTIPLIER,
)


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    Calculates delay as: initial_interval * (multiplier ** attempt),
    capped at max_interval.

    Args:
        initial_interval: The delay before the first retry, in seconds.
        multiplier: The growth factor applied after each backoff.
            Must be >= 1.
        max_interval: The maximum delay in seconds.

    Example:
        ```pycon
        >>> from fluentry.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(initial_interval=1.0, multiplier=2.0, max_interval=5.0)
        >>> backoff.calculate(0)
        1.0
        >>> backoff.calculate(1)
        2.0
        >>> backoff.calculate(2)
        4.0
        >>> backoff.calculate(10)  # Would be 1024.0, but capped
        5.0

        ```
    """

    def __init__(
        self,
        initial_interval: float = DEFAULT_INITIAL_INTERVAL,
        multiplier: float = DEFAULT_MULTIPLIER,
        max_interval: float = DEFAULT_MAX_INTERVAL,
    ) -> None:
        if initial_interval < 0:
            msg = f"initial_interval must be >= 0, got {initial_interval}"
            raise ValueError(msg)
        if multiplier < 1:
            msg = f"multiplier must be >= 1, got {multiplier}"
            raise ValueError(msg)
        if max_interval <= 0:
            msg = f"max_interval must be > 0, got {max_interval}"
            raise ValueError(msg)

        self.initial_interval = initial_interval
        self.multiplier = multiplier
        self.max_interval = max_interval

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(initial_interval={self.initial_interval}, "
            f"multiplier={self.multiplier}, max_interval={self.max_interval})"
        )

    def calculate(self, attempt: int) -> float:
        """Calculate exponential backoff delay.

        Args:
            attempt: The number of completed backoffs (0-indexed).

        Returns:
            The calculated delay: initial_interval * (multiplier ** attempt),
            capped at max_interval.
        """
        try:
            delay = self.initial_interval * (self.multiplier**attempt)
        except OverflowError:
            return self.max_interval
        return min(delay, self.max_interval)

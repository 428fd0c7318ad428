r"""Backoff policy governing the delays between attempts.

The policy combines the deterministic exponential growth of
``ExponentialBackoff`` with a uniform randomization around each delay,
and holds the elapsed-time bound of the whole retry loop together with
the clock used to measure it.
"""

from __future__ import annotations

__all__ = ["BackoffPolicy"]

import logging
import random
from dataclasses import dataclass, field, replace
from typing import Any

from fluentry.backoff.clock import Clock, MonotonicClock
from fluentry.backoff.exponential import ExponentialBackoff
from fluentry.core.config import (
    DEFAULT_INITIAL_INTERVAL,
    DEFAULT_MAX_ELAPSED_TIME,
    DEFAULT_MAX_INTERVAL,
    DEFAULT_MULTIPLIER,
    DEFAULT_RANDOMIZATION_FACTOR,
)
from fluentry.core.validation import validate_backoff_params

logger: logging.Logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackoffPolicy:
    """Parameters of the exponential backoff between attempts.

    The delay before the retry following ``attempt`` completed backoffs is
    computed as follows:

    1. ``delay = initial_interval * multiplier ** attempt``, capped at
       ``max_interval``.
    2. The delay is sampled uniformly in
       ``[delay * (1 - randomization_factor), delay * (1 + randomization_factor)]``,
       and the sample is capped at ``max_interval`` again.

    Args:
        initial_interval: Delay before the first retry, in seconds.
        multiplier: Growth factor of the delay. Must be >= 1.
        randomization_factor: Relative spread of the randomized delay.
            Must be in [0, 1]. Set to 0 for deterministic delays.
        max_interval: Maximum single delay, in seconds.
        max_elapsed_time: Maximum wall-clock time of the whole retry loop,
            in seconds. ``None`` disables the bound.
        clock: Time source used to measure the elapsed time.

    Example:
        ```pycon
        >>> from fluentry.backoff import BackoffPolicy
        >>> policy = BackoffPolicy(initial_interval=1.0, multiplier=2.0, randomization_factor=0.0)
        >>> policy.next_delay(0)
        1.0
        >>> policy.next_delay(3)
        8.0
        >>> policy.would_exceed(elapsed=899.5, delay=1.0)
        True

        ```
    """

    initial_interval: float = DEFAULT_INITIAL_INTERVAL
    multiplier: float = DEFAULT_MULTIPLIER
    randomization_factor: float = DEFAULT_RANDOMIZATION_FACTOR
    max_interval: float = DEFAULT_MAX_INTERVAL
    max_elapsed_time: float | None = DEFAULT_MAX_ELAPSED_TIME
    clock: Clock = field(default_factory=MonotonicClock, compare=False)

    def __post_init__(self) -> None:
        validate_backoff_params(
            initial_interval=self.initial_interval,
            multiplier=self.multiplier,
            randomization_factor=self.randomization_factor,
            max_interval=self.max_interval,
            max_elapsed_time=self.max_elapsed_time,
        )

    @property
    def strategy(self) -> ExponentialBackoff:
        """The deterministic exponential strategy of this policy."""
        return ExponentialBackoff(
            initial_interval=self.initial_interval,
            multiplier=self.multiplier,
            max_interval=self.max_interval,
        )

    def base_delay(self, attempt: int) -> float:
        """Return the delay before randomization.

        Args:
            attempt: The number of completed backoffs (0-indexed).

        Returns:
            The exponential delay, never above ``max_interval``.
        """
        return self.strategy.calculate(attempt)

    def randomize(self, delay: float) -> float:
        """Return a delay sampled uniformly around ``delay``.

        Args:
            delay: The base delay in seconds.

        Returns:
            A value in ``[delay * (1 - rf), delay * (1 + rf)]`` capped at
            ``max_interval``.
        """
        if self.randomization_factor == 0:
            return delay
        spread = delay * self.randomization_factor
        sample = random.uniform(delay - spread, delay + spread)  # noqa: S311
        return min(sample, self.max_interval)

    def next_delay(self, attempt: int) -> float:
        """Return the randomized delay before the next retry.

        Args:
            attempt: The number of completed backoffs (0-indexed).

        Returns:
            The delay in seconds.
        """
        base = self.base_delay(attempt)
        delay = self.randomize(base)
        logger.debug(f"Backoff #{attempt}: base={base:.3f}s, randomized={delay:.3f}s")
        return delay

    def would_exceed(self, elapsed: float, delay: float) -> bool:
        """Indicate whether waiting ``delay`` more seconds would exceed
        ``max_elapsed_time``.

        Args:
            elapsed: Seconds already spent in the retry loop.
            delay: The next delay in seconds.

        Returns:
            ``True`` if the projected elapsed time is above the bound.
        """
        if self.max_elapsed_time is None:
            return False
        return elapsed + delay > self.max_elapsed_time

    def merge(self, **overrides: Any) -> BackoffPolicy:
        """Create a new policy with the given parameters overridden.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new validated ``BackoffPolicy``.

        Example:
            ```pycon
            >>> from fluentry.backoff import BackoffPolicy
            >>> policy = BackoffPolicy()
            >>> policy.merge(multiplier=2.0).multiplier
            2.0
            >>> policy.multiplier  # Original unchanged
            1.5

            ```
        """
        return replace(self, **overrides)

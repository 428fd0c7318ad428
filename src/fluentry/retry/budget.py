r"""Retry budget of a single run."""

from __future__ import annotations

__all__ = ["RetryBudget"]

from fluentry.core.validation import validate_max_retries


class RetryBudget:
    """Mutable counter of the retries left in one run.

    A budget is created fresh for every run and decremented exactly once
    per retryable failure. It never goes below zero.

    Args:
        max_retries: The number of retries allowed after the first attempt.

    Example:
        ```pycon
        >>> from fluentry.retry import RetryBudget
        >>> budget = RetryBudget(1)
        >>> budget.try_consume()
        True
        >>> budget.try_consume()
        False
        >>> budget.remaining, budget.consumed
        (0, 1)

        ```
    """

    def __init__(self, max_retries: int) -> None:
        validate_max_retries(max_retries)
        self._initial = max_retries
        self._remaining = max_retries

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(remaining={self._remaining}, initial={self._initial})"

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def consumed(self) -> int:
        return self._initial - self._remaining

    def try_consume(self) -> bool:
        """Take one retry from the budget.

        Returns:
            ``True`` if a retry was available and has been taken,
            ``False`` if the budget is exhausted.
        """
        if self._remaining <= 0:
            return False
        self._remaining -= 1
        return True

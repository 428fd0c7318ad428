r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy determines the deterministic part of the wait
    before the next attempt, given how many backoffs already happened.
    """

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the backoff delay for a given backoff index.

        Args:
            attempt: The number of completed backoffs (0-indexed). For
                example, attempt=0 is the delay before the first retry.

        Returns:
            The delay in seconds, before randomization.
        """

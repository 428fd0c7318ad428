r"""Clock abstraction used for elapsed-time bookkeeping.

The retry engine never reads the system time directly. It asks the
``clock`` of its backoff policy, which makes it possible to test the
elapsed-time bound deterministically by substituting a controlled clock.
"""

from __future__ import annotations

__all__ = ["Clock", "MonotonicClock"]

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of the current time, in seconds."""

    def now(self) -> float:
        """Return the current time in seconds."""


class MonotonicClock:
    """Clock backed by ``time.monotonic``.

    Example:
        ```pycon
        >>> from fluentry.backoff import MonotonicClock
        >>> clock = MonotonicClock()
        >>> clock.now() <= clock.now()
        True

        ```
    """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def now(self) -> float:
        return time.monotonic()

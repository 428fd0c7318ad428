r"""Parameter validation utilities for the request builder and the
backoff policy.

These functions check user supplied values before they are stored in a
configuration object, so that invalid settings fail at configuration
time instead of in the middle of a retry loop.
"""

from __future__ import annotations

__all__ = ["validate_backoff_params", "validate_max_retries", "validate_timeout"]


def validate_timeout(timeout: float | None) -> None:
    """Validate the per-attempt timeout.

    Args:
        timeout: Maximum seconds to wait for a single exchange, or
            ``None`` to use the client default.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from fluentry.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(None)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if timeout is not None and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_max_retries(max_retries: int) -> None:
    """Validate the retry budget.

    Args:
        max_retries: Number of retries allowed after the first attempt.
            Must be >= 0. A value of 0 means only the initial attempt.

    Raises:
        ValueError: If max_retries is negative.
    """
    if max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)


def validate_backoff_params(
    initial_interval: float,
    multiplier: float,
    randomization_factor: float,
    max_interval: float,
    max_elapsed_time: float | None,
) -> None:
    """Validate exponential backoff parameters.

    Args:
        initial_interval: Delay before the first retry. Must be >= 0.
        multiplier: Growth factor of the delay. Must be >= 1.
        randomization_factor: Relative spread of the randomized delay.
            Must be in [0, 1].
        max_interval: Cap of a single delay. Must be > 0.
        max_elapsed_time: Bound of the whole retry loop. Must be > 0
            if provided.

    Raises:
        ValueError: If any parameter is out of range.

    Example:
        ```pycon
        >>> from fluentry.core.validation import validate_backoff_params
        >>> validate_backoff_params(
        ...     initial_interval=0.5,
        ...     multiplier=1.5,
        ...     randomization_factor=0.5,
        ...     max_interval=60.0,
        ...     max_elapsed_time=None,
        ... )

        ```
    """
    if initial_interval < 0:
        msg = f"initial_interval must be >= 0, got {initial_interval}"
        raise ValueError(msg)
    if multiplier < 1:
        msg = f"multiplier must be >= 1, got {multiplier}"
        raise ValueError(msg)
    if not 0 <= randomization_factor <= 1:
        msg = f"randomization_factor must be in [0, 1], got {randomization_factor}"
        raise ValueError(msg)
    if max_interval <= 0:
        msg = f"max_interval must be > 0, got {max_interval}"
        raise ValueError(msg)
    if max_elapsed_time is not None and max_elapsed_time <= 0:
        msg = f"max_elapsed_time must be > 0, got {max_elapsed_time}"
        raise ValueError(msg)

r"""Callback types and data structures for observability.

Callbacks let users hook into the retry lifecycle for logging, metrics
or alerting. Four hooks are available:

- on_request: Called before each attempt
- on_retry: Called before each backoff delay
- on_success: Called when the run ends with a response
- on_failure: Called when the run ends with an error

Example:
    ```pycon
    >>> import fluentry
    >>> from fluentry.callbacks import RetryInfo
    >>> def log_retry(info: RetryInfo) -> None:
    ...     print(f"Attempt {info.attempt} in {info.wait_time:.2f}s")
    ...
    >>> request = fluentry.new().get("https://api.example.com/data").retry(3).on_retry(log_retry)
    >>> response = request.send()  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "CallbackConfig",
    "FailureInfo",
    "RequestInfo",
    "ResponseInfo",
    "RetryInfo",
]

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx


@dataclass
class RequestInfo:
    """Information passed to on_request callback.

    Attributes:
        url: The URL being requested.
        method: The HTTP method (e.g., "GET", "POST").
        attempt: The current attempt number (1-indexed). First attempt is 1.
        max_retries: The configured retry budget.
    """

    url: str
    method: str
    attempt: int
    max_retries: int


@dataclass
class RetryInfo:
    """Information passed to on_retry callback.

    Attributes:
        url: The URL being requested.
        method: The HTTP method (e.g., "GET", "POST").
        attempt: The number of the attempt that will follow the wait
            (1-indexed). The first retry is attempt 2.
        max_retries: The configured retry budget.
        wait_time: The sleep time in seconds before the next attempt.
        error: The transport error that triggered the retry (if any).
        status_code: The 5xx status code that triggered the retry (if any).
    """

    url: str
    method: str
    attempt: int
    max_retries: int
    wait_time: float
    error: Exception | None
    status_code: int | None


@dataclass
class ResponseInfo:
    """Information passed to on_success callback.

    Attributes:
        url: The URL that was requested.
        method: The HTTP method (e.g., "GET", "POST").
        attempt: The attempt number that produced the response (1-indexed).
        max_retries: The configured retry budget.
        response: The response returned to the caller. It can be a 5xx
            response when the retry budget was exhausted.
        total_time: Total time spent on all attempts including backoff (seconds).
    """

    url: str
    method: str
    attempt: int
    max_retries: int
    response: httpx.Response
    total_time: float


@dataclass
class FailureInfo:
    """Information passed to on_failure callback.

    Attributes:
        url: The URL that was requested.
        method: The HTTP method (e.g., "GET", "POST").
        attempt: The final attempt number (1-indexed).
        max_retries: The configured retry budget.
        error: The error returned to the caller.
        status_code: The last HTTP status code (if any).
        total_time: Total time spent on all attempts including backoff (seconds).
    """

    url: str
    method: str
    attempt: int
    max_retries: int
    error: Exception
    status_code: int | None
    total_time: float


@dataclass(frozen=True)
class CallbackConfig:
    """Configuration for callbacks.

    Attributes:
        on_request: Optional callback invoked before each attempt, once
            its request has been built.
        on_retry: Optional callback invoked before each backoff delay.
        on_success: Optional callback invoked when the run returns a response.
        on_failure: Optional callback invoked when the run returns an error.
    """

    on_request: Callable[[RequestInfo], None] | None = None
    on_retry: Callable[[RetryInfo], None] | None = None
    on_success: Callable[[ResponseInfo], None] | None = None
    on_failure: Callable[[FailureInfo], None] | None = None

r"""Callback manager for orchestrating retry lifecycle events.

This module provides the CallbackManager class that handles invocation
of user-defined callbacks at various points in the retry lifecycle.
"""

from __future__ import annotations

__all__ = ["CallbackManager"]

from typing import TYPE_CHECKING

from fluentry.callbacks import (
    CallbackConfig,
    FailureInfo,
    RequestInfo,
    ResponseInfo,
    RetryInfo,
)

if TYPE_CHECKING:
    import httpx


class CallbackManager:
    """Manages callback invocations during the retry lifecycle.

    Attempt numbers are received 0-indexed from the engine and passed
    1-indexed to the callbacks.

    Attributes:
        callbacks: Configuration containing callback functions for lifecycle events.
    """

    def __init__(self, callbacks: CallbackConfig | None = None) -> None:
        self.callbacks = callbacks or CallbackConfig()

    def on_request(self, url: str, method: str, attempt: int, max_retries: int) -> None:
        """Invoke on_request callback.

        Args:
            url: The URL being requested.
            method: The HTTP method.
            attempt: Current attempt number (0-indexed).
            max_retries: The configured retry budget.
        """
        if self.callbacks.on_request is not None:
            self.callbacks.on_request(
                RequestInfo(url=url, method=method, attempt=attempt + 1, max_retries=max_retries)
            )

    def on_retry(
        self,
        url: str,
        method: str,
        attempt: int,
        max_retries: int,
        sleep_time: float,
        error: Exception | None,
        status_code: int | None,
    ) -> None:
        """Invoke on_retry callback.

        Args:
            url: The URL being requested.
            method: The HTTP method.
            attempt: The attempt that just failed (0-indexed).
            max_retries: The configured retry budget.
            sleep_time: Sleep time before the next attempt.
            error: Transport error that triggered the retry (if any).
            status_code: Status code that triggered the retry (if any).
        """
        if self.callbacks.on_retry is not None:
            self.callbacks.on_retry(
                RetryInfo(
                    url=url,
                    method=method,
                    attempt=attempt + 2,
                    max_retries=max_retries,
                    wait_time=sleep_time,
                    error=error,
                    status_code=status_code,
                )
            )

    def on_success(
        self,
        url: str,
        method: str,
        attempt: int,
        max_retries: int,
        response: httpx.Response,
        total_time: float,
    ) -> None:
        """Invoke on_success callback.

        Args:
            url: The URL that was requested.
            method: The HTTP method.
            attempt: Attempt number that produced the response (0-indexed).
            max_retries: The configured retry budget.
            response: The response returned to the caller.
            total_time: Seconds spent in the run.
        """
        if self.callbacks.on_success is not None:
            self.callbacks.on_success(
                ResponseInfo(
                    url=url,
                    method=method,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                    response=response,
                    total_time=total_time,
                )
            )

    def on_failure(
        self,
        url: str,
        method: str,
        attempt: int,
        max_retries: int,
        error: Exception,
        status_code: int | None,
        total_time: float,
    ) -> None:
        """Invoke on_failure callback.

        Args:
            url: The URL that was requested.
            method: The HTTP method.
            attempt: Final attempt number (0-indexed).
            max_retries: The configured retry budget.
            error: The error returned to the caller.
            status_code: Status code if available.
            total_time: Seconds spent in the run.
        """
        if self.callbacks.on_failure is not None:
            self.callbacks.on_failure(
                FailureInfo(
                    url=url,
                    method=method,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                    error=error,
                    status_code=status_code,
                    total_time=total_time,
                )
            )

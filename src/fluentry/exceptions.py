r"""Exceptions raised by fluentry.

All errors surfaced to the caller derive from ``HttpRequestError`` so a
single ``except`` clause can handle every terminal failure of a request.
"""

from __future__ import annotations

__all__ = [
    "BackoffExhaustedError",
    "ConfigurationError",
    "HttpRequestError",
    "TransportError",
]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class HttpRequestError(RuntimeError):
    """Base exception for HTTP requests that could not be completed.

    Args:
        method: The HTTP method of the failed request.
        url: The URL of the failed request.
        message: A descriptive error message.
        status_code: The status code of the last response, if any.
        response: The last response received, if any.
        cause: The underlying exception, if any.

    Example:
        ```pycon
        >>> from fluentry.exceptions import HttpRequestError
        >>> error = HttpRequestError(
        ...     method="GET",
        ...     url="https://api.example.com/data",
        ...     message="GET request to https://api.example.com/data failed",
        ...     status_code=503,
        ... )
        >>> error.status_code
        503

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        status_code: int | None = None,
        response: httpx.Response | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.response = response
        self.cause = cause

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(method={self.method!r}, url={self.url!r}, "
            f"status_code={self.status_code!r})"
        )


class ConfigurationError(HttpRequestError, ValueError):
    """Raised when a request cannot be built, e.g. the payload cannot be
    serialized or the URL is malformed.

    This error is raised before any exchange takes place and is never
    retried.
    """


class TransportError(HttpRequestError):
    """Raised when the last allowed attempt failed at the transport
    level (DNS, connection, timeout).

    The original ``httpx`` exception is available as ``cause`` and is
    also chained as ``__cause__``.
    """


class BackoffExhaustedError(HttpRequestError):
    """Raised when the next backoff delay would push the run past
    ``max_elapsed_time`` while retry budget is still left.

    The error carries the context of the last failed attempt: either the
    last 5xx ``response`` (with its ``status_code``) or the last transport
    error as ``cause``.
    """

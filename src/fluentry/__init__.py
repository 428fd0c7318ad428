r"""fluentry - Fluent HTTP requests with retries and exponential backoff.

This package provides a chainable request builder on top of httpx whose
requests are executed by a retry engine. Transport failures (DNS,
connection, timeout) and 5xx responses are retried with randomized
exponential backoff while a retry budget remains and the total elapsed
time stays under a bound.

Key Features:
    - Immutable fluent builder (GET, POST, PUT, PATCH, DELETE, HEAD, OPTIONS)
    - JSON or raw bodies, re-rendered for every attempt
    - Randomized exponential backoff with interval cap and elapsed-time bound
    - Substitutable clock for deterministic tests
    - Callbacks and structured logging for observability

Example:
    ```pycon
    >>> import fluentry
    >>> response = (
    ...     fluentry.new()
    ...     .post("https://api.example.com/items")
    ...     .json({"key": "value"})
    ...     .retry(3)
    ...     .send()
    ... )  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "BackoffExhaustedError",
    "BackoffPolicy",
    "ConfigurationError",
    "EngineResult",
    "EngineState",
    "FluentRequest",
    "HttpRequestError",
    "RequestSpec",
    "RetryEngine",
    "TransportError",
    "__version__",
    "new",
]

from importlib.metadata import PackageNotFoundError, version

from fluentry.backoff import BackoffPolicy
from fluentry.exceptions import (
    BackoffExhaustedError,
    ConfigurationError,
    HttpRequestError,
    TransportError,
)
from fluentry.fluent import FluentRequest, new
from fluentry.request_spec import RequestSpec
from fluentry.retry import EngineResult, EngineState, RetryEngine

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"

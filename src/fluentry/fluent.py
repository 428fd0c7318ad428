r"""Fluent builder for requests with automatic retries.

Every setter returns a new builder, so a partially configured builder
can be shared and specialized without side effects:

```python
import fluentry

base = fluentry.new().set_header("Authorization", "Bearer token").retry(3)
response = base.post("https://api.example.com/items").json({"name": "x"}).send()
other = base.get("https://api.example.com/items").send()
```
"""

from __future__ import annotations

__all__ = ["FluentRequest", "new"]

from dataclasses import dataclass, field, replace
from typing import IO, TYPE_CHECKING, Any

import httpx

from fluentry.backoff.policy import BackoffPolicy
from fluentry.callbacks import CallbackConfig
from fluentry.core.config import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT
from fluentry.core.validation import validate_max_retries, validate_timeout
from fluentry.request_spec import RequestSpec
from fluentry.retry.engine import RetryEngine

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from fluentry.backoff.clock import Clock
    from fluentry.callbacks import FailureInfo, RequestInfo, ResponseInfo, RetryInfo
    from fluentry.retry.outcome import EngineResult


@dataclass(frozen=True)
class FluentRequest:
    """Immutable, chainable configuration of a request with retries.

    Args:
        spec: The request to send.
        policy: The backoff policy applied between attempts.
        max_retries: The number of retries allowed after the first attempt.
        callbacks: The lifecycle callbacks.

    Example:
        ```pycon
        >>> import fluentry
        >>> request = (
        ...     fluentry.new()
        ...     .post("https://api.example.com/items")
        ...     .json([1, 2, 3])
        ...     .retry(3)
        ...     .initial_interval(0.1)
        ... )
        >>> request.spec.method, request.max_retries, request.policy.initial_interval
        ('POST', 3, 0.1)
        >>> response = request.send()  # doctest: +SKIP

        ```
    """

    spec: RequestSpec = field(default_factory=RequestSpec)
    policy: BackoffPolicy = field(default_factory=BackoffPolicy)
    max_retries: int = DEFAULT_MAX_RETRIES
    callbacks: CallbackConfig = field(default_factory=CallbackConfig)

    def __post_init__(self) -> None:
        validate_max_retries(self.max_retries)

    # Method and URL

    def method(self, method: str, url: str) -> FluentRequest:
        return replace(self, spec=self.spec.with_method(method, url))

    def get(self, url: str) -> FluentRequest:
        return self.method("GET", url)

    def post(self, url: str) -> FluentRequest:
        return self.method("POST", url)

    def put(self, url: str) -> FluentRequest:
        return self.method("PUT", url)

    def patch(self, url: str) -> FluentRequest:
        return self.method("PATCH", url)

    def delete(self, url: str) -> FluentRequest:
        return self.method("DELETE", url)

    def head(self, url: str) -> FluentRequest:
        return self.method("HEAD", url)

    def options(self, url: str) -> FluentRequest:
        return self.method("OPTIONS", url)

    # Headers and body

    def set_header(self, key: str, value: str) -> FluentRequest:
        return replace(self, spec=self.spec.with_header(key, value))

    def json(
        self, value: Any, serializer: Callable[[Any], bytes] | None = None
    ) -> FluentRequest:
        """Send ``value`` as JSON, replacing any raw body.

        Also sets ``Content-Type: application/json``.
        """
        return replace(self, spec=self.spec.with_json(value, serializer))

    def body(self, content: bytes | str | IO[bytes] | Iterable[bytes]) -> FluentRequest:
        """Send ``content`` as raw body, replacing any JSON payload."""
        return replace(self, spec=self.spec.with_body(content))

    def timeout(self, seconds: float) -> FluentRequest:
        """Set the timeout of each individual attempt."""
        validate_timeout(seconds)
        return replace(self, spec=self.spec.with_timeout(seconds))

    # Retry and backoff

    def retry(self, max_retries: int) -> FluentRequest:
        return replace(self, max_retries=max_retries)

    def initial_interval(self, seconds: float) -> FluentRequest:
        return replace(self, policy=self.policy.merge(initial_interval=seconds))

    def multiplier(self, multiplier: float) -> FluentRequest:
        return replace(self, policy=self.policy.merge(multiplier=multiplier))

    def randomization_factor(self, factor: float) -> FluentRequest:
        return replace(self, policy=self.policy.merge(randomization_factor=factor))

    def max_interval(self, seconds: float) -> FluentRequest:
        return replace(self, policy=self.policy.merge(max_interval=seconds))

    def max_elapsed_time(self, seconds: float | None) -> FluentRequest:
        """Bound the whole retry loop. ``None`` removes the bound."""
        return replace(self, policy=self.policy.merge(max_elapsed_time=seconds))

    def clock(self, clock: Clock) -> FluentRequest:
        return replace(self, policy=self.policy.merge(clock=clock))

    # Callbacks

    def on_request(self, callback: Callable[[RequestInfo], None]) -> FluentRequest:
        return replace(self, callbacks=replace(self.callbacks, on_request=callback))

    def on_retry(self, callback: Callable[[RetryInfo], None]) -> FluentRequest:
        return replace(self, callbacks=replace(self.callbacks, on_retry=callback))

    def on_success(self, callback: Callable[[ResponseInfo], None]) -> FluentRequest:
        return replace(self, callbacks=replace(self.callbacks, on_success=callback))

    def on_failure(self, callback: Callable[[FailureInfo], None]) -> FluentRequest:
        return replace(self, callbacks=replace(self.callbacks, on_failure=callback))

    # Execution

    def execute(self, client: httpx.Client | None = None) -> EngineResult:
        """Run the request and return the terminal result without raising.

        Args:
            client: Optional client used as transport. If ``None``, a
                client with the default timeout is created and closed
                after the run.

        Returns:
            The terminal result of the run.

        Raises:
            ConfigurationError: If the request cannot be built.
        """
        if client is not None:
            return self._engine(client).run(self.spec)
        with httpx.Client(timeout=DEFAULT_TIMEOUT) as owned_client:
            return self._engine(owned_client).run(self.spec)

    def send(self, client: httpx.Client | None = None) -> httpx.Response:
        """Run the request and return its response.

        A 5xx response is returned, not raised, when the retry budget is
        exhausted.

        Args:
            client: Optional client used as transport (see ``execute``).

        Returns:
            The response.

        Raises:
            ConfigurationError: If the request cannot be built.
            TransportError: If the last allowed attempt failed at the
                transport level.
            BackoffExhaustedError: If ``max_elapsed_time`` was reached
                before the retry budget.
        """
        return self.execute(client).unwrap()

    def _engine(self, client: httpx.Client) -> RetryEngine:
        return RetryEngine(
            client,
            policy=self.policy,
            max_retries=self.max_retries,
            callbacks=self.callbacks,
        )


def new() -> FluentRequest:
    """Create a request builder with default settings.

    Example:
        ```pycon
        >>> import fluentry
        >>> fluentry.new().get("https://api.example.com/data").spec.method
        'GET'

        ```
    """
    return FluentRequest()

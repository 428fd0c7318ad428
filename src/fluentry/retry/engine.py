r"""Retry engine orchestrating attempts, backoff and termination.

The engine runs the following state machine for each call to ``run``:

- ATTEMPTING: perform one exchange.
    - success (any non-5xx status) -> SUCCEEDED
    - transport error -> BACKING_OFF if a retry is left, FAILED otherwise
    - 5xx response -> BACKING_OFF if a retry is left, SUCCEEDED otherwise
      (the last 5xx response is returned to the caller, not an error)
- BACKING_OFF: compute the next delay; if it would push the elapsed time
  past ``max_elapsed_time`` -> EXHAUSTED, otherwise sleep and go back to
  ATTEMPTING.
- SUCCEEDED, FAILED and EXHAUSTED are terminal.
"""

from __future__ import annotations

__all__ = ["RetryEngine"]

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from fluentry.backoff.policy import BackoffPolicy
from fluentry.core.config import DEFAULT_MAX_RETRIES
from fluentry.core.validation import validate_max_retries
from fluentry.exceptions import BackoffExhaustedError, HttpRequestError, TransportError
from fluentry.retry.budget import RetryBudget
from fluentry.retry.executor import AttemptExecutor
from fluentry.retry.manager import CallbackManager
from fluentry.retry.outcome import (
    AttemptOutcome,
    EngineResult,
    EngineState,
    ServerFailure,
    Success,
    TransportFailure,
)
from fluentry.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from fluentry.callbacks import CallbackConfig
    from fluentry.request_spec import RequestSpec

logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class _RunContext:
    """Mutable state owned by a single run."""

    budget: RetryBudget
    start_time: float
    attempts: int = 0
    backoff_index: int = 0
    state: EngineState = EngineState.ATTEMPTING
    outcome: AttemptOutcome | None = None


class RetryEngine:
    """Execute a request with retries and exponential backoff.

    The engine only holds immutable configuration. Every call to ``run``
    creates its own retry budget and bookkeeping, so one engine can serve
    several runs, including concurrent ones on different threads.

    Args:
        client: The client used as transport.
        policy: The backoff policy. Defaults to ``BackoffPolicy()``.
        max_retries: The number of retries allowed after the first
            attempt. Must be >= 0.
        callbacks: Optional lifecycle callbacks.

    Example:
        ```pycon
        >>> import httpx
        >>> from fluentry.backoff import BackoffPolicy
        >>> from fluentry.request_spec import RequestSpec
        >>> from fluentry.retry import RetryEngine
        >>> client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
        >>> engine = RetryEngine(client, policy=BackoffPolicy(), max_retries=3)
        >>> result = engine.run(RequestSpec(method="GET", url="https://api.example.com/data"))
        >>> result.state, result.response.status_code, result.attempts
        (<EngineState.SUCCEEDED: 'succeeded'>, 200, 1)

        ```
    """

    def __init__(
        self,
        client: httpx.Client,
        policy: BackoffPolicy | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        callbacks: CallbackConfig | None = None,
    ) -> None:
        validate_max_retries(max_retries)
        self._client = client
        self.policy = policy or BackoffPolicy()
        self.max_retries = max_retries
        self._callbacks = CallbackManager(callbacks)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(policy={self.policy!r}, "
            f"max_retries={self.max_retries})"
        )

    def run(self, spec: RequestSpec) -> EngineResult:
        """Run the request until it succeeds, fails or gives up.

        Args:
            spec: The request to send.

        Returns:
            The terminal result, holding either a response or an error.

        Raises:
            ConfigurationError: If the request cannot be built. Such
                errors are never retried.
        """
        executor = AttemptExecutor(self._client, spec)
        ctx = _RunContext(budget=RetryBudget(self.max_retries), start_time=self.policy.clock.now())

        while not ctx.state.is_terminal:
            if ctx.state is EngineState.ATTEMPTING:
                request = executor.prepare()
                self._callbacks.on_request(spec.url, spec.method, ctx.attempts, self.max_retries)
                ctx.outcome = executor.send(request)
                ctx.attempts += 1
                ctx.state = self._after_attempt(ctx)
            else:
                ctx.state = self._back_off(spec, ctx)

        return self._finish(spec, ctx)

    def _after_attempt(self, ctx: _RunContext) -> EngineState:
        outcome = ctx.outcome
        if isinstance(outcome, Success):
            return EngineState.SUCCEEDED
        if ctx.budget.try_consume():
            return EngineState.BACKING_OFF
        if isinstance(outcome, ServerFailure):
            # Out of retries: the last 5xx response goes back to the caller as is
            return EngineState.SUCCEEDED
        return EngineState.FAILED

    def _back_off(self, spec: RequestSpec, ctx: _RunContext) -> EngineState:
        delay = self.policy.next_delay(ctx.backoff_index)
        elapsed = self.policy.clock.now() - ctx.start_time
        if self.policy.would_exceed(elapsed, delay):
            logger.debug(
                f"{spec.method} request to {spec.url}: next delay {delay:.2f}s would exceed "
                f"max_elapsed_time={self.policy.max_elapsed_time}s (elapsed={elapsed:.2f}s)"
            )
            return EngineState.EXHAUSTED

        error, status_code = _failure_context(ctx.outcome)
        self._callbacks.on_retry(
            spec.url,
            spec.method,
            ctx.attempts - 1,
            self.max_retries,
            delay,
            error,
            status_code,
        )
        logger.debug(
            f"{spec.method} request to {spec.url}: retrying in {delay:.2f}s "
            f"({ctx.budget.remaining} retries left)"
        )
        time.sleep(delay)
        ctx.backoff_index += 1
        return EngineState.ATTEMPTING

    def _finish(self, spec: RequestSpec, ctx: _RunContext) -> EngineResult:
        elapsed = self.policy.clock.now() - ctx.start_time
        outcome = ctx.outcome
        response: httpx.Response | None = None
        error: HttpRequestError | None = None

        if ctx.state is EngineState.SUCCEEDED:
            response = outcome.response
            self._callbacks.on_success(
                spec.url, spec.method, ctx.attempts - 1, self.max_retries, response, elapsed
            )
        else:
            if ctx.state is EngineState.FAILED:
                error = _transport_error(spec, outcome.error, ctx.attempts)
            else:
                error = _exhausted_error(spec, outcome, ctx.attempts, self.policy.max_elapsed_time)
            self._callbacks.on_failure(
                spec.url,
                spec.method,
                ctx.attempts - 1,
                self.max_retries,
                error,
                error.status_code,
                elapsed,
            )

        log_structured(
            logger,
            logging.DEBUG,
            f"{spec.method} request to {spec.url} finished in state {ctx.state.value}",
            http_method=spec.method,
            url=spec.url,
            state=ctx.state.value,
            attempts=ctx.attempts,
            remaining_budget=ctx.budget.remaining,
            status_code=response.status_code if response is not None else error.status_code,
            elapsed=elapsed,
        )
        return EngineResult(
            state=ctx.state,
            response=response,
            error=error,
            attempts=ctx.attempts,
            remaining_budget=ctx.budget.remaining,
            elapsed=elapsed,
        )


def _failure_context(outcome: AttemptOutcome | None) -> tuple[Exception | None, int | None]:
    if isinstance(outcome, TransportFailure):
        return outcome.error, None
    if isinstance(outcome, ServerFailure):
        return None, outcome.status_code
    return None, None


def _transport_error(spec: RequestSpec, exc: httpx.RequestError, attempts: int) -> TransportError:
    if isinstance(exc, httpx.TimeoutException):
        message = f"{spec.method} request to {spec.url} timed out ({attempts} attempts)"
    else:
        message = f"{spec.method} request to {spec.url} failed after {attempts} attempts: {exc}"
    error = TransportError(method=spec.method, url=spec.url, message=message, cause=exc)
    error.__cause__ = exc
    return error


def _exhausted_error(
    spec: RequestSpec,
    outcome: AttemptOutcome,
    attempts: int,
    max_elapsed_time: float | None,
) -> BackoffExhaustedError:
    reason = f"max_elapsed_time of {max_elapsed_time}s exceeded"
    if isinstance(outcome, ServerFailure):
        error = BackoffExhaustedError(
            method=spec.method,
            url=spec.url,
            message=f"{spec.method} request to {spec.url} failed with status "
            f"{outcome.status_code} after {attempts} attempts ({reason})",
            status_code=outcome.status_code,
            response=outcome.response,
        )
    else:
        error = BackoffExhaustedError(
            method=spec.method,
            url=spec.url,
            message=f"{spec.method} request to {spec.url} failed after {attempts} attempts "
            f"({reason}): {outcome.error}",
            cause=outcome.error,
        )
        error.__cause__ = outcome.error
    return error

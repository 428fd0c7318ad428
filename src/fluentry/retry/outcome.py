r"""Outcome of a single attempt and terminal result of a run."""

from __future__ import annotations

__all__ = [
    "AttemptOutcome",
    "EngineResult",
    "EngineState",
    "ServerFailure",
    "Success",
    "TransportFailure",
]

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from fluentry.exceptions import HttpRequestError


@dataclass(frozen=True)
class Success:
    """The exchange completed with a non-5xx status."""

    response: httpx.Response


@dataclass(frozen=True)
class TransportFailure:
    """The exchange failed before a response was received."""

    error: httpx.RequestError


@dataclass(frozen=True)
class ServerFailure:
    """The server answered with a 5xx status.

    The response is kept so it can be returned to the caller once the
    retry budget is exhausted.
    """

    response: httpx.Response

    @property
    def status_code(self) -> int:
        return self.response.status_code


AttemptOutcome = Success | TransportFailure | ServerFailure


class EngineState(Enum):
    """States of the retry engine.

    Attributes:
        ATTEMPTING: An exchange is about to be performed.
        BACKING_OFF: Waiting before the next attempt.
        SUCCEEDED: Terminal, a response is returned.
        EXHAUSTED: Terminal, the elapsed-time bound was hit.
        FAILED: Terminal, a transport error is returned.
    """

    ATTEMPTING = "attempting"
    BACKING_OFF = "backing_off"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (EngineState.SUCCEEDED, EngineState.EXHAUSTED, EngineState.FAILED)


@dataclass(frozen=True)
class EngineResult:
    """Terminal result of one run.

    Exactly one of ``response`` and ``error`` is set.

    Attributes:
        state: The terminal state of the engine.
        response: The response returned to the caller, if any.
        error: The error returned to the caller, if any.
        attempts: The number of exchanges performed.
        remaining_budget: The retries left when the run ended.
        elapsed: The seconds spent in the run, measured with the policy clock.
    """

    state: EngineState
    response: httpx.Response | None = None
    error: HttpRequestError | None = None
    attempts: int = 0
    remaining_budget: int = 0
    elapsed: float = 0.0

    def __post_init__(self) -> None:
        if not self.state.is_terminal:
            msg = f"state must be terminal, got {self.state}"
            raise ValueError(msg)
        if (self.response is None) == (self.error is None):
            msg = "exactly one of response and error must be set"
            raise ValueError(msg)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> httpx.Response:
        """Return the response or raise the error.

        Raises:
            HttpRequestError: The error of a failed or exhausted run.
        """
        if self.error is not None:
            raise self.error
        return self.response

r"""Retry execution engine.

Public API:
    - RetryEngine: Runs a request with retries and exponential backoff
    - AttemptExecutor: Performs a single exchange and classifies it
    - RetryBudget: Retries left in one run
    - CallbackManager: Invokes lifecycle callbacks
    - EngineResult, EngineState: Terminal result and states of a run
    - Success, TransportFailure, ServerFailure: Outcomes of one attempt
"""

from __future__ import annotations

__all__ = [
    "AttemptExecutor",
    "AttemptOutcome",
    "CallbackManager",
    "EngineResult",
    "EngineState",
    "RetryBudget",
    "RetryEngine",
    "ServerFailure",
    "Success",
    "TransportFailure",
]

from fluentry.retry.budget import RetryBudget
from fluentry.retry.engine import RetryEngine
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

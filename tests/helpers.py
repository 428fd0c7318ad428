r"""Shared test helpers: controllable clock and in-process transports.

No test talks to the network. Transports are built on
``httpx.MockTransport`` and record every request they receive.
"""

from __future__ import annotations

__all__ = [
    "TEST_URL",
    "FakeClock",
    "RecordingHandler",
    "make_client",
    "no_jitter_policy",
]

from typing import TYPE_CHECKING

import httpx

from fluentry.backoff import BackoffPolicy

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

TEST_URL = "https://api.example.com/data"


class FakeClock:
    """Clock whose time only moves when told to."""

    def __init__(self, start: float = 0.0) -> None:
        self.current = start

    def now(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


class RecordingHandler:
    """MockTransport handler replaying a script of outcomes.

    Each item of ``script`` is either a status code, an ``httpx.Response``
    or an exception instance to raise. The last item repeats forever.
    ``echo=True`` copies the request body into every response.
    """

    def __init__(self, script: Iterable[int | httpx.Response | Exception], echo: bool = False) -> None:
        self.script = list(script)
        self.echo = echo
        self.requests: list[httpx.Request] = []
        self.bodies: list[bytes] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.bodies.append(request.read())
        step = self.script[min(len(self.requests), len(self.script)) - 1]
        if isinstance(step, Exception):
            raise step
        if isinstance(step, httpx.Response):
            return step
        content = self.bodies[-1] if self.echo else b""
        return httpx.Response(step, content=content)


def make_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def no_jitter_policy(**kwargs: object) -> BackoffPolicy:
    """Return a deterministic policy: 1s, 2s, 4s, ... without randomization."""
    params = {"initial_interval": 1.0, "multiplier": 2.0, "randomization_factor": 0.0}
    params.update(kwargs)
    return BackoffPolicy(**params)

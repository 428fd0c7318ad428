r"""Single attempt of a request against the transport."""

from __future__ import annotations

__all__ = ["AttemptExecutor", "classify_response"]

import logging
from typing import TYPE_CHECKING

import httpx

from fluentry.core.config import SERVER_ERROR_STATUS_RANGE
from fluentry.retry.outcome import AttemptOutcome, ServerFailure, Success, TransportFailure

if TYPE_CHECKING:
    from fluentry.request_spec import RequestSpec

logger: logging.Logger = logging.getLogger(__name__)


def classify_response(response: httpx.Response) -> Success | ServerFailure:
    """Classify a response as a success or a server failure.

    Args:
        response: The response to classify.

    Returns:
        ``ServerFailure`` for a status in [500, 599], ``Success``
        otherwise.
    """
    low, high = SERVER_ERROR_STATUS_RANGE
    if low <= response.status_code <= high:
        return ServerFailure(response)
    return Success(response)


class AttemptExecutor:
    """Perform one exchange per call for a single run of a request.

    The executor materializes a fresh request before each attempt and
    sends it with the client. It never retries and never touches the
    retry budget.

    Args:
        client: The client used as transport.
        spec: The request to send.
    """

    def __init__(self, client: httpx.Client, spec: RequestSpec) -> None:
        self._client = client
        self._spec = spec
        self._renderer = spec.body_renderer()

    def prepare(self) -> httpx.Request:
        """Materialize the request for the next attempt.

        Raises:
            ConfigurationError: If the request cannot be materialized.
        """
        return self._spec.materialize(self._client, self._renderer)

    def attempt(self) -> AttemptOutcome:
        """Perform exactly one exchange.

        Returns:
            ``Success``, ``TransportFailure`` or ``ServerFailure``.

        Raises:
            ConfigurationError: If the request cannot be materialized.
        """
        return self.send(self.prepare())

    def send(self, request: httpx.Request) -> AttemptOutcome:
        """Send an already materialized request once and classify the
        outcome."""
        try:
            response = self._client.send(request)
        except httpx.RequestError as exc:
            logger.debug(
                f"{self._spec.method} request to {self._spec.url} failed: "
                f"{type(exc).__name__}: {exc}"
            )
            return TransportFailure(exc)

        outcome = classify_response(response)
        logger.debug(
            f"{self._spec.method} request to {self._spec.url} returned "
            f"status {response.status_code}"
        )
        return outcome

r"""Configuration defaults and parameter validation shared by the
builder and the retry engine."""

from __future__ import annotations

__all__ = [
    "DEFAULT_INITIAL_INTERVAL",
    "DEFAULT_MAX_ELAPSED_TIME",
    "DEFAULT_MAX_INTERVAL",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_MULTIPLIER",
    "DEFAULT_RANDOMIZATION_FACTOR",
    "DEFAULT_TIMEOUT",
    "JSON_CONTENT_TYPE",
    "SERVER_ERROR_STATUS_RANGE",
    "SUPPORTED_URL_SCHEMES",
    "validate_backoff_params",
    "validate_max_retries",
    "validate_timeout",
]

from fluentry.core.config import (
    DEFAULT_INITIAL_INTERVAL,
    DEFAULT_MAX_ELAPSED_TIME,
    DEFAULT_MAX_INTERVAL,
    DEFAULT_MAX_RETRIES,
    DEFAULT_MULTIPLIER,
    DEFAULT_RANDOMIZATION_FACTOR,
    DEFAULT_TIMEOUT,
    JSON_CONTENT_TYPE,
    SERVER_ERROR_STATUS_RANGE,
    SUPPORTED_URL_SCHEMES,
)
from fluentry.core.validation import (
    validate_backoff_params,
    validate_max_retries,
    validate_timeout,
)

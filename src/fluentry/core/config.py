r"""Default values shared by the request builder and the retry engine.

The backoff defaults follow the classic exponential backoff tuning: the
first retry waits about half a second, each following delay grows by
50%, and a request gives up after fifteen minutes.
"""

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
]

# Default per-attempt timeout in seconds
DEFAULT_TIMEOUT = 30.0

# Default number of retries after the first attempt
# A request is sent exactly once unless retries are requested explicitly
DEFAULT_MAX_RETRIES = 0

# Delay before the first retry, in seconds
DEFAULT_INITIAL_INTERVAL = 0.5

# Growth factor applied to the delay after each backoff
DEFAULT_MULTIPLIER = 1.5

# Delays are sampled uniformly in [delay * (1 - rf), delay * (1 + rf)]
DEFAULT_RANDOMIZATION_FACTOR = 0.5

# Upper bound of a single delay, in seconds
DEFAULT_MAX_INTERVAL = 60.0

# Upper bound of the whole retry loop, in seconds
DEFAULT_MAX_ELAPSED_TIME = 900.0

# Inclusive range of status codes treated as retryable server errors
SERVER_ERROR_STATUS_RANGE = (500, 599)

JSON_CONTENT_TYPE = "application/json"

# URL schemes an httpx transport can send; anything else is a malformed request
SUPPORTED_URL_SCHEMES = ("http", "https")

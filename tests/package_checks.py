from __future__ import annotations

import logging
import sys

import httpx

import fluentry

logger: logging.Logger = logging.getLogger(__name__)


def _echo(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, content=request.read())


def check_get() -> None:
    logger.info("Checking get...")
    with httpx.Client(transport=httpx.MockTransport(_echo)) as client:
        response = fluentry.new().get("https://example.com/get").send(client)
    assert response.status_code == 200


def check_post_json() -> None:
    logger.info("Checking post with JSON...")
    with httpx.Client(transport=httpx.MockTransport(_echo)) as client:
        response = fluentry.new().post("https://example.com/post").json([1, 2, 3]).send(client)
    assert response.content == b"[1,2,3]"


def main() -> None:
    r"""Run all package checks to validate installation and
    functionality."""
    try:
        check_get()
        check_post_json()

        logger.info("✅ All package checks passed successfully!")
    except Exception:
        logger.exception("❌ Package check failed")
        sys.exit(1)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()

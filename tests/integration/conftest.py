from __future__ import annotations

import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Generator


class EchoHandler(BaseHTTPRequestHandler):
    """Echo the request body back; ``/status/<code>`` answers with that code."""

    def _handle(self) -> None:
        self.server.hits[self.path] = self.server.hits.get(self.path, 0) + 1
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length) if length else b""
        status = 200
        if self.path.startswith("/status/"):
            status = int(self.path.rsplit("/", 1)[1])
        self.send_response(status)
        self.send_header("X-Method", self.command)
        self.send_header("X-Content-Type", self.headers.get("Content-Type", ""))
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)

    do_GET = do_POST = do_PUT = do_PATCH = do_DELETE = do_HEAD = do_OPTIONS = _handle

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        pass


@pytest.fixture
def echo_server() -> Generator[ThreadingHTTPServer, None, None]:
    """Start a local HTTP server for the duration of a test."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), EchoHandler)
    server.hits = {}
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server
    server.shutdown()
    server.server_close()
    thread.join()


@pytest.fixture
def server_url(echo_server: ThreadingHTTPServer) -> str:
    host, port = echo_server.server_address[:2]
    return f"http://{host}:{port}"


@pytest.fixture
def closed_port_url() -> str:
    """URL of a port nothing listens on."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), EchoHandler)
    host, port = server.server_address[:2]
    server.server_close()
    return f"http://{host}:{port}"

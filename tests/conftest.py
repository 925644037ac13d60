"""
pytest configuration and fixtures.
"""

import io
import socket
import threading
from typing import Generator, Optional
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minihttp import HTTPServer, ServerConfig


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request."""
    return (
        b"GET /echo/hello HTTP/1.1\r\n"
        b"Host: localhost:4221\r\n"
        b"User-Agent: test-client/1.0\r\n"
        b"Accept: */*\r\n"
        b"\r\n"
    )


@pytest.fixture
def sample_post_request() -> bytes:
    """Sample HTTP POST request writing a file."""
    body = b"file contents"
    return (
        b"POST /files/notes.txt HTTP/1.1\r\n"
        b"Host: localhost:4221\r\n"
        b"Content-Type: application/octet-stream\r\n"
        + f"Content-Length: {len(body)}\r\n".encode()
        + b"\r\n"
        + body
    )


def stream(data: bytes) -> io.BytesIO:
    """Wrap raw request bytes in a stream the reader accepts."""
    return io.BytesIO(data)


class TestServer:
    """Test server helper that runs in a background thread."""

    __test__ = False  # Not a test class, despite the name

    def __init__(self, server: HTTPServer):
        self.server = server
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        return self.server.address[1]

    def start(self):
        """Start server in background thread and wait until it listens."""
        self._thread = threading.Thread(target=self.server.run, daemon=True)
        self._thread.start()

        if not self.server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        """Stop the server."""
        self.server.shutdown()
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)

    def send(self, data: bytes, half_close: bool = False) -> bytes:
        """
        Send raw bytes and return everything the server answers.

        half_close shuts down our write side after sending, so the
        server sees EOF (used for truncated-request tests).
        """
        with socket.create_connection(("127.0.0.1", self.port), timeout=5.0) as s:
            s.sendall(data)
            if half_close:
                s.shutdown(socket.SHUT_WR)
            chunks = []
            while True:
                chunk = s.recv(4096)
                if not chunk:
                    break
                chunks.append(chunk)
        return b"".join(chunks)


def split_response(raw: bytes):
    """Split a raw response into (status_line, headers dict, body)."""
    head, _, body = raw.partition(b"\r\n\r\n")
    lines = head.decode("utf-8").split("\r\n")
    headers = dict(line.split(": ", 1) for line in lines[1:])
    return lines[0], headers, body


def _start_server(directory: Optional[str]) -> TestServer:
    server = HTTPServer(ServerConfig(
        host="127.0.0.1",
        port=0,  # Let OS pick a free port
        directory=directory,
        timeout=5.0,
        log_level="WARNING",
    ))
    test_srv = TestServer(server)
    test_srv.start()
    return test_srv


@pytest.fixture
def test_server(tmp_path: Path) -> Generator[TestServer, None, None]:
    """Running server with /files/ served from a temp directory."""
    test_srv = _start_server(str(tmp_path))
    yield test_srv
    test_srv.stop()


@pytest.fixture
def bare_server() -> Generator[TestServer, None, None]:
    """Running server with no directory (file routes disabled)."""
    test_srv = _start_server(None)
    yield test_srv
    test_srv.stop()

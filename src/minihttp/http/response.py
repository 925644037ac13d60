"""
=============================================================================
HTTP RESPONSE
=============================================================================

Builds the bytes this server writes back for each request.

Every response has the same fixed shape:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │    HTTP/1.1 200 OK\r\n                    ← status line             │
    │    Content-Type: text/plain\r\n                                     │
    │    Content-Length: 5\r\n                  ← always len(body)        │
    │    \r\n                                   ← end of headers          │
    │    hello                                  ← body, nothing after it  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Content-Length is never taken from the caller. It is computed from the
body at serialization time, so the header cannot disagree with the bytes
that follow it. A response without a body still says "Content-Length: 0".

=============================================================================
"""

import json
from dataclasses import dataclass
from typing import Optional, Union

from .errors import HTTPError
from .status_codes import HTTPStatus

TEXT_PLAIN = "text/plain"
OCTET_STREAM = "application/octet-stream"
APPLICATION_JSON = "application/json"


@dataclass(frozen=True)
class HTTPResponse:
    """
    Represents an HTTP response to be sent to the client.

    =========================================================================
    RESPONSE LIFECYCLE
    =========================================================================

        route() returns          to_bytes()              Connection sends
        HTTPResponse    ─────►   serializes    ─────►    raw bytes
            │                       │                        │
        HTTPResponse(            b"HTTP/1.1 200 OK\r\n   socket.sendall(
          status=200,              Content-Type: ...\r\n     response_bytes
          body=b"hello"            \r\n                    )
        )                          hello"

    =========================================================================
    """

    status: HTTPStatus = HTTPStatus.OK
    content_type: str = TEXT_PLAIN
    body: Optional[bytes] = None
    version: str = "HTTP/1.1"

    @property
    def status_line(self) -> str:
        """
        Format: HTTP-VERSION SP STATUS-CODE SP REASON-PHRASE
        Example: "HTTP/1.1 201 Created"
        """
        return f"{self.version} {int(self.status)} {self.status.phrase}"

    @property
    def content_length(self) -> int:
        return len(self.body) if self.body is not None else 0

    def to_bytes(self) -> bytes:
        """
        Serialize the response for socket.sendall().

        Returns:
            Status line, Content-Type, Content-Length, blank line, body.
        """
        lines = [
            self.status_line,
            f"Content-Type: {self.content_type}",
            f"Content-Length: {self.content_length}",
            "",  # Empty line separates headers from body
        ]
        head = "\r\n".join(lines).encode("utf-8") + b"\r\n"
        return head + (self.body or b"")

    @classmethod
    def from_error(cls, error: HTTPError) -> "HTTPResponse":
        """Build the response the connection handler sends for an HTTPError."""
        return _ERROR_RESPONSES[error.status_code](str(error))


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================
#
# One-liners for the responses the router produces.
#
#     return ok("hello")
#     return ok(data, content_type=OCTET_STREAM)
#     return not_found()
#
# =============================================================================

def ok(body: Union[str, bytes, None] = None, content_type: str = TEXT_PLAIN) -> HTTPResponse:
    """
    Create a 200 OK response.

    Strings are encoded as UTF-8; bytes are sent as-is.
    """
    if isinstance(body, str):
        body = body.encode("utf-8")
    return HTTPResponse(status=HTTPStatus.OK, content_type=content_type, body=body)


def created() -> HTTPResponse:
    """Create a 201 Created response with no body (POST /files/{name})."""
    return HTTPResponse(status=HTTPStatus.CREATED)


def not_found() -> HTTPResponse:
    """Create a 404 Not Found response with no body."""
    return HTTPResponse(status=HTTPStatus.NOT_FOUND)


def bad_request(message: str = "Bad Request") -> HTTPResponse:
    """Create a 400 Bad Request response."""
    return _error(HTTPStatus.BAD_REQUEST, message)


def forbidden(message: str = "Forbidden") -> HTTPResponse:
    """Create a 403 Forbidden response."""
    return _error(HTTPStatus.FORBIDDEN, message)


def internal_error(message: str = "Internal Server Error") -> HTTPResponse:
    """
    Create a 500 Internal Server Error response.

    Keep the message generic: it goes to the client.
    """
    return _error(HTTPStatus.INTERNAL_SERVER_ERROR, message)


def _error(status: HTTPStatus, message: str) -> HTTPResponse:
    return HTTPResponse(
        status=status,
        content_type=APPLICATION_JSON,
        body=json.dumps({"error": message}).encode("utf-8"),
    )


# Every status an HTTPError subclass can carry
_ERROR_RESPONSES = {
    HTTPStatus.BAD_REQUEST: bad_request,
    HTTPStatus.FORBIDDEN: forbidden,
    HTTPStatus.INTERNAL_SERVER_ERROR: internal_error,
}

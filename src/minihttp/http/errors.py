"""
=============================================================================
ERROR TAXONOMY
=============================================================================

Every failure that can end a connection early is an HTTPError subclass.
Each one carries the status code the connection handler answers with
before it closes the socket:

    ┌──────────────────────┬────────┬─────────────────────────────────────┐
    │ Exception            │ Status │ Raised when                         │
    ├──────────────────────┼────────┼─────────────────────────────────────┤
    │ MalformedRequest     │  400   │ Bad request line, non-numeric       │
    │                      │        │ Content-Length, non-UTF-8 bytes,    │
    │                      │        │ over-long line                      │
    │ TruncatedStream      │  400   │ Stream closed/errored before the    │
    │                      │        │ headers or body were complete       │
    │ MissingUserAgent     │  400   │ /user-agent without the header      │
    │ ForbiddenPath        │  403   │ /files/{name} escapes the directory │
    │ FilesystemFailure    │  500   │ File read or write raised OSError   │
    └──────────────────────┴────────┴─────────────────────────────────────┘

None of these are retried. They are all connection-scoped: the worker
thread that hit one sends its response and closes, and nothing else is
affected.

=============================================================================
"""

from .status_codes import HTTPStatus


class HTTPError(Exception):
    """
    Base class for connection-scoped failures.

    Carries an HTTP status code so the connection handler can turn any
    subclass into a response without a lookup table.
    """

    status_code: HTTPStatus = HTTPStatus.BAD_REQUEST


class MalformedRequest(HTTPError):
    """The bytes on the wire do not form a request we can parse."""


class TruncatedStream(HTTPError):
    """The stream ended (or errored) before the request was complete."""


class MissingUserAgent(HTTPError):
    """The /user-agent route was requested without a User-Agent header."""


class ForbiddenPath(HTTPError):
    """A /files/ name resolved to a location outside the served directory."""

    status_code = HTTPStatus.FORBIDDEN


class FilesystemFailure(HTTPError):
    """Reading or writing a file under the served directory failed."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR

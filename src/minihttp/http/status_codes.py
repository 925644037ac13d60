"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The status codes this server can emit, with their reason phrases.

    ┌────────┬───────────────────────────────────────────────────────────┐
    │  2xx   │ 200 OK            - GET /, /echo, /user-agent, /files    │
    │        │ 201 Created       - POST /files/{name}                   │
    ├────────┼───────────────────────────────────────────────────────────┤
    │  4xx   │ 400 Bad Request   - Malformed or truncated request       │
    │        │ 403 Forbidden     - File name escapes the directory      │
    │        │ 404 Not Found     - No route, or file does not exist     │
    ├────────┼───────────────────────────────────────────────────────────┤
    │  5xx   │ 500 Internal Error - Filesystem failure, handler crash   │
    └────────┴───────────────────────────────────────────────────────────┘

The reason phrase only ever appears in the status line:

    HTTP/1.1 404 Not Found
             ─── ─────────
              │      └── phrase
              └───────── code

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes and reason phrases.

    IntEnum, so members compare and format as plain integers:

        >>> HTTPStatus.CREATED == 201
        True
        >>> HTTPStatus.CREATED.phrase
        'Created'
    """

    # 2xx Success
    OK = 200
    CREATED = 201

    # 4xx Client Errors
    BAD_REQUEST = 400
    FORBIDDEN = 403
    NOT_FOUND = 404

    # 5xx Server Errors
    INTERNAL_SERVER_ERROR = 500

    @property
    def phrase(self) -> str:
        """Reason phrase for the status line."""
        return _STATUS_PHRASES.get(self, "Unknown")


_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.CREATED: "Created",
    HTTPStatus.BAD_REQUEST: "Bad Request",
    HTTPStatus.FORBIDDEN: "Forbidden",
    HTTPStatus.NOT_FOUND: "Not Found",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
}

"""
=============================================================================
HTTP PROTOCOL LAYER
=============================================================================

Everything that knows about HTTP itself:

    request.py       Read one request off a byte stream → HTTPRequest
    response.py      HTTPResponse and its wire serialization
    router.py        Fixed routing table: resolve() and route()
    errors.py        Connection-scoped error taxonomy
    status_codes.py  HTTPStatus enum with reason phrases

=============================================================================
HTTP MESSAGE FORMAT
=============================================================================

    REQUEST:                          RESPONSE:
    ─────────                         ──────────
    GET /echo/abc HTTP/1.1\r\n        HTTP/1.1 200 OK\r\n
    User-Agent: curl/8.4.0\r\n        Content-Type: text/plain\r\n
    \r\n                              Content-Length: 3\r\n
                                      \r\n
                                      abc

=============================================================================
"""

from .errors import (
    HTTPError,
    MalformedRequest,
    TruncatedStream,
    MissingUserAgent,
    ForbiddenPath,
    FilesystemFailure,
)
from .request import HTTPRequest, RequestReader, read_request
from .response import (
    HTTPResponse,
    ok,
    created,
    not_found,
    bad_request,
    forbidden,
    internal_error,
)
from .router import RouteKind, RouteMatch, resolve, route
from .status_codes import HTTPStatus

__all__ = [
    # Errors
    "HTTPError",
    "MalformedRequest",
    "TruncatedStream",
    "MissingUserAgent",
    "ForbiddenPath",
    "FilesystemFailure",

    # Request reading
    "HTTPRequest",
    "RequestReader",
    "read_request",

    # Responses
    "HTTPResponse",
    "ok",
    "created",
    "not_found",
    "bad_request",
    "forbidden",
    "internal_error",

    # Routing
    "RouteKind",
    "RouteMatch",
    "resolve",
    "route",

    # Status codes
    "HTTPStatus",
]

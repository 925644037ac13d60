"""
=============================================================================
ROUTER
=============================================================================

Decides which response a request gets. The routing table is fixed:

    ┌──────────────┬────────┬────────────────┬───────────────────────────┐
    │ Kind         │ Method │ Path           │ Response                  │
    ├──────────────┼────────┼────────────────┼───────────────────────────┤
    │ FILE_WRITE   │ POST   │ /files/{name}  │ 201, body written to file │
    │ FILE_READ    │ GET    │ /files/{name}  │ 200 file bytes, or 404    │
    │ ECHO         │ any    │ /echo/{text}   │ 200 "{text}"              │
    │ USER_AGENT   │ any    │ /user-agent    │ 200 User-Agent value      │
    │ ROOT         │ any    │ /              │ 200, empty                │
    │ NOT_FOUND    │ any    │ anything else  │ 404, empty                │
    └──────────────┴────────┴────────────────┴───────────────────────────┘

The two FILE_* kinds only exist when a directory is configured, and
FILE_WRITE also needs a body. Otherwise /files/... falls through the
table and ends up as NOT_FOUND.

=============================================================================
TWO STEPS: RESOLVE, THEN RESPOND
=============================================================================

    HTTPRequest ──resolve()──► RouteMatch(kind, param) ──route()──► HTTPResponse
                    │                                      │
             pure: looks only at              calls the handler for
             method, path, body,              `kind`; file handlers
             directory                        touch the filesystem

resolve() returns a tagged value instead of calling handlers from a
chain of if/elif prefix checks. The kinds are mutually exclusive and the
order is explicit in one place, so it can be tested without a
filesystem or a socket.

=============================================================================
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from ..handlers.files import FileStore
from .errors import MissingUserAgent
from .request import HTTPRequest
from .response import OCTET_STREAM, HTTPResponse, created, not_found, ok

logger = logging.getLogger(__name__)

FILES_PREFIX = "/files/"
ECHO_PREFIX = "/echo/"
USER_AGENT_PATH = "/user-agent"
ROOT_PATH = "/"


class RouteKind(Enum):
    """The arms of the routing table, in match order."""

    FILE_WRITE = "file_write"
    FILE_READ = "file_read"
    ECHO = "echo"
    USER_AGENT = "user_agent"
    ROOT = "root"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class RouteMatch:
    """
    Result of resolving a request.

    Example:
        GET /echo/abc  →  RouteMatch(kind=RouteKind.ECHO, param="abc")
        GET /          →  RouteMatch(kind=RouteKind.ROOT, param="")
    """

    kind: RouteKind
    param: str = ""  # File name or echo text, "" for the other kinds


def resolve(request: HTTPRequest, directory: Optional[str] = None) -> RouteMatch:
    """
    Pick the route for a request. First match wins.

    Args:
        request: The parsed request.
        directory: Served directory, or None if file routes are disabled.

    Returns:
        RouteMatch naming the arm and its path parameter.
    """
    path = request.path

    if directory is not None and path.startswith(FILES_PREFIX):
        name = path[len(FILES_PREFIX):]
        if request.method == "POST" and request.has_body:
            return RouteMatch(RouteKind.FILE_WRITE, name)
        if request.method == "GET":
            return RouteMatch(RouteKind.FILE_READ, name)

    if path.startswith(ECHO_PREFIX):
        return RouteMatch(RouteKind.ECHO, path[len(ECHO_PREFIX):])
    if path == USER_AGENT_PATH:
        return RouteMatch(RouteKind.USER_AGENT)
    if path == ROOT_PATH:
        return RouteMatch(RouteKind.ROOT)
    return RouteMatch(RouteKind.NOT_FOUND)


def route(request: HTTPRequest, directory: Optional[str] = None) -> HTTPResponse:
    """
    Resolve a request and produce its response.

    The directory is passed in on every call; the router holds no state.

    Raises:
        MissingUserAgent: /user-agent without a User-Agent header.
        ForbiddenPath: A /files/ name escapes the directory.
        FilesystemFailure: A file read or write failed.
    """
    match = resolve(request, directory)
    logger.debug(f"{request.method} {request.path} → {match.kind.name}")
    handler = _HANDLERS[match.kind]
    return handler(request, match, directory)


# =============================================================================
# HANDLERS
# =============================================================================
#
# One function per RouteKind, all with the same signature so route() can
# dispatch through a dict.
#
# =============================================================================

Handler = Callable[[HTTPRequest, RouteMatch, Optional[str]], HTTPResponse]


def _write_file(request: HTTPRequest, match: RouteMatch, directory: Optional[str]) -> HTTPResponse:
    FileStore(directory).write(match.param, request.body)
    return created()


def _read_file(request: HTTPRequest, match: RouteMatch, directory: Optional[str]) -> HTTPResponse:
    content = FileStore(directory).read(match.param)
    if content is None:
        return not_found()
    return ok(content, content_type=OCTET_STREAM)


def _echo(request: HTTPRequest, match: RouteMatch, directory: Optional[str]) -> HTTPResponse:
    return ok(match.param)


def _user_agent(request: HTTPRequest, match: RouteMatch, directory: Optional[str]) -> HTTPResponse:
    if request.user_agent is None:
        raise MissingUserAgent("User-Agent header is required for /user-agent")
    return ok(request.user_agent)


def _root(request: HTTPRequest, match: RouteMatch, directory: Optional[str]) -> HTTPResponse:
    return ok()


def _not_found(request: HTTPRequest, match: RouteMatch, directory: Optional[str]) -> HTTPResponse:
    return not_found()


_HANDLERS: Dict[RouteKind, Handler] = {
    RouteKind.FILE_WRITE: _write_file,
    RouteKind.FILE_READ: _read_file,
    RouteKind.ECHO: _echo,
    RouteKind.USER_AGENT: _user_agent,
    RouteKind.ROOT: _root,
    RouteKind.NOT_FOUND: _not_found,
}

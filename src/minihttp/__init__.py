"""
=============================================================================
MINIHTTP - A Minimal HTTP/1.1 Server Built From Raw Sockets
=============================================================================

A small HTTP/1.1 server that parses requests by hand (no http.server, no
third-party HTTP library) and serves a fixed set of routes:

    GET  /                  200, empty body
    GET  /echo/{text}       200, body is {text}
    GET  /user-agent        200, body is the User-Agent header
    GET  /files/{name}      200 with the file's bytes, or 404
    POST /files/{name}      201, request body written to the file

The /files/ routes are only active when a directory is configured.

=============================================================================
PACKAGE LAYOUT
=============================================================================

    minihttp/
    ├── __init__.py          ← You are here
    ├── __main__.py          ← CLI: python -m minihttp --directory DIR
    ├── config.py            ← ServerConfig
    ├── server.py            ← HTTPServer: thread per connection
    ├── access_log.py        ← One log line per request
    ├── core/
    │   ├── socket_server.py ← bind / listen / accept loop
    │   └── connection.py    ← one client socket
    ├── http/
    │   ├── request.py       ← read one request off a stream
    │   ├── response.py      ← HTTPResponse + wire format
    │   ├── router.py        ← resolve() / route()
    │   ├── errors.py        ← error taxonomy → status codes
    │   └── status_codes.py  ← HTTPStatus
    └── handlers/
        └── files.py         ← FileStore for /files/

=============================================================================
QUICK START
=============================================================================

    from minihttp import HTTPServer, ServerConfig

    server = HTTPServer(ServerConfig(port=4221, directory="/tmp/data"))
    server.run()

Or from the shell:

    python -m minihttp --directory /tmp/data

=============================================================================
"""

__version__ = "1.0.0"

from .config import ServerConfig
from .server import HTTPServer, create_app

__all__ = [
    "HTTPServer",
    "ServerConfig",
    "create_app",
    "__version__",
]

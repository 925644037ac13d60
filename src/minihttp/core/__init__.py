"""
=============================================================================
CORE NETWORKING
=============================================================================

The TCP side of the server, with no HTTP knowledge:

    socket_server.py   Bind, listen, accept loop, signal-driven shutdown
    connection.py      One accepted socket: buffered reader, send, close

=============================================================================
"""

from .connection import Connection, ConnectionState
from .socket_server import SocketServer

__all__ = [
    "Connection",
    "ConnectionState",
    "SocketServer",
]

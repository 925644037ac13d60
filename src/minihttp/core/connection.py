"""
=============================================================================
CONNECTION
=============================================================================

Wraps one accepted client socket for the lifetime of a single request.

=============================================================================
ONE REQUEST, ONE RESPONSE
=============================================================================

This server does not keep connections alive. Every connection goes
through the same states exactly once:

    NEW ──► READING ──► PROCESSING ──► WRITING ──► CLOSING ──► CLOSED
              │                                       ▲
              └────────── parse / I/O error ──────────┘

=============================================================================
READING
=============================================================================

The request reader wants a stream with readline() and read(n), not raw
recv() calls. socket.makefile("rb") gives exactly that: a buffered
binary reader over the socket. The reader decides how many bytes a
request has (headers up to the empty line, then Content-Length bytes),
so the connection never has to scan for "\r\n\r\n" itself.

=============================================================================
"""

import logging
import socket
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO, Optional

logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Where a connection is in its single request/response cycle."""

    NEW = "new"                # Just accepted, nothing read yet
    READING = "reading"        # Reading the request
    PROCESSING = "processing"  # Request parsed, routing
    WRITING = "writing"        # Sending the response
    CLOSING = "closing"        # Shutdown sequence in progress
    CLOSED = "closed"          # Socket released


@dataclass
class Connection:
    """
    Represents a client connection.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short identifier used to tag log lines.
        state: Current connection state.
        created_at: Timestamp when the connection was accepted.
        timeout: Socket timeout in seconds, None for blocking.
    """

    # Required parameters
    socket: socket.socket
    address: tuple

    # Generated/default parameters
    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)
    timeout: Optional[float] = None

    _reader: Optional[BinaryIO] = field(default=None, repr=False)

    def __post_init__(self):
        self.socket.settimeout(self.timeout)

    @property
    def client_ip(self) -> str:
        return self.address[0]

    @property
    def age(self) -> float:
        """Get connection age in seconds."""
        return time.time() - self.created_at

    @property
    def reader(self) -> BinaryIO:
        """
        Buffered binary stream over the socket, created on first use.

        Moves the connection into READING.
        """
        if self._reader is None:
            self._reader = self.socket.makefile("rb")
            self.state = ConnectionState.READING
        return self._reader

    def send_response(self, data: bytes) -> bool:
        """
        Send response bytes to the client.

        Uses sendall() so the whole response goes out, not just what fits
        in the kernel buffer.

        Returns:
            True if the send succeeded, False if the peer is gone.
        """
        self.state = ConnectionState.WRITING
        try:
            self.socket.sendall(data)
            return True
        except OSError as e:
            # Covers ConnectionResetError, BrokenPipeError and timeouts
            logger.warning(f"[{self.id}] Send failed: {e}")
            return False

    def close(self):
        """
        Close the connection gracefully.

        1. shutdown(SHUT_WR) sends FIN so the client sees end-of-response.
        2. Close the buffered reader and the socket to release the fd.

        Safe to call more than once.
        """
        if self.state == ConnectionState.CLOSED:
            return

        self.state = ConnectionState.CLOSING

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Peer already disconnected

        if self._reader is not None:
            try:
                self._reader.close()
            except OSError:
                pass

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed after {self.age * 1000:.1f}ms")

    def __enter__(self):
        """
        Allows using Connection with a 'with' statement:

            with conn:
                request = read_request(conn.reader)
                conn.send_response(response.to_bytes())
            # Connection closed here, even if an exception escaped
        """
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False  # Don't suppress exceptions

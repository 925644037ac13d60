"""
=============================================================================
MAIN HTTP SERVER
=============================================================================

Ties the pieces together into a running server.

=============================================================================
REQUEST LIFECYCLE
=============================================================================

    1. CLIENT CONNECTS
       SocketServer.accept() → Connection

    2. WORKER THREAD
       One new thread per connection, running _process_connection()

    3. READ REQUEST
       RequestReader.read(conn.reader) → HTTPRequest

    4. ROUTE
       route(request, config.directory) → HTTPResponse

    5. SEND RESPONSE
       conn.send_response(response.to_bytes())

    6. CLOSE
       Always. There is no keep-alive: one request per connection.

=============================================================================
FAILURES
=============================================================================

Nothing that goes wrong on one connection may affect another, or the
listener. In the worker:

    HTTPError (parse, missing header, filesystem)
        → the error's own status (400/403/500), connection closed

    any other exception
        → logged with traceback, 500, connection closed

    send fails (client already gone)
        → logged, connection closed

=============================================================================
"""

import logging
import threading
import time
from typing import List, Optional, Tuple

from .access_log import log_request
from .config import ServerConfig
from .core import Connection, ConnectionState, SocketServer
from .http import HTTPError, HTTPRequest, HTTPResponse, RequestReader, internal_error, route

logger = logging.getLogger(__name__)


class HTTPServer:
    """
    Thread-per-connection HTTP/1.1 server.

    =========================================================================
    USAGE
    =========================================================================

        server = HTTPServer(ServerConfig(port=4221, directory="/tmp/data"))
        server.run()  # Blocks until Ctrl+C

    From a test, run it in a background thread:

        server = HTTPServer(ServerConfig(port=0))
        threading.Thread(target=server.run, daemon=True).start()
        server.wait_until_ready(5.0)
        host, port = server.address
        ...
        server.shutdown()

    =========================================================================
    """

    def __init__(self, config: Optional[ServerConfig] = None):
        """
        Args:
            config: Server configuration. Uses defaults if not provided.
        """
        self.config = config or ServerConfig()
        self.config.validate()  # Fail-fast on invalid config

        self._socket_server = SocketServer(self.config)
        self._reader = RequestReader(max_line_size=self.config.max_line_size)

        # Only touched from the accept-loop thread
        self._workers: List[threading.Thread] = []
        self._running = False

    @property
    def address(self) -> Tuple[str, int]:
        """The (host, port) the server is bound to."""
        return self._socket_server.address

    @property
    def is_running(self) -> bool:
        return self._running

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def run(self, host: Optional[str] = None, port: Optional[int] = None):
        """
        Start the server (blocking).

        Args:
            host: Override config host.
            port: Override config port.
        """
        if host:
            self.config.host = host
        if port is not None:
            self.config.port = port

        self._setup_logging()
        self._running = True

        logger.info(f"Starting {self.config.server_name} on {self.config.host}:{self.config.port}")
        if self.config.directory:
            logger.info(f"Serving files from {self.config.directory}")
        else:
            logger.info("No directory configured, /files/ routes disabled")

        try:
            self._socket_server.start(self._handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self._shutdown()

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the server is accepting connections."""
        return self._socket_server.wait_until_ready(timeout)

    def shutdown(self):
        """Stop accepting connections. run() returns once in-flight work is done."""
        self._socket_server.shutdown()

    def _setup_logging(self):
        """Configure logging based on config."""
        level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        logging.getLogger("minihttp").setLevel(level)

    def _shutdown(self, timeout: float = 30.0):
        """Wait (bounded) for in-flight connections, then mark stopped."""
        logger.info("Shutting down server...")
        self._running = False

        deadline = time.time() + timeout
        for worker in self._workers:
            worker.join(max(0.0, deadline - time.time()))
        still_running = sum(1 for w in self._workers if w.is_alive())
        if still_running:
            logger.warning(f"{still_running} connection(s) still open at shutdown")
        self._workers.clear()

        logger.info("Server stopped")

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """
        Start a worker thread for a new connection.

        Called by SocketServer from the accept loop, so it must not block.
        """
        self._workers = [w for w in self._workers if w.is_alive()]

        worker = threading.Thread(
            target=self._process_connection,
            args=(conn,),
            name=f"conn-{conn.id}",
            daemon=True,
        )
        self._workers.append(worker)
        worker.start()

    def _process_connection(self, conn: Connection):
        """
        Serve exactly one request on a connection (runs in a worker thread).

        Always closes the connection, whatever happens.
        """
        request: Optional[HTTPRequest] = None

        with conn:
            try:
                request = self._reader.read(conn.reader)
                conn.state = ConnectionState.PROCESSING
                response = route(request, self.config.directory)
            except HTTPError as e:
                logger.warning(f"[{conn.id}] {type(e).__name__}: {e}")
                response = HTTPResponse.from_error(e)
            except Exception as e:
                logger.exception(f"[{conn.id}] Handler error: {e}")
                response = internal_error()

            if conn.send_response(response.to_bytes()):
                log_request(
                    connection_id=conn.id,
                    client_ip=conn.client_ip,
                    request=request,
                    response=response,
                    duration_ms=conn.age * 1000,
                    log_format=self.config.log_format,
                )


def create_app(config: Optional[ServerConfig] = None) -> HTTPServer:
    """
    Create an HTTP server application.

    Example:
        app = create_app(ServerConfig(directory="/tmp/data"))
        app.run()
    """
    return HTTPServer(config)

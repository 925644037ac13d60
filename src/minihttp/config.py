"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized configuration for the server.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    1. Code:        ServerConfig(port=8000, directory="/tmp/data")
    2. CLI:         python -m minihttp --directory /tmp/data
    3. Environment: MINIHTTP_DIRECTORY=/tmp/data python -m minihttp

The config is built once at startup, validated, and then only read.
Worker threads share the same instance; nothing mutates it after run().

=============================================================================
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class ServerConfig:
    """
    Configuration for the HTTP server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog, timeout

    HTTP SETTINGS
    - max_line_size

    FILES
    - directory

    LOGGING
    - log_level, log_format

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = "127.0.0.1"
    """
    The IP address to bind to.
    - "127.0.0.1" - Localhost only
    - "0.0.0.0" - All network interfaces
    """

    port: int = 4221
    """
    The port number to listen on. 0 asks the OS for a free port; read
    the real one back from HTTPServer.address once it is listening.
    """

    backlog: int = 128
    """Maximum number of queued connections."""

    timeout: Optional[float] = None
    """
    Per-connection socket timeout in seconds.
    None = blocking reads and writes with no deadline.
    A read that times out ends the request as a truncated stream.
    """

    # ─────────────────────────────────────────────────────────────────────
    # HTTP SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    max_line_size: int = 65536
    """Longest request line or header line accepted, in bytes."""

    # ─────────────────────────────────────────────────────────────────────
    # FILES
    # ─────────────────────────────────────────────────────────────────────

    directory: Optional[str] = None
    """
    Directory served by the /files/{name} routes.
    None disables the file routes entirely.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    log_format: str = "text"
    """
    Access log format: 'text' or 'json'.
    JSON is better for log aggregators, text for humans.
    """

    server_name: str = "minihttp/1.0"
    """Name shown in the startup log line."""

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

            MINIHTTP_HOST       Server host (default: 127.0.0.1)
            MINIHTTP_PORT       Server port (default: 4221)
            MINIHTTP_DIRECTORY  Directory for /files/ (default: unset)
            MINIHTTP_TIMEOUT    Socket timeout in seconds (default: none)
            MINIHTTP_LOG_LEVEL  Logging level (default: INFO)
            MINIHTTP_LOG_FORMAT Access log format, text or json (default: text)

        =====================================================================
        """
        timeout = os.getenv("MINIHTTP_TIMEOUT")
        return cls(
            host=os.getenv("MINIHTTP_HOST", "127.0.0.1"),
            port=int(os.getenv("MINIHTTP_PORT", "4221")),
            directory=os.getenv("MINIHTTP_DIRECTORY") or None,
            timeout=float(timeout) if timeout else None,
            log_level=os.getenv("MINIHTTP_LOG_LEVEL", "INFO"),
            log_format=os.getenv("MINIHTTP_LOG_FORMAT", "text"),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Called at startup so a bad value fails before the socket is bound,
        not on the first request.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be > 0")

        if self.max_line_size < 64:
            raise ValueError("max_line_size must be >= 64")

        if self.log_format not in ("text", "json"):
            raise ValueError(f"Invalid log_format: {self.log_format}. Must be 'text' or 'json'.")

        if self.directory is not None and not Path(self.directory).is_dir():
            raise ValueError(f"Directory does not exist: {self.directory}")

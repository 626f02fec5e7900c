"""
=============================================================================
LISTENER CONFIGURATION
=============================================================================

Centralized configuration for the listener.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m httplistener --port 3000                        │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTP_PORT=3000 python -m httplistener                     │
    │                                                                      │
    │   3. Defaults (this file)                                           │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
READ SIZE AND BUFFER CAP
=============================================================================

    buffer_size       How many bytes one recv() asks for. Each recv()
                      result is one chunk handed to the framer.

    max_buffer_size   How large the framer's carry may grow while waiting
                      for a blank line. None disables the cap.

    read_timeout      None blocks on recv() indefinitely. A client that
                      connects and sends nothing keeps its thread until
                      it disconnects.

=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Optional


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ListenerConfig:
    """
    Configuration for the HTTP listener.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog, buffer_size, read_timeout

    FRAMING
    - max_buffer_size

    IDENTITY
    - server_name

    LOGGING
    - log_level, log_file

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

    port: int = 8080
    """
    The port number to listen on. 0 lets the OS pick a free port
    (see HTTPListener.bound_address).
    """

    backlog: int = 128
    """Maximum number of queued connections waiting for accept()."""

    buffer_size: int = 512
    """Bytes requested per recv() call."""

    read_timeout: Optional[float] = None
    """Seconds a recv() may block. None = wait forever."""

    # ─────────────────────────────────────────────────────────────────────
    # FRAMING
    # ─────────────────────────────────────────────────────────────────────

    max_buffer_size: Optional[int] = 1024 * 1024  # 1 MB
    """
    Largest partial request kept per connection, in bytes.
    None = unbounded.
    """

    # ─────────────────────────────────────────────────────────────────────
    # SERVER IDENTITY
    # ─────────────────────────────────────────────────────────────────────

    server_name: str = "httplistener/1.0"
    """Value of the Server header on every response."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    log_file: Optional[str] = None
    """
    Append log lines to this file as well as the console.
    Lines look like: (2026-10-19 12:00:00) [INFO]: Read 0 bytes. Closing socket.
    """

    @classmethod
    def from_env(cls) -> "ListenerConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        HTTP_HOST             Bind address (default: 127.0.0.1)
        HTTP_PORT             Port (default: 8080)
        HTTP_BUFFER_SIZE      recv() size in bytes (default: 512)
        HTTP_READ_TIMEOUT     recv() timeout in seconds (default: none)
        HTTP_MAX_BUFFER_SIZE  Partial request cap in bytes, 0 = none
                              (default: 1048576)
        HTTP_LOG_LEVEL        Logging level (default: INFO)
        HTTP_LOG_FILE         Log file path (default: none)

        =====================================================================
        """
        read_timeout = os.getenv("HTTP_READ_TIMEOUT")
        max_buffer_size = int(os.getenv("HTTP_MAX_BUFFER_SIZE", str(1024 * 1024)))

        return cls(
            host=os.getenv("HTTP_HOST", "127.0.0.1"),
            port=int(os.getenv("HTTP_PORT", "8080")),
            buffer_size=int(os.getenv("HTTP_BUFFER_SIZE", "512")),
            read_timeout=float(read_timeout) if read_timeout else None,
            max_buffer_size=max_buffer_size or None,
            log_level=os.getenv("HTTP_LOG_LEVEL", "INFO"),
            log_file=os.getenv("HTTP_LOG_FILE") or None,
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Called once at startup so a bad value fails immediately instead of
        on the first connection.

        Raises:
            ValueError: On the first invalid setting.
        """
        if not 0 <= self.port < 65536:
            raise ValueError(f"Invalid port: {self.port}. Must be 0-65535.")

        if self.backlog < 1:
            raise ValueError("backlog must be >= 1")

        if self.buffer_size < 1:
            raise ValueError("buffer_size must be >= 1")

        if self.read_timeout is not None and self.read_timeout <= 0:
            raise ValueError("read_timeout must be > 0 or None")

        if self.max_buffer_size is not None and self.max_buffer_size < self.buffer_size:
            raise ValueError("max_buffer_size must be >= buffer_size or None")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}")

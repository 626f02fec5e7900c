"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

Wraps one accepted client socket. The connection does NOT interpret the
bytes it reads: each recv() result is handed to the StreamFramer as-is,
and each serialized response is written back with sendall().

=============================================================================
CONNECTION STATE MACHINE
=============================================================================

    NEW ──────► READING ──────► PROCESSING ──────► WRITING
     │             ▲                                  │
     │             └──────────────────────────────────┘
     │             │
     ▼             ▼
    CLOSING ◄──────┘
     │
     ▼
    CLOSED

    READING     blocked in recv() waiting for the next chunk
    PROCESSING  framing, parsing and routing the chunk's messages
    WRITING     sendall() of one response

=============================================================================
READ OUTCOMES
=============================================================================

    recv() → b"..."        a chunk (at most buffer_size bytes)
    recv() → b""           the peer closed its side: normal end
    recv() raises OSError  reset, timeout, etc.: that connection ends

=============================================================================
"""

import socket
import time
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional
import uuid


logger = logging.getLogger(__name__)

# Longest time close() spends discarding unread client data
CLOSE_DRAIN_TIMEOUT = 0.5


class ConnectionState(Enum):
    """Connection lifecycle states (used for logging and debugging)."""

    NEW = "new"
    READING = "reading"
    PROCESSING = "processing"
    WRITING = "writing"
    CLOSING = "closing"
    CLOSED = "closed"


@dataclass
class Connection:
    """
    Represents a client connection.

    Attributes:
        socket: The client socket.
        address: Client's address tuple as returned by accept().
        id: Short unique identifier used in log lines.
        state: Current connection state.
        created_at: Timestamp when the connection was accepted.
        last_activity: Timestamp of the last read or write.
        chunks_read: Number of non-empty chunks received.
        responses_sent: Number of responses written.
    """

    socket: socket.socket
    address: tuple

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    created_at: float = field(default_factory=time.time)
    last_activity: float = field(default_factory=time.time)
    chunks_read: int = 0
    responses_sent: int = 0

    # Configuration (passed from ListenerConfig)
    buffer_size: int = 512
    timeout: Optional[float] = None   # None = block forever on recv()

    def __post_init__(self):
        self.socket.setblocking(True)
        self.socket.settimeout(self.timeout)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def client_ip(self) -> str:
        """Client IP address, or "unknown" if the address is unavailable."""
        if not self.address:
            return "unknown"
        return str(self.address[0])

    @property
    def client_port(self) -> int:
        return self.address[1] if len(self.address) > 1 else 0

    @property
    def age(self) -> float:
        """Connection age in seconds."""
        return time.time() - self.created_at

    @property
    def is_closed(self) -> bool:
        return self.state == ConnectionState.CLOSED

    # =========================================================================
    # READING
    # =========================================================================

    def recv_chunk(self) -> bytes:
        """
        Read the next chunk from the socket.

        Returns:
            Up to buffer_size bytes, or b"" when the peer closed the
            connection.

        Raises:
            OSError: On any socket failure (reset, timeout, ...). The
                     caller ends the connection.
        """
        self.state = ConnectionState.READING
        data = self.socket.recv(self.buffer_size)

        self.last_activity = time.time()
        if data:
            self.chunks_read += 1
            self.state = ConnectionState.PROCESSING
        return data

    # =========================================================================
    # WRITING
    # =========================================================================

    def send_response(self, data: bytes) -> bool:
        """
        Send one serialized response.

        Uses sendall() so the whole response is written before the next
        one starts.

        Args:
            data: Response bytes.

        Returns:
            True if the write succeeded, False if the connection is lost.
        """
        self.state = ConnectionState.WRITING
        self.last_activity = time.time()

        try:
            self.socket.sendall(data)
        except OSError as e:
            logger.error(f"[{self.id}] Error writing to socket: {e}")
            return False

        self.responses_sent += 1
        self.last_activity = time.time()
        self.state = ConnectionState.PROCESSING
        return True

    # =========================================================================
    # CLOSING
    # =========================================================================

    def close(self):
        """
        Close the connection.

        1. shutdown(SHUT_WR): send FIN, we are done writing
        2. drain what the client still has in flight, for at most
           CLOSE_DRAIN_TIMEOUT seconds in total
        3. close(): release the file descriptor

        Idempotent.
        """
        if self.state == ConnectionState.CLOSED:
            return

        self.state = ConnectionState.CLOSING

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Peer already gone

        # Deadline covers the whole drain, not each recv()
        deadline = time.monotonic() + CLOSE_DRAIN_TIMEOUT
        try:
            while True:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                self.socket.settimeout(remaining)
                if not self.socket.recv(1024):
                    break
        except OSError:
            pass

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(
            f"[{self.id}] Connection closed after {self.responses_sent} responses "
            f"({self.age:.2f}s)"
        )

    # =========================================================================
    # CONTEXT MANAGER
    # =========================================================================

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

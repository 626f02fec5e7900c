"""
=============================================================================
HTTP LISTENER
=============================================================================

Ties the components together: one thread per accepted connection, each
with its own StreamFramer.

=============================================================================
ARCHITECTURE OVERVIEW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   SocketServer.accept()                                              │
    │        │                                                             │
    │        └──► HTTPListener._handle_connection(conn)                    │
    │                  │                                                   │
    │                  └──► Thread: _serve_connection(conn)                │
    │                                                                      │
    │   _serve_connection (per connection, own StreamFramer):              │
    │                                                                      │
    │        recv_chunk() ──► framer.push() ──► [message, message, ...]    │
    │                                                │                     │
    │                          ┌─────────────────────┘                     │
    │                          ▼                                           │
    │                   parse_request() ──► processor.process()            │
    │                                              │                       │
    │                                              ▼                       │
    │                          response.to_bytes() ──► send_response()     │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Responses on one connection are written in the order their messages were
framed, each one completely before the next.

=============================================================================
FAILURE ISOLATION
=============================================================================

    Event                         Log level   Effect
    ────────────────────────────  ─────────   ─────────────────────────────
    recv() returned b""           INFO        connection ends normally
    recv() raised OSError         ERROR       connection ends
    chunk is not UTF-8            ERROR       connection ends, no response
    partial request too large     ERROR       connection ends
    sendall() failed              ERROR       connection ends
    bind()/listen()/accept()      ERROR       run() raises

None of the per-connection events reach the accept loop or any other
connection.

=============================================================================
"""

import logging
import threading
from typing import Iterable, Optional, Set

from .config import ListenerConfig
from .core import (
    Connection,
    EncodingError,
    RequestTooLarge,
    SocketServer,
    StreamFramer,
)
from .http import RequestProcessor, parse_request
from .log import configure_logging


logger = logging.getLogger(__name__)


class HTTPListener:
    """
    Thread-per-connection HTTP listener.

    Usage:
        listener = HTTPListener(ListenerConfig(port=8080))
        listener.run()          # blocks until Ctrl+C / SIGTERM

    From another thread:
        listener.shutdown()
    """

    def __init__(
        self,
        config: Optional[ListenerConfig] = None,
        processor: Optional[RequestProcessor] = None,
    ):
        """
        Args:
            config: Listener configuration. Defaults are used if omitted.
            processor: Request processor; by default one built with the
                       configured server name.
        """
        self.config = config or ListenerConfig()
        self.config.validate()

        self.processor = processor or RequestProcessor(server_name=self.config.server_name)
        self._socket_server = SocketServer(self.config)

        self._threads: Set[threading.Thread] = set()
        self._threads_lock = threading.Lock()

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    @property
    def is_running(self) -> bool:
        return self._socket_server.is_running

    @property
    def bound_address(self):
        """(host, port) actually bound; useful when port=0."""
        return self._socket_server.address

    @property
    def active_connections(self) -> int:
        with self._threads_lock:
            return len(self._threads)

    def run(self, setup_logging: bool = True):
        """
        Start listening (blocking).

        Args:
            setup_logging: Configure console/file logging from the config
                           before starting.

        Raises:
            OSError: If the listening socket cannot be set up.
        """
        if setup_logging:
            configure_logging(self.config.log_level, self.config.log_file)

        logger.info(
            f"Starting {self.config.server_name} on {self.config.host}:{self.config.port}"
        )

        try:
            self._socket_server.start(self._handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            self._join_connections()

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        return self._socket_server.wait_until_ready(timeout)

    def shutdown(self, timeout: Optional[float] = 5.0) -> bool:
        """
        Stop accepting connections and wait for the accept loop to exit.

        Connection threads blocked in recv() are not interrupted; they end
        when their peer disconnects.

        Returns:
            True if the accept loop stopped within ``timeout``.
        """
        self._socket_server.shutdown()
        return self._socket_server.wait_for_shutdown(timeout)

    def _join_connections(self, timeout: float = 1.0):
        with self._threads_lock:
            threads = list(self._threads)
        for thread in threads:
            thread.join(timeout)
        logger.info("Listener stopped")

    # =========================================================================
    # CONNECTION HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """Start a dedicated thread for a newly accepted connection."""
        thread = threading.Thread(
            target=self._run_connection_thread,
            args=(conn,),
            name=f"conn-{conn.id}",
            daemon=True,
        )
        with self._threads_lock:
            self._threads.add(thread)
        thread.start()

    def _run_connection_thread(self, conn: Connection):
        try:
            self._serve_connection(conn)
        except Exception:
            # Errors stay inside this connection's thread
            logger.exception(f"[{conn.id}] Unexpected error in connection handler")
        finally:
            with self._threads_lock:
                self._threads.discard(threading.current_thread())

    def _serve_connection(self, conn: Connection):
        """
        Read loop for one connection.

        Runs until the peer closes, a socket error occurs, or the stream
        can no longer be framed.
        """
        framer = StreamFramer(max_buffer_size=self.config.max_buffer_size)

        with conn:
            while True:
                try:
                    chunk = conn.recv_chunk()
                except OSError as e:
                    logger.error(f"[{conn.id}] Error reading socket from {conn.client_ip}: {e}")
                    break

                if not chunk:
                    logger.info(f"[{conn.id}] Read 0 bytes. Closing socket.")
                    break

                try:
                    messages = framer.push(chunk)
                except EncodingError as e:
                    logger.error(f"[{conn.id}] Closing connection from {conn.client_ip}: {e}")
                    break
                except RequestTooLarge as e:
                    logger.error(f"[{conn.id}] Closing connection from {conn.client_ip}: {e}")
                    self._respond(conn, e.messages)
                    break

                if not self._respond(conn, messages):
                    break

            discarded = framer.reset()
            if discarded:
                logger.debug(
                    f"[{conn.id}] Discarding {len(discarded)} characters of incomplete request"
                )

    def _respond(self, conn: Connection, messages: Iterable[str]) -> bool:
        """
        Answer each message in order.

        Returns:
            False if a write failed and the connection must end.
        """
        for message in messages:
            logger.info(f"message from {conn.client_ip}\n{message}")

            request = parse_request(message)
            response = self.processor.process(request)

            logger.debug(
                f"[{conn.id}] {request.request_line!r} -> {response.code.status_line}"
            )

            if not conn.send_response(response.to_bytes()):
                return False
        return True


def create_listener(config: Optional[ListenerConfig] = None) -> HTTPListener:
    """Factory for HTTPListener instances."""
    return HTTPListener(config)

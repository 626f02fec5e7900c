"""
pytest configuration and fixtures.
"""

import socket
import threading
from datetime import datetime, timezone
from typing import Generator
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httplistener import HTTPListener, ListenerConfig


FIXED_NOW = datetime(2026, 10, 19, 12, 30, 45, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    """Clock returning a constant timestamp, for deterministic Date headers."""
    return lambda: FIXED_NOW


@pytest.fixture
def get_index_request() -> bytes:
    """Happy-path request for the index page."""
    return b"GET / HTTP/1.1\r\n\r\n"


@pytest.fixture
def browser_request() -> bytes:
    """A request carrying header lines, as a browser would send it."""
    return (
        b"GET / HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: text/html\r\n"
        b"\r\n"
    )


@pytest.fixture
def config() -> ListenerConfig:
    """Default test listener configuration."""
    return ListenerConfig(
        host="127.0.0.1",
        port=0,  # Let OS pick a free port
        read_timeout=5.0,
        log_level="WARNING",
    )


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


class RunningListener:
    """Listener running in a background thread."""

    def __init__(self, listener: HTTPListener):
        self.listener = listener
        self._thread: threading.Thread = None

    @property
    def port(self) -> int:
        return self.listener.bound_address[1]

    def start(self):
        """Start listener in background thread and wait until it listens."""
        self._thread = threading.Thread(
            target=self.listener.run,
            kwargs={"setup_logging": False},
            daemon=True,
        )
        self._thread.start()

        if not self.listener.wait_until_ready(timeout=5.0):
            raise RuntimeError("Listener failed to start")

    def stop(self):
        """Stop the listener."""
        self.listener.shutdown(timeout=5.0)
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)

    def connect(self) -> socket.socket:
        sock = socket.create_connection(("127.0.0.1", self.port), timeout=5.0)
        return sock


@pytest.fixture
def running_listener(config: ListenerConfig) -> Generator[RunningListener, None, None]:
    """Start a listener on a free port for the duration of a test."""
    running = RunningListener(HTTPListener(config))
    running.start()

    yield running

    running.stop()


@pytest.fixture
def start_listener(config: ListenerConfig) -> Generator:
    """
    Factory for listeners with custom settings.

    Usage:
        running = start_listener(buffer_size=8)
    """
    started = []

    def start(**overrides) -> RunningListener:
        for name, value in overrides.items():
            setattr(config, name, value)
        running = RunningListener(HTTPListener(config))
        running.start()
        started.append(running)
        return running

    yield start

    for running in started:
        running.stop()

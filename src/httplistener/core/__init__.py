"""
Core networking and framing components.

- framer: StreamFramer turning byte chunks into request messages
- connection: Connection wrapper around one client socket
- socket_server: SocketServer accept loop
"""

from .framer import StreamFramer, FramingError, EncodingError, RequestTooLarge
from .connection import Connection, ConnectionState
from .socket_server import SocketServer

__all__ = [
    "StreamFramer",
    "FramingError",
    "EncodingError",
    "RequestTooLarge",
    "Connection",
    "ConnectionState",
    "SocketServer",
]

"""
=============================================================================
HTTPLISTENER - Minimal HTTP/1.x Listener on Raw Sockets
=============================================================================

Accepts TCP connections, reassembles request messages from the raw byte
stream, classifies each one and answers with a serialized response.

=============================================================================
DATA FLOW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   socket bytes                                                       │
    │       │                                                              │
    │       ▼                                                              │
    │   StreamFramer.push(chunk)      split on "\r\n\r\n", keep the tail   │
    │       │                                                              │
    │       ▼                                                              │
    │   parse_request(message)        verb / path / version or None        │
    │       │                                                              │
    │       ▼                                                              │
    │   RequestProcessor.process()    200 / 404 / 400                      │
    │       │                                                              │
    │       ▼                                                              │
    │   HTTPResponse.to_bytes()       status line, options, Content-Length │
    │       │                                                              │
    │       ▼                                                              │
    │   socket.sendall()                                                   │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    httplistener/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m httplistener)
    ├── server.py            # HTTPListener, thread-per-connection driver
    ├── config.py            # ListenerConfig dataclass
    ├── log.py               # Logging setup
    ├── core/
    │   ├── framer.py        # StreamFramer and framing errors
    │   ├── connection.py    # Connection wrapper
    │   └── socket_server.py # Accept loop
    └── http/
        ├── protocol.py      # Verb, HTTPVersion, HeaderOption
        ├── status_codes.py  # ResponseCode
        ├── request.py       # HTTPRequest, parse_request
        ├── response.py      # HTTPResponse, build_response
        └── processor.py     # RequestProcessor

=============================================================================
QUICK START
=============================================================================

    from httplistener import HTTPListener, ListenerConfig

    HTTPListener(ListenerConfig(port=8080)).run()

Or use the pieces directly:

    from httplistener import StreamFramer, RequestProcessor, parse_request

    framer = StreamFramer()
    processor = RequestProcessor()
    for message in framer.push(b"GET / HTTP/1.1\r\n\r\n"):
        wire = processor.process(parse_request(message)).to_bytes()

=============================================================================
"""

__version__ = "1.0.0"

from .config import ListenerConfig
from .server import HTTPListener, create_listener
from .core import StreamFramer, FramingError, EncodingError, RequestTooLarge
from .http import (
    HTTPRequest,
    HTTPResponse,
    RequestProcessor,
    ResponseCode,
    build_response,
    parse_request,
)

__all__ = [
    "HTTPListener",
    "ListenerConfig",
    "create_listener",
    "StreamFramer",
    "FramingError",
    "EncodingError",
    "RequestTooLarge",
    "HTTPRequest",
    "HTTPResponse",
    "RequestProcessor",
    "ResponseCode",
    "build_response",
    "parse_request",
    "__version__",
]

"""
=============================================================================
REQUEST PROCESSOR
=============================================================================

Maps a parsed HTTPRequest to an HTTPResponse. Routing is a single path
comparison, checked in priority order:

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        ROUTING RULES                                │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   1. verb == GET and path == "/"                                    │
    │         └──► 200 OK, HTTP/1.1, OK page                              │
    │                                                                      │
    │   2. verb, path and version all recognized                          │
    │         └──► 404 Not Found, HTTP/1.1, 404 page                      │
    │                                                                      │
    │   3. anything else (malformed request line)                         │
    │         └──► builder defaults: 400 Bad Request, HTTP/1.0, 400 page  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

GET is the only recognized verb, so "POST / HTTP/1.1" is malformed and
falls through to rule 3, not rule 2.

=============================================================================
"""

from datetime import datetime
from typing import Callable, Optional

from .protocol import Verb, HTTPVersion
from .request import HTTPRequest
from .response import (
    DEFAULT_SERVER_NAME,
    HTTPResponse,
    NOT_FOUND_PAGE,
    OK_PAGE,
    build_response,
)
from .status_codes import ResponseCode


INDEX_PATH = "/"


class RequestProcessor:
    """
    Stateless request → response mapping.

    One instance can be shared by every connection thread: process()
    reads nothing but its argument and the immutable server name.

    Usage:
        processor = RequestProcessor(server_name="httplistener/1.0")
        response = processor.process(parse_request(message))
        conn.send_response(response.to_bytes())
    """

    def __init__(
        self,
        server_name: str = DEFAULT_SERVER_NAME,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            server_name: Value of the Server option on every response.
            clock: Returns the timestamp for the Date option. Defaults to
                   the current UTC time.
        """
        self.server_name = server_name
        self._clock = clock

    def process(self, request: HTTPRequest) -> HTTPResponse:
        """Apply the routing rules and build the response."""
        now = self._clock() if self._clock else None

        if request.verb is Verb.GET and request.path == INDEX_PATH:
            return build_response(
                code=ResponseCode.OK,
                version=HTTPVersion.HTTP_1_1,
                body=OK_PAGE,
                server_name=self.server_name,
                now=now,
            )

        if request.is_well_formed:
            return build_response(
                code=ResponseCode.NOT_FOUND,
                version=HTTPVersion.HTTP_1_1,
                body=NOT_FOUND_PAGE,
                server_name=self.server_name,
                now=now,
            )

        return build_response(server_name=self.server_name, now=now)

    def __call__(self, request: HTTPRequest) -> HTTPResponse:
        return self.process(request)

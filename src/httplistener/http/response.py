"""
=============================================================================
HTTP RESPONSE MODEL
=============================================================================

Structured responses and their wire serialization.

=============================================================================
RESPONSE ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP RESPONSE STRUCTURE                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    HTTP/1.1 200 OK\r\n                      ← version + code        │
    │    Content-Type: text/html\r\n              ┐                        │
    │    Date: Mon, 19 Oct 2026 12:00:00 GMT\r\n  ├ options (any order)   │
    │    Server: httplistener/1.0\r\n             ┘                        │
    │    Content-Length: 37\r\n                   ← always last, computed │
    │    \r\n                                     ← header terminator     │
    │    <html><body><h1>OK</h1></body></html>    ← body                  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Content-Length is the number of BYTES in the UTF-8 encoded body, not the
number of characters. "<h1>é</h1>" is 10 characters but 11 bytes.

=============================================================================
BUILDING RESPONSES
=============================================================================

Responses are immutable. build_response() starts from a documented default
set and applies only the fields you pass:

    DEFAULTS
        code     = ResponseCode.BAD_REQUEST
        version  = HTTPVersion.HTTP_1_0
        options  = {Content-Type: text/html,
                    Date: <now, RFC 7231 format>,
                    Server: httplistener/1.0}
        body     = BAD_REQUEST_PAGE

    build_response()                                   → a valid 400
    build_response(code=ResponseCode.OK,
                   version=HTTPVersion.HTTP_1_1,
                   body=OK_PAGE)                       → a valid 200

Every response is well-formed even if the caller sets nothing.

=============================================================================
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Mapping, Optional

from .protocol import CRLF, HeaderOption, HTTPVersion
from .status_codes import ResponseCode


DEFAULT_SERVER_NAME = "httplistener/1.0"
DEFAULT_CONTENT_TYPE = "text/html"

OK_PAGE = "<html><body><h1>OK</h1></body></html>"
NOT_FOUND_PAGE = "<html><body><h1>404</h1></body></html>"
BAD_REQUEST_PAGE = "<html><body><h1>400</h1></body></html>"


@dataclass(frozen=True)
class HTTPResponse:
    """
    A response ready to be serialized.

    Use build_response() rather than calling this directly; it fills in
    the default options.

        Processor builds          to_bytes()            Connection sends
        HTTPResponse    ─────►   serializes    ─────►   raw bytes
    """

    code: ResponseCode = ResponseCode.BAD_REQUEST
    version: HTTPVersion = HTTPVersion.HTTP_1_0
    options: Mapping[HeaderOption, str] = field(default_factory=dict)
    body: str = BAD_REQUEST_PAGE

    def __post_init__(self):
        if not self.version.is_known:
            raise ValueError("Response version must be HTTP/1.0 or HTTP/1.1")
        # Read-only copy of the caller's mapping
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    @property
    def status_line(self) -> str:
        """e.g. ``"HTTP/1.1 404 Not Found"``."""
        return f"{self.version} {self.code.status_line}"

    @property
    def body_bytes(self) -> bytes:
        return self.body.encode("utf-8")

    @property
    def content_length(self) -> int:
        """Length of the body as sent on the wire."""
        return len(self.body_bytes)

    def get_option(self, option: HeaderOption) -> Optional[str]:
        return self.options.get(option)

    def with_changes(self, **changes) -> "HTTPResponse":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_bytes(self) -> bytes:
        """
        Serialize the response for socket.sendall().

        Format:
            <version> <code> <phrase>\\r\\n
            <Name>: <value>\\r\\n           (once per option)
            Content-Length: <n>\\r\\n
            \\r\\n
            <body>

        Returns:
            The complete response as bytes.
        """
        body = self.body_bytes

        lines = [self.status_line]
        for option, value in self.options.items():
            lines.append(f"{option.header_name}: {value}")
        lines.append(f"Content-Length: {len(body)}")

        # Empty line ends the header section
        head = CRLF.join(lines) + CRLF + CRLF
        return head.encode("utf-8") + body


def default_options(
    server_name: str = DEFAULT_SERVER_NAME,
    now: Optional[datetime] = None,
) -> dict:
    """
    The option set every response starts from.

    Args:
        server_name: Value for the Server header.
        now: Timestamp for the Date header (defaults to the current time).
    """
    if now is None:
        now = datetime.now(timezone.utc)
    return {
        HeaderOption.CONTENT_TYPE: DEFAULT_CONTENT_TYPE,
        HeaderOption.DATE: format_http_date(now),
        HeaderOption.SERVER: server_name,
    }


def build_response(
    code: ResponseCode = ResponseCode.BAD_REQUEST,
    version: HTTPVersion = HTTPVersion.HTTP_1_0,
    options: Optional[Mapping[HeaderOption, str]] = None,
    body: Optional[str] = None,
    server_name: str = DEFAULT_SERVER_NAME,
    now: Optional[datetime] = None,
) -> HTTPResponse:
    """
    Build a response from defaults plus sparse overrides.

    Args:
        code: Response code (default 400 Bad Request).
        version: Status line version (default HTTP/1.0).
        options: Options to override; merged over the default set, so
                 only the keys given are replaced.
        body: Response body (default: the 400 page).
        server_name: Default value for the Server option.
        now: Timestamp for the default Date option.

    Returns:
        A new, immutable HTTPResponse.
    """
    merged = default_options(server_name=server_name, now=now)
    if options:
        merged.update(options)

    return HTTPResponse(
        code=code,
        version=version,
        options=merged,
        body=BAD_REQUEST_PAGE if body is None else body,
    )


def format_http_date(dt: datetime) -> str:
    """
    Format a datetime as an HTTP-date (RFC 7231).

    Format: Day, DD Mon YYYY HH:MM:SS GMT
    Example: Mon, 19 Oct 2026 12:00:00 GMT

    Naive datetimes are assumed to be UTC; aware ones are converted.
    """
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)

    days = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

    return (
        f"{days[dt.weekday()]}, "
        f"{dt.day:02d} {months[dt.month - 1]} {dt.year} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} GMT"
    )

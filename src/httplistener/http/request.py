"""
=============================================================================
HTTP REQUEST MODEL
=============================================================================

Turns one framed message (the text before a blank line) into a typed
HTTPRequest. Only the REQUEST LINE is interpreted; header lines are kept
in ``raw`` but otherwise ignored.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     REQUEST LINE                                     │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    GET /index.html HTTP/1.1                                          │
    │    ─┬─ ─────┬───── ────┬───                                          │
    │     │       │          │                                             │
    │   token 0  token 1   token 2                                         │
    │   verb     path      version                                         │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PARSING NEVER FAILS
=============================================================================

Unlike a strict parser, parse_request() never raises. A request line that
cannot be understood produces a request whose fields are ``None``, and the
processor answers it with 400 Bad Request:

    "GET / HTTP/1.1"         → verb=GET,  path="/", version=HTTP/1.1
    "get /a http/1.0"        → verb=GET,  path="/a", version=HTTP/1.0
    "POST / HTTP/1.1"        → verb=None, path="/", version=HTTP/1.1
    "GET / HTTP/2"           → verb=GET,  path="/", version=None
    "FOO"                    → verb=None, path=None, version=None
    ""                       → verb=None, path=None, version=None

=============================================================================
"""

from dataclasses import dataclass
from typing import List, Optional

from .protocol import Verb, HTTPVersion


@dataclass(frozen=True)
class HTTPRequest:
    """
    A parsed request message.

    Attributes:
        verb: Recognized request method, or None.
        version: Recognized protocol version, or None.
        path: Request target exactly as sent, or None when the request
            line did not have three tokens.
        raw: The full message text, always preserved unmodified.
    """

    verb: Optional[Verb] = None
    version: Optional[HTTPVersion] = None
    path: Optional[str] = None
    raw: str = ""

    @property
    def is_well_formed(self) -> bool:
        """True when verb, path and version were all recognized."""
        return (
            self.verb is not None
            and self.version is not None
            and self.path is not None
        )

    @property
    def is_malformed(self) -> bool:
        return not self.is_well_formed

    @property
    def request_line(self) -> str:
        """First line of the raw message ("" for an empty message)."""
        return _first_line(self.raw)


def _first_line(message: str) -> str:
    # Lines end at "\n" or "\r\n" only; other line separators stay in the path
    line = message.split("\n", 1)[0]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def _tokens(line: str) -> List[str]:
    """Split a request line on runs of spaces and tabs."""
    return [token for token in line.replace("\t", " ").split(" ") if token]


def parse_request(message: str) -> HTTPRequest:
    """
    Parse a framed message into an HTTPRequest.

    Steps:
        1. Take the first line of the message
        2. Split it on spaces and tabs (the request-line separators)
        3. With exactly three tokens, classify verb and version; the path
           is taken verbatim
        4. With any other token count, leave every field as None

    Args:
        message: Message text produced by StreamFramer (no trailing
                 blank line).

    Returns:
        HTTPRequest; ``raw`` is always ``message``.
    """
    tokens = _tokens(_first_line(message))

    if len(tokens) != 3:
        return HTTPRequest(raw=message)

    verb = Verb.from_token(tokens[0])
    version = HTTPVersion.from_token(tokens[2])

    return HTTPRequest(
        verb=verb if verb.is_known else None,
        version=version if version.is_known else None,
        path=tokens[1],
        raw=message,
    )

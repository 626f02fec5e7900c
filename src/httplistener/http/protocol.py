"""
=============================================================================
PROTOCOL VOCABULARY
=============================================================================

The small, closed vocabulary the listener understands on the wire:

    VERBS       GET                       (everything else is UNKNOWN)
    VERSIONS    HTTP/1.0, HTTP/1.1        (everything else is UNKNOWN)
    OPTIONS     Content-Type, Date, Server

Lookups are TOTAL functions: every input token maps to exactly one member,
with an explicit UNKNOWN member standing in for "not recognized". Callers
branch on the member instead of on a missing value:

    Verb.from_token("get")       → Verb.GET
    Verb.from_token("POST")      → Verb.UNKNOWN
    HTTPVersion.from_token("x")  → HTTPVersion.UNKNOWN

=============================================================================
"""

from enum import Enum


# Blank line that ends every request message on the wire
MESSAGE_DELIMITER = "\r\n\r\n"

# Line terminator used when serializing responses
CRLF = "\r\n"


class Verb(Enum):
    """Request methods recognized on the request line."""

    GET = "GET"
    UNKNOWN = ""

    @classmethod
    def from_token(cls, token: str) -> "Verb":
        """Match ``token`` case-insensitively; unmatched tokens are UNKNOWN."""
        return _VERBS.get(token.upper(), cls.UNKNOWN)

    @property
    def is_known(self) -> bool:
        return self is not Verb.UNKNOWN


class HTTPVersion(Enum):
    """
    Protocol versions accepted on the request line and written on the
    status line.
    """

    HTTP_1_0 = "HTTP/1.0"
    HTTP_1_1 = "HTTP/1.1"
    UNKNOWN = ""

    @classmethod
    def from_token(cls, token: str) -> "HTTPVersion":
        """Match ``token`` case-insensitively; unmatched tokens are UNKNOWN."""
        return _VERSIONS.get(token.upper(), cls.UNKNOWN)

    @property
    def is_known(self) -> bool:
        return self is not HTTPVersion.UNKNOWN

    def __str__(self) -> str:
        return self.value


class HeaderOption(Enum):
    """
    Response header names the listener is allowed to set.

    Content-Length is not an option. It is always computed from the body
    at serialization time.
    """

    CONTENT_TYPE = "Content-Type"
    DATE = "Date"
    SERVER = "Server"

    @property
    def header_name(self) -> str:
        return self.value


_VERBS = {verb.value: verb for verb in Verb if verb is not Verb.UNKNOWN}
_VERSIONS = {
    version.value: version
    for version in HTTPVersion
    if version is not HTTPVersion.UNKNOWN
}

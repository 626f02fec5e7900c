"""
=============================================================================
HTTP RESPONSE CODES
=============================================================================

The listener only ever answers with three status codes:

    ┌────────┬──────────────────┬──────────────────────────────────────────┐
    │  Code  │  Phrase          │  When                                    │
    ├────────┼──────────────────┼──────────────────────────────────────────┤
    │  200   │  OK              │  GET / with a well-formed request line   │
    │  404   │  Not Found       │  Well-formed request line, unknown route │
    │  400   │  Bad Request     │  Anything else (malformed request line)  │
    └────────┴──────────────────┴──────────────────────────────────────────┘

The status line of a response is built from the numeric code and the
reason phrase:

    HTTP/1.1 404 Not Found
             ─┬─ ────┬────
              │      └── phrase
              └───────── code

=============================================================================
"""

from enum import IntEnum


class ResponseCode(IntEnum):
    """
    Status codes the listener can produce.

    IntEnum, so codes compare equal to their numeric value:

        >>> ResponseCode.OK == 200
        True
        >>> ResponseCode.NOT_FOUND.status_line
        '404 Not Found'
    """

    OK = 200
    BAD_REQUEST = 400
    NOT_FOUND = 404

    @property
    def phrase(self) -> str:
        """Reason phrase that follows the code on the status line."""
        return _PHRASES[self]

    @property
    def status_line(self) -> str:
        """Code and phrase, e.g. ``"200 OK"``."""
        return f"{int(self)} {self.phrase}"

    @property
    def is_error(self) -> bool:
        return self >= 400


_PHRASES = {
    ResponseCode.OK: "OK",
    ResponseCode.BAD_REQUEST: "Bad Request",
    ResponseCode.NOT_FOUND: "Not Found",
}

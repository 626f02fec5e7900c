"""
=============================================================================
STREAM FRAMER
=============================================================================

Splits the byte stream of one TCP connection into request messages.

=============================================================================
TCP IS A BYTE STREAM, NOT A MESSAGE PROTOCOL
=============================================================================

recv() returns whatever the kernel happens to have buffered. A single
request can arrive in several pieces, and several requests can arrive in
one piece:

    Client sends:   "GET / HTTP/1.1\r\n\r\nGET /a HTTP/1.1\r\n\r\n"

    Server might receive:
        recv() → "GET / HTTP/1.1\r\n\r"          (partial)
        recv() → "\nGET /a HTTP/1.1\r\n\r\n"      (rest of first + second)

Messages are delimited by a blank line ("\r\n\r\n"). The framer keeps the
unresolved tail (the CARRY) between calls and emits every message whose
delimiter has arrived.

=============================================================================
THE ALGORITHM
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                        push(chunk)                                   │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   text = carry + decode(chunk)                                       │
    │   pieces = text.split("\r\n\r\n")                                    │
    │                                                                      │
    │   one piece?   ──► carry = text           return []                  │
    │   N pieces?    ──► carry = pieces[-1]     return pieces[:-1]         │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

    carry = ""
    push(b"GET / HTTP/1.1\r\n\r")      → []                 carry = "GET / HTTP/1.1\r\n\r"
    push(b"\n\r\nFOO")                 → ["GET / HTTP/1.1"]  carry = "FOO"
    push(b"\r\n\r\n\r\n\r\n")          → ["FOO", ""]         carry = ""

Guarantees:
    - Messages come out in the order their delimiters arrived
    - No message is emitted twice
    - Every decoded character ends up in a message or in the carry
    - The split points of the input never change the output

=============================================================================
DECODING
=============================================================================

Chunks are decoded as UTF-8 with an INCREMENTAL decoder. If a multi-byte
character is cut in half by a chunk boundary, its first bytes stay inside
the decoder until the rest arrives:

    push(b"GET /caf\xc3")     → decoder holds b"\xc3"
    push(b"\xa9 HTTP/1.1...")  → "GET /café HTTP/1.1..."

Bytes that can never be valid UTF-8 raise EncodingError.

=============================================================================
"""

import codecs
from typing import List, Optional

from ..http.protocol import MESSAGE_DELIMITER


class FramingError(ValueError):
    """Base class for errors that make a connection's stream unusable."""


class EncodingError(FramingError):
    """
    Raised when a chunk is not valid UTF-8.

    The connection cannot be framed any further; the driver closes it
    without sending a response.
    """

    def __init__(self, message: str, chunk: bytes = b""):
        super().__init__(message)
        self.chunk = chunk


class RequestTooLarge(FramingError):
    """
    Raised when the unresolved tail outgrows ``max_buffer_size``.

    Messages completed by the same push are attached as ``messages`` so
    the driver can still answer them before closing.
    """

    def __init__(self, size: int, limit: int, messages: Optional[List[str]] = None):
        super().__init__(f"Buffered request too large: {size} bytes (limit {limit})")
        self.size = size
        self.limit = limit
        self.messages = messages or []


class StreamFramer:
    """
    Incremental message framer for one connection.

    Not thread-safe; each connection owns its own instance.

    Usage:
        framer = StreamFramer(max_buffer_size=64 * 1024)
        while True:
            chunk = conn.recv_chunk()
            if not chunk:
                break
            for message in framer.push(chunk):
                handle(message)
    """

    def __init__(
        self,
        max_buffer_size: Optional[int] = None,
        delimiter: str = MESSAGE_DELIMITER,
    ):
        """
        Args:
            max_buffer_size: Largest carry allowed, in UTF-8 bytes.
                             None means unbounded.
            delimiter: Message boundary marker.
        """
        if max_buffer_size is not None and max_buffer_size <= 0:
            raise ValueError("max_buffer_size must be > 0 or None")
        if not delimiter:
            raise ValueError("delimiter must not be empty")

        self.max_buffer_size = max_buffer_size
        self.delimiter = delimiter

        self._carry = ""
        self._carry_bytes = 0
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="strict")
        self._messages_framed = 0

    @property
    def carry(self) -> str:
        """Text received but not yet part of a complete message."""
        return self._carry

    @property
    def buffered_size(self) -> int:
        """Size of the carry in UTF-8 bytes."""
        return self._carry_bytes

    @property
    def has_partial(self) -> bool:
        """True if any data is waiting for a delimiter."""
        return bool(self._carry) or bool(self._decoder.getstate()[0])

    @property
    def messages_framed(self) -> int:
        """Number of messages emitted so far."""
        return self._messages_framed

    def push(self, chunk: bytes) -> List[str]:
        """
        Feed one chunk and collect the messages it completes.

        Args:
            chunk: Raw bytes as read from the socket.

        Returns:
            Complete messages in arrival order, without their delimiters.
            Empty when the chunk did not complete a message.

        Raises:
            EncodingError: If the chunk is not valid UTF-8.
            RequestTooLarge: If the carry exceeds max_buffer_size.
        """
        if not chunk:
            return []

        try:
            decoded = self._decoder.decode(chunk)
        except UnicodeDecodeError as e:
            raise EncodingError(f"Chunk is not valid UTF-8: {e}", chunk=chunk) from e

        text = self._carry + decoded
        pieces = text.split(self.delimiter)

        if len(pieces) == 1:
            self._carry = text
            self._carry_bytes += len(decoded.encode("utf-8"))
            messages: List[str] = []
        else:
            # Last piece replaces the carry; it is never appended to.
            # It follows the last delimiter, so it lies within this chunk.
            self._carry = pieces.pop()
            self._carry_bytes = len(self._carry.encode("utf-8"))
            messages = pieces

        self._messages_framed += len(messages)

        if self.max_buffer_size is not None and self._carry_bytes > self.max_buffer_size:
            raise RequestTooLarge(self._carry_bytes, self.max_buffer_size, messages)

        return messages

    def reset(self) -> str:
        """
        Discard buffered data and return the discarded carry.

        Called when the connection closes; a partial message left in the
        carry never completes.
        """
        discarded = self._carry
        self._carry = ""
        self._carry_bytes = 0
        self._decoder.reset()
        return discarded

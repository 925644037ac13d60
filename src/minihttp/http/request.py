"""
=============================================================================
HTTP REQUEST READER
=============================================================================

Reads one HTTP/1.1 request off a byte stream and turns it into an
HTTPRequest value. No HTTP library is involved: the request is consumed
line by line exactly as it arrives on the socket.

=============================================================================
WHAT WE READ
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP REQUEST STRUCTURE                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    POST /files/notes.txt HTTP/1.1\r\n     ← request line            │
    │    ─┬── ────────┬─────── ────────                                   │
    │   method      path       (ignored)                                  │
    │                                                                      │
    │    Host: localhost:4221\r\n               ← ignored                 │
    │    User-Agent: curl/8.4.0\r\n             ← user_agent              │
    │    Content-Length: 5\r\n                  ← content_length          │
    │    \r\n                                   ← end of headers          │
    │    hello                                  ← body (exactly 5 bytes)  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Only two headers matter to the routes this server has, so only two are
kept. They are matched by exact, case-sensitive prefix ("User-Agent: ",
"Content-Length: "); everything else is read and dropped.

=============================================================================
HOW MANY BYTES WE CONSUME
=============================================================================

The reader never reads past the request:

    1. Header lines are pulled with readline() until the empty line.
    2. If Content-Length was declared, read(n) pulls exactly n bytes.
    3. Without Content-Length there is no body and nothing more is read,
       whatever else the client may have sent.

=============================================================================
FAILURES
=============================================================================

    EOF or OSError before the empty line      → TruncatedStream
    EOF before Content-Length bytes arrived   → TruncatedStream
    request line with fewer than 2 tokens     → MalformedRequest
    Content-Length not made of ASCII digits   → MalformedRequest
    line or body that is not valid UTF-8      → MalformedRequest
    line longer than max_line_size            → MalformedRequest

=============================================================================
"""

from dataclasses import dataclass
from typing import BinaryIO, List, Optional

from .errors import MalformedRequest, TruncatedStream


@dataclass(frozen=True)
class HTTPRequest:
    """
    A parsed HTTP request.

    Built once per connection by RequestReader and never mutated.

    =========================================================================
    ATTRIBUTES
    =========================================================================

        method:         Request method token ("GET", "POST", ...). Unknown
                        tokens are kept as-is; routing decides what to do.

        path:           Raw request-target, e.g. "/echo/abc". Not
                        URL-decoded, query string not split off.

        user_agent:     Value of the User-Agent header, or None.

        content_length: Declared body length, or None if the header was
                        not sent.

        body:           Exactly content_length raw bytes, or None.

    Invariant: body is None exactly when content_length is None.
    =========================================================================
    """

    method: str
    path: str
    user_agent: Optional[str] = None
    content_length: Optional[int] = None
    body: Optional[bytes] = None

    def __post_init__(self):
        if (self.body is None) != (self.content_length is None):
            raise ValueError("body and content_length must be given together")
        if self.body is not None and len(self.body) != self.content_length:
            raise ValueError(
                f"body is {len(self.body)} bytes, "
                f"content_length says {self.content_length}"
            )

    @property
    def has_body(self) -> bool:
        return self.body is not None

    @property
    def text(self) -> Optional[str]:
        """The body decoded as UTF-8 (the reader has already validated it)."""
        if self.body is None:
            return None
        return self.body.decode("utf-8")


class RequestReader:
    """
    Reads a single HTTPRequest from a binary stream.

    The stream is anything with readline(limit) and read(n): a
    socket.makefile("rb") in the server, an io.BytesIO in tests.

    Usage:
        reader = RequestReader()
        request = reader.read(conn.reader)
    """

    USER_AGENT_PREFIX = "User-Agent: "
    CONTENT_LENGTH_PREFIX = "Content-Length: "

    def __init__(self, max_line_size: int = 65536):
        """
        Args:
            max_line_size: Longest request or header line accepted, in
                           bytes, terminator included.
        """
        self.max_line_size = max_line_size

    def read(self, stream: BinaryIO) -> HTTPRequest:
        """
        Read one request from the stream.

        Returns:
            The parsed HTTPRequest.

        Raises:
            MalformedRequest: The request cannot be parsed.
            TruncatedStream: The stream ended or failed mid-request.
        """
        lines = self._read_head(stream)

        # ---------------------------------------------------------------------
        # Request line: METHOD SP PATH [SP VERSION]
        # ---------------------------------------------------------------------
        tokens = lines[0].split(" ")
        if len(tokens) < 2:
            raise MalformedRequest(f"Invalid request line: {lines[0]!r}")
        method, path = tokens[0], tokens[1]

        # ---------------------------------------------------------------------
        # Headers: only two are kept, last occurrence wins
        # ---------------------------------------------------------------------
        user_agent = None
        content_length = None
        for line in lines[1:]:
            if line.startswith(self.USER_AGENT_PREFIX):
                user_agent = line[len(self.USER_AGENT_PREFIX):]
            elif line.startswith(self.CONTENT_LENGTH_PREFIX):
                content_length = self._parse_content_length(
                    line[len(self.CONTENT_LENGTH_PREFIX):]
                )

        body = None
        if content_length is not None:
            body = self._read_body(stream, content_length)

        return HTTPRequest(
            method=method,
            path=path,
            user_agent=user_agent,
            content_length=content_length,
            body=body,
        )

    def _read_head(self, stream: BinaryIO) -> List[str]:
        """Read the request line and header lines, up to the empty line."""
        lines: List[str] = []
        while True:
            line = self._read_line(stream)
            if not line:
                break
            lines.append(line)

        if not lines:
            # The very first line was empty: there is no request line at all
            raise MalformedRequest("Empty request line")
        return lines

    def _read_line(self, stream: BinaryIO) -> str:
        """
        Read one CRLF-terminated line and return it without the terminator.

        A bare LF is accepted too; a line with no terminator at all means
        the peer closed mid-line.
        """
        try:
            raw = stream.readline(self.max_line_size + 1)
        except OSError as e:
            raise TruncatedStream(f"Read failed: {e}") from e

        if len(raw) > self.max_line_size:
            raise MalformedRequest(f"Line exceeds {self.max_line_size} bytes")
        if not raw.endswith(b"\n"):
            raise TruncatedStream("Connection closed before end of headers")

        raw = raw[:-2] if raw.endswith(b"\r\n") else raw[:-1]
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedRequest(f"Header line is not valid UTF-8: {e}") from e

    def _parse_content_length(self, value: str) -> int:
        # isdigit() alone accepts things like "²"; int() alone accepts "+5"
        if not (value.isascii() and value.isdigit()):
            raise MalformedRequest(f"Invalid Content-Length: {value!r}")
        return int(value)

    def _read_body(self, stream: BinaryIO, length: int) -> bytes:
        """Read exactly `length` bytes, looping over short reads."""
        chunks: List[bytes] = []
        remaining = length
        while remaining > 0:
            try:
                chunk = stream.read(remaining)
            except OSError as e:
                raise TruncatedStream(f"Read failed: {e}") from e
            if not chunk:
                raise TruncatedStream(
                    f"Incomplete body: expected {length} bytes, "
                    f"got {length - remaining}"
                )
            chunks.append(chunk)
            remaining -= len(chunk)

        body = b"".join(chunks)
        try:
            body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedRequest(f"Body is not valid UTF-8: {e}") from e
        return body


# =============================================================================
# CONVENIENCE FUNCTION
# =============================================================================

def read_request(stream: BinaryIO, max_line_size: int = 65536) -> HTTPRequest:
    """
    Read one request from a stream in a single call.

    Args:
        stream: Binary stream positioned at the start of a request.
        max_line_size: Longest accepted request/header line in bytes.

    Returns:
        Parsed HTTPRequest.
    """
    return RequestReader(max_line_size=max_line_size).read(stream)

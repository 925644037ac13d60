"""
Unit tests for HTTP request reading.
"""

import io

import pytest

from minihttp.http.errors import MalformedRequest, TruncatedStream
from minihttp.http.request import HTTPRequest, RequestReader, read_request

from conftest import stream


class TestRequestReader:
    """Tests for RequestReader class."""

    def test_read_simple_get(self, sample_get_request: bytes):
        """Test reading a simple GET request."""
        request = RequestReader().read(stream(sample_get_request))

        assert request.method == "GET"
        assert request.path == "/echo/hello"
        assert request.user_agent == "test-client/1.0"
        assert request.content_length is None
        assert request.body is None

    def test_read_post_with_body(self, sample_post_request: bytes):
        """Test reading POST request with a body."""
        request = read_request(stream(sample_post_request))

        assert request.method == "POST"
        assert request.path == "/files/notes.txt"
        assert request.content_length == 13
        assert request.body == b"file contents"
        assert request.text == "file contents"

    def test_path_is_not_decoded(self):
        """Test that the request-target is kept verbatim."""
        raw = b"GET /echo/hello%20world?x=1 HTTP/1.1\r\n\r\n"
        request = read_request(stream(raw))

        assert request.path == "/echo/hello%20world?x=1"

    def test_unknown_method_preserved(self):
        """Test that unrecognized methods are not rejected at parse time."""
        raw = b"BREW /pot HTTP/1.1\r\n\r\n"
        request = read_request(stream(raw))

        assert request.method == "BREW"
        assert request.path == "/pot"

    def test_request_line_without_version(self):
        """Test that two tokens are enough for a request line."""
        request = read_request(stream(b"GET /\r\n\r\n"))

        assert request.method == "GET"
        assert request.path == "/"

    def test_double_space_gives_empty_path(self):
        """Test the degenerate split of a request line with two spaces."""
        request = read_request(stream(b"GET  / HTTP/1.1\r\n\r\n"))

        assert request.method == "GET"
        assert request.path == ""

    def test_invalid_request_line(self):
        """Test handling of a request line with one token."""
        with pytest.raises(MalformedRequest):
            read_request(stream(b"GET\r\nHost: test\r\n\r\n"))

    def test_empty_request_line(self):
        """Test a stream that starts with the blank line."""
        with pytest.raises(MalformedRequest):
            read_request(stream(b"\r\n"))

    def test_header_match_is_case_sensitive(self):
        """Test that only the exact header spelling is recognized."""
        raw = (
            b"POST /x HTTP/1.1\r\n"
            b"user-agent: lower\r\n"
            b"content-length: 5\r\n"
            b"\r\n"
            b"hello"
        )
        request = read_request(stream(raw))

        assert request.user_agent is None
        assert request.content_length is None
        assert request.body is None

    def test_last_header_wins(self):
        """Test that a repeated recognized header overwrites the earlier one."""
        raw = (
            b"GET /user-agent HTTP/1.1\r\n"
            b"User-Agent: first\r\n"
            b"User-Agent: second\r\n"
            b"\r\n"
        )
        request = read_request(stream(raw))

        assert request.user_agent == "second"

    def test_empty_user_agent_is_present(self):
        """Test that an empty header value still counts as present."""
        request = read_request(stream(b"GET / HTTP/1.1\r\nUser-Agent: \r\n\r\n"))

        assert request.user_agent == ""

    def test_other_headers_ignored(self):
        """Test that unrecognized headers don't affect the request."""
        raw = (
            b"GET / HTTP/1.1\r\n"
            b"Host: example.com\r\n"
            b"X-Custom: value\r\n"
            b"Not even a header\r\n"
            b"\r\n"
        )
        request = read_request(stream(raw))

        assert request == HTTPRequest(method="GET", path="/")

    def test_bare_lf_line_endings(self):
        """Test lenient handling of LF-only line endings."""
        raw = b"GET /echo/x HTTP/1.1\nUser-Agent: lf\n\n"
        request = read_request(stream(raw))

        assert request.path == "/echo/x"
        assert request.user_agent == "lf"

    def test_non_numeric_content_length(self):
        """Test that a non-numeric Content-Length is rejected."""
        raw = b"POST /files/a HTTP/1.1\r\nContent-Length: abc\r\n\r\n"

        with pytest.raises(MalformedRequest):
            read_request(stream(raw))

    @pytest.mark.parametrize("value", [b"-1", b"+5", b" 5", b"1.0", b""])
    def test_content_length_must_be_plain_digits(self, value: bytes):
        """Test that signs, spaces and decimals are all rejected."""
        raw = b"POST /files/a HTTP/1.1\r\nContent-Length: " + value + b"\r\n\r\n"

        with pytest.raises(MalformedRequest):
            read_request(stream(raw))

    def test_zero_content_length(self):
        """Test that Content-Length: 0 yields an empty, present body."""
        raw = b"POST /files/empty HTTP/1.1\r\nContent-Length: 0\r\n\r\n"
        request = read_request(stream(raw))

        assert request.content_length == 0
        assert request.body == b""
        assert request.has_body is True

    def test_truncated_body(self):
        """Test that a short body surfaces TruncatedStream, not a hang."""
        raw = b"POST /files/a HTTP/1.1\r\nContent-Length: 10\r\n\r\nabc"

        with pytest.raises(TruncatedStream) as exc_info:
            read_request(stream(raw))

        assert "expected 10 bytes" in str(exc_info.value)

    def test_truncated_headers(self):
        """Test a stream that closes before the blank line."""
        with pytest.raises(TruncatedStream):
            read_request(stream(b"GET / HTTP/1.1\r\nHost: x\r\n"))

    def test_partial_line_at_eof(self):
        """Test a stream that closes in the middle of a line."""
        with pytest.raises(TruncatedStream):
            read_request(stream(b"GET / HTTP/1.1\r\nHos"))

    def test_empty_stream(self):
        """Test a connection that sends nothing at all."""
        with pytest.raises(TruncatedStream):
            read_request(stream(b""))

    def test_read_error_is_truncated_stream(self):
        """Test that an OSError from the stream is reported as truncation."""

        class BrokenStream(io.RawIOBase):
            def readline(self, size=-1):
                raise ConnectionResetError("peer reset")

        with pytest.raises(TruncatedStream):
            read_request(BrokenStream())

    def test_non_utf8_body(self):
        """Test that a body that isn't UTF-8 is rejected."""
        raw = b"POST /files/a HTTP/1.1\r\nContent-Length: 2\r\n\r\n\xff\xfe"

        with pytest.raises(MalformedRequest):
            read_request(stream(raw))

    def test_non_utf8_header_line(self):
        """Test that a header line that isn't UTF-8 is rejected."""
        raw = b"GET / HTTP/1.1\r\nUser-Agent: \xff\r\n\r\n"

        with pytest.raises(MalformedRequest):
            read_request(stream(raw))

    def test_line_too_long(self):
        """Test that over-long lines are rejected."""
        reader = RequestReader(max_line_size=100)
        raw = b"GET / HTTP/1.1\r\nX-Large: " + b"A" * 200 + b"\r\n\r\n"

        with pytest.raises(MalformedRequest):
            reader.read(stream(raw))

    def test_does_not_read_past_body(self):
        """Test that exactly Content-Length bytes are consumed."""
        raw = (
            b"POST /files/a HTTP/1.1\r\n"
            b"Content-Length: 5\r\n"
            b"\r\n"
            b"helloEXTRA"
        )
        s = stream(raw)
        request = read_request(s)

        assert request.body == b"hello"
        assert s.read() == b"EXTRA"

    def test_no_body_consumed_without_content_length(self):
        """Test that nothing after the headers is read without Content-Length."""
        s = stream(b"GET / HTTP/1.1\r\n\r\nleftover")
        read_request(s)

        assert s.read() == b"leftover"


class TestHTTPRequest:
    """Tests for HTTPRequest dataclass."""

    def test_defaults(self):
        request = HTTPRequest(method="GET", path="/")

        assert request.user_agent is None
        assert request.content_length is None
        assert request.body is None
        assert request.has_body is False
        assert request.text is None

    def test_body_requires_content_length(self):
        """Test the body/content_length pairing invariant."""
        with pytest.raises(ValueError):
            HTTPRequest(method="POST", path="/", body=b"x")

        with pytest.raises(ValueError):
            HTTPRequest(method="POST", path="/", content_length=1)

    def test_body_length_must_match(self):
        with pytest.raises(ValueError):
            HTTPRequest(method="POST", path="/", content_length=3, body=b"x")

    def test_is_immutable(self):
        request = HTTPRequest(method="GET", path="/")

        with pytest.raises(AttributeError):
            request.path = "/other"

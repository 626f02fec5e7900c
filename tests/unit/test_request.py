"""
Unit tests for request parsing.
"""

import pytest

from httplistener.http.protocol import Verb, HTTPVersion
from httplistener.http.request import HTTPRequest, parse_request


class TestParseRequest:
    """Tests for parse_request()."""

    def test_parse_simple_get(self):
        """The happy path yields all three fields."""
        request = parse_request("GET / HTTP/1.1")

        assert request.verb is Verb.GET
        assert request.version is HTTPVersion.HTTP_1_1
        assert request.path == "/"
        assert request.is_well_formed

    def test_parse_ignores_header_lines(self):
        """Only the first line is interpreted."""
        message = "GET /index.html HTTP/1.0\r\nHost: localhost\r\nAccept: */*"
        request = parse_request(message)

        assert request.verb is Verb.GET
        assert request.version is HTTPVersion.HTTP_1_0
        assert request.path == "/index.html"

    def test_raw_is_preserved(self):
        message = "GET / HTTP/1.1\r\nX-Anything: at all"
        assert parse_request(message).raw == message

    def test_verb_and_version_case_insensitive(self):
        request = parse_request("get /a http/1.1")

        assert request.verb is Verb.GET
        assert request.version is HTTPVersion.HTTP_1_1

    def test_path_taken_verbatim(self):
        """The path token is not decoded or normalized."""
        request = parse_request("GET /a%20b/../c?x=1 HTTP/1.1")
        assert request.path == "/a%20b/../c?x=1"

    def test_extra_whitespace_between_tokens(self):
        request = parse_request("GET   /   HTTP/1.1")
        assert request.is_well_formed

    def test_unknown_verb(self):
        """Only GET is recognized; other verbs leave verb as None."""
        request = parse_request("POST / HTTP/1.1")

        assert request.verb is None
        assert request.path == "/"
        assert request.version is HTTPVersion.HTTP_1_1
        assert request.is_malformed

    def test_unknown_version(self):
        request = parse_request("GET / HTTP/2.0")

        assert request.verb is Verb.GET
        assert request.version is None
        assert request.is_malformed

    @pytest.mark.parametrize("message", [
        "FOO",
        "GET /",
        "GET / HTTP/1.1 extra",
        "   ",
    ])
    def test_wrong_token_count(self, message: str):
        """Anything other than three tokens leaves every field as None."""
        request = parse_request(message)

        assert request.verb is None
        assert request.version is None
        assert request.path is None
        assert request.raw == message

    def test_empty_message(self):
        """An empty message (from back-to-back delimiters) does not fail."""
        request = parse_request("")

        assert request == HTTPRequest(raw="")
        assert request.is_malformed
        assert request.request_line == ""

    @pytest.mark.parametrize("message,path", [
        ("GET /a\rb HTTP/1.1", "/a\rb"),
        ("GET /x\u2028y HTTP/1.1", "/x\u2028y"),
        ("GET /p\x0bq HTTP/1.1\r\nHost: x", "/p\x0bq"),
        ("GET /n HTTP/1.1\nHost: x", "/n"),
    ])
    def test_only_newline_ends_the_request_line(self, message: str, path: str):
        """Lone CR and Unicode separators are part of the line, not breaks."""
        request = parse_request(message)

        assert request.is_well_formed
        assert request.path == path

    def test_request_line_property(self):
        request = parse_request("GET / HTTP/1.1\r\nHost: x")
        assert request.request_line == "GET / HTTP/1.1"

    def test_request_is_immutable(self):
        request = parse_request("GET / HTTP/1.1")

        with pytest.raises(AttributeError):
            request.path = "/other"


class TestProtocolLookups:
    """Tests for the total token lookups."""

    @pytest.mark.parametrize("token", ["GET", "get", "Get"])
    def test_verb_known(self, token: str):
        assert Verb.from_token(token) is Verb.GET

    @pytest.mark.parametrize("token", ["POST", "HEAD", "", "GETT"])
    def test_verb_unknown(self, token: str):
        verb = Verb.from_token(token)

        assert verb is Verb.UNKNOWN
        assert not verb.is_known

    @pytest.mark.parametrize("token,expected", [
        ("HTTP/1.0", HTTPVersion.HTTP_1_0),
        ("HTTP/1.1", HTTPVersion.HTTP_1_1),
        ("http/1.1", HTTPVersion.HTTP_1_1),
    ])
    def test_version_known(self, token: str, expected: HTTPVersion):
        assert HTTPVersion.from_token(token) is expected

    @pytest.mark.parametrize("token", ["HTTP/2", "HTTP/0.9", "1.1", ""])
    def test_version_unknown(self, token: str):
        assert HTTPVersion.from_token(token) is HTTPVersion.UNKNOWN

    def test_version_str(self):
        assert str(HTTPVersion.HTTP_1_0) == "HTTP/1.0"

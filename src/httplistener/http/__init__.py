"""
HTTP protocol components.

- protocol: Verb, HTTPVersion and HeaderOption vocabulary
- status_codes: ResponseCode enum
- request: HTTPRequest model and parse_request()
- response: HTTPResponse model, build_response() and serialization
- processor: RequestProcessor routing rules
"""

from .protocol import Verb, HTTPVersion, HeaderOption, MESSAGE_DELIMITER
from .status_codes import ResponseCode
from .request import HTTPRequest, parse_request
from .response import (
    HTTPResponse,
    build_response,
    default_options,
    format_http_date,
    OK_PAGE,
    NOT_FOUND_PAGE,
    BAD_REQUEST_PAGE,
)
from .processor import RequestProcessor

__all__ = [
    "Verb",
    "HTTPVersion",
    "HeaderOption",
    "MESSAGE_DELIMITER",
    "ResponseCode",
    "HTTPRequest",
    "parse_request",
    "HTTPResponse",
    "build_response",
    "default_options",
    "format_http_date",
    "OK_PAGE",
    "NOT_FOUND_PAGE",
    "BAD_REQUEST_PAGE",
    "RequestProcessor",
]

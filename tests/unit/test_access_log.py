"""
Unit tests for the access log.
"""

import json
import logging

from minihttp.access_log import RequestLog, log_request
from minihttp.http.request import HTTPRequest
from minihttp.http.response import HTTPResponse, HTTPStatus, bad_request


def make_entry(**overrides) -> RequestLog:
    fields = dict(
        connection_id="abc123",
        method="GET",
        path="/echo/hi",
        client_ip="127.0.0.1",
        user_agent="curl/8.0",
        status_code=200,
        content_length=2,
        duration_ms=1.234,
        timestamp="17/Oct/2026:12:00:00 +0000",
    )
    fields.update(overrides)
    return RequestLog(**fields)


class TestRequestLog:

    def test_to_text(self):
        assert make_entry().to_text() == (
            '127.0.0.1 - - [17/Oct/2026:12:00:00 +0000] "GET /echo/hi" 200 2 1.23ms'
        )

    def test_to_dict_rounds_duration(self):
        data = make_entry().to_dict()

        assert data["duration_ms"] == 1.23
        assert data["status_code"] == 200
        assert data["user_agent"] == "curl/8.0"


class TestLogRequest:

    def test_text_format(self, caplog):
        request = HTTPRequest(method="GET", path="/echo/hi", user_agent="curl/8.0")
        response = HTTPResponse(body=b"hi")

        with caplog.at_level(logging.INFO, logger="minihttp.access"):
            entry = log_request("c1", "10.0.0.1", request, response, 0.5)

        assert entry.status_code == 200
        assert entry.content_length == 2
        assert '"GET /echo/hi" 200 2' in caplog.records[-1].getMessage()

    def test_json_format(self, caplog):
        request = HTTPRequest(method="GET", path="/", user_agent=None)
        response = HTTPResponse(status=HTTPStatus.OK)

        with caplog.at_level(logging.INFO, logger="minihttp.access"):
            log_request("c2", "10.0.0.1", request, response, 0.5, log_format="json")

        data = json.loads(caplog.records[-1].getMessage())
        assert data["path"] == "/"
        assert data["user_agent"] == "-"
        assert data["content_length"] == 0

    def test_unparsed_request(self, caplog):
        """A request that never parsed is logged with placeholders."""
        response = bad_request("Empty request line")

        with caplog.at_level(logging.INFO, logger="minihttp.access"):
            entry = log_request("c3", "10.0.0.1", None, response, 0.1)

        assert entry.method == "-"
        assert entry.path == "-"
        assert entry.status_code == 400

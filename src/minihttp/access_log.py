"""
=============================================================================
ACCESS LOG
=============================================================================

One log line per answered request, on the "minihttp.access" logger, in
an Apache-like text format:

    127.0.0.1 - - [17/Oct/2026:12:00:00 +0000] "GET /echo/abc" 200 3 0.41ms

Keep it separate from application logs by configuring that logger:

    logging.getLogger("minihttp.access").addHandler(file_handler)

=============================================================================
"""

import json
import logging
import time
from dataclasses import dataclass
from typing import Optional

from .http.request import HTTPRequest
from .http.response import HTTPResponse

logger = logging.getLogger("minihttp.access")


@dataclass
class RequestLog:
    """
    Structured log entry for a request.

    Fields:
        connection_id:  Connection.id, to correlate with other log lines
        method:         Request method, "-" if the request never parsed
        path:           Request path, "-" if the request never parsed
        client_ip:      Client's IP address
        user_agent:     User-Agent header or "-"
        status_code:    Response status
        content_length: Response body size in bytes
        duration_ms:    Time from accept to response sent
        timestamp:      When the response was sent
    """

    connection_id: str
    method: str
    path: str
    client_ip: str
    user_agent: str
    status_code: int
    content_length: int
    duration_ms: float
    timestamp: str

    def to_dict(self) -> dict:
        return {
            "connection_id": self.connection_id,
            "method": self.method,
            "path": self.path,
            "client_ip": self.client_ip,
            "user_agent": self.user_agent,
            "status_code": self.status_code,
            "content_length": self.content_length,
            "duration_ms": round(self.duration_ms, 2),
            "timestamp": self.timestamp,
        }

    def to_text(self) -> str:
        return (
            f'{self.client_ip} - - [{self.timestamp}] '
            f'"{self.method} {self.path}" {self.status_code} '
            f'{self.content_length} {self.duration_ms:.2f}ms'
        )


def log_request(
    connection_id: str,
    client_ip: str,
    request: Optional[HTTPRequest],
    response: HTTPResponse,
    duration_ms: float,
    log_format: str = "text",
) -> RequestLog:
    """
    Build and emit the access log entry for one response.

    `request` is None when the request failed to parse and the response
    is the resulting error. log_format is "text" (Apache-like) or "json"
    (one object per line, for log aggregators).
    """
    entry = RequestLog(
        connection_id=connection_id,
        method=request.method if request else "-",
        path=request.path if request else "-",
        client_ip=client_ip,
        user_agent=(request.user_agent if request else None) or "-",
        status_code=int(response.status),
        content_length=response.content_length,
        duration_ms=duration_ms,
        timestamp=time.strftime("%d/%b/%Y:%H:%M:%S %z"),
    )
    if log_format == "json":
        logger.info(json.dumps(entry.to_dict()))
    else:
        logger.info(entry.to_text())
    return entry

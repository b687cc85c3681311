"""
Mock Device Server - Request Logging Middleware
===============================================

What:  One access log line for every HTTP request.
How:   Times the downstream call and logs method, path, status, duration,
       the device the path addresses and the client address. The timestamp
       and request ID come from the logging formatter.
When:  After RequestIDMiddleware, around the JSON body check and the router.

Example line:
    2026-10-19T08:00:00 [INFO] mock_device_server.access [3f9c2a1b]: POST /devices/pos/payments 200 1.3ms pos from 127.0.0.1

Request bodies are not logged here; the response generators log the parsed
body and the synthesized answer for mutating operations themselves, under
the same request ID.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from mock_device_server.middleware.request_id import NO_REQUEST, request_id_var

logger = logging.getLogger("mock_device_server.access")

_DEVICE_PREFIXES = (
    ("/devices/cash-register", "cash-register"),
    ("/devices/pos", "pos"),
)


def device_of(path: str) -> str:
    """Which simulated device a path addresses; ``-`` for everything else."""
    for prefix, device in _DEVICE_PREFIXES:
        if path == prefix or path.startswith(prefix + "/"):
            return device
    return NO_REQUEST


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status and duration of each request.

    Log level follows the status code:
        5xx → ERROR
        4xx → WARNING (validation failures, malformed JSON, unknown routes)
        2xx/3xx → INFO
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path
        device = device_of(path)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms %s from %s",
            method,
            path,
            status,
            duration_ms,
            device,
            client_ip,
            extra={
                "request_id": request_id_var.get(""),
                "device": device,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response

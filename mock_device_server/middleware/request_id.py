"""
Mock Device Server - Request ID Middleware
==========================================

What:  Assigns a short ID to each incoming request and returns it in the
       X-Request-ID response header.
How:   Reuses the client's X-Request-ID when present, otherwise generates one;
       stores it in a ContextVar. RequestIDLogFilter stamps it on every log
       record, so the access line and the generators' request/response lines
       of one call share the same ID.
When:  Right after the CORS middleware, before logging.

A test harness that sends its own X-Request-ID can grep the server log for
exactly the calls one test case made:

    ... [INFO] mock_device_server.services.pos [bench-7]: Payment request: {"amount": 250}
    ... [INFO] mock_device_server.services.pos [bench-7]: Payment response: {...}
    ... [INFO] mock_device_server.access [bench-7]: POST /devices/pos/payments 200 1.3ms pos from 127.0.0.1
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID.
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Shown for records logged outside a request (startup, uvicorn itself).
NO_REQUEST = "-"


class RequestIDLogFilter(logging.Filter):
    """Adds ``request_id`` to each record; an explicit ``extra`` wins."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = request_id_var.get("") or NO_REQUEST
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that tags each request with a correlation ID."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        request_id_var.set(rid)

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response

"""
Mock Device Server - CORS Headers Middleware
============================================

What:  Attaches permissive CORS headers to every response and answers any
       OPTIONS request with an empty 200.
Who:   Browser-based clients under test, served from arbitrary origins.
When:  Outermost middleware; runs before request ID, logging and routing.

Why not Starlette's CORSMiddleware:
    CORSMiddleware only decorates requests that carry an Origin header and
    only treats OPTIONS as a preflight when Access-Control-Request-Method is
    present. Device clients expect the headers unconditionally and expect any
    OPTIONS to succeed, so the headers are written here directly.
"""

from typing import Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from mock_device_server.config import settings

ALLOWED_METHODS = "GET, POST, PUT, PATCH, DELETE, OPTIONS"
ALLOWED_HEADERS = "Origin, X-Requested-With, Content-Type, Accept, Authorization"


def cors_headers() -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        "Access-Control-Allow-Credentials": "true",
    }


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """
    Writes the CORS header set on every response.

    Behavior:
        OPTIONS (any path): 200, no body, headers + Access-Control-Max-Age.
                            The request never reaches the router.
        Anything else:      passed through; headers added to the response,
                            including 400 and 404 answers.
    """

    def __init__(self, app: ASGIApp, max_age: Optional[int] = None):
        super().__init__(app)
        self.max_age = settings.cors_max_age if max_age is None else max_age

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "OPTIONS":
            headers = cors_headers()
            headers["Access-Control-Max-Age"] = str(self.max_age)
            return Response(status_code=200, headers=headers)

        response = await call_next(request)
        for name, value in cors_headers().items():
            response.headers[name] = value
        return response

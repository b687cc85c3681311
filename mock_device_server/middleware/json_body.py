"""
Mock Device Server - JSON Body Middleware
=========================================

What:  Rejects requests whose JSON body does not parse, on every path.
How:   Any non-empty body sent as application/json is parsed strictly before
       routing: NaN/Infinity literals and bare top-level scalars fail, and the
       request is answered 400 without reaching a route or the 404 fallback.
When:  Innermost middleware, so the access log and CORS still see the 400.

Routes that take a body read it again downstream; Starlette replays the
bytes this middleware consumed.
"""

import json
import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from mock_device_server.exceptions import MALFORMED_JSON_MESSAGE

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not valid JSON")


def is_json_request(request: Request) -> bool:
    media_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    return media_type == "application/json"


def parse_strict(raw: bytes):
    """
    Parse a request body the way a strict JSON body parser does.

    Only an object or an array is accepted at the top level.
    Raises ValueError on anything else.
    """
    document = json.loads(raw, parse_constant=_reject_constant)
    if not isinstance(document, (dict, list)):
        raise ValueError("top-level JSON value must be an object or an array")
    return document


class JSONBodyMiddleware(BaseHTTPMiddleware):
    """Answers 400 for a malformed application/json body before routing."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if is_json_request(request):
            raw = await request.body()
            if raw:
                try:
                    parse_strict(raw)
                except ValueError as exc:
                    logger.warning(
                        "Malformed JSON body on %s %s: %s",
                        request.method,
                        request.url.path,
                        exc,
                    )
                    return JSONResponse(
                        status_code=400,
                        content={"success": False, "message": MALFORMED_JSON_MESSAGE},
                    )

        return await call_next(request)

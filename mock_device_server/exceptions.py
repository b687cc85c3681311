"""
Mock Device Server - Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the two user-visible failure kinds.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return the JSON bodies device clients expect.
Who:   Raised by response generators and the fallback handler.

Exception Hierarchy:
    DeviceServerError (base)
    ├── ValidationError      → 400 Bad Request
    └── RouteNotFoundError   → 404 Not Found (lists available routes)

Both are terminal for the request: same input, same failure.
"""

from typing import Any, Dict, Optional

MALFORMED_JSON_MESSAGE = "Некорректный JSON в теле запроса"


class DeviceServerError(Exception):
    """
    Base exception for all mock device server errors.

    Attributes:
        message:  User-facing error description (returned in the API response)
        context:  Additional debug info (logged, never returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(DeviceServerError):
    """
    Raised when a device operation request fails field validation.

    HTTP:    400 Bad Request

    Body shape:
        {"success": false, "message": "<описание нарушения>"}

    The work-shift toggle answers with ``{"message": ...}`` only; generators
    request that shape with ``include_success=False``.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        include_success: bool = True,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field
        self.include_success = include_success

    def to_body(self) -> Dict[str, Any]:
        if self.include_success:
            return {"success": False, "message": self.message}
        return {"message": self.message}


class RouteNotFoundError(DeviceServerError):
    """
    Raised when no route matches the request method and path.

    HTTP:    404 Not Found

    A known path requested with the wrong method lands here too; the stub
    does not distinguish 404 from 405.
    """

    def __init__(
        self,
        method: str,
        path: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["method"] = method
        ctx["path"] = path
        super().__init__(message=f"Route {method} {path} not found", context=ctx)
        self.method = method
        self.path = path

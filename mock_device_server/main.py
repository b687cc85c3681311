"""
Mock Device Server - FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn mock_device_server.main:app) or run().
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌────────┐ ┌──────────┐ ┌───────────┐ ┌─────────┐  │
    │  │  CORS  │→│ Req ID   │→│ Logging   │→│ JSON    │  │
    │  └────────┘ └──────────┘ └───────────┘ └─────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────┐ ┌───────────────┐ ┌─────────────┐   │
    │  │ /devices   │ │ cash-register │ │ pos         │   │
    │  └────────────┘ └───────────────┘ └─────────────┘   │
    │  ┌────────────┐ ┌───────────────┐                   │
    │  │ /healthz   │ │ / (HTML)      │                   │
    │  └────────────┘ └───────────────┘                   │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ ValidationError→400 │ unmatched route→404    │   │
    │  │ malformed JSON→400  │ anything else→500      │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mock_device_server import __version__
from mock_device_server.config import settings
from mock_device_server.exceptions import MALFORMED_JSON_MESSAGE, RouteNotFoundError, ValidationError
from mock_device_server.middleware.cors import CORSHeadersMiddleware
from mock_device_server.middleware.json_body import JSONBodyMiddleware
from mock_device_server.middleware.logging import RequestLoggingMiddleware
from mock_device_server.middleware.request_id import RequestIDLogFilter, RequestIDMiddleware
from mock_device_server.routes import AVAILABLE_ROUTES, cash_register, devices, health, index, pos
from mock_device_server.schemas.devices import RouteNotFoundResponse

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s

    The request ID comes from RequestIDLogFilter on the handler, so every line
    logged while serving a request carries it; lines outside one show "-".

    uvicorn's own access log is lowered to WARNING; RequestLoggingMiddleware
    writes the access line instead.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Mock Device Server %s starting up...", __version__)
    for route in AVAILABLE_ROUTES:
        logger.info("  %s", route)
    logger.info("Server ready at http://%s:%d", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _route_not_found(exc: RouteNotFoundError) -> JSONResponse:
    body = RouteNotFoundResponse(message=exc.message, available_routes=list(AVAILABLE_ROUTES))
    return JSONResponse(status_code=404, content=body.model_dump(by_alias=True))


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError         → 400 {success: false, message} (or {message})
        RequestValidationError  → 400, body was not parseable JSON
        HTTPException 404/405   → RouteNotFoundError, 404 with availableRoutes
        HTTPException (other)   → FastAPI default
        Exception (fallback)    → 500, stack trace logged server-side only
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(status_code=400, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def handle_malformed_body(request: Request, exc: RequestValidationError):
        logger.warning("Unparseable request body: %s", exc.errors())
        if any(error.get("type") == "json_invalid" for error in exc.errors()):
            message = MALFORMED_JSON_MESSAGE
        else:
            message = "Некорректное тело запроса"
        return JSONResponse(status_code=400, content={"success": False, "message": message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        # Starlette raises 405 for a known path with the wrong method; the
        # device API treats both as an unknown route.
        if exc.status_code in (404, 405):
            target = request.url.path
            if request.url.query:
                target = f"{target}?{request.url.query}"
            return _route_not_found(RouteNotFoundError(request.method, target))
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "Unexpected error: %s",
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={"success": False, "message": "Внутренняя ошибка сервера"},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Mock Device Server",
        description=(
            "Stub HTTP API simulating a fiscal cash register and a POS terminal "
            "for integration testing. Responses are synthetic and nothing is persisted."
        ),
        version=__version__,
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # added JSON body → Logging → RequestID → CORS,
    # runs CORS → RequestID → Logging → JSON body.
    app.add_middleware(JSONBodyMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(CORSHeadersMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(index.router)
    app.include_router(devices.router)
    app.include_router(cash_register.router)
    app.include_router(pos.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured host/port."""
    uvicorn.run(
        "mock_device_server.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )

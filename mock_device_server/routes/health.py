"""
Mock Device Server - Health Check Route
=======================================

What:  GET /healthz for container probes and test-bench readiness checks.
How:   The stub has no dependencies, so "ok" only means the process is up
       and routing. The endpoint list lets a harness verify it is talking
       to the server it expects.
"""

import time

from fastapi import APIRouter

from mock_device_server import __version__
from mock_device_server.routes import AVAILABLE_ROUTES
from mock_device_server.schemas.devices import HealthResponse
from mock_device_server.services.synth import synthesizer

router = APIRouter(tags=["Health"])

# Set once when the module loads; used for uptime reporting.
_start_time = time.time()


@router.get(
    "/healthz",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="ok",
        timestamp=synthesizer.timestamp(),
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 2),
        endpoints=list(AVAILABLE_ROUTES),
    )

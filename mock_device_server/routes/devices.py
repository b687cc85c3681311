"""
Mock Device Server - Device List Route
======================================

What:  GET /devices, the discovery call clients make first.
"""

from typing import List

from fastapi import APIRouter

from mock_device_server.routes import ROUTE_NOT_FOUND
from mock_device_server.schemas.devices import Device
from mock_device_server.services.devices import device_service

router = APIRouter(tags=["Devices"], responses=ROUTE_NOT_FOUND)


@router.get(
    "/devices",
    response_model=List[Device],
    summary="List managed devices",
    description="Always one cash register and one POS terminal, both with an open shift.",
)
async def list_devices() -> List[Device]:
    return device_service.list_devices()

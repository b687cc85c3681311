"""
Mock Device Server - Device Fleet
=================================

What:  The static list of devices the stub pretends to manage.
When:  GET /devices. The list never changes; no other endpoint mutates it.
"""

import logging
from typing import List

from mock_device_server.schemas.devices import Device, DeviceDetails

logger = logging.getLogger(__name__)

FLEET = ("cash-register", "pos-terminal")


class DeviceService:
    """Answers device discovery requests."""

    def list_devices(self) -> List[Device]:
        """Both devices, both with an open work shift."""
        logger.info("Device list requested")
        return [
            Device(type=kind, details=DeviceDetails(is_work_shift_active=True))
            for kind in FLEET
        ]


device_service = DeviceService()

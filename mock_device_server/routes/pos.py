"""
Mock Device Server - POS Terminal Routes
========================================

What:  Endpoints under /devices/pos.
"""

from typing import Any

from fastapi import APIRouter, Body

from mock_device_server.routes import ROUTE_NOT_FOUND
from mock_device_server.schemas.devices import (
    ErrorResponse,
    PaymentResponse,
    PosXReport,
    PosZReport,
    RefundResponse,
)
from mock_device_server.services.pos import pos_service

router = APIRouter(prefix="/devices/pos", tags=["POS terminal"], responses=ROUTE_NOT_FOUND)

_BAD_REQUEST = {400: {"description": "Field validation failed", "model": ErrorResponse}}


@router.post(
    "/payments",
    response_model=PaymentResponse,
    responses=_BAD_REQUEST,
    summary="Card payment",
    description="Body: {\"amount\": number > 0}. The amount is echoed and printed on the slip.",
)
async def process_payment(payload: Any = Body(default=None)) -> PaymentResponse:
    return pos_service.process_payment(payload)


@router.post(
    "/refunds",
    response_model=RefundResponse,
    responses=_BAD_REQUEST,
    summary="Refund a payment",
    description="Body: {\"amount\": number > 0, \"transactionNumber\": ...}.",
)
async def process_refund(payload: Any = Body(default=None)) -> RefundResponse:
    return pos_service.process_refund(payload)


@router.post(
    "/reports/z",
    response_model=PosZReport,
    summary="POS Z-report",
    description="Shift-closing summary with random totals. Nothing is reset.",
)
async def pos_z_report() -> PosZReport:
    return pos_service.z_report()


@router.post(
    "/reports/x",
    response_model=PosXReport,
    summary="POS X-report",
    description="Interim summary with a breakdown by payment method.",
)
async def pos_x_report() -> PosXReport:
    return pos_service.x_report()

"""
Mock Device Server - Cash Register Routes
=========================================

What:  Endpoints under /devices/cash-register.
How:   The request body is taken as raw JSON (``Any``) so that the service,
       not FastAPI, decides what a bad body looks like and answers with the
       device's own 400 message. Malformed JSON never gets this far.

Error responses (handled by global exception handlers):
    HTTP 400: ValidationError raised by CashRegisterService
"""

from typing import Any

from fastapi import APIRouter, Body

from mock_device_server.routes import ROUTE_NOT_FOUND
from mock_device_server.schemas.devices import (
    CashRegisterXReport,
    ErrorResponse,
    FiscalReceiptResponse,
    NonFiscalDocumentResponse,
    ShiftTotalsResponse,
    WorkShiftResponse,
)
from mock_device_server.services.cash_register import cash_register_service

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(
    prefix="/devices/cash-register", tags=["Cash register"], responses=ROUTE_NOT_FOUND
)

_BAD_REQUEST = {400: {"description": "Field validation failed", "model": ErrorResponse}}


@router.put(
    "/work-shift",
    response_model=WorkShiftResponse,
    responses=_BAD_REQUEST,
    summary="Open or close the work shift",
    description=(
        "Body: {\"isActive\": bool}. Only the presence of isActive is checked; "
        "the 400 body for a missing key is {\"message\": ...} without success."
    ),
)
async def toggle_work_shift(payload: Any = Body(default=None)) -> WorkShiftResponse:
    return cash_register_service.toggle_work_shift(payload)


@router.post(
    "/receipts",
    response_model=FiscalReceiptResponse,
    responses=_BAD_REQUEST,
    summary="Print a fiscal receipt",
    description=(
        "Body: {\"items\": [...], \"payment\": {\"sum\": number}, \"type\": string}. "
        "Returns a fiscal document with synthetic fiscal identifiers."
    ),
)
async def create_receipt(payload: Any = Body(default=None)) -> FiscalReceiptResponse:
    return cash_register_service.create_receipt(payload)


@router.post(
    "/non-fiscals",
    response_model=NonFiscalDocumentResponse,
    responses=_BAD_REQUEST,
    summary="Print a non-fiscal document",
    description="Body: a non-empty JSON array of printable items.",
)
async def print_non_fiscal(payload: Any = Body(default=None)) -> NonFiscalDocumentResponse:
    return cash_register_service.print_non_fiscal(payload)


@router.post(
    "/reports/x",
    response_model=CashRegisterXReport,
    summary="Cash register X-report",
    description="Interim shift summary with random totals. The body is ignored.",
)
async def cash_register_x_report() -> CashRegisterXReport:
    return cash_register_service.x_report()


@router.get(
    "/shift-totals",
    response_model=ShiftTotalsResponse,
    summary="Current shift totals",
    description="Static income and refund totals split by cash and electronic payment.",
)
async def shift_totals() -> ShiftTotalsResponse:
    return cash_register_service.shift_totals()

"""
Mock Device Server - Pydantic Response Schemas
==============================================

What:  Pydantic models defining the JSON shapes the stub returns.
How:   Python attribute names are snake_case; the alias generator renders
       them camelCase on the wire (``shift_id`` → ``shiftId``). FastAPI
       serializes by alias, so clients only ever see the camelCase form.
Who:   Built by the response generators, returned by the route handlers.

Request bodies are intentionally NOT modelled: the generators must inspect
raw JSON (arrays, missing keys, zero amounts) and answer with their own
Russian-language 400 messages instead of FastAPI's 422.
"""

from typing import Any, List, Literal, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

# Echoed amounts keep the client's JSON type: 250 stays 250, 100.5 stays 100.5.
Amount = Union[int, float]


class CamelModel(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}


# ══════════════════════════════════════════════════════════════════════════
# Device list
# ══════════════════════════════════════════════════════════════════════════


class DeviceDetails(CamelModel):
    is_work_shift_active: bool = Field(description="Whether the device has an open work shift")


class Device(CamelModel):
    type: Literal["cash-register", "pos-terminal"] = Field(description="Device kind")
    details: DeviceDetails


# ══════════════════════════════════════════════════════════════════════════
# Cash register
# ══════════════════════════════════════════════════════════════════════════


class WorkShiftResponse(CamelModel):
    """
    Returned by PUT /devices/cash-register/work-shift.

    ``shift_id`` is drawn fresh on every call; two "open" calls in a row get
    unrelated IDs.
    """
    success: bool = True
    message: str = Field(description="Смена открыта / Смена закрыта")
    timestamp: str = Field(description="UTC ISO-8601 with milliseconds")
    shift_id: int = Field(ge=0, lt=10000)


class FiscalReceiptResponse(CamelModel):
    """
    Fiscal-document-shaped answer to POST /devices/cash-register/receipts.

    Randomized: document number/sign, receipt number, fiscal mark/sign.
    Fixed: FN number, FNS URL, registration number, shift number.
    Echoed: ``total`` (payment.sum) and ``receipt_type`` (type).
    """
    success: bool = True
    fiscal_document_date_time: str
    fiscal_document_number: int
    fiscal_document_sign: str
    fiscal_receipt_number: int
    fn_number: str
    fns_url: str
    registration_number: str
    shift_number: int
    total: Amount
    receipt_type: Any
    fiscal_mark: str
    fiscal_sign: str
    processed_at: str


class NonFiscalDocumentResponse(CamelModel):
    success: bool = True
    message: str
    printed_at: str
    items_count: int
    document_type: str = "non-fiscal"
    device_id: str


class ShiftInfo(CamelModel):
    is_open: bool
    opened_at: str
    shift_number: int


class CashRegisterTotals(CamelModel):
    cash: float
    electronic: float
    total: float


class CashRegisterXReport(CamelModel):
    success: bool = True
    report_type: Literal["X"] = "X"
    device_type: Literal["CASH_REGISTER"] = "CASH_REGISTER"
    generated_at: str
    shift_info: ShiftInfo
    totals: CashRegisterTotals


class MoneySplit(CamelModel):
    cash: Amount
    electronically: Amount


class ShiftTotalsResponse(CamelModel):
    incomes: MoneySplit
    refunds: MoneySplit


# ══════════════════════════════════════════════════════════════════════════
# POS terminal
# ══════════════════════════════════════════════════════════════════════════


class PaymentResponse(CamelModel):
    amount: Amount
    slip: str = Field(description="Printed slip text, newline separated")
    transaction_number: str
    status: str = "COMPLETED"
    processed_at: str
    auth_code: str
    rrn: str = Field(description="Retrieval reference number")


class RefundResponse(CamelModel):
    success: bool = True
    refund_id: str = Field(description="REF_<epoch ms>_<random suffix>")
    transaction_number: Any
    amount: Amount
    status: str = "COMPLETED"
    processed_at: str
    device_id: str
    operator: str
    slip: str


class PosZTotals(CamelModel):
    sales: float
    refunds: float
    transactions: int


class PosZReport(CamelModel):
    success: bool = True
    report_type: Literal["Z"] = "Z"
    device_type: Literal["POS"] = "POS"
    generated_at: str
    totals: PosZTotals
    shift_number: int
    shift_closed_at: str


class PosXSummary(CamelModel):
    total_sales: float
    total_refunds: float
    net_sales: float
    transaction_count: int
    average_transaction: float


class PaymentMethodTotal(CamelModel):
    type: Literal["CASH", "CARD", "MOBILE"]
    amount: float


class PosXReport(CamelModel):
    success: bool = True
    report_type: Literal["X"] = "X"
    device_type: Literal["POS"] = "POS"
    generated_at: str
    summary: PosXSummary
    payment_methods: List[PaymentMethodTotal]


# ══════════════════════════════════════════════════════════════════════════
# Service & error responses
# ══════════════════════════════════════════════════════════════════════════


class HealthResponse(CamelModel):
    status: str = "ok"
    timestamp: str
    version: str
    uptime_seconds: float
    endpoints: List[str] = Field(description="Documented endpoints, 'METHOD /path'")


class ErrorResponse(CamelModel):
    """
    400 body for validation failures.

    The work-shift toggle omits ``success``; the OpenAPI document still
    lists this model for it.
    """
    success: bool = False
    message: str


class RouteNotFoundResponse(CamelModel):
    """404 body for any method+path the router does not know."""
    success: bool = False
    message: str = Field(description="Route <METHOD> <path[?query]> not found")
    available_routes: List[str] = Field(description="Documented endpoints, 'METHOD /path'")

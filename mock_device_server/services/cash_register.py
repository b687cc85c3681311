"""
Mock Device Server - Cash Register Generators
=============================================

What:  Response generators for the fiscal cash register.
How:   Each method validates the raw JSON body, then assembles a response
       from echoed input, fixed fiscal constants and values drawn from the
       Synthesizer.
Who:   Called by routes/cash_register.py.

Operations:
    toggle_work_shift()  PUT  /devices/cash-register/work-shift
    create_receipt()     POST /devices/cash-register/receipts
    print_non_fiscal()   POST /devices/cash-register/non-fiscals
    x_report()           POST /devices/cash-register/reports/x
    shift_totals()       GET  /devices/cash-register/shift-totals

No shift state is kept: opening a shift twice succeeds twice, and the
X-report always claims an open shift.
"""

import logging
from datetime import timedelta
from typing import Any, Optional

from mock_device_server.config import Settings, settings as default_settings
from mock_device_server.exceptions import ValidationError
from mock_device_server.schemas.devices import (
    CashRegisterTotals,
    CashRegisterXReport,
    FiscalReceiptResponse,
    MoneySplit,
    NonFiscalDocumentResponse,
    ShiftInfo,
    ShiftTotalsResponse,
    WorkShiftResponse,
)
from mock_device_server.services.payload import (
    as_mapping,
    for_log,
    is_non_empty_list,
    is_positive_amount,
    is_truthy,
    nested,
)
from mock_device_server.services.synth import Synthesizer, synthesizer

logger = logging.getLogger(__name__)

# X-report pretends the shift was opened this long ago.
SHIFT_AGE = timedelta(hours=8)


class CashRegisterService:
    """
    Stateless generator set for the cash register.

    Error Handling Strategy:
        Validation failures raise ValidationError with the Russian message
        the device firmware would show; main.py turns it into a 400.
    """

    def __init__(
        self,
        synth: Optional[Synthesizer] = None,
        config: Optional[Settings] = None,
    ):
        self.synth = synth or synthesizer
        self.config = config or default_settings

    def toggle_work_shift(self, payload: Any) -> WorkShiftResponse:
        """
        Open or close the work shift.

        Only the presence of ``isActive`` is checked: ``false`` or ``null``
        close the shift, any truthy value opens it. The 400 body for a
        missing key carries ``message`` only, without ``success``.
        """
        body = as_mapping(payload)
        logger.info("Work-shift request: %s", for_log(payload))

        if "isActive" not in body:
            raise ValidationError(
                "Поле isActive обязательно",
                field="isActive",
                include_success=False,
            )

        response = WorkShiftResponse(
            message="Смена открыта" if is_truthy(body["isActive"]) else "Смена закрыта",
            timestamp=self.synth.timestamp(),
            shift_id=self.synth.integer(10_000),
        )
        logger.info("Work-shift response: %s", for_log(response))
        return response

    def create_receipt(self, payload: Any) -> FiscalReceiptResponse:
        """
        Print a fiscal receipt.

        Checks run in order and the first failure is reported:
            1. ``items`` is a non-empty array
            2. ``payment.sum`` is a number > 0
            3. ``type`` is present

        Returns:
            FiscalReceiptResponse echoing ``payment.sum`` as ``total`` and
            ``type`` as ``receiptType``.
        """
        body = as_mapping(payload)
        logger.info("Receipt request: %s", for_log(payload))

        if not is_non_empty_list(body.get("items")):
            raise ValidationError(
                "Поле items обязательно и должно содержать массив позиций",
                field="items",
            )

        payment_sum = nested(body, "payment").get("sum")
        if not is_positive_amount(payment_sum):
            raise ValidationError("Неверная сумма платежа", field="payment.sum")

        if not is_truthy(body.get("type")):
            raise ValidationError(
                "Тип операции обязателен (sell, refund, etc.)",
                field="type",
            )

        response = FiscalReceiptResponse(
            fiscal_document_date_time=self.synth.local_timestamp(
                self.config.fiscal_utc_offset_hours
            ),
            fiscal_document_number=self.synth.integer(100_000),
            fiscal_document_sign=self.synth.digits(1_000_000_000),
            fiscal_receipt_number=self.synth.integer(1_000),
            fn_number=self.config.fn_number,
            fns_url=self.config.fns_url,
            registration_number=self.config.registration_number,
            shift_number=self.config.shift_number,
            total=payment_sum,
            receipt_type=body["type"],
            fiscal_mark=self.synth.digits(1_000_000_000_000_000),
            fiscal_sign=self.synth.digits(1_000_000_000),
            processed_at=self.synth.timestamp(),
        )
        logger.info("Receipt response: %s", for_log(response))
        return response

    def print_non_fiscal(self, payload: Any) -> NonFiscalDocumentResponse:
        """Print a non-fiscal document; the body itself must be a non-empty array."""
        items_count = len(payload) if isinstance(payload, list) else 0
        logger.info("Non-fiscal request: %d items", items_count)

        if not is_non_empty_list(payload):
            raise ValidationError("Тело запроса должно быть массивом элементов для печати")

        response = NonFiscalDocumentResponse(
            message="Нефискальный документ успешно напечатан",
            printed_at=self.synth.timestamp(),
            items_count=items_count,
            device_id=self.config.cash_register_device_id,
        )
        logger.info("Non-fiscal response: %s", for_log(response))
        return response

    def x_report(self) -> CashRegisterXReport:
        logger.info("Cash register X-report requested")
        return CashRegisterXReport(
            generated_at=self.synth.timestamp(),
            shift_info=ShiftInfo(
                is_open=True,
                opened_at=self.synth.timestamp(-SHIFT_AGE),
                shift_number=self.synth.integer(1_000),
            ),
            totals=CashRegisterTotals(
                cash=self.synth.money(50_000),
                electronic=self.synth.money(100_000),
                total=self.synth.money(150_000),
            ),
        )

    def shift_totals(self) -> ShiftTotalsResponse:
        logger.info("Shift totals requested")
        return ShiftTotalsResponse(
            incomes=MoneySplit(cash=200, electronically=4000.68),
            refunds=MoneySplit(cash=100, electronically=1000),
        )


cash_register_service = CashRegisterService()

"""
Mock Device Server - POS Terminal Generators
============================================

What:  Response generators for the card payment terminal.
Who:   Called by routes/pos.py.

Operations:
    process_payment()  POST /devices/pos/payments
    process_refund()   POST /devices/pos/refunds
    z_report()         POST /devices/pos/reports/z
    x_report()         POST /devices/pos/reports/x

Transaction numbers are invented per call. A refund is accepted for any
non-empty transactionNumber, whether or not a payment ever returned it.
"""

import logging
from typing import Any, Optional

from mock_device_server.config import Settings, settings as default_settings
from mock_device_server.exceptions import ValidationError
from mock_device_server.schemas.devices import (
    PaymentMethodTotal,
    PaymentResponse,
    PosXReport,
    PosXSummary,
    PosZReport,
    PosZTotals,
    RefundResponse,
)
from mock_device_server.services.payload import (
    as_mapping,
    for_log,
    format_amount,
    is_positive_amount,
    is_truthy,
)
from mock_device_server.services.synth import Synthesizer, synthesizer

logger = logging.getLogger(__name__)


class PosService:
    """Stateless generator set for the POS terminal."""

    def __init__(
        self,
        synth: Optional[Synthesizer] = None,
        config: Optional[Settings] = None,
    ):
        self.synth = synth or synthesizer
        self.config = config or default_settings

    def process_payment(self, payload: Any) -> PaymentResponse:
        """
        Authorize a card payment.

        Fails with 400 "Неверная сумма платежа" unless ``amount`` is a
        number > 0. The response echoes ``amount`` and prints it on the slip.
        """
        body = as_mapping(payload)
        logger.info("Payment request: %s", for_log(payload))

        amount = body.get("amount")
        if not is_positive_amount(amount):
            raise ValidationError("Неверная сумма платежа", field="amount")

        slip = (
            "Текстовое содержимое слипа\n"
            f"Дата операции: {self.synth.local_display()}\n"
            f"Сумма: {format_amount(amount)} руб.\n"
            "Тип операции: Оплата\n"
            "Статус: Успешно"
        )
        response = PaymentResponse(
            amount=amount,
            slip=slip,
            transaction_number="100" + self.synth.digits(10_000_000),
            processed_at=self.synth.timestamp(),
            auth_code=self.synth.digits(1_000_000),
            rrn=self.synth.digits(1_000_000_000_000),
        )
        logger.info("Payment response: %s", for_log(response))
        return response

    def process_refund(self, payload: Any) -> RefundResponse:
        """
        Refund a previous payment.

        Checks, first failure wins:
            1. ``amount`` is a number > 0       → "Неверная сумма возврата"
            2. ``transactionNumber`` is present → "Номер транзакции обязателен"
        """
        body = as_mapping(payload)
        logger.info("Refund request: %s", for_log(payload))

        amount = body.get("amount")
        if not is_positive_amount(amount):
            raise ValidationError("Неверная сумма возврата", field="amount")

        transaction_number = body.get("transactionNumber")
        if not is_truthy(transaction_number):
            raise ValidationError("Номер транзакции обязателен", field="transactionNumber")

        response = RefundResponse(
            refund_id=f"REF_{self.synth.epoch_millis()}_{self.synth.integer(1_000)}",
            transaction_number=transaction_number,
            amount=amount,
            processed_at=self.synth.timestamp(),
            device_id=self.config.pos_device_id,
            operator=self.config.pos_operator,
            slip=(
                "Слип возврата\n"
                f"Сумма: {format_amount(amount)} руб.\n"
                f"Транзакция: {transaction_number}"
            ),
        )
        logger.info("Refund response: %s", for_log(response))
        return response

    def z_report(self) -> PosZReport:
        """Shift-closing summary. Nothing is actually closed or reset."""
        logger.info("POS Z-report requested")
        return PosZReport(
            generated_at=self.synth.timestamp(),
            totals=PosZTotals(
                sales=self.synth.money(100_000),
                refunds=self.synth.money(10_000),
                transactions=self.synth.integer(100),
            ),
            shift_number=self.synth.integer(1_000),
            shift_closed_at=self.synth.timestamp(),
        )

    def x_report(self) -> PosXReport:
        logger.info("POS X-report requested")
        return PosXReport(
            generated_at=self.synth.timestamp(),
            summary=PosXSummary(
                total_sales=self.synth.money(200_000),
                total_refunds=self.synth.money(5_000),
                net_sales=self.synth.money(195_000),
                transaction_count=self.synth.integer(150),
                average_transaction=self.synth.money(1_500),
            ),
            payment_methods=[
                PaymentMethodTotal(type="CASH", amount=self.synth.money(50_000)),
                PaymentMethodTotal(type="CARD", amount=self.synth.money(100_000)),
                PaymentMethodTotal(type="MOBILE", amount=self.synth.money(50_000)),
            ],
        )


pos_service = PosService()

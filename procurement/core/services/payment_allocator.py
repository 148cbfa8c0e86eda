"""
Payment allocator.

Layer-pure service validating new and edited payments against an invoice.
Overpayment is tolerated; the allocator never changes invoice status.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime

from procurement.core.entities.invoice import Invoice, Payment, PaymentInput
from procurement.core.exceptions import PaymentNotFoundError
from procurement.core.services.invoice_balance import InvoiceBalanceCalculator
from procurement.core.services.rules import (
    MAX_AMOUNT,
    ensure_max_length,
    ensure_not_future,
    ensure_positive,
    to_cents,
)

PAYMENT_METHOD_MAX_LENGTH = 50
TRANSACTION_REFERENCE_MAX_LENGTH = 100


@dataclass
class ValidatedPayment:
    """A payment ready to persist, with the balance it leaves behind."""

    payment: Payment
    total_paid_after: float
    outstanding_after: float
    overpaid_by: float

    @property
    def settles_invoice(self) -> bool:
        """True once nothing is owed; the caller decides whether to mark Paid."""
        return self.outstanding_after == 0


class PaymentAllocator:
    """Validate payments against an invoice's remaining balance."""

    def __init__(self, balance_calculator: InvoiceBalanceCalculator | None = None):
        self._balance = balance_calculator or InvoiceBalanceCalculator()

    def validate(
        self,
        invoice: Invoice,
        payment_input: PaymentInput,
        today: date | None = None,
    ) -> ValidatedPayment:
        """
        Validate a new payment.

        Raises:
            ValidationError: future date, non-positive or oversized amount,
                overlong method or reference
        """
        self._validate_input(payment_input, today)
        payment = Payment(
            invoice_id=invoice.id,
            payment_date=payment_input.payment_date,
            amount=payment_input.amount,
            payment_method=payment_input.payment_method,
            transaction_reference=payment_input.transaction_reference,
        )
        return self._allocate(invoice, list(invoice.payments), payment)

    def validate_update(
        self,
        invoice: Invoice,
        payment_id: int,
        payment_input: PaymentInput,
        today: date | None = None,
    ) -> ValidatedPayment:
        """
        Validate an edit of an existing payment on ``invoice``.

        The balance is computed with the payment's old amount replaced.
        """
        existing = next((p for p in invoice.payments if p.id == payment_id), None)
        if existing is None:
            raise PaymentNotFoundError(payment_id)

        self._validate_input(payment_input, today)
        payment = existing.model_copy(
            update={
                "payment_date": payment_input.payment_date,
                "amount": payment_input.amount,
                "payment_method": payment_input.payment_method,
                "transaction_reference": payment_input.transaction_reference,
                "updated_at": datetime.now(UTC),
            }
        )
        others = [p for p in invoice.payments if p.id != payment_id]
        return self._allocate(invoice, others, payment)

    def _allocate(
        self,
        invoice: Invoice,
        other_payments: list[Payment],
        payment: Payment,
    ) -> ValidatedPayment:
        paid = to_cents(self._balance.total_paid(other_payments) + payment.amount)
        return ValidatedPayment(
            payment=payment,
            total_paid_after=paid,
            outstanding_after=max(0.0, to_cents(invoice.total_amount - paid)),
            overpaid_by=max(0.0, to_cents(paid - invoice.total_amount)),
        )

    @staticmethod
    def _validate_input(payment_input: PaymentInput, today: date | None) -> None:
        ensure_not_future("payment_date", payment_input.payment_date, today)
        ensure_positive("amount", payment_input.amount, upper=MAX_AMOUNT)
        ensure_max_length("payment_method", payment_input.payment_method, PAYMENT_METHOD_MAX_LENGTH)
        ensure_max_length(
            "transaction_reference",
            payment_input.transaction_reference,
            TRANSACTION_REFERENCE_MAX_LENGTH,
        )

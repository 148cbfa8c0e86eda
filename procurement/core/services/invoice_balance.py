"""
Invoice balance calculator.

Layer-pure service: outstanding balance, status transitions and the
preconditions for raising an invoice against a purchase order.
NO infrastructure imports.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from procurement.core.entities.invoice import Invoice, InvoiceStatus, Payment
from procurement.core.entities.purchase_order import PurchaseOrder
from procurement.core.exceptions import (
    InvalidStatusTransitionError,
    PurchaseOrderNotInvoiceableError,
    ValidationError,
)
from procurement.core.services.rules import (
    MAX_AMOUNT,
    ensure_max_length,
    ensure_not_future,
    ensure_positive,
    to_cents,
)

INVOICE_NUMBER_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
INVOICE_NUMBER_MAX_LENGTH = 50


@dataclass
class InvoiceBalance:
    """Balance snapshot for one invoice."""

    total_amount: float
    total_paid: float
    outstanding: float
    overpaid_by: float

    @property
    def is_settled(self) -> bool:
        return self.outstanding == 0


class InvoiceBalanceCalculator:
    """
    Outstanding balances and invoice status rules.

    Status moves freely between Pending, Paid and Cancelled. Whether Paid is
    allowed while money is still owed is a policy switch: on by default,
    since a partial payment plus an agreed write-off is a valid outcome.
    """

    def __init__(self, allow_paid_with_outstanding: bool = True):
        self._allow_paid_with_outstanding = allow_paid_with_outstanding

    @staticmethod
    def total_paid(payments: Iterable[Payment]) -> float:
        return to_cents(sum(payment.amount for payment in payments))

    def outstanding(self, total_amount: float, payments: Iterable[Payment]) -> float:
        """Invoice total minus payments received, floored at zero."""
        return max(0.0, to_cents(total_amount - self.total_paid(payments)))

    def balance(self, invoice: Invoice) -> InvoiceBalance:
        paid = self.total_paid(invoice.payments)
        return InvoiceBalance(
            total_amount=invoice.total_amount,
            total_paid=paid,
            outstanding=max(0.0, to_cents(invoice.total_amount - paid)),
            overpaid_by=max(0.0, to_cents(paid - invoice.total_amount)),
        )

    @staticmethod
    def can_transition(current_status: str, requested_status: str) -> bool:
        """Every pair of invoice statuses is a legal move."""
        try:
            InvoiceStatus(current_status)
            InvoiceStatus(requested_status)
        except ValueError:
            return False
        return True

    def check_transition(self, invoice: Invoice, requested_status: str) -> InvoiceStatus:
        """
        Validate a status change for ``invoice`` and return the parsed status.

        Raises:
            ValidationError: requested status is not an invoice status
            InvalidStatusTransitionError: Paid requested with money owed
                while the write-off policy is off
        """
        if not self.can_transition(invoice.status, requested_status):
            raise ValidationError(
                "status",
                f"must be one of {', '.join(s.value for s in InvoiceStatus)}",
                requested_status,
            )
        requested = InvoiceStatus(requested_status)

        if requested == InvoiceStatus.PAID and not self._allow_paid_with_outstanding:
            owed = self.outstanding(invoice.total_amount, invoice.payments)
            if owed > 0:
                raise InvalidStatusTransitionError(
                    "invoice",
                    InvoiceStatus(invoice.status).value,
                    requested.value,
                    reason=f"{owed:.2f} still outstanding",
                )
        return requested

    @staticmethod
    def ensure_invoiceable(order: PurchaseOrder) -> None:
        if not order.is_invoiceable:
            raise PurchaseOrderNotInvoiceableError(order.id, order.status.value)

    def validate_new_invoice(
        self,
        order: PurchaseOrder,
        invoice_number: str,
        invoice_date: date,
        total_amount: float,
        today: date | None = None,
    ) -> None:
        """Check the creation-time fields that are frozen afterwards."""
        self.ensure_invoiceable(order)

        number = (invoice_number or "").strip()
        if not number:
            raise ValidationError("invoice_number", "Invoice number is required")
        ensure_max_length("invoice_number", number, INVOICE_NUMBER_MAX_LENGTH)
        if not INVOICE_NUMBER_PATTERN.match(number):
            raise ValidationError(
                "invoice_number",
                "can only contain letters, numbers, hyphens, and underscores",
                number,
            )

        ensure_not_future("invoice_date", invoice_date, today)
        ensure_positive("total_amount", total_amount, upper=MAX_AMOUNT)

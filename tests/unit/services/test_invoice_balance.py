"""Tests for InvoiceBalanceCalculator."""

from datetime import date

import pytest

from procurement.core.entities import Invoice, InvoiceStatus, Payment, PurchaseOrder, PurchaseOrderStatus
from procurement.core.exceptions import (
    InvalidStatusTransitionError,
    PurchaseOrderNotInvoiceableError,
    ValidationError,
)
from procurement.core.services import InvoiceBalanceCalculator


def _payments(*amounts: float) -> list[Payment]:
    return [Payment(invoice_id=1, payment_date=date(2024, 1, 2), amount=a) for a in amounts]


class TestOutstanding:
    def test_partial_payments(self):
        calc = InvoiceBalanceCalculator()
        assert calc.outstanding(1000, _payments(400, 300)) == 300

    def test_overpayment_floors_at_zero(self):
        calc = InvoiceBalanceCalculator()
        assert calc.outstanding(1000, _payments(1200)) == 0

    def test_no_payments(self):
        assert InvoiceBalanceCalculator().outstanding(250, []) == 250

    def test_balance_reports_overpayment(self, sample_invoice: Invoice):
        invoice = sample_invoice.model_copy(update={"payments": _payments(1200)})
        balance = InvoiceBalanceCalculator().balance(invoice)
        assert balance.total_paid == 1200
        assert balance.outstanding == 0
        assert balance.overpaid_by == 200
        assert balance.is_settled

    def test_cent_payments_settle_exactly(self):
        calc = InvoiceBalanceCalculator()
        assert calc.outstanding(1.0, _payments(*[0.1] * 10)) == 0
        assert calc.outstanding(100.3, _payments(100.1, 0.2)) == 0

    def test_balance_of_cent_payments_is_settled(self, sample_invoice: Invoice):
        invoice = sample_invoice.model_copy(update={"total_amount": 0.3, "payments": _payments(0.1, 0.2)})
        balance = InvoiceBalanceCalculator().balance(invoice)
        assert balance.total_paid == 0.3
        assert balance.outstanding == 0
        assert balance.overpaid_by == 0
        assert balance.is_settled


class TestTransitions:
    @pytest.mark.parametrize("current", ["Pending", "Paid", "Cancelled"])
    @pytest.mark.parametrize("requested", ["Pending", "Paid", "Cancelled"])
    def test_every_pair_allowed(self, current, requested):
        assert InvoiceBalanceCalculator.can_transition(current, requested)

    def test_unknown_status_not_allowed(self):
        assert not InvoiceBalanceCalculator.can_transition("Pending", "Refunded")
        assert not InvoiceBalanceCalculator.can_transition("Draft", "Paid")

    def test_check_transition_parses_status(self, sample_invoice: Invoice):
        assert InvoiceBalanceCalculator().check_transition(sample_invoice, "Cancelled") == InvoiceStatus.CANCELLED

    def test_check_transition_rejects_unknown(self, sample_invoice: Invoice):
        with pytest.raises(ValidationError):
            InvoiceBalanceCalculator().check_transition(sample_invoice, "Refunded")

    def test_paid_with_outstanding_allowed_by_default(self, sample_invoice: Invoice):
        assert InvoiceBalanceCalculator().check_transition(sample_invoice, "Paid") == InvoiceStatus.PAID

    def test_paid_with_outstanding_rejected_when_policy_off(self, sample_invoice: Invoice):
        calc = InvoiceBalanceCalculator(allow_paid_with_outstanding=False)
        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            calc.check_transition(sample_invoice, "Paid")
        assert "300.00" in exc_info.value.message

    def test_paid_when_settled_with_policy_off(self, sample_invoice: Invoice):
        settled = sample_invoice.model_copy(update={"payments": _payments(1000)})
        calc = InvoiceBalanceCalculator(allow_paid_with_outstanding=False)
        assert calc.check_transition(settled, "Paid") == InvoiceStatus.PAID

    def test_paid_after_cent_payments_with_policy_off(self, sample_invoice: Invoice):
        settled = sample_invoice.model_copy(update={"total_amount": 1.0, "payments": _payments(*[0.1] * 10)})
        calc = InvoiceBalanceCalculator(allow_paid_with_outstanding=False)
        assert calc.check_transition(settled, "Paid") == InvoiceStatus.PAID


class TestNewInvoice:
    def test_valid(self, sample_order: PurchaseOrder, today: date):
        InvoiceBalanceCalculator().validate_new_invoice(sample_order, "INV_2024-01", today, 150, today=today)

    @pytest.mark.parametrize(
        "status",
        [PurchaseOrderStatus.DRAFT, PurchaseOrderStatus.PENDING,
         PurchaseOrderStatus.SHIPPED, PurchaseOrderStatus.CANCELLED],
    )
    def test_order_must_be_approved_or_received(self, sample_order: PurchaseOrder, status, today: date):
        order = sample_order.model_copy(update={"status": status})
        with pytest.raises(PurchaseOrderNotInvoiceableError):
            InvoiceBalanceCalculator().validate_new_invoice(order, "INV-1", today, 10, today=today)

    @pytest.mark.parametrize("number", ["", "   ", "INV 1", "INV#1", "X" * 51])
    def test_bad_invoice_number(self, sample_order: PurchaseOrder, number, today: date):
        with pytest.raises(ValidationError) as exc_info:
            InvoiceBalanceCalculator().validate_new_invoice(sample_order, number, today, 10, today=today)
        assert exc_info.value.details["field"] == "invoice_number"

    def test_future_date(self, sample_order: PurchaseOrder, today: date):
        with pytest.raises(ValidationError) as exc_info:
            InvoiceBalanceCalculator().validate_new_invoice(
                sample_order, "INV-1", date(2024, 6, 16), 10, today=today
            )
        assert exc_info.value.details["field"] == "invoice_date"

    @pytest.mark.parametrize("amount", [0, -5, 1_000_000_000])
    def test_amount_range(self, sample_order: PurchaseOrder, amount, today: date):
        with pytest.raises(ValidationError) as exc_info:
            InvoiceBalanceCalculator().validate_new_invoice(sample_order, "INV-1", today, amount, today=today)
        assert exc_info.value.details["field"] == "total_amount"

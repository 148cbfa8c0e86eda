"""Tests for PaymentAllocator."""

from datetime import date

import pytest

from procurement.core.entities import Invoice, PaymentInput
from procurement.core.exceptions import PaymentNotFoundError, ValidationError
from procurement.core.services import PaymentAllocator


@pytest.fixture
def allocator() -> PaymentAllocator:
    return PaymentAllocator()


class TestValidate:
    def test_partial_payment(self, allocator: PaymentAllocator, sample_invoice: Invoice, today: date):
        result = allocator.validate(sample_invoice, PaymentInput(payment_date=today, amount=100), today=today)
        assert result.payment.invoice_id == sample_invoice.id
        assert result.payment.id is None
        assert result.total_paid_after == 800
        assert result.outstanding_after == 200
        assert result.overpaid_by == 0
        assert not result.settles_invoice

    def test_exact_settlement(self, allocator: PaymentAllocator, sample_invoice: Invoice, today: date):
        result = allocator.validate(sample_invoice, PaymentInput(payment_date=today, amount=300), today=today)
        assert result.outstanding_after == 0
        assert result.settles_invoice

    def test_cent_settlement(self, allocator: PaymentAllocator, sample_invoice: Invoice, today: date):
        invoice = sample_invoice.model_copy(update={"total_amount": 0.3, "payments": []})
        first = allocator.validate(invoice, PaymentInput(payment_date=today, amount=0.1), today=today)
        assert first.outstanding_after == 0.2

        paid_once = invoice.model_copy(update={"payments": [first.payment]})
        second = allocator.validate(paid_once, PaymentInput(payment_date=today, amount=0.2), today=today)
        assert second.total_paid_after == 0.3
        assert second.overpaid_by == 0
        assert second.settles_invoice

    def test_overpayment_tolerated(self, allocator: PaymentAllocator, sample_invoice: Invoice, today: date):
        result = allocator.validate(sample_invoice, PaymentInput(payment_date=today, amount=500), today=today)
        assert result.outstanding_after == 0
        assert result.overpaid_by == 200

    def test_does_not_touch_invoice(self, allocator: PaymentAllocator, sample_invoice: Invoice, today: date):
        allocator.validate(sample_invoice, PaymentInput(payment_date=today, amount=300), today=today)
        assert sample_invoice.status.value == "Pending"
        assert len(sample_invoice.payments) == 2

    def test_future_date(self, allocator: PaymentAllocator, sample_invoice: Invoice, today: date):
        with pytest.raises(ValidationError) as exc_info:
            allocator.validate(sample_invoice, PaymentInput(payment_date=date(2024, 6, 16), amount=1), today=today)
        assert exc_info.value.details["field"] == "payment_date"

    @pytest.mark.parametrize("amount", [0, -10, 1_000_000_000])
    def test_amount_range(self, allocator: PaymentAllocator, sample_invoice: Invoice, amount, today: date):
        with pytest.raises(ValidationError) as exc_info:
            allocator.validate(sample_invoice, PaymentInput(payment_date=today, amount=amount), today=today)
        assert exc_info.value.details["field"] == "amount"

    def test_overlong_reference(self, allocator: PaymentAllocator, sample_invoice: Invoice, today: date):
        with pytest.raises(ValidationError) as exc_info:
            allocator.validate(
                sample_invoice,
                PaymentInput(payment_date=today, amount=1, transaction_reference="R" * 101),
                today=today,
            )
        assert exc_info.value.details["field"] == "transaction_reference"


class TestValidateUpdate:
    def test_excludes_old_amount(self, allocator: PaymentAllocator, sample_invoice: Invoice, today: date):
        result = allocator.validate_update(
            sample_invoice, 12, PaymentInput(payment_date=today, amount=600), today=today
        )
        assert result.payment.id == 12
        assert result.payment.amount == 600
        assert result.total_paid_after == 1000
        assert result.settles_invoice

    def test_unknown_payment(self, allocator: PaymentAllocator, sample_invoice: Invoice, today: date):
        with pytest.raises(PaymentNotFoundError):
            allocator.validate_update(sample_invoice, 99, PaymentInput(payment_date=today, amount=1), today=today)

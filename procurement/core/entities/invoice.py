"""
Invoice and payment domain entities.

Once created, an invoice's number, date and total are frozen; only its
status moves. Balances are computed by InvoiceBalanceCalculator.
"""

from datetime import UTC, date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class InvoiceStatus(str, Enum):
    """Invoice status."""

    PENDING = "Pending"
    PAID = "Paid"
    CANCELLED = "Cancelled"


class PaymentMethod(str, Enum):
    """Common payment methods. Free text is accepted as well."""

    CASH = "Cash"
    CHECK = "Check"
    BANK_TRANSFER = "Bank Transfer"
    CREDIT_CARD = "Credit Card"
    DEBIT_CARD = "Debit Card"
    ONLINE_PAYMENT = "Online Payment"
    OTHER = "Other"


class Payment(BaseModel):
    """A payment received against exactly one invoice."""

    id: int | None = None
    invoice_id: int | None = None
    payment_date: date
    amount: float
    payment_method: str | None = None
    transaction_reference: str | None = None
    processed_by: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class PaymentInput(BaseModel):
    """Submitted payment fields for the create and edit paths."""

    payment_date: date
    amount: float
    payment_method: str | None = None
    transaction_reference: str | None = None


class Invoice(BaseModel):
    """Supplier invoice raised against a purchase order."""

    id: int | None = None
    purchase_order_id: int
    invoice_number: str
    invoice_date: date
    total_amount: float
    status: InvoiceStatus = InvoiceStatus.PENDING
    payments: list[Payment] = Field(default_factory=list)
    processed_by: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

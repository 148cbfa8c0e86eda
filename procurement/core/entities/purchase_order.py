"""
Purchase order domain entities.

An order's total is always derived from its lines; there is no stored,
settable total on the entity.
"""

from datetime import UTC, date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class PurchaseOrderStatus(str, Enum):
    """Purchase order lifecycle status."""

    DRAFT = "Draft"
    PENDING = "Pending"
    APPROVED = "Approved"
    SHIPPED = "Shipped"
    RECEIVED = "Received"
    CANCELLED = "Cancelled"


# Statuses an invoice may be raised against
INVOICEABLE_STATUSES = frozenset({PurchaseOrderStatus.APPROVED, PurchaseOrderStatus.RECEIVED})


class PurchaseOrderItem(BaseModel):
    """A persisted line item; unit price is captured at order time."""

    id: int | None = None
    purchase_order_id: int | None = None
    material_id: int
    quantity: float
    unit_price: float

    @property
    def line_total(self) -> float:
        return self.quantity * self.unit_price


class PurchaseOrderItemInput(BaseModel):
    """
    A submitted line item.

    Carries ``id`` when it edits an existing line, omits it for a new line.
    """

    id: int | None = None
    material_id: int
    quantity: float
    unit_price: float

    @property
    def line_total(self) -> float:
        return self.quantity * self.unit_price


class PurchaseOrder(BaseModel):
    """Purchase order header with its ordered line items."""

    id: int | None = None
    project_id: int
    supplier_id: int
    order_date: date
    status: PurchaseOrderStatus = PurchaseOrderStatus.DRAFT
    items: list[PurchaseOrderItem] = Field(default_factory=list)
    created_by: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def total_amount(self) -> float:
        """Sum of line totals."""
        return sum(item.line_total for item in self.items)

    @property
    def po_number(self) -> str:
        """Display number, e.g. PO-00042."""
        return f"PO-{self.id:05d}" if self.id is not None else "PO-NEW"

    @property
    def is_invoiceable(self) -> bool:
        return self.status in INVOICEABLE_STATUSES

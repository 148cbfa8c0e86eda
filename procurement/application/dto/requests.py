"""Request DTOs for API endpoints.

Pydantic v2 models for API request parsing. They check shape and types
only; ledger rules (positive quantities, dates not in the future, ...)
are enforced by the core services so every violation carries a domain
error code.
"""

from datetime import date

from pydantic import BaseModel, Field

from procurement.core.entities.inventory import MovementType
from procurement.core.entities.purchase_order import PurchaseOrderStatus


# --- Materials ---


class CreateMaterialRequest(BaseModel):
    """Request to add a material to the catalog."""

    name: str = Field(..., min_length=1, max_length=100, description="Material name")
    unit_of_measure: str = Field(
        ...,
        min_length=1,
        max_length=20,
        description="Unit of measure",
        examples=["kg", "pieces", "cubic meters"],
    )
    unit_price: float = Field(default=0.0, ge=0, description="Current catalog price")
    description: str | None = Field(default=None, max_length=500)


class UpdateMaterialRequest(CreateMaterialRequest):
    """Request to edit a material. Historical order lines are unaffected."""


# --- Purchase Orders ---


class PurchaseOrderItemRequest(BaseModel):
    """A submitted line item. Include ``id`` to edit an existing line."""

    id: int | None = Field(default=None, description="Existing line item ID")
    material_id: int = Field(..., description="Material ID")
    quantity: float = Field(..., description="Quantity ordered")
    unit_price: float = Field(..., description="Unit price captured for this order")


class CreatePurchaseOrderRequest(BaseModel):
    """Request to create a purchase order with its line items."""

    project_id: int = Field(..., ge=1, description="Project ID")
    supplier_id: int = Field(..., ge=1, description="Supplier ID")
    order_date: date = Field(..., description="Order date (ISO format)")
    status: PurchaseOrderStatus = Field(default=PurchaseOrderStatus.DRAFT)
    items: list[PurchaseOrderItemRequest] = Field(default_factory=list)
    created_by: str | None = Field(default=None, max_length=100)


class UpdatePurchaseOrderRequest(BaseModel):
    """Request to replace a purchase order's header and full item set."""

    project_id: int = Field(..., ge=1)
    supplier_id: int = Field(..., ge=1)
    order_date: date
    status: PurchaseOrderStatus
    items: list[PurchaseOrderItemRequest] = Field(default_factory=list)


# --- Invoices ---


class CreateInvoiceRequest(BaseModel):
    """Request to raise an invoice against a purchase order."""

    purchase_order_id: int = Field(..., ge=1, description="Purchase order ID")
    invoice_number: str = Field(..., description="Unique invoice number", examples=["INV-2025-001"])
    invoice_date: date = Field(..., description="Invoice date (ISO format)")
    total_amount: float = Field(..., description="Invoice total, frozen after creation")
    processed_by: str | None = Field(default=None, max_length=100)


class UpdateInvoiceStatusRequest(BaseModel):
    """Request to change an invoice's status."""

    status: str = Field(..., description="Pending, Paid or Cancelled")


# --- Payments ---


class CreatePaymentRequest(BaseModel):
    """Request to record a payment against an invoice."""

    invoice_id: int = Field(..., ge=1, description="Invoice ID")
    payment_date: date = Field(..., description="Payment date (ISO format)")
    amount: float = Field(..., description="Amount paid")
    payment_method: str | None = Field(default=None, examples=["Bank Transfer"])
    transaction_reference: str | None = Field(default=None)
    processed_by: str | None = Field(default=None, max_length=100)


class UpdatePaymentRequest(BaseModel):
    """Request to edit a recorded payment."""

    payment_date: date
    amount: float
    payment_method: str | None = None
    transaction_reference: str | None = None


# --- Inventory ---


class CreateInventoryRecordRequest(BaseModel):
    """Request to start tracking stock for a material."""

    material_id: int = Field(..., ge=1, description="Material ID")
    current_stock: float = Field(..., description="Opening stock")
    minimum_stock: float = Field(..., description="Reorder level")
    maximum_stock: float | None = Field(default=None, description="Optional ceiling")
    warehouse_location: str | None = Field(default=None)


class UpdateInventoryRecordRequest(BaseModel):
    """Request to change thresholds. Stock only moves through movements."""

    minimum_stock: float
    maximum_stock: float | None = None
    warehouse_location: str | None = None


class RecordMovementRequest(BaseModel):
    """Request to record a stock movement."""

    material_id: int = Field(..., ge=1, description="Material ID")
    movement_type: MovementType = Field(..., description="In, Out or Adjustment")
    quantity: float = Field(
        ...,
        description="Magnitude for In/Out; signed delta for Adjustment",
    )
    movement_date: date = Field(..., description="Movement date (ISO format)")
    reference_type: str | None = Field(default=None, examples=["PurchaseOrder", "Manual"])
    reference_id: int | None = Field(default=None)
    notes: str | None = Field(default=None)
    performed_by: str | None = Field(default=None, max_length=100)


class ReverseMovementRequest(BaseModel):
    """Request to cancel out a recorded movement with an Adjustment."""

    notes: str | None = Field(default=None)
    performed_by: str | None = Field(default=None, max_length=100)

"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field

from procurement.core.entities.inventory import InventoryMovement, InventoryRecord
from procurement.core.entities.invoice import Invoice, Payment
from procurement.core.entities.material import Material
from procurement.core.entities.purchase_order import PurchaseOrder, PurchaseOrderItem
from procurement.core.services.inventory_ledger import InventoryLedger, LedgerDrift
from procurement.core.services.invoice_balance import InvoiceBalanceCalculator


# --- Common ---


class ProviderHealthResponse(BaseModel):
    """Health status of a backing component."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INVOICE_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


class PaginatedResponse(BaseModel):
    """Base for paginated responses."""

    total: int
    limit: int
    offset: int
    has_more: bool


# --- Materials ---


class MaterialResponse(BaseModel):
    """Material catalog entry response."""

    id: int
    name: str
    unit_of_measure: str
    unit_price: float
    description: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, material: Material) -> "MaterialResponse":
        return cls(
            id=material.id,  # type: ignore[arg-type]
            name=material.name,
            unit_of_measure=material.unit_of_measure,
            unit_price=material.unit_price,
            description=material.description,
            created_at=material.created_at,
            updated_at=material.updated_at,
        )


class MaterialListResponse(BaseModel):
    """List of materials."""

    materials: list[MaterialResponse]
    total: int


# --- Purchase Orders ---


class PurchaseOrderItemResponse(BaseModel):
    """Line item in a purchase order response."""

    id: int
    material_id: int
    quantity: float
    unit_price: float = Field(..., description="Price captured at order time")
    line_total: float = Field(..., description="quantity * unit_price")

    @classmethod
    def from_entity(cls, item: PurchaseOrderItem) -> "PurchaseOrderItemResponse":
        return cls(
            id=item.id,  # type: ignore[arg-type]
            material_id=item.material_id,
            quantity=item.quantity,
            unit_price=item.unit_price,
            line_total=item.line_total,
        )


class PurchaseOrderResponse(BaseModel):
    """Purchase order with its line items."""

    id: int
    po_number: str = Field(..., description="Display number, e.g. PO-00042")
    project_id: int
    supplier_id: int
    order_date: date
    status: str
    total_amount: float = Field(..., description="Sum of line totals")
    items: list[PurchaseOrderItemResponse] = Field(default_factory=list)
    created_by: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, order: PurchaseOrder) -> "PurchaseOrderResponse":
        return cls(
            id=order.id,  # type: ignore[arg-type]
            po_number=order.po_number,
            project_id=order.project_id,
            supplier_id=order.supplier_id,
            order_date=order.order_date,
            status=order.status.value,
            total_amount=order.total_amount,
            items=[PurchaseOrderItemResponse.from_entity(i) for i in order.items],
            created_by=order.created_by,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class PurchaseOrderListResponse(PaginatedResponse):
    """Paginated purchase orders."""

    orders: list[PurchaseOrderResponse]


class LineItemChangesResponse(BaseModel):
    """How many lines an edit created, updated and deleted."""

    created: int = 0
    updated: int = 0
    deleted: int = 0


class UpdatePurchaseOrderResponse(BaseModel):
    """Response for a purchase order edit."""

    order: PurchaseOrderResponse
    changes: LineItemChangesResponse


# --- Invoices and Payments ---


class PaymentResponse(BaseModel):
    """Payment recorded against an invoice."""

    id: int
    invoice_id: int
    payment_date: date
    amount: float
    payment_method: str | None = None
    transaction_reference: str | None = None
    processed_by: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, payment: Payment) -> "PaymentResponse":
        return cls(
            id=payment.id,  # type: ignore[arg-type]
            invoice_id=payment.invoice_id,  # type: ignore[arg-type]
            payment_date=payment.payment_date,
            amount=payment.amount,
            payment_method=payment.payment_method,
            transaction_reference=payment.transaction_reference,
            processed_by=payment.processed_by,
            created_at=payment.created_at,
            updated_at=payment.updated_at,
        )


class InvoiceResponse(BaseModel):
    """Invoice with its payments and current balance."""

    id: int
    purchase_order_id: int
    invoice_number: str
    invoice_date: date
    total_amount: float
    status: str
    total_paid: float = Field(..., description="Sum of payments received")
    outstanding: float = Field(..., description="Amount still owed, never negative")
    overpaid_by: float = Field(default=0.0, description="Payments in excess of the total")
    payments: list[PaymentResponse] = Field(default_factory=list)
    processed_by: str | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(
        cls,
        invoice: Invoice,
        calculator: InvoiceBalanceCalculator | None = None,
    ) -> "InvoiceResponse":
        balance = (calculator or InvoiceBalanceCalculator()).balance(invoice)
        return cls(
            id=invoice.id,  # type: ignore[arg-type]
            purchase_order_id=invoice.purchase_order_id,
            invoice_number=invoice.invoice_number,
            invoice_date=invoice.invoice_date,
            total_amount=invoice.total_amount,
            status=invoice.status.value,
            total_paid=balance.total_paid,
            outstanding=balance.outstanding,
            overpaid_by=balance.overpaid_by,
            payments=[PaymentResponse.from_entity(p) for p in invoice.payments],
            processed_by=invoice.processed_by,
            created_at=invoice.created_at,
            updated_at=invoice.updated_at,
        )


class InvoiceListResponse(PaginatedResponse):
    """Paginated invoices."""

    invoices: list[InvoiceResponse]


class RecordPaymentResponse(BaseModel):
    """Response for recording or editing a payment."""

    payment: PaymentResponse
    invoice_total: float
    total_paid: float
    outstanding: float
    overpaid_by: float = 0.0
    settles_invoice: bool = Field(
        default=False,
        description="True once nothing is owed; status is not changed automatically",
    )


class PaymentListResponse(PaginatedResponse):
    """Paginated payments."""

    payments: list[PaymentResponse]


# --- Inventory ---


class InventoryRecordResponse(BaseModel):
    """Stock level for one material."""

    id: int
    material_id: int
    current_stock: float
    minimum_stock: float
    maximum_stock: float | None = None
    warehouse_location: str | None = None
    stock_status: str = Field(..., description="Out of Stock, Low, Normal or Overstocked")
    version: int
    last_updated: datetime

    @classmethod
    def from_entity(cls, record: InventoryRecord) -> "InventoryRecordResponse":
        return cls(
            id=record.id,  # type: ignore[arg-type]
            material_id=record.material_id,
            current_stock=record.current_stock,
            minimum_stock=record.minimum_stock,
            maximum_stock=record.maximum_stock,
            warehouse_location=record.warehouse_location,
            stock_status=InventoryLedger.classify_stock(
                record.current_stock, record.minimum_stock, record.maximum_stock
            ).value,
            version=record.version,
            last_updated=record.last_updated,
        )


class InventoryStatusResponse(BaseModel):
    """Inventory status for all tracked materials."""

    items: list[InventoryRecordResponse]
    total: int


class InventoryMovementResponse(BaseModel):
    """A stock movement from the ledger."""

    id: int
    material_id: int
    movement_type: str
    quantity: float
    movement_date: date
    balance_after: float = Field(..., description="Stock level right after this movement")
    reference_type: str | None = None
    reference_id: int | None = None
    notes: str | None = None
    performed_by: str | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, movement: InventoryMovement) -> "InventoryMovementResponse":
        return cls(
            id=movement.id,  # type: ignore[arg-type]
            material_id=movement.material_id,
            movement_type=movement.movement_type.value,
            quantity=movement.quantity,
            movement_date=movement.movement_date,
            balance_after=movement.balance_after,
            reference_type=movement.reference_type,
            reference_id=movement.reference_id,
            notes=movement.notes,
            performed_by=movement.performed_by,
            created_at=movement.created_at,
        )


class RecordMovementResponse(BaseModel):
    """Response for a recorded stock movement."""

    record: InventoryRecordResponse
    movement: InventoryMovementResponse


class LedgerVerificationResponse(BaseModel):
    """Cached stock compared with a replay of the movement log."""

    material_id: int
    cached_stock: float
    replayed_stock: float
    movement_count: int
    first_bad_snapshot: int | None = Field(
        default=None, description="Index (oldest first) of the first inconsistent movement"
    )
    has_drift: bool

    @classmethod
    def from_drift(cls, drift: LedgerDrift) -> "LedgerVerificationResponse":
        return cls(
            material_id=drift.material_id,
            cached_stock=drift.cached_stock,
            replayed_stock=drift.replayed_stock,
            movement_count=drift.movement_count,
            first_bad_snapshot=drift.first_bad_snapshot,
            has_drift=drift.has_drift,
        )


# --- Dashboard ---


class OrderSummaryResponse(BaseModel):
    """Compact purchase order row for dashboard lists."""

    id: int
    po_number: str
    project_id: int
    supplier_id: int
    order_date: date
    total_amount: float


class UnpaidInvoiceResponse(BaseModel):
    """Pending invoice with money still owed."""

    invoice_id: int
    invoice_number: str
    purchase_order_id: int
    total_amount: float
    outstanding: float
    invoice_date: date
    days_outstanding: int


class StockAlertResponse(BaseModel):
    """Material at or below its reorder level."""

    material_id: int
    current_stock: float
    minimum_stock: float
    status: str


class DashboardResponse(BaseModel):
    """Procurement dashboard figures."""

    period: str
    period_start: date
    total_purchase_orders: int
    status_breakdown: dict[str, int]
    total_spending: float
    pending_approvals: list[OrderSummaryResponse] = Field(default_factory=list)
    draft_orders: list[OrderSummaryResponse] = Field(default_factory=list)
    unpaid_invoices: list[UnpaidInvoiceResponse] = Field(default_factory=list)
    stock_alerts: list[StockAlertResponse] = Field(default_factory=list)

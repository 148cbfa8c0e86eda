"""Core domain entities."""

from procurement.core.entities.inventory import (
    InventoryMovement,
    InventoryRecord,
    MovementInput,
    MovementType,
    StockStatus,
)
from procurement.core.entities.invoice import (
    Invoice,
    InvoiceStatus,
    Payment,
    PaymentInput,
    PaymentMethod,
)
from procurement.core.entities.material import Material
from procurement.core.entities.purchase_order import (
    INVOICEABLE_STATUSES,
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseOrderItemInput,
    PurchaseOrderStatus,
)

__all__ = [
    # Material entities
    "Material",
    # Purchase order entities
    "PurchaseOrder",
    "PurchaseOrderItem",
    "PurchaseOrderItemInput",
    "PurchaseOrderStatus",
    "INVOICEABLE_STATUSES",
    # Invoice entities
    "Invoice",
    "InvoiceStatus",
    "Payment",
    "PaymentInput",
    "PaymentMethod",
    # Inventory entities
    "InventoryRecord",
    "InventoryMovement",
    "MovementInput",
    "MovementType",
    "StockStatus",
]

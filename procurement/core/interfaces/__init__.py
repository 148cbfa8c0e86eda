"""Core interfaces (ports) for dependency injection."""

from procurement.core.interfaces.inventory_store import IInventoryStore
from procurement.core.interfaces.invoice_store import IInvoiceStore
from procurement.core.interfaces.material_store import IMaterialStore
from procurement.core.interfaces.purchase_order_store import IPurchaseOrderStore

__all__ = [
    "IMaterialStore",
    "IPurchaseOrderStore",
    "IInvoiceStore",
    "IInventoryStore",
]

"""SQLite storage implementations."""

from procurement.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from procurement.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from procurement.infrastructure.storage.sqlite.invoice_store import SQLiteInvoiceStore
from procurement.infrastructure.storage.sqlite.material_store import SQLiteMaterialStore
from procurement.infrastructure.storage.sqlite.purchase_order_store import (
    SQLitePurchaseOrderStore,
)

# Singleton instances
_material_store: SQLiteMaterialStore | None = None
_purchase_order_store: SQLitePurchaseOrderStore | None = None
_invoice_store: SQLiteInvoiceStore | None = None
_inventory_store: SQLiteInventoryStore | None = None


async def get_material_store() -> SQLiteMaterialStore:
    """Get singleton material store instance."""
    global _material_store
    if _material_store is None:
        _material_store = SQLiteMaterialStore()
    return _material_store


async def get_purchase_order_store() -> SQLitePurchaseOrderStore:
    """Get singleton purchase order store instance."""
    global _purchase_order_store
    if _purchase_order_store is None:
        _purchase_order_store = SQLitePurchaseOrderStore()
    return _purchase_order_store


async def get_invoice_store() -> SQLiteInvoiceStore:
    """Get singleton invoice store instance."""
    global _invoice_store
    if _invoice_store is None:
        _invoice_store = SQLiteInvoiceStore()
    return _invoice_store


async def get_inventory_store() -> SQLiteInventoryStore:
    """Get singleton inventory store instance."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore()
    return _inventory_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteMaterialStore",
    "SQLitePurchaseOrderStore",
    "SQLiteInvoiceStore",
    "SQLiteInventoryStore",
    # Factory functions
    "get_material_store",
    "get_purchase_order_store",
    "get_invoice_store",
    "get_inventory_store",
]

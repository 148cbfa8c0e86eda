"""Storage infrastructure implementations."""

from procurement.infrastructure.storage.sqlite import (
    SQLiteInventoryStore,
    SQLiteInvoiceStore,
    SQLiteMaterialStore,
    SQLitePurchaseOrderStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteMaterialStore",
    "SQLitePurchaseOrderStore",
    "SQLiteInvoiceStore",
    "SQLiteInventoryStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]

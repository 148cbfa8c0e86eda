"""
Dependency injection container for FastAPI.

Provides stores and use case instances to route handlers. Tests replace
any of these through ``app.dependency_overrides``.
"""

from functools import lru_cache

from procurement.application.services import (
    get_inventory_ledger,
    get_invoice_balance_calculator,
)
from procurement.application.use_cases import (
    CreateInventoryRecordUseCase,
    CreateInvoiceUseCase,
    CreatePurchaseOrderUseCase,
    GetDashboardUseCase,
    RecordMovementUseCase,
    RecordPaymentUseCase,
    ReverseMovementUseCase,
    UpdateInventoryRecordUseCase,
    UpdateInvoiceStatusUseCase,
    UpdatePaymentUseCase,
    UpdatePurchaseOrderUseCase,
    VerifyInventoryUseCase,
)
from procurement.config import Settings, get_settings
from procurement.core.services import InventoryLedger, InvoiceBalanceCalculator
from procurement.infrastructure.storage.sqlite import (
    SQLiteInventoryStore,
    SQLiteInvoiceStore,
    SQLiteMaterialStore,
    SQLitePurchaseOrderStore,
    get_inventory_store,
    get_invoice_store,
    get_material_store,
    get_purchase_order_store,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Service dependencies
def get_balance_calculator() -> InvoiceBalanceCalculator:
    """Get invoice balance calculator."""
    return get_invoice_balance_calculator()


def get_ledger() -> InventoryLedger:
    """Get inventory ledger."""
    return get_inventory_ledger()


# Store dependencies
async def get_mat_store() -> SQLiteMaterialStore:
    """Get material store."""
    return await get_material_store()


async def get_po_store() -> SQLitePurchaseOrderStore:
    """Get purchase order store."""
    return await get_purchase_order_store()


async def get_inv_store() -> SQLiteInvoiceStore:
    """Get invoice and payment store."""
    return await get_invoice_store()


async def get_stock_store() -> SQLiteInventoryStore:
    """Get inventory store."""
    return await get_inventory_store()


# Use case dependencies
def get_create_purchase_order_use_case() -> CreatePurchaseOrderUseCase:
    """Get create purchase order use case."""
    return CreatePurchaseOrderUseCase()


def get_update_purchase_order_use_case() -> UpdatePurchaseOrderUseCase:
    """Get update purchase order use case."""
    return UpdatePurchaseOrderUseCase()


def get_create_invoice_use_case() -> CreateInvoiceUseCase:
    """Get create invoice use case."""
    return CreateInvoiceUseCase()


def get_update_invoice_status_use_case() -> UpdateInvoiceStatusUseCase:
    """Get update invoice status use case."""
    return UpdateInvoiceStatusUseCase()


def get_record_payment_use_case() -> RecordPaymentUseCase:
    """Get record payment use case."""
    return RecordPaymentUseCase()


def get_update_payment_use_case() -> UpdatePaymentUseCase:
    """Get update payment use case."""
    return UpdatePaymentUseCase()


def get_create_inventory_record_use_case() -> CreateInventoryRecordUseCase:
    """Get create inventory record use case."""
    return CreateInventoryRecordUseCase()


def get_update_inventory_record_use_case() -> UpdateInventoryRecordUseCase:
    """Get update inventory record use case."""
    return UpdateInventoryRecordUseCase()


def get_record_movement_use_case() -> RecordMovementUseCase:
    """Get record movement use case."""
    return RecordMovementUseCase()


def get_reverse_movement_use_case() -> ReverseMovementUseCase:
    """Get reverse movement use case."""
    return ReverseMovementUseCase()


def get_verify_inventory_use_case() -> VerifyInventoryUseCase:
    """Get verify inventory use case."""
    return VerifyInventoryUseCase()


def get_dashboard_use_case() -> GetDashboardUseCase:
    """Get dashboard use case."""
    return GetDashboardUseCase()

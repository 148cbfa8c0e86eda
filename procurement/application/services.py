"""
Service factory functions for dependency injection.

Wires ledger policy from settings into the layer-pure core services.
Use cases should import from here.
"""

from procurement.config import get_settings
from procurement.core.services import (
    InventoryLedger,
    InvoiceBalanceCalculator,
    LineItemReconciler,
    PaymentAllocator,
    ProcurementSummaryService,
)

# Singleton service instances
_line_item_reconciler: LineItemReconciler | None = None
_invoice_balance_calculator: InvoiceBalanceCalculator | None = None
_payment_allocator: PaymentAllocator | None = None
_inventory_ledger: InventoryLedger | None = None
_procurement_summary_service: ProcurementSummaryService | None = None


def get_line_item_reconciler() -> LineItemReconciler:
    """Get or create the LineItemReconciler."""
    global _line_item_reconciler
    if _line_item_reconciler is None:
        ledger = get_settings().ledger
        _line_item_reconciler = LineItemReconciler(max_line_items=ledger.max_line_items)
    return _line_item_reconciler


def get_invoice_balance_calculator() -> InvoiceBalanceCalculator:
    """Get or create the InvoiceBalanceCalculator."""
    global _invoice_balance_calculator
    if _invoice_balance_calculator is None:
        ledger = get_settings().ledger
        _invoice_balance_calculator = InvoiceBalanceCalculator(
            allow_paid_with_outstanding=ledger.allow_paid_with_outstanding,
        )
    return _invoice_balance_calculator


def get_payment_allocator() -> PaymentAllocator:
    """Get or create the PaymentAllocator."""
    global _payment_allocator
    if _payment_allocator is None:
        _payment_allocator = PaymentAllocator(
            balance_calculator=get_invoice_balance_calculator(),
        )
    return _payment_allocator


def get_inventory_ledger() -> InventoryLedger:
    """Get or create the InventoryLedger."""
    global _inventory_ledger
    if _inventory_ledger is None:
        ledger = get_settings().ledger
        _inventory_ledger = InventoryLedger(allow_negative_stock=ledger.allow_negative_stock)
    return _inventory_ledger


def get_procurement_summary_service() -> ProcurementSummaryService:
    """Get or create the ProcurementSummaryService."""
    global _procurement_summary_service
    if _procurement_summary_service is None:
        _procurement_summary_service = ProcurementSummaryService(
            balance_calculator=get_invoice_balance_calculator(),
            ledger=get_inventory_ledger(),
        )
    return _procurement_summary_service


def reset_services() -> None:
    """Reset all service singletons (for testing)."""
    global _line_item_reconciler, _invoice_balance_calculator
    global _payment_allocator, _inventory_ledger, _procurement_summary_service
    _line_item_reconciler = None
    _invoice_balance_calculator = None
    _payment_allocator = None
    _inventory_ledger = None
    _procurement_summary_service = None

"""
Core business logic services.

Layer-pure services that depend only on:
- procurement/core/entities/*
- procurement/core/exceptions.py

NO infrastructure imports. Policy switches are injected via constructor.
"""

from procurement.core.services.inventory_ledger import (
    InventoryLedger,
    LedgerDrift,
    MovementApplication,
)
from procurement.core.services.invoice_balance import InvoiceBalance, InvoiceBalanceCalculator
from procurement.core.services.line_item_reconciler import LineItemReconciler, ReconciliationPlan
from procurement.core.services.payment_allocator import PaymentAllocator, ValidatedPayment
from procurement.core.services.procurement_summary import (
    ProcurementSummary,
    ProcurementSummaryService,
    StockAlert,
    UnpaidInvoice,
)

__all__ = [
    # Line items
    "LineItemReconciler",
    "ReconciliationPlan",
    # Invoices and payments
    "InvoiceBalanceCalculator",
    "InvoiceBalance",
    "PaymentAllocator",
    "ValidatedPayment",
    # Inventory
    "InventoryLedger",
    "MovementApplication",
    "LedgerDrift",
    # Dashboard
    "ProcurementSummaryService",
    "ProcurementSummary",
    "UnpaidInvoice",
    "StockAlert",
]

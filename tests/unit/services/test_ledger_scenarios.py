"""End-to-end checks of the core services on small worked examples."""

from datetime import date

import pytest

from procurement.core.entities import (
    InventoryRecord,
    MovementInput,
    MovementType,
    Payment,
    PurchaseOrderItem,
    PurchaseOrderItemInput,
    StockStatus,
)
from procurement.core.exceptions import InsufficientStockError
from procurement.core.services import InventoryLedger, InvoiceBalanceCalculator, LineItemReconciler


def test_order_total_from_two_lines():
    plan = LineItemReconciler().build_items(
        [
            PurchaseOrderItemInput(material_id=1, quantity=10, unit_price=5),
            PurchaseOrderItemInput(material_id=2, quantity=2, unit_price=50),
        ]
    )
    assert plan.new_total == 150


def test_outstanding_after_two_partial_payments():
    payments = [
        Payment(invoice_id=1, payment_date=date(2024, 1, 1), amount=400),
        Payment(invoice_id=1, payment_date=date(2024, 1, 2), amount=300),
    ]
    assert InvoiceBalanceCalculator().outstanding(1000, payments) == 300


def test_overpayment_never_goes_negative():
    payments = [Payment(invoice_id=1, payment_date=date(2024, 1, 1), amount=1200)]
    assert InvoiceBalanceCalculator().outstanding(1000, payments) == 0


def test_rejected_out_leaves_stock_unchanged():
    ledger = InventoryLedger()
    record = InventoryRecord(id=1, material_id=1, current_stock=50, initial_stock=50, minimum_stock=20)
    move = MovementInput(movement_type=MovementType.OUT, quantity=60, movement_date=date(2024, 1, 1))
    with pytest.raises(InsufficientStockError):
        ledger.apply_movement(record, move, today=date(2024, 1, 1))
    assert record.current_stock == 50


def test_out_of_forty_from_fifty_succeeds():
    ledger = InventoryLedger()
    record = InventoryRecord(id=1, material_id=1, current_stock=50, initial_stock=50, minimum_stock=20)
    move = MovementInput(movement_type=MovementType.OUT, quantity=40, movement_date=date(2024, 1, 1))
    result = ledger.apply_movement(record, move, today=date(2024, 1, 1))
    assert result.balance_after == 10
    assert ledger.stock_status(result.record) == StockStatus.LOW


def test_low_stock_below_minimum():
    assert InventoryLedger.classify_stock(5, 20, 100) == StockStatus.LOW


def test_update_one_line_and_add_another():
    existing = [PurchaseOrderItem(id=1, purchase_order_id=1, material_id=4, quantity=10, unit_price=1)]
    plan = LineItemReconciler().reconcile(
        existing,
        [
            PurchaseOrderItemInput(id=1, material_id=4, quantity=15, unit_price=1),
            PurchaseOrderItemInput(material_id=9, quantity=3, unit_price=2),
        ],
    )
    assert [(i.id, i.quantity) for i in plan.to_update] == [(1, 15)]
    assert [i.material_id for i in plan.to_create] == [9]
    assert plan.to_delete == []


def test_reconciling_twice_changes_nothing():
    existing = [PurchaseOrderItem(id=1, purchase_order_id=1, material_id=4, quantity=10, unit_price=1)]
    submitted = [PurchaseOrderItemInput(id=1, material_id=4, quantity=10, unit_price=1)]
    reconciler = LineItemReconciler()
    first = reconciler.reconcile(existing, submitted)
    second = reconciler.reconcile(existing, submitted)
    assert not first.has_changes
    assert not second.has_changes
    assert first.new_total == second.new_total == 10

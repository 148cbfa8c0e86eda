"""Pytest configuration and fixtures."""

from datetime import date

import pytest

from procurement.application.services import reset_services
from procurement.config import reset_settings
from procurement.core.entities import (
    InventoryRecord,
    Invoice,
    InvoiceStatus,
    Material,
    Payment,
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseOrderStatus,
)


@pytest.fixture(autouse=True)
def fresh_singletons():
    """Settings and service singletons never leak between tests."""
    reset_settings()
    reset_services()
    yield
    reset_settings()
    reset_services()


@pytest.fixture
def today() -> date:
    return date(2024, 6, 15)


@pytest.fixture
def sample_material() -> Material:
    return Material(id=9, name="Portland cement", unit_of_measure="bag", unit_price=8.5)


@pytest.fixture
def sample_order() -> PurchaseOrder:
    """Approved order with Scenario A's lines: 10 x 5 and 2 x 50."""
    return PurchaseOrder(
        id=42,
        project_id=1,
        supplier_id=3,
        order_date=date(2024, 6, 1),
        status=PurchaseOrderStatus.APPROVED,
        items=[
            PurchaseOrderItem(id=1, purchase_order_id=42, material_id=7, quantity=10, unit_price=5),
            PurchaseOrderItem(id=2, purchase_order_id=42, material_id=8, quantity=2, unit_price=50),
        ],
        created_by="buyer",
    )


@pytest.fixture
def sample_invoice() -> Invoice:
    return Invoice(
        id=5,
        purchase_order_id=42,
        invoice_number="INV-2024-001",
        invoice_date=date(2024, 6, 3),
        total_amount=1000.0,
        status=InvoiceStatus.PENDING,
        payments=[
            Payment(id=11, invoice_id=5, payment_date=date(2024, 6, 5), amount=400.0),
            Payment(id=12, invoice_id=5, payment_date=date(2024, 6, 10), amount=300.0),
        ],
    )


@pytest.fixture
def sample_record() -> InventoryRecord:
    return InventoryRecord(
        id=3,
        material_id=7,
        current_stock=50.0,
        initial_stock=50.0,
        minimum_stock=20.0,
        maximum_stock=100.0,
        warehouse_location="A-01",
        version=0,
    )

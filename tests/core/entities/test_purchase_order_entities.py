"""Tests for purchase order entities."""

from datetime import date

from procurement.core.entities import (
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseOrderItemInput,
    PurchaseOrderStatus,
)


class TestPurchaseOrderItem:
    def test_line_total(self):
        item = PurchaseOrderItem(material_id=1, quantity=2.5, unit_price=4.0)
        assert item.line_total == 10.0

    def test_input_line_total(self):
        item = PurchaseOrderItemInput(material_id=1, quantity=3, unit_price=2)
        assert item.id is None
        assert item.line_total == 6


class TestPurchaseOrder:
    def test_total_is_derived_from_lines(self, sample_order: PurchaseOrder):
        assert sample_order.total_amount == 150

    def test_empty_order_totals_zero(self):
        order = PurchaseOrder(project_id=1, supplier_id=1, order_date=date(2024, 1, 1))
        assert order.total_amount == 0
        assert order.status == PurchaseOrderStatus.DRAFT

    def test_po_number(self, sample_order: PurchaseOrder):
        assert sample_order.po_number == "PO-00042"
        assert PurchaseOrder(project_id=1, supplier_id=1, order_date=date(2024, 1, 1)).po_number == "PO-NEW"

    def test_invoiceable_statuses(self, sample_order: PurchaseOrder):
        assert sample_order.is_invoiceable
        for status in (PurchaseOrderStatus.DRAFT, PurchaseOrderStatus.PENDING,
                       PurchaseOrderStatus.SHIPPED, PurchaseOrderStatus.CANCELLED):
            assert not sample_order.model_copy(update={"status": status}).is_invoiceable
        received = sample_order.model_copy(update={"status": PurchaseOrderStatus.RECEIVED})
        assert received.is_invoiceable

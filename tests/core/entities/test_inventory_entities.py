"""Tests for inventory entities."""

from datetime import date

import pydantic
import pytest

from procurement.core.entities import InventoryMovement, InventoryRecord, MovementType, StockStatus


class TestInventoryRecord:
    def test_defaults(self):
        record = InventoryRecord(material_id=1)
        assert record.current_stock == 0.0
        assert record.initial_stock == 0.0
        assert record.version == 0
        assert record.maximum_stock is None


class TestInventoryMovement:
    def test_movement_is_immutable(self):
        movement = InventoryMovement(
            material_id=1,
            movement_type=MovementType.IN,
            quantity=5,
            movement_date=date(2024, 1, 1),
            balance_after=5,
        )
        with pytest.raises(pydantic.ValidationError):
            movement.quantity = 10

    def test_enum_values(self):
        assert MovementType("Adjustment") is MovementType.ADJUSTMENT
        assert StockStatus.OUT_OF_STOCK.value == "Out of Stock"

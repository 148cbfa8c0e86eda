"""Tests for InventoryLedger."""

from datetime import date

import pytest

from procurement.core.entities import (
    InventoryMovement,
    InventoryRecord,
    MovementInput,
    MovementType,
    StockStatus,
)
from procurement.core.exceptions import InsufficientStockError, ValidationError
from procurement.core.services import InventoryLedger


@pytest.fixture
def ledger() -> InventoryLedger:
    return InventoryLedger()


def _move(movement_type: MovementType, quantity: float, when: date = date(2024, 6, 1)) -> MovementInput:
    return MovementInput(movement_type=movement_type, quantity=quantity, movement_date=when)


class TestApplyMovement:
    def test_in_adds_magnitude(self, ledger: InventoryLedger, sample_record: InventoryRecord, today: date):
        result = ledger.apply_movement(sample_record, _move(MovementType.IN, -5), today=today)
        assert result.balance_after == 55
        assert result.record.current_stock == 55
        assert result.movement.balance_after == 55

    def test_out_subtracts(self, ledger: InventoryLedger, sample_record: InventoryRecord, today: date):
        result = ledger.apply_movement(sample_record, _move(MovementType.OUT, 20), today=today)
        assert result.balance_after == 30

    def test_adjustment_is_signed(self, ledger: InventoryLedger, sample_record: InventoryRecord, today: date):
        assert ledger.apply_movement(sample_record, _move(MovementType.ADJUSTMENT, -8), today=today).balance_after == 42
        assert ledger.apply_movement(sample_record, _move(MovementType.ADJUSTMENT, 8), today=today).balance_after == 58

    def test_version_bumped_and_input_untouched(
        self, ledger: InventoryLedger, sample_record: InventoryRecord, today: date
    ):
        result = ledger.apply_movement(sample_record, _move(MovementType.IN, 1), today=today)
        assert result.record.version == sample_record.version + 1
        assert sample_record.current_stock == 50
        assert result.movement.material_id == sample_record.material_id
        assert result.movement.inventory_record_id == sample_record.id

    def test_out_beyond_stock_rejected(self, ledger: InventoryLedger, today: date):
        record = InventoryRecord(id=1, material_id=7, current_stock=30, initial_stock=30, minimum_stock=20)
        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.apply_movement(record, _move(MovementType.OUT, 40), today=today)
        assert exc_info.value.details["available"] == 30
        assert record.current_stock == 30

    def test_out_of_exact_stock_reaches_zero(self, ledger: InventoryLedger, sample_record: InventoryRecord, today: date):
        result = ledger.apply_movement(sample_record, _move(MovementType.OUT, 50), today=today)
        assert result.balance_after == 0
        assert ledger.stock_status(result.record) == StockStatus.OUT_OF_STOCK

    def test_negative_adjustment_rejected(self, ledger: InventoryLedger, sample_record: InventoryRecord, today: date):
        with pytest.raises(InsufficientStockError):
            ledger.apply_movement(sample_record, _move(MovementType.ADJUSTMENT, -51), today=today)

    def test_negative_stock_policy(self, sample_record: InventoryRecord, today: date):
        ledger = InventoryLedger(allow_negative_stock=True)
        result = ledger.apply_movement(sample_record, _move(MovementType.OUT, 60), today=today)
        assert result.balance_after == -10

    def test_zero_quantity_rejected(self, ledger: InventoryLedger, sample_record: InventoryRecord, today: date):
        with pytest.raises(ValidationError) as exc_info:
            ledger.apply_movement(sample_record, _move(MovementType.IN, 0), today=today)
        assert exc_info.value.details["field"] == "quantity"

    def test_future_date_rejected(self, ledger: InventoryLedger, sample_record: InventoryRecord, today: date):
        with pytest.raises(ValidationError) as exc_info:
            ledger.apply_movement(sample_record, _move(MovementType.IN, 1, date(2024, 6, 16)), today=today)
        assert exc_info.value.details["field"] == "movement_date"

    def test_today_allowed(self, ledger: InventoryLedger, sample_record: InventoryRecord, today: date):
        result = ledger.apply_movement(sample_record, _move(MovementType.IN, 1, today), today=today)
        assert result.movement.movement_date == today


class TestClassifyStock:
    @pytest.mark.parametrize(
        ("current", "minimum", "maximum", "expected"),
        [
            (0, 20, 100, StockStatus.OUT_OF_STOCK),
            (-3, 0, None, StockStatus.OUT_OF_STOCK),
            (5, 20, 100, StockStatus.LOW),
            (20, 20, 100, StockStatus.NORMAL),
            (100, 20, 100, StockStatus.NORMAL),
            (101, 20, 100, StockStatus.OVERSTOCKED),
            (10_000, 20, None, StockStatus.NORMAL),
        ],
    )
    def test_thresholds(self, current, minimum, maximum, expected):
        assert InventoryLedger.classify_stock(current, minimum, maximum) == expected


class TestReplay:
    def _log(self, ledger: InventoryLedger, record: InventoryRecord, moves: list[MovementInput], today: date):
        entries: list[InventoryMovement] = []
        for move in moves:
            result = ledger.apply_movement(record, move, today=today)
            record = result.record
            entries.append(result.movement)
        return record, entries

    def test_replay_matches_cache(self, ledger: InventoryLedger, sample_record: InventoryRecord, today: date):
        record, entries = self._log(
            ledger,
            sample_record,
            [_move(MovementType.IN, 10), _move(MovementType.OUT, 25), _move(MovementType.ADJUSTMENT, -3)],
            today,
        )
        assert ledger.replay(sample_record.initial_stock, entries) == record.current_stock == 32
        drift = ledger.verify(record, entries)
        assert not drift.has_drift
        assert drift.movement_count == 3

    def test_verify_detects_cache_drift(self, ledger: InventoryLedger, sample_record: InventoryRecord, today: date):
        record, entries = self._log(ledger, sample_record, [_move(MovementType.IN, 10)], today)
        drift = ledger.verify(record.model_copy(update={"current_stock": 99}), entries)
        assert drift.has_drift
        assert drift.first_bad_snapshot is None
        assert drift.replayed_stock == 60

    def test_verify_finds_first_bad_snapshot(
        self, ledger: InventoryLedger, sample_record: InventoryRecord, today: date
    ):
        record, entries = self._log(
            ledger, sample_record, [_move(MovementType.IN, 10), _move(MovementType.IN, 5)], today
        )
        entries[1] = entries[1].model_copy(update={"balance_after": 70})
        drift = ledger.verify(record, entries)
        assert drift.first_bad_snapshot == 1

    def test_compensating_adjustment_cancels_effect(
        self, ledger: InventoryLedger, sample_record: InventoryRecord, today: date
    ):
        applied = ledger.apply_movement(sample_record, _move(MovementType.OUT, 12), today=today)
        original = applied.movement.model_copy(update={"id": 77})
        reversal = ledger.compensating_adjustment(original, movement_date=today)
        assert reversal.movement_type == MovementType.ADJUSTMENT
        assert reversal.quantity == 12
        assert reversal.reference_id == 77
        restored = ledger.apply_movement(applied.record, reversal, today=today)
        assert restored.balance_after == sample_record.current_stock


class TestRecords:
    def test_open_record_sets_initial_stock(self, ledger: InventoryLedger):
        record = ledger.open_record(material_id=4, current_stock=12, minimum_stock=5, maximum_stock=40)
        assert record.initial_stock == 12
        assert record.current_stock == 12
        assert record.version == 0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"current_stock": -1, "minimum_stock": 0},
            {"current_stock": 1, "minimum_stock": -1},
            {"current_stock": 1, "minimum_stock": 0, "maximum_stock": -5},
            {"current_stock": 1, "minimum_stock": 0, "warehouse_location": "L" * 101},
        ],
    )
    def test_open_record_validation(self, ledger: InventoryLedger, kwargs):
        with pytest.raises(ValidationError):
            ledger.open_record(material_id=4, **kwargs)

    def test_update_thresholds_leaves_stock(self, ledger: InventoryLedger, sample_record: InventoryRecord):
        updated = ledger.update_thresholds(sample_record, minimum_stock=60, maximum_stock=None, warehouse_location="B-2")
        assert updated.current_stock == sample_record.current_stock
        assert updated.version == sample_record.version
        assert ledger.stock_status(updated) == StockStatus.LOW

"""
Inventory ledger.

Layer-pure service over an append-only movement log per material.
The record's ``current_stock`` is a cache of the last ``balance_after``;
``replay`` and ``verify`` recompute it from the log when drift is suspected.
NO infrastructure imports.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime

from procurement.core.entities.inventory import (
    REVERSAL_REFERENCE_TYPE,
    InventoryMovement,
    InventoryRecord,
    MovementInput,
    MovementType,
    StockStatus,
)
from procurement.core.exceptions import InsufficientStockError, ValidationError
from procurement.core.services.rules import (
    ensure_finite,
    ensure_max_length,
    ensure_non_negative,
    ensure_not_future,
)

NOTES_MAX_LENGTH = 500
WAREHOUSE_LOCATION_MAX_LENGTH = 100


@dataclass
class MovementApplication:
    """Outcome of applying one movement: the record to store and its log entry."""

    record: InventoryRecord
    movement: InventoryMovement
    balance_after: float


@dataclass
class LedgerDrift:
    """Comparison of a record's cached stock against its replayed log."""

    material_id: int
    cached_stock: float
    replayed_stock: float
    movement_count: int
    # Index of the first movement whose snapshot disagrees with the replay
    first_bad_snapshot: int | None = None

    @property
    def has_drift(self) -> bool:
        return self.first_bad_snapshot is not None or not math.isclose(
            self.cached_stock, self.replayed_stock, abs_tol=1e-9
        )


class InventoryLedger:
    """
    Apply stock movements and classify stock levels.

    In adds |quantity|, Out subtracts |quantity|, Adjustment adds the signed
    quantity. Negative stock is rejected unless ``allow_negative_stock``.
    """

    def __init__(self, allow_negative_stock: bool = False):
        self._allow_negative_stock = allow_negative_stock

    @staticmethod
    def signed_delta(movement_type: MovementType, quantity: float) -> float:
        """Effect of a movement on stock."""
        if movement_type == MovementType.IN:
            return abs(quantity)
        if movement_type == MovementType.OUT:
            return -abs(quantity)
        return quantity

    def apply_movement(
        self,
        record: InventoryRecord,
        movement: MovementInput,
        today: date | None = None,
        recorded_at: datetime | None = None,
    ) -> MovementApplication:
        """
        Apply ``movement`` to ``record`` without mutating either.

        Raises:
            ValidationError: zero quantity, future date, overlong notes
            InsufficientStockError: stock would go negative
        """
        ensure_finite("quantity", movement.quantity)
        if movement.quantity == 0:
            raise ValidationError("quantity", "Quantity cannot be zero", movement.quantity)
        ensure_not_future("movement_date", movement.movement_date, today)
        ensure_max_length("notes", movement.notes, NOTES_MAX_LENGTH)

        delta = self.signed_delta(movement.movement_type, movement.quantity)
        balance_after = record.current_stock + delta

        if balance_after < 0 and not self._allow_negative_stock:
            raise InsufficientStockError(
                material_id=record.material_id,
                requested=abs(delta),
                available=record.current_stock,
            )

        recorded_at = recorded_at or datetime.now(UTC)
        entry = InventoryMovement(
            inventory_record_id=record.id,
            material_id=record.material_id,
            movement_type=movement.movement_type,
            quantity=movement.quantity,
            movement_date=movement.movement_date,
            balance_after=balance_after,
            reference_type=movement.reference_type,
            reference_id=movement.reference_id,
            notes=movement.notes,
            performed_by=movement.performed_by,
            created_at=recorded_at,
        )
        updated = record.model_copy(
            update={
                "current_stock": balance_after,
                "version": record.version + 1,
                "last_updated": recorded_at,
            }
        )
        return MovementApplication(record=updated, movement=entry, balance_after=balance_after)

    @staticmethod
    def classify_stock(
        current_stock: float,
        minimum_stock: float,
        maximum_stock: float | None = None,
    ) -> StockStatus:
        """Out of Stock is checked before Low, then Overstocked."""
        if current_stock <= 0:
            return StockStatus.OUT_OF_STOCK
        if current_stock < minimum_stock:
            return StockStatus.LOW
        if maximum_stock is not None and current_stock > maximum_stock:
            return StockStatus.OVERSTOCKED
        return StockStatus.NORMAL

    def stock_status(self, record: InventoryRecord) -> StockStatus:
        return self.classify_stock(record.current_stock, record.minimum_stock, record.maximum_stock)

    def replay(self, initial_stock: float, movements: Sequence[InventoryMovement]) -> float:
        """Balance after applying ``movements`` (oldest first) to ``initial_stock``."""
        balance = initial_stock
        for movement in movements:
            balance += self.signed_delta(movement.movement_type, movement.quantity)
        return balance

    def verify(
        self,
        record: InventoryRecord,
        movements: Sequence[InventoryMovement],
    ) -> LedgerDrift:
        """Replay the log (oldest first) and compare with the cached stock."""
        balance = record.initial_stock
        first_bad: int | None = None
        for index, movement in enumerate(movements):
            balance += self.signed_delta(movement.movement_type, movement.quantity)
            if first_bad is None and not math.isclose(
                balance, movement.balance_after, abs_tol=1e-9
            ):
                first_bad = index

        return LedgerDrift(
            material_id=record.material_id,
            cached_stock=record.current_stock,
            replayed_stock=balance,
            movement_count=len(movements),
            first_bad_snapshot=first_bad,
        )

    def compensating_adjustment(
        self,
        movement: InventoryMovement,
        movement_date: date,
        notes: str | None = None,
        performed_by: str | None = None,
    ) -> MovementInput:
        """Adjustment that cancels the stock effect of ``movement``."""
        return MovementInput(
            movement_type=MovementType.ADJUSTMENT,
            quantity=-self.signed_delta(movement.movement_type, movement.quantity),
            movement_date=movement_date,
            reference_type=REVERSAL_REFERENCE_TYPE,
            reference_id=movement.id,
            notes=notes or f"Reversal of movement {movement.id}",
            performed_by=performed_by,
        )

    def open_record(
        self,
        material_id: int,
        current_stock: float,
        minimum_stock: float,
        maximum_stock: float | None = None,
        warehouse_location: str | None = None,
    ) -> InventoryRecord:
        """The only place a caller sets stock directly."""
        ensure_non_negative("current_stock", current_stock)
        self._validate_thresholds(minimum_stock, maximum_stock, warehouse_location)
        return InventoryRecord(
            material_id=material_id,
            current_stock=current_stock,
            initial_stock=current_stock,
            minimum_stock=minimum_stock,
            maximum_stock=maximum_stock,
            warehouse_location=warehouse_location,
        )

    def update_thresholds(
        self,
        record: InventoryRecord,
        minimum_stock: float,
        maximum_stock: float | None = None,
        warehouse_location: str | None = None,
    ) -> InventoryRecord:
        """Change reorder thresholds and location; stock is left alone."""
        self._validate_thresholds(minimum_stock, maximum_stock, warehouse_location)
        return record.model_copy(
            update={
                "minimum_stock": minimum_stock,
                "maximum_stock": maximum_stock,
                "warehouse_location": warehouse_location,
                "last_updated": datetime.now(UTC),
            }
        )

    @staticmethod
    def _validate_thresholds(
        minimum_stock: float,
        maximum_stock: float | None,
        warehouse_location: str | None,
    ) -> None:
        ensure_non_negative("minimum_stock", minimum_stock)
        if maximum_stock is not None:
            ensure_non_negative("maximum_stock", maximum_stock)
        ensure_max_length("warehouse_location", warehouse_location, WAREHOUSE_LOCATION_MAX_LENGTH)

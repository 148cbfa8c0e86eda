"""Inventory domain entities."""

from datetime import UTC, date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# reference_type carried by a compensating Adjustment
REVERSAL_REFERENCE_TYPE = "InventoryMovement"


class MovementType(str, Enum):
    """Types of stock movements."""

    IN = "In"
    OUT = "Out"
    ADJUSTMENT = "Adjustment"


class StockStatus(str, Enum):
    """Stock level classification used for badges and alerts."""

    OUT_OF_STOCK = "Out of Stock"
    LOW = "Low"
    NORMAL = "Normal"
    OVERSTOCKED = "Overstocked"


class InventoryRecord(BaseModel):
    """
    Stock level for one material.

    ``current_stock`` is a cache of the last movement's ``balance_after``
    (or ``initial_stock`` before any movement). ``version`` increments on
    every applied movement and guards concurrent writers.
    """

    id: int | None = None
    material_id: int
    current_stock: float = 0.0
    initial_stock: float = 0.0
    minimum_stock: float = 0.0
    maximum_stock: float | None = None
    warehouse_location: str | None = None
    version: int = 0
    last_updated: datetime = Field(default_factory=lambda: datetime.now(UTC))
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class MovementInput(BaseModel):
    """A submitted stock movement, not yet applied."""

    movement_type: MovementType
    quantity: float
    movement_date: date
    reference_type: str | None = None  # e.g. "PurchaseOrder", "Manual"
    reference_id: int | None = None
    notes: str | None = None
    performed_by: str | None = None


class InventoryMovement(BaseModel):
    """A recorded stock movement. History: never edited once stored."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    inventory_record_id: int | None = None
    material_id: int
    movement_type: MovementType
    quantity: float
    movement_date: date
    balance_after: float
    reference_type: str | None = None
    reference_id: int | None = None
    notes: str | None = None
    performed_by: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

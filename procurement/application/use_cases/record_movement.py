"""Record Movement Use Case - append to the stock ledger with optimistic locking."""

from dataclasses import dataclass
from datetime import date

from procurement.application.dto.requests import RecordMovementRequest
from procurement.application.dto.responses import (
    InventoryMovementResponse,
    InventoryRecordResponse,
    RecordMovementResponse,
)
from procurement.application.services import get_inventory_ledger
from procurement.config import get_logger, get_settings
from procurement.core.entities.inventory import InventoryMovement, InventoryRecord, MovementInput
from procurement.core.exceptions import (
    InventoryMovementNotFoundError,
    InventoryRecordNotFoundError,
    MovementAlreadyReversedError,
    StaleRecordError,
)
from procurement.core.interfaces.inventory_store import IInventoryStore
from procurement.core.services.inventory_ledger import InventoryLedger

logger = get_logger(__name__)


@dataclass
class RecordMovementResult:
    """Result of recording a stock movement."""

    record: InventoryRecord
    movement: InventoryMovement
    attempts: int = 1


class RecordMovementUseCase:
    """
    Record an In, Out or Adjustment movement.

    The record is read, the ledger computes the new balance, and the store
    writes movement and balance together guarded by the record version.
    When another writer got there first the whole read-compute-write is
    retried, up to ``max_retries`` attempts.
    """

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        ledger: InventoryLedger | None = None,
        max_retries: int | None = None,
    ):
        self._inventory_store = inventory_store
        self._ledger = ledger
        self._max_retries = max_retries

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from procurement.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    def _get_ledger(self) -> InventoryLedger:
        if self._ledger is None:
            self._ledger = get_inventory_ledger()
        return self._ledger

    def _get_max_retries(self) -> int:
        if self._max_retries is None:
            self._max_retries = get_settings().ledger.max_write_retries
        return self._max_retries

    async def execute(self, request: RecordMovementRequest) -> RecordMovementResult:
        """Execute record movement use case."""
        movement = MovementInput(
            movement_type=request.movement_type,
            quantity=request.quantity,
            movement_date=request.movement_date,
            reference_type=request.reference_type,
            reference_id=request.reference_id,
            notes=request.notes,
            performed_by=request.performed_by,
        )
        return await self._record(request.material_id, movement)

    async def _record(self, material_id: int, movement: MovementInput) -> RecordMovementResult:
        logger.info(
            "record_movement_started",
            material_id=material_id,
            movement_type=movement.movement_type.value,
            quantity=movement.quantity,
        )
        store = await self._get_inventory_store()
        ledger = self._get_ledger()
        max_retries = self._get_max_retries()

        attempt = 0
        while True:
            attempt += 1
            record = await store.get_record_by_material(material_id)
            if record is None:
                raise InventoryRecordNotFoundError(material_id)

            application = ledger.apply_movement(record, movement)
            try:
                saved_record, saved_movement = await store.append_movement(
                    application.record,
                    application.movement,
                    expected_version=record.version,
                )
            except StaleRecordError:
                if attempt >= max_retries:
                    logger.error(
                        "movement_write_conflict_exhausted",
                        material_id=material_id,
                        attempts=attempt,
                    )
                    raise
                logger.warning("movement_write_conflict", material_id=material_id, attempt=attempt)
                continue
            break

        logger.info(
            "movement_recorded",
            movement_id=saved_movement.id,
            material_id=material_id,
            balance_after=saved_movement.balance_after,
            attempts=attempt,
        )
        return RecordMovementResult(record=saved_record, movement=saved_movement, attempts=attempt)

    def to_response(self, result: RecordMovementResult) -> RecordMovementResponse:
        """Convert result to API response."""
        return RecordMovementResponse(
            record=InventoryRecordResponse.from_entity(result.record),
            movement=InventoryMovementResponse.from_entity(result.movement),
        )


class ReverseMovementUseCase(RecordMovementUseCase):
    """Correct a mistaken movement by appending its compensating Adjustment."""

    async def execute(  # type: ignore[override]
        self,
        movement_id: int,
        performed_by: str | None = None,
        notes: str | None = None,
    ) -> RecordMovementResult:
        """Execute reverse movement use case."""
        store = await self._get_inventory_store()
        original = await store.get_movement(movement_id)
        if original is None:
            raise InventoryMovementNotFoundError(movement_id)

        existing = await store.find_reversal(movement_id)
        if existing is not None:
            raise MovementAlreadyReversedError(movement_id, existing.id)

        reversal = self._get_ledger().compensating_adjustment(
            original,
            movement_date=date.today(),
            notes=notes,
            performed_by=performed_by,
        )
        logger.info("reverse_movement_started", movement_id=movement_id)
        return await self._record(original.material_id, reversal)

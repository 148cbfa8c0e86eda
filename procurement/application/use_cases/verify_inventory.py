"""Verify Inventory Use Case - replay the movement log against cached stock."""

from procurement.application.dto.responses import LedgerVerificationResponse
from procurement.application.services import get_inventory_ledger
from procurement.config import get_logger
from procurement.core.exceptions import InventoryRecordNotFoundError
from procurement.core.interfaces.inventory_store import IInventoryStore
from procurement.core.services.inventory_ledger import InventoryLedger, LedgerDrift

logger = get_logger(__name__)


class VerifyInventoryUseCase:
    """Detect drift between a record's current stock and its movement history."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        ledger: InventoryLedger | None = None,
    ):
        self._inventory_store = inventory_store
        self._ledger = ledger

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from procurement.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    def _get_ledger(self) -> InventoryLedger:
        if self._ledger is None:
            self._ledger = get_inventory_ledger()
        return self._ledger

    async def execute(self, material_id: int) -> LedgerDrift:
        """Execute verify inventory use case."""
        store = await self._get_inventory_store()
        record = await store.get_record_by_material(material_id)
        if record is None:
            raise InventoryRecordNotFoundError(material_id)

        movements = await store.get_movements(material_id, newest_first=False)
        drift = self._get_ledger().verify(record, movements)

        if drift.has_drift:
            logger.warning(
                "inventory_drift_detected",
                material_id=material_id,
                cached_stock=drift.cached_stock,
                replayed_stock=drift.replayed_stock,
                first_bad_snapshot=drift.first_bad_snapshot,
            )
        else:
            logger.debug("inventory_verified", material_id=material_id, movements=drift.movement_count)
        return drift

    def to_response(self, drift: LedgerDrift) -> LedgerVerificationResponse:
        """Convert result to API response."""
        return LedgerVerificationResponse.from_drift(drift)

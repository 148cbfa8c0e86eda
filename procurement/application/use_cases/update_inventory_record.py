"""Update Inventory Record Use Case - thresholds and location only."""

from procurement.application.dto.requests import UpdateInventoryRecordRequest
from procurement.application.dto.responses import InventoryRecordResponse
from procurement.application.services import get_inventory_ledger
from procurement.config import get_logger
from procurement.core.entities.inventory import InventoryRecord
from procurement.core.exceptions import InventoryRecordNotFoundError
from procurement.core.interfaces.inventory_store import IInventoryStore
from procurement.core.services.inventory_ledger import InventoryLedger

logger = get_logger(__name__)


class UpdateInventoryRecordUseCase:
    """Change reorder thresholds. Stock itself only moves through movements."""

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

    async def execute(
        self,
        material_id: int,
        request: UpdateInventoryRecordRequest,
    ) -> InventoryRecord:
        """Execute update inventory record use case."""
        store = await self._get_inventory_store()
        record = await store.get_record_by_material(material_id)
        if record is None:
            raise InventoryRecordNotFoundError(material_id)

        record = self._get_ledger().update_thresholds(
            record,
            minimum_stock=request.minimum_stock,
            maximum_stock=request.maximum_stock,
            warehouse_location=request.warehouse_location,
        )
        record = await store.update_thresholds(record)

        logger.info(
            "inventory_thresholds_updated",
            material_id=material_id,
            minimum_stock=record.minimum_stock,
            maximum_stock=record.maximum_stock,
        )
        return record

    def to_response(self, record: InventoryRecord) -> InventoryRecordResponse:
        """Convert result to API response."""
        return InventoryRecordResponse.from_entity(record)

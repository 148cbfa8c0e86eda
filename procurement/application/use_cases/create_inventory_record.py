"""Create Inventory Record Use Case."""

from procurement.application.dto.requests import CreateInventoryRecordRequest
from procurement.application.dto.responses import InventoryRecordResponse
from procurement.application.services import get_inventory_ledger
from procurement.config import get_logger
from procurement.core.entities.inventory import InventoryRecord
from procurement.core.exceptions import DuplicateInventoryRecordError, MaterialNotFoundError
from procurement.core.interfaces.inventory_store import IInventoryStore
from procurement.core.interfaces.material_store import IMaterialStore
from procurement.core.services.inventory_ledger import InventoryLedger

logger = get_logger(__name__)


class CreateInventoryRecordUseCase:
    """Start tracking stock for a material. One record per material."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        material_store: IMaterialStore | None = None,
        ledger: InventoryLedger | None = None,
    ):
        self._inventory_store = inventory_store
        self._material_store = material_store
        self._ledger = ledger

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from procurement.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def _get_material_store(self) -> IMaterialStore:
        if self._material_store is None:
            from procurement.infrastructure.storage.sqlite import get_material_store

            self._material_store = await get_material_store()
        return self._material_store

    def _get_ledger(self) -> InventoryLedger:
        if self._ledger is None:
            self._ledger = get_inventory_ledger()
        return self._ledger

    async def execute(self, request: CreateInventoryRecordRequest) -> InventoryRecord:
        """Execute create inventory record use case."""
        material_store = await self._get_material_store()
        if await material_store.get_material(request.material_id) is None:
            raise MaterialNotFoundError(request.material_id)

        store = await self._get_inventory_store()
        if await store.get_record_by_material(request.material_id) is not None:
            raise DuplicateInventoryRecordError(request.material_id)

        record = self._get_ledger().open_record(
            material_id=request.material_id,
            current_stock=request.current_stock,
            minimum_stock=request.minimum_stock,
            maximum_stock=request.maximum_stock,
            warehouse_location=request.warehouse_location,
        )
        record = await store.create_record(record)

        logger.info(
            "inventory_record_created",
            record_id=record.id,
            material_id=record.material_id,
            current_stock=record.current_stock,
        )
        return record

    def to_response(self, record: InventoryRecord) -> InventoryRecordResponse:
        """Convert result to API response."""
        return InventoryRecordResponse.from_entity(record)

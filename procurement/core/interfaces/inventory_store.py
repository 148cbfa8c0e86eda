"""Abstract interface for inventory storage."""

from abc import ABC, abstractmethod

from procurement.core.entities.inventory import InventoryMovement, InventoryRecord


class IInventoryStore(ABC):
    """Interface for inventory record and stock movement persistence."""

    @abstractmethod
    async def create_record(self, record: InventoryRecord) -> InventoryRecord:
        """Create the inventory record for a material.

        Raises DuplicateInventoryRecordError if one already exists.
        """
        pass

    @abstractmethod
    async def get_record_by_material(self, material_id: int) -> InventoryRecord | None:
        """Get inventory record by material ID."""
        pass

    @abstractmethod
    async def update_thresholds(self, record: InventoryRecord) -> InventoryRecord:
        """Persist minimum/maximum stock and location. Never touches stock."""
        pass

    @abstractmethod
    async def list_records(self, limit: int | None = 100, offset: int = 0) -> list[InventoryRecord]:
        """List inventory records with pagination. ``limit=None`` returns all."""
        pass

    @abstractmethod
    async def append_movement(
        self,
        record: InventoryRecord,
        movement: InventoryMovement,
        expected_version: int,
    ) -> tuple[InventoryRecord, InventoryMovement]:
        """
        Insert ``movement`` and store ``record``'s new stock in one transaction.

        Raises StaleRecordError if the stored version is not ``expected_version``.
        """
        pass

    @abstractmethod
    async def get_movement(self, movement_id: int) -> InventoryMovement | None:
        """Get a single movement by ID."""
        pass

    @abstractmethod
    async def find_reversal(self, movement_id: int) -> InventoryMovement | None:
        """Get the compensating movement recorded for ``movement_id``, if any."""
        pass

    @abstractmethod
    async def get_movements(
        self,
        material_id: int,
        limit: int | None = None,
        newest_first: bool = True,
    ) -> list[InventoryMovement]:
        """Get movements for a material."""
        pass

    @abstractmethod
    async def list_movements(self, limit: int = 100, offset: int = 0) -> list[InventoryMovement]:
        """List movements across all materials, newest first."""
        pass

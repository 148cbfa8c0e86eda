"""Abstract interface for material catalog storage."""

from abc import ABC, abstractmethod

from procurement.core.entities.material import Material


class IMaterialStore(ABC):
    """Interface for material catalog persistence."""

    @abstractmethod
    async def create_material(self, material: Material) -> Material:
        """Create a new material record."""

    @abstractmethod
    async def get_material(self, material_id: int) -> Material | None:
        """Get material by ID."""

    @abstractmethod
    async def get_materials(self, material_ids: list[int]) -> dict[int, Material]:
        """Get several materials keyed by ID; unknown IDs are absent."""

    @abstractmethod
    async def list_materials(self, limit: int = 100, offset: int = 0) -> list[Material]:
        """List materials with pagination."""

    @abstractmethod
    async def update_material(self, material: Material) -> Material:
        """Update catalog fields. Existing order lines keep their captured prices."""

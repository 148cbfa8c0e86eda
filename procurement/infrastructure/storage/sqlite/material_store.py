"""SQLite implementation of material catalog storage."""

from datetime import UTC, datetime

import aiosqlite

from procurement.config import get_logger
from procurement.core.entities.material import Material
from procurement.core.exceptions import MaterialNotFoundError
from procurement.core.interfaces.material_store import IMaterialStore
from procurement.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteMaterialStore(IMaterialStore):
    """SQLite implementation of material catalog storage."""

    async def create_material(self, material: Material) -> Material:
        """Create a new material record."""
        now = datetime.now(UTC)
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO materials (
                    name, unit_of_measure, unit_price, description, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    material.name,
                    material.unit_of_measure,
                    material.unit_price,
                    material.description,
                    now.isoformat(),
                    now.isoformat(),
                ),
            )
            material = material.model_copy(
                update={"id": cursor.lastrowid, "created_at": now, "updated_at": now}
            )
            logger.info("material_created", material_id=material.id, name=material.name)
            return material

    async def get_material(self, material_id: int) -> Material | None:
        """Get material by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM materials WHERE id = ?", (material_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_material(row)

    async def get_materials(self, material_ids: list[int]) -> dict[int, Material]:
        """Get several materials keyed by ID."""
        ids = sorted(set(material_ids))
        if not ids:
            return {}
        placeholders = ",".join("?" for _ in ids)
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM materials WHERE id IN ({placeholders})",
                ids,
            )
            rows = await cursor.fetchall()
            return {row["id"]: self._row_to_material(row) for row in rows}

    async def list_materials(self, limit: int = 100, offset: int = 0) -> list[Material]:
        """List materials ordered by name."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM materials ORDER BY name, id LIMIT ? OFFSET ?",
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_material(row) for row in rows]

    async def update_material(self, material: Material) -> Material:
        """Update catalog fields."""
        now = datetime.now(UTC)
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE materials SET
                    name = ?, unit_of_measure = ?, unit_price = ?, description = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    material.name,
                    material.unit_of_measure,
                    material.unit_price,
                    material.description,
                    now.isoformat(),
                    material.id,
                ),
            )
            if cursor.rowcount == 0:
                raise MaterialNotFoundError(material.id)  # type: ignore[arg-type]
            logger.info("material_updated", material_id=material.id)
            return material.model_copy(update={"updated_at": now})

    @staticmethod
    def _row_to_material(row: aiosqlite.Row) -> Material:
        """Convert a database row to a Material entity."""
        return Material(
            id=row["id"],
            name=row["name"],
            unit_of_measure=row["unit_of_measure"],
            unit_price=float(row["unit_price"]),
            description=row["description"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

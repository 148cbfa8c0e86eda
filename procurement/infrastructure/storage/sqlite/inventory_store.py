"""SQLite implementation of inventory storage."""

from datetime import date, datetime

import aiosqlite

from procurement.config import get_logger
from procurement.core.entities.inventory import (
    REVERSAL_REFERENCE_TYPE,
    InventoryMovement,
    InventoryRecord,
    MovementType,
)
from procurement.core.exceptions import (
    DuplicateInventoryRecordError,
    InventoryRecordNotFoundError,
    MovementAlreadyReversedError,
    StaleRecordError,
)
from procurement.core.interfaces.inventory_store import IInventoryStore
from procurement.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteInventoryStore(IInventoryStore):
    """
    SQLite implementation of inventory records and the movement log.

    Movements are only ever inserted. A record's stock changes together
    with the movement that explains it, guarded by the record version.
    """

    async def create_record(self, record: InventoryRecord) -> InventoryRecord:
        """Create the inventory record for a material."""
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO inventory_records (
                        material_id, current_stock, initial_stock, minimum_stock,
                        maximum_stock, warehouse_location, version, last_updated, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        record.material_id,
                        record.current_stock,
                        record.initial_stock,
                        record.minimum_stock,
                        record.maximum_stock,
                        record.warehouse_location,
                        record.version,
                        record.last_updated.isoformat(),
                        record.created_at.isoformat(),
                    ),
                )
                record = record.model_copy(update={"id": cursor.lastrowid})
        except aiosqlite.IntegrityError as e:
            if "inventory_records.material_id" in str(e):
                raise DuplicateInventoryRecordError(record.material_id) from e
            raise

        logger.info(
            "inventory_record_stored",
            record_id=record.id,
            material_id=record.material_id,
        )
        return record

    async def get_record_by_material(self, material_id: int) -> InventoryRecord | None:
        """Get inventory record by material ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM inventory_records WHERE material_id = ?",
                (material_id,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_record(row)

    async def update_thresholds(self, record: InventoryRecord) -> InventoryRecord:
        """Persist thresholds and location only."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE inventory_records SET
                    minimum_stock = ?, maximum_stock = ?, warehouse_location = ?, last_updated = ?
                WHERE material_id = ?
                """,
                (
                    record.minimum_stock,
                    record.maximum_stock,
                    record.warehouse_location,
                    record.last_updated.isoformat(),
                    record.material_id,
                ),
            )
            if cursor.rowcount == 0:
                raise InventoryRecordNotFoundError(record.material_id)
            cursor = await conn.execute(
                "SELECT * FROM inventory_records WHERE material_id = ?",
                (record.material_id,),
            )
            row = await cursor.fetchone()
            return self._row_to_record(row)

    async def list_records(self, limit: int | None = 100, offset: int = 0) -> list[InventoryRecord]:
        """List inventory records ordered by material."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_records
                ORDER BY material_id
                LIMIT ? OFFSET ?
                """,
                (limit if limit is not None else -1, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]

    async def append_movement(
        self,
        record: InventoryRecord,
        movement: InventoryMovement,
        expected_version: int,
    ) -> tuple[InventoryRecord, InventoryMovement]:
        """Write the new balance and its movement, or raise StaleRecordError."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE inventory_records SET
                    current_stock = ?, version = ?, last_updated = ?
                WHERE id = ? AND version = ?
                """,
                (
                    record.current_stock,
                    record.version,
                    record.last_updated.isoformat(),
                    record.id,
                    expected_version,
                ),
            )
            if cursor.rowcount == 0:
                raise StaleRecordError("InventoryRecord", record.id, expected_version)  # type: ignore[arg-type]

            try:
                cursor = await conn.execute(
                    """
                    INSERT INTO inventory_movements (
                        inventory_record_id, material_id, movement_type, quantity,
                        movement_date, balance_after, reference_type, reference_id,
                        notes, performed_by, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        record.id,
                        movement.material_id,
                        MovementType(movement.movement_type).value,
                        movement.quantity,
                        movement.movement_date.isoformat(),
                        movement.balance_after,
                        movement.reference_type,
                        movement.reference_id,
                        movement.notes,
                        movement.performed_by,
                        movement.created_at.isoformat(),
                    ),
                )
            except aiosqlite.IntegrityError as e:
                if "inventory_movements.reference_id" in str(e):
                    raise MovementAlreadyReversedError(movement.reference_id) from e  # type: ignore[arg-type]
                raise
            movement = movement.model_copy(
                update={"id": cursor.lastrowid, "inventory_record_id": record.id}
            )
            logger.info(
                "movement_stored",
                movement_id=movement.id,
                material_id=movement.material_id,
                balance_after=movement.balance_after,
                version=record.version,
            )
            return record, movement

    async def get_movement(self, movement_id: int) -> InventoryMovement | None:
        """Get a single movement by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM inventory_movements WHERE id = ?", (movement_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_movement(row)

    async def find_reversal(self, movement_id: int) -> InventoryMovement | None:
        """Get the compensating Adjustment that references ``movement_id``."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_movements
                WHERE reference_type = ? AND reference_id = ?
                """,
                (REVERSAL_REFERENCE_TYPE, movement_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_movement(row)

    async def get_movements(
        self,
        material_id: int,
        limit: int | None = None,
        newest_first: bool = True,
    ) -> list[InventoryMovement]:
        """Get movements for a material in insertion order (or its reverse)."""
        direction = "DESC" if newest_first else "ASC"
        async with get_connection() as conn:
            cursor = await conn.execute(
                f"""
                SELECT * FROM inventory_movements
                WHERE material_id = ?
                ORDER BY id {direction}
                LIMIT ?
                """,
                (material_id, limit if limit is not None else -1),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    async def list_movements(self, limit: int = 100, offset: int = 0) -> list[InventoryMovement]:
        """List movements across all materials, newest first."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                """
                SELECT * FROM inventory_movements
                ORDER BY id DESC
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            )
            rows = await cursor.fetchall()
            return [self._row_to_movement(row) for row in rows]

    @staticmethod
    def _row_to_record(row: aiosqlite.Row) -> InventoryRecord:
        """Convert a database row to an InventoryRecord entity."""
        return InventoryRecord(
            id=row["id"],
            material_id=row["material_id"],
            current_stock=float(row["current_stock"]),
            initial_stock=float(row["initial_stock"]),
            minimum_stock=float(row["minimum_stock"]),
            maximum_stock=float(row["maximum_stock"]) if row["maximum_stock"] is not None else None,
            warehouse_location=row["warehouse_location"],
            version=row["version"],
            last_updated=datetime.fromisoformat(row["last_updated"]),
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> InventoryMovement:
        """Convert a database row to an InventoryMovement entity."""
        return InventoryMovement(
            id=row["id"],
            inventory_record_id=row["inventory_record_id"],
            material_id=row["material_id"],
            movement_type=MovementType(row["movement_type"]),
            quantity=float(row["quantity"]),
            movement_date=date.fromisoformat(row["movement_date"]),
            balance_after=float(row["balance_after"]),
            reference_type=row["reference_type"],
            reference_id=row["reference_id"],
            notes=row["notes"],
            performed_by=row["performed_by"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

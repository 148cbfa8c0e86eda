"""SQLite implementation of purchase order storage."""

from datetime import date, datetime

import aiosqlite

from procurement.config import get_logger
from procurement.core.entities.purchase_order import (
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseOrderStatus,
)
from procurement.core.exceptions import PurchaseOrderNotFoundError, StaleRecordError
from procurement.core.interfaces.purchase_order_store import IPurchaseOrderStore
from procurement.core.services.line_item_reconciler import ReconciliationPlan
from procurement.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLitePurchaseOrderStore(IPurchaseOrderStore):
    """
    SQLite implementation of purchase order storage.

    Line items keep their submitted order through a ``position`` column.
    ``purchase_orders.total_amount`` is written in the same transaction as
    the lines it sums.
    """

    async def create_order(self, order: PurchaseOrder, plan: ReconciliationPlan) -> PurchaseOrder:
        """Insert header and every planned line."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO purchase_orders (
                    project_id, supplier_id, order_date, status, total_amount,
                    created_by, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    order.project_id,
                    order.supplier_id,
                    order.order_date.isoformat(),
                    PurchaseOrderStatus(order.status).value,
                    plan.new_total,
                    order.created_by,
                    order.created_at.isoformat(),
                    order.updated_at.isoformat(),
                ),
            )
            order_id = cursor.lastrowid

            items = []
            for position, item in enumerate(plan.items):
                items.append(await self._insert_item(conn, order_id, item, position))

            logger.info(
                "purchase_order_stored",
                order_id=order_id,
                items=len(items),
                total_amount=plan.new_total,
            )
            return order.model_copy(update={"id": order_id, "items": items})

    async def _insert_item(
        self,
        conn: aiosqlite.Connection,
        order_id: int,
        item: PurchaseOrderItem,
        position: int,
    ) -> PurchaseOrderItem:
        cursor = await conn.execute(
            """
            INSERT INTO purchase_order_items (
                purchase_order_id, material_id, quantity, unit_price, position
            ) VALUES (?, ?, ?, ?, ?)
            """,
            (order_id, item.material_id, item.quantity, item.unit_price, position),
        )
        return item.model_copy(update={"id": cursor.lastrowid, "purchase_order_id": order_id})

    async def get_order(self, order_id: int) -> PurchaseOrder | None:
        """Get order with its items."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM purchase_orders WHERE id = ?", (order_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            items = await self._load_items(conn, [order_id])
            return self._row_to_order(row, items.get(order_id, []))

    async def list_orders(
        self,
        limit: int | None = 100,
        offset: int = 0,
        status: PurchaseOrderStatus | None = None,
    ) -> list[PurchaseOrder]:
        """List orders with items, newest first."""
        query = "SELECT * FROM purchase_orders"
        params: list = []
        if status is not None:
            query += " WHERE status = ?"
            params.append(PurchaseOrderStatus(status).value)
        query += " ORDER BY order_date DESC, id DESC LIMIT ? OFFSET ?"
        params.extend([limit if limit is not None else -1, offset])

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            items = await self._load_items(conn, [row["id"] for row in rows])
            return [self._row_to_order(row, items.get(row["id"], [])) for row in rows]

    async def count_orders(self, status: PurchaseOrderStatus | None = None) -> int:
        """Count orders, optionally by status."""
        async with get_connection() as conn:
            if status is not None:
                cursor = await conn.execute(
                    "SELECT COUNT(*) FROM purchase_orders WHERE status = ?",
                    (PurchaseOrderStatus(status).value,),
                )
            else:
                cursor = await conn.execute("SELECT COUNT(*) FROM purchase_orders")
            row = await cursor.fetchone()
            return row[0] if row else 0

    async def apply_plan(self, order: PurchaseOrder, plan: ReconciliationPlan) -> PurchaseOrder:
        """
        Apply header changes and the three line partitions atomically.

        The plan may have been built from a read taken before another writer
        committed. A kept line that no longer exists aborts the transaction
        with ``StaleRecordError``; ``total_amount`` is summed from the stored
        lines, so it always matches them.
        """
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE purchase_orders SET
                    project_id = ?, supplier_id = ?, order_date = ?, status = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    order.project_id,
                    order.supplier_id,
                    order.order_date.isoformat(),
                    PurchaseOrderStatus(order.status).value,
                    order.updated_at.isoformat(),
                    order.id,
                ),
            )
            if cursor.rowcount == 0:
                raise PurchaseOrderNotFoundError(order.id)  # type: ignore[arg-type]

            if plan.to_delete:
                await conn.executemany(
                    "DELETE FROM purchase_order_items WHERE id = ? AND purchase_order_id = ?",
                    [(item.id, order.id) for item in plan.to_delete],
                )

            updated_ids = {item.id for item in plan.to_update}
            for position, item in enumerate(plan.items):
                if item.id is None:
                    await self._insert_item(conn, order.id, item, position)  # type: ignore[arg-type]
                    continue
                if item.id in updated_ids:
                    cursor = await conn.execute(
                        """
                        UPDATE purchase_order_items SET
                            material_id = ?, quantity = ?, unit_price = ?, position = ?
                        WHERE id = ? AND purchase_order_id = ?
                        """,
                        (item.material_id, item.quantity, item.unit_price, position, item.id, order.id),
                    )
                else:
                    cursor = await conn.execute(
                        "UPDATE purchase_order_items SET position = ? WHERE id = ? AND purchase_order_id = ?",
                        (position, item.id, order.id),
                    )
                if cursor.rowcount == 0:
                    raise StaleRecordError("PurchaseOrderItem", item.id)

            await conn.execute(
                """
                UPDATE purchase_orders SET total_amount = (
                    SELECT COALESCE(SUM(quantity * unit_price), 0)
                    FROM purchase_order_items WHERE purchase_order_id = ?
                )
                WHERE id = ?
                """,
                (order.id, order.id),
            )
            items = await self._load_items(conn, [order.id])  # type: ignore[list-item]

            logger.info(
                "purchase_order_plan_applied",
                order_id=order.id,
                created=len(plan.to_create),
                updated=len(plan.to_update),
                deleted=len(plan.to_delete),
            )
            return order.model_copy(update={"items": items.get(order.id, [])})  # type: ignore[arg-type]

    async def delete_order(self, order_id: int) -> bool:
        """Delete order; items cascade."""
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM purchase_orders WHERE id = ?", (order_id,))
            if cursor.rowcount == 0:
                return False
            logger.info("purchase_order_deleted", order_id=order_id)
            return True

    async def _load_items(
        self,
        conn: aiosqlite.Connection,
        order_ids: list[int],
    ) -> dict[int, list[PurchaseOrderItem]]:
        if not order_ids:
            return {}
        placeholders = ",".join("?" for _ in order_ids)
        cursor = await conn.execute(
            f"""
            SELECT * FROM purchase_order_items
            WHERE purchase_order_id IN ({placeholders})
            ORDER BY purchase_order_id, position, id
            """,
            order_ids,
        )
        grouped: dict[int, list[PurchaseOrderItem]] = {}
        for row in await cursor.fetchall():
            grouped.setdefault(row["purchase_order_id"], []).append(self._row_to_item(row))
        return grouped

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> PurchaseOrderItem:
        return PurchaseOrderItem(
            id=row["id"],
            purchase_order_id=row["purchase_order_id"],
            material_id=row["material_id"],
            quantity=float(row["quantity"]),
            unit_price=float(row["unit_price"]),
        )

    @staticmethod
    def _row_to_order(row: aiosqlite.Row, items: list[PurchaseOrderItem]) -> PurchaseOrder:
        return PurchaseOrder(
            id=row["id"],
            project_id=row["project_id"],
            supplier_id=row["supplier_id"],
            order_date=date.fromisoformat(row["order_date"]),
            status=PurchaseOrderStatus(row["status"]),
            items=items,
            created_by=row["created_by"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

"""SQLite implementation of invoice and payment storage."""

from datetime import UTC, date, datetime

import aiosqlite

from procurement.config import get_logger
from procurement.core.entities.invoice import Invoice, InvoiceStatus, Payment
from procurement.core.exceptions import (
    DuplicateInvoiceNumberError,
    InvoiceNotFoundError,
    PaymentNotFoundError,
)
from procurement.core.interfaces.invoice_store import IInvoiceStore
from procurement.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteInvoiceStore(IInvoiceStore):
    """SQLite implementation of invoice and payment storage."""

    # --- Invoices ---

    async def create_invoice(self, invoice: Invoice) -> Invoice:
        """Create an invoice; the UNIQUE index settles number races."""
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO invoices (
                        purchase_order_id, invoice_number, invoice_date, total_amount,
                        status, processed_by, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        invoice.purchase_order_id,
                        invoice.invoice_number,
                        invoice.invoice_date.isoformat(),
                        invoice.total_amount,
                        InvoiceStatus(invoice.status).value,
                        invoice.processed_by,
                        invoice.created_at.isoformat(),
                        invoice.updated_at.isoformat(),
                    ),
                )
                invoice = invoice.model_copy(update={"id": cursor.lastrowid, "payments": []})
        except aiosqlite.IntegrityError as e:
            if "invoice_number" in str(e):
                raise DuplicateInvoiceNumberError(invoice.invoice_number) from e
            raise

        logger.info("invoice_stored", invoice_id=invoice.id, invoice_number=invoice.invoice_number)
        return invoice

    async def get_invoice(self, invoice_id: int) -> Invoice | None:
        """Get invoice with its payments."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM invoices WHERE id = ?", (invoice_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            payments = await self._load_payments(conn, [invoice_id])
            return self._row_to_invoice(row, payments.get(invoice_id, []))

    async def get_invoice_by_number(self, invoice_number: str) -> Invoice | None:
        """Get invoice by its unique number."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM invoices WHERE invoice_number = ?", (invoice_number,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            payments = await self._load_payments(conn, [row["id"]])
            return self._row_to_invoice(row, payments.get(row["id"], []))

    async def list_invoices(
        self,
        limit: int | None = 100,
        offset: int = 0,
        status: InvoiceStatus | None = None,
        purchase_order_id: int | None = None,
    ) -> list[Invoice]:
        """List invoices with payments, newest first."""
        where, params = self._invoice_filters(status, purchase_order_id)
        query = f"SELECT * FROM invoices{where} ORDER BY invoice_date DESC, id DESC LIMIT ? OFFSET ?"
        params.extend([limit if limit is not None else -1, offset])

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            payments = await self._load_payments(conn, [row["id"] for row in rows])
            return [self._row_to_invoice(row, payments.get(row["id"], [])) for row in rows]

    async def count_invoices(
        self,
        status: InvoiceStatus | None = None,
        purchase_order_id: int | None = None,
    ) -> int:
        """Count invoices matching the filters."""
        where, params = self._invoice_filters(status, purchase_order_id)
        async with get_connection() as conn:
            cursor = await conn.execute(f"SELECT COUNT(*) FROM invoices{where}", params)
            row = await cursor.fetchone()
            return row[0] if row else 0

    async def update_status(self, invoice_id: int, status: InvoiceStatus) -> Invoice:
        """Change invoice status."""
        now = datetime.now(UTC)
        async with get_transaction() as conn:
            cursor = await conn.execute(
                "UPDATE invoices SET status = ?, updated_at = ? WHERE id = ?",
                (InvoiceStatus(status).value, now.isoformat(), invoice_id),
            )
            if cursor.rowcount == 0:
                raise InvoiceNotFoundError(invoice_id)

        invoice = await self.get_invoice(invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)
        return invoice

    async def delete_invoice(self, invoice_id: int) -> bool:
        """Delete invoice; payments cascade."""
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM invoices WHERE id = ?", (invoice_id,))
            if cursor.rowcount == 0:
                return False
            logger.info("invoice_deleted", invoice_id=invoice_id)
            return True

    @staticmethod
    def _invoice_filters(
        status: InvoiceStatus | None,
        purchase_order_id: int | None,
    ) -> tuple[str, list]:
        clauses = []
        params: list = []
        if status is not None:
            clauses.append("status = ?")
            params.append(InvoiceStatus(status).value)
        if purchase_order_id is not None:
            clauses.append("purchase_order_id = ?")
            params.append(purchase_order_id)
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        return where, params

    # --- Payments ---

    async def add_payment(self, payment: Payment) -> Payment:
        """Record a payment."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO payments (
                    invoice_id, payment_date, amount, payment_method,
                    transaction_reference, processed_by, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    payment.invoice_id,
                    payment.payment_date.isoformat(),
                    payment.amount,
                    payment.payment_method,
                    payment.transaction_reference,
                    payment.processed_by,
                    payment.created_at.isoformat(),
                    payment.updated_at.isoformat(),
                ),
            )
            payment = payment.model_copy(update={"id": cursor.lastrowid})
            logger.info(
                "payment_stored",
                payment_id=payment.id,
                invoice_id=payment.invoice_id,
                amount=payment.amount,
            )
            return payment

    async def get_payment(self, payment_id: int) -> Payment | None:
        """Get payment by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM payments WHERE id = ?", (payment_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_payment(row)

    async def list_payments(
        self,
        limit: int = 100,
        offset: int = 0,
        invoice_id: int | None = None,
    ) -> list[Payment]:
        """List payments, newest first."""
        async with get_connection() as conn:
            if invoice_id is not None:
                cursor = await conn.execute(
                    """
                    SELECT * FROM payments WHERE invoice_id = ?
                    ORDER BY payment_date DESC, id DESC
                    LIMIT ? OFFSET ?
                    """,
                    (invoice_id, limit, offset),
                )
            else:
                cursor = await conn.execute(
                    """
                    SELECT * FROM payments
                    ORDER BY payment_date DESC, id DESC
                    LIMIT ? OFFSET ?
                    """,
                    (limit, offset),
                )
            rows = await cursor.fetchall()
            return [self._row_to_payment(row) for row in rows]

    async def count_payments(self, invoice_id: int | None = None) -> int:
        """Count payments."""
        async with get_connection() as conn:
            if invoice_id is not None:
                cursor = await conn.execute(
                    "SELECT COUNT(*) FROM payments WHERE invoice_id = ?", (invoice_id,)
                )
            else:
                cursor = await conn.execute("SELECT COUNT(*) FROM payments")
            row = await cursor.fetchone()
            return row[0] if row else 0

    async def update_payment(self, payment: Payment) -> Payment:
        """Update an existing payment."""
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE payments SET
                    payment_date = ?, amount = ?, payment_method = ?,
                    transaction_reference = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    payment.payment_date.isoformat(),
                    payment.amount,
                    payment.payment_method,
                    payment.transaction_reference,
                    payment.updated_at.isoformat(),
                    payment.id,
                ),
            )
            if cursor.rowcount == 0:
                raise PaymentNotFoundError(payment.id)  # type: ignore[arg-type]
            logger.info("payment_updated", payment_id=payment.id, amount=payment.amount)
            return payment

    async def delete_payment(self, payment_id: int) -> bool:
        """Delete a payment."""
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM payments WHERE id = ?", (payment_id,))
            if cursor.rowcount == 0:
                return False
            logger.info("payment_deleted", payment_id=payment_id)
            return True

    # --- Row mapping ---

    async def _load_payments(
        self,
        conn: aiosqlite.Connection,
        invoice_ids: list[int],
    ) -> dict[int, list[Payment]]:
        if not invoice_ids:
            return {}
        placeholders = ",".join("?" for _ in invoice_ids)
        cursor = await conn.execute(
            f"""
            SELECT * FROM payments
            WHERE invoice_id IN ({placeholders})
            ORDER BY invoice_id, payment_date, id
            """,
            invoice_ids,
        )
        grouped: dict[int, list[Payment]] = {}
        for row in await cursor.fetchall():
            grouped.setdefault(row["invoice_id"], []).append(self._row_to_payment(row))
        return grouped

    @staticmethod
    def _row_to_invoice(row: aiosqlite.Row, payments: list[Payment]) -> Invoice:
        return Invoice(
            id=row["id"],
            purchase_order_id=row["purchase_order_id"],
            invoice_number=row["invoice_number"],
            invoice_date=date.fromisoformat(row["invoice_date"]),
            total_amount=float(row["total_amount"]),
            status=InvoiceStatus(row["status"]),
            payments=payments,
            processed_by=row["processed_by"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    @staticmethod
    def _row_to_payment(row: aiosqlite.Row) -> Payment:
        return Payment(
            id=row["id"],
            invoice_id=row["invoice_id"],
            payment_date=date.fromisoformat(row["payment_date"]),
            amount=float(row["amount"]),
            payment_method=row["payment_method"],
            transaction_reference=row["transaction_reference"],
            processed_by=row["processed_by"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

"""Abstract interface for invoice and payment storage."""

from abc import ABC, abstractmethod

from procurement.core.entities.invoice import Invoice, InvoiceStatus, Payment


class IInvoiceStore(ABC):
    """Interface for invoices and the payments recorded against them."""

    @abstractmethod
    async def create_invoice(self, invoice: Invoice) -> Invoice:
        """Create an invoice. Number, date and total are frozen from here on.

        Raises DuplicateInvoiceNumberError if the number is taken.
        """

    @abstractmethod
    async def get_invoice(self, invoice_id: int) -> Invoice | None:
        """Get invoice with its payments."""

    @abstractmethod
    async def get_invoice_by_number(self, invoice_number: str) -> Invoice | None:
        """Get invoice by its unique number."""

    @abstractmethod
    async def list_invoices(
        self,
        limit: int | None = 100,
        offset: int = 0,
        status: InvoiceStatus | None = None,
        purchase_order_id: int | None = None,
    ) -> list[Invoice]:
        """List invoices with payments, newest first. ``limit=None`` returns all."""

    @abstractmethod
    async def count_invoices(
        self,
        status: InvoiceStatus | None = None,
        purchase_order_id: int | None = None,
    ) -> int:
        """Count invoices matching the filters."""

    @abstractmethod
    async def update_status(self, invoice_id: int, status: InvoiceStatus) -> Invoice:
        """Change status, the only mutable invoice field."""

    @abstractmethod
    async def delete_invoice(self, invoice_id: int) -> bool:
        """Delete invoice and its payments."""

    @abstractmethod
    async def add_payment(self, payment: Payment) -> Payment:
        """Record a payment."""

    @abstractmethod
    async def get_payment(self, payment_id: int) -> Payment | None:
        """Get payment by ID."""

    @abstractmethod
    async def list_payments(
        self,
        limit: int = 100,
        offset: int = 0,
        invoice_id: int | None = None,
    ) -> list[Payment]:
        """List payments, newest first."""

    @abstractmethod
    async def count_payments(self, invoice_id: int | None = None) -> int:
        """Count payments, optionally for one invoice."""

    @abstractmethod
    async def update_payment(self, payment: Payment) -> Payment:
        """Update an existing payment."""

    @abstractmethod
    async def delete_payment(self, payment_id: int) -> bool:
        """Delete a payment."""

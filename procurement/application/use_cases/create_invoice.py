"""Create Invoice Use Case."""

from dataclasses import dataclass
from datetime import UTC, datetime

from procurement.application.dto.requests import CreateInvoiceRequest
from procurement.application.dto.responses import InvoiceResponse
from procurement.application.services import get_invoice_balance_calculator
from procurement.config import get_logger
from procurement.core.entities.invoice import Invoice, InvoiceStatus
from procurement.core.exceptions import DuplicateInvoiceNumberError, PurchaseOrderNotFoundError
from procurement.core.interfaces.invoice_store import IInvoiceStore
from procurement.core.interfaces.purchase_order_store import IPurchaseOrderStore
from procurement.core.services.invoice_balance import InvoiceBalanceCalculator

logger = get_logger(__name__)


@dataclass
class CreateInvoiceResult:
    """Result of creating an invoice."""

    invoice: Invoice


class CreateInvoiceUseCase:
    """Raise an invoice against an Approved or Received purchase order."""

    def __init__(
        self,
        invoice_store: IInvoiceStore | None = None,
        order_store: IPurchaseOrderStore | None = None,
        calculator: InvoiceBalanceCalculator | None = None,
    ):
        self._invoice_store = invoice_store
        self._order_store = order_store
        self._calculator = calculator

    async def _get_invoice_store(self) -> IInvoiceStore:
        if self._invoice_store is None:
            from procurement.infrastructure.storage.sqlite import get_invoice_store

            self._invoice_store = await get_invoice_store()
        return self._invoice_store

    async def _get_order_store(self) -> IPurchaseOrderStore:
        if self._order_store is None:
            from procurement.infrastructure.storage.sqlite import get_purchase_order_store

            self._order_store = await get_purchase_order_store()
        return self._order_store

    def _get_calculator(self) -> InvoiceBalanceCalculator:
        if self._calculator is None:
            self._calculator = get_invoice_balance_calculator()
        return self._calculator

    async def execute(self, request: CreateInvoiceRequest) -> CreateInvoiceResult:
        """Execute create invoice use case."""
        logger.info(
            "create_invoice_started",
            purchase_order_id=request.purchase_order_id,
            invoice_number=request.invoice_number,
        )

        # 1. Order must exist and be invoiceable
        order_store = await self._get_order_store()
        order = await order_store.get_order(request.purchase_order_id)
        if order is None:
            raise PurchaseOrderNotFoundError(request.purchase_order_id)

        # 2. Frozen fields are validated once, here
        self._get_calculator().validate_new_invoice(
            order,
            request.invoice_number,
            request.invoice_date,
            request.total_amount,
        )
        invoice_number = request.invoice_number.strip()

        # 3. Invoice numbers are unique
        invoice_store = await self._get_invoice_store()
        existing = await invoice_store.get_invoice_by_number(invoice_number)
        if existing is not None:
            raise DuplicateInvoiceNumberError(invoice_number, existing.id)

        now = datetime.now(UTC)
        invoice = Invoice(
            purchase_order_id=order.id,  # type: ignore[arg-type]
            invoice_number=invoice_number,
            invoice_date=request.invoice_date,
            total_amount=request.total_amount,
            status=InvoiceStatus.PENDING,
            processed_by=request.processed_by,
            created_at=now,
            updated_at=now,
        )
        invoice = await invoice_store.create_invoice(invoice)

        logger.info(
            "invoice_created",
            invoice_id=invoice.id,
            invoice_number=invoice.invoice_number,
            total_amount=invoice.total_amount,
        )
        return CreateInvoiceResult(invoice=invoice)

    def to_response(self, result: CreateInvoiceResult) -> InvoiceResponse:
        """Convert result to API response."""
        return InvoiceResponse.from_entity(result.invoice, self._get_calculator())

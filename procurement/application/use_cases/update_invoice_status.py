"""Update Invoice Status Use Case."""

from dataclasses import dataclass

from procurement.application.dto.requests import UpdateInvoiceStatusRequest
from procurement.application.dto.responses import InvoiceResponse
from procurement.application.services import get_invoice_balance_calculator
from procurement.config import get_logger
from procurement.core.entities.invoice import Invoice
from procurement.core.exceptions import InvoiceNotFoundError
from procurement.core.interfaces.invoice_store import IInvoiceStore
from procurement.core.services.invoice_balance import InvoiceBalanceCalculator

logger = get_logger(__name__)


@dataclass
class UpdateInvoiceStatusResult:
    """Result of an invoice status change."""

    invoice: Invoice
    previous_status: str
    changed: bool


class UpdateInvoiceStatusUseCase:
    """Move an invoice between Pending, Paid and Cancelled."""

    def __init__(
        self,
        invoice_store: IInvoiceStore | None = None,
        calculator: InvoiceBalanceCalculator | None = None,
    ):
        self._invoice_store = invoice_store
        self._calculator = calculator

    async def _get_invoice_store(self) -> IInvoiceStore:
        if self._invoice_store is None:
            from procurement.infrastructure.storage.sqlite import get_invoice_store

            self._invoice_store = await get_invoice_store()
        return self._invoice_store

    def _get_calculator(self) -> InvoiceBalanceCalculator:
        if self._calculator is None:
            self._calculator = get_invoice_balance_calculator()
        return self._calculator

    async def execute(
        self,
        invoice_id: int,
        request: UpdateInvoiceStatusRequest,
    ) -> UpdateInvoiceStatusResult:
        """Execute update invoice status use case."""
        store = await self._get_invoice_store()
        invoice = await store.get_invoice(invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)

        requested = self._get_calculator().check_transition(invoice, request.status)
        previous = invoice.status.value

        if requested == invoice.status:
            return UpdateInvoiceStatusResult(invoice=invoice, previous_status=previous, changed=False)

        invoice = await store.update_status(invoice_id, requested)
        logger.info(
            "invoice_status_changed",
            invoice_id=invoice_id,
            previous=previous,
            status=requested.value,
        )
        return UpdateInvoiceStatusResult(invoice=invoice, previous_status=previous, changed=True)

    def to_response(self, result: UpdateInvoiceStatusResult) -> InvoiceResponse:
        """Convert result to API response."""
        return InvoiceResponse.from_entity(result.invoice, self._get_calculator())

"""Update Payment Use Case."""

from procurement.application.dto.requests import UpdatePaymentRequest
from procurement.application.dto.responses import RecordPaymentResponse
from procurement.application.services import get_payment_allocator
from procurement.application.use_cases.record_payment import (
    RecordPaymentResult,
    build_payment_response,
)
from procurement.config import get_logger
from procurement.core.entities.invoice import PaymentInput
from procurement.core.exceptions import InvoiceNotFoundError, PaymentNotFoundError
from procurement.core.interfaces.invoice_store import IInvoiceStore
from procurement.core.services.payment_allocator import PaymentAllocator

logger = get_logger(__name__)


class UpdatePaymentUseCase:
    """Edit a recorded payment; the balance is recomputed without its old amount."""

    def __init__(
        self,
        invoice_store: IInvoiceStore | None = None,
        allocator: PaymentAllocator | None = None,
    ):
        self._invoice_store = invoice_store
        self._allocator = allocator

    async def _get_invoice_store(self) -> IInvoiceStore:
        if self._invoice_store is None:
            from procurement.infrastructure.storage.sqlite import get_invoice_store

            self._invoice_store = await get_invoice_store()
        return self._invoice_store

    def _get_allocator(self) -> PaymentAllocator:
        if self._allocator is None:
            self._allocator = get_payment_allocator()
        return self._allocator

    async def execute(self, payment_id: int, request: UpdatePaymentRequest) -> RecordPaymentResult:
        """Execute update payment use case."""
        store = await self._get_invoice_store()
        existing = await store.get_payment(payment_id)
        if existing is None:
            raise PaymentNotFoundError(payment_id)

        invoice = await store.get_invoice(existing.invoice_id)  # type: ignore[arg-type]
        if invoice is None:
            raise InvoiceNotFoundError(existing.invoice_id)  # type: ignore[arg-type]

        allocation = self._get_allocator().validate_update(
            invoice,
            payment_id,
            PaymentInput(
                payment_date=request.payment_date,
                amount=request.amount,
                payment_method=request.payment_method,
                transaction_reference=request.transaction_reference,
            ),
        )
        payment = await store.update_payment(allocation.payment)

        logger.info(
            "payment_updated",
            payment_id=payment_id,
            invoice_id=invoice.id,
            previous_amount=existing.amount,
            amount=payment.amount,
            outstanding=allocation.outstanding_after,
        )
        return RecordPaymentResult(invoice=invoice, payment=payment, allocation=allocation)

    def to_response(self, result: RecordPaymentResult) -> RecordPaymentResponse:
        """Convert result to API response."""
        return build_payment_response(result)

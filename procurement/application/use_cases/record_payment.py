"""Record Payment Use Case."""

from dataclasses import dataclass

from procurement.application.dto.requests import CreatePaymentRequest
from procurement.application.dto.responses import PaymentResponse, RecordPaymentResponse
from procurement.application.services import get_payment_allocator
from procurement.config import get_logger
from procurement.core.entities.invoice import Invoice, Payment, PaymentInput
from procurement.core.exceptions import InvoiceNotFoundError
from procurement.core.interfaces.invoice_store import IInvoiceStore
from procurement.core.services.payment_allocator import PaymentAllocator, ValidatedPayment

logger = get_logger(__name__)


@dataclass
class RecordPaymentResult:
    """Result of recording (or editing) a payment."""

    invoice: Invoice
    payment: Payment
    allocation: ValidatedPayment


def build_payment_response(result: RecordPaymentResult) -> RecordPaymentResponse:
    allocation = result.allocation
    return RecordPaymentResponse(
        payment=PaymentResponse.from_entity(result.payment),
        invoice_total=result.invoice.total_amount,
        total_paid=allocation.total_paid_after,
        outstanding=allocation.outstanding_after,
        overpaid_by=allocation.overpaid_by,
        settles_invoice=allocation.settles_invoice,
    )


class RecordPaymentUseCase:
    """
    Record a payment against an invoice.

    Overpayment is accepted and reported. Invoice status is left as it is;
    marking an invoice Paid is a separate, explicit status change.
    """

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

    async def execute(self, request: CreatePaymentRequest) -> RecordPaymentResult:
        """Execute record payment use case."""
        logger.info("record_payment_started", invoice_id=request.invoice_id, amount=request.amount)

        store = await self._get_invoice_store()
        invoice = await store.get_invoice(request.invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(request.invoice_id)

        allocation = self._get_allocator().validate(
            invoice,
            PaymentInput(
                payment_date=request.payment_date,
                amount=request.amount,
                payment_method=request.payment_method,
                transaction_reference=request.transaction_reference,
            ),
        )
        payment = allocation.payment.model_copy(update={"processed_by": request.processed_by})
        payment = await store.add_payment(payment)

        if allocation.overpaid_by > 0:
            logger.warning(
                "invoice_overpaid",
                invoice_id=invoice.id,
                overpaid_by=allocation.overpaid_by,
            )
        logger.info(
            "payment_recorded",
            payment_id=payment.id,
            invoice_id=invoice.id,
            outstanding=allocation.outstanding_after,
        )
        return RecordPaymentResult(invoice=invoice, payment=payment, allocation=allocation)

    def to_response(self, result: RecordPaymentResult) -> RecordPaymentResponse:
        """Convert result to API response."""
        return build_payment_response(result)

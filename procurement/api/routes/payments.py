"""Payment endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status

from procurement.api.dependencies import (
    get_inv_store,
    get_record_payment_use_case,
    get_update_payment_use_case,
)
from procurement.application.dto.requests import CreatePaymentRequest, UpdatePaymentRequest
from procurement.application.dto.responses import (
    ErrorResponse,
    PaymentListResponse,
    PaymentResponse,
    RecordPaymentResponse,
)
from procurement.application.use_cases.record_payment import RecordPaymentUseCase
from procurement.application.use_cases.update_payment import UpdatePaymentUseCase
from procurement.core.exceptions import PaymentNotFoundError
from procurement.infrastructure.storage.sqlite.invoice_store import SQLiteInvoiceStore

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.get("", response_model=PaymentListResponse)
async def list_payments(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    invoice_id: int | None = Query(default=None),
    store: SQLiteInvoiceStore = Depends(get_inv_store),
) -> PaymentListResponse:
    """List payments, optionally for one invoice."""
    payments = await store.list_payments(limit=limit, offset=offset, invoice_id=invoice_id)
    total = await store.count_payments(invoice_id=invoice_id)
    return PaymentListResponse(
        payments=[PaymentResponse.from_entity(p) for p in payments],
        total=total,
        limit=limit,
        offset=offset,
        has_more=offset + len(payments) < total,
    )


@router.post(
    "",
    response_model=RecordPaymentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def record_payment(
    request: CreatePaymentRequest,
    use_case: RecordPaymentUseCase = Depends(get_record_payment_use_case),
) -> RecordPaymentResponse:
    """Record a payment. Overpayment is accepted and reported."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get(
    "/{payment_id}",
    response_model=PaymentResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_payment(
    payment_id: int,
    store: SQLiteInvoiceStore = Depends(get_inv_store),
) -> PaymentResponse:
    """Get a payment by ID."""
    payment = await store.get_payment(payment_id)
    if payment is None:
        raise PaymentNotFoundError(payment_id)
    return PaymentResponse.from_entity(payment)


@router.put(
    "/{payment_id}",
    response_model=RecordPaymentResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_payment(
    payment_id: int,
    request: UpdatePaymentRequest,
    use_case: UpdatePaymentUseCase = Depends(get_update_payment_use_case),
) -> RecordPaymentResponse:
    """Edit a payment; the balance excludes the payment's previous amount."""
    result = await use_case.execute(payment_id, request)
    return use_case.to_response(result)


@router.delete(
    "/{payment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_payment(
    payment_id: int,
    store: SQLiteInvoiceStore = Depends(get_inv_store),
) -> Response:
    """Delete a payment."""
    if not await store.delete_payment(payment_id):
        raise PaymentNotFoundError(payment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

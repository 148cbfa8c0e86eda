"""
Invoice endpoints.

Every invoice response carries its computed balance.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from procurement.api.dependencies import (
    get_balance_calculator,
    get_create_invoice_use_case,
    get_inv_store,
    get_update_invoice_status_use_case,
)
from procurement.application.dto.requests import CreateInvoiceRequest, UpdateInvoiceStatusRequest
from procurement.application.dto.responses import (
    ErrorResponse,
    InvoiceListResponse,
    InvoiceResponse,
)
from procurement.application.use_cases.create_invoice import CreateInvoiceUseCase
from procurement.application.use_cases.update_invoice_status import UpdateInvoiceStatusUseCase
from procurement.core.entities.invoice import InvoiceStatus
from procurement.core.exceptions import InvoiceNotFoundError
from procurement.core.services.invoice_balance import InvoiceBalanceCalculator
from procurement.infrastructure.storage.sqlite.invoice_store import SQLiteInvoiceStore

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.get("", response_model=InvoiceListResponse)
async def list_invoices(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    invoice_status: InvoiceStatus | None = Query(default=None, alias="status"),
    purchase_order_id: int | None = Query(default=None),
    store: SQLiteInvoiceStore = Depends(get_inv_store),
    calculator: InvoiceBalanceCalculator = Depends(get_balance_calculator),
) -> InvoiceListResponse:
    """List invoices with their balances, newest first."""
    invoices = await store.list_invoices(
        limit=limit,
        offset=offset,
        status=invoice_status,
        purchase_order_id=purchase_order_id,
    )
    total = await store.count_invoices(status=invoice_status, purchase_order_id=purchase_order_id)
    return InvoiceListResponse(
        invoices=[InvoiceResponse.from_entity(i, calculator) for i in invoices],
        total=total,
        limit=limit,
        offset=offset,
        has_more=offset + len(invoices) < total,
    )


@router.post(
    "",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def create_invoice(
    request: CreateInvoiceRequest,
    use_case: CreateInvoiceUseCase = Depends(get_create_invoice_use_case),
) -> InvoiceResponse:
    """Issue an invoice against an approved or received purchase order."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_invoice(
    invoice_id: int,
    store: SQLiteInvoiceStore = Depends(get_inv_store),
    calculator: InvoiceBalanceCalculator = Depends(get_balance_calculator),
) -> InvoiceResponse:
    """Get an invoice with its payments and outstanding balance."""
    invoice = await store.get_invoice(invoice_id)
    if invoice is None:
        raise InvoiceNotFoundError(invoice_id)
    return InvoiceResponse.from_entity(invoice, calculator)


@router.patch(
    "/{invoice_id}/status",
    response_model=InvoiceResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def update_invoice_status(
    invoice_id: int,
    request: UpdateInvoiceStatusRequest,
    use_case: UpdateInvoiceStatusUseCase = Depends(get_update_invoice_status_use_case),
) -> InvoiceResponse:
    """Move an invoice to a new status. Paid may be refused while money is owed, per ledger settings."""
    result = await use_case.execute(invoice_id, request)
    return use_case.to_response(result)


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_invoice(
    invoice_id: int,
    store: SQLiteInvoiceStore = Depends(get_inv_store),
) -> Response:
    """Delete an invoice together with its payments."""
    if not await store.delete_invoice(invoice_id):
        raise InvoiceNotFoundError(invoice_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

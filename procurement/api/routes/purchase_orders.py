"""
Purchase order endpoints.

Edits submit the full set of line items; the server reconciles them
against the stored lines.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from procurement.api.dependencies import (
    get_create_purchase_order_use_case,
    get_po_store,
    get_update_purchase_order_use_case,
)
from procurement.application.dto.requests import (
    CreatePurchaseOrderRequest,
    UpdatePurchaseOrderRequest,
)
from procurement.application.dto.responses import (
    ErrorResponse,
    PurchaseOrderListResponse,
    PurchaseOrderResponse,
    UpdatePurchaseOrderResponse,
)
from procurement.application.use_cases.create_purchase_order import CreatePurchaseOrderUseCase
from procurement.application.use_cases.update_purchase_order import UpdatePurchaseOrderUseCase
from procurement.core.entities.purchase_order import PurchaseOrderStatus
from procurement.core.exceptions import PurchaseOrderNotFoundError
from procurement.infrastructure.storage.sqlite.purchase_order_store import (
    SQLitePurchaseOrderStore,
)

router = APIRouter(prefix="/api/purchase-orders", tags=["purchase-orders"])


@router.get("", response_model=PurchaseOrderListResponse)
async def list_purchase_orders(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    order_status: PurchaseOrderStatus | None = Query(default=None, alias="status"),
    store: SQLitePurchaseOrderStore = Depends(get_po_store),
) -> PurchaseOrderListResponse:
    """List purchase orders, newest first."""
    orders = await store.list_orders(limit=limit, offset=offset, status=order_status)
    total = await store.count_orders(status=order_status)
    return PurchaseOrderListResponse(
        orders=[PurchaseOrderResponse.from_entity(o) for o in orders],
        total=total,
        limit=limit,
        offset=offset,
        has_more=offset + len(orders) < total,
    )


@router.post(
    "",
    response_model=PurchaseOrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_purchase_order(
    request: CreatePurchaseOrderRequest,
    use_case: CreatePurchaseOrderUseCase = Depends(get_create_purchase_order_use_case),
) -> PurchaseOrderResponse:
    """Create a purchase order with its line items."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get(
    "/{order_id}",
    response_model=PurchaseOrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_purchase_order(
    order_id: int,
    store: SQLitePurchaseOrderStore = Depends(get_po_store),
) -> PurchaseOrderResponse:
    """Get a purchase order with its line items."""
    order = await store.get_order(order_id)
    if order is None:
        raise PurchaseOrderNotFoundError(order_id)
    return PurchaseOrderResponse.from_entity(order)


@router.put(
    "/{order_id}",
    response_model=UpdatePurchaseOrderResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_purchase_order(
    order_id: int,
    request: UpdatePurchaseOrderRequest,
    use_case: UpdatePurchaseOrderUseCase = Depends(get_update_purchase_order_use_case),
) -> UpdatePurchaseOrderResponse:
    """
    Replace header fields and line items.

    Lines with a known ID are updated when changed, lines without an ID
    are created, and stored lines missing from the request are deleted.
    """
    result = await use_case.execute(order_id, request)
    return use_case.to_response(result)


@router.delete(
    "/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_purchase_order(
    order_id: int,
    store: SQLitePurchaseOrderStore = Depends(get_po_store),
) -> Response:
    """Delete a purchase order and its line items."""
    if not await store.delete_order(order_id):
        raise PurchaseOrderNotFoundError(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

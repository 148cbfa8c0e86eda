"""Inventory ledger endpoints."""

from fastapi import APIRouter, Depends, Query, status

from procurement.api.dependencies import (
    get_create_inventory_record_use_case,
    get_record_movement_use_case,
    get_reverse_movement_use_case,
    get_stock_store,
    get_update_inventory_record_use_case,
    get_verify_inventory_use_case,
)
from procurement.application.dto.requests import (
    CreateInventoryRecordRequest,
    RecordMovementRequest,
    ReverseMovementRequest,
    UpdateInventoryRecordRequest,
)
from procurement.application.dto.responses import (
    ErrorResponse,
    InventoryMovementResponse,
    InventoryRecordResponse,
    InventoryStatusResponse,
    LedgerVerificationResponse,
    RecordMovementResponse,
)
from procurement.application.use_cases.create_inventory_record import (
    CreateInventoryRecordUseCase,
)
from procurement.application.use_cases.record_movement import (
    RecordMovementUseCase,
    ReverseMovementUseCase,
)
from procurement.application.use_cases.update_inventory_record import (
    UpdateInventoryRecordUseCase,
)
from procurement.application.use_cases.verify_inventory import VerifyInventoryUseCase
from procurement.core.exceptions import InventoryRecordNotFoundError
from procurement.infrastructure.storage.sqlite import SQLiteInventoryStore

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("", response_model=InventoryStatusResponse)
async def get_inventory_status(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    store: SQLiteInventoryStore = Depends(get_stock_store),
) -> InventoryStatusResponse:
    """Get current stock and stock status for all tracked materials."""
    records = await store.list_records(limit=limit, offset=offset)
    return InventoryStatusResponse(
        items=[InventoryRecordResponse.from_entity(r) for r in records],
        total=len(records),
    )


@router.post(
    "",
    response_model=InventoryRecordResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def create_inventory_record(
    request: CreateInventoryRecordRequest,
    use_case: CreateInventoryRecordUseCase = Depends(get_create_inventory_record_use_case),
) -> InventoryRecordResponse:
    """Open the inventory record for a material."""
    record = await use_case.execute(request)
    return use_case.to_response(record)


@router.get("/movements", response_model=list[InventoryMovementResponse])
async def list_movements(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    store: SQLiteInventoryStore = Depends(get_stock_store),
) -> list[InventoryMovementResponse]:
    """List stock movements across all materials, newest first."""
    movements = await store.list_movements(limit=limit, offset=offset)
    return [InventoryMovementResponse.from_entity(m) for m in movements]


@router.post(
    "/movements",
    response_model=RecordMovementResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def record_movement(
    request: RecordMovementRequest,
    use_case: RecordMovementUseCase = Depends(get_record_movement_use_case),
) -> RecordMovementResponse:
    """Record an In, Out or Adjustment movement and update the stock level."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post(
    "/movements/{movement_id}/reverse",
    response_model=RecordMovementResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def reverse_movement(
    movement_id: int,
    request: ReverseMovementRequest | None = None,
    use_case: ReverseMovementUseCase = Depends(get_reverse_movement_use_case),
) -> RecordMovementResponse:
    """
    Cancel out a movement.

    The original stays in the log; an Adjustment with the opposite delta
    is appended. A movement can be reversed only once.
    """
    body = request or ReverseMovementRequest()
    result = await use_case.execute(
        movement_id,
        performed_by=body.performed_by,
        notes=body.notes,
    )
    return use_case.to_response(result)


@router.get(
    "/{material_id}",
    response_model=InventoryRecordResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_inventory_record(
    material_id: int,
    store: SQLiteInventoryStore = Depends(get_stock_store),
) -> InventoryRecordResponse:
    """Get the inventory record for a material."""
    record = await store.get_record_by_material(material_id)
    if record is None:
        raise InventoryRecordNotFoundError(material_id)
    return InventoryRecordResponse.from_entity(record)


@router.put(
    "/{material_id}",
    response_model=InventoryRecordResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_inventory_record(
    material_id: int,
    request: UpdateInventoryRecordRequest,
    use_case: UpdateInventoryRecordUseCase = Depends(get_update_inventory_record_use_case),
) -> InventoryRecordResponse:
    """Change reorder thresholds and location. Stock is left untouched."""
    record = await use_case.execute(material_id, request)
    return use_case.to_response(record)


@router.get(
    "/{material_id}/movements",
    response_model=list[InventoryMovementResponse],
    responses={404: {"model": ErrorResponse}},
)
async def get_movements(
    material_id: int,
    limit: int = Query(default=100, ge=1, le=500),
    store: SQLiteInventoryStore = Depends(get_stock_store),
) -> list[InventoryMovementResponse]:
    """Get movement history for a material, newest first."""
    record = await store.get_record_by_material(material_id)
    if record is None:
        raise InventoryRecordNotFoundError(material_id)
    movements = await store.get_movements(material_id, limit=limit)
    return [InventoryMovementResponse.from_entity(m) for m in movements]


@router.get(
    "/{material_id}/verify",
    response_model=LedgerVerificationResponse,
    responses={404: {"model": ErrorResponse}},
)
async def verify_inventory(
    material_id: int,
    use_case: VerifyInventoryUseCase = Depends(get_verify_inventory_use_case),
) -> LedgerVerificationResponse:
    """Replay the movement log and compare it with the cached stock."""
    drift = await use_case.execute(material_id)
    return use_case.to_response(drift)

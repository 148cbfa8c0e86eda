"""
Materials catalog endpoints.
"""

from fastapi import APIRouter, Depends, Query, status

from procurement.api.dependencies import get_mat_store
from procurement.application.dto.requests import CreateMaterialRequest, UpdateMaterialRequest
from procurement.application.dto.responses import (
    ErrorResponse,
    MaterialListResponse,
    MaterialResponse,
)
from procurement.config import get_logger
from procurement.core.entities.material import Material
from procurement.core.exceptions import MaterialNotFoundError
from procurement.infrastructure.storage.sqlite.material_store import SQLiteMaterialStore

_logger = get_logger(__name__)

router = APIRouter(prefix="/api/materials", tags=["materials"])


@router.get("", response_model=MaterialListResponse)
async def list_materials(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    store: SQLiteMaterialStore = Depends(get_mat_store),
) -> MaterialListResponse:
    """List catalog materials ordered by name."""
    materials = await store.list_materials(limit=limit, offset=offset)
    return MaterialListResponse(
        materials=[MaterialResponse.from_entity(m) for m in materials],
        total=len(materials),
    )


@router.post(
    "",
    response_model=MaterialResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def create_material(
    request: CreateMaterialRequest,
    store: SQLiteMaterialStore = Depends(get_mat_store),
) -> MaterialResponse:
    """Add a material to the catalog."""
    material = await store.create_material(
        Material(
            name=request.name,
            unit_of_measure=request.unit_of_measure,
            unit_price=request.unit_price,
            description=request.description,
        )
    )
    _logger.info("material_created", material_id=material.id, name=material.name)
    return MaterialResponse.from_entity(material)


@router.get(
    "/{material_id}",
    response_model=MaterialResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_material(
    material_id: int,
    store: SQLiteMaterialStore = Depends(get_mat_store),
) -> MaterialResponse:
    """Get a material by ID."""
    material = await store.get_material(material_id)
    if material is None:
        raise MaterialNotFoundError(material_id)
    return MaterialResponse.from_entity(material)


@router.put(
    "/{material_id}",
    response_model=MaterialResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_material(
    material_id: int,
    request: UpdateMaterialRequest,
    store: SQLiteMaterialStore = Depends(get_mat_store),
) -> MaterialResponse:
    """
    Update a catalog material.

    Existing order lines keep the price captured when they were ordered.
    """
    existing = await store.get_material(material_id)
    if existing is None:
        raise MaterialNotFoundError(material_id)

    material = await store.update_material(
        existing.model_copy(
            update={
                "name": request.name,
                "unit_of_measure": request.unit_of_measure,
                "unit_price": request.unit_price,
                "description": request.description,
            }
        )
    )
    return MaterialResponse.from_entity(material)

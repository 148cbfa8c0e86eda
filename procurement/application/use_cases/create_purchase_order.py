"""Create Purchase Order Use Case."""

from dataclasses import dataclass
from datetime import UTC, date, datetime

from procurement.application.dto.requests import CreatePurchaseOrderRequest
from procurement.application.dto.responses import PurchaseOrderResponse
from procurement.application.services import get_line_item_reconciler
from procurement.config import get_logger
from procurement.core.entities.purchase_order import PurchaseOrder, PurchaseOrderItemInput
from procurement.core.exceptions import MaterialNotFoundError
from procurement.core.interfaces.material_store import IMaterialStore
from procurement.core.interfaces.purchase_order_store import IPurchaseOrderStore
from procurement.core.services.line_item_reconciler import LineItemReconciler

logger = get_logger(__name__)


@dataclass
class CreatePurchaseOrderResult:
    """Result of creating a purchase order."""

    order: PurchaseOrder


class CreatePurchaseOrderUseCase:
    """Create a purchase order header and its line items atomically."""

    def __init__(
        self,
        order_store: IPurchaseOrderStore | None = None,
        material_store: IMaterialStore | None = None,
        reconciler: LineItemReconciler | None = None,
    ):
        self._order_store = order_store
        self._material_store = material_store
        self._reconciler = reconciler

    async def _get_order_store(self) -> IPurchaseOrderStore:
        if self._order_store is None:
            from procurement.infrastructure.storage.sqlite import get_purchase_order_store

            self._order_store = await get_purchase_order_store()
        return self._order_store

    async def _get_material_store(self) -> IMaterialStore:
        if self._material_store is None:
            from procurement.infrastructure.storage.sqlite import get_material_store

            self._material_store = await get_material_store()
        return self._material_store

    def _get_reconciler(self) -> LineItemReconciler:
        if self._reconciler is None:
            self._reconciler = get_line_item_reconciler()
        return self._reconciler

    async def execute(
        self,
        request: CreatePurchaseOrderRequest,
        today: date | None = None,
    ) -> CreatePurchaseOrderResult:
        """Execute create purchase order use case."""
        logger.info(
            "create_purchase_order_started",
            project_id=request.project_id,
            supplier_id=request.supplier_id,
            items=len(request.items),
        )

        # 1. Validate header date and lines, compute the total
        reconciler = self._get_reconciler()
        reconciler.validate_new_order(request.order_date, request.status, today)
        submitted = [
            PurchaseOrderItemInput(
                material_id=item.material_id,
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
            for item in request.items
        ]
        plan = reconciler.build_items(submitted)

        # 2. Every line must reference a known material
        await ensure_materials_exist(
            await self._get_material_store(),
            [item.material_id for item in plan.items],
        )

        # 3. Persist header and lines together
        now = datetime.now(UTC)
        order = PurchaseOrder(
            project_id=request.project_id,
            supplier_id=request.supplier_id,
            order_date=request.order_date,
            status=request.status,
            items=plan.items,
            created_by=request.created_by,
            created_at=now,
            updated_at=now,
        )
        store = await self._get_order_store()
        order = await store.create_order(order, plan)

        logger.info(
            "purchase_order_created",
            order_id=order.id,
            items=len(order.items),
            total_amount=plan.new_total,
        )
        return CreatePurchaseOrderResult(order=order)

    def to_response(self, result: CreatePurchaseOrderResult) -> PurchaseOrderResponse:
        """Convert result to API response."""
        return PurchaseOrderResponse.from_entity(result.order)


async def ensure_materials_exist(store: IMaterialStore, material_ids: list[int]) -> None:
    """Raise MaterialNotFoundError for the lowest unknown material ID."""
    found = await store.get_materials(material_ids)
    missing = set(material_ids) - found.keys()
    if missing:
        raise MaterialNotFoundError(min(missing))

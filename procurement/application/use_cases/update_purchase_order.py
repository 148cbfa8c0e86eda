"""Update Purchase Order Use Case - wholesale line replacement via reconciliation."""

from dataclasses import dataclass
from datetime import UTC, datetime

from procurement.application.dto.requests import UpdatePurchaseOrderRequest
from procurement.application.dto.responses import (
    LineItemChangesResponse,
    PurchaseOrderResponse,
    UpdatePurchaseOrderResponse,
)
from procurement.application.services import get_line_item_reconciler
from procurement.application.use_cases.create_purchase_order import ensure_materials_exist
from procurement.config import get_logger
from procurement.core.entities.purchase_order import PurchaseOrder, PurchaseOrderItemInput
from procurement.core.exceptions import PurchaseOrderNotFoundError
from procurement.core.interfaces.material_store import IMaterialStore
from procurement.core.interfaces.purchase_order_store import IPurchaseOrderStore
from procurement.core.services.line_item_reconciler import LineItemReconciler, ReconciliationPlan

logger = get_logger(__name__)


@dataclass
class UpdatePurchaseOrderResult:
    """Result of updating a purchase order."""

    order: PurchaseOrder
    plan: ReconciliationPlan


class UpdatePurchaseOrderUseCase:
    """
    Replace an order's header and full line set.

    The reconciler partitions the submitted lines; the store applies the
    partitions and the new total in one transaction. Concurrent edits are
    last-write-wins.
    """

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
        order_id: int,
        request: UpdatePurchaseOrderRequest,
    ) -> UpdatePurchaseOrderResult:
        """Execute update purchase order use case."""
        logger.info("update_purchase_order_started", order_id=order_id, items=len(request.items))

        store = await self._get_order_store()
        existing = await store.get_order(order_id)
        if existing is None:
            raise PurchaseOrderNotFoundError(order_id)

        submitted = [
            PurchaseOrderItemInput(
                id=item.id,
                material_id=item.material_id,
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
            for item in request.items
        ]
        plan = self._get_reconciler().reconcile(existing.items, submitted)

        changed = plan.to_create + plan.to_update
        if changed:
            await ensure_materials_exist(
                await self._get_material_store(),
                [item.material_id for item in changed],
            )

        order = existing.model_copy(
            update={
                "project_id": request.project_id,
                "supplier_id": request.supplier_id,
                "order_date": request.order_date,
                "status": request.status,
                "items": plan.items,
                "updated_at": datetime.now(UTC),
            }
        )
        order = await store.apply_plan(order, plan)

        logger.info(
            "purchase_order_updated",
            order_id=order_id,
            created=len(plan.to_create),
            updated=len(plan.to_update),
            deleted=len(plan.to_delete),
            total_amount=plan.new_total,
        )
        return UpdatePurchaseOrderResult(order=order, plan=plan)

    def to_response(self, result: UpdatePurchaseOrderResult) -> UpdatePurchaseOrderResponse:
        """Convert result to API response."""
        return UpdatePurchaseOrderResponse(
            order=PurchaseOrderResponse.from_entity(result.order),
            changes=LineItemChangesResponse(
                created=len(result.plan.to_create),
                updated=len(result.plan.to_update),
                deleted=len(result.plan.to_delete),
            ),
        )

"""
Line-item reconciler.

Layer-pure service: turns a wholesale replacement of a purchase order's
lines into create/update/delete partitions plus the new order total.
NO infrastructure imports; the caller applies the plan atomically.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from procurement.core.entities.purchase_order import (
    PurchaseOrderItem,
    PurchaseOrderItemInput,
    PurchaseOrderStatus,
)
from procurement.core.exceptions import (
    EmptyOrderError,
    PurchaseOrderItemNotFoundError,
    ValidationError,
)
from procurement.core.services.rules import ensure_finite, ensure_not_future


@dataclass
class ReconciliationPlan:
    """Partitioned changes for one order edit."""

    to_create: list[PurchaseOrderItem] = field(default_factory=list)
    to_update: list[PurchaseOrderItem] = field(default_factory=list)
    to_delete: list[PurchaseOrderItem] = field(default_factory=list)
    new_total: float = 0.0
    # Resulting line set, in submitted order (created lines have no id yet)
    items: list[PurchaseOrderItem] = field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.to_create or self.to_update or self.to_delete)


class LineItemReconciler:
    """
    Reconcile an order's existing lines against a submitted set.

    Identity decides the partition:
    - submitted with an existing id -> update (or untouched when identical)
    - submitted without id -> create
    - existing id missing from the submission -> delete
    """

    DEFAULT_MAX_LINE_ITEMS = 100

    def __init__(self, max_line_items: int | None = None):
        self._max_line_items = max_line_items or self.DEFAULT_MAX_LINE_ITEMS

    def reconcile(
        self,
        existing_items: Sequence[PurchaseOrderItem],
        submitted_items: Sequence[PurchaseOrderItemInput],
    ) -> ReconciliationPlan:
        """
        Compute the plan for replacing ``existing_items`` with ``submitted_items``.

        Raises:
            EmptyOrderError: submission leaves the order with no lines
            ValidationError: bad quantity/price, duplicates, too many lines
            PurchaseOrderItemNotFoundError: submitted id not on this order
        """
        self._validate_submission(submitted_items)

        existing_by_id = {item.id: item for item in existing_items if item.id is not None}
        submitted_ids = {item.id for item in submitted_items if item.id is not None}

        unknown = submitted_ids - existing_by_id.keys()
        if unknown:
            raise PurchaseOrderItemNotFoundError(min(unknown))

        plan = ReconciliationPlan()
        for submitted in submitted_items:
            if submitted.id is None:
                line = PurchaseOrderItem(
                    material_id=submitted.material_id,
                    quantity=submitted.quantity,
                    unit_price=submitted.unit_price,
                )
                plan.to_create.append(line)
            else:
                current = existing_by_id[submitted.id]
                line = current.model_copy(
                    update={
                        "material_id": submitted.material_id,
                        "quantity": submitted.quantity,
                        "unit_price": submitted.unit_price,
                    }
                )
                if not _same_line(current, line):
                    plan.to_update.append(line)
            plan.items.append(line)

        removed = existing_by_id.keys() - submitted_ids
        plan.to_delete = [item for item in existing_items if item.id in removed]
        plan.new_total = sum(line.line_total for line in plan.items)
        return plan

    def build_items(self, submitted_items: Sequence[PurchaseOrderItemInput]) -> ReconciliationPlan:
        """Plan for a brand-new order: every line is a create."""
        return self.reconcile([], submitted_items)

    @staticmethod
    def validate_new_order(
        order_date: date,
        status: PurchaseOrderStatus,
        today: date | None = None,
    ) -> None:
        """A Draft order cannot be dated in the future."""
        if PurchaseOrderStatus(status) == PurchaseOrderStatus.DRAFT:
            ensure_not_future("order_date", order_date, today)

    def _validate_submission(self, submitted_items: Sequence[PurchaseOrderItemInput]) -> None:
        if not submitted_items:
            raise EmptyOrderError()

        if len(submitted_items) > self._max_line_items:
            raise ValidationError(
                "items",
                f"Maximum {self._max_line_items} items allowed",
                len(submitted_items),
            )

        seen_ids: set[int] = set()
        seen_materials: set[int] = set()
        for index, item in enumerate(submitted_items):
            ensure_finite(f"items[{index}].quantity", item.quantity)
            ensure_finite(f"items[{index}].unit_price", item.unit_price)
            if item.quantity <= 0:
                raise ValidationError(f"items[{index}].quantity", "must be greater than 0", item.quantity)
            if item.unit_price < 0:
                raise ValidationError(f"items[{index}].unit_price", "cannot be negative", item.unit_price)

            if item.id is not None:
                if item.id in seen_ids:
                    raise ValidationError(f"items[{index}].id", "line item submitted twice", item.id)
                seen_ids.add(item.id)

            if item.material_id in seen_materials:
                raise ValidationError(
                    "items",
                    "Duplicate materials are not allowed. Each material can only appear once.",
                    item.material_id,
                )
            seen_materials.add(item.material_id)


def _same_line(a: PurchaseOrderItem, b: PurchaseOrderItem) -> bool:
    return (
        a.material_id == b.material_id
        and a.quantity == b.quantity
        and a.unit_price == b.unit_price
    )

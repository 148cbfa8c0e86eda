"""Abstract interface for purchase order storage."""

from abc import ABC, abstractmethod

from procurement.core.entities.purchase_order import PurchaseOrder, PurchaseOrderStatus
from procurement.core.services.line_item_reconciler import ReconciliationPlan


class IPurchaseOrderStore(ABC):
    """Interface for purchase orders and their line items."""

    @abstractmethod
    async def create_order(self, order: PurchaseOrder, plan: ReconciliationPlan) -> PurchaseOrder:
        """Insert header and every line of ``plan`` in one transaction."""

    @abstractmethod
    async def get_order(self, order_id: int) -> PurchaseOrder | None:
        """Get order with its items."""

    @abstractmethod
    async def list_orders(
        self,
        limit: int | None = 100,
        offset: int = 0,
        status: PurchaseOrderStatus | None = None,
    ) -> list[PurchaseOrder]:
        """List orders with items, newest first. ``limit=None`` returns all."""

    @abstractmethod
    async def count_orders(self, status: PurchaseOrderStatus | None = None) -> int:
        """Count orders, optionally by status."""

    @abstractmethod
    async def apply_plan(self, order: PurchaseOrder, plan: ReconciliationPlan) -> PurchaseOrder:
        """
        Update header fields and apply create/update/delete partitions plus
        the new total as one atomic unit.
        """

    @abstractmethod
    async def delete_order(self, order_id: int) -> bool:
        """Delete order and its items. Invoices are left in place."""

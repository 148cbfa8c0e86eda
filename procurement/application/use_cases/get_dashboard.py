"""Get Dashboard Use Case - procurement summary for a period."""

from datetime import date

from procurement.application.dto.responses import (
    DashboardResponse,
    OrderSummaryResponse,
    StockAlertResponse,
    UnpaidInvoiceResponse,
)
from procurement.application.services import get_procurement_summary_service
from procurement.config import get_logger
from procurement.core.entities.purchase_order import PurchaseOrder
from procurement.core.interfaces.inventory_store import IInventoryStore
from procurement.core.interfaces.invoice_store import IInvoiceStore
from procurement.core.interfaces.purchase_order_store import IPurchaseOrderStore
from procurement.core.services.procurement_summary import (
    ProcurementSummary,
    ProcurementSummaryService,
)

logger = get_logger(__name__)


def _order_row(order: PurchaseOrder) -> OrderSummaryResponse:
    return OrderSummaryResponse(
        id=order.id,  # type: ignore[arg-type]
        po_number=order.po_number,
        project_id=order.project_id,
        supplier_id=order.supplier_id,
        order_date=order.order_date,
        total_amount=order.total_amount,
    )


class GetDashboardUseCase:
    """Aggregate orders, invoices and stock levels into dashboard figures."""

    def __init__(
        self,
        order_store: IPurchaseOrderStore | None = None,
        invoice_store: IInvoiceStore | None = None,
        inventory_store: IInventoryStore | None = None,
        summary_service: ProcurementSummaryService | None = None,
    ):
        self._order_store = order_store
        self._invoice_store = invoice_store
        self._inventory_store = inventory_store
        self._summary_service = summary_service

    async def _get_order_store(self) -> IPurchaseOrderStore:
        if self._order_store is None:
            from procurement.infrastructure.storage.sqlite import get_purchase_order_store

            self._order_store = await get_purchase_order_store()
        return self._order_store

    async def _get_invoice_store(self) -> IInvoiceStore:
        if self._invoice_store is None:
            from procurement.infrastructure.storage.sqlite import get_invoice_store

            self._invoice_store = await get_invoice_store()
        return self._invoice_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from procurement.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    def _get_summary_service(self) -> ProcurementSummaryService:
        if self._summary_service is None:
            self._summary_service = get_procurement_summary_service()
        return self._summary_service

    async def execute(self, period: str = "month", today: date | None = None) -> ProcurementSummary:
        """Execute get dashboard use case."""
        orders = await (await self._get_order_store()).list_orders(limit=None)
        invoices = await (await self._get_invoice_store()).list_invoices(limit=None)
        records = await (await self._get_inventory_store()).list_records(limit=None)

        summary = self._get_summary_service().summarize(
            orders, invoices, records, period=period, today=today
        )
        logger.debug(
            "dashboard_computed",
            period=period,
            orders=summary.total_purchase_orders,
            unpaid_invoices=len(summary.unpaid_invoices),
            stock_alerts=len(summary.stock_alerts),
        )
        return summary

    def to_response(self, summary: ProcurementSummary) -> DashboardResponse:
        """Convert result to API response."""
        return DashboardResponse(
            period=summary.period,
            period_start=summary.period_start,
            total_purchase_orders=summary.total_purchase_orders,
            status_breakdown=summary.status_breakdown,
            total_spending=summary.total_spending,
            pending_approvals=[_order_row(o) for o in summary.pending_approvals],
            draft_orders=[_order_row(o) for o in summary.draft_orders],
            unpaid_invoices=[
                UnpaidInvoiceResponse(
                    invoice_id=u.invoice_id,  # type: ignore[arg-type]
                    invoice_number=u.invoice_number,
                    purchase_order_id=u.purchase_order_id,
                    total_amount=u.total_amount,
                    outstanding=u.outstanding,
                    invoice_date=u.invoice_date,
                    days_outstanding=u.days_outstanding,
                )
                for u in summary.unpaid_invoices
            ],
            stock_alerts=[
                StockAlertResponse(
                    material_id=a.material_id,
                    current_stock=a.current_stock,
                    minimum_stock=a.minimum_stock,
                    status=a.status.value,
                )
                for a in summary.stock_alerts
            ],
        )

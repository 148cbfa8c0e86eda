"""
Procurement summary service.

Dashboard figures computed from orders, invoices and inventory records
the caller has already loaded.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from procurement.core.entities.inventory import InventoryRecord, StockStatus
from procurement.core.entities.invoice import Invoice, InvoiceStatus
from procurement.core.entities.purchase_order import PurchaseOrder, PurchaseOrderStatus
from procurement.core.exceptions import ValidationError
from procurement.core.services.inventory_ledger import InventoryLedger
from procurement.core.services.invoice_balance import InvoiceBalanceCalculator

PERIODS = ("month", "year")


@dataclass
class UnpaidInvoice:
    invoice_id: int | None
    invoice_number: str
    purchase_order_id: int
    total_amount: float
    outstanding: float
    invoice_date: date
    days_outstanding: int


@dataclass
class StockAlert:
    material_id: int
    current_stock: float
    minimum_stock: float
    status: StockStatus


@dataclass
class ProcurementSummary:
    period: str
    period_start: date
    total_purchase_orders: int
    status_breakdown: dict[str, int]
    total_spending: float
    pending_approvals: list[PurchaseOrder] = field(default_factory=list)
    draft_orders: list[PurchaseOrder] = field(default_factory=list)
    unpaid_invoices: list[UnpaidInvoice] = field(default_factory=list)
    stock_alerts: list[StockAlert] = field(default_factory=list)


class ProcurementSummaryService:
    """Aggregate dashboard metrics."""

    # Orders that count as committed spend
    SPENDING_STATUSES = frozenset(
        {
            PurchaseOrderStatus.APPROVED,
            PurchaseOrderStatus.SHIPPED,
            PurchaseOrderStatus.RECEIVED,
        }
    )
    ALERT_STATUSES = frozenset({StockStatus.LOW, StockStatus.OUT_OF_STOCK})

    def __init__(
        self,
        balance_calculator: InvoiceBalanceCalculator | None = None,
        ledger: InventoryLedger | None = None,
    ):
        self._balance = balance_calculator or InvoiceBalanceCalculator()
        self._ledger = ledger or InventoryLedger()

    @staticmethod
    def period_start(period: str, today: date) -> date:
        if period == "month":
            return today.replace(day=1)
        if period == "year":
            return today.replace(month=1, day=1)
        raise ValidationError("period", f"must be one of {', '.join(PERIODS)}", period)

    def summarize(
        self,
        orders: Sequence[PurchaseOrder],
        invoices: Sequence[Invoice],
        records: Sequence[InventoryRecord],
        period: str = "month",
        today: date | None = None,
    ) -> ProcurementSummary:
        today = today or date.today()
        start = self.period_start(period, today)

        breakdown = {status.value: 0 for status in PurchaseOrderStatus}
        for order in orders:
            breakdown[PurchaseOrderStatus(order.status).value] += 1

        spending = sum(
            order.total_amount
            for order in orders
            if order.status in self.SPENDING_STATUSES and start <= order.order_date <= today
        )

        unpaid = []
        for invoice in invoices:
            if invoice.status != InvoiceStatus.PENDING:
                continue
            owed = self._balance.outstanding(invoice.total_amount, invoice.payments)
            if owed <= 0:
                continue
            unpaid.append(
                UnpaidInvoice(
                    invoice_id=invoice.id,
                    invoice_number=invoice.invoice_number,
                    purchase_order_id=invoice.purchase_order_id,
                    total_amount=invoice.total_amount,
                    outstanding=owed,
                    invoice_date=invoice.invoice_date,
                    days_outstanding=max(0, (today - invoice.invoice_date).days),
                )
            )
        unpaid.sort(key=lambda u: u.days_outstanding, reverse=True)

        alerts = []
        for record in records:
            status = self._ledger.stock_status(record)
            if status in self.ALERT_STATUSES:
                alerts.append(
                    StockAlert(
                        material_id=record.material_id,
                        current_stock=record.current_stock,
                        minimum_stock=record.minimum_stock,
                        status=status,
                    )
                )

        return ProcurementSummary(
            period=period,
            period_start=start,
            total_purchase_orders=len(orders),
            status_breakdown=breakdown,
            total_spending=spending,
            pending_approvals=[o for o in orders if o.status == PurchaseOrderStatus.PENDING],
            draft_orders=[o for o in orders if o.status == PurchaseOrderStatus.DRAFT],
            unpaid_invoices=unpaid,
            stock_alerts=alerts,
        )

"""API route modules."""

from procurement.api.routes.dashboard import router as dashboard_router
from procurement.api.routes.health import router as health_router
from procurement.api.routes.inventory import router as inventory_router
from procurement.api.routes.invoices import router as invoices_router
from procurement.api.routes.materials import router as materials_router
from procurement.api.routes.payments import router as payments_router
from procurement.api.routes.purchase_orders import router as purchase_orders_router

__all__ = [
    "health_router",
    "materials_router",
    "purchase_orders_router",
    "invoices_router",
    "payments_router",
    "inventory_router",
    "dashboard_router",
]

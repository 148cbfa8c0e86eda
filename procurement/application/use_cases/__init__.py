"""Application use cases."""

from procurement.application.use_cases.create_inventory_record import (
    CreateInventoryRecordUseCase,
)
from procurement.application.use_cases.create_invoice import (
    CreateInvoiceResult,
    CreateInvoiceUseCase,
)
from procurement.application.use_cases.create_purchase_order import (
    CreatePurchaseOrderResult,
    CreatePurchaseOrderUseCase,
)
from procurement.application.use_cases.get_dashboard import GetDashboardUseCase
from procurement.application.use_cases.record_movement import (
    RecordMovementResult,
    RecordMovementUseCase,
    ReverseMovementUseCase,
)
from procurement.application.use_cases.record_payment import (
    RecordPaymentResult,
    RecordPaymentUseCase,
)
from procurement.application.use_cases.update_inventory_record import (
    UpdateInventoryRecordUseCase,
)
from procurement.application.use_cases.update_invoice_status import (
    UpdateInvoiceStatusResult,
    UpdateInvoiceStatusUseCase,
)
from procurement.application.use_cases.update_payment import UpdatePaymentUseCase
from procurement.application.use_cases.update_purchase_order import (
    UpdatePurchaseOrderResult,
    UpdatePurchaseOrderUseCase,
)
from procurement.application.use_cases.verify_inventory import VerifyInventoryUseCase

__all__ = [
    "CreatePurchaseOrderUseCase",
    "CreatePurchaseOrderResult",
    "UpdatePurchaseOrderUseCase",
    "UpdatePurchaseOrderResult",
    "CreateInvoiceUseCase",
    "CreateInvoiceResult",
    "UpdateInvoiceStatusUseCase",
    "UpdateInvoiceStatusResult",
    "RecordPaymentUseCase",
    "RecordPaymentResult",
    "UpdatePaymentUseCase",
    "CreateInventoryRecordUseCase",
    "UpdateInventoryRecordUseCase",
    "RecordMovementUseCase",
    "RecordMovementResult",
    "ReverseMovementUseCase",
    "VerifyInventoryUseCase",
    "GetDashboardUseCase",
]

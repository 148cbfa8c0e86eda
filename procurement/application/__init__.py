"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services and stores
3. Providing factory functions for dependency injection

Use cases are the only entry point for API mutations.
"""

from procurement.application.dto.requests import (
    CreateInventoryRecordRequest,
    CreateInvoiceRequest,
    CreateMaterialRequest,
    CreatePaymentRequest,
    CreatePurchaseOrderRequest,
    RecordMovementRequest,
    ReverseMovementRequest,
    UpdateInventoryRecordRequest,
    UpdateInvoiceStatusRequest,
    UpdateMaterialRequest,
    UpdatePaymentRequest,
    UpdatePurchaseOrderRequest,
)
from procurement.application.dto.responses import (
    DashboardResponse,
    ErrorResponse,
    HealthResponse,
    InventoryRecordResponse,
    InvoiceResponse,
    MaterialResponse,
    PurchaseOrderResponse,
)
from procurement.application.services import (
    get_inventory_ledger,
    get_invoice_balance_calculator,
    get_line_item_reconciler,
    get_payment_allocator,
    get_procurement_summary_service,
    reset_services,
)
from procurement.application.use_cases import (
    CreateInventoryRecordUseCase,
    CreateInvoiceUseCase,
    CreatePurchaseOrderUseCase,
    GetDashboardUseCase,
    RecordMovementUseCase,
    RecordPaymentUseCase,
    ReverseMovementUseCase,
    UpdateInventoryRecordUseCase,
    UpdateInvoiceStatusUseCase,
    UpdatePaymentUseCase,
    UpdatePurchaseOrderUseCase,
    VerifyInventoryUseCase,
)

__all__ = [
    # Request DTOs
    "CreateMaterialRequest",
    "UpdateMaterialRequest",
    "CreatePurchaseOrderRequest",
    "UpdatePurchaseOrderRequest",
    "CreateInvoiceRequest",
    "UpdateInvoiceStatusRequest",
    "CreatePaymentRequest",
    "UpdatePaymentRequest",
    "CreateInventoryRecordRequest",
    "UpdateInventoryRecordRequest",
    "RecordMovementRequest",
    "ReverseMovementRequest",
    # Response DTOs
    "ErrorResponse",
    "HealthResponse",
    "MaterialResponse",
    "PurchaseOrderResponse",
    "InvoiceResponse",
    "InventoryRecordResponse",
    "DashboardResponse",
    # Services
    "get_line_item_reconciler",
    "get_invoice_balance_calculator",
    "get_payment_allocator",
    "get_inventory_ledger",
    "get_procurement_summary_service",
    "reset_services",
    # Use cases
    "CreatePurchaseOrderUseCase",
    "UpdatePurchaseOrderUseCase",
    "CreateInvoiceUseCase",
    "UpdateInvoiceStatusUseCase",
    "RecordPaymentUseCase",
    "UpdatePaymentUseCase",
    "CreateInventoryRecordUseCase",
    "UpdateInventoryRecordUseCase",
    "RecordMovementUseCase",
    "ReverseMovementUseCase",
    "VerifyInventoryUseCase",
    "GetDashboardUseCase",
]

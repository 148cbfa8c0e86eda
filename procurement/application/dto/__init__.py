"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from procurement.application.dto.requests import (
    CreateInventoryRecordRequest,
    CreateInvoiceRequest,
    CreateMaterialRequest,
    CreatePaymentRequest,
    CreatePurchaseOrderRequest,
    PurchaseOrderItemRequest,
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
    InventoryMovementResponse,
    InventoryRecordResponse,
    InventoryStatusResponse,
    InvoiceListResponse,
    InvoiceResponse,
    LedgerVerificationResponse,
    LineItemChangesResponse,
    MaterialListResponse,
    MaterialResponse,
    OrderSummaryResponse,
    PaginatedResponse,
    PaymentListResponse,
    PaymentResponse,
    ProviderHealthResponse,
    PurchaseOrderItemResponse,
    PurchaseOrderListResponse,
    PurchaseOrderResponse,
    RecordMovementResponse,
    RecordPaymentResponse,
    StockAlertResponse,
    UnpaidInvoiceResponse,
    UpdatePurchaseOrderResponse,
)

__all__ = [
    # Requests
    "CreateMaterialRequest",
    "UpdateMaterialRequest",
    "PurchaseOrderItemRequest",
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
    # Responses
    "ErrorResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "PaginatedResponse",
    "MaterialResponse",
    "MaterialListResponse",
    "PurchaseOrderItemResponse",
    "PurchaseOrderResponse",
    "PurchaseOrderListResponse",
    "LineItemChangesResponse",
    "UpdatePurchaseOrderResponse",
    "PaymentResponse",
    "PaymentListResponse",
    "InvoiceResponse",
    "InvoiceListResponse",
    "RecordPaymentResponse",
    "InventoryRecordResponse",
    "InventoryStatusResponse",
    "InventoryMovementResponse",
    "RecordMovementResponse",
    "LedgerVerificationResponse",
    "OrderSummaryResponse",
    "UnpaidInvoiceResponse",
    "StockAlertResponse",
    "DashboardResponse",
]

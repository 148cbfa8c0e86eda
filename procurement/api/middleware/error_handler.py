"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action, including whether a retry can succeed
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from procurement.application.dto.responses import ErrorResponse
from procurement.config import get_logger
from procurement.core.exceptions import (
    ConfigurationError,
    InsufficientStockError,
    NotFoundError,
    PreconditionError,
    ProcurementError,
    StaleRecordError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)


# Map exceptions to HTTP status codes. First isinstance match wins.
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InsufficientStockError: status.HTTP_409_CONFLICT,
    PreconditionError: status.HTTP_409_CONFLICT,
    StaleRecordError: status.HTTP_409_CONFLICT,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
}

# Hint messages per error code / exception type
HINT_MAP: dict[str, str] = {
    "MATERIAL_NOT_FOUND": "Check the material ID and try GET /api/materials to list materials.",
    "PURCHASE_ORDER_NOT_FOUND": "Check the order ID and try GET /api/purchase-orders.",
    "PURCHASE_ORDER_ITEM_NOT_FOUND": "Submitted line item IDs must belong to this order. Omit the ID to add a new line.",
    "INVOICE_NOT_FOUND": "Check the invoice ID and try GET /api/invoices to list available invoices.",
    "PAYMENT_NOT_FOUND": "Check the payment ID and try GET /api/payments.",
    "INVENTORY_RECORD_NOT_FOUND": "Open an inventory record with POST /api/inventory first.",
    "INVENTORY_MOVEMENT_NOT_FOUND": "Check the movement ID and try GET /api/inventory/movements.",
    "EMPTY_ORDER": "Submit at least one line item. Cancel the order instead of removing every line.",
    "DUPLICATE_INVOICE_NUMBER": "Invoice numbers are unique. Use a different number.",
    "INSUFFICIENT_STOCK": "Reduce the quantity or record incoming stock first. Retrying unchanged will fail.",
    "PURCHASE_ORDER_NOT_INVOICEABLE": "Approve or receive the purchase order before invoicing it.",
    "INVALID_STATUS_TRANSITION": "Record the outstanding payments first.",
    "DUPLICATE_INVENTORY_RECORD": "Use PUT /api/inventory/{material_id} to change thresholds.",
    "MOVEMENT_ALREADY_REVERSED": "Reverse the compensating movement instead if the correction was wrong.",
    "STALE_RECORD": "Another write changed this record. Retrying the request is safe.",
    "VALIDATION_ERROR": "Check the request body against the API schema.",
    "DATABASE_ERROR": "A database operation failed. Check server logs.",
    "ValueError": "A parameter value is invalid. Check the request.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body. Retrying unchanged will fail.",
    404: "The requested resource was not found. Verify the ID.",
    409: "The request conflicts with the current state of the resource.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(request: Request, exc: Exception) -> JSONResponse:
    """Convert exception to standardized JSON response."""
    status_code = _status_for(exc)

    if isinstance(exc, ProcurementError):
        error_code = exc.code
        message = exc.message
        detail = str(exc.details) if exc.details else None
    else:
        error_code = exc.__class__.__name__
        message = str(exc)
        detail = None

    request_id = getattr(request.state, "request_id", None)

    if status_code >= 500:
        logger.error(
            "unhandled_exception",
            request_id=request_id,
            path=request.url.path,
            error_type=error_code,
            error=str(exc),
            traceback=traceback.format_exc(),
        )
    else:
        logger.info(
            "request_rejected",
            request_id=request_id,
            path=request.url.path,
            error_code=error_code,
            status=status_code,
        )

    error_response = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=_get_hint(error_code, status_code),
        detail=detail,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Catches whatever escaped the registered exception handlers.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)

        except Exception as e:
            return _error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(ProcurementError)
    async def procurement_exception_handler(
        request: Request,
        exc: ProcurementError,
    ) -> JSONResponse:
        """Translate domain errors to their HTTP status."""
        return _error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")

        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint="Check the request body fields and types.",
                detail="; ".join(errors),
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code)
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=exc.detail or "An error occurred",
                hint=_get_hint(error_code, exc.status_code),
                path=request.url.path,
            ).model_dump(mode="json"),
        )


def _infer_error_code(status_code: int) -> str:
    """Infer a machine-readable error code from an HTTP status."""
    if status_code == 404:
        return "NOT_FOUND"
    if status_code == 405:
        return "METHOD_NOT_ALLOWED"
    if status_code == 400:
        return "BAD_REQUEST"
    if status_code == 422:
        return "UNPROCESSABLE_ENTITY"
    return "HTTP_ERROR"

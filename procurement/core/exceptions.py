"""
Domain exceptions for the procurement ledger.

Every expected business-rule violation is one of four kinds:

- ValidationError: malformed or out-of-range input
- InsufficientStockError: an outgoing movement would drive stock negative
- PreconditionError: the entity's status forbids the operation
- NotFoundError: a referenced identity does not exist

The kind is the class, ``code`` is the machine tag and ``message`` the
human-readable reason.
"""

from typing import Any


class ProcurementError(Exception):
    """Base exception for all procurement errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(ProcurementError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class EmptyOrderError(ValidationError):
    """A purchase order would be left without line items."""

    def __init__(self) -> None:
        super().__init__(
            field="items",
            message="A purchase order must have at least one line item",
        )
        self.code = "EMPTY_ORDER"


class DuplicateInvoiceNumberError(ValidationError):
    """Invoice number is already used by another invoice."""

    def __init__(self, invoice_number: str, existing_id: int | None = None):
        super().__init__(
            field="invoice_number",
            message=f"Invoice number '{invoice_number}' already exists",
            value=invoice_number,
        )
        self.code = "DUPLICATE_INVOICE_NUMBER"
        self.details["existing_id"] = existing_id


# Stock Exceptions
class InsufficientStockError(ProcurementError):
    """Movement would drive stock below zero."""

    def __init__(self, material_id: int, requested: float, available: float):
        super().__init__(
            f"Insufficient stock for material {material_id}: "
            f"requested {requested}, available {available}",
            code="INSUFFICIENT_STOCK",
            details={
                "material_id": material_id,
                "requested": requested,
                "available": available,
            },
        )


# Precondition Exceptions
class PreconditionError(ProcurementError):
    """Operation attempted against an entity in a status that forbids it."""

    def __init__(
        self,
        message: str,
        code: str = "PRECONDITION_FAILED",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, details=details)


class PurchaseOrderNotInvoiceableError(PreconditionError):
    """Invoices can only be raised against approved or received orders."""

    def __init__(self, purchase_order_id: int, status: str):
        super().__init__(
            f"Purchase order {purchase_order_id} is {status}; "
            "only Approved or Received orders can be invoiced",
            code="PURCHASE_ORDER_NOT_INVOICEABLE",
            details={"purchase_order_id": purchase_order_id, "status": status},
        )


class InvalidStatusTransitionError(PreconditionError):
    """Requested status change is not allowed."""

    def __init__(self, entity: str, current: str, requested: str, reason: str | None = None):
        super().__init__(
            f"Cannot move {entity} from {current} to {requested}"
            + (f": {reason}" if reason else ""),
            code="INVALID_STATUS_TRANSITION",
            details={
                "entity": entity,
                "current": current,
                "requested": requested,
                "reason": reason,
            },
        )


class DuplicateInventoryRecordError(PreconditionError):
    """Material already has an inventory record."""

    def __init__(self, material_id: int):
        super().__init__(
            f"Material {material_id} already has an inventory record",
            code="DUPLICATE_INVENTORY_RECORD",
            details={"material_id": material_id},
        )


class MovementAlreadyReversedError(PreconditionError):
    """A movement can be reversed once."""

    def __init__(self, movement_id: int, reversal_id: int | None = None):
        super().__init__(
            f"Movement {movement_id} has already been reversed",
            code="MOVEMENT_ALREADY_REVERSED",
            details={"movement_id": movement_id, "reversal_id": reversal_id},
        )


# Not Found Exceptions
class NotFoundError(ProcurementError):
    """Referenced identity does not exist."""

    def __init__(self, entity: str, entity_id: Any, code: str | None = None):
        super().__init__(
            f"{entity} not found: {entity_id}",
            code=code or "NOT_FOUND",
            details={"entity": entity, "id": entity_id},
        )


class MaterialNotFoundError(NotFoundError):
    """Material not found."""

    def __init__(self, material_id: int):
        super().__init__("Material", material_id, code="MATERIAL_NOT_FOUND")


class PurchaseOrderNotFoundError(NotFoundError):
    """Purchase order not found."""

    def __init__(self, purchase_order_id: int):
        super().__init__("Purchase order", purchase_order_id, code="PURCHASE_ORDER_NOT_FOUND")


class PurchaseOrderItemNotFoundError(NotFoundError):
    """Submitted line item id does not belong to the order."""

    def __init__(self, item_id: int):
        super().__init__("Purchase order item", item_id, code="PURCHASE_ORDER_ITEM_NOT_FOUND")


class InvoiceNotFoundError(NotFoundError):
    """Invoice not found."""

    def __init__(self, invoice_id: int):
        super().__init__("Invoice", invoice_id, code="INVOICE_NOT_FOUND")


class PaymentNotFoundError(NotFoundError):
    """Payment not found."""

    def __init__(self, payment_id: int):
        super().__init__("Payment", payment_id, code="PAYMENT_NOT_FOUND")


class InventoryRecordNotFoundError(NotFoundError):
    """No inventory record for the material."""

    def __init__(self, material_id: int):
        super().__init__("Inventory record for material", material_id, code="INVENTORY_RECORD_NOT_FOUND")


class InventoryMovementNotFoundError(NotFoundError):
    """Movement not found."""

    def __init__(self, movement_id: int):
        super().__init__("Inventory movement", movement_id, code="INVENTORY_MOVEMENT_NOT_FOUND")


# Storage Exceptions
class StorageError(ProcurementError):
    """Base exception for storage operations."""

    pass


class StaleRecordError(StorageError):
    """Row changed between read and write (optimistic lock lost)."""

    def __init__(self, entity: str, entity_id: int, expected_version: int | None = None):
        message = f"{entity} {entity_id} was modified concurrently"
        if expected_version is not None:
            message += f" (expected version {expected_version})"
        super().__init__(
            message,
            code="STALE_RECORD",
            details={
                "entity": entity,
                "id": entity_id,
                "expected_version": expected_version,
            },
        )


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ConfigurationError(ProcurementError):
    """Configuration error."""

    pass

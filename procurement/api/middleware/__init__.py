"""API middleware."""

from procurement.api.middleware.error_handler import ErrorHandlerMiddleware
from procurement.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]

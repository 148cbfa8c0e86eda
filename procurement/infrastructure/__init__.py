"""Infrastructure layer implementations."""

from procurement.infrastructure import storage

__all__ = ["storage"]

"""Core domain layer - entities, interfaces, services and exceptions."""

from procurement.core import entities, exceptions, interfaces, services

__all__ = ["entities", "interfaces", "exceptions", "services"]

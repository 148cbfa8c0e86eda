"""Database migrations module."""

from procurement.infrastructure.storage.sqlite.migrations.migrator import (
    MigrationInfo,
    MigrationResult,
    discover_migrations,
    get_migration_status,
    initialize_database,
    verify_schema_integrity,
)

__all__ = [
    "MigrationInfo",
    "MigrationResult",
    "discover_migrations",
    "get_migration_status",
    "initialize_database",
    "verify_schema_integrity",
]

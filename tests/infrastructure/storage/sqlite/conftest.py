"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import procurement.infrastructure.storage.sqlite.connection as conn_module
from procurement.core.entities import Material
from procurement.infrastructure.storage.sqlite.connection import close_pool
from procurement.infrastructure.storage.sqlite.material_store import SQLiteMaterialStore
from procurement.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
def mock_settings(temp_db_path: Path):
    """Mock settings with temp database path."""
    mock = MagicMock()
    mock.storage.db_path = temp_db_path
    mock.storage.pool_size = 1
    mock.storage.busy_timeout = 5000
    return mock


@pytest.fixture
async def migrated_db(temp_db_path: Path, mock_settings) -> AsyncGenerator[Path, None]:
    """Migrated temp database with the global pool pointed at it."""
    await initialize_database(temp_db_path, create_backup_before=False)

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield temp_db_path
        finally:
            await close_pool()


@pytest.fixture
async def material_ids(migrated_db: Path) -> list[int]:
    """Two catalog materials every store test can reference."""
    store = SQLiteMaterialStore()
    cement = await store.create_material(
        Material(name="Portland cement", unit_of_measure="bag", unit_price=8.5)
    )
    rebar = await store.create_material(
        Material(name="Rebar 12mm", unit_of_measure="m", unit_price=2.25)
    )
    return [cement.id, rebar.id]

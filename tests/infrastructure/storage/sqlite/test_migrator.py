"""Tests for the schema migrator."""

import shutil
from pathlib import Path

import aiosqlite
import pytest

from procurement.core.exceptions import DatabaseError
from procurement.infrastructure.storage.sqlite.migrations import migrator
from procurement.infrastructure.storage.sqlite.migrations.migrator import (
    REQUIRED_TABLES,
    discover_migrations,
    get_migration_status,
    initialize_database,
    verify_schema_integrity,
)


class TestMigrator:
    def test_discovers_initial_migration(self):
        migrations = discover_migrations()
        assert migrations[0].version == "001"
        assert migrations[0].name == "initial"
        assert len(migrations[0].checksum) == 16

    async def test_status_of_missing_database(self, temp_db_path: Path):
        status = await get_migration_status(temp_db_path)
        assert status["exists"] is False
        assert "001" in status["pending_migrations"]

    async def test_initialize_creates_schema(self, temp_db_path: Path):
        results = await initialize_database(temp_db_path, create_backup_before=False)

        assert [r.success for r in results] == [True]
        async with aiosqlite.connect(temp_db_path) as conn:
            cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
            tables = {row[0] for row in await cursor.fetchall()}
        assert set(REQUIRED_TABLES) <= tables

    async def test_rerun_applies_nothing(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)
        results = await initialize_database(temp_db_path, create_backup_before=True)

        assert results == []
        status = await get_migration_status(temp_db_path)
        assert status["current_version"] == "001"
        assert status["pending_migrations"] == []
        # Backup is removed once the run succeeds
        assert list(temp_db_path.parent.glob("*.backup_*")) == []

    async def test_verify_fresh_database(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)
        checks = {c["check"]: c for c in await verify_schema_integrity(temp_db_path)}

        assert checks["foreign_keys"]["status"] == "PASS"
        assert checks["integrity"]["status"] == "PASS"
        assert checks["required_tables"]["missing"] == []
        assert checks["stock_snapshots"]["status"] == "PASS"

    async def test_verify_flags_stock_drift(self, temp_db_path: Path):
        await initialize_database(temp_db_path, create_backup_before=False)
        async with aiosqlite.connect(temp_db_path) as conn:
            await conn.execute(
                "INSERT INTO materials (id, name, unit_of_measure, created_at, updated_at) "
                "VALUES (1, 'Sand', 't', '2024-01-01T00:00:00', '2024-01-01T00:00:00')"
            )
            await conn.execute(
                "INSERT INTO inventory_records (id, material_id, current_stock, initial_stock, "
                "last_updated, created_at) "
                "VALUES (1, 1, 99, 10, '2024-01-01T00:00:00', '2024-01-01T00:00:00')"
            )
            await conn.execute(
                "INSERT INTO inventory_movements (inventory_record_id, material_id, movement_type, "
                "quantity, movement_date, balance_after, created_at) "
                "VALUES (1, 1, 'In', 5, '2024-01-02', 15, '2024-01-02T00:00:00')"
            )
            await conn.commit()

        checks = {c["check"]: c for c in await verify_schema_integrity(temp_db_path)}
        assert checks["stock_snapshots"]["status"] == "FAIL"
        assert checks["stock_snapshots"]["materials"] == [1]


@pytest.fixture
def migrations_dir(tmp_path: Path, monkeypatch) -> Path:
    """A private copy of the shipped migrations that tests may extend."""
    directory = tmp_path / "migrations"
    directory.mkdir()
    for script in migrator.MIGRATIONS_DIR.glob("v*.sql"):
        shutil.copy2(script, directory / script.name)
    monkeypatch.setattr(migrator, "MIGRATIONS_DIR", directory)
    return directory


async def _tables(db_path: Path) -> set[str]:
    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        return {row[0] for row in await cursor.fetchall()}


class TestMigrationFailures:
    async def test_failed_migration_leaves_no_partial_schema(self, temp_db_path: Path, migrations_dir: Path):
        await initialize_database(temp_db_path, create_backup_before=False)
        (migrations_dir / "v002_broken.sql").write_text(
            "CREATE TABLE half_done (id INTEGER);\nINSERT INTO no_such_table VALUES (1);\n"
        )

        results = await initialize_database(temp_db_path, create_backup_before=True)

        assert [(r.version, r.success) for r in results] == [("002", False)]
        assert "no_such_table" in results[0].error
        assert "half_done" not in await _tables(temp_db_path)
        status = await get_migration_status(temp_db_path)
        assert status["current_version"] == "001"
        assert status["pending_migrations"] == ["002"]
        assert list(temp_db_path.parent.glob("*.backup_*")) == []

    async def test_edited_migration_is_refused(self, temp_db_path: Path, migrations_dir: Path):
        await initialize_database(temp_db_path, create_backup_before=False)
        script = migrations_dir / "v001_initial.sql"
        script.write_text(script.read_text() + "\n-- edited\n")

        with pytest.raises(DatabaseError):
            await initialize_database(temp_db_path, create_backup_before=False)

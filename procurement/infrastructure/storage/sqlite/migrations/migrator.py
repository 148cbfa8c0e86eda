"""
Schema migrator for the ledger database.

Migrations are ``vNNN_name.sql`` files beside this module. Each one runs in
its own transaction together with its ``schema_migrations`` row, so a
failing script leaves no partial schema behind. A file copy of an existing
database is taken first and put back if any migration fails.
"""

import asyncio
import hashlib
import re
import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import aiosqlite

from procurement.config import get_logger, get_settings
from procurement.core.exceptions import DatabaseError

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent
MIGRATION_FILENAME = re.compile(r"v(\d+)_(.+)\.sql")

REQUIRED_TABLES = [
    "materials",
    "purchase_orders",
    "purchase_order_items",
    "invoices",
    "payments",
    "inventory_records",
    "inventory_movements",
    "schema_migrations",
]


@dataclass
class MigrationInfo:
    """One migration script and the checksum it was discovered with."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = MIGRATION_FILENAME.fullmatch(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")
        checksum = hashlib.sha256(path.read_bytes()).hexdigest()[:16]
        return cls(version=match.group(1), name=match.group(2), path=path, checksum=checksum)


@dataclass
class MigrationResult:
    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def discover_migrations() -> list[MigrationInfo]:
    """Migration scripts in version order; misnamed files are skipped."""
    migrations = []
    for path in sorted(MIGRATIONS_DIR.glob("v*.sql")):
        try:
            migrations.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return migrations


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied versions mapped to their recorded checksums."""
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    except aiosqlite.OperationalError:
        # Fresh database, nothing applied yet
        return {}
    return {row[0]: row[1] for row in await cursor.fetchall()}


async def apply_migration(conn: aiosqlite.Connection, migration: MigrationInfo) -> MigrationResult:
    """Run one script and record it, all in a single transaction."""
    logger.info("applying_migration", version=migration.version, name=migration.name)
    started = time.monotonic()

    try:
        sql = migration.path.read_text(encoding="utf-8")
        # executescript commits first; the script's own BEGIN stays open
        await conn.executescript(f"BEGIN;\n{sql}")
        elapsed = int((time.monotonic() - started) * 1000)
        await conn.execute(
            """
            INSERT INTO schema_migrations (version, name, checksum, execution_time_ms)
            VALUES (?, ?, ?, ?)
            """,
            (migration.version, migration.name, migration.checksum, elapsed),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error("migration_failed", version=migration.version, error=str(e))
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            execution_time_ms=int((time.monotonic() - started) * 1000),
            error=str(e),
        )

    logger.info("migration_applied", version=migration.version, execution_time_ms=elapsed)
    return MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        execution_time_ms=elapsed,
    )


async def _apply_pending(db_path: Path, migrations: list[MigrationInfo]) -> list[MigrationResult]:
    results: list[MigrationResult] = []
    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA foreign_keys=ON")
        applied = await get_applied_migrations(conn)

        for migration in migrations:
            recorded = applied.get(migration.version)
            if recorded is not None:
                if recorded != migration.checksum:
                    raise DatabaseError(
                        "migrate",
                        f"migration v{migration.version} changed after it was applied; "
                        "add a new version instead",
                    )
                continue

            result = await apply_migration(conn, migration)
            results.append(result)
            if not result.success:
                break
    return results


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Apply every pending migration.

    Returns results for the migrations attempted this run; an up-to-date
    database yields an empty list. When a migration fails, the pre-run copy
    of the database file is restored.
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    migrations = discover_migrations()
    logger.info("initializing_database", db_path=str(db_path), migrations=len(migrations))

    backup_path = None
    if create_backup_before and db_path.exists():
        backup_path = db_path.with_suffix(f".backup_{datetime.now():%Y%m%d_%H%M%S}.db")
        shutil.copy2(db_path, backup_path)
        logger.info("database_backup_created", backup_path=str(backup_path))

    failed = True
    try:
        results = await _apply_pending(db_path, migrations)
        failed = any(not r.success for r in results)
    finally:
        if backup_path is not None:
            if failed:
                shutil.copy2(backup_path, db_path)
                logger.warning("database_restored_from_backup", backup_path=str(backup_path))
            backup_path.unlink()

    return results


async def get_migration_status(db_path: Path | None = None) -> dict:
    db_path = db_path or get_settings().storage.db_path
    discovered = [m.version for m in discover_migrations()]

    if not db_path.exists():
        return {
            "exists": False,
            "current_version": None,
            "applied_migrations": [],
            "pending_migrations": discovered,
        }

    async with aiosqlite.connect(db_path) as conn:
        applied = sorted(await get_applied_migrations(conn))

    return {
        "exists": True,
        "current_version": applied[-1] if applied else None,
        "applied_migrations": applied,
        "pending_migrations": [v for v in discovered if v not in applied],
    }


# Each inventory record's cached stock against its newest movement snapshot
_STOCK_DRIFT_QUERY = """
    SELECT r.material_id
    FROM inventory_records r
    JOIN inventory_movements m ON m.id = (
        SELECT MAX(id) FROM inventory_movements WHERE inventory_record_id = r.id
    )
    WHERE ABS(r.current_stock - m.balance_after) > 1e-9
    ORDER BY r.material_id
"""


def _check(name: str, passed: bool, **info) -> dict:
    return {"check": name, "status": "PASS" if passed else "FAIL", **info}


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """SQLite integrity, foreign keys, required tables and stock snapshots."""
    db_path = db_path or get_settings().storage.db_path
    checks = []

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("PRAGMA integrity_check")
        result = (await cursor.fetchone())[0]
        checks.append(_check("integrity", result == "ok", result=result))

        cursor = await conn.execute("PRAGMA foreign_key_check")
        violations = len(await cursor.fetchall())
        checks.append(_check("foreign_keys", not violations, violations=violations))

        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        tables = {row[0] for row in await cursor.fetchall()}
        missing = [t for t in REQUIRED_TABLES if t not in tables]
        checks.append(_check("required_tables", not missing, missing=missing))

        if not missing:
            cursor = await conn.execute(_STOCK_DRIFT_QUERY)
            drifted = [row[0] for row in await cursor.fetchall()]
            checks.append(_check("stock_snapshots", not drifted, materials=drifted))

    return checks


def main() -> None:
    """``procurement-migrate`` entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Procurement ledger database migrator")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    parser.add_argument("--status", action="store_true", help="Show applied and pending migrations")
    parser.add_argument("--verify", action="store_true", help="Check integrity and stock snapshots")
    parser.add_argument("--no-backup", action="store_true", help="Skip the pre-migration file copy")
    args = parser.parse_args()

    async def run() -> int:
        if args.status:
            status = await get_migration_status(args.db_path)
            print(f"Database exists: {status['exists']}")
            print(f"Current version: {status['current_version'] or 'none'}")
            print(f"Pending migrations: {', '.join(status['pending_migrations']) or 'none'}")
            return 0

        if args.verify:
            checks = await verify_schema_integrity(args.db_path)
            for check in checks:
                details = {k: v for k, v in check.items() if k not in ("check", "status")}
                print(f"[{check['status']}] {check['check']} {details}")
            return 0 if all(c["status"] == "PASS" for c in checks) else 1

        results = await initialize_database(args.db_path, create_backup_before=not args.no_backup)
        if not results:
            print("Database is up to date")
        for result in results:
            outcome = "OK" if result.success else "FAILED"
            print(f"[{outcome}] v{result.version} {result.name} ({result.execution_time_ms}ms)")
            if result.error:
                print(f"    {result.error}")
        return 0 if all(r.success for r in results) else 1

    raise SystemExit(asyncio.run(run()))


if __name__ == "__main__":
    main()

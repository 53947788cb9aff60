# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Programmatic schema migrations.

Migration modules under ``schema/`` define an alembic-style ``upgrade()``
built from ``alembic.op`` calls. They are applied in the order listed in
MIGRATIONS, each in its own transaction, and the last applied revision is
recorded in ``alembic_version``. The application lifespan runs this at
startup when ``DB_AUTO_MIGRATE`` is enabled.

Example:
    applied = await apply_migrations(engine)
    status = await get_migration_status(engine)
"""

import importlib
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from alembic.operations import Operations
from alembic.runtime.migration import MigrationContext
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

logger = logging.getLogger(__name__)

MIGRATIONS_PACKAGE = "src.infrastructure.database.migrations.schema"

# Applied in this order; append new revisions at the end
MIGRATIONS = [
    "001_initial_schema",
]

_CREATE_VERSION_TABLE = text("""
    CREATE TABLE IF NOT EXISTS alembic_version (
        version_num VARCHAR(128) NOT NULL,
        CONSTRAINT alembic_version_pkc PRIMARY KEY (version_num)
    )
""")


class MigrationError(Exception):
    """A migration module is missing or has no upgrade()."""


@dataclass
class MigrationStatus:
    """Where the database stands relative to MIGRATIONS."""

    current_version: str | None
    pending_migrations: list[str] = field(default_factory=list)

    @property
    def latest_version(self) -> str | None:
        return MIGRATIONS[-1] if MIGRATIONS else None

    @property
    def is_up_to_date(self) -> bool:
        return not self.pending_migrations


async def apply_migrations(
    engine: AsyncEngine,
    target_revision: str | None = None,
) -> list[str]:
    """Apply every pending migration, or those up to target_revision.

    Returns:
        Revisions applied by this call, in order.

    Raises:
        MigrationError: If a migration module cannot be loaded.
    """
    current = await _current_version(engine)
    pending = _get_pending_migrations(current, target_revision)

    if not pending:
        logger.info("Schema up to date at %s", current)
        return []

    logger.info("Applying %d migration(s) on top of %s", len(pending), current)

    for revision in pending:
        upgrade = _load_upgrade(revision)
        async with engine.begin() as conn:
            await conn.run_sync(_run_upgrade, upgrade)
            await _record_version(conn, revision)
        logger.info("Applied migration %s", revision)

    return pending


async def get_migration_status(engine: AsyncEngine) -> MigrationStatus:
    current = await _current_version(engine)
    return MigrationStatus(
        current_version=current,
        pending_migrations=_get_pending_migrations(current),
    )


def _get_pending_migrations(
    current_version: str | None,
    target_revision: str | None = None,
) -> list[str]:
    """List the revisions after current_version, up to target_revision.

    An unknown current or target revision yields nothing, leaving a
    database migrated by a newer release untouched.
    """
    if current_version is None:
        start = 0
    elif current_version in MIGRATIONS:
        start = MIGRATIONS.index(current_version) + 1
    else:
        logger.warning("Database is at unknown revision %s", current_version)
        return []

    if target_revision is None:
        end = len(MIGRATIONS)
    elif target_revision in MIGRATIONS:
        end = MIGRATIONS.index(target_revision) + 1
    else:
        logger.warning("Unknown target revision %s", target_revision)
        return []

    return MIGRATIONS[start:end]


async def _current_version(engine: AsyncEngine) -> str | None:
    async with engine.begin() as conn:
        await conn.execute(_CREATE_VERSION_TABLE)
        result = await conn.execute(text("SELECT version_num FROM alembic_version LIMIT 1"))
        return result.scalar_one_or_none()


async def _record_version(conn: AsyncConnection, revision: str) -> None:
    await conn.execute(text("DELETE FROM alembic_version"))
    await conn.execute(
        text("INSERT INTO alembic_version (version_num) VALUES (:version)"),
        {"version": revision},
    )


def _load_upgrade(revision: str) -> Callable[[], None]:
    try:
        module = importlib.import_module(f"{MIGRATIONS_PACKAGE}.{revision}")
    except ImportError as e:
        raise MigrationError(f"Cannot import migration {revision}: {e}") from e

    upgrade = getattr(module, "upgrade", None)
    if upgrade is None:
        raise MigrationError(f"Migration {revision} has no upgrade() function")
    return upgrade


def _run_upgrade(connection: Any, upgrade: Callable[[], None]) -> None:
    # alembic.op resolves the active Operations through a module-level proxy
    context = MigrationContext.configure(connection)
    with Operations.context(context):
        upgrade()

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure for the school directory.

This package provides the SQLAlchemy async engine and sessions, the ORM
models, schema migrations and startup seeds.

Example:
    from src.infrastructure.database import get_session, init_database

    await init_database(settings)

    async with get_session() as session:
        result = await session.execute(select(Course))
"""

from src.infrastructure.database.connection import (
    DatabaseError,
    check_database_connection,
    close_database,
    get_engine,
    get_session,
    get_sessionmaker,
    init_database,
)

__all__ = [
    "DatabaseError",
    "check_database_connection",
    "close_database",
    "get_engine",
    "get_session",
    "get_sessionmaker",
    "init_database",
]

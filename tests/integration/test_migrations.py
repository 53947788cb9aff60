# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the schema migration runner.

Migrations run against an empty in-memory SQLite database.
"""

import pytest
import pytest_asyncio
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.domains.auth.password import PasswordHasher
from src.domains.course import CourseService
from src.domains.user import UserService
from src.infrastructure.database.migrations.runner import (
    MIGRATIONS,
    _get_pending_migrations,
    apply_migrations,
    get_migration_status,
)
from src.models.account import TeacherCreateRequest
from src.models.course import CourseCreateRequest


@pytest_asyncio.fixture
async def empty_engine():
    """Engine over a database with no tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    yield engine
    await engine.dispose()


class TestPendingMigrations:
    """Tests for migration ordering."""

    def test_fresh_database_gets_everything(self) -> None:
        """Verify an unversioned database receives every migration."""
        assert _get_pending_migrations(None) == MIGRATIONS

    def test_latest_version_has_nothing_pending(self) -> None:
        """Verify nothing is pending at the latest revision."""
        assert _get_pending_migrations(MIGRATIONS[-1]) == []

    def test_unknown_version_is_left_alone(self) -> None:
        """Verify an unrecognised revision applies nothing."""
        assert _get_pending_migrations("999_from_the_future") == []

    def test_unknown_target_is_ignored(self) -> None:
        """Verify an unrecognised target applies nothing."""
        assert _get_pending_migrations(None, "missing_revision") == []


class TestApplyMigrations:
    """Tests for applying migrations."""

    @pytest.mark.asyncio
    async def test_creates_directory_tables(self, empty_engine) -> None:
        """Verify the initial migration creates every table."""
        applied = await apply_migrations(empty_engine)

        async with empty_engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
            user_columns = await conn.run_sync(
                lambda sync_conn: {c["name"] for c in inspect(sync_conn).get_columns("users")}
            )

        assert applied == MIGRATIONS
        assert {"users", "courses", "activity_logs", "alembic_version"} <= set(tables)
        assert {"id", "name", "email", "role", "grade", "courses", "enrollments"} <= user_columns

    @pytest.mark.asyncio
    async def test_second_run_is_noop(self, empty_engine) -> None:
        """Verify migrations are tracked and not re-applied."""
        await apply_migrations(empty_engine)

        assert await apply_migrations(empty_engine) == []

        status = await get_migration_status(empty_engine)
        assert status.current_version == MIGRATIONS[-1]
        assert status.is_up_to_date is True
        assert status.pending_migrations == []
        assert status.latest_version == MIGRATIONS[-1]

    @pytest.mark.asyncio
    async def test_status_before_migrating(self, empty_engine) -> None:
        """Verify an empty database reports every migration as pending."""
        status = await get_migration_status(empty_engine)

        assert status.current_version is None
        assert status.pending_migrations == MIGRATIONS
        assert status.is_up_to_date is False

    @pytest.mark.asyncio
    async def test_migrated_schema_accepts_orm_writes(self, empty_engine) -> None:
        """Verify the migrated schema matches the ORM models."""
        await apply_migrations(empty_engine)
        sessionmaker = async_sessionmaker(
            empty_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        async with sessionmaker() as session:
            teacher = await UserService(session, PasswordHasher(rounds=4)).create_teacher(
                TeacherCreateRequest(
                    name="Grace", email="grace@school.test", password="pw-123456"
                )
            )
            course = await CourseService(session).create_course(
                CourseCreateRequest(name="Compilers", teacher_id=teacher.id)
            )

        assert course.teacher_id == teacher.id
        assert course.status == "pending"

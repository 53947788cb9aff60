# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests (no database)
- Integration tests (in-memory SQLite through aiosqlite)
"""

import itertools
import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from uuid import uuid4

# Settings are cached on first use, so the test environment is set before
# any application module is imported.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-testing-only")
os.environ.setdefault("BOOTSTRAP_ADMIN_PASSWORD", "")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.domains.activity_log import Actor
from src.domains.assignment import TeacherAssignmentService
from src.domains.auth.password import PasswordHasher
from src.domains.course import CourseService
from src.domains.enrollment import EnrollmentService
from src.domains.user import UserService
from src.infrastructure.database.models import Base
from src.models.account import (
    StudentCreateRequest,
    StudentResponse,
    TeacherCreateRequest,
    TeacherResponse,
)
from src.models.course import CourseCreateRequest, CourseResponse


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (uses SQLite)"
    )


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory SQLite engine with the full schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def db_sessionmaker(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory configured like the application's."""
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(
    db_sessionmaker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create an async session for service tests."""
    async with db_sessionmaker() as session:
        yield session


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def fast_hasher() -> PasswordHasher:
    """Password hasher with the minimum bcrypt cost."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def admin_actor() -> Actor:
    """Admin identity recorded on activity entries."""
    return Actor(id=str(uuid4()), name="Test Admin")


@pytest.fixture
def user_service(db_session: AsyncSession, fast_hasher: PasswordHasher) -> UserService:
    return UserService(db_session, fast_hasher)


@pytest.fixture
def course_service(db_session: AsyncSession) -> CourseService:
    return CourseService(db_session)


@pytest.fixture
def assignment_service(db_session: AsyncSession) -> TeacherAssignmentService:
    return TeacherAssignmentService(db_session)


@pytest.fixture
def enrollment_service(db_session: AsyncSession) -> EnrollmentService:
    return EnrollmentService(db_session)


# =============================================================================
# Record Factories
# =============================================================================


@pytest.fixture
def make_teacher(
    user_service: UserService,
    admin_actor: Actor,
) -> Callable[..., Awaitable[TeacherResponse]]:
    """Factory creating teachers with unique emails."""
    counter = itertools.count(1)

    async def _make(name: str | None = None, email: str | None = None) -> TeacherResponse:
        n = next(counter)
        return await user_service.create_teacher(
            TeacherCreateRequest(
                name=name or f"Teacher {n}",
                email=email or f"teacher{n}@school.test",
                password="teacher-password",
            ),
            admin_actor,
        )

    return _make


@pytest.fixture
def make_student(
    user_service: UserService,
    admin_actor: Actor,
) -> Callable[..., Awaitable[StudentResponse]]:
    """Factory creating students with unique emails."""
    counter = itertools.count(1)

    async def _make(
        name: str | None = None,
        email: str | None = None,
        grade: str = "5",
    ) -> StudentResponse:
        n = next(counter)
        return await user_service.create_student(
            StudentCreateRequest(
                name=name or f"Student {n}",
                email=email or f"student{n}@school.test",
                password="student-password",
                grade=grade,
            ),
            admin_actor,
        )

    return _make


@pytest.fixture
def make_course(
    course_service: CourseService,
    admin_actor: Actor,
) -> Callable[..., Awaitable[CourseResponse]]:
    """Factory creating courses owned by a given teacher."""
    counter = itertools.count(1)

    async def _make(
        teacher_id: str,
        name: str | None = None,
        subject: str | None = "Math",
        grade: str | None = "5",
        approved: bool = False,
    ) -> CourseResponse:
        n = next(counter)
        course = await course_service.create_course(
            CourseCreateRequest(
                name=name or f"Course {n}",
                subject=subject,
                grade=grade,
                teacher_id=teacher_id,
            ),
            admin_actor,
        )
        if approved:
            course = await course_service.approve_course(course.id, admin_actor)
        return course

    return _make

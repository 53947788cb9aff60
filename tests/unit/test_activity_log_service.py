# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the best-effort activity log writer."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.domains.activity_log import ActivityLogService, Actor
from src.infrastructure.database.models import ActionType, ActivityLog, TargetType


@pytest.fixture
def mock_db():
    """Create mock database session."""
    db = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def write_session():
    """Create the mock session entries are written through."""
    session = AsyncMock()
    session.add = MagicMock()
    session.__aenter__.return_value = session
    return session


@pytest.fixture
def activity_service(mock_db, write_session) -> ActivityLogService:
    return ActivityLogService(mock_db, session_factory=lambda: write_session)


class TestRecord:
    """Tests for ActivityLogService.record."""

    @pytest.mark.asyncio
    async def test_writes_entry(self, activity_service, mock_db, write_session) -> None:
        """Test a complete entry is added and committed."""
        actor = Actor(id="admin-1", name="Ada")

        entry = await activity_service.record(
            actor,
            ActionType.COURSE_APPROVED,
            TargetType.COURSE,
            "course-1",
            "Algebra",
            {"note": "ok"},
        )

        assert isinstance(entry, ActivityLog)
        assert entry.actor_id == "admin-1"
        assert entry.actor_name == "Ada"
        assert entry.action_type == "COURSE_APPROVED"
        assert entry.target_type == "Course"
        assert entry.details == {"note": "ok"}
        write_session.add.assert_called_once_with(entry)
        write_session.commit.assert_awaited_once()
        mock_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_actor_is_skipped(self, activity_service, write_session) -> None:
        """Test nothing is written when the acting admin is unknown."""
        result = await activity_service.record(None, ActionType.TEACHER_ADDED)

        assert result is None
        write_session.add.assert_not_called()
        write_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_actor_without_name_is_skipped(self, activity_service, write_session) -> None:
        """Test an actor missing its display name is not logged."""
        result = await activity_service.record(
            Actor(id="admin-1", name=""), ActionType.TEACHER_ADDED
        )

        assert result is None
        write_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_write_failure_is_swallowed(
        self, activity_service, mock_db, write_session
    ) -> None:
        """Test a failing commit is never raised and leaves the caller's session alone."""
        write_session.commit.side_effect = OperationalError("INSERT", {}, Exception("db down"))

        result = await activity_service.record(
            Actor(id="admin-1", name="Ada"),
            ActionType.STUDENT_REMOVED,
            TargetType.USER,
            "student-1",
            "Sam",
        )

        assert result is None
        mock_db.rollback.assert_not_awaited()
        write_session.__aexit__.assert_awaited_once()

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin activity log model."""

from datetime import datetime
from enum import Enum
from typing import Any

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import Base, IdMixin
from src.utils.datetime import utc_now


class ActionType(str, Enum):
    """Closed set of audited admin actions."""

    TEACHER_ADDED = "TEACHER_ADDED"
    TEACHER_UPDATED = "TEACHER_UPDATED"
    TEACHER_REMOVED = "TEACHER_REMOVED"
    TEACHER_REMOVED_WITH_COURSES = "TEACHER_REMOVED_WITH_COURSES"
    TEACHER_REMOVED_KEEP_COURSES = "TEACHER_REMOVED_KEEP_COURSES"
    COURSE_ADDED = "COURSE_ADDED"
    COURSE_UPDATED = "COURSE_UPDATED"
    COURSE_APPROVED = "COURSE_APPROVED"
    COURSE_REJECTED = "COURSE_REJECTED"
    COURSE_ASSIGNED_TEACHER = "COURSE_ASSIGNED_TEACHER"
    COURSE_REMOVED = "COURSE_REMOVED"
    STUDENT_ADDED = "STUDENT_ADDED"
    STUDENT_UPDATED = "STUDENT_UPDATED"
    STUDENT_REMOVED = "STUDENT_REMOVED"
    STUDENT_ENROLLED = "STUDENT_ENROLLED"
    STUDENT_UNENROLLED = "STUDENT_UNENROLLED"
    ADMIN_SETTINGS_UPDATED = "ADMIN_SETTINGS_UPDATED"


class TargetType(str, Enum):
    """Kind of record an activity entry refers to."""

    USER = "User"
    COURSE = "Course"
    SYSTEM = "System"


class ActivityLog(Base, IdMixin):
    """Immutable record of one admin action.

    Attributes:
        actor_id: Admin who performed the action.
        actor_name: Admin display name at the time of the action.
        action_type: ActionType value.
        target_type: TargetType value.
        target_id: Affected record id.
        target_name: Affected record display name.
        details: Free-form payload.
        created_at: When the action was recorded.
    """

    __tablename__ = "activity_logs"

    actor_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    actor_name: Mapped[str] = mapped_column(String(255), nullable=False)
    action_type: Mapped[str] = mapped_column(String(50), nullable=False)
    target_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    target_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    target_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    details: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<ActivityLog(action_type={self.action_type}, target_id={self.target_id})>"

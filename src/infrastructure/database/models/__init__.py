# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy ORM models for the directory database.

Tables:
- users: Accounts (admins, teachers, students) in single-table inheritance
- courses: Course records with their enrolled student ids
- activity_logs: Admin audit trail
"""

from src.infrastructure.database.models.account import (
    Account,
    AccountRole,
    Admin,
    Student,
    Teacher,
)
from src.infrastructure.database.models.activity_log import (
    ActionType,
    ActivityLog,
    TargetType,
)
from src.infrastructure.database.models.base import Base, generate_id, is_valid_id
from src.infrastructure.database.models.course import Course, CourseStatus

__all__ = [
    "Base",
    "generate_id",
    "is_valid_id",
    # Accounts
    "Account",
    "AccountRole",
    "Admin",
    "Student",
    "Teacher",
    # Courses
    "Course",
    "CourseStatus",
    # Activity
    "ActionType",
    "ActivityLog",
    "TargetType",
]

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial directory schema.

Revision ID: 001_initial_schema
Revises: None
Create Date: 2025-01-15

Creates the users, courses and activity_logs tables matching the models in
src/infrastructure/database/models/.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    ]


def upgrade() -> None:
    """Create directory tables."""
    # ==========================================================================
    # 1. users table (admins, teachers, students)
    # ==========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("courses", sa.JSON, nullable=True),
        sa.Column("grade", sa.String(50), nullable=True),
        sa.Column("enrollments", sa.JSON, nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "role IN ('student', 'teacher', 'admin')",
            name="valid_user_role",
        ),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])

    # ==========================================================================
    # 2. courses table
    # ==========================================================================
    op.create_table(
        "courses",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("subject", sa.String(100), nullable=True),
        sa.Column("grade", sa.String(50), nullable=True),
        sa.Column("syllabus", sa.Text, nullable=True),
        sa.Column("resources", sa.Text, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("teacher_id", sa.String(36), nullable=True),
        sa.Column("students", sa.JSON, nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="valid_course_status",
        ),
    )
    op.create_index("ix_courses_subject", "courses", ["subject"])
    op.create_index("ix_courses_grade", "courses", ["grade"])
    op.create_index("ix_courses_status", "courses", ["status"])
    op.create_index("ix_courses_teacher_id", "courses", ["teacher_id"])

    # ==========================================================================
    # 3. activity_logs table
    # ==========================================================================
    op.create_table(
        "activity_logs",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("actor_id", sa.String(36), nullable=False),
        sa.Column("actor_name", sa.String(255), nullable=False),
        sa.Column("action_type", sa.String(50), nullable=False),
        sa.Column("target_type", sa.String(20), nullable=True),
        sa.Column("target_id", sa.String(36), nullable=True),
        sa.Column("target_name", sa.String(255), nullable=True),
        sa.Column("details", sa.JSON, nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    )
    op.create_index("ix_activity_logs_actor_id", "activity_logs", ["actor_id"])
    op.create_index("ix_activity_logs_created_at", "activity_logs", ["created_at"])


def downgrade() -> None:
    """Drop directory tables."""
    op.drop_table("activity_logs")
    op.drop_table("courses")
    op.drop_table("users")

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Account models.

All platform users live in the ``users`` table. The ``role`` column selects
the mapped class, and each class carries only the fields that make sense
for it:

- Teacher: ``courses`` (ids of the courses the teacher owns)
- Student: ``grade`` and ``enrollments`` (ids of enrolled courses)
- Admin: no extra fields

Reference lists are JSON arrays. They are always replaced with a new list
rather than mutated in place so the ORM detects the change.
"""

from enum import Enum

from sqlalchemy import JSON, CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import (
    Base,
    IdMixin,
    TimestampMixin,
    with_item,
    without_item,
)


class AccountRole(str, Enum):
    """Account role discriminator values."""

    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


class Account(Base, IdMixin, TimestampMixin):
    """Any platform user.

    Attributes:
        id: Account identifier.
        name: Display name.
        email: Globally unique email address.
        password_hash: bcrypt hash, never exposed.
        role: Discriminator, one of AccountRole.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    __table_args__ = (
        CheckConstraint(
            "role IN ('student', 'teacher', 'admin')",
            name="valid_user_role",
        ),
    )

    __mapper_args__ = {
        "polymorphic_on": "role",
        "polymorphic_abstract": True,
    }

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id}, email={self.email})>"


class Teacher(Account):
    """Teacher account owning a list of course ids."""

    courses: Mapped[list[str] | None] = mapped_column(JSON, nullable=True, default=list)

    __mapper_args__ = {"polymorphic_identity": AccountRole.TEACHER.value}

    @property
    def course_ids(self) -> list[str]:
        return list(self.courses or [])

    def has_course(self, course_id: str) -> bool:
        return course_id in (self.courses or [])

    def add_course(self, course_id: str) -> None:
        self.courses = with_item(self.courses, course_id)

    def remove_course(self, course_id: str) -> None:
        self.courses = without_item(self.courses, course_id)


class Student(Account):
    """Student account with a grade and a list of enrolled course ids."""

    grade: Mapped[str | None] = mapped_column(String(50), nullable=True)
    enrollments: Mapped[list[str] | None] = mapped_column(JSON, nullable=True, default=list)

    __mapper_args__ = {"polymorphic_identity": AccountRole.STUDENT.value}

    @property
    def enrollment_ids(self) -> list[str]:
        return list(self.enrollments or [])

    def is_enrolled(self, course_id: str) -> bool:
        return course_id in (self.enrollments or [])

    def add_enrollment(self, course_id: str) -> None:
        self.enrollments = with_item(self.enrollments, course_id)

    def remove_enrollment(self, course_id: str) -> None:
        self.enrollments = without_item(self.enrollments, course_id)


class Admin(Account):
    """Administrator account."""

    __mapper_args__ = {"polymorphic_identity": AccountRole.ADMIN.value}

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course model."""

from enum import Enum

from sqlalchemy import JSON, CheckConstraint, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import (
    Base,
    IdMixin,
    TimestampMixin,
    with_item,
    without_item,
)


class CourseStatus(str, Enum):
    """Course review status."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Course(Base, IdMixin, TimestampMixin):
    """An offered course.

    ``teacher_id`` mirrors the owning teacher's ``courses`` list and
    ``students`` mirrors each student's ``enrollments`` list. Neither is a
    foreign key: both sides are maintained by the relationship services.

    Attributes:
        id: Course identifier.
        name: Course name.
        description: Free-text description.
        subject: Subject area.
        grade: Grade level the course targets.
        syllabus: Free-text syllabus.
        resources: Free-text resource list.
        status: Review status (pending, approved, rejected).
        teacher_id: Owning teacher, or None when unassigned.
        students: Ids of enrolled students.
    """

    __tablename__ = "courses"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    subject: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    grade: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    syllabus: Mapped[str | None] = mapped_column(Text, nullable=True)
    resources: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=CourseStatus.PENDING.value,
        index=True,
    )
    teacher_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    students: Mapped[list[str] | None] = mapped_column(JSON, nullable=True, default=list)

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')",
            name="valid_course_status",
        ),
    )

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, name={self.name}, status={self.status})>"

    @property
    def student_ids(self) -> list[str]:
        return list(self.students or [])

    @property
    def is_approved(self) -> bool:
        return self.status == CourseStatus.APPROVED.value

    def has_student(self, student_id: str) -> bool:
        return student_id in (self.students or [])

    def add_student(self, student_id: str) -> None:
        self.students = with_item(self.students, student_id)

    def remove_student(self, student_id: str) -> None:
        self.students = without_item(self.students, student_id)

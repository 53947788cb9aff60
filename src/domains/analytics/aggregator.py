# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Dashboard and report aggregation.

Read-only rollups over accounts and courses. Nothing here writes, so the
numbers are a snapshot that may trail concurrent changes.

Usage:
    from src.domains.analytics import ReportAggregator

    aggregator = ReportAggregator(db)
    overview = await aggregator.get_overview()
    report = await aggregator.get_reports()
"""

import logging
from collections import Counter
from typing import Any, Iterable, NamedTuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.models import (
    AccountRole,
    Course,
    CourseStatus,
    Student,
    Teacher,
)
from src.models.report import (
    CourseStatusCounts,
    DistributionEntry,
    OverviewResponse,
    ReportsResponse,
)

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"
UNGRADED = "Ungraded"

_STATUSES = frozenset(status.value for status in CourseStatus)


class CourseRow(NamedTuple):
    status: str
    subject: str | None
    grade: str | None


class TeacherRow(NamedTuple):
    name: str
    course_count: int


def _by_count_desc(counter: Counter[str]) -> list[DistributionEntry]:
    # Counter preserves first-seen order, and sorted() is stable on ties
    return [
        DistributionEntry(name=name, count=count)
        for name, count in sorted(counter.items(), key=lambda item: -item[1])
    ]


def _by_name(counter: Counter[str]) -> list[DistributionEntry]:
    return [
        DistributionEntry(name=name, count=count)
        for name, count in sorted(counter.items(), key=lambda item: item[0])
    ]


def build_reports(
    courses: Iterable[CourseRow],
    teachers: Iterable[TeacherRow],
    student_grades: Iterable[str | None],
) -> ReportsResponse:
    """Reduce course, teacher and student rows into a report.

    Args:
        courses: One row per course.
        teachers: One row per teacher with the length of its course list.
        student_grades: One grade (or None) per student.

    Returns:
        Status counts, subject and grade distributions, courses per teacher
        and the student grade distribution.
    """
    status_counts = CourseStatusCounts()
    subjects: Counter[str] = Counter()
    grades: Counter[str] = Counter()

    for course in courses:
        status_counts.total += 1
        if course.status in _STATUSES:
            setattr(status_counts, course.status, getattr(status_counts, course.status) + 1)
        subjects[course.subject or UNCATEGORIZED] += 1
        grades[course.grade or UNCATEGORIZED] += 1

    per_teacher = sorted(
        (DistributionEntry(name=t.name, count=t.course_count) for t in teachers),
        key=lambda entry: -entry.count,
    )

    student_grade_counts: Counter[str] = Counter()
    total_students = 0
    for grade in student_grades:
        total_students += 1
        student_grade_counts[grade or UNGRADED] += 1

    return ReportsResponse(
        course_status_counts=status_counts,
        subject_distribution=_by_count_desc(subjects),
        grade_distribution=_by_name(grades),
        courses_per_teacher=per_teacher,
        total_students=total_students,
        student_grade_distribution=_by_name(student_grade_counts),
    )


class ReportAggregator:
    """Read-only rollups for the admin dashboard.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_overview(self) -> OverviewResponse:
        """Count teachers, students, courses and enrollments.

        The enrollment count is the sum of every student's enrollment list
        length.
        """
        teacher_count = await self._count(Teacher, Teacher.role == AccountRole.TEACHER.value)
        student_count = await self._count(Student, Student.role == AccountRole.STUDENT.value)
        course_count = await self._count(Course)

        result = await self.db.execute(
            select(Student.enrollments).where(Student.role == AccountRole.STUDENT.value)
        )
        enrollment_count = sum(len(row or []) for row in result.scalars().all())

        return OverviewResponse(
            teacher_count=teacher_count,
            student_count=student_count,
            course_count=course_count,
            enrollment_count=enrollment_count,
        )

    async def get_reports(self) -> ReportsResponse:
        """Build the aggregate report."""
        course_result = await self.db.execute(
            select(Course.status, Course.subject, Course.grade)
        )
        courses = [CourseRow(*row) for row in course_result.all()]

        teacher_result = await self.db.execute(
            select(Teacher.name, Teacher.courses)
            .where(Teacher.role == AccountRole.TEACHER.value)
            .order_by(Teacher.name)
        )
        teachers = [
            TeacherRow(name=name, course_count=len(course_ids or []))
            for name, course_ids in teacher_result.all()
        ]

        student_result = await self.db.execute(
            select(Student.grade).where(Student.role == AccountRole.STUDENT.value)
        )
        student_grades = list(student_result.scalars().all())

        report = build_reports(courses, teachers, student_grades)
        logger.debug(
            "Report built: %d courses, %d teachers, %d students",
            report.course_status_counts.total,
            len(teachers),
            report.total_students,
        )
        return report

    async def _count(self, entity: type, *criteria: Any) -> int:
        stmt = select(func.count()).select_from(entity)
        if criteria:
            stmt = stmt.where(*criteria)
        result = await self.db.execute(stmt)
        return result.scalar() or 0

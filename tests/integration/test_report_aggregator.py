# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for ReportAggregator."""

import pytest

from src.domains.analytics import ReportAggregator
from src.domains.analytics.aggregator import UNCATEGORIZED


@pytest.fixture
def aggregator(db_session) -> ReportAggregator:
    return ReportAggregator(db_session)


class TestOverview:
    """Tests for dashboard counts."""

    @pytest.mark.asyncio
    async def test_empty_directory(self, aggregator) -> None:
        """Test that an empty directory counts zero everywhere."""
        overview = await aggregator.get_overview()

        assert overview.model_dump() == {
            "teacher_count": 0,
            "student_count": 0,
            "course_count": 0,
            "enrollment_count": 0,
        }

    @pytest.mark.asyncio
    async def test_counts(
        self,
        aggregator,
        enrollment_service,
        make_teacher,
        make_student,
        make_course,
    ) -> None:
        """Test role counts and enrollment totals."""
        teacher = await make_teacher()
        await make_teacher()
        first = await make_course(teacher.id, approved=True)
        second = await make_course(teacher.id, approved=True)
        await make_course(teacher.id)
        one = await make_student()
        two = await make_student()
        await make_student()
        await enrollment_service.enroll_student(one.id, first.id)
        await enrollment_service.enroll_student(one.id, second.id)
        await enrollment_service.enroll_student(two.id, first.id)

        overview = await aggregator.get_overview()

        assert overview.teacher_count == 2
        assert overview.student_count == 3
        assert overview.course_count == 3
        assert overview.enrollment_count == 3


class TestReports:
    """Tests for the aggregate report."""

    @pytest.mark.asyncio
    async def test_report(
        self,
        aggregator,
        course_service,
        make_teacher,
        make_student,
        make_course,
    ) -> None:
        """Test status counts, distributions and per-teacher totals."""
        busy = await make_teacher(name="Busy")
        idle = await make_teacher(name="Idle")
        await make_course(busy.id, subject="Math", grade="5", approved=True)
        await make_course(busy.id, subject="Math", grade="6")
        rejected = await make_course(busy.id, subject=None, grade=None)
        await course_service.reject_course(rejected.id)
        await make_student(grade="6")
        await make_student(grade="5")
        await make_student(grade="6")

        report = await aggregator.get_reports()

        assert report.course_status_counts.model_dump() == {
            "pending": 1,
            "approved": 1,
            "rejected": 1,
            "total": 3,
        }
        assert [(e.name, e.count) for e in report.subject_distribution] == [
            ("Math", 2),
            (UNCATEGORIZED, 1),
        ]
        assert [(e.name, e.count) for e in report.grade_distribution] == [
            ("5", 1),
            ("6", 1),
            (UNCATEGORIZED, 1),
        ]
        assert [(e.name, e.count) for e in report.courses_per_teacher] == [
            (busy.name, 3),
            (idle.name, 0),
        ]
        assert report.total_students == 3
        assert [(e.name, e.count) for e in report.student_grade_distribution] == [
            ("5", 1),
            ("6", 2),
        ]

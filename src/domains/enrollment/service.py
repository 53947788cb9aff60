# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment service for student/course links.

This module provides the EnrollmentService class for:
- Enrolling a student in an approved course
- Unenrolling a student from a course
- Removing a student together with its course references
- Detaching a course from every enrolled student

A link is stored on both sides: ``Student.enrollments`` holds course ids and
``Course.students`` holds student ids. Each operation changes both sides in
one commit.
"""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.activity_log.service import ActivityLogService, Actor
from src.domains.directory import (
    find_course,
    find_courses,
    find_student,
    find_students,
    require_id,
)
from src.domains.errors import (
    AlreadyEnrolledError,
    CourseNotApprovedError,
    CourseNotFoundError,
    StudentNotFoundError,
)
from src.infrastructure.database.models import (
    AccountRole,
    ActionType,
    Course,
    Student,
    TargetType,
)

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Service for managing student enrollments.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize enrollment service.

        Args:
            db: Async database session.
        """
        self.db = db
        self.activity = ActivityLogService(db)

    async def enroll_student(
        self,
        student_id: str,
        course_id: str,
        actor: Actor | None = None,
    ) -> None:
        """Enroll a student in an approved course.

        If exactly one side already records the link, the missing side is
        written and committed before AlreadyEnrolledError is raised.

        Args:
            student_id: Student identifier.
            course_id: Course identifier.
            actor: Admin performing the enrollment.

        Raises:
            InvalidReferenceError: If either id is malformed.
            StudentNotFoundError: If student not found.
            CourseNotFoundError: If course not found.
            CourseNotApprovedError: If the course is not approved.
            AlreadyEnrolledError: If the pair was already linked on either side.
        """
        require_id(student_id, "Invalid Student or Course ID")
        require_id(course_id, "Invalid Student or Course ID")

        student = await find_student(self.db, student_id)
        if student is None:
            raise StudentNotFoundError()
        course = await find_course(self.db, course_id)
        if course is None:
            raise CourseNotFoundError()
        if not course.is_approved:
            raise CourseNotApprovedError()

        listed_on_student = student.is_enrolled(course.id)
        listed_on_course = course.has_student(student.id)

        if listed_on_student or listed_on_course:
            if not (listed_on_student and listed_on_course):
                student.add_enrollment(course.id)
                course.add_student(student.id)
                await self.db.commit()
                logger.warning(
                    "Repaired one-sided enrollment: student=%s, course=%s",
                    student.id,
                    course.id,
                )
            raise AlreadyEnrolledError()

        student.add_enrollment(course.id)
        course.add_student(student.id)
        await self.db.commit()

        logger.info("Enrolled student: student=%s, course=%s", student.id, course.id)

        await self.activity.record(
            actor,
            ActionType.STUDENT_ENROLLED,
            TargetType.USER,
            student.id,
            student.name,
            {"course_id": course.id, "course_name": course.name},
        )

    async def unenroll_student(
        self,
        student_id: str,
        course_id: str,
        actor: Actor | None = None,
    ) -> None:
        """Remove a student/course link from both sides.

        Unlinking a pair that is not linked succeeds without changes.

        Raises:
            InvalidReferenceError: If either id is malformed.
            StudentNotFoundError: If student not found.
            CourseNotFoundError: If course not found.
        """
        require_id(student_id, "Invalid Student or Course ID")
        require_id(course_id, "Invalid Student or Course ID")

        if not await self._student_exists(student_id):
            raise StudentNotFoundError()
        if not await self._course_exists(course_id):
            raise CourseNotFoundError()

        student = await find_student(self.db, student_id)
        course = await find_course(self.db, course_id)
        student.remove_enrollment(course.id)
        course.remove_student(student.id)
        await self.db.commit()

        logger.info("Unenrolled student: student=%s, course=%s", student.id, course.id)

        await self.activity.record(
            actor,
            ActionType.STUDENT_UNENROLLED,
            TargetType.USER,
            student.id,
            student.name,
            {"course_id": course.id, "course_name": course.name},
        )

    async def remove_student(self, student_id: str, actor: Actor | None = None) -> None:
        """Delete a student and pull its id from every enrolled course.

        Raises:
            InvalidReferenceError: If student_id is malformed.
            StudentNotFoundError: If no student has this id.
        """
        require_id(student_id, "Invalid student ID")
        student = await find_student(self.db, student_id)
        if student is None:
            raise StudentNotFoundError("Student not found or user is not a student")

        name = student.name
        courses = await find_courses(self.db, student.enrollment_ids)
        for course in courses:
            course.remove_student(student.id)

        await self.db.delete(student)
        await self.db.commit()

        logger.info(
            "Removed student %s from %d course enrollment lists",
            student_id,
            len(courses),
        )

        await self.activity.record(
            actor, ActionType.STUDENT_REMOVED, TargetType.USER, student_id, name
        )

    async def detach_course(self, course: Course) -> int:
        """Pull course from the enrollments of every student it lists.

        Does not commit; the caller owns the unit of work.

        Returns:
            Number of students updated.
        """
        students = await find_students(self.db, course.student_ids)
        for student in students:
            student.remove_enrollment(course.id)
        return len(students)

    async def _student_exists(self, student_id: str) -> bool:
        result = await self.db.execute(
            select(func.count())
            .select_from(Student)
            .where(Student.id == student_id, Student.role == AccountRole.STUDENT.value)
        )
        return (result.scalar() or 0) > 0

    async def _course_exists(self, course_id: str) -> bool:
        result = await self.db.execute(
            select(func.count()).select_from(Course).where(Course.id == course_id)
        )
        return (result.scalar() or 0) > 0

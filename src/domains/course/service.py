# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course service for course record management.

This module provides the CourseService class for:
- Course listing with filters and lookup with teacher/student summaries
- Course creation and partial update, keeping teacher lists in step
- Approval and rejection
- Course deletion with cleanup of teacher and student references

Status changes are not restricted: an admin may approve or reject a course
in any state, including re-approving an approved course.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.activity_log.service import ActivityLogService, Actor
from src.domains.assignment.service import TeacherAssignmentService
from src.domains.directory import (
    find_course,
    find_students,
    find_teacher,
    find_teachers_by_id,
    require_id,
    to_course_detail_response,
    to_course_response,
)
from src.domains.enrollment.service import EnrollmentService
from src.domains.errors import CourseNotFoundError, ValidationError
from src.infrastructure.database.models import (
    ActionType,
    Course,
    CourseStatus,
    TargetType,
)
from src.models.course import (
    CourseCreateRequest,
    CourseDetailResponse,
    CourseListFilters,
    CourseResponse,
    CourseUpdateRequest,
)

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("name", "description", "subject", "grade", "syllabus", "resources")


class CourseService:
    """Service for managing courses.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize course service.

        Args:
            db: Async database session.
        """
        self.db = db
        self.activity = ActivityLogService(db)
        self.assignments = TeacherAssignmentService(db)
        self.enrollments = EnrollmentService(db)

    async def list_courses(
        self,
        filters: CourseListFilters | None = None,
    ) -> list[CourseResponse]:
        """List courses with their teacher summary attached.

        Args:
            filters: Optional status, subject, grade and teacher filters.

        Returns:
            Course responses ordered by creation time.

        Raises:
            InvalidReferenceError: If the teacher filter is malformed.
        """
        filters = filters or CourseListFilters()
        stmt = select(Course)

        if filters.status:
            stmt = stmt.where(Course.status == filters.status)
        if filters.subject:
            stmt = stmt.where(Course.subject == filters.subject)
        if filters.grade:
            stmt = stmt.where(Course.grade == filters.grade)
        if filters.teacher_id:
            require_id(filters.teacher_id, "Invalid teacher ID for filtering")
            stmt = stmt.where(Course.teacher_id == filters.teacher_id)

        stmt = stmt.order_by(Course.created_at)
        result = await self.db.execute(stmt)
        courses = list(result.scalars().all())

        teachers = await find_teachers_by_id(self.db, (c.teacher_id for c in courses))
        return [
            to_course_response(c, teachers.get(c.teacher_id) if c.teacher_id else None)
            for c in courses
        ]

    async def get_course(self, course_id: str) -> CourseDetailResponse:
        """Get a course with teacher and enrolled student summaries.

        Raises:
            InvalidReferenceError: If course_id is malformed.
            CourseNotFoundError: If course not found.
        """
        course = await self._get_course(course_id)
        teacher = await find_teacher(self.db, course.teacher_id) if course.teacher_id else None
        students = await find_students(self.db, course.student_ids)
        return to_course_detail_response(course, teacher, students)

    async def create_course(
        self,
        request: CourseCreateRequest,
        actor: Actor | None = None,
    ) -> CourseResponse:
        """Create a pending course owned by an existing teacher.

        Raises:
            ValidationError: If the name is missing.
            InvalidReferenceError: If the teacher id is malformed, unknown,
                or not a teacher.
        """
        if not request.name or not request.name.strip():
            raise ValidationError("Course name is required")

        teacher = await self.assignments.resolve_teacher(request.teacher_id)

        course = Course(
            name=request.name.strip(),
            description=request.description,
            subject=request.subject,
            grade=request.grade,
            syllabus=request.syllabus,
            resources=request.resources,
            status=CourseStatus.PENDING.value,
            students=[],
        )
        self.db.add(course)
        await self.db.flush()

        await self.assignments.move_course(course, teacher)
        await self.db.commit()
        await self.db.refresh(course)

        logger.info("Course created: %s (teacher=%s)", course.id, teacher.id)

        await self.activity.record(
            actor,
            ActionType.COURSE_ADDED,
            TargetType.COURSE,
            course.id,
            course.name,
            {"teacher_assigned": teacher.name},
        )
        return to_course_response(course, teacher)

    async def update_course(
        self,
        course_id: str,
        request: CourseUpdateRequest,
        actor: Actor | None = None,
    ) -> CourseResponse:
        """Apply a partial update to a course.

        Only fields present in the request are written. A ``teacher_id`` of
        None unassigns the course. When the teacher changes, the course is
        moved between the two teachers' lists.

        Raises:
            InvalidReferenceError: If course_id or teacher_id is malformed,
                or teacher_id is not a teacher.
            CourseNotFoundError: If course not found.
            ValidationError: If the name is set to an empty value.
        """
        require_id(course_id, "Invalid course ID")
        provided = request.model_dump(exclude_unset=True)

        new_teacher = None
        if provided.get("teacher_id") is not None:
            new_teacher = await self.assignments.resolve_teacher(provided["teacher_id"])

        if "name" in provided and (not provided["name"] or not provided["name"].strip()):
            raise ValidationError("Course name is required")

        course = await self._get_course(course_id)

        for field in _TEXT_FIELDS:
            if field in provided:
                setattr(course, field, provided[field])

        if "teacher_id" in provided and course.teacher_id != (
            new_teacher.id if new_teacher else None
        ):
            await self.assignments.move_course(course, new_teacher)

        await self.db.commit()
        await self.db.refresh(course)

        logger.info("Course updated: %s", course.id)

        await self.activity.record(
            actor,
            ActionType.COURSE_UPDATED,
            TargetType.COURSE,
            course.id,
            course.name,
            {"teacher_assigned": new_teacher.name if new_teacher else None},
        )

        teacher = new_teacher
        if teacher is None and course.teacher_id:
            teacher = await find_teacher(self.db, course.teacher_id)
        return to_course_response(course, teacher)

    async def approve_course(self, course_id: str, actor: Actor | None = None) -> CourseResponse:
        """Mark a course approved, whatever its current status."""
        return await self._set_status(
            course_id, CourseStatus.APPROVED, ActionType.COURSE_APPROVED, actor
        )

    async def reject_course(self, course_id: str, actor: Actor | None = None) -> CourseResponse:
        """Mark a course rejected, whatever its current status."""
        return await self._set_status(
            course_id, CourseStatus.REJECTED, ActionType.COURSE_REJECTED, actor
        )

    async def delete_course(self, course_id: str, actor: Actor | None = None) -> None:
        """Delete a course and pull it from its teacher and students.

        Raises:
            InvalidReferenceError: If course_id is malformed.
            CourseNotFoundError: If course not found.
        """
        course = await self._get_course(course_id)
        name = course.name

        await self.assignments.detach_course(course)
        detached = await self.enrollments.detach_course(course)

        await self.db.delete(course)
        await self.db.commit()

        logger.info(
            "Course deleted: %s (removed from %d student enrollment lists)",
            course_id,
            detached,
        )

        await self.activity.record(
            actor, ActionType.COURSE_REMOVED, TargetType.COURSE, course_id, name
        )

    async def _set_status(
        self,
        course_id: str,
        status: CourseStatus,
        action_type: ActionType,
        actor: Actor | None,
    ) -> CourseResponse:
        course = await self._get_course(course_id)
        previous = course.status
        course.status = status.value
        await self.db.commit()
        await self.db.refresh(course)

        logger.info("Course %s status: %s -> %s", course.id, previous, course.status)

        await self.activity.record(
            actor, action_type, TargetType.COURSE, course.id, course.name
        )
        teacher = await find_teacher(self.db, course.teacher_id) if course.teacher_id else None
        return to_course_response(course, teacher)

    async def _get_course(self, course_id: str) -> Course:
        require_id(course_id, "Invalid course ID")
        course = await find_course(self.db, course_id)
        if course is None:
            raise CourseNotFoundError()
        return course

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher assignment service for teacher/course ownership.

This module provides the TeacherAssignmentService class for:
- Assigning a course to a teacher
- Moving a course between teachers as part of a course write
- Removing a teacher: blocked, with course deletion, or orphaning courses

Ownership is stored on both sides: ``Teacher.courses`` holds course ids and
``Course.teacher_id`` points back. A course has at most one teacher, and a
teacher's list is exactly the set of courses pointing at them.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.activity_log.service import ActivityLogService, Actor
from src.domains.directory import (
    find_account,
    find_course,
    find_courses,
    find_courses_owned_by,
    find_teacher,
    require_id,
    to_teacher_response,
)
from src.domains.enrollment.service import EnrollmentService
from src.domains.errors import (
    AlreadyAssignedError,
    CourseNotFoundError,
    InvalidReferenceError,
    NotATeacherError,
    TeacherHasCoursesError,
    TeacherNotFoundError,
    ValidationError,
)
from src.infrastructure.database.models import (
    ActionType,
    Course,
    TargetType,
    Teacher,
    is_valid_id,
)
from src.models.account import TeacherResponse
from src.models.course import TeacherRemovalResponse

logger = logging.getLogger(__name__)

UNKNOWN_COURSE_NAME = "Unknown Course Name"


class TeacherAssignmentService:
    """Service for managing teacher/course ownership.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize assignment service.

        Args:
            db: Async database session.
        """
        self.db = db
        self.activity = ActivityLogService(db)
        self.enrollments = EnrollmentService(db)

    async def assign_course(
        self,
        teacher_id: str,
        course_id: str | None,
        actor: Actor | None = None,
    ) -> TeacherResponse:
        """Assign a course to a teacher.

        The course is removed from its previous teacher's list, if it had one.

        Args:
            teacher_id: Teacher identifier.
            course_id: Course identifier.
            actor: Admin performing the assignment.

        Returns:
            The teacher with summaries of its courses attached.

        Raises:
            InvalidReferenceError: If an id is malformed or the account is
                not a teacher.
            TeacherNotFoundError: If teacher not found.
            CourseNotFoundError: If course not found.
            AlreadyAssignedError: If the course is already in the teacher's list.
        """
        require_id(course_id, "Invalid course ID")
        require_id(teacher_id, "Invalid teacher ID")

        account = await find_account(self.db, teacher_id)
        if account is None:
            raise TeacherNotFoundError()
        if not isinstance(account, Teacher):
            raise NotATeacherError("Cannot assign course to a non-teacher user")
        teacher = account

        course = await find_course(self.db, course_id)
        if course is None:
            raise CourseNotFoundError()

        if teacher.has_course(course.id):
            raise AlreadyAssignedError()

        previous_teacher_id = course.teacher_id
        await self.move_course(course, teacher)
        await self.db.commit()

        logger.info(
            "Assigned course: course=%s, teacher=%s, previous=%s",
            course.id,
            teacher.id,
            previous_teacher_id,
        )

        await self.activity.record(
            actor,
            ActionType.COURSE_ASSIGNED_TEACHER,
            TargetType.COURSE,
            course.id,
            course.name,
            {"teacher_id": teacher.id, "teacher_name": teacher.name},
        )

        courses = await find_courses(self.db, teacher.course_ids)
        return to_teacher_response(teacher, assigned_courses=courses)

    async def resolve_teacher(self, teacher_id: Any) -> Teacher:
        """Resolve a course's teacher reference.

        Raises:
            InvalidReferenceError: If the id is malformed, unknown, or
                belongs to an account that is not a teacher.
        """
        if not is_valid_id(teacher_id):
            raise InvalidReferenceError("Invalid teacher ID")
        teacher = await find_teacher(self.db, teacher_id)
        if teacher is None:
            raise NotATeacherError()
        return teacher

    async def move_course(self, course: Course, new_teacher: Teacher | None) -> None:
        """Point course at new_teacher and fix both teachers' lists.

        Removes the course from the previous teacher's list and adds it to
        the new teacher's list. Passing None unassigns the course. Does not
        commit; the caller owns the unit of work.
        """
        old_teacher_id = course.teacher_id
        new_teacher_id = new_teacher.id if new_teacher else None

        if old_teacher_id and old_teacher_id != new_teacher_id:
            old_teacher = await find_teacher(self.db, old_teacher_id)
            if old_teacher is not None:
                old_teacher.remove_course(course.id)

        if new_teacher is not None:
            new_teacher.add_course(course.id)
        course.teacher_id = new_teacher_id

    async def detach_course(self, course: Course) -> None:
        """Pull course from its teacher's list. Does not commit."""
        if not course.teacher_id:
            return
        teacher = await find_teacher(self.db, course.teacher_id)
        if teacher is not None:
            teacher.remove_course(course.id)

    # =========================================================================
    # Teacher removal
    # =========================================================================

    async def remove_teacher(
        self,
        teacher_id: str,
        actor: Actor | None = None,
    ) -> TeacherRemovalResponse:
        """Remove a teacher who owns no courses.

        Raises:
            TeacherNotFoundError: If teacher not found.
            TeacherHasCoursesError: If the teacher still owns courses. The
                error carries the blocking courses (id and name).
        """
        require_id(teacher_id, "Invalid teacher ID")
        teacher = await find_teacher(self.db, teacher_id)
        if teacher is None:
            raise TeacherNotFoundError()

        blocking = await self._owned_courses(teacher)
        if blocking:
            raise TeacherHasCoursesError(blocking)

        name = teacher.name
        await self.db.delete(teacher)
        await self.db.commit()

        logger.info("Removed teacher %s", teacher_id)

        await self.activity.record(
            actor, ActionType.TEACHER_REMOVED, TargetType.USER, teacher_id, name
        )
        return TeacherRemovalResponse(message="Teacher removed successfully")

    async def remove_teacher_with_courses(
        self,
        teacher_id: str,
        course_ids: Any,
        actor: Actor | None = None,
    ) -> TeacherRemovalResponse:
        """Remove a teacher and delete the listed courses it owns.

        Listed ids that do not belong to the teacher are ignored. Deleted
        courses are pulled from their students' enrollments. Courses the
        teacher owns but that were not listed are left unassigned.

        Args:
            teacher_id: Teacher identifier.
            course_ids: Ids of the teacher's courses to delete.
            actor: Admin performing the removal.

        Raises:
            ValidationError: If course_ids is not a list.
            InvalidReferenceError: If any listed id is malformed.
            TeacherNotFoundError: If teacher not found.
        """
        if not isinstance(course_ids, list):
            raise ValidationError("course_ids must be an array of course IDs")
        if not all(is_valid_id(cid) for cid in course_ids):
            raise InvalidReferenceError("Invalid course ID in course_ids")
        require_id(teacher_id, "Invalid teacher ID")

        teacher = await find_teacher(self.db, teacher_id)
        if teacher is None:
            raise TeacherNotFoundError()

        requested = set(course_ids)
        deleted = 0
        orphaned = 0
        for course in await find_courses_owned_by(self.db, teacher.id):
            if course.id in requested:
                await self.enrollments.detach_course(course)
                await self.db.delete(course)
                deleted += 1
            else:
                course.teacher_id = None
                orphaned += 1

        name = teacher.name
        await self.db.delete(teacher)
        await self.db.commit()

        logger.info(
            "Removed teacher %s with %d course(s), %d left unassigned",
            teacher_id,
            deleted,
            orphaned,
        )

        await self.activity.record(
            actor,
            ActionType.TEACHER_REMOVED_WITH_COURSES,
            TargetType.USER,
            teacher_id,
            name,
            {"deleted_courses": deleted, "orphaned_courses": orphaned},
        )
        return TeacherRemovalResponse(
            message=f"Teacher and {deleted} associated course(s) removed",
            deleted_courses=deleted,
            orphaned_courses=orphaned,
        )

    async def remove_teacher_keep_courses(
        self,
        teacher_id: str,
        actor: Actor | None = None,
    ) -> TeacherRemovalResponse:
        """Remove a teacher and leave every course it owned unassigned.

        Raises:
            TeacherNotFoundError: If teacher not found.
        """
        require_id(teacher_id, "Invalid teacher ID")
        teacher = await find_teacher(self.db, teacher_id)
        if teacher is None:
            raise TeacherNotFoundError()

        courses = await find_courses_owned_by(self.db, teacher.id)
        for course in courses:
            course.teacher_id = None

        name = teacher.name
        await self.db.delete(teacher)
        await self.db.commit()

        logger.info(
            "Orphaned %d courses previously assigned to teacher %s",
            len(courses),
            teacher_id,
        )

        await self.activity.record(
            actor,
            ActionType.TEACHER_REMOVED_KEEP_COURSES,
            TargetType.USER,
            teacher_id,
            name,
            {"orphaned_courses": len(courses)},
        )
        return TeacherRemovalResponse(
            message="Teacher removed successfully, associated courses are now unassigned.",
            orphaned_courses=len(courses),
        )

    async def _owned_courses(self, teacher: Teacher) -> list[dict[str, str]]:
        """List the teacher's courses as id/name pairs.

        Covers both the teacher's own list and any course pointing at the
        teacher, in list order first.
        """
        listed = teacher.course_ids
        by_id = {c.id: c for c in await find_courses(self.db, listed)}
        for course in await find_courses_owned_by(self.db, teacher.id):
            by_id.setdefault(course.id, course)

        ordered_ids = list(dict.fromkeys([*listed, *by_id.keys()]))
        return [
            {
                "id": course_id,
                "name": (by_id[course_id].name if course_id in by_id else None)
                or UNKNOWN_COURSE_NAME,
            }
            for course_id in ordered_ids
        ]

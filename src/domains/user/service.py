# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User service for teacher, student and admin account management.

This module provides the UserService that handles:
- Teacher listing, lookup, creation and update
- Student listing and search, lookup, creation and update
- The acting admin's own settings

Account removal changes course references and lives with the relationship
services (assignment for teachers, enrollment for students).

Example:
    >>> user_service = UserService(db_session)
    >>> teacher = await user_service.create_teacher(request, actor)
    >>> students = await user_service.list_students(grade="5", search="ali")
"""

import logging
import re

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.activity_log.service import ActivityLogService, Actor
from src.domains.auth.password import PasswordHasher
from src.domains.directory import (
    email_in_use,
    find_admin,
    find_courses,
    find_student,
    find_teacher,
    find_teachers_by_id,
    normalize_email,
    require_id,
    to_admin_response,
    to_student_response,
    to_teacher_response,
)
from src.domains.errors import (
    AdminNotFoundError,
    DirectoryError,
    EmailAlreadyInUseError,
    StudentNotFoundError,
    TeacherNotFoundError,
    ValidationError,
)
from src.infrastructure.database.models import (
    ActionType,
    Admin,
    Student,
    TargetType,
    Teacher,
)
from src.models.account import (
    AdminResponse,
    AdminSettingsUpdateRequest,
    StudentCreateRequest,
    StudentResponse,
    StudentUpdateRequest,
    TeacherCreateRequest,
    TeacherResponse,
    TeacherUpdateRequest,
)
from src.models.common import EnrolledCourseSummary

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

LIKE_ESCAPE = "\\"

DUPLICATE_EMAIL = "User already exists with this email"


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _escape_like(term: str) -> str:
    """Make %, _ and the escape character match literally in a LIKE pattern."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def _check_email(email: str | None, errors: list[str]) -> None:
    if _blank(email):
        errors.append("Email is required")
    elif not EMAIL_PATTERN.match(email.strip()):
        errors.append(f"{email} is not a valid email address")


class UserService:
    """Service for managing teacher, student and admin accounts.

    Every mutating call commits its change, then appends one activity
    entry on behalf of the acting admin.

    Attributes:
        _db: Async database session.
        _hasher: Password hasher for new accounts.
        _activity: Activity log writer.
    """

    def __init__(
        self,
        db: AsyncSession,
        hasher: PasswordHasher | None = None,
    ) -> None:
        """Initialize the user service.

        Args:
            db: Async database session.
            hasher: Password hasher. Defaults to a 12-round bcrypt hasher.
        """
        self._db = db
        self._hasher = hasher or PasswordHasher()
        self._activity = ActivityLogService(db)

    # =========================================================================
    # Teachers
    # =========================================================================

    async def list_teachers(self) -> list[TeacherResponse]:
        """List all teachers ordered by name."""
        result = await self._db.execute(select(Teacher).order_by(Teacher.name))
        return [to_teacher_response(t) for t in result.scalars().all()]

    async def get_teacher(self, teacher_id: str) -> TeacherResponse:
        """Get a teacher with summaries of the courses in their list.

        Raises:
            InvalidReferenceError: If teacher_id is malformed.
            TeacherNotFoundError: If no teacher has this id.
        """
        require_id(teacher_id, "Invalid teacher ID")
        teacher = await find_teacher(self._db, teacher_id)
        if teacher is None:
            raise TeacherNotFoundError()

        courses = await find_courses(self._db, teacher.course_ids)
        return to_teacher_response(teacher, assigned_courses=courses)

    async def create_teacher(
        self,
        request: TeacherCreateRequest,
        actor: Actor | None = None,
    ) -> TeacherResponse:
        """Create a teacher account.

        Raises:
            ValidationError: Listing every missing or malformed field,
                including an email that is already taken.
        """
        errors: list[str] = []
        if _blank(request.name):
            errors.append("Name is required")
        _check_email(request.email, errors)
        if _blank(request.password):
            errors.append("Password is required")

        if not errors and await email_in_use(self._db, normalize_email(request.email)):
            errors.append(DUPLICATE_EMAIL)
        if errors:
            raise ValidationError(errors)

        teacher = Teacher(
            name=request.name.strip(),
            email=normalize_email(request.email),
            password_hash=self._hasher.hash(request.password),
            courses=[],
        )
        self._db.add(teacher)
        await self._commit(ValidationError([DUPLICATE_EMAIL]))
        await self._db.refresh(teacher)

        logger.info("Teacher created: %s", teacher.id)

        await self._activity.record(
            actor, ActionType.TEACHER_ADDED, TargetType.USER, teacher.id, teacher.name
        )
        return to_teacher_response(teacher)

    async def update_teacher(
        self,
        teacher_id: str,
        request: TeacherUpdateRequest,
        actor: Actor | None = None,
    ) -> TeacherResponse:
        """Update a teacher's name and/or email.

        Raises:
            TeacherNotFoundError: If no teacher has this id.
            ValidationError: If a provided field is empty or malformed.
            EmailAlreadyInUseError: If the email belongs to another account.
        """
        require_id(teacher_id, "Invalid teacher ID")
        teacher = await find_teacher(self._db, teacher_id)
        if teacher is None:
            raise TeacherNotFoundError()

        await self._apply_profile_patch(teacher, request.name, request.email)
        await self._commit(EmailAlreadyInUseError())
        await self._db.refresh(teacher)

        logger.info("Teacher updated: %s", teacher.id)

        await self._activity.record(
            actor, ActionType.TEACHER_UPDATED, TargetType.USER, teacher.id, teacher.name
        )
        return to_teacher_response(teacher)

    # =========================================================================
    # Students
    # =========================================================================

    async def list_students(
        self,
        grade: str | None = None,
        search: str | None = None,
        populate_enrollments: bool = False,
    ) -> list[StudentResponse]:
        """List students ordered by name.

        Args:
            grade: Only students in this grade.
            search: Case-insensitive substring of name or email.
            populate_enrollments: Attach enrolled course summaries.

        Returns:
            Student responses.
        """
        stmt = select(Student)
        if grade:
            stmt = stmt.where(Student.grade == grade)
        if search:
            search_pattern = f"%{_escape_like(search)}%"
            stmt = stmt.where(
                or_(
                    Student.name.ilike(search_pattern, escape=LIKE_ESCAPE),
                    Student.email.ilike(search_pattern, escape=LIKE_ESCAPE),
                )
            )
        stmt = stmt.order_by(Student.name)

        result = await self._db.execute(stmt)
        students = list(result.scalars().all())

        if not populate_enrollments:
            return [to_student_response(s) for s in students]

        summaries = await self._enrolled_course_summaries(students)
        return [to_student_response(s, summaries[s.id]) for s in students]

    async def get_student(
        self,
        student_id: str,
        populate_enrollments: bool = False,
    ) -> StudentResponse:
        """Get a student by id.

        Raises:
            InvalidReferenceError: If student_id is malformed.
            StudentNotFoundError: If no student has this id.
        """
        require_id(student_id, "Invalid student ID")
        student = await find_student(self._db, student_id)
        if student is None:
            raise StudentNotFoundError()

        if not populate_enrollments:
            return to_student_response(student)

        summaries = await self._enrolled_course_summaries([student])
        return to_student_response(student, summaries[student.id])

    async def create_student(
        self,
        request: StudentCreateRequest,
        actor: Actor | None = None,
    ) -> StudentResponse:
        """Create a student account with an empty enrollment list.

        Raises:
            ValidationError: Listing every missing or malformed field,
                including a missing grade or an email that is already taken.
        """
        errors: list[str] = []
        if _blank(request.name):
            errors.append("Name is required")
        _check_email(request.email, errors)
        if _blank(request.password):
            errors.append("Password is required")
        if _blank(request.grade):
            errors.append("Student grade level is required")

        if not errors and await email_in_use(self._db, normalize_email(request.email)):
            errors.append(DUPLICATE_EMAIL)
        if errors:
            raise ValidationError(errors)

        student = Student(
            name=request.name.strip(),
            email=normalize_email(request.email),
            password_hash=self._hasher.hash(request.password),
            grade=request.grade.strip(),
            enrollments=[],
        )
        self._db.add(student)
        await self._commit(ValidationError([DUPLICATE_EMAIL]))
        await self._db.refresh(student)

        logger.info("Student created: %s (grade=%s)", student.id, student.grade)

        await self._activity.record(
            actor,
            ActionType.STUDENT_ADDED,
            TargetType.USER,
            student.id,
            student.name,
            {"grade": student.grade},
        )
        return to_student_response(student)

    async def update_student(
        self,
        student_id: str,
        request: StudentUpdateRequest,
        actor: Actor | None = None,
    ) -> StudentResponse:
        """Update a student's name, email and/or grade.

        A ``role`` in the request is logged and ignored.

        Raises:
            ValidationError: If no updatable field is given, or one is
                empty or malformed.
            StudentNotFoundError: If no student has this id.
            EmailAlreadyInUseError: If the email belongs to another account.
        """
        require_id(student_id, "Invalid student ID")

        if request.name is None and request.email is None and request.grade is None:
            raise ValidationError("No update fields provided")

        if request.role is not None:
            logger.warning(
                "Attempt to change role of student %s blocked", student_id
            )

        student = await find_student(self._db, student_id)
        if student is None:
            raise StudentNotFoundError("Student not found or user is not a student")

        if request.grade is not None and _blank(request.grade):
            raise ValidationError("Student grade level is required")

        await self._apply_profile_patch(student, request.name, request.email)
        if request.grade is not None:
            student.grade = request.grade.strip()

        await self._commit(EmailAlreadyInUseError())
        await self._db.refresh(student)

        logger.info("Student updated: %s", student.id)

        changes = request.model_dump(exclude_none=True, exclude={"role"})
        await self._activity.record(
            actor,
            ActionType.STUDENT_UPDATED,
            TargetType.USER,
            student.id,
            student.name,
            changes,
        )
        return to_student_response(student)

    # =========================================================================
    # Admin settings
    # =========================================================================

    async def get_admin_settings(self, admin_id: str) -> AdminResponse:
        """Get the acting admin's own account.

        Raises:
            AdminNotFoundError: If the admin account no longer exists.
        """
        admin = await find_admin(self._db, admin_id)
        if admin is None:
            raise AdminNotFoundError()
        return to_admin_response(admin)

    async def update_admin_settings(
        self,
        admin_id: str,
        request: AdminSettingsUpdateRequest,
        actor: Actor | None = None,
    ) -> AdminResponse:
        """Update the acting admin's name and/or email.

        Raises:
            AdminNotFoundError: If the admin account no longer exists.
            ValidationError: If a provided field is empty or malformed.
            EmailAlreadyInUseError: If the email belongs to another account.
        """
        admin = await find_admin(self._db, admin_id)
        if admin is None:
            raise AdminNotFoundError()

        await self._apply_profile_patch(admin, request.name, request.email)
        await self._commit(EmailAlreadyInUseError())
        await self._db.refresh(admin)

        logger.info("Admin settings updated: %s", admin.id)

        await self._activity.record(
            actor,
            ActionType.ADMIN_SETTINGS_UPDATED,
            TargetType.USER,
            admin.id,
            admin.name,
        )
        return to_admin_response(admin)

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _commit(self, on_duplicate: DirectoryError) -> None:
        """Commit an account write, reporting a unique email clash as on_duplicate.

        A concurrent request can take the address between the email check
        and this commit.
        """
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            logger.warning("Account write rejected by the database: %s", e.orig)
            raise on_duplicate from e

    async def _apply_profile_patch(
        self,
        account: Teacher | Student | Admin,
        name: str | None,
        email: str | None,
    ) -> None:
        """Validate and apply a name/email patch without committing."""
        errors: list[str] = []
        if name is not None and _blank(name):
            errors.append("Name is required")
        if email is not None:
            _check_email(email, errors)
        if errors:
            raise ValidationError(errors)

        if email is not None:
            normalized = normalize_email(email)
            if await email_in_use(self._db, normalized, exclude_id=account.id):
                raise EmailAlreadyInUseError()
            account.email = normalized
        if name is not None:
            account.name = name.strip()

    async def _enrolled_course_summaries(
        self,
        students: list[Student],
    ) -> dict[str, list[EnrolledCourseSummary]]:
        """Resolve each student's enrollments into course summaries.

        Enrollment ids that no longer resolve to a course are skipped.
        """
        all_ids = [cid for s in students for cid in s.enrollment_ids]
        courses = {c.id: c for c in await find_courses(self._db, all_ids)}
        teachers = await find_teachers_by_id(
            self._db, (c.teacher_id for c in courses.values())
        )

        summaries: dict[str, list[EnrolledCourseSummary]] = {}
        for student in students:
            items = []
            for course_id in student.enrollment_ids:
                course = courses.get(course_id)
                if course is None:
                    continue
                teacher = teachers.get(course.teacher_id) if course.teacher_id else None
                items.append(
                    EnrolledCourseSummary(
                        id=course.id,
                        name=course.name,
                        subject=course.subject,
                        status=course.status,
                        teacher_name=teacher.name if teacher else None,
                    )
                )
            summaries[student.id] = items
        return summaries

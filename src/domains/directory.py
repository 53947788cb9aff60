# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared directory lookups and response builders.

Lookups return ORM instances (or None) and never raise for missing rows;
services decide which error a missing row means. Role-typed lookups go
through ``select()`` on the mapped subclass so an id that belongs to an
account of another role resolves to None.
"""

from typing import Iterable, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.errors import InvalidReferenceError
from src.infrastructure.database.models import (
    Account,
    Admin,
    Course,
    Student,
    Teacher,
    is_valid_id,
)
from src.models.account import AdminResponse, StudentResponse, TeacherResponse
from src.models.common import (
    CourseSummary,
    EnrolledCourseSummary,
    StudentSummary,
    TeacherSummary,
)
from src.models.course import CourseDetailResponse, CourseResponse
from src.utils.datetime import ensure_utc

T = TypeVar("T", Account, Course)


def require_id(value: object, message: str) -> str:
    """Return value if it is a well-formed id.

    Raises:
        InvalidReferenceError: If value is not a well-formed id.
    """
    if not is_valid_id(value):
        raise InvalidReferenceError(message)
    return value  # type: ignore[return-value]


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def find_account(db: AsyncSession, account_id: str) -> Account | None:
    result = await db.execute(select(Account).where(Account.id == account_id))
    return result.scalar_one_or_none()


async def find_teacher(db: AsyncSession, teacher_id: str) -> Teacher | None:
    result = await db.execute(select(Teacher).where(Teacher.id == teacher_id))
    return result.scalar_one_or_none()


async def find_student(db: AsyncSession, student_id: str) -> Student | None:
    result = await db.execute(select(Student).where(Student.id == student_id))
    return result.scalar_one_or_none()


async def find_admin(db: AsyncSession, admin_id: str) -> Admin | None:
    result = await db.execute(select(Admin).where(Admin.id == admin_id))
    return result.scalar_one_or_none()


async def find_course(db: AsyncSession, course_id: str) -> Course | None:
    result = await db.execute(select(Course).where(Course.id == course_id))
    return result.scalar_one_or_none()


def _in_order(rows: Iterable[T], ids: list[str]) -> list[T]:
    by_id = {row.id: row for row in rows}
    return [by_id[i] for i in dict.fromkeys(ids) if i in by_id]


async def find_courses(db: AsyncSession, course_ids: list[str]) -> list[Course]:
    """Load courses by id, keeping the order of course_ids and skipping unknown ids."""
    if not course_ids:
        return []
    result = await db.execute(select(Course).where(Course.id.in_(course_ids)))
    return _in_order(result.scalars().all(), course_ids)


async def find_students(db: AsyncSession, student_ids: list[str]) -> list[Student]:
    """Load students by id, keeping the order of student_ids and skipping unknown ids."""
    if not student_ids:
        return []
    result = await db.execute(select(Student).where(Student.id.in_(student_ids)))
    return _in_order(result.scalars().all(), student_ids)


async def find_teachers_by_id(
    db: AsyncSession,
    teacher_ids: Iterable[str | None],
) -> dict[str, Teacher]:
    ids = {i for i in teacher_ids if i}
    if not ids:
        return {}
    result = await db.execute(select(Teacher).where(Teacher.id.in_(ids)))
    return {teacher.id: teacher for teacher in result.scalars().all()}


async def find_courses_owned_by(db: AsyncSession, teacher_id: str) -> list[Course]:
    """Load courses whose teacher pointer is teacher_id."""
    result = await db.execute(
        select(Course).where(Course.teacher_id == teacher_id).order_by(Course.created_at)
    )
    return list(result.scalars().all())


async def email_in_use(
    db: AsyncSession,
    email: str,
    exclude_id: str | None = None,
) -> bool:
    """Check whether another account already uses email."""
    query = select(func.count()).select_from(Account).where(Account.email == email)
    if exclude_id:
        query = query.where(Account.id != exclude_id)
    result = await db.execute(query)
    return (result.scalar() or 0) > 0


# Response builders


def teacher_summary(teacher: Teacher | None) -> TeacherSummary | None:
    if teacher is None:
        return None
    return TeacherSummary(id=teacher.id, name=teacher.name, email=teacher.email)


def course_summary(course: Course) -> CourseSummary:
    return CourseSummary(
        id=course.id,
        name=course.name,
        subject=course.subject,
        grade=course.grade,
        status=course.status,
    )


def to_teacher_response(
    teacher: Teacher,
    assigned_courses: list[Course] | None = None,
) -> TeacherResponse:
    return TeacherResponse(
        id=teacher.id,
        name=teacher.name,
        email=teacher.email,
        courses=teacher.course_ids,
        assigned_courses=(
            [course_summary(c) for c in assigned_courses]
            if assigned_courses is not None
            else None
        ),
        created_at=ensure_utc(teacher.created_at),
        updated_at=ensure_utc(teacher.updated_at),
    )


def to_student_response(
    student: Student,
    enrolled_courses: list[EnrolledCourseSummary] | None = None,
) -> StudentResponse:
    return StudentResponse(
        id=student.id,
        name=student.name,
        email=student.email,
        grade=student.grade,
        enrollments=student.enrollment_ids,
        enrolled_courses=enrolled_courses,
        created_at=ensure_utc(student.created_at),
        updated_at=ensure_utc(student.updated_at),
    )


def to_admin_response(admin: Admin) -> AdminResponse:
    return AdminResponse(
        id=admin.id,
        name=admin.name,
        email=admin.email,
        created_at=ensure_utc(admin.created_at),
        updated_at=ensure_utc(admin.updated_at),
    )


def to_course_response(course: Course, teacher: Teacher | None = None) -> CourseResponse:
    return CourseResponse(
        id=course.id,
        name=course.name,
        description=course.description,
        subject=course.subject,
        grade=course.grade,
        syllabus=course.syllabus,
        resources=course.resources,
        status=course.status,
        teacher_id=course.teacher_id,
        teacher=teacher_summary(teacher),
        students=course.student_ids,
        created_at=ensure_utc(course.created_at),
        updated_at=ensure_utc(course.updated_at),
    )


def to_course_detail_response(
    course: Course,
    teacher: Teacher | None,
    students: list[Student],
) -> CourseDetailResponse:
    base = to_course_response(course, teacher)
    return CourseDetailResponse(
        **base.model_dump(),
        enrolled_students=[
            StudentSummary(id=s.id, name=s.name, email=s.email, grade=s.grade)
            for s in students
        ],
    )

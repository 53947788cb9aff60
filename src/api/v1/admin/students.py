# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student management API endpoints.

This module provides endpoints for student management:
- GET / - List students (grade filter, name/email search)
- POST / - Create a student
- GET /{student_id} - Get student details
- PUT /{student_id} - Update a student
- DELETE /{student_id} - Delete a student and detach their enrollments
- POST /{student_id}/enroll/{course_id} - Enroll in an approved course
- DELETE /{student_id}/unenroll/{course_id} - Unenroll from a course

Pass ``populate=enrollments`` to list/get to attach enrolled course summaries.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Query, status

from src.api.dependencies import DB, AdminActor, AdminUser, Hasher
from src.api.errors import to_http_exception
from src.domains.enrollment import EnrollmentService
from src.domains.errors import DirectoryError
from src.domains.user import UserService
from src.models.account import (
    StudentCreateRequest,
    StudentResponse,
    StudentUpdateRequest,
)
from src.models.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()

POPULATE_ENROLLMENTS = "enrollments"


@router.get(
    "",
    response_model=list[StudentResponse],
    summary="List students",
)
async def list_students(
    current_user: AdminUser,
    db: DB,
    hasher: Hasher,
    grade: Annotated[str | None, Query(description="Filter by grade level")] = None,
    search: Annotated[str | None, Query(description="Search by name or email")] = None,
    populate: Annotated[str | None, Query(description="Set to 'enrollments' to attach courses")] = None,
) -> list[StudentResponse]:
    """List students ordered by name."""
    return await UserService(db, hasher).list_students(
        grade=grade,
        search=search,
        populate_enrollments=populate == POPULATE_ENROLLMENTS,
    )


@router.post(
    "",
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create student",
)
async def create_student(
    data: StudentCreateRequest,
    actor: AdminActor,
    db: DB,
    hasher: Hasher,
) -> StudentResponse:
    """Create a student account. A grade level is required."""
    try:
        return await UserService(db, hasher).create_student(data, actor)
    except DirectoryError as e:
        raise to_http_exception(e)


@router.get(
    "/{student_id}",
    response_model=StudentResponse,
    summary="Get student",
)
async def get_student(
    student_id: str,
    current_user: AdminUser,
    db: DB,
    hasher: Hasher,
    populate: Annotated[str | None, Query(description="Set to 'enrollments' to attach courses")] = None,
) -> StudentResponse:
    """Get a student by id."""
    try:
        return await UserService(db, hasher).get_student(
            student_id,
            populate_enrollments=populate == POPULATE_ENROLLMENTS,
        )
    except DirectoryError as e:
        raise to_http_exception(e)


@router.put(
    "/{student_id}",
    response_model=StudentResponse,
    summary="Update student",
)
async def update_student(
    student_id: str,
    data: StudentUpdateRequest,
    actor: AdminActor,
    db: DB,
    hasher: Hasher,
) -> StudentResponse:
    """Update a student's name, email or grade. Role changes are ignored."""
    try:
        return await UserService(db, hasher).update_student(student_id, data, actor)
    except DirectoryError as e:
        raise to_http_exception(e)


@router.delete(
    "/{student_id}",
    response_model=MessageResponse,
    summary="Delete student",
)
async def delete_student(
    student_id: str,
    actor: AdminActor,
    db: DB,
) -> MessageResponse:
    """Delete a student and remove them from every enrolled course."""
    try:
        await EnrollmentService(db).remove_student(student_id, actor)
    except DirectoryError as e:
        raise to_http_exception(e)

    return MessageResponse(message="Student removed successfully")


@router.post(
    "/{student_id}/enroll/{course_id}",
    response_model=MessageResponse,
    summary="Enroll student",
)
async def enroll_student(
    student_id: str,
    course_id: str,
    actor: AdminActor,
    db: DB,
) -> MessageResponse:
    """Enroll a student in an approved course."""
    try:
        await EnrollmentService(db).enroll_student(student_id, course_id, actor)
    except DirectoryError as e:
        raise to_http_exception(e)

    return MessageResponse(message="Student enrolled successfully")


@router.delete(
    "/{student_id}/unenroll/{course_id}",
    response_model=MessageResponse,
    summary="Unenroll student",
)
async def unenroll_student(
    student_id: str,
    course_id: str,
    actor: AdminActor,
    db: DB,
) -> MessageResponse:
    """Remove a student from a course."""
    try:
        await EnrollmentService(db).unenroll_student(student_id, course_id, actor)
    except DirectoryError as e:
        raise to_http_exception(e)

    return MessageResponse(message="Student unenrolled successfully")

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher management API endpoints.

This module provides endpoints for teacher management:
- GET / - List teachers
- POST / - Create a teacher
- GET /{teacher_id} - Get teacher details with assigned courses
- PUT /{teacher_id} - Update teacher profile
- DELETE /{teacher_id} - Remove a teacher without courses
- PUT /{teacher_id}/assign-course - Assign a course to the teacher
- DELETE /{teacher_id}/delete-with-courses - Remove teacher and listed courses
- DELETE /{teacher_id}/orphan-courses - Remove teacher, keep courses unassigned

Example:
    PUT /api/v1/admin/teachers/{teacher_id}/assign-course
    {
        "course_id": "0b6f3c5e-..."
    }
"""

import logging

from fastapi import APIRouter, status

from src.api.dependencies import DB, AdminActor, AdminUser, Hasher
from src.api.errors import to_http_exception
from src.domains.assignment import TeacherAssignmentService
from src.domains.errors import DirectoryError
from src.domains.user import UserService
from src.models.account import (
    TeacherCreateRequest,
    TeacherResponse,
    TeacherUpdateRequest,
)
from src.models.course import (
    AssignCourseRequest,
    RemoveTeacherWithCoursesRequest,
    TeacherRemovalResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=list[TeacherResponse],
    summary="List teachers",
)
async def list_teachers(
    current_user: AdminUser,
    db: DB,
    hasher: Hasher,
) -> list[TeacherResponse]:
    """List all teachers ordered by name."""
    return await UserService(db, hasher).list_teachers()


@router.post(
    "",
    response_model=TeacherResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create teacher",
)
async def create_teacher(
    data: TeacherCreateRequest,
    actor: AdminActor,
    db: DB,
    hasher: Hasher,
) -> TeacherResponse:
    """Create a teacher account.

    Raises:
        HTTPException: 400 listing every failed field constraint.
    """
    try:
        return await UserService(db, hasher).create_teacher(data, actor)
    except DirectoryError as e:
        raise to_http_exception(e)


@router.get(
    "/{teacher_id}",
    response_model=TeacherResponse,
    summary="Get teacher",
)
async def get_teacher(
    teacher_id: str,
    current_user: AdminUser,
    db: DB,
    hasher: Hasher,
) -> TeacherResponse:
    """Get a teacher with summaries of the assigned courses."""
    try:
        return await UserService(db, hasher).get_teacher(teacher_id)
    except DirectoryError as e:
        raise to_http_exception(e)


@router.put(
    "/{teacher_id}",
    response_model=TeacherResponse,
    summary="Update teacher",
)
async def update_teacher(
    teacher_id: str,
    data: TeacherUpdateRequest,
    actor: AdminActor,
    db: DB,
    hasher: Hasher,
) -> TeacherResponse:
    """Update a teacher's name or email."""
    try:
        return await UserService(db, hasher).update_teacher(teacher_id, data, actor)
    except DirectoryError as e:
        raise to_http_exception(e)


@router.delete(
    "/{teacher_id}",
    response_model=TeacherRemovalResponse,
    summary="Remove teacher",
    description="Remove a teacher who has no courses. "
    "Responds 400 with the blocking courses otherwise.",
)
async def remove_teacher(
    teacher_id: str,
    actor: AdminActor,
    db: DB,
) -> TeacherRemovalResponse:
    """Remove a teacher that owns no courses."""
    try:
        return await TeacherAssignmentService(db).remove_teacher(teacher_id, actor)
    except DirectoryError as e:
        raise to_http_exception(e)


@router.put(
    "/{teacher_id}/assign-course",
    response_model=TeacherResponse,
    summary="Assign course to teacher",
)
async def assign_course(
    teacher_id: str,
    data: AssignCourseRequest,
    actor: AdminActor,
    db: DB,
) -> TeacherResponse:
    """Assign a course to a teacher, moving it off its previous teacher."""
    logger.info("Assigning course %s to teacher %s", data.course_id, teacher_id)

    try:
        return await TeacherAssignmentService(db).assign_course(
            teacher_id, data.course_id, actor
        )
    except DirectoryError as e:
        raise to_http_exception(e)


@router.delete(
    "/{teacher_id}/delete-with-courses",
    response_model=TeacherRemovalResponse,
    summary="Remove teacher and delete courses",
)
async def remove_teacher_with_courses(
    teacher_id: str,
    actor: AdminActor,
    db: DB,
    data: RemoveTeacherWithCoursesRequest | None = None,
) -> TeacherRemovalResponse:
    """Remove a teacher and delete the listed courses that belong to them."""
    course_ids = data.course_ids if data is not None else None

    try:
        return await TeacherAssignmentService(db).remove_teacher_with_courses(
            teacher_id, course_ids, actor
        )
    except DirectoryError as e:
        raise to_http_exception(e)


@router.delete(
    "/{teacher_id}/orphan-courses",
    response_model=TeacherRemovalResponse,
    summary="Remove teacher and keep courses",
)
async def remove_teacher_keep_courses(
    teacher_id: str,
    actor: AdminActor,
    db: DB,
) -> TeacherRemovalResponse:
    """Remove a teacher and leave their courses unassigned."""
    try:
        return await TeacherAssignmentService(db).remove_teacher_keep_courses(
            teacher_id, actor
        )
    except DirectoryError as e:
        raise to_http_exception(e)

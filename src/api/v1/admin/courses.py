# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course management API endpoints.

This module provides endpoints for course management:
- GET / - List courses with filtering
- POST / - Create a course
- GET /{course_id} - Get course details with teacher and students
- PUT /{course_id} - Update a course (teacher_id may be null to unassign)
- DELETE /{course_id} - Delete a course and detach it everywhere
- PUT /{course_id}/approve - Approve a course
- PUT /{course_id}/reject - Reject a course
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Query, status

from src.api.dependencies import DB, AdminActor, AdminUser
from src.api.errors import to_http_exception
from src.domains.course import CourseService
from src.domains.errors import DirectoryError
from src.models.common import MessageResponse
from src.models.course import (
    CourseCreateRequest,
    CourseDetailResponse,
    CourseListFilters,
    CourseResponse,
    CourseUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=list[CourseResponse],
    summary="List courses",
    description="List courses with optional status, subject, grade and teacher filters.",
)
async def list_courses(
    current_user: AdminUser,
    db: DB,
    course_status: Annotated[str | None, Query(alias="status", description="Filter by status")] = None,
    subject: Annotated[str | None, Query(description="Filter by subject")] = None,
    grade: Annotated[str | None, Query(description="Filter by grade")] = None,
    teacher_id: Annotated[str | None, Query(description="Filter by teacher")] = None,
) -> list[CourseResponse]:
    """List courses with their teacher summaries."""
    filters = CourseListFilters(
        status=course_status,
        subject=subject,
        grade=grade,
        teacher_id=teacher_id,
    )

    try:
        return await CourseService(db).list_courses(filters)
    except DirectoryError as e:
        raise to_http_exception(e)


@router.post(
    "",
    response_model=CourseResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create course",
)
async def create_course(
    data: CourseCreateRequest,
    actor: AdminActor,
    db: DB,
) -> CourseResponse:
    """Create a course, optionally assigned to a teacher."""
    try:
        return await CourseService(db).create_course(data, actor)
    except DirectoryError as e:
        raise to_http_exception(e)


@router.get(
    "/{course_id}",
    response_model=CourseDetailResponse,
    summary="Get course",
)
async def get_course(
    course_id: str,
    current_user: AdminUser,
    db: DB,
) -> CourseDetailResponse:
    """Get a course with its teacher and enrolled students."""
    try:
        return await CourseService(db).get_course(course_id)
    except DirectoryError as e:
        raise to_http_exception(e)


@router.put(
    "/{course_id}",
    response_model=CourseResponse,
    summary="Update course",
)
async def update_course(
    course_id: str,
    data: CourseUpdateRequest,
    actor: AdminActor,
    db: DB,
) -> CourseResponse:
    """Patch course fields. Only fields present in the body are applied."""
    try:
        return await CourseService(db).update_course(course_id, data, actor)
    except DirectoryError as e:
        raise to_http_exception(e)


@router.delete(
    "/{course_id}",
    response_model=MessageResponse,
    summary="Delete course",
)
async def delete_course(
    course_id: str,
    actor: AdminActor,
    db: DB,
) -> MessageResponse:
    """Delete a course and remove it from its teacher and students."""
    try:
        await CourseService(db).delete_course(course_id, actor)
    except DirectoryError as e:
        raise to_http_exception(e)

    return MessageResponse(message="Course removed successfully")


@router.put(
    "/{course_id}/approve",
    response_model=CourseResponse,
    summary="Approve course",
)
async def approve_course(
    course_id: str,
    actor: AdminActor,
    db: DB,
) -> CourseResponse:
    """Set course status to approved."""
    try:
        return await CourseService(db).approve_course(course_id, actor)
    except DirectoryError as e:
        raise to_http_exception(e)


@router.put(
    "/{course_id}/reject",
    response_model=CourseResponse,
    summary="Reject course",
)
async def reject_course(
    course_id: str,
    actor: AdminActor,
    db: DB,
) -> CourseResponse:
    """Set course status to rejected."""
    try:
        return await CourseService(db).reject_course(course_id, actor)
    except DirectoryError as e:
        raise to_http_exception(e)

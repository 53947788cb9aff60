# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course schemas and teacher/course relationship requests."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.models.common import StudentSummary, TeacherSummary


class CourseCreateRequest(BaseModel):
    """Request to create a course owned by an existing teacher."""

    name: str | None = None
    description: str | None = None
    subject: str | None = None
    grade: str | None = None
    syllabus: str | None = None
    resources: str | None = None
    teacher_id: str | None = None


class CourseUpdateRequest(BaseModel):
    """Partial course update.

    Only fields present in the request body are applied. Sending
    ``"teacher_id": null`` unassigns the course.
    """

    name: str | None = None
    description: str | None = None
    subject: str | None = None
    grade: str | None = None
    syllabus: str | None = None
    resources: str | None = None
    teacher_id: str | None = None


class CourseResponse(BaseModel):
    """Course record with its owning teacher attached."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    subject: str | None = None
    grade: str | None = None
    syllabus: str | None = None
    resources: str | None = None
    status: str
    teacher_id: str | None = None
    teacher: TeacherSummary | None = None
    students: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class CourseDetailResponse(CourseResponse):
    """Course record with enrolled student summaries."""

    enrolled_students: list[StudentSummary] = Field(default_factory=list)


class CourseListFilters(BaseModel):
    """Optional filters for course listing."""

    status: str | None = None
    subject: str | None = None
    grade: str | None = None
    teacher_id: str | None = None


class AssignCourseRequest(BaseModel):
    """Request to assign a course to a teacher."""

    course_id: str | None = None


class RemoveTeacherWithCoursesRequest(BaseModel):
    """Course ids to delete together with a teacher.

    Typed loosely so that a non-list value reaches the service and is
    reported with a domain message.
    """

    course_ids: Any = None


class TeacherRemovalResponse(BaseModel):
    """Outcome of a teacher removal variant."""

    message: str
    deleted_courses: int = 0
    orphaned_courses: int = 0

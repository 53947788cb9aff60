# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Account schemas for teachers, students and the acting admin.

Create and update requests accept every field as optional; required-field
and format checks run in the service layer so all violations are reported
together.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.models.common import CourseSummary, EnrolledCourseSummary


class TeacherCreateRequest(BaseModel):
    """Request to create a teacher account."""

    name: str | None = None
    email: str | None = None
    password: str | None = None


class TeacherUpdateRequest(BaseModel):
    """Partial update of a teacher account."""

    name: str | None = None
    email: str | None = None


class TeacherResponse(BaseModel):
    """Teacher account.

    ``assigned_courses`` is only filled by single-teacher fetches.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: str = "teacher"
    courses: list[str] = Field(default_factory=list)
    assigned_courses: list[CourseSummary] | None = None
    created_at: datetime
    updated_at: datetime


class StudentCreateRequest(BaseModel):
    """Request to create a student account."""

    name: str | None = None
    email: str | None = None
    password: str | None = None
    grade: str | None = None


class StudentUpdateRequest(BaseModel):
    """Partial update of a student account.

    ``role`` is accepted so the request can be logged, but it is never applied.
    """

    name: str | None = None
    email: str | None = None
    grade: str | None = None
    role: str | None = None


class StudentResponse(BaseModel):
    """Student account.

    ``enrolled_courses`` is only filled when enrollments are populated.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: str = "student"
    grade: str | None = None
    enrollments: list[str] = Field(default_factory=list)
    enrolled_courses: list[EnrolledCourseSummary] | None = None
    created_at: datetime
    updated_at: datetime


class AdminResponse(BaseModel):
    """Admin account settings."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: str = "admin"
    created_at: datetime
    updated_at: datetime


class AdminSettingsUpdateRequest(BaseModel):
    """Update of the acting admin's own profile."""

    name: str | None = None
    email: str | None = None

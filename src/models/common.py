# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared schema building blocks."""

from pydantic import BaseModel, ConfigDict


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class TeacherSummary(BaseModel):
    """Teacher reference attached to course responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str


class StudentSummary(BaseModel):
    """Student reference attached to course detail responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    grade: str | None = None


class CourseSummary(BaseModel):
    """Course reference attached to teacher detail responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    subject: str | None = None
    grade: str | None = None
    status: str


class EnrolledCourseSummary(BaseModel):
    """Course reference attached to student responses when populated."""

    id: str
    name: str
    subject: str | None = None
    status: str
    teacher_name: str | None = None


class CourseRef(BaseModel):
    """Minimal course reference (id and name)."""

    id: str
    name: str

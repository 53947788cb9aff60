# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Dashboard overview and report schemas."""

from pydantic import BaseModel, Field


class OverviewResponse(BaseModel):
    """Headline counts for the admin dashboard."""

    teacher_count: int = 0
    student_count: int = 0
    course_count: int = 0
    enrollment_count: int = 0


class CourseStatusCounts(BaseModel):
    """Courses per review status."""

    pending: int = 0
    approved: int = 0
    rejected: int = 0
    total: int = 0


class DistributionEntry(BaseModel):
    """One bucket of a named distribution."""

    name: str
    count: int


class ReportsResponse(BaseModel):
    """Aggregate report over courses, teachers and students."""

    course_status_counts: CourseStatusCounts = Field(default_factory=CourseStatusCounts)
    subject_distribution: list[DistributionEntry] = Field(default_factory=list)
    grade_distribution: list[DistributionEntry] = Field(default_factory=list)
    courses_per_teacher: list[DistributionEntry] = Field(default_factory=list)
    total_students: int = 0
    student_grade_distribution: list[DistributionEntry] = Field(default_factory=list)

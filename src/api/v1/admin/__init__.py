# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin back-office routes.

Every endpoint requires an authenticated account with the admin role.

Modules:
    overview: Dashboard totals.
    teachers: Teacher accounts, course assignment and removal variants.
    courses: Course records and approval.
    students: Student accounts and enrollment.
    reports: Aggregate reports.
    activity: Recent admin activity feed.
    settings: The calling admin's own account.
"""

from fastapi import APIRouter

from src.api.v1.admin import activity, courses, overview, reports, settings, students, teachers

router = APIRouter(prefix="/admin")

router.include_router(overview.router, prefix="/overview", tags=["Admin Overview"])
router.include_router(teachers.router, prefix="/teachers", tags=["Admin Teachers"])
router.include_router(courses.router, prefix="/courses", tags=["Admin Courses"])
router.include_router(students.router, prefix="/students", tags=["Admin Students"])
router.include_router(reports.router, prefix="/reports", tags=["Admin Reports"])
router.include_router(activity.router, prefix="/activity", tags=["Admin Activity"])
router.include_router(settings.router, prefix="/settings", tags=["Admin Settings"])

__all__ = ["router"]

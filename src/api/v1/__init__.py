# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all v1 API endpoint definitions.

Modules:
    admin: Admin back-office endpoints (teachers, courses, students,
        enrollments, reports, activity, settings).
"""

from fastapi import APIRouter

from src.api.v1 import admin

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

router.include_router(admin.router)

__all__ = ["router"]

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment domain package.

This package keeps student enrollments and course rosters in step:
- Enrolling and unenrolling students
- Student removal with roster cleanup
- Course detachment from enrolled students
"""

from src.domains.enrollment.service import EnrollmentService

__all__ = [
    "EnrollmentService",
]

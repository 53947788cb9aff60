# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher assignment domain package.

This package keeps teacher course lists and course owners consistent:
- Course assignment and reassignment
- Teacher removal variants (blocked, delete courses, orphan courses)
"""

from src.domains.assignment.service import UNKNOWN_COURSE_NAME, TeacherAssignmentService

__all__ = [
    "TeacherAssignmentService",
    "UNKNOWN_COURSE_NAME",
]

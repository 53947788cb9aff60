# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User domain package.

Provides teacher, student and admin account management.
"""

from src.domains.user.service import EMAIL_PATTERN, UserService

__all__ = [
    "UserService",
    "EMAIL_PATTERN",
]

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Activity log domain package.

Provides the admin audit trail: best-effort writes and the recent
activity feed.
"""

from src.domains.activity_log.service import (
    DEFAULT_FEED_LIMIT,
    ActivityLogService,
    Actor,
)

__all__ = [
    "ActivityLogService",
    "Actor",
    "DEFAULT_FEED_LIMIT",
]

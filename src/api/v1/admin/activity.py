# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Activity feed endpoint.

Example:
    GET /api/v1/admin/activity?limit=5
"""

from typing import Annotated

from fastapi import APIRouter, Query

from src.api.dependencies import DB, AdminUser
from src.core.config import get_settings
from src.domains.activity_log import ActivityLogService
from src.models.activity import ActivityLogResponse

router = APIRouter()


@router.get(
    "",
    response_model=list[ActivityLogResponse],
    summary="Recent activity",
    description="Most recent admin actions, newest first.",
)
async def list_activity(
    current_user: AdminUser,
    db: DB,
    limit: Annotated[int | None, Query(ge=1, description="Maximum entries")] = None,
) -> list[ActivityLogResponse]:
    """List recent activity entries.

    The limit defaults to the configured feed size and is capped at the
    configured maximum.
    """
    feed = get_settings().activity
    limit = min(limit or feed.default_limit, feed.max_limit)

    return await ActivityLogService(db).list_recent(limit)

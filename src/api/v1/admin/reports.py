# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Report endpoints.

This module provides the aggregate report used by the admin dashboard:
course status counts, subject and grade distributions, per-teacher
course counts and the student grade distribution.
"""

from fastapi import APIRouter

from src.api.dependencies import DB, AdminUser
from src.domains.analytics import ReportAggregator
from src.models.report import ReportsResponse

router = APIRouter()


@router.get(
    "",
    response_model=ReportsResponse,
    summary="Reports",
)
async def get_reports(
    current_user: AdminUser,
    db: DB,
) -> ReportsResponse:
    """Get the aggregate directory report."""
    return await ReportAggregator(db).get_reports()

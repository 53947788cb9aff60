# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Dashboard overview endpoint."""

from fastapi import APIRouter

from src.api.dependencies import DB, AdminUser
from src.domains.analytics import ReportAggregator
from src.models.report import OverviewResponse

router = APIRouter()


@router.get(
    "",
    response_model=OverviewResponse,
    summary="Overview stats",
    description="Teacher, student, course and enrollment totals.",
)
async def get_overview(
    current_user: AdminUser,
    db: DB,
) -> OverviewResponse:
    """Get directory totals for the admin dashboard."""
    return await ReportAggregator(db).get_overview()

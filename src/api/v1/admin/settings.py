# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin self-settings endpoints.

- GET / - Get the calling admin's profile
- PUT / - Update the calling admin's name or email
"""

from fastapi import APIRouter

from src.api.dependencies import DB, AdminActor, AdminUser
from src.api.errors import to_http_exception
from src.domains.errors import DirectoryError
from src.domains.user import UserService
from src.models.account import AdminResponse, AdminSettingsUpdateRequest

router = APIRouter()


@router.get(
    "",
    response_model=AdminResponse,
    summary="Get admin settings",
)
async def get_settings_profile(
    current_user: AdminUser,
    db: DB,
) -> AdminResponse:
    """Get the authenticated admin's own account."""
    try:
        return await UserService(db).get_admin_settings(current_user.id)
    except DirectoryError as e:
        raise to_http_exception(e)


@router.put(
    "",
    response_model=AdminResponse,
    summary="Update admin settings",
)
async def update_settings_profile(
    data: AdminSettingsUpdateRequest,
    current_user: AdminUser,
    actor: AdminActor,
    db: DB,
) -> AdminResponse:
    """Update the authenticated admin's name or email."""
    try:
        return await UserService(db).update_admin_settings(current_user.id, data, actor)
    except DirectoryError as e:
        raise to_http_exception(e)

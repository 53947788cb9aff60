# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependencies for the admin API.

Routes declare what they need through the ``Annotated`` aliases at the
bottom of this module:

    @router.post("")
    async def create_teacher(data: TeacherCreateRequest, actor: AdminActor, db: DB):
        ...

``AdminUser`` only gates the route; ``AdminActor`` also hands the caller
to the activity log.
"""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.middleware.auth import CurrentUser, get_current_user
from src.core.config import get_settings
from src.domains.activity_log import Actor
from src.domains.auth.password import PasswordHasher
from src.domains.directory import find_admin
from src.infrastructure.database.connection import (
    close_database,
    get_engine,
    get_session,
    init_database,
)
from src.infrastructure.database.migrations.runner import apply_migrations
from src.infrastructure.database.seeds import seed_bootstrap_admin

logger = logging.getLogger(__name__)


async def init_db() -> None:
    """Open the engine, bring the schema up to date and seed the first admin."""
    settings = get_settings()

    await init_database(settings)

    if settings.database.auto_migrate:
        applied = await apply_migrations(get_engine())
        if applied:
            logger.info("Applied %d schema migrations", len(applied))

    async with get_session() as session:
        await seed_bootstrap_admin(session, settings.bootstrap_admin)


async def close_db() -> None:
    await close_database()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield one session per request."""
    async with get_session() as session:
        yield session


# =========================================================================
# Caller
# =========================================================================


def require_auth(request: Request) -> CurrentUser:
    """Return the caller, or answer 401 when the request carries no valid token."""
    user = get_current_user(request)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_admin(user: CurrentUser = Depends(require_auth)) -> CurrentUser:
    """Return the caller if they are an admin, otherwise answer 403."""
    if not user.is_admin:
        logger.info("Admin route refused for %s (role=%s)", user.id, user.role)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


async def get_actor(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: CurrentUser = Depends(require_admin),
) -> Actor:
    """Load the admin caller's account as the actor of activity entries.

    The name comes from the stored account, so entries carry the current
    display name whether or not the token has a ``name`` claim.
    """
    admin = await find_admin(db, current_user.id)
    if admin is None:
        logger.warning("Token subject %s is not an existing admin", current_user.id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Admin account not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Actor(id=admin.id, name=admin.name)


def get_password_hasher() -> PasswordHasher:
    return PasswordHasher()


DB = Annotated[AsyncSession, Depends(get_db)]
AdminUser = Annotated[CurrentUser, Depends(require_admin)]
AdminActor = Annotated[Actor, Depends(get_actor)]
Hasher = Annotated[PasswordHasher, Depends(get_password_hasher)]

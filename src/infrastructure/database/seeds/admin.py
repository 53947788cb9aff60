# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Bootstrap admin seed.

Creates the first admin account at startup so the back office can be
reached at all. Nothing is written when an admin already exists or when
no bootstrap password is configured.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config.settings import BootstrapAdminSettings
from src.domains.auth.password import PasswordHasher
from src.infrastructure.database.models import Account, AccountRole, Admin

logger = logging.getLogger(__name__)


async def seed_bootstrap_admin(
    session: AsyncSession,
    settings: BootstrapAdminSettings,
    hasher: PasswordHasher | None = None,
) -> Admin | None:
    """Seed the initial admin account.

    Args:
        session: Database session.
        settings: Bootstrap admin settings.
        hasher: Optional password hasher override.

    Returns:
        The created admin, or None if nothing was seeded.
    """
    if not settings.enabled:
        logger.info("Bootstrap admin disabled (no password configured)")
        return None

    result = await session.execute(
        select(func.count()).select_from(Account).where(Account.role == AccountRole.ADMIN.value)
    )
    if result.scalar_one() > 0:
        logger.debug("Admin account already present, skipping bootstrap seed")
        return None

    email = settings.email.strip().lower()
    existing = await session.execute(select(Account.id).where(Account.email == email))
    if existing.scalar_one_or_none() is not None:
        logger.warning("Bootstrap admin email %s is taken by a non-admin account", email)
        return None

    hasher = hasher or PasswordHasher()
    admin = Admin(
        name=settings.name,
        email=email,
        password_hash=hasher.hash(settings.password.get_secret_value()),
    )
    session.add(admin)
    await session.commit()

    logger.info("Seeded bootstrap admin: %s", email)
    return admin

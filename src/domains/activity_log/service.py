# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Activity log service for the admin audit trail.

Entries are written after the audited operation has committed, through a
session of their own bound to the same engine. A failed write is logged and
dropped: it never reaches the caller, never undoes the audited operation
and leaves the caller's loaded objects untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.infrastructure.database.models import ActionType, ActivityLog, TargetType
from src.models.activity import ActivityLogResponse
from src.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)

DEFAULT_FEED_LIMIT = 15


@dataclass(frozen=True)
class Actor:
    """Admin performing an audited action.

    Attributes:
        id: Admin account id.
        name: Admin display name.
    """

    id: str
    name: str


class ActivityLogService:
    """Service for writing and reading admin activity entries.

    Attributes:
        db: Async database session used for reads.
        session_factory: Opens the session each entry is written in.
    """

    def __init__(
        self,
        db: AsyncSession,
        session_factory: Callable[[], AsyncSession] | None = None,
    ) -> None:
        self.db = db
        self.session_factory = session_factory or async_sessionmaker(
            db.bind, class_=AsyncSession, expire_on_commit=False
        )

    async def record(
        self,
        actor: Actor | None,
        action_type: ActionType,
        target_type: TargetType | None = None,
        target_id: str | None = None,
        target_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> ActivityLog | None:
        """Append one audit entry, best effort.

        Args:
            actor: Admin performing the action. Without an id and name the
                entry is skipped.
            action_type: What was done.
            target_type: Kind of record affected.
            target_id: Affected record id.
            target_name: Affected record display name.
            details: Free-form payload.

        Returns:
            The stored entry, or None if it was skipped or failed.
        """
        if actor is None or not actor.id or not actor.name:
            logger.warning(
                "Could not log activity %s: acting admin not identified",
                action_type.value,
            )
            return None

        entry = ActivityLog(
            actor_id=actor.id,
            actor_name=actor.name,
            action_type=action_type.value,
            target_type=target_type.value if target_type else None,
            target_id=target_id,
            target_name=target_name,
            details=details,
        )

        try:
            async with self.session_factory() as session:
                session.add(entry)
                await session.commit()
        except SQLAlchemyError:
            logger.warning(
                "Failed to log admin activity %s on %s",
                action_type.value,
                target_id,
                exc_info=True,
            )
            return None

        logger.info(
            "Activity logged: %s performed %s on %s",
            actor.name,
            action_type.value,
            target_type.value if target_type else TargetType.SYSTEM.value,
        )
        return entry

    async def list_recent(self, limit: int = DEFAULT_FEED_LIMIT) -> list[ActivityLogResponse]:
        """List the most recent entries, newest first.

        Args:
            limit: Maximum number of entries to return.

        Returns:
            Activity entries ordered by creation time descending.
        """
        result = await self.db.execute(
            select(ActivityLog)
            .order_by(ActivityLog.created_at.desc())
            .limit(limit)
        )
        return [self._to_response(entry) for entry in result.scalars().all()]

    def _to_response(self, entry: ActivityLog) -> ActivityLogResponse:
        return ActivityLogResponse(
            id=entry.id,
            actor_id=entry.actor_id,
            actor_name=entry.actor_name,
            action_type=entry.action_type,
            target_type=entry.target_type,
            target_id=entry.target_id,
            target_name=entry.target_name,
            details=entry.details,
            created_at=ensure_utc(entry.created_at),
        )

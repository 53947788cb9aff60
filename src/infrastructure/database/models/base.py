# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Declarative base and shared column mixins for ORM models."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.utils.datetime import utc_now


def generate_id() -> str:
    """Generate a new primary key value."""
    return str(uuid.uuid4())


def is_valid_id(value: object) -> bool:
    """Check whether a value is a well-formed primary key.

    Args:
        value: Candidate identifier.

    Returns:
        True if value is a UUID string.
    """
    if not isinstance(value, str):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def with_item(items: list[str] | None, value: str) -> list[str]:
    """Return a copy of items with value appended once."""
    current = list(items or [])
    if value not in current:
        current.append(value)
    return current


def without_item(items: list[str] | None, value: str) -> list[str]:
    """Return a copy of items with every occurrence of value dropped."""
    return [item for item in (items or []) if item != value]


class Base(DeclarativeBase):
    """Declarative base for all directory tables."""


class IdMixin:
    """String UUID primary key."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_id)


class TimestampMixin:
    """created_at / updated_at columns maintained by the ORM."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )

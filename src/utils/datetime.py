# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime helpers.

All timestamps are stored and returned as timezone-aware UTC values.
SQLite hands back naive datetimes, so values read from the database
go through ensure_utc before they leave the service layer.

Usage:
    from src.utils.datetime import utc_now

    created_at = mapped_column(DateTime(timezone=True), default=utc_now)
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC to a naive datetime, or convert an aware one to UTC.

    Args:
        dt: Datetime to normalize, or None.

    Returns:
        Timezone-aware UTC datetime, or None if dt was None.

    Example:
        >>> ensure_utc(datetime(2025, 1, 1)).tzinfo
        datetime.timezone.utc
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


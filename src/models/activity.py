# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Activity feed schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class ActivityLogResponse(BaseModel):
    """One audit entry in the activity feed."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    actor_id: str
    actor_name: str
    action_type: str
    target_type: str | None = None
    target_id: str | None = None
    target_name: str | None = None
    details: dict[str, Any] | None = None
    created_at: datetime

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Liveness and readiness probes.

Both routes are public; AuthMiddleware lets them through without a token.
"""

import logging
import time
from datetime import datetime
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from src import __version__
from src.core.config import get_settings
from src.infrastructure.database.connection import check_database_connection
from src.utils.datetime import utc_now

logger = logging.getLogger(__name__)

router = APIRouter()

_started_at = time.monotonic()


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    environment: str
    uptime_seconds: int


class ReadinessResponse(BaseModel):
    ready: bool
    checks: dict[str, Any]


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report that the process is up."""
    return HealthResponse(
        status="healthy",
        timestamp=utc_now(),
        version=__version__,
        environment=get_settings().environment,
        uptime_seconds=int(time.monotonic() - _started_at),
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """Report whether the directory database answers a trivial query."""
    probe_start = time.perf_counter()
    reachable = await check_database_connection()
    elapsed_ms = (time.perf_counter() - probe_start) * 1000

    if not reachable:
        logger.warning("Database unreachable, reporting not ready")

    return ReadinessResponse(
        ready=reachable,
        checks={
            "database": {
                "status": "healthy" if reachable else "unhealthy",
                "latency_ms": round(elapsed_ms, 2),
            },
        },
    )

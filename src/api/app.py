# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI application factory for the School Admin API.

Usage:
    uvicorn src.main:app
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from src import __version__
from src.api.dependencies import close_db, init_db
from src.api.errors import register_exception_handlers
from src.api.middleware import AuthMiddleware
from src.api.routes import health
from src.api.v1 import router as v1_router
from src.core.config import Settings, get_settings
from src.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Prepare the directory database for the lifetime of the app.

    Startup opens the engine, applies pending migrations when
    ``DB_AUTO_MIGRATE`` is set and seeds the bootstrap admin.
    Shutdown disposes the engine.
    """
    settings = get_settings()
    logger.info(
        "School Admin API %s starting (environment=%s)",
        __version__,
        settings.environment,
    )

    await init_db()

    yield

    try:
        await close_db()
    except SQLAlchemyError as e:
        logger.warning("Error disposing database engine: %s", e)

    logger.info("School Admin API stopped")


def _add_middleware(app: FastAPI, settings: Settings) -> None:
    # Last added runs first: CORS answers preflights before auth sees them
    app.add_middleware(AuthMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )


def create_app() -> FastAPI:
    """Build the application: logging, error handlers, middleware, routes.

    Interactive docs are only served when ``DEBUG`` is on.
    """
    settings = get_settings()
    setup_logging(settings)

    docs_enabled = settings.debug
    app = FastAPI(
        title="School Admin API",
        description="Back office for teachers, students, courses and enrollments",
        version=__version__,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
        # a trailing-slash redirect would drop the Authorization header
        redirect_slashes=False,
    )

    register_exception_handlers(app)
    _add_middleware(app, settings)

    app.include_router(health.router, tags=["Health"])
    app.include_router(v1_router)

    return app

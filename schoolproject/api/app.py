# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI Application Factory.

This module provides the main application factory for the SchoolProject API.

Run with:
    uvicorn schoolproject.api.app:create_app --factory
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from schoolproject import __version__
from schoolproject.api.dependencies import close_db, init_db
from schoolproject.api.routes import health
from schoolproject.api.v1 import router as v1_router
from schoolproject.core.config import get_settings
from schoolproject.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Configures logging and opens the database pool on startup,
    disposes the pool on shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings = get_settings()
    setup_logging(settings)

    logger.info(
        "Starting SchoolProject API (environment=%s, debug=%s)",
        settings.environment,
        settings.debug,
    )

    await init_db()
    logger.info("Database connection initialized")

    yield

    try:
        await close_db()
        logger.info("Database connection closed")
    except Exception as e:
        logger.warning("Error closing database connection: %s", str(e))

    logger.info("Shutting down SchoolProject API")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="SchoolProject API",
        description="Class management for the school application",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        redirect_slashes=False,
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(v1_router)

    return app

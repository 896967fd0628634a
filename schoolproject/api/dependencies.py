# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints:
- Database lifecycle for the application lifespan
- Per-request database sessions
- Service instances

Example:
    @router.get("/classes")
    async def list_classes(
        service: ClassService = Depends(get_class_service),
    ):
        ...
"""

import logging
from typing import AsyncGenerator

from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from schoolproject.core.config import get_settings
from schoolproject.domains.class_.service import ClassService
from schoolproject.infrastructure.database.connection import (
    DatabaseError,
    close_database,
    create_schema,
    get_session,
    get_sessionmaker,
    init_database,
)
from schoolproject.infrastructure.database.seeds import seed_school_database

logger = logging.getLogger(__name__)


async def init_db() -> None:
    """Initialize the database connection.

    SQLite databases get their tables created on startup; PostgreSQL
    relies on the Alembic migrations. Demo reference data is seeded
    when DB_SEED_DEMO_DATA is set.
    """
    settings = get_settings()

    await init_database(settings)

    if settings.database.is_sqlite:
        await create_schema()
        logger.info("Created SQLite schema")

    if settings.database.seed_demo_data:
        async with get_session() as session:
            await seed_school_database(session)


async def close_db() -> None:
    """Close the database connection."""
    await close_database()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session for the current request.

    Yields:
        AsyncSession for the school database.

    Raises:
        HTTPException: If the database is not initialized.
    """
    try:
        sessionmaker = get_sessionmaker()
    except DatabaseError as e:
        logger.error("Database unavailable: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not initialized",
        ) from e

    # Closing the session rolls back anything left uncommitted
    async with sessionmaker() as session:
        yield session


def get_class_service(db: AsyncSession = Depends(get_db)) -> ClassService:
    """Get class service instance bound to the request session."""
    return ClassService(db=db)

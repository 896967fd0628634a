# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest fixtures for database integration tests.

Provides an in-memory SQLite engine, sessions and seeded reference data.
"""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from schoolproject.infrastructure.database.connection import (
    build_engine,
    build_sessionmaker,
    create_schema,
)
from schoolproject.infrastructure.database.seeds import seed_school_database


@pytest.fixture(scope="session")
def school_db_url() -> str:
    """Get school database URL for tests."""
    return os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest_asyncio.fixture(scope="function")
async def school_db_engine(school_db_url: str) -> AsyncGenerator[AsyncEngine, None]:
    """Create async engine with a fresh schema."""
    engine = build_engine(school_db_url)

    await create_schema(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def school_db_session(school_db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create async session for school database tests."""
    async_session = build_sessionmaker(school_db_engine)

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture(scope="function")
async def seeded_session(school_db_session: AsyncSession) -> AsyncSession:
    """Session over a database holding the demo teachers, students and subjects.

    Teachers get IDs 1-3, students 1-12 and subjects 1-4.
    """
    await seed_school_database(school_db_session)
    return school_db_session

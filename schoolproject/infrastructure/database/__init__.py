# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure.

This package provides the SQLAlchemy async engine and sessions used by
the domain services, plus the ORM models and migrations.

Example:
    from schoolproject.infrastructure.database import (
        init_database,
        get_session,
    )

    await init_database(settings)
    async with get_session() as session:
        result = await session.execute(select(Class))
"""

from schoolproject.infrastructure.database.connection import (
    DatabaseError,
    build_engine,
    build_sessionmaker,
    check_database_connection,
    close_database,
    create_schema,
    get_engine,
    get_session,
    get_sessionmaker,
    init_database,
)

__all__ = [
    "DatabaseError",
    "build_engine",
    "build_sessionmaker",
    "check_database_connection",
    "close_database",
    "create_schema",
    "get_engine",
    "get_session",
    "get_sessionmaker",
    "init_database",
]

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School database seed data.

Seeds the reference records classes point at (teachers, students,
subjects) for development databases. Classes themselves are never seeded.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from schoolproject.infrastructure.database.models import Student, Subject, Teacher

logger = logging.getLogger(__name__)

DEMO_TEACHERS = [
    ("Ada", "Lovelace"),
    ("Alan", "Turing"),
    ("Grace", "Hopper"),
]

DEMO_STUDENTS = [
    ("Liam", "Berg"),
    ("Emma", "Lind"),
    ("Noah", "Falk"),
    ("Olivia", "Holm"),
    ("Elias", "Strand"),
    ("Maja", "Dahl"),
    ("Hugo", "Sjöberg"),
    ("Alice", "Ek"),
    ("Oscar", "Nyberg"),
    ("Ella", "Lund"),
    ("William", "Wik"),
    ("Wilma", "Blom"),
]

DEMO_SUBJECTS = [
    "Mathematics",
    "Physics",
    "Literature",
    "History",
]


async def seed_teachers(session: AsyncSession) -> list[Teacher]:
    """Seed demo teachers."""
    teachers = [Teacher(first_name=first, last_name=last) for first, last in DEMO_TEACHERS]
    session.add_all(teachers)
    return teachers


async def seed_students(session: AsyncSession) -> list[Student]:
    """Seed demo students."""
    students = [Student(first_name=first, last_name=last) for first, last in DEMO_STUDENTS]
    session.add_all(students)
    return students


async def seed_subjects(session: AsyncSession) -> list[Subject]:
    """Seed demo subjects."""
    subjects = [Subject(name=name) for name in DEMO_SUBJECTS]
    session.add_all(subjects)
    return subjects


async def seed_school_database(session: AsyncSession) -> dict:
    """Seed a school database with demo reference data.

    Does nothing when teachers already exist.

    Args:
        session: Database session.

    Returns:
        Dictionary with seeded entities, empty when skipped.
    """
    existing = await session.execute(select(func.count()).select_from(Teacher))
    if existing.scalar():
        logger.info("School database already seeded, skipping")
        return {}

    logger.info("Seeding school database...")

    result = {
        "teachers": await seed_teachers(session),
        "students": await seed_students(session),
        "subjects": await seed_subjects(session),
    }

    await session.commit()

    logger.info(
        "Seeded %d teachers, %d students, %d subjects",
        len(result["teachers"]),
        len(result["students"]),
        len(result["subjects"]),
    )
    return result

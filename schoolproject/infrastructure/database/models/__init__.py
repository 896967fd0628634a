# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ORM models for the school database.

Importing this package registers every table on ``Base.metadata``.
"""

from schoolproject.infrastructure.database.models.base import Base, TimestampMixin
from schoolproject.infrastructure.database.models.curriculum import Subject
from schoolproject.infrastructure.database.models.school import (
    Class,
    ClassStudent,
    ClassSubject,
    ClassTeacher,
    Student,
    Teacher,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "Class",
    "ClassStudent",
    "ClassSubject",
    "ClassTeacher",
    "Student",
    "Subject",
    "Teacher",
]

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class domain package.

This package provides class management functionality including:
- Class CRUD operations
- Teacher, student and subject membership validation
"""

from schoolproject.domains.class_.service import (
    ClassService,
    ClassServiceError,
    ConflictError,
    DuplicateIdError,
    DuplicateNameError,
    InvalidReferenceError,
    NotFoundError,
    PersistenceError,
)

__all__ = [
    "ClassService",
    "ClassServiceError",
    "ConflictError",
    "DuplicateIdError",
    "DuplicateNameError",
    "InvalidReferenceError",
    "NotFoundError",
    "PersistenceError",
]

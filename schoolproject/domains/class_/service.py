# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class service for managing class operations.

This module provides the ClassService class for:
- Class CRUD operations
- Teacher, student and subject membership validation
- Student exclusivity (a student belongs to at most one class)

Every mutating operation validates against the current database state
before it writes, and writes with a single commit.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from schoolproject.infrastructure.database.models import (
    Class,
    ClassStudent,
    ClassSubject,
    Student,
    Subject,
    Teacher,
)
from schoolproject.models.class_ import (
    ClassCreateRequest,
    ClassListResponse,
    ClassResponse,
    ClassUpdateRequest,
)

logger = logging.getLogger(__name__)


class ClassServiceError(Exception):
    """Base exception for class service errors."""

    pass


class NotFoundError(ClassServiceError):
    """Raised when class is not found."""

    pass


class DuplicateNameError(ClassServiceError):
    """Raised when another class already uses the name, ignoring case."""

    def __init__(self, name: str) -> None:
        super().__init__(f"A class with the name '{name}' already exists.")
        self.name = name


class DuplicateIdError(ClassServiceError):
    """Raised when a membership list repeats an ID."""

    def __init__(self, entity: str, duplicate_ids: list[int]) -> None:
        super().__init__(f"{entity} IDs cannot contain duplicates.")
        self.entity = entity
        self.duplicate_ids = duplicate_ids


class InvalidReferenceError(ClassServiceError):
    """Raised when a membership list references records that do not exist."""

    def __init__(self, entity: str, invalid_ids: list[int]) -> None:
        ids = ", ".join(str(i) for i in invalid_ids)
        super().__init__(f"The following {entity} IDs are invalid: {ids}")
        self.entity = entity
        self.invalid_ids = invalid_ids


class ConflictError(ClassServiceError):
    """Raised when an operation would break a cross-class rule."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class PersistenceError(ClassServiceError):
    """Raised when the database rejects an update.

    Attributes:
        original_error: The underlying database error.
    """

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.original_error = original_error


class ClassService:
    """Service for managing classes.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize class service.

        Args:
            db: Async database session.
        """
        self.db = db

    async def create_class(self, request: ClassCreateRequest) -> ClassResponse:
        """Create a new class.

        Args:
            request: Class creation data.

        Returns:
            Created class response including its assigned ID.

        Raises:
            DuplicateNameError: If the name is taken, ignoring case.
            DuplicateIdError: If teacher or student IDs repeat.
            InvalidReferenceError: If teacher or student IDs do not exist.
            ConflictError: If a student already belongs to a class.
        """
        teacher_ids = request.teacher_ids or []
        student_ids = request.student_ids or []

        await self._ensure_name_available(request.name)

        self._ensure_no_duplicates("Teacher", teacher_ids)
        self._ensure_no_duplicates("Student", student_ids)

        await self._ensure_exist(Teacher, "Teacher", teacher_ids)
        await self._ensure_exist(Student, "Student", student_ids)
        await self._ensure_students_unassigned(student_ids)

        class_ = Class(name=request.name)
        class_.teacher_ids = teacher_ids
        class_.student_ids = student_ids
        class_.subject_ids = []

        self.db.add(class_)
        await self.db.commit()

        logger.info(
            "Created class: %s (%s) with %d teachers, %d students",
            class_.name,
            class_.id,
            len(teacher_ids),
            len(student_ids),
        )

        return self._to_response(class_)

    async def list_classes(self) -> ClassListResponse:
        """List every class with its membership lists.

        Returns:
            All classes ordered by ID.
        """
        result = await self.db.execute(select(Class).order_by(Class.id))
        classes = result.scalars().all()

        items = [self._to_response(class_) for class_ in classes]
        return ClassListResponse(items=items, total=len(items))

    async def get_class(self, class_id: int) -> ClassResponse:
        """Get class by ID.

        Raises:
            NotFoundError: If class not found.
        """
        class_ = await self._get_by_id(class_id)
        return self._to_response(class_)

    async def update_class(
        self,
        class_id: int,
        request: ClassUpdateRequest,
    ) -> ClassResponse:
        """Replace a class's name and, where given, its membership lists.

        Membership lists that are ``None`` keep their stored value.

        Args:
            class_id: Class identifier.
            request: Replacement data.

        Returns:
            Updated class.

        Raises:
            NotFoundError: If class not found.
            DuplicateNameError: If another class uses the name, ignoring case.
            DuplicateIdError: If a membership list repeats an ID.
            InvalidReferenceError: If subject, teacher or student IDs do not exist.
            ConflictError: If a student belongs to a different class.
            PersistenceError: If the database rejects the commit.
        """
        class_ = await self._get_by_id(class_id)

        await self._ensure_name_available(request.name, exclude_id=class_id)

        self._ensure_no_duplicates("Teacher", request.teacher_ids or [])
        self._ensure_no_duplicates("Student", request.student_ids or [])

        # Unknown subjects are reported before repeated ones
        await self._ensure_exist(Subject, "Subject", request.subject_ids or [])
        self._ensure_no_duplicates("Subject", request.subject_ids or [])
        await self._ensure_exist(Teacher, "Teacher", request.teacher_ids or [])
        await self._ensure_exist(Student, "Student", request.student_ids or [])
        await self._ensure_students_unassigned(
            request.student_ids or [], exclude_id=class_id
        )

        class_.name = request.name
        if request.teacher_ids is not None:
            class_.teacher_ids = request.teacher_ids
        if request.student_ids is not None:
            class_.student_ids = request.student_ids
        if request.subject_ids is not None:
            class_.subject_ids = request.subject_ids

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to update class %s: %s", class_id, e)
            raise PersistenceError(
                "An error occurred while updating the class. Please try again later.",
                e,
            ) from e

        logger.info("Updated class: %s", class_id)

        return self._to_response(class_)

    async def delete_class(self, class_id: int) -> bool:
        """Delete a class that no longer has members.

        Args:
            class_id: Class identifier.

        Returns:
            True once the class is removed.

        Raises:
            NotFoundError: If class not found.
            ConflictError: If the class still has students or teachers,
                or shares a subject with another class.
        """
        class_ = await self._get_by_id(class_id)

        if class_.student_ids:
            raise ConflictError(
                "Cannot delete class because it still has assigned students."
            )

        if class_.teacher_ids:
            raise ConflictError(
                "Cannot delete class because it still has assigned teachers."
            )

        if await self._subjects_shared(class_id, class_.subject_ids):
            raise ConflictError(
                "Cannot delete class because its subjects are linked to other classes."
            )

        await self.db.delete(class_)
        await self.db.commit()

        logger.info("Deleted class: %s", class_id)

        return True

    async def _get_by_id(self, class_id: int) -> Class:
        """Get class by ID.

        Raises:
            NotFoundError: If not found.
        """
        query = select(Class).where(Class.id == class_id)
        result = await self.db.execute(query)
        class_ = result.scalar_one_or_none()

        if not class_:
            raise NotFoundError(f"Class with ID {class_id} was not found.")

        return class_

    async def _ensure_name_available(
        self,
        name: str,
        exclude_id: int | None = None,
    ) -> None:
        """Reject a name used by another class, ignoring case.

        Case folding is the database's ``lower()``. SQLite only folds ASCII,
        so "Ökonomie" and "ökonomie" are distinct there; PostgreSQL folds
        them together.

        Raises:
            DuplicateNameError: If the name is taken.
        """
        query = select(Class.id).where(func.lower(Class.name) == func.lower(name))
        if exclude_id is not None:
            query = query.where(Class.id != exclude_id)

        result = await self.db.execute(query.limit(1))
        if result.scalar_one_or_none() is not None:
            raise DuplicateNameError(name)

    @staticmethod
    def _ensure_no_duplicates(entity: str, ids: Sequence[int]) -> None:
        """Reject a membership list that repeats an ID.

        Raises:
            DuplicateIdError: If any ID appears more than once.
        """
        counts = Counter(ids)
        duplicates = [entity_id for entity_id, count in counts.items() if count > 1]
        if duplicates:
            raise DuplicateIdError(entity, duplicates)

    async def _ensure_exist(
        self,
        model: type[Teacher] | type[Student] | type[Subject],
        entity: str,
        ids: Sequence[int],
    ) -> None:
        """Reject IDs that have no matching row in ``model``'s table.

        Raises:
            InvalidReferenceError: Listing every missing ID in request order.
        """
        if not ids:
            return

        result = await self.db.execute(select(model.id).where(model.id.in_(ids)))
        found = set(result.scalars().all())

        missing = [entity_id for entity_id in dict.fromkeys(ids) if entity_id not in found]
        if missing:
            raise InvalidReferenceError(entity, missing)

    async def _ensure_students_unassigned(
        self,
        student_ids: Sequence[int],
        exclude_id: int | None = None,
    ) -> None:
        """Reject students that already belong to a (different) class.

        Raises:
            ConflictError: If any student is taken.
        """
        if not student_ids:
            return

        query = select(ClassStudent.student_id).where(
            ClassStudent.student_id.in_(student_ids)
        )
        if exclude_id is not None:
            query = query.where(ClassStudent.class_id != exclude_id)

        result = await self.db.execute(query)
        taken = result.scalars().all()
        if taken:
            logger.debug("Students already assigned elsewhere: %s", sorted(taken))
            raise ConflictError(
                "One or more students are already assigned to another class."
            )

    async def _subjects_shared(self, class_id: int, subject_ids: Sequence[int]) -> bool:
        """Check whether another class references any of these subjects."""
        if not subject_ids:
            return False

        query = (
            select(ClassSubject.class_id)
            .where(
                ClassSubject.subject_id.in_(subject_ids),
                ClassSubject.class_id != class_id,
            )
            .limit(1)
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none() is not None

    @staticmethod
    def _to_response(class_: Class) -> ClassResponse:
        """Convert class model to response DTO."""
        return ClassResponse(
            id=class_.id,
            name=class_.name,
            teacher_ids=class_.teacher_ids,
            student_ids=class_.student_ids,
            subject_ids=class_.subject_ids,
            created_at=class_.created_at,
            updated_at=class_.updated_at,
        )

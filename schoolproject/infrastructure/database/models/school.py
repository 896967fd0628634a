# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School organization models.

Tables:
- teachers, students: people referenced by classes
- classes: named class groups
- class_teachers, class_students, class_subjects: membership rows

Membership rows keep a position column so the id lists come back in the
order they were written. A student row is unique across all classes.
"""

from __future__ import annotations

from typing import Callable, Sequence, TypeVar

from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from schoolproject.infrastructure.database.models.base import Base, TimestampMixin

LinkT = TypeVar("LinkT")


class Teacher(Base, TimestampMixin):
    """A teacher that can be assigned to classes."""

    __tablename__ = "teachers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Student(Base, TimestampMixin):
    """A student that can belong to at most one class."""

    __tablename__ = "students"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class ClassTeacher(Base):
    """Teacher membership of a class."""

    __tablename__ = "class_teachers"

    class_id: Mapped[int] = mapped_column(
        ForeignKey("classes.id", ondelete="CASCADE"), primary_key=True
    )
    teacher_id: Mapped[int] = mapped_column(
        ForeignKey("teachers.id", ondelete="CASCADE"), primary_key=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ClassStudent(Base):
    """Student membership of a class."""

    __tablename__ = "class_students"
    __table_args__ = (UniqueConstraint("student_id"),)

    class_id: Mapped[int] = mapped_column(
        ForeignKey("classes.id", ondelete="CASCADE"), primary_key=True
    )
    student_id: Mapped[int] = mapped_column(
        ForeignKey("students.id", ondelete="CASCADE"), primary_key=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ClassSubject(Base):
    """Subject taught in a class. A subject may be shared by several classes."""

    __tablename__ = "class_subjects"

    class_id: Mapped[int] = mapped_column(
        ForeignKey("classes.id", ondelete="CASCADE"), primary_key=True
    )
    subject_id: Mapped[int] = mapped_column(
        ForeignKey("subjects.id", ondelete="CASCADE"), primary_key=True, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


def _sync_links(
    links: Sequence[LinkT],
    ids: Sequence[int],
    key: str,
    factory: Callable[[int], LinkT],
) -> list[LinkT]:
    """Build the new membership list for ``ids``, reusing rows that survive."""
    existing = {getattr(link, key): link for link in links}
    synced = []
    for position, entity_id in enumerate(ids):
        link = existing.get(entity_id)
        if link is None:
            link = factory(entity_id)
        link.position = position
        synced.append(link)
    return synced


class Class(Base, TimestampMixin):
    """A named class group linking teachers, students and subjects."""

    __tablename__ = "classes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    teacher_links: Mapped[list[ClassTeacher]] = relationship(
        order_by=ClassTeacher.position,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    student_links: Mapped[list[ClassStudent]] = relationship(
        order_by=ClassStudent.position,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    subject_links: Mapped[list[ClassSubject]] = relationship(
        order_by=ClassSubject.position,
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def teacher_ids(self) -> list[int]:
        return [link.teacher_id for link in self.teacher_links]

    @teacher_ids.setter
    def teacher_ids(self, ids: Sequence[int]) -> None:
        self.teacher_links = _sync_links(
            self.teacher_links, ids, "teacher_id", lambda i: ClassTeacher(teacher_id=i)
        )

    @property
    def student_ids(self) -> list[int]:
        return [link.student_id for link in self.student_links]

    @student_ids.setter
    def student_ids(self, ids: Sequence[int]) -> None:
        self.student_links = _sync_links(
            self.student_links, ids, "student_id", lambda i: ClassStudent(student_id=i)
        )

    @property
    def subject_ids(self) -> list[int]:
        return [link.subject_id for link in self.subject_links]

    @subject_ids.setter
    def subject_ids(self, ids: Sequence[int]) -> None:
        self.subject_links = _sync_links(
            self.subject_links, ids, "subject_id", lambda i: ClassSubject(subject_id=i)
        )

    def __repr__(self) -> str:
        return f"<Class {self.id} {self.name}>"


# Case-insensitive name uniqueness is enforced by the database as well
Index("uq_classes_name_lower", func.lower(Class.name), unique=True)

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for database models.

Tests model definitions, constraints, and the membership id helpers.
"""

import pytest

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


class TestBase:
    """Test base model functionality."""

    def test_base_inherits_declarative_base(self):
        """Verify Base is a declarative base."""
        assert hasattr(Base, "metadata")
        assert hasattr(Base, "registry")

    def test_timestamp_mixin_has_columns(self):
        """Verify TimestampMixin has created_at and updated_at."""
        assert hasattr(TimestampMixin, "created_at")
        assert hasattr(TimestampMixin, "updated_at")

    def test_all_tables_registered(self):
        """Verify every school table is part of the metadata."""
        assert set(Base.metadata.tables) >= {
            "teachers",
            "students",
            "subjects",
            "classes",
            "class_teachers",
            "class_students",
            "class_subjects",
        }


class TestReferenceModels:
    """Test teacher, student and subject models."""

    def test_teacher_full_name(self):
        """Test Teacher.full_name property."""
        teacher = Teacher(first_name="Ada", last_name="Lovelace")

        assert Teacher.__tablename__ == "teachers"
        assert teacher.full_name == "Ada Lovelace"

    def test_student_full_name(self):
        """Test Student.full_name property."""
        student = Student(first_name="Liam", last_name="Berg")

        assert Student.__tablename__ == "students"
        assert student.full_name == "Liam Berg"

    def test_subject_model_exists(self):
        """Verify Subject model has required attributes."""
        assert Subject.__tablename__ == "subjects"
        assert hasattr(Subject, "name")


class TestMembershipTables:
    """Test class membership table constraints."""

    def test_student_belongs_to_one_class(self):
        """Verify class_students has a unique constraint on student_id."""
        table = ClassStudent.__table__
        unique_columns = [
            [column.name for column in constraint.columns]
            for constraint in table.constraints
            if constraint.__class__.__name__ == "UniqueConstraint"
        ]

        assert ["student_id"] in unique_columns

    def test_teacher_may_join_many_classes(self):
        """Verify class_teachers only has its composite primary key."""
        table = ClassTeacher.__table__
        pk_columns = [column.name for column in table.primary_key.columns]

        assert pk_columns == ["class_id", "teacher_id"]
        assert not any(
            constraint.__class__.__name__ == "UniqueConstraint"
            for constraint in table.constraints
        )

    def test_class_subjects_indexed_by_subject(self):
        """Verify class_subjects can be searched by subject."""
        assert ClassSubject.__table__.c.subject_id.index is True

    def test_class_name_index_is_case_insensitive_unique(self):
        """Verify the lower(name) unique index exists on classes."""
        indexes = {index.name: index for index in Class.__table__.indexes}

        assert "uq_classes_name_lower" in indexes
        assert indexes["uq_classes_name_lower"].unique is True

    def test_membership_foreign_keys_cascade(self):
        """Verify membership rows are removed with their class."""
        for model in (ClassTeacher, ClassStudent, ClassSubject):
            fk = next(iter(model.__table__.c.class_id.foreign_keys))
            assert fk.column.table.name == "classes"
            assert fk.ondelete == "CASCADE"


class TestClassModel:
    """Test Class membership id helpers."""

    def test_new_class_has_no_members(self):
        """Test a fresh class exposes empty id lists."""
        class_ = Class(name="1A")

        assert class_.teacher_ids == []
        assert class_.student_ids == []
        assert class_.subject_ids == []

    def test_id_setters_keep_order(self):
        """Test that id lists round-trip in the given order with positions."""
        class_ = Class(name="1A")
        class_.teacher_ids = [3, 1, 2]

        assert class_.teacher_ids == [3, 1, 2]
        assert [link.position for link in class_.teacher_links] == [0, 1, 2]

    def test_id_setter_reuses_surviving_rows(self):
        """Test that replacing a list keeps row objects for kept members."""
        class_ = Class(name="1A")
        class_.student_ids = [10, 11, 12]
        kept = class_.student_links[1]

        class_.student_ids = [11, 13]

        assert class_.student_ids == [11, 13]
        assert class_.student_links[0] is kept
        assert kept.position == 0

    def test_empty_list_clears_members(self):
        """Test that assigning an empty list removes every member."""
        class_ = Class(name="1A")
        class_.subject_ids = [1, 2]

        class_.subject_ids = []

        assert class_.subject_ids == []

    @pytest.mark.parametrize("name", ["1A", "Mathematics Advanced"])
    def test_repr_includes_name(self, name):
        """Test Class repr."""
        class_ = Class(name=name)
        class_.id = 7

        assert repr(class_) == f"<Class 7 {name}>"

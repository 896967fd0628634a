# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial school database schema.

Creates teachers, students, subjects, classes and the three class
membership tables. Class names are unique ignoring case and a student
can appear in only one class_students row.

Revision ID: 001_initial_schema
Revises: None
Create Date: 2025-03-02
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def _membership_table(name: str, column: str, target: str, unique_member: bool = False) -> None:
    constraints = [sa.PrimaryKeyConstraint("class_id", column, name=f"pk_{name}")]
    if unique_member:
        constraints.append(sa.UniqueConstraint(column, name=f"uq_{name}_{column}"))

    op.create_table(
        name,
        sa.Column(
            "class_id",
            sa.Integer,
            sa.ForeignKey("classes.id", ondelete="CASCADE", name=f"fk_{name}_class_id_classes"),
            nullable=False,
        ),
        sa.Column(
            column,
            sa.Integer,
            sa.ForeignKey(f"{target}.id", ondelete="CASCADE", name=f"fk_{name}_{column}_{target}"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
        *constraints,
    )


def upgrade() -> None:
    """Create school database tables."""
    # =========================================================================
    # PEOPLE AND CURRICULUM
    # =========================================================================

    op.create_table(
        "teachers",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "students",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "subjects",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        *_timestamps(),
    )

    # =========================================================================
    # CLASSES
    # =========================================================================

    op.create_table(
        "classes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        *_timestamps(),
    )
    op.create_index(
        "uq_classes_name_lower",
        "classes",
        [sa.text("lower(name)")],
        unique=True,
    )

    _membership_table("class_teachers", "teacher_id", "teachers")
    _membership_table("class_students", "student_id", "students", unique_member=True)
    _membership_table("class_subjects", "subject_id", "subjects")

    op.create_index(
        "ix_class_subjects_subject_id",
        "class_subjects",
        ["subject_id"],
    )


def downgrade() -> None:
    """Drop school database tables."""
    # Drop in reverse order to handle foreign keys
    op.drop_index("ix_class_subjects_subject_id", table_name="class_subjects")
    op.drop_table("class_subjects")
    op.drop_table("class_students")
    op.drop_table("class_teachers")
    op.drop_index("uq_classes_name_lower", table_name="classes")
    op.drop_table("classes")
    op.drop_table("subjects")
    op.drop_table("students")
    op.drop_table("teachers")

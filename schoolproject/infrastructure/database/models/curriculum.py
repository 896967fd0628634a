# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Curriculum models."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from schoolproject.infrastructure.database.models.base import Base, TimestampMixin


class Subject(Base, TimestampMixin):
    """A taught subject. Classes reference subjects by id."""

    __tablename__ = "subjects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Subject {self.id} {self.name}>"

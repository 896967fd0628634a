# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class request and response models.

Membership lists on update requests follow replace-if-present semantics:
``None`` (or an omitted field) keeps the stored list, ``[]`` clears it.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ClassCreateRequest(BaseModel):
    """Request to create a class."""

    name: str = Field(min_length=1, max_length=100, description="Class name, unique ignoring case")
    teacher_ids: list[int] | None = Field(default=None, description="Assigned teacher IDs")
    student_ids: list[int] | None = Field(default=None, description="Assigned student IDs")


class ClassUpdateRequest(BaseModel):
    """Full replacement request for an existing class."""

    name: str = Field(min_length=1, max_length=100, description="Class name, unique ignoring case")
    teacher_ids: list[int] | None = Field(default=None, description="Replacement teacher IDs")
    student_ids: list[int] | None = Field(default=None, description="Replacement student IDs")
    subject_ids: list[int] | None = Field(default=None, description="Replacement subject IDs")


class ClassResponse(BaseModel):
    """Class with its membership lists."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Class ID")
    name: str = Field(description="Class name")
    teacher_ids: list[int] = Field(default_factory=list, description="Assigned teacher IDs")
    student_ids: list[int] = Field(default_factory=list, description="Assigned student IDs")
    subject_ids: list[int] = Field(default_factory=list, description="Linked subject IDs")
    created_at: datetime | None = Field(default=None, description="Created timestamp")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp")


class ClassListResponse(BaseModel):
    """All classes."""

    items: list[ClassResponse]
    total: int

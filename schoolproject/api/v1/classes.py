# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Class management API endpoints.

This module provides endpoints for class management:
- POST / - Create a new class
- GET / - List all classes
- GET /{class_id} - Get class details
- PUT /{class_id} - Replace class name and memberships
- DELETE /{class_id} - Delete class
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from schoolproject.api.dependencies import get_class_service
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
from schoolproject.models.class_ import (
    ClassCreateRequest,
    ClassListResponse,
    ClassResponse,
    ClassUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_http_error(error: ClassServiceError) -> HTTPException:
    """Translate a class service error into an HTTP error.

    Args:
        error: Raised service error.

    Returns:
        HTTPException with the matching status code.
    """
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, (DuplicateNameError, ConflictError)):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    if isinstance(error, InvalidReferenceError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": str(error),
                "entity": error.entity,
                "invalid_ids": error.invalid_ids,
            },
        )
    if isinstance(error, DuplicateIdError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "message": str(error),
                "entity": error.entity,
                "duplicate_ids": error.duplicate_ids,
            },
        )
    if isinstance(error, PersistenceError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(error)
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))


@router.post(
    "",
    response_model=ClassResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create class",
    description="Create a new class with optional teacher and student assignments.",
)
async def create_class(
    data: ClassCreateRequest,
    service: ClassService = Depends(get_class_service),
) -> ClassResponse:
    """Create a new class.

    Raises:
        HTTPException: If the name is taken or memberships are invalid.
    """
    logger.info("Creating class: %s", data.name)

    try:
        return await service.create_class(data)
    except ClassServiceError as e:
        raise _to_http_error(e) from e


@router.get(
    "",
    response_model=ClassListResponse,
    summary="List classes",
    description="List every class with its teacher, student and subject IDs.",
)
async def list_classes(
    service: ClassService = Depends(get_class_service),
) -> ClassListResponse:
    """List all classes."""
    return await service.list_classes()


@router.get(
    "/{class_id}",
    response_model=ClassResponse,
    summary="Get class",
    description="Get class details by ID.",
)
async def get_class(
    class_id: int,
    service: ClassService = Depends(get_class_service),
) -> ClassResponse:
    """Get class details.

    Raises:
        HTTPException: If class not found.
    """
    try:
        return await service.get_class(class_id)
    except ClassServiceError as e:
        raise _to_http_error(e) from e


@router.put(
    "/{class_id}",
    response_model=ClassResponse,
    summary="Update class",
    description=(
        "Replace the class name. Membership lists are replaced only when "
        "present in the request body."
    ),
)
async def update_class(
    class_id: int,
    data: ClassUpdateRequest,
    service: ClassService = Depends(get_class_service),
) -> ClassResponse:
    """Update a class.

    Raises:
        HTTPException: If class not found, validation fails or the
            database rejects the change.
    """
    logger.info("Updating class: %s", class_id)

    try:
        return await service.update_class(class_id, data)
    except ClassServiceError as e:
        raise _to_http_error(e) from e


@router.delete(
    "/{class_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete class",
    description="Delete a class without teachers, students or shared subjects.",
)
async def delete_class(
    class_id: int,
    service: ClassService = Depends(get_class_service),
) -> Response:
    """Delete a class.

    Raises:
        HTTPException: If class not found or still in use.
    """
    logger.info("Deleting class: %s", class_id)

    try:
        await service.delete_class(class_id)
    except ClassServiceError as e:
        raise _to_http_error(e) from e

    return Response(status_code=status.HTTP_204_NO_CONTENT)

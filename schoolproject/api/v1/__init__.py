# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

Modules:
    classes: Class management endpoints.
"""

from fastapi import APIRouter

from schoolproject.api.v1 import classes

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

router.include_router(classes.router, prefix="/classes", tags=["Classes"])

__all__ = ["router"]

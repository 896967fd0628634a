# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API Routes package.

This module exports all route modules for the API.
"""

from schoolproject.api.routes import health

__all__ = ["health"]

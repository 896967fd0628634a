# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for SchoolProject.

This package contains domain services that encapsulate business logic.

Domains:
    class_: Class management and membership rules.
"""

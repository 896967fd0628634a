# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Core package for SchoolProject.

This package contains shared application plumbing:
- config: Application configuration and settings
"""

"""SchoolProject Backend.

Class management service for a school-management application: classes
with their teacher, student and subject memberships.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"

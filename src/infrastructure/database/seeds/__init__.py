# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database seed package.

This package contains seed data for initializing the database:
- Bootstrap super admin
"""

from src.infrastructure.database.seeds.bootstrap import seed_super_admin

__all__ = ["seed_super_admin"]

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin domain services.

Exports:
    AdminService: Admin account management and teacher approval.
    CreateAdminResult: Result of creating an admin account.
"""

from src.domains.admin.service import AdminService, CreateAdminResult

__all__ = [
    "AdminService",
    "CreateAdminResult",
]

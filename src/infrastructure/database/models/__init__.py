# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ORM models for the credential store.

Importing this package registers every table on Base.metadata.
"""

from src.infrastructure.database.models.audit_log import AuditAction, AuditLog
from src.infrastructure.database.models.base import (
    MAX_INTEGER_ID,
    Base,
    CreatedAtMixin,
    is_valid_id,
)
from src.infrastructure.database.models.deleted_user import DeletedUser
from src.infrastructure.database.models.user import (
    ADMIN_ROLES,
    SELF_SERVICE_ROLES,
    User,
    UserRole,
)

__all__ = [
    "Base",
    "CreatedAtMixin",
    "MAX_INTEGER_ID",
    "is_valid_id",
    "User",
    "UserRole",
    "ADMIN_ROLES",
    "SELF_SERVICE_ROLES",
    "DeletedUser",
    "AuditLog",
    "AuditAction",
]

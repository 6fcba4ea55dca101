# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin endpoint schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.infrastructure.database.models.audit_log import AuditAction
from src.infrastructure.database.models.user import UserRole


class CreateAdminRequest(BaseModel):
    """Create admin request.

    Any role other than SUPER_ADMIN, including none, creates a plain admin.
    """

    full_name: str | None = Field(None, description="Display name")
    email: str | None = Field(None, description="Login email")
    phone: str | None = Field(None, description="Contact phone number")
    password: str | None = Field(None, description="Password")
    role: str | None = Field(None, description="ADMIN or SUPER_ADMIN")


class AdminSummary(BaseModel):
    """Active admin as shown in the admin list."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    email: str
    role: UserRole
    created_at: datetime


class CreateAdminResponse(BaseModel):
    """Create admin confirmation."""

    message: str = Field(..., description="Confirmation naming the granted role")
    user: AdminSummary = Field(..., description="Created account")


class PendingTeacher(BaseModel):
    """Teacher awaiting approval."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    email: str
    phone: str
    created_at: datetime


class DeletedAdminResponse(BaseModel):
    """Tombstone of a deleted admin."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Tombstone ID, used to restore")
    original_user_id: int
    full_name: str
    email: str
    phone: str
    role: UserRole
    deleted_by: int | None
    deleted_at: datetime


class AuditLogResponse(BaseModel):
    """Audit trail entry."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    action_type: AuditAction
    entity_type: str
    entity_id: int
    performed_by: int
    performed_by_role: UserRole
    created_at: datetime

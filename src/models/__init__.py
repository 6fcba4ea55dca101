# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic request and response schemas for the HTTP API."""

from src.models.admin import (
    AdminSummary,
    AuditLogResponse,
    CreateAdminRequest,
    CreateAdminResponse,
    DeletedAdminResponse,
    PendingTeacher,
)
from src.models.auth import (
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
    UserProfile,
)
from src.models.common import MessageResponse

__all__ = [
    "AdminSummary",
    "AuditLogResponse",
    "CreateAdminRequest",
    "CreateAdminResponse",
    "DeletedAdminResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "PendingTeacher",
    "SignupRequest",
    "SignupResponse",
    "UserProfile",
]

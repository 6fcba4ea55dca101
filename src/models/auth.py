# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Signup, login and profile schemas.

Request fields are optional at the schema level. Presence is checked by the
service so that a missing field yields the service's own message instead of
a generic validation error.
"""

from pydantic import BaseModel, ConfigDict, Field

from src.infrastructure.database.models.user import UserRole


class SignupRequest(BaseModel):
    """Self-service signup request."""

    full_name: str | None = Field(None, description="Display name")
    email: str | None = Field(None, description="Login email")
    password: str | None = Field(None, description="Password")
    phone: str | None = Field(None, description="Contact phone number")
    role: str | None = Field(None, description="STUDENT or TEACHER")


class LoginRequest(BaseModel):
    """Login request."""

    email: str | None = Field(None, description="Login email")
    password: str | None = Field(None, description="Password")


class UserProfile(BaseModel):
    """Public profile of an account. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="User ID")
    full_name: str = Field(..., description="Display name")
    email: str = Field(..., description="Login email")
    role: UserRole = Field(..., description="Account role")
    is_approved: bool = Field(..., description="Approval status")


class SignupResponse(BaseModel):
    """Signup confirmation."""

    message: str = Field(..., description="Role-specific confirmation")
    user: UserProfile = Field(..., description="Created account")


class LoginResponse(BaseModel):
    """Login response."""

    token: str = Field(..., description="JWT access token")
    user: UserProfile = Field(..., description="Authenticated user")

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Get database sessions
- Get authenticated users and enforce roles
- Get service instances

Example:
    @router.get("/admin/list-admins")
    async def list_admins(
        service: AdminService = Depends(get_admin_service),
        current_user: CurrentUser = Depends(RequireRole(UserRole.ADMIN)),
    ):
        ...
"""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.middleware.auth import CurrentUser, get_current_user
from src.core.config import Settings
from src.domains.admin.service import AdminService
from src.domains.auth.jwt import JWTManager
from src.domains.auth.password import PasswordHasher
from src.domains.auth.service import AuthService
from src.domains.exceptions import ForbiddenError, UnauthenticatedError
from src.infrastructure.database.connection import get_session
from src.infrastructure.database.models.user import ADMIN_ROLES, UserRole

logger = logging.getLogger(__name__)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session.

    Yields:
        AsyncSession committed on success and rolled back on error.
    """
    async with get_session() as session:
        yield session


# =========================================================================
# Authentication Dependencies
# =========================================================================


def require_auth(request: Request) -> CurrentUser:
    """Require authenticated user.

    Args:
        request: HTTP request.

    Returns:
        CurrentUser.

    Raises:
        UnauthenticatedError: If no valid token accompanied the request.
    """
    user = get_current_user(request)
    if not user:
        reason = getattr(request.state, "auth_error", None)
        logger.debug("Unauthenticated request to %s (%s)", request.url.path, reason)
        raise UnauthenticatedError()
    return user


class RequireRole:
    """Dependency for requiring specific roles.

    A pure membership test on the role carried by the token; the store is
    not consulted.

    Example:
        @router.get("/admin/deleted-admins")
        async def deleted_admins(
            user: CurrentUser = Depends(RequireRole(UserRole.SUPER_ADMIN)),
        ):
            ...
    """

    def __init__(self, *roles: UserRole) -> None:
        """Initialize role requirement.

        Args:
            roles: Allowed roles (any of these).
        """
        self.roles = frozenset(roles)

    def __call__(self, request: Request) -> CurrentUser:
        """Check roles and return user.

        Args:
            request: HTTP request.

        Returns:
            CurrentUser.

        Raises:
            UnauthenticatedError: If not authenticated.
            ForbiddenError: If the user's role is not allowed.
        """
        user = require_auth(request)

        if not user.has_any_role(*self.roles):
            logger.info(
                "Access denied: user %s with role %s on %s",
                user.id,
                user.role.value,
                request.url.path,
            )
            raise ForbiddenError("Access denied")

        return user


# =========================================================================
# Service Dependencies
# =========================================================================


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was built with.

    Args:
        request: HTTP request.

    Returns:
        Settings.
    """
    return request.app.state.settings


def get_jwt_manager(request: Request) -> JWTManager:
    """Get the JWT manager built at startup.

    Args:
        request: HTTP request.

    Returns:
        JWTManager.
    """
    return request.app.state.jwt_manager


def get_password_hasher(request: Request) -> PasswordHasher:
    """Get the password hasher built at startup.

    Args:
        request: HTTP request.

    Returns:
        PasswordHasher.
    """
    return request.app.state.password_hasher


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
) -> AuthService:
    """Get AuthService instance.

    Args:
        db: Database session.
        jwt_manager: JWT manager.
        password_hasher: Password hasher.

    Returns:
        AuthService.
    """
    return AuthService(db, jwt_manager, password_hasher)


async def get_admin_service(
    db: AsyncSession = Depends(get_db),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    settings: Settings = Depends(get_app_settings),
) -> AdminService:
    """Get AdminService instance.

    Args:
        db: Database session.
        password_hasher: Password hasher.
        settings: Application settings.

    Returns:
        AdminService.
    """
    return AdminService(
        db,
        password_hasher,
        allow_escalation=settings.admin.allow_escalation,
    )


# =========================================================================
# Type Aliases for Cleaner Endpoint Signatures
# =========================================================================

DB = Annotated[AsyncSession, Depends(get_db)]
AuthenticatedUser = Annotated[CurrentUser, Depends(require_auth)]
AdminUser = Annotated[CurrentUser, Depends(RequireRole(*ADMIN_ROLES))]
SuperAdminUser = Annotated[CurrentUser, Depends(RequireRole(UserRole.SUPER_ADMIN))]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]

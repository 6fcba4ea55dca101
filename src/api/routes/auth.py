# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication endpoints.

This module provides the self-service account endpoints:
- POST /signup - Register a student or teacher
- POST /login - Authenticate and receive an access token
- GET /me - Get current user profile
"""

import logging

from fastapi import APIRouter, Request, status

from src.api.dependencies import AuthenticatedUser, AuthServiceDep
from src.api.middleware.rate_limit import auth_rate_limit, limiter
from src.models.auth import (
    LoginRequest,
    LoginResponse,
    SignupRequest,
    SignupResponse,
    UserProfile,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a student or teacher",
)
@limiter.limit(auth_rate_limit)
async def signup(
    request: Request,
    data: SignupRequest,
    auth_service: AuthServiceDep,
) -> SignupResponse:
    """Register a new account.

    Students can log in immediately; teachers wait for admin approval.

    Args:
        request: HTTP request (used for rate limiting).
        data: Signup details.
        auth_service: Auth service.

    Returns:
        SignupResponse with a role-specific message.
    """
    result = await auth_service.signup(
        full_name=data.full_name,
        email=data.email,
        password=data.password,
        phone=data.phone,
        role=data.role,
    )

    return SignupResponse(
        message=result.message,
        user=UserProfile.model_validate(result.user),
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in with email and password",
)
@limiter.limit(auth_rate_limit)
async def login(
    request: Request,
    data: LoginRequest,
    auth_service: AuthServiceDep,
) -> LoginResponse:
    """Authenticate a user.

    Args:
        request: HTTP request (used for rate limiting).
        data: Login credentials.
        auth_service: Auth service.

    Returns:
        LoginResponse with the access token and the public profile.
    """
    result = await auth_service.login(email=data.email, password=data.password)

    return LoginResponse(
        token=result.token,
        user=UserProfile.model_validate(result.user),
    )


@router.get(
    "/me",
    response_model=UserProfile,
    summary="Get current user profile",
)
async def get_me(
    current_user: AuthenticatedUser,
    auth_service: AuthServiceDep,
) -> UserProfile:
    """Get the profile of the authenticated caller.

    Args:
        current_user: Authenticated user.
        auth_service: Auth service.

    Returns:
        UserProfile of the caller.
    """
    user = await auth_service.get_profile(current_user.id)
    return UserProfile.model_validate(user)

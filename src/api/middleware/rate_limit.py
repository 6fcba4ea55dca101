# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Rate limiting using slowapi.

Signup and login are public and run bcrypt on every call, so they are
limited per client IP address. The limiter is configured by
create_app() from its settings.

Example:
    @router.post("/login")
    @limiter.limit(auth_rate_limit)
    async def login(request: Request, ...):
        ...
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from src.core.config.settings import RateLimitSettings

logger = logging.getLogger(__name__)


def get_ip_only(request: Request) -> str:
    """Get client IP address only.

    Used for auth endpoints where the user is not yet authenticated.

    Args:
        request: HTTP request.

    Returns:
        IP address string.
    """
    return get_remote_address(request)


# In-memory storage; limits are per process
limiter = Limiter(key_func=get_ip_only)

_auth_limit: str = RateLimitSettings.model_fields["auth"].default


def configure_rate_limit(settings: RateLimitSettings) -> None:
    """Apply an application's rate limit settings to the shared limiter.

    Called by create_app(); the limiter is process-wide, so the most recently
    created application wins.

    Args:
        settings: Rate limit settings of the application being built.
    """
    global _auth_limit
    limiter.enabled = settings.enabled
    _auth_limit = settings.auth


def auth_rate_limit() -> str:
    """Get the configured limit for signup and login (e.g. "10/minute")."""
    return _auth_limit


async def rate_limit_exceeded_handler(
    request: Request,
    exc: RateLimitExceeded,
) -> JSONResponse:
    """Handle rate limit exceeded errors.

    Returns a 429 Too Many Requests response in the same body format as
    every other error.

    Args:
        request: HTTP request.
        exc: Rate limit exceeded exception.

    Returns:
        JSON response with error message.
    """
    logger.warning(
        "Rate limit exceeded: %s for %s",
        exc.detail,
        get_ip_only(request),
    )

    return JSONResponse(
        status_code=429,
        content={"message": "Too many requests. Please try again later."},
    )

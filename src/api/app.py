# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI Application Factory.

This module provides the main application factory for the account
administration API.
"""

import logging
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.middleware.auth import AuthMiddleware
from src.api.middleware.rate_limit import (
    configure_rate_limit,
    limiter,
    rate_limit_exceeded_handler,
)
from src.api.routes import admin, auth, health
from src.core.config import Settings, get_settings
from src.domains.auth.jwt import JWTManager
from src.domains.auth.password import PasswordHasher
from src.domains.exceptions import AccountError, BackendFailure
from src.infrastructure.database.connection import (
    DatabaseError,
    close_database,
    create_tables,
    get_session,
    init_database,
)
from src.infrastructure.database.seeds import seed_super_admin

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events for the application.
    Initializes and cleans up:
    - Database connection pool
    - Schema (when DB_CREATE_TABLES is set)
    - Bootstrap super admin

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings: Settings = app.state.settings
    logger.info(
        "Starting account API (environment=%s, debug=%s)",
        settings.environment,
        settings.debug,
    )

    # =========================================================================
    # Startup
    # =========================================================================

    await init_database(settings)
    logger.info("Database connection initialized")

    if settings.database.create_tables:
        await create_tables()
        logger.info("Database tables ensured")

    async with get_session() as session:
        await seed_super_admin(session, settings, app.state.password_hasher)

    yield

    # =========================================================================
    # Shutdown
    # =========================================================================

    await close_database()
    logger.info("Shutting down account API")


# =========================================================================
# Exception handlers
# =========================================================================


async def account_error_handler(request: Request, exc: AccountError) -> JSONResponse:
    """Render a service error with its own status and message."""
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Render framework HTTP errors (404 route, 405 method) as a message body."""
    message = exc.detail if isinstance(exc.detail, str) else HTTPStatus(exc.status_code).phrase
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Render malformed bodies and parameters as 400."""
    errors = exc.errors()
    logger.debug("Request validation failed on %s: %s", request.url.path, errors)

    if errors and errors[0].get("type") == "json_invalid":
        message = "Malformed JSON body"
    elif errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()))
        message = f"Invalid request: {location}"
    else:
        message = "Invalid request"

    return JSONResponse(status_code=400, content={"message": message})


async def server_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected faults with the traceback and answer as a BackendFailure.

    Store errors, including DatabaseError raised by get_session, and anything
    else unhandled reach the caller only as a generic 500.
    """
    logger.error(
        "Unhandled error on %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return await account_error_handler(request, BackendFailure())


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    This factory function creates a new FastAPI instance with all
    middleware, routes, and configurations applied. The JWT manager and the
    password hasher are built once here and shared by every request.

    Args:
        settings: Settings to build the app with. Defaults to get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Account Administration API",
        description="Signup, login, teacher approval and admin management",
        version="1.0.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        # Disable automatic redirects from /path to /path/
        # This prevents 307 redirects that lose Authorization headers
        redirect_slashes=False,
    )

    # =========================================================================
    # State
    # =========================================================================
    jwt_manager = JWTManager(settings.jwt)

    app.state.settings = settings
    app.state.jwt_manager = jwt_manager
    app.state.password_hasher = PasswordHasher(rounds=settings.auth.bcrypt_rounds)

    configure_rate_limit(settings.rate_limit)
    app.state.limiter = limiter

    # =========================================================================
    # Exception handlers
    # =========================================================================
    app.add_exception_handler(AccountError, account_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(DatabaseError, server_error_handler)
    app.add_exception_handler(SQLAlchemyError, server_error_handler)
    app.add_exception_handler(Exception, server_error_handler)

    # =========================================================================
    # Middleware (order matters - last added is first executed)
    # =========================================================================

    # Auth middleware - validates JWT tokens
    app.add_middleware(AuthMiddleware, jwt_manager=jwt_manager)

    # CORS middleware (added last to execute first)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )

    # =========================================================================
    # Routes
    # =========================================================================
    app.include_router(health.router, tags=["Health"])
    app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
    app.include_router(admin.router, prefix="/admin", tags=["Admin"])

    return app

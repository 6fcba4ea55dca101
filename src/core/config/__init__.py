# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package.

Pydantic-based settings loaded from environment variables and `.env`.

Example:
    >>> from src.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.jwt.algorithm)
    'HS256'
"""

from src.core.config.settings import (
    AdminSettings,
    APISettings,
    AuthSettings,
    BootstrapSettings,
    CORSSettings,
    DatabaseSettings,
    JWTSettings,
    RateLimitSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "DatabaseSettings",
    "JWTSettings",
    "AuthSettings",
    "AdminSettings",
    "BootstrapSettings",
    "RateLimitSettings",
    "CORSSettings",
    "APISettings",
]

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer.

This package contains domain services that encapsulate business logic.
Each service works on a request-scoped database session and raises the
errors defined in src.domains.exceptions.

Domains:
    auth: Password hashing, JWT tokens, signup and login.
    admin: Admin account management and teacher approval.
"""

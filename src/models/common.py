# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Schemas shared across endpoints."""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain confirmation or error body."""

    message: str = Field(..., description="Human-readable message")

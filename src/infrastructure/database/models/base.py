# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Declarative base and shared column mixins.

All ORM models inherit from Base so a single metadata object describes the
whole schema.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# Largest value an INTEGER primary key holds on every supported backend
MAX_INTEGER_ID = 2**31 - 1


def utc_now() -> datetime:
    """Get the current time in UTC."""
    return datetime.now(timezone.utc)


def is_valid_id(value: int) -> bool:
    """Check if a value could be a stored primary key.

    Anything outside the column range is rejected before it reaches the
    driver, which would otherwise fail to bind it.
    """
    return 0 < value <= MAX_INTEGER_ID


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


class CreatedAtMixin:
    """Adds a creation timestamp, set on insert."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
    )

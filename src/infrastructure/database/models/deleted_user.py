# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tombstone model for soft-deleted admin accounts.

A DeletedUser row exists exactly while the referenced admin is deactivated.
Restoring the admin removes the tombstone; the original users row is never
removed by this path.
"""

from datetime import datetime

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import Base, utc_now
from src.infrastructure.database.models.user import User, UserRole


class DeletedUser(Base):
    """Tombstone of a deactivated admin.

    Attributes:
        id: Tombstone identifier, used by the restore endpoint.
        original_user_id: The deactivated users row.
        full_name: Name at deletion time.
        email: Email at deletion time.
        phone: Phone at deletion time.
        role: Role at deletion time.
        deleted_by: Admin who performed the deletion.
        deleted_at: When the deletion happened.
    """

    __tablename__ = "deleted_users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    original_user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SAEnum(UserRole, name="user_role", native_enum=False, length=20),
        nullable=False,
    )
    deleted_by: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    deleted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
    )

    @classmethod
    def from_user(cls, user: User, deleted_by: int) -> "DeletedUser":
        """Build a tombstone mirroring the identity fields of a user.

        Args:
            user: The account being deactivated.
            deleted_by: ID of the admin performing the deletion.

        Returns:
            Unsaved DeletedUser instance.
        """
        return cls(
            original_user_id=user.id,
            full_name=user.full_name,
            email=user.email,
            phone=user.phone,
            role=user.role,
            deleted_by=deleted_by,
        )

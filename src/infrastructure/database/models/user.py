# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""User account model.

A single table holds every account regardless of role. Approval only matters
for teachers; deactivation only happens through the admin delete path.
"""

from enum import Enum

from sqlalchemy import Boolean, Enum as SAEnum, ForeignKey, Integer, String, true
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import Base, CreatedAtMixin


class UserRole(str, Enum):
    """Closed set of account roles."""

    STUDENT = "STUDENT"
    TEACHER = "TEACHER"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"

    @property
    def label(self) -> str:
        """Human-readable role name, e.g. 'SUPER ADMIN'."""
        return self.value.replace("_", " ")


ADMIN_ROLES = frozenset({UserRole.ADMIN, UserRole.SUPER_ADMIN})
SELF_SERVICE_ROLES = frozenset({UserRole.STUDENT, UserRole.TEACHER})


class User(Base, CreatedAtMixin):
    """User account.

    Attributes:
        id: Stable integer identifier.
        full_name: Display name.
        email: Login email, unique across all rows.
        phone: Contact phone number.
        password_hash: bcrypt hash of the password.
        role: Account role.
        is_approved: False only for teachers awaiting approval.
        is_active: False while the account is soft-deleted.
        created_by: Admin who created the account, if any.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SAEnum(UserRole, name="user_role", native_enum=False, length=20),
        nullable=False,
        index=True,
    )
    is_approved: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=true(), nullable=False
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=true(), nullable=False
    )
    created_by: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    @property
    def is_pending_approval(self) -> bool:
        """Check if this is a teacher still waiting for approval."""
        return self.role == UserRole.TEACHER and not self.is_approved

    def deactivate(self) -> None:
        """Move the account into the deactivated state."""
        self.is_active = False

    def activate(self) -> None:
        """Move the account back into the active state."""
        self.is_active = True

    def __repr__(self) -> str:
        return f"<User id={self.id} role={self.role.value} active={self.is_active}>"


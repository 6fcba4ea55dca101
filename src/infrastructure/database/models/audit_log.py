# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Append-only audit trail of privileged mutations."""

from enum import Enum

from sqlalchemy import Enum as SAEnum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import Base, CreatedAtMixin
from src.infrastructure.database.models.user import UserRole


class AuditAction(str, Enum):
    """Privileged actions recorded in the audit trail."""

    CREATE_ADMIN = "CREATE_ADMIN"
    APPROVE_TEACHER = "APPROVE_TEACHER"
    REJECT_TEACHER = "REJECT_TEACHER"
    DELETE_ADMIN = "DELETE_ADMIN"
    RESTORE_ADMIN = "RESTORE_ADMIN"


class AuditLog(Base, CreatedAtMixin):
    """One privileged mutation.

    Rows are only ever inserted. entity_id is a plain integer rather than a
    foreign key so entries survive hard deletes of rejected teachers.

    Attributes:
        id: Log entry identifier.
        action_type: What happened.
        entity_type: Kind of entity affected (always USER today).
        entity_id: Identifier of the affected entity.
        performed_by: Acting admin's user ID.
        performed_by_role: Acting admin's role at the time.
        created_at: When the action happened.
    """

    __tablename__ = "audit_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    action_type: Mapped[AuditAction] = mapped_column(
        SAEnum(AuditAction, name="audit_action", native_enum=False, length=32),
        nullable=False,
        index=True,
    )
    entity_type: Mapped[str] = mapped_column(String(32), nullable=False, default="USER")
    entity_id: Mapped[int] = mapped_column(Integer, nullable=False)
    performed_by: Mapped[int] = mapped_column(Integer, nullable=False)
    performed_by_role: Mapped[UserRole] = mapped_column(
        SAEnum(UserRole, name="user_role", native_enum=False, length=20),
        nullable=False,
    )

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin account management and teacher approval.

This module provides the privileged operations available to admins:
- Creating admin accounts
- Listing, approving and rejecting pending teachers
- Soft-deleting and restoring admin accounts
- Reading the audit trail

Every mutation is committed once, together with its audit row, so a
failure leaves neither half behind.

Example:
    >>> service = AdminService(db, password_hasher)
    >>> await service.approve_teacher(teacher_id=7, actor_id=1, actor_role=UserRole.ADMIN)
"""

import logging
from typing import NamedTuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.auth.password import BCRYPT_MAX_BYTES, PasswordHasher
from src.domains.exceptions import (
    DuplicateEmailError,
    InvalidInputError,
    MissingFieldError,
    NotFoundError,
    SelfDeleteForbiddenError,
    SuperAdminProtectedError,
)
from src.infrastructure.database.models import (
    ADMIN_ROLES,
    AuditAction,
    AuditLog,
    DeletedUser,
    User,
    UserRole,
    is_valid_id,
)

logger = logging.getLogger(__name__)

DEFAULT_AUDIT_LIMIT = 100


class CreateAdminResult(NamedTuple):
    """Result of creating an admin account."""

    user: User
    message: str


class AdminService:
    """Privileged account operations.

    Attributes:
        _db: Database session.
        _password_hasher: Password hashing utility.
        _allow_escalation: Whether any admin may create super admins.
    """

    def __init__(
        self,
        db: AsyncSession,
        password_hasher: PasswordHasher | None = None,
        allow_escalation: bool = False,
    ) -> None:
        """Initialize the admin service.

        Args:
            db: Database async session.
            password_hasher: Password hasher (uses default if not provided).
            allow_escalation: Let plain admins create super admins.
        """
        self._db = db
        self._password_hasher = password_hasher or PasswordHasher()
        self._allow_escalation = allow_escalation

    # =========================================================================
    # Admin accounts
    # =========================================================================

    async def create_admin(
        self,
        full_name: str | None,
        email: str | None,
        phone: str | None,
        password: str | None,
        role: str | None,
        actor_id: int,
        actor_role: UserRole,
    ) -> CreateAdminResult:
        """Create an approved admin account.

        The requested role is clamped rather than validated: the account is a
        super admin only when that is asked for and the acting admin is
        allowed to grant it. Anything else yields a plain admin.

        Args:
            full_name: Display name.
            email: Login email.
            phone: Contact phone number.
            password: Plain text password.
            role: Requested role, may be omitted.
            actor_id: ID of the acting admin.
            actor_role: Role of the acting admin.

        Returns:
            CreateAdminResult with the new user and a confirmation message.

        Raises:
            MissingFieldError: If full_name, email, phone or password is empty.
            InvalidInputError: If the password is longer than bcrypt accepts.
            DuplicateEmailError: If the email is already registered.
        """
        if any(v is None or v == "" for v in (full_name, email, phone, password)):
            raise MissingFieldError("All fields are required")

        if self._password_hasher.exceeds_limit(password):
            raise InvalidInputError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")

        admin_role = self._resolve_admin_role(role, actor_role)

        if await self._email_exists(email):
            raise DuplicateEmailError("Email already exists")

        password_hash = await self._password_hasher.hash_async(password)

        user = User(
            full_name=full_name,
            email=email,
            phone=phone,
            password_hash=password_hash,
            role=admin_role,
            is_approved=True,
            is_active=True,
            created_by=actor_id,
        )
        self._db.add(user)

        try:
            await self._db.flush()
        except IntegrityError:
            await self._db.rollback()
            raise DuplicateEmailError("Email already exists")

        self._audit(AuditAction.CREATE_ADMIN, user.id, actor_id, actor_role)
        await self._db.commit()

        logger.info(
            "Admin created: id=%s role=%s by=%s", user.id, admin_role.value, actor_id
        )

        return CreateAdminResult(
            user=user,
            message=f"{admin_role.label} created successfully",
        )

    async def list_admins(self) -> list[User]:
        """List active admins and super admins, newest first."""
        stmt = (
            select(User)
            .where(User.role.in_(tuple(ADMIN_ROLES)), User.is_active.is_(True))
            .order_by(User.created_at.desc(), User.id.desc())
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def delete_admin(
        self,
        admin_id: int,
        actor_id: int,
        actor_role: UserRole,
    ) -> DeletedUser:
        """Soft-delete an admin account.

        Writes a tombstone, deactivates the account and records the action in
        one transaction.

        Args:
            admin_id: ID of the admin to delete.
            actor_id: ID of the acting admin.
            actor_role: Role of the acting admin.

        Returns:
            The tombstone created for the account.

        Raises:
            SelfDeleteForbiddenError: If admin_id is the acting admin.
            NotFoundError: If no active admin has that ID.
            SuperAdminProtectedError: If the target is a super admin.
        """
        if admin_id == actor_id:
            raise SelfDeleteForbiddenError("Cannot delete your own account")

        if not is_valid_id(admin_id):
            raise NotFoundError("Admin not found")

        stmt = select(User).where(
            User.id == admin_id,
            User.role.in_(tuple(ADMIN_ROLES)),
            User.is_active.is_(True),
        )
        result = await self._db.execute(stmt)
        admin = result.scalar_one_or_none()

        if not admin:
            raise NotFoundError("Admin not found")

        if admin.role == UserRole.SUPER_ADMIN:
            logger.warning("Refused to delete super admin %s (by %s)", admin.id, actor_id)
            raise SuperAdminProtectedError("Cannot delete Super Admin")

        tombstone = DeletedUser.from_user(admin, deleted_by=actor_id)
        self._db.add(tombstone)
        admin.deactivate()
        self._audit(AuditAction.DELETE_ADMIN, admin.id, actor_id, actor_role)

        await self._db.commit()

        logger.info("Admin %s deleted by %s", admin.id, actor_id)

        return tombstone

    async def list_deleted_admins(self) -> list[DeletedUser]:
        """List tombstones of deleted admins, most recently deleted first."""
        stmt = select(DeletedUser).order_by(
            DeletedUser.deleted_at.desc(), DeletedUser.id.desc()
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def restore_admin(
        self,
        deleted_id: int,
        actor_id: int,
        actor_role: UserRole,
    ) -> User | None:
        """Restore a soft-deleted admin.

        Reactivates the original account and removes its tombstone in one
        transaction. Earlier audit rows are left untouched.

        Args:
            deleted_id: Tombstone ID (not the user ID).
            actor_id: ID of the acting super admin.
            actor_role: Role of the acting super admin.

        Returns:
            The reactivated user, or None if the original row is gone.

        Raises:
            NotFoundError: If the tombstone does not exist.
        """
        if not is_valid_id(deleted_id):
            raise NotFoundError("Deleted admin not found")

        tombstone = await self._db.get(DeletedUser, deleted_id)
        if not tombstone:
            raise NotFoundError("Deleted admin not found")

        user = await self._db.get(User, tombstone.original_user_id)
        if user:
            user.activate()
        else:
            logger.warning(
                "Tombstone %s points at missing user %s",
                tombstone.id,
                tombstone.original_user_id,
            )

        self._audit(
            AuditAction.RESTORE_ADMIN, tombstone.original_user_id, actor_id, actor_role
        )
        await self._db.delete(tombstone)

        await self._db.commit()

        logger.info("Admin %s restored by %s", tombstone.original_user_id, actor_id)

        return user

    # =========================================================================
    # Teachers
    # =========================================================================

    async def get_pending_teachers(self) -> list[User]:
        """List teachers awaiting approval, newest first."""
        stmt = (
            select(User)
            .where(User.role == UserRole.TEACHER, User.is_approved.is_(False))
            .order_by(User.created_at.desc(), User.id.desc())
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    async def approve_teacher(
        self,
        teacher_id: int,
        actor_id: int | None = None,
        actor_role: UserRole | None = None,
    ) -> User:
        """Approve a teacher so they can log in.

        Approving an already approved teacher succeeds again.

        Args:
            teacher_id: ID of the teacher.
            actor_id: ID of the acting admin, recorded in the audit trail.
            actor_role: Role of the acting admin.

        Returns:
            The approved teacher.

        Raises:
            NotFoundError: If no teacher has that ID.
        """
        teacher = await self._get_teacher(teacher_id)
        teacher.is_approved = True

        if actor_id is not None and actor_role is not None:
            self._audit(AuditAction.APPROVE_TEACHER, teacher.id, actor_id, actor_role)

        await self._db.commit()

        logger.info("Teacher %s approved by %s", teacher.id, actor_id)

        return teacher

    async def reject_teacher(
        self,
        teacher_id: int,
        actor_id: int | None = None,
        actor_role: UserRole | None = None,
    ) -> None:
        """Reject a teacher by removing the account permanently.

        Args:
            teacher_id: ID of the teacher.
            actor_id: ID of the acting admin, recorded in the audit trail.
            actor_role: Role of the acting admin.

        Raises:
            NotFoundError: If no teacher has that ID.
        """
        teacher = await self._get_teacher(teacher_id)
        await self._db.delete(teacher)

        if actor_id is not None and actor_role is not None:
            self._audit(AuditAction.REJECT_TEACHER, teacher_id, actor_id, actor_role)

        await self._db.commit()

        logger.info("Teacher %s rejected by %s", teacher_id, actor_id)

    # =========================================================================
    # Audit trail
    # =========================================================================

    async def list_audit_logs(self, limit: int = DEFAULT_AUDIT_LIMIT) -> list[AuditLog]:
        """List audit entries, newest first.

        Args:
            limit: Maximum number of entries to return.

        Returns:
            Audit log entries.
        """
        stmt = (
            select(AuditLog)
            .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .limit(limit)
        )
        result = await self._db.execute(stmt)
        return list(result.scalars().all())

    # =========================================================================
    # Helpers
    # =========================================================================

    def _resolve_admin_role(self, requested: str | None, actor_role: UserRole) -> UserRole:
        if requested != UserRole.SUPER_ADMIN.value:
            return UserRole.ADMIN
        if actor_role == UserRole.SUPER_ADMIN or self._allow_escalation:
            return UserRole.SUPER_ADMIN
        logger.info("Super admin requested by a plain admin; creating ADMIN instead")
        return UserRole.ADMIN

    def _audit(
        self,
        action: AuditAction,
        entity_id: int,
        actor_id: int,
        actor_role: UserRole,
    ) -> None:
        self._db.add(
            AuditLog(
                action_type=action,
                entity_type="USER",
                entity_id=entity_id,
                performed_by=actor_id,
                performed_by_role=actor_role,
            )
        )

    async def _get_teacher(self, teacher_id: int) -> User:
        if not is_valid_id(teacher_id):
            raise NotFoundError("Teacher not found")

        stmt = select(User).where(User.id == teacher_id, User.role == UserRole.TEACHER)
        result = await self._db.execute(stmt)
        teacher = result.scalar_one_or_none()
        if not teacher:
            raise NotFoundError("Teacher not found")
        return teacher

    async def _email_exists(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == email).limit(1)
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none() is not None

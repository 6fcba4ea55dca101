# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Self-service authentication.

This module implements signup for students and teachers and password login
for every role. Teachers can sign up but cannot log in until an admin
approves them.

Example:
    >>> service = AuthService(db, jwt_manager, password_hasher)
    >>> result = await service.login("ada@example.com", "secret")
    >>> print(result.token)
"""

import logging
from typing import NamedTuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.auth.jwt import JWTManager
from src.domains.auth.password import BCRYPT_MAX_BYTES, PasswordHasher
from src.domains.exceptions import (
    AccountDisabledError,
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidInputError,
    MissingFieldError,
    NotFoundError,
    PendingApprovalError,
)
from src.infrastructure.database.models.base import is_valid_id
from src.infrastructure.database.models.user import SELF_SERVICE_ROLES, User, UserRole

logger = logging.getLogger(__name__)

SIGNUP_MESSAGES = {
    UserRole.STUDENT: "Account created successfully",
    UserRole.TEACHER: "Account created. Awaiting admin approval.",
}


class SignupResult(NamedTuple):
    """Result of a successful signup."""

    user: User
    message: str


class LoginResult(NamedTuple):
    """Result of a successful login."""

    user: User
    token: str


def _is_blank(value: str | None) -> bool:
    return value is None or value == ""


class AuthService:
    """Signup and login for end users.

    Attributes:
        _db: Database session.
        _jwt_manager: Token issuer.
        _password_hasher: Password hashing utility.

    Example:
        >>> service = AuthService(db, jwt_manager, password_hasher)
        >>> result = await service.signup(
        ...     full_name="Ada Lovelace",
        ...     email="ada@example.com",
        ...     password="secret",
        ...     phone="555-0100",
        ...     role="TEACHER",
        ... )
        >>> result.user.is_approved
        False
    """

    def __init__(
        self,
        db: AsyncSession,
        jwt_manager: JWTManager,
        password_hasher: PasswordHasher | None = None,
    ) -> None:
        """Initialize the authentication service.

        Args:
            db: Database async session.
            jwt_manager: JWT token manager.
            password_hasher: Password hasher (uses default if not provided).
        """
        self._db = db
        self._jwt_manager = jwt_manager
        self._password_hasher = password_hasher or PasswordHasher()

    async def signup(
        self,
        full_name: str | None,
        email: str | None,
        password: str | None,
        phone: str | None,
        role: str | UserRole | None,
    ) -> SignupResult:
        """Register a student or teacher account.

        Students are approved immediately. Teachers are stored unapproved
        and must wait for an admin.

        Args:
            full_name: Display name.
            email: Login email, compared case-sensitively.
            password: Plain text password.
            phone: Contact phone number.
            role: Either STUDENT or TEACHER.

        Returns:
            SignupResult with the created user and a role-specific message.

        Raises:
            MissingFieldError: If any field is absent or empty.
            InvalidInputError: If the role is not STUDENT or TEACHER,
                or the password is longer than bcrypt accepts.
            DuplicateEmailError: If the email is already registered.
        """
        if any(_is_blank(v) for v in (full_name, email, password, phone, role)):
            raise MissingFieldError("All fields are required")

        try:
            user_role = UserRole(role)
        except ValueError:
            user_role = None
        if user_role not in SELF_SERVICE_ROLES:
            raise InvalidInputError("Invalid role selected")

        if self._password_hasher.exceeds_limit(password):
            raise InvalidInputError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")

        if await self._email_exists(email):
            logger.info("Signup rejected: email already registered")
            raise DuplicateEmailError("Email already exists")

        password_hash = await self._password_hasher.hash_async(password)

        user = User(
            full_name=full_name,
            email=email,
            phone=phone,
            password_hash=password_hash,
            role=user_role,
            is_approved=user_role == UserRole.STUDENT,
            is_active=True,
        )
        self._db.add(user)

        try:
            await self._db.flush()
        except IntegrityError:
            await self._db.rollback()
            logger.info("Signup rejected: email taken by a concurrent insert")
            raise DuplicateEmailError("Email already exists")

        await self._db.commit()

        logger.info("User signed up: id=%s role=%s", user.id, user_role.value)

        return SignupResult(user=user, message=SIGNUP_MESSAGES[user_role])

    async def login(self, email: str | None, password: str | None) -> LoginResult:
        """Authenticate a user and issue an access token.

        Checks run in a fixed order and each failure stops the flow. A
        disabled account is reported before the password is checked, and an
        unknown email and a wrong password produce the same error.

        Args:
            email: Login email.
            password: Plain text password.

        Returns:
            LoginResult with the user and a signed access token.

        Raises:
            MissingFieldError: If email or password is absent.
            InvalidCredentialsError: If the email is unknown or the password
                is wrong.
            AccountDisabledError: If the account has been deactivated.
            PendingApprovalError: If a teacher has not been approved yet.
        """
        if _is_blank(email) or _is_blank(password):
            raise MissingFieldError("Email and password are required")

        user = await self._get_by_email(email)

        if not user:
            logger.warning("Login failed: unknown email")
            raise InvalidCredentialsError("Invalid email or password")

        if not user.is_active:
            logger.warning("Login failed: account disabled for user %s", user.id)
            raise AccountDisabledError("Account disabled")

        if not await self._password_hasher.verify_async(password, user.password_hash):
            logger.warning("Login failed: wrong password for user %s", user.id)
            raise InvalidCredentialsError("Invalid email or password")

        if user.is_pending_approval:
            logger.info("Login refused: teacher %s awaiting approval", user.id)
            raise PendingApprovalError(
                "You are not approved yet. Please wait for admin approval."
            )

        token = self._jwt_manager.create_access_token(user_id=user.id, role=user.role)

        logger.info("User logged in: %s", user.id)

        return LoginResult(user=user, token=token)

    async def get_profile(self, user_id: int) -> User:
        """Get the account of an authenticated caller.

        Args:
            user_id: ID taken from the caller's token.

        Returns:
            The user row.

        Raises:
            NotFoundError: If the account no longer exists.
        """
        user = await self._db.get(User, user_id) if is_valid_id(user_id) else None
        if not user:
            raise NotFoundError("User not found")
        return user

    async def _get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none()

    async def _email_exists(self, email: str) -> bool:
        stmt = select(User.id).where(User.email == email).limit(1)
        result = await self._db.execute(stmt)
        return result.scalar_one_or_none() is not None

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exceptions raised by the account services.

Every service operation maps its failure to exactly one of these classes.
Each class carries the HTTP status it is rendered with and a short message
that is safe to show to the caller.

- AccountError: Base exception for all account service errors
- MissingFieldError, InvalidInputError: Malformed requests (400)
- DuplicateEmailError: Email already registered (409)
- UnauthenticatedError, InvalidCredentialsError: Identity not established (401)
- AccountDisabledError, PendingApprovalError, ForbiddenError,
  SuperAdminProtectedError: Identity known but not allowed (403)
- SelfDeleteForbiddenError: Admin targeting their own account (400)
- NotFoundError: Target row does not exist (404)
- BackendFailure: Store, hashing or signing fault (500). Unhandled errors
  reaching the API are answered as this class.
"""

from fastapi import status


class AccountError(Exception):
    """Base exception for all account service errors.

    Attributes:
        message: Human-readable error description returned to the client.
        status_code: HTTP status used when the error reaches the API layer.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error description. Falls back to the
                class default when omitted.
        """
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingFieldError(AccountError):
    """Raised when a required field is absent or empty."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "All fields are required"


class InvalidInputError(AccountError):
    """Raised when a field holds a value outside its allowed set."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class DuplicateEmailError(AccountError):
    """Raised when the email is already registered."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Email already exists"


class UnauthenticatedError(AccountError):
    """Raised when no valid bearer token accompanies a protected request."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class InvalidCredentialsError(AccountError):
    """Raised for an unknown email or a wrong password.

    Both cases share one message so callers cannot tell which accounts exist.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid email or password"


class AccountDisabledError(AccountError):
    """Raised when the account has been deactivated."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Account disabled"


class PendingApprovalError(AccountError):
    """Raised when a teacher logs in before being approved."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are not approved yet. Please wait for admin approval."


class ForbiddenError(AccountError):
    """Raised when the caller's role is not allowed on a route."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class SuperAdminProtectedError(AccountError):
    """Raised when a super admin is targeted by the admin delete path."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Cannot delete Super Admin"


class SelfDeleteForbiddenError(AccountError):
    """Raised when an admin tries to delete their own account."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Cannot delete your own account"


class NotFoundError(AccountError):
    """Raised when the targeted row does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class BackendFailure(AccountError):
    """Raised when the store, hasher or token signer fails."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

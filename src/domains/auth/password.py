# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Password hashing utilities using bcrypt.

This module provides secure password hashing and verification
using the bcrypt library directly. The async variants run the CPU-bound
work in a worker thread so request handling on the event loop is not
blocked.

Example:
    >>> hasher = PasswordHasher()
    >>> hashed = hasher.hash("my_password")
    >>> hasher.verify("my_password", hashed)
    True
"""

import asyncio
import logging

import bcrypt

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of the input; longer passwords are refused
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """Secure password hashing using bcrypt.

    Uses bcrypt for secure password hashing with automatic salt generation.
    The work factor is fixed per instance so every stored hash is produced
    with the same cost.

    Attributes:
        _rounds: Number of bcrypt rounds for hashing.

    Example:
        >>> hasher = PasswordHasher(rounds=10)
        >>> hashed = hasher.hash("secure_password")
        >>> hasher.verify("secure_password", hashed)
        True
        >>> hasher.verify("wrong_password", hashed)
        False
    """

    def __init__(self, rounds: int = 10) -> None:
        """Initialize the password hasher.

        Args:
            rounds: Number of bcrypt rounds. Higher is more secure but slower.
        """
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        """bcrypt work factor used by this hasher."""
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password to hash.

        Returns:
            Bcrypt hash string with salt embedded.

        Raises:
            ValueError: If password is empty or longer than BCRYPT_MAX_BYTES.
        """
        if not password:
            raise ValueError("Password cannot be empty")
        if self.exceeds_limit(password):
            raise ValueError(f"Password exceeds {BCRYPT_MAX_BYTES} bytes")

        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(self._encode(password), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        Args:
            password: Plain text password to verify.
            password_hash: Bcrypt hash to verify against.

        Returns:
            True if password matches the hash, False otherwise.
        """
        if not password or not password_hash:
            return False

        # Nothing longer than the limit was ever hashed
        if self.exceeds_limit(password):
            return False

        try:
            return bcrypt.checkpw(
                self._encode(password),
                password_hash.encode("utf-8"),
            )
        except ValueError as e:
            logger.warning("Password verification failed: %s", str(e))
            return False

    async def hash_async(self, password: str) -> str:
        """Hash a password in a worker thread.

        Args:
            password: Plain text password to hash.

        Returns:
            Bcrypt hash string.
        """
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, password: str, password_hash: str) -> bool:
        """Verify a password in a worker thread.

        Args:
            password: Plain text password to verify.
            password_hash: Bcrypt hash to verify against.

        Returns:
            True if password matches the hash, False otherwise.
        """
        return await asyncio.to_thread(self.verify, password, password_hash)

    @staticmethod
    def exceeds_limit(password: str) -> bool:
        """Check if a password is longer than bcrypt can hash in full."""
        return len(password.encode("utf-8")) > BCRYPT_MAX_BYTES

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")

# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Bootstrap seed for the first super admin.

Admins can only be created by other admins, so an empty database needs one
account created out of band. The credentials come from BOOTSTRAP_* settings;
nothing is seeded when they are unset or a super admin already exists.
"""

import asyncio
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.auth.password import PasswordHasher
from src.infrastructure.database.models.user import User, UserRole
from src.utils.logging import get_logger

if TYPE_CHECKING:
    from src.core.config.settings import Settings

logger = get_logger(__name__)


async def seed_super_admin(
    session: AsyncSession,
    settings: "Settings",
    password_hasher: PasswordHasher,
) -> User | None:
    """Create the bootstrap super admin if none exists.

    Args:
        session: Database session.
        settings: Application settings holding the bootstrap credentials.
        password_hasher: Password hasher.

    Returns:
        The created super admin, or None if nothing was seeded.
    """
    bootstrap = settings.bootstrap
    if not bootstrap.is_configured:
        logger.debug("Bootstrap super admin not configured, skipping seed")
        return None

    result = await session.execute(
        select(User.id).where(User.role == UserRole.SUPER_ADMIN).limit(1)
    )
    if result.scalar_one_or_none() is not None:
        logger.info("Super admin already exists, skipping seed")
        return None

    result = await session.execute(
        select(User.id).where(User.email == bootstrap.super_admin_email).limit(1)
    )
    if result.scalar_one_or_none() is not None:
        logger.warning(
            "Bootstrap email already belongs to another account, skipping seed",
            email=bootstrap.super_admin_email,
        )
        return None

    password_hash = await password_hasher.hash_async(
        bootstrap.super_admin_password.get_secret_value()
    )

    user = User(
        full_name=bootstrap.super_admin_name,
        email=bootstrap.super_admin_email,
        phone=bootstrap.super_admin_phone,
        password_hash=password_hash,
        role=UserRole.SUPER_ADMIN,
        is_approved=True,
        is_active=True,
    )
    session.add(user)
    await session.commit()

    logger.info("Bootstrap super admin created", user_id=user.id)

    return user


if __name__ == "__main__":
    from src.core.config import get_settings
    from src.infrastructure.database.connection import build_engine, build_sessionmaker
    from src.infrastructure.database.models import Base

    async def main():
        settings = get_settings()
        engine = build_engine(settings)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        async with build_sessionmaker(engine)() as session:
            await seed_super_admin(
                session, settings, PasswordHasher(settings.auth.bcrypt_rounds)
            )

        await engine.dispose()

    asyncio.run(main())

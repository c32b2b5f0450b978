"""Dev seeding: one admin, one doorman and two residents."""

import asyncio
import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.condo.auth.security import hash_password
from backend.condo.db.engine import get_async_engine
from backend.condo.db.models import User
from backend.condo.models.common import Role
from backend.condo.utils.logging import configure_logging

logger = logging.getLogger(__name__)

# (apartment, name, email, role, password)
DEV_USERS = [
    ("ADMIN", "Administração", "admin@condominio.local", Role.admin, "admin123"),
    ("PORT", "Portaria", "portaria@condominio.local", Role.doorman, "portaria123"),
    ("101", "Ana Souza", "ana@condominio.local", Role.resident, "morador123"),
    ("202", "Bruno Lima", "bruno@condominio.local", Role.resident, "morador123"),
]


async def seed_dev_users(session: AsyncSession) -> int:
    """Insert the dev users that are missing, matched by apartment.

    Idempotent. Returns the number of users created.
    """
    created = 0
    for apartment, name, email, role, password in DEV_USERS:
        result = await session.execute(select(User).where(User.apartment == apartment))
        if result.scalar_one_or_none() is not None:
            logger.info("Dev user already exists: %s", apartment)
            continue

        logger.info("Creating dev user %s (%s)", apartment, role.value)
        session.add(
            User(
                id=uuid.uuid4(),
                apartment=apartment,
                name=name,
                email=email,
                role=role,
                password_hash=hash_password(password),
            )
        )
        created += 1

    await session.commit()
    return created


async def main() -> None:
    configure_logging("INFO")
    async with AsyncSession(get_async_engine(), expire_on_commit=False) as session:
        created = await seed_dev_users(session)
    logger.info("Dev seeding complete, %d user(s) created", created)


if __name__ == "__main__":
    asyncio.run(main())

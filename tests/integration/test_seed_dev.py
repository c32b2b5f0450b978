"""Tests for the dev seeding helper."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from backend.condo.auth.security import verify_password
from backend.condo.db.models import User
from backend.condo.db.seed_dev import DEV_USERS, seed_dev_users
from backend.condo.models.common import Role


@pytest.mark.asyncio
async def test_seed_is_idempotent(engine: AsyncEngine) -> None:
    async with AsyncSession(engine, expire_on_commit=False) as session:
        assert await seed_dev_users(session) == len(DEV_USERS)
        assert await seed_dev_users(session) == 0

        count = await session.scalar(select(func.count()).select_from(User))
        assert count == len(DEV_USERS)


@pytest.mark.asyncio
async def test_seed_covers_every_role(engine: AsyncEngine) -> None:
    async with AsyncSession(engine, expire_on_commit=False) as session:
        await seed_dev_users(session)
        users = (await session.execute(select(User))).scalars().all()

    assert {u.role for u in users} == {Role.admin, Role.doorman, Role.resident}
    admin = next(u for u in users if u.role == Role.admin)
    assert verify_password("admin123", admin.password_hash)

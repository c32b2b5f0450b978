"""Shared pytest fixtures for all test suites."""

import uuid
from collections.abc import AsyncGenerator, Iterator
from dataclasses import dataclass
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from backend.condo.auth.security import hash_password, issue_token
from backend.condo.db.context import RequestContext
from backend.condo.db.engine import get_session
from backend.condo.db.models import Base, User
from backend.condo.main import app
from backend.condo.models.common import Role
from backend.condo.ratelimit import InMemoryRateLimiter, get_login_limiter

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
DEFAULT_PASSWORD = "secret123"


@dataclass(frozen=True)
class SeededUser:
    """A user row plus a ready-to-use context and bearer token."""

    id: uuid.UUID
    apartment: str
    role: Role
    ctx: RequestContext
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


# apartment -> (name, role)
SEED = {
    "ADMIN": ("Síndico", Role.admin),
    "PORT": ("Portaria", Role.doorman),
    "101": ("Resident A", Role.resident),
    "202": ("Resident B", Role.resident),
}


def make_engine() -> AsyncEngine:
    """In-memory SQLite shared by every session of one test."""
    return create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


async def create_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_users(engine: AsyncEngine) -> dict[str, SeededUser]:
    """Insert the SEED users and return them keyed by apartment."""
    seeded: dict[str, SeededUser] = {}
    async with AsyncSession(engine, expire_on_commit=False) as session:
        for apartment, (name, role) in SEED.items():
            user_id = uuid.uuid4()
            session.add(
                User(
                    id=user_id,
                    apartment=apartment,
                    name=name,
                    role=role,
                    password_hash=hash_password(DEFAULT_PASSWORD),
                    created_at=datetime.now(timezone.utc),
                )
            )
            seeded[apartment] = SeededUser(
                id=user_id,
                apartment=apartment,
                role=role,
                ctx=RequestContext(user_id=user_id, apartment=apartment, role=role),
                token=issue_token(user_id, apartment, role),
            )
        await session.commit()
    return seeded


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = make_engine()
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def users(engine: AsyncEngine) -> dict[str, SeededUser]:
    return await seed_users(engine)


@pytest_asyncio.fixture
async def session(engine: AsyncEngine, users: dict[str, SeededUser]) -> AsyncGenerator[AsyncSession, None]:
    """Session over a schema that already holds the SEED users."""
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@dataclass
class ApiHarness:
    client: TestClient
    users: dict[str, SeededUser]


@pytest.fixture
def api() -> Iterator[ApiHarness]:
    """TestClient over a fresh in-memory database.

    Schema creation and seeding run on the client's own event loop so the
    engine is only ever used from one loop.
    """
    engine = make_engine()

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with AsyncSession(engine, expire_on_commit=False) as session:
            yield session

    limiter = InMemoryRateLimiter(max_requests=3)
    app.dependency_overrides[get_session] = override_session
    app.dependency_overrides[get_login_limiter] = lambda: limiter

    with TestClient(app) as client:
        client.portal.call(create_schema, engine)
        seeded = client.portal.call(seed_users, engine)
        yield ApiHarness(client=client, users=seeded)
        client.portal.call(engine.dispose)

    app.dependency_overrides.clear()

"""Pytest configuration and shared fixtures."""

import os
from typing import AsyncGenerator, Optional

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ["VAPI_WEBHOOK_SECRET"] = "test-vapi-secret"
os.environ["SUPER_ADMIN_EMAIL"] = "owner@example.com"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from beloved.core.database import Base, get_db
from beloved.core.security import create_access_token
from beloved.main import app
from beloved.models import DriverProfile, Profile
from beloved.models.profile import UserRole
from beloved.services.profiles import create_profile

VAPI_SECRET = "test-vapi-secret"
DEFAULT_PASSWORD = "password123"

HOME_ADDRESS = {"address": "12 Elm St", "city": "Indianapolis", "state": "IN", "zip": "46202"}


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker, None]:
    """Session factory over a fresh SQLite database per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Async test client with database dependency override."""

    async def override_get_db():
        # Fresh session per request
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session_factory):
    """Factory creating a profile (and driver profile for drivers) directly in the database."""

    async def _make_user(
        role: UserRole = UserRole.MEMBER,
        email: Optional[str] = None,
        full_name: str = "Test User",
        password: str = DEFAULT_PASSWORD,
        home_address: Optional[dict] = None,
    ) -> Profile:
        async with session_factory() as session:
            profile = await create_profile(
                session,
                email=email or f"{role.value}-{os.urandom(4).hex()}@example.com",
                full_name=full_name,
                phone="317-555-0100",
                password=password,
                role=role,
                username=full_name.lower().replace(" ", ".") if role == UserRole.DRIVER else None,
                home_address=home_address if home_address is not None else (
                    HOME_ADDRESS if role == UserRole.MEMBER else None
                ),
            )
            if role == UserRole.DRIVER:
                session.add(DriverProfile(id=profile.id, license_number="IN-1234567"))
            await session.commit()
            await session.refresh(profile)
            return profile

    return _make_user


def auth_headers(user: Profile) -> dict:
    token = create_access_token(data={"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def admin(make_user) -> Profile:
    return await make_user(UserRole.ADMIN, full_name="Dispatch Desk")


@pytest_asyncio.fixture
async def member(make_user) -> Profile:
    return await make_user(UserRole.MEMBER, full_name="Ruth Johnson")


@pytest_asyncio.fixture
async def driver(make_user) -> Profile:
    return await make_user(UserRole.DRIVER, full_name="James Carter")

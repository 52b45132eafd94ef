"""
Test fixtures for the Pet Symptom Tracker test suite.

This module provides shared fixtures used across all test files:

  - db_engine / db_session: Fresh in-memory SQLite database for each test
  - issuer / user_service: A UserService over the test session, for
    service-level tests that don't go through HTTP
  - make_user: Inserts a user with a given role directly into the DB
  - client: Async HTTP test client (unauthenticated)
  - user_auth / other_user_auth / moderator_auth / admin_auth: Registered
    accounts with a login token, as an Auth(id, headers) pair

Key design decisions:
  - In-memory SQLite (sqlite+aiosqlite://) is used for speed and isolation.
    Each test gets a completely fresh database — no state leaks between tests.
  - We override FastAPI's get_db dependency to inject our test engine,
    so the application code works exactly as it does in production.
  - The *_auth fixtures register through the real /register endpoint and
    log in through /login. Moderators and admins are then promoted
    directly in the database, the way an operator would provision them.
  - Auth headers are passed per request rather than stored on the shared
    client, so one test can act as several users.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")

import uuid
from dataclasses import dataclass
from datetime import timedelta

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import update
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

import pet_tracker.models  # noqa: F401
from pet_tracker.database import Base, enable_sqlite_foreign_keys, get_db
from pet_tracker.main import app
from pet_tracker.models.user import Role, User
from pet_tracker.repositories.user_repository import UserRepository
from pet_tracker.security import TokenIssuer, hash_password
from pet_tracker.services.user_service import UserService


# In-memory SQLite for fast, isolated tests
TEST_DATABASE_URL = "sqlite+aiosqlite://"

API = "/api/v1"
STRONG_PASSWORD = "SecurePass123!"


@dataclass
class Auth:
    id: uuid.UUID
    headers: dict[str, str]


@pytest_asyncio.fixture
async def db_engine():
    """Create a fresh async engine with all tables for each test."""
    engine = create_async_engine(TEST_DATABASE_URL)
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Provide an async session bound to the test engine."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session() as session:
        yield session


@pytest.fixture
def issuer():
    return TokenIssuer(secret_key="service-test-secret", ttl=timedelta(minutes=30))


@pytest.fixture
def user_service(db_session, issuer):
    return UserService(UserRepository(db_session), issuer)


@pytest.fixture
def make_user(db_session):
    """
    Factory fixture: insert a user directly, bypassing registration rules.

    Usage:
        admin = await make_user("root", role=Role.ADMIN)
    """
    async def _make_user(
        username: str,
        role: Role = Role.USER,
        password: str = STRONG_PASSWORD,
        enabled: bool = True,
        locked: bool = False,
    ) -> User:
        user = User(
            username=username,
            email=f"{username}@example.com",
            hashed_password=hash_password(password),
            role=role,
            enabled=enabled,
            locked=locked,
        )
        db_session.add(user)
        await db_session.flush()
        return user

    return _make_user


@pytest_asyncio.fixture
async def client(db_engine):
    """
    Async HTTP test client with the test database injected.

    This overrides the get_db dependency so all requests hit the
    in-memory test database instead of the real one.
    """
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


async def _register_and_login(client, db_engine, username: str, role: Role = Role.USER) -> Auth:
    response = await client.post(
        f"{API}/register",
        json={
            "email": f"{username}@example.com",
            "username": username,
            "password": STRONG_PASSWORD,
            "firstname": username.capitalize(),
        },
    )
    assert response.status_code == 201, f"Register failed: {response.text}"
    user_id = uuid.UUID(response.json()["id"])

    if role is not Role.USER:
        async_session = async_sessionmaker(
            db_engine, class_=AsyncSession, expire_on_commit=False,
        )
        async with async_session() as session:
            await session.execute(
                update(User).where(User.id == user_id).values(role=role)
            )
            await session.commit()

    login = await client.post(
        f"{API}/login",
        json={"username": username, "password": STRONG_PASSWORD},
    )
    assert login.status_code == 200, f"Login failed: {login.text}"
    token = login.json()["token"]
    return Auth(id=user_id, headers={"Authorization": f"Bearer {token}"})


@pytest_asyncio.fixture
async def user_auth(client, db_engine):
    """A regular USER account."""
    return await _register_and_login(client, db_engine, "alice")


@pytest_asyncio.fixture
async def other_user_auth(client, db_engine):
    """A second USER account for cross-user tests."""
    return await _register_and_login(client, db_engine, "bob")


@pytest_asyncio.fixture
async def moderator_auth(client, db_engine):
    return await _register_and_login(client, db_engine, "mod", role=Role.MODERATOR)


@pytest_asyncio.fixture
async def admin_auth(client, db_engine):
    return await _register_and_login(client, db_engine, "root", role=Role.ADMIN)

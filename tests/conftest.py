"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from storefront_admin.auth import TokenIssuer
from storefront_admin.auth.passwords import hash_password
from storefront_admin.dbmodels import Admins, Base, Roles
from storefront_admin.events import EventDispatcher
from storefront_admin.storage import ImageStore

TEST_PASSWORD = "secret123"


@pytest.fixture(scope="function")
def test_database(tmp_path: Path) -> Generator[str, None, None]:
    """Return the URL of a throwaway SQLite database file."""
    yield f"sqlite:///{tmp_path / 'storefront_admin.db'}"


@pytest_asyncio.fixture(scope="function")
async def reset_shared_db_connections(test_database: str) -> AsyncGenerator[None, None]:
    """Point the shared connection pool at the test database and create the schema."""
    from storefront_admin.database.connection import (
        get_async_engine,
        init_database,
        reset_database,
    )

    reset_database()
    init_database(test_database, force_reinit=True)

    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    await engine.dispose()
    reset_database()


@pytest_asyncio.fixture(scope="function")
async def db_session(reset_shared_db_connections: None) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async SQLAlchemy session for testing."""
    _ = reset_shared_db_connections

    from storefront_admin.database.connection import get_async_engine

    async with AsyncSession(get_async_engine(), expire_on_commit=False) as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def role(db_session: AsyncSession) -> Roles:
    role = Roles(name="Administrator", permission_type="all", permissions=[])
    db_session.add(role)
    await db_session.flush()
    return role


@pytest_asyncio.fixture
async def admin(db_session: AsyncSession, role: Roles) -> Admins:
    """An active admin with a known password."""
    admin = Admins(
        name="Example Admin",
        email="admin@example.com",
        password=hash_password(TEST_PASSWORD),
        status=True,
        role_id=role.id,
    )
    db_session.add(admin)
    await db_session.flush()
    await db_session.refresh(admin)
    return admin


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(
        secret_key="test-secret-key-with-enough-length-for-hs256",
        ttl_minutes=60,
        remember_ttl_minutes=60 * 24,
    )


@pytest.fixture
def events() -> EventDispatcher:
    return EventDispatcher()


@pytest.fixture
def recorded_events(events: EventDispatcher) -> list[Any]:
    """Names and payloads of every event dispatched, in order."""
    seen: list[Any] = []
    events.subscribe("*", lambda event: seen.append((event.name, event.payload)))
    return seen


@pytest.fixture
def image_store() -> MagicMock:
    """Image store double recording upload and delete calls."""
    store = MagicMock(spec=ImageStore)
    store.upload_image = AsyncMock(return_value="admins/1/avatar.png")
    store.delete_keys = AsyncMock(return_value=None)
    store.url_for.side_effect = lambda key: f"http://localhost:8090/storage/{key}" if key else None
    return store


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "requires_db: mark test as requiring database connection")
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")

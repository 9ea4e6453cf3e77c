"""Service test fixtures — async DB + FastAPI test client with faked external services.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched for code paths that bypass get_db (readiness probe)
    - Identity service, Stripe and AI providers replaced by fakes (tests/services/fakes.py)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - Real get_current_user runs against FakeIdentityClient: the lazy users-row creation
      and the admin guard are exercised on every authenticated request
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_ai_providers, get_identity_client, get_stripe_gateway
from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.models import User
import app.infrastructure.database as db_module
from app.main import app
from tests.services.fakes import (
    USER_ID, FakeAIProviders, FakeIdentityClient, FakeStripeGateway,
)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def identity_client():
    return FakeIdentityClient()


@pytest.fixture
def stripe_gateway():
    return FakeStripeGateway()


@pytest.fixture
def ai_providers():
    return FakeAIProviders()


@pytest.fixture
async def client(
    test_engine, test_session_factory, identity_client, stripe_gateway, ai_providers,
):
    """FastAPI test client with DB and external services overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_client] = lambda: identity_client
    app.dependency_overrides[get_stripe_gateway] = lambda: stripe_gateway
    app.dependency_overrides[get_ai_providers] = lambda: ai_providers

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer user-token"}


@pytest.fixture
def other_headers():
    return {"Authorization": "Bearer other-token"}


@pytest.fixture
def admin_headers():
    return {"Authorization": "Bearer admin-token"}


@pytest.fixture
async def seed_user(test_db):
    """Insert the default user's row directly (for flows without a prior request)."""
    user = User(id=USER_ID, email="user@example.com", role="user", nav_preferences=[])
    test_db.add(user)
    await test_db.commit()
    return user

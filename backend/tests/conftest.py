"""
VenueAtlas Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── db_engine: In-memory SQLite engine with all tables created
    │   └── session_factory: Session factory bound to db_engine
    │       ├── db_session: One session for service-level tests
    │       ├── seeded: Location tree + one user per role
    │       └── test_client: HTTPX AsyncClient, get_db_session overridden

Seeded data:
    Rwanda (RW)                 Kenya (KE)
    └── Kigali (KGL)            └── Nairobi (NBO)
        └── Kicukiro (KCK)

    admin            Admin      Kigali
    organizer        Organizer  Kicukiro
    attendee         Attend     Kicukiro
    other_organizer  Organizer  Nairobi
"""

import os
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.database import Base, get_db_session  # noqa: E402
from app.models import Location, Role, User  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Mocked Persistence
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_location(mock_db_session):
            mock_db_session.get.return_value = location
            result = await location_service.get_or_404(mock_db_session, location.id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Real Persistence (in-memory SQLite)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    A fresh in-memory database per test.

    StaticPool keeps a single connection, so every session sees the same
    in-memory database.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(session_factory):
    """Seeds the location tree and users described in the module docstring."""
    rwanda = Location(id=uuid4(), name="Rwanda", code="RW")
    kigali = Location(id=uuid4(), name="Kigali", code="KGL", parent_id=rwanda.id)
    kicukiro = Location(id=uuid4(), name="Kicukiro", code="KCK", parent_id=kigali.id)
    kenya = Location(id=uuid4(), name="Kenya", code="KE")
    nairobi = Location(id=uuid4(), name="Nairobi", code="NBO", parent_id=kenya.id)

    admin = User(
        id=uuid4(), name="Alice Admin", phone="+250788000001",
        email="admin@example.com", role=Role.ADMIN, location_id=kigali.id,
    )
    organizer = User(
        id=uuid4(), name="Olivier Organizer", phone="+250788000002",
        email="organizer@example.com", role=Role.ORGANIZER, location_id=kicukiro.id,
    )
    attendee = User(
        id=uuid4(), name="Aline Attendee", phone="+250788000003",
        email="attendee@example.com", role=Role.ATTEND, location_id=kicukiro.id,
    )
    other_organizer = User(
        id=uuid4(), name="Wanjiru Organizer", phone="+254700000004",
        email="wanjiru@example.com", role=Role.ORGANIZER, location_id=nairobi.id,
    )

    async with session_factory() as session:
        session.add_all([rwanda, kigali, kicukiro, kenya, nairobi])
        session.add_all([admin, organizer, attendee, other_organizer])
        await session.commit()

    return SimpleNamespace(
        rwanda=rwanda,
        kigali=kigali,
        kicukiro=kicukiro,
        kenya=kenya,
        nairobi=nairobi,
        admin=admin,
        organizer=organizer,
        attendee=attendee,
        other_organizer=other_organizer,
    )


# ══════════════════════════════════════════════════════════════════════════
# API Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    Provides an async HTTP test client for endpoint testing.

    How:   ASGITransport routes requests straight into the app; get_db_session
           is overridden to hand out sessions on the in-memory test database
           with the same commit/rollback behaviour as production.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()

"""Service test fixtures — async DB, seeded activity, FastAPI test client, tokens.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - db_manager patched so the readiness probe sees the test engine
    - Activity "7" is hosted by u1 and dated in the future

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for pipeline tests
    - Real signed tokens (create_access_token): the identity dependency is exercised
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from reactivities.config import get_settings
from reactivities.core.domain_types import Principal, UserId
from reactivities.db.base import Base
from reactivities.infrastructure.database import get_db, DatabaseSessionManager
from reactivities.infrastructure.identity import create_access_token
from reactivities.models.activity import Activity
from reactivities.models.activity_attendee import ActivityAttendee
from reactivities.models.user import User
import reactivities.infrastructure.database as db_module
from reactivities.main import app


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
async def seed_activity(test_db):
    """Activity "7": hosted by u1, attended by u3, one week ahead."""
    host = User(id="u1", display_name="User One")
    guest = User(id="u3", display_name="User Three")
    activity = Activity(
        id="7",
        title="Park run",
        date=datetime.now(timezone.utc) + timedelta(days=7),
        description="5k around the park",
        category="sport",
        city="London",
        venue="Hyde Park",
        latitude=51.507,
        longitude=-0.165,
        is_cancelled=False,
        attendees=[
            ActivityAttendee(user=host, is_host=True),
            ActivityAttendee(user=guest, is_host=False),
        ],
    )
    test_db.add_all([host, guest, activity])
    await test_db.commit()
    return activity


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

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
    """Build Authorization headers for a user id."""
    def _headers(user_id: str, display_name: str = "") -> dict:
        principal = Principal(id=UserId(user_id), display_name=display_name or user_id)
        token = create_access_token(principal, get_settings())
        return {"Authorization": f"Bearer {token}"}
    return _headers


def activity_payload(**overrides) -> dict:
    payload = {
        "title": "Run",
        "description": "Evening run",
        "category": "sport",
        "date": (datetime.now(timezone.utc) + timedelta(days=14)).isoformat(),
        "city": "London",
        "venue": "Regent's Park",
        "latitude": 51.53,
        "longitude": -0.15,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def payload():
    return activity_payload

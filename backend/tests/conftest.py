"""
Test fixtures for the Tá Pago backend.

Each test gets its own in-memory SQLite database; the auth dependency is
replaced by a fixed test user so no provider is contacted.
"""
import os

# Must be set before tapago.core.config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_FORMAT"] = "console"

from datetime import date
from typing import List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import tapago.models  # noqa: F401
from tapago.core.auth import UserContext, get_current_user
from tapago.core.database import Base, get_db
from tapago.main import app
from tapago.services.analytics import TypeSnapshot, WeightSnapshot, WorkoutSnapshot


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------

TEST_USER = UserContext(user_id="test-user-123", email="atleta@example.com", access_token="test-token")
OTHER_USER = UserContext(user_id="other-user-456", email="outro@example.com", access_token="other-token")


async def mock_get_current_user() -> UserContext:
    """Mock auth dependency that returns the test user."""
    return TEST_USER


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# API client
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def client(session_factory):
    """AsyncClient bound to the app with database and auth overridden."""
    async def override_get_db():
        async with session_factory() as session:
            yield session
    
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = mock_get_current_user
    
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Snapshot builders
# ---------------------------------------------------------------------------

def make_workouts(*days: date, type_id: str = None, custom_type: str = None) -> List[WorkoutSnapshot]:
    """One workout per day with sequential ids."""
    return [
        WorkoutSnapshot(id=f"w{index}", date=day, type_id=type_id, custom_type=custom_type)
        for index, day in enumerate(days)
    ]


@pytest.fixture
def workout_types() -> List[TypeSnapshot]:
    return [
        TypeSnapshot(id="t-a", name="Treino A", icon="🅰️", color="hsl(142 76% 36%)"),
        TypeSnapshot(id="t-b", name="Treino B", icon="🅱️", color="hsl(217 91% 60%)"),
    ]


def make_weight(entry_id: str, weight: float, day: date) -> WeightSnapshot:
    return WeightSnapshot(id=entry_id, weight=weight, date=day)

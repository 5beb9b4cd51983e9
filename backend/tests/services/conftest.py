"""Service test fixtures: async DB, stores, engine and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db and get_event_bus dependencies overridden for route tests
    - db_manager patched so readiness probes hit the test database
    - Seed data is committed before the test body runs

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for engine and route
      tests (no PostgreSQL-specific features exercised)
    - Engine tests share one AsyncSession between stores and assertions, matching the
      one-session-per-request wiring in api/dependencies.py
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
import app.infrastructure.database as db_module
from app.infrastructure.game_events import GameEventBus, get_event_bus
from app.infrastructure.match_store import SqlMatchStore
from app.infrastructure.player_store import SqlPlayerStore
from app.models import Player
from app.services.match_engine import MatchEngine
from app.services.player_service import PlayerService
from app.main import app


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
def event_bus():
    return GameEventBus(queue_size=8)


@pytest.fixture
def match_store(test_db):
    return SqlMatchStore(test_db)


@pytest.fixture
def player_store(test_db):
    return SqlPlayerStore(test_db)


@pytest.fixture
def engine(match_store, player_store, event_bus):
    return MatchEngine(match_store, player_store, event_bus)


@pytest.fixture
def player_service(player_store):
    return PlayerService(player_store)


@pytest.fixture
async def seed_players(test_db):
    """Eight committed players named A..H (list order = creation order)."""
    players = [Player(name=name) for name in "ABCDEFGH"]
    test_db.add_all(players)
    await test_db.commit()
    return [p.id for p in players]


@pytest.fixture
async def client(test_engine, test_session_factory, event_bus):
    """FastAPI test client with DB and event bus dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_event_bus] = lambda: event_bus

    # Patch db_manager for the readiness probe, which uses it directly
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

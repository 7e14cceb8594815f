"""Fixtures communes / Shared fixtures."""

import math
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from guard_patrol.api.deps import get_record_store
from guard_patrol.database import get_db, init_db
from guard_patrol.main import app
from guard_patrol.models.checkpoint import Checkpoint
from guard_patrol.models.user import User, UserRole
from guard_patrol.rate_limit import limiter
from guard_patrol.services.record_store import SqlRecordStore
from guard_patrol.utils.geo import EARTH_RADIUS_M, Coordinate

CHECKPOINT_COORD = Coordinate(40.7128, -74.0060)
CHECKLIST = ["Door locked", "Lights off", "No damage visible"]
TODAY = "2026-10-18"


def offset_north(origin: Coordinate, meters: float) -> Coordinate:
    """Point a `meters` au nord / Point `meters` north of origin."""
    return Coordinate(origin.latitude + math.degrees(meters / EARTH_RADIUS_M), origin.longitude)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 18, 8, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(session_factory, clock):
    return SqlRecordStore(session_factory, radius_m=50.0, clock=clock)


@pytest.fixture
async def seeded(session_factory):
    async with session_factory() as session:
        guard = User(username="guard1", password="guard123", name="John Smith", role=UserRole.GUARD)
        other = User(username="guard2", password="guard123", name="Jane Doe", role=UserRole.GUARD)
        supervisor = User(username="admin", password="admin123", name="Admin User", role=UserRole.SUPERVISOR)
        checkpoint = Checkpoint(
            name="Main Entrance",
            latitude=CHECKPOINT_COORD.latitude,
            longitude=CHECKPOINT_COORD.longitude,
            checklist=list(CHECKLIST),
        )
        session.add_all([guard, other, supervisor, checkpoint])
        await session.commit()
        return SimpleNamespace(
            guard_id=guard.id,
            other_guard_id=other.id,
            supervisor_id=supervisor.id,
            checkpoint_id=checkpoint.id,
        )


@pytest.fixture
async def client(session_factory, store):
    async def _get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_record_store] = lambda: store
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()

"""Shared fixtures: in-memory SQLite store, controllable clock, engine with fast ticks."""

from datetime import datetime, timedelta, timezone

import pytest

from liftlog.core.config import Settings
from liftlog.db.session import build_engine, build_session_maker
from liftlog.db.store import Store, create_schema
from liftlog.services.engine import WorkoutEngine

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def settings():
    return Settings(_env_file=None, database_url_override=MEMORY_URL)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
async def store(settings):
    db_engine = build_engine(settings)
    await create_schema(db_engine)
    yield Store(build_session_maker(db_engine))
    await db_engine.dispose()


@pytest.fixture
async def engine(store, clock):
    workout_engine = WorkoutEngine(
        store,
        clock=clock,
        rest_timer_tick_seconds=0.01,
        duration_tick_seconds=60.0,
    )
    await workout_engine.startup()
    yield workout_engine
    await workout_engine.shutdown()

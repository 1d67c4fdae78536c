"""Composition root: exactly one instance of each engine component, wired explicitly."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from liftlog.core.catalog import ReferenceCatalog
from liftlog.core.config import Settings
from liftlog.db.store import Store
from liftlog.schemas.context import UserPreferences
from liftlog.services.pr_detection import PersonalRecordDetector
from liftlog.services.progress_analytics import ProgressAnalytics
from liftlog.services.rest_timer import RestTimer
from liftlog.services.session_lifecycle import SessionLifecycleManager
from liftlog.services.set_logger import SetLogger


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WorkoutEngine:
    def __init__(
        self,
        store: Store,
        catalog: ReferenceCatalog | None = None,
        preferences: UserPreferences | None = None,
        clock: Callable[[], datetime] = utc_now,
        rest_timer_tick_seconds: float = 1.0,
        duration_tick_seconds: float = 60.0,
    ):
        self.store = store
        self.catalog = catalog or ReferenceCatalog()
        self.preferences = preferences or UserPreferences()
        self.clock = clock

        self.rest_timer = RestTimer(tick_seconds=rest_timer_tick_seconds)
        self.records = PersonalRecordDetector(store, clock)
        self.lifecycle = SessionLifecycleManager(
            store,
            self.catalog,
            self.records,
            self.rest_timer,
            self.preferences,
            clock,
            duration_tick_seconds=duration_tick_seconds,
        )
        self.sets = SetLogger(self.lifecycle, self.catalog, self.records, self.rest_timer, clock)
        self.analytics = ProgressAnalytics(store, self.catalog, clock)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        session_maker: async_sessionmaker[AsyncSession],
        clock: Callable[[], datetime] = utc_now,
    ) -> WorkoutEngine:
        return cls(
            Store(session_maker),
            preferences=settings.preferences(),
            clock=clock,
            rest_timer_tick_seconds=settings.rest_timer_tick_seconds,
            duration_tick_seconds=settings.duration_tick_seconds,
        )

    async def startup(self) -> None:
        await self.lifecycle.restore_active()

    async def shutdown(self) -> None:
        await self.lifecycle.shutdown()

"""Session lifecycle: the single authoritative owner of the active workout.

At most one session is active (ended_at is None) at any time. Every mutation
persists the whole session once, then swaps the new state in and notifies
observers synchronously, in registration order, with a fresh WorkoutContext.
Mutations are serialized with an asyncio lock so two requests can never
interleave between reading the active session and swapping it.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

from liftlog.core.catalog import ReferenceCatalog
from liftlog.core.constants import DEFAULT_SESSION_NAME
from liftlog.core.enums import WorkoutType
from liftlog.core.exceptions import ConflictError, NotFoundError
from liftlog.db.store import SESSIONS, TEMPLATES, Store
from liftlog.schemas.context import UserPreferences, WorkoutContext
from liftlog.schemas.record import PersonalRecord
from liftlog.schemas.template import WorkoutTemplate
from liftlog.schemas.workout import Session, SessionExercise
from liftlog.services.pr_detection import PersonalRecordDetector
from liftlog.services.rest_timer import RestTimer
from liftlog.services.workout_context import build_context

logger = logging.getLogger(__name__)

SessionObserver = Callable[[WorkoutContext], None]


def session_exercise_from_catalog(
    catalog: ReferenceCatalog,
    exercise_id: str,
    order_index: int,
    strict: bool = False,
) -> SessionExercise | None:
    """New SessionExercise with descriptive fields copied from the catalog.

    Unknown ids return None when strict, else a bare entry named after the id.
    """
    exercise = catalog.get_exercise_by_id(exercise_id)
    if exercise is None:
        if strict:
            return None
        return SessionExercise(exercise_id=exercise_id, exercise_name=exercise_id, order_index=order_index)
    return SessionExercise(
        exercise_id=exercise.id,
        exercise_name=exercise.name,
        category=exercise.category,
        primary_muscles=list(exercise.primary_muscles),
        order_index=order_index,
    )


class SessionLifecycleManager:
    def __init__(
        self,
        store: Store,
        catalog: ReferenceCatalog,
        detector: PersonalRecordDetector,
        rest_timer: RestTimer,
        preferences: UserPreferences,
        clock: Callable[[], datetime],
        duration_tick_seconds: float = 60.0,
    ):
        self._store = store
        self._catalog = catalog
        self._detector = detector
        self._rest_timer = rest_timer
        self._preferences = preferences
        self._clock = clock
        self._duration_tick_seconds = duration_tick_seconds

        self._active: Session | None = None
        self._current_index: int | None = None
        self._last_pr: PersonalRecord | None = None
        self._observers: list[SessionObserver] = []
        self._duration_task: asyncio.Task | None = None
        self._lock = asyncio.Lock()

    # Observers

    def subscribe(self, observer: SessionObserver) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: SessionObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def notify(self) -> None:
        """Push a fresh context to every observer. A failing observer never aborts the others."""
        if not self._observers:
            return
        context = self.context()
        for observer in list(self._observers):
            try:
                observer(context)
            except Exception:
                logger.exception("Session observer %r failed", observer)

    # Read side

    @property
    def preferences(self) -> UserPreferences:
        return self._preferences

    @property
    def has_active(self) -> bool:
        return self._active is not None

    def active_session(self) -> Session | None:
        return self._active.model_copy(deep=True) if self._active else None

    def current_exercise(self) -> SessionExercise | None:
        if self._active is None or self._current_index is None:
            return None
        if self._current_index >= len(self._active.exercises):
            return None
        return self._active.exercises[self._current_index]

    def context(self) -> WorkoutContext:
        return build_context(
            self._active,
            self.current_exercise(),
            self._rest_timer.snapshot(),
            self._preferences,
            self._clock(),
            self._last_pr,
        )

    async def get_session(self, session_id: str) -> Session:
        if self._active is not None and self._active.id == session_id:
            return self._active.model_copy(deep=True)
        session = await self._store.get(SESSIONS, session_id)
        if session is None:
            raise NotFoundError("Session not found")
        return session

    async def list_sessions(self, start: datetime | None = None, end: datetime | None = None) -> list[Session]:
        return await self._store.query_by_range(SESSIONS, "started_at", start, end)

    # Helpers shared with the set logger (callers hold the mutation lock)

    def mutation(self) -> asyncio.Lock:
        return self._lock

    def require_active(self) -> Session:
        if self._active is None:
            raise NotFoundError("No active workout session")
        return self._active

    async def replace_active(self, updated: Session, current_exercise_id: str | None = None) -> None:
        """Persist the new session state, then swap it in. A failed put leaves state untouched."""
        await self._store.put(SESSIONS, updated)
        self._active = updated
        if current_exercise_id is not None:
            for i, ex in enumerate(updated.exercises):
                if ex.exercise_id == current_exercise_id:
                    self._current_index = i
                    break

    def note_personal_records(self, records: list[PersonalRecord]) -> None:
        if records:
            self._last_pr = records[-1]

    # Lifecycle

    async def start_session(
        self,
        template_id: str | None = None,
        name: str | None = None,
        workout_type: WorkoutType | None = None,
    ) -> Session:
        async with self._lock:
            if self._active is not None:
                raise ConflictError("A workout session is already active")

            template: WorkoutTemplate | None = None
            exercises: list[SessionExercise] = []
            if template_id:
                template = await self._resolve_template(template_id)
                for te in sorted(template.exercises, key=lambda t: t.order_index):
                    ex = session_exercise_from_catalog(self._catalog, te.exercise_id, len(exercises), strict=True)
                    if ex is None:
                        logger.warning("Template %s: skipping unknown exercise %s", template_id, te.exercise_id)
                        continue
                    ex.target_sets = te.target_sets
                    ex.target_reps = te.target_reps
                    ex.target_weight = te.target_weight
                    ex.rest_seconds = te.rest_seconds
                    exercises.append(ex)

            now = self._clock()
            session = Session(
                name=name or (template.name if template else DEFAULT_SESSION_NAME),
                workout_type=workout_type or (template.workout_type if template else WorkoutType.STRENGTH),
                created_at=now,
                started_at=now,
                exercises=exercises,
                template_id=template.id if template else None,
            )
            await self._store.put(SESSIONS, session)

            self._active = session
            self._current_index = 0 if exercises else None
            self._last_pr = None
            self._start_duration_tick()
            logger.info("Started session %s (%s, template=%s)", session.id, session.name, session.template_id)
            self.notify()
            return session.model_copy(deep=True)

    async def end_session(self) -> Session:
        async with self._lock:
            session = self.require_active()
            final = session.model_copy(deep=True)
            now = self._clock()
            final.ended_at = now
            final.duration_minutes = round((now - final.started_at).total_seconds() / 60)
            final.total_volume = final.compute_volume()

            records = await self._detector.detect_all(final)
            await self._store.put(SESSIONS, final)

            self._active = None
            self._current_index = None
            self._stop_duration_tick()
            self._rest_timer.stop()
            self.note_personal_records(records)
            logger.info(
                "Ended session %s: %d sets, volume %.1f, %s min, %d new records",
                final.id,
                final.total_sets,
                final.total_volume,
                final.duration_minutes,
                len(records),
            )
            self.notify()
            return final.model_copy(deep=True)

    async def add_exercise(self, exercise_id: str) -> SessionExercise:
        """Explicitly add a catalog exercise (or select it if already present)."""
        async with self._lock:
            session = self.require_active()
            existing = session.find_exercise(exercise_id)
            if existing is not None:
                self._current_index = session.exercises.index(existing)
                self.notify()
                return existing.model_copy(deep=True)

            ex = session_exercise_from_catalog(self._catalog, exercise_id, len(session.exercises), strict=True)
            if ex is None:
                raise NotFoundError(f"Exercise not found: {exercise_id}")
            updated = session.model_copy(deep=True)
            updated.exercises.append(ex)
            await self.replace_active(updated, current_exercise_id=exercise_id)
            self.notify()
            return ex.model_copy(deep=True)

    async def delete_session(self, session_id: str) -> None:
        """Explicit deletion of a stored session. Personal records are kept."""
        async with self._lock:
            if self._active is not None and self._active.id == session_id:
                raise ConflictError("Cannot delete the active session; end it first")
            if not await self._store.delete(SESSIONS, session_id):
                raise NotFoundError("Session not found")
            logger.info("Deleted session %s", session_id)

    async def restore_active(self) -> Session | None:
        """Reload a session left open by a previous process so the invariant survives restarts."""
        async with self._lock:
            if self._active is not None:
                return self._active.model_copy(deep=True)
            open_sessions = await self._store.find(SESSIONS, ended_at=None)
            if not open_sessions:
                return None
            open_sessions.sort(key=lambda s: s.started_at)
            if len(open_sessions) > 1:
                logger.warning("Found %d open sessions; restoring the latest", len(open_sessions))
            session = open_sessions[-1]
            self._active = session
            self._current_index = None
            for i, ex in enumerate(session.exercises):
                if ex.sets:
                    self._current_index = i
            if self._current_index is None and session.exercises:
                self._current_index = 0
            self._start_duration_tick()
            logger.info("Restored active session %s", session.id)
            return session.model_copy(deep=True)

    # Navigation (moves the current-exercise pointer only)

    def next_exercise(self) -> SessionExercise | None:
        session = self.require_active()
        index = -1 if self._current_index is None else self._current_index
        self._current_index = min(index + 1, len(session.exercises))
        self.notify()
        current = self.current_exercise()
        return current.model_copy(deep=True) if current else None

    def previous_exercise(self) -> SessionExercise | None:
        self.require_active()
        self._current_index = max(0, (self._current_index or 0) - 1)
        self.notify()
        current = self.current_exercise()
        return current.model_copy(deep=True) if current else None

    def go_to_exercise(self, index: int) -> SessionExercise:
        session = self.require_active()
        if not 0 <= index < len(session.exercises):
            raise NotFoundError(f"No exercise at position {index}")
        self._current_index = index
        self.notify()
        return session.exercises[index].model_copy(deep=True)

    async def shutdown(self) -> None:
        """Stop background ticks. The active session stays persisted as open."""
        self._stop_duration_tick()
        self._rest_timer.stop()

    # Internals

    async def _resolve_template(self, template_id: str) -> WorkoutTemplate:
        template = self._catalog.get_template_by_id(template_id)
        if template is None:
            template = await self._store.get(TEMPLATES, template_id)
        if template is None:
            raise NotFoundError(f"Template not found: {template_id}")
        return template

    def _start_duration_tick(self) -> None:
        self._stop_duration_tick()
        self._duration_task = asyncio.get_running_loop().create_task(self._duration_tick())

    def _stop_duration_tick(self) -> None:
        task, self._duration_task = self._duration_task, None
        if task is not None and not task.done():
            task.cancel()

    async def _duration_tick(self) -> None:
        # Cosmetic refresh only; the authoritative duration is computed at end_session.
        while self._active is not None:
            await asyncio.sleep(self._duration_tick_seconds)
            if self._active is None:
                return
            self.notify()

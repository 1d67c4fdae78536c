"""PR detection: append a record when a set beats the all-time best for that exercise.

Three record types are tracked independently per exercise:
- max_weight: heaviest set across history
- max_reps: most reps in one set across history, at any weight
- max_volume: best single-session weight × reps for the exercise (not the
  whole-session volume, which is not a tracked record)

Ties never create a record (strict >). Rows are append-only; the current best
is always resolved by query.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from liftlog.core.enums import PRType
from liftlog.db.store import PERSONAL_RECORDS, SESSIONS, Store
from liftlog.schemas.record import PersonalRecord
from liftlog.schemas.workout import Session

logger = logging.getLogger(__name__)


def candidate_values(sessions: list[Session], exercise_id: str) -> dict[PRType, float] | None:
    """Best weight / reps / single-session volume for the exercise, or None if it was never logged."""
    max_weight: float | None = None
    max_reps: int | None = None
    max_volume: float | None = None
    for session in sessions:
        ex = session.find_exercise(exercise_id)
        if ex is None or not ex.sets:
            continue
        for s in ex.sets:
            max_weight = s.weight if max_weight is None else max(max_weight, s.weight)
            max_reps = s.reps if max_reps is None else max(max_reps, s.reps)
        volume = ex.volume
        max_volume = volume if max_volume is None else max(max_volume, volume)
    if max_weight is None:
        return None
    return {
        PRType.MAX_WEIGHT: float(max_weight),
        PRType.MAX_REPS: float(max_reps),
        PRType.MAX_VOLUME: float(max_volume),
    }


def best_of(records: list[PersonalRecord]) -> PersonalRecord | None:
    """Highest value; the most recent row wins a tie."""
    if not records:
        return None
    return max(records, key=lambda r: (r.value, r.achieved_at))


class PersonalRecordDetector:
    def __init__(self, store: Store, clock: Callable[[], datetime]):
        self._store = store
        self._clock = clock

    async def _history(self, session: Session) -> list[Session]:
        # The in-memory session replaces its stored copy, which may lag behind.
        stored = await self._store.query_by_range(SESSIONS, "started_at")
        return [s for s in stored if s.id != session.id] + [session]

    async def current_best(self, exercise_id: str, record_type: PRType) -> PersonalRecord | None:
        rows = await self._store.find(PERSONAL_RECORDS, exercise_id=exercise_id, record_type=record_type)
        return best_of(rows)

    async def records(
        self,
        exercise_id: str | None = None,
        record_type: PRType | None = None,
    ) -> list[PersonalRecord]:
        """Full record history, oldest first."""
        filters = {}
        if exercise_id is not None:
            filters["exercise_id"] = exercise_id
        if record_type is not None:
            filters["record_type"] = record_type
        rows = await self._store.find(PERSONAL_RECORDS, **filters)
        return sorted(rows, key=lambda r: (r.achieved_at, r.id))

    async def detect(
        self,
        session: Session,
        exercise_id: str,
        history: list[Session] | None = None,
    ) -> list[PersonalRecord]:
        """Compare history-wide bests for one exercise with stored records; append new bests."""
        if history is None:
            history = await self._history(session)
        candidates = candidate_values(history, exercise_id)
        if candidates is None:
            return []
        created: list[PersonalRecord] = []
        for record_type, value in candidates.items():
            best = await self.current_best(exercise_id, record_type)
            if best is not None and not value > best.value:
                continue
            record = PersonalRecord(
                exercise_id=exercise_id,
                record_type=record_type,
                value=value,
                achieved_at=self._clock(),
                session_id=session.id,
            )
            await self._store.put(PERSONAL_RECORDS, record)
            created.append(record)
            logger.info(
                "New %s record for %s: %s (previous %s)",
                record_type.value,
                exercise_id,
                value,
                best.value if best else None,
            )
        return created

    async def detect_all(self, session: Session) -> list[PersonalRecord]:
        """Catch-up pass over every exercise in the session."""
        history = await self._history(session)
        created: list[PersonalRecord] = []
        for ex in session.exercises:
            if ex.sets:
                created.extend(await self.detect(session, ex.exercise_id, history))
        return created

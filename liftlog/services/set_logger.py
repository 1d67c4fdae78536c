"""Set logging against the active session.

Order of one logged set: append -> recompute volume -> persist -> detect
records -> maybe start the rest timer -> notify. The new session state is
built on a copy and only swapped in after the put succeeds.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from liftlog.core.catalog import ReferenceCatalog
from liftlog.core.constants import MAX_DIFFICULTY, MAX_EXERCISE_ID_LENGTH, MIN_DIFFICULTY
from liftlog.core.exceptions import ValidationError
from liftlog.schemas.exercise import Exercise
from liftlog.schemas.workout import SetRecord, VoiceSetLog
from liftlog.services.pr_detection import PersonalRecordDetector
from liftlog.services.rest_timer import RestTimer
from liftlog.services.session_lifecycle import SessionLifecycleManager, session_exercise_from_catalog

logger = logging.getLogger(__name__)


def _validate(exercise_id, reps, weight, difficulty) -> None:
    if not isinstance(exercise_id, str) or not exercise_id.strip():
        raise ValidationError("exercise_id must be a non-empty string")
    if len(exercise_id) > MAX_EXERCISE_ID_LENGTH:
        raise ValidationError(f"exercise_id must be at most {MAX_EXERCISE_ID_LENGTH} characters")
    if isinstance(reps, bool) or not isinstance(reps, int) or reps <= 0:
        raise ValidationError("reps must be a positive integer")
    if isinstance(weight, bool) or not isinstance(weight, (int, float)) or weight < 0:
        raise ValidationError("weight must be a non-negative number")
    if difficulty is not None and not MIN_DIFFICULTY <= difficulty <= MAX_DIFFICULTY:
        raise ValidationError(f"difficulty must be between {MIN_DIFFICULTY} and {MAX_DIFFICULTY}")


class SetLogger:
    def __init__(
        self,
        lifecycle: SessionLifecycleManager,
        catalog: ReferenceCatalog,
        detector: PersonalRecordDetector,
        rest_timer: RestTimer,
        clock: Callable[[], datetime],
    ):
        self._lifecycle = lifecycle
        self._catalog = catalog
        self._detector = detector
        self._rest_timer = rest_timer
        self._clock = clock

    async def log_set(
        self,
        exercise_id: str,
        reps: int,
        weight: float,
        notes: str | None = None,
        difficulty: int | None = None,
        rest_seconds: int | None = None,
    ) -> SetRecord:
        async with self._lifecycle.mutation():
            session = self._lifecycle.require_active()
            _validate(exercise_id, reps, weight, difficulty)

            now = self._clock()
            if rest_seconds is None:
                previous = session.last_set()
                if previous is not None:
                    rest_seconds = max(0, int((now - previous.completed_at).total_seconds()))

            updated = session.model_copy(deep=True)
            exercise = updated.find_exercise(exercise_id)
            if exercise is None:
                exercise = session_exercise_from_catalog(self._catalog, exercise_id, len(updated.exercises))
                updated.exercises.append(exercise)

            record = SetRecord(
                reps=reps,
                weight=float(weight),
                notes=notes,
                difficulty=difficulty,
                completed_at=now,
                rest_seconds=rest_seconds,
            )
            exercise.sets.append(record)
            updated.total_volume = updated.compute_volume()

            await self._lifecycle.replace_active(updated, current_exercise_id=exercise_id)

            records = await self._detector.detect(updated, exercise_id)
            self._lifecycle.note_personal_records(records)

            prefs = self._lifecycle.preferences
            if prefs.auto_start_rest_timer:
                self._rest_timer.start(exercise.rest_seconds or prefs.default_rest_time_seconds)

            logger.debug("Logged %s x %s on %s (session volume %.1f)", weight, reps, exercise_id, updated.total_volume)
            self._lifecycle.notify()
            return record

    async def process_structured_voice_log(
        self,
        parsed_exercise: str | Exercise | None,
        reps: int | None,
        weight: float | None,
    ) -> SetRecord:
        """Log a set from the voice parser's structured output. Unresolved fields are rejected."""
        exercise_id = parsed_exercise.id if isinstance(parsed_exercise, Exercise) else parsed_exercise
        missing = [
            name
            for name, value in (("exercise", exercise_id), ("reps", reps), ("weight", weight))
            if value is None or value == ""
        ]
        if missing:
            raise ValidationError(f"Voice log is missing: {', '.join(missing)}")
        return await self.log_set(exercise_id, reps, weight)

    async def log_voice_payload(self, payload: VoiceSetLog) -> SetRecord:
        return await self.process_structured_voice_log(payload.exercise_id, payload.reps, payload.weight)

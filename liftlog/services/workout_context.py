"""WorkoutContext snapshot: a thin projection of session, exercise and timer state."""

from __future__ import annotations

from datetime import datetime

from liftlog.core.enums import TimerState
from liftlog.schemas.context import UserPreferences, WorkoutContext
from liftlog.schemas.record import PersonalRecord
from liftlog.schemas.timer import TimerSnapshot
from liftlog.schemas.workout import Session, SessionExercise


def build_context(
    session: Session | None,
    current_exercise: SessionExercise | None,
    timer: TimerSnapshot,
    preferences: UserPreferences,
    now: datetime,
    last_personal_record: PersonalRecord | None = None,
) -> WorkoutContext:
    """Deep-copied, point-in-time context. Consumers never see live engine state."""
    duration = 0
    if session is not None:
        duration = max(0, int((now - session.started_at).total_seconds()))
    return WorkoutContext(
        active_workout=session.model_copy(deep=True) if session else None,
        current_exercise=current_exercise.model_copy(deep=True) if current_exercise else None,
        current_set=len(current_exercise.sets) if current_exercise else 0,
        total_sets=session.total_sets if session else 0,
        is_recording=session is not None,
        is_resting=timer.state is TimerState.RUNNING,
        rest_time_remaining=timer.remaining_seconds,
        workout_duration_seconds=duration,
        last_personal_record=last_personal_record,
        user_preferences=preferences,
    )

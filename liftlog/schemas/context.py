"""User preferences and the read-only WorkoutContext snapshot."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from liftlog.schemas.record import PersonalRecord
from liftlog.schemas.workout import Session, SessionExercise


class UserPreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    default_rest_time_seconds: int = Field(90, gt=0)
    weight_unit: Literal["lbs", "kg"] = "lbs"
    auto_start_rest_timer: bool = True
    # Display-only, passed through to consumers
    show_personal_records: bool = True
    enable_voice_commands: bool = True
    track_rpe: bool = True
    rounding_preference: Literal["exact", "nearest_2_5", "nearest_5"] = "nearest_2_5"


class WorkoutContext(BaseModel):
    """Point-in-time copy of session/exercise/timer state for UI, voice and coaching consumers."""

    model_config = ConfigDict(frozen=True)

    active_workout: Session | None = None
    current_exercise: SessionExercise | None = None
    current_set: int = 0  # sets logged on the current exercise
    total_sets: int = 0
    is_recording: bool = False
    is_resting: bool = False
    rest_time_remaining: int = 0
    workout_duration_seconds: int = 0
    last_personal_record: PersonalRecord | None = None
    user_preferences: UserPreferences

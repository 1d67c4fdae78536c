"""Session, SessionExercise and SetRecord schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from liftlog.core.constants import MAX_EXERCISE_ID_LENGTH
from liftlog.core.enums import ExerciseCategory, MuscleGroup, WorkoutType


def new_id() -> str:
    return uuid.uuid4().hex


class SetRecord(BaseModel):
    """One completed set. Immutable: corrections append a new record."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str = Field(default_factory=new_id)
    reps: int = Field(..., gt=0)
    weight: float = Field(..., ge=0)
    notes: str | None = None
    difficulty: int | None = Field(None, ge=1, le=5)  # RPE-style 1-5
    completed_at: datetime
    rest_seconds: int | None = Field(None, ge=0)  # observed rest before this set

    @property
    def volume(self) -> float:
        return self.weight * self.reps


class SessionExercise(BaseModel):
    """One exercise's activity within a session. Descriptive fields are copied from the catalog."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=new_id)
    exercise_id: str
    exercise_name: str
    category: ExerciseCategory | None = None
    primary_muscles: list[MuscleGroup] = []
    sets: list[SetRecord] = []
    target_sets: int | None = None
    target_reps: int | None = None
    target_weight: float | None = None
    rest_seconds: int | None = None
    order_index: int = 0

    @property
    def volume(self) -> float:
        return sum(s.volume for s in self.sets)


class Session(BaseModel):
    """A workout session. Active while ended_at is None."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=new_id)
    name: str
    workout_type: WorkoutType = WorkoutType.STRENGTH
    created_at: datetime
    started_at: datetime
    ended_at: datetime | None = None
    exercises: list[SessionExercise] = []
    total_volume: float = 0.0
    duration_minutes: int | None = None
    template_id: str | None = None
    notes: str | None = None

    @property
    def is_active(self) -> bool:
        return self.ended_at is None

    @property
    def total_sets(self) -> int:
        return sum(len(ex.sets) for ex in self.exercises)

    @property
    def total_reps(self) -> int:
        return sum(s.reps for ex in self.exercises for s in ex.sets)

    def find_exercise(self, exercise_id: str) -> SessionExercise | None:
        for ex in self.exercises:
            if ex.exercise_id == exercise_id:
                return ex
        return None

    def compute_volume(self) -> float:
        """Full recomputation: sum of weight × reps over every set of every exercise."""
        return sum(ex.volume for ex in self.exercises)

    def last_set(self) -> SetRecord | None:
        latest: SetRecord | None = None
        for ex in self.exercises:
            for s in ex.sets:
                if latest is None or s.completed_at >= latest.completed_at:
                    latest = s
        return latest


# Request payloads


class SessionStart(BaseModel):
    template_id: str | None = None
    name: str | None = Field(None, min_length=1, max_length=255)
    workout_type: WorkoutType | None = None  # defaults to the template type, else strength


class SetLogCreate(BaseModel):
    exercise_id: str = Field(..., min_length=1, max_length=MAX_EXERCISE_ID_LENGTH)
    reps: int = Field(..., gt=0)
    weight: float = Field(..., ge=0)
    notes: str | None = Field(None, max_length=500)
    difficulty: int | None = Field(None, ge=1, le=5)
    rest_seconds: int | None = Field(None, ge=0)


class VoiceSetLog(BaseModel):
    """Structured output of the external voice/NLP parser. Fields may be unresolved (None)."""

    exercise_id: str | None = Field(None, max_length=MAX_EXERCISE_ID_LENGTH)
    reps: int | None = None
    weight: float | None = None


class ExerciseAdd(BaseModel):
    exercise_id: str = Field(..., min_length=1, max_length=MAX_EXERCISE_ID_LENGTH)


class ExerciseSelect(BaseModel):
    index: int = Field(..., ge=0)


class SessionSummary(BaseModel):
    """List view of a session (no sets)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    workout_type: WorkoutType
    started_at: datetime
    ended_at: datetime | None = None
    total_volume: float = 0.0
    duration_minutes: int | None = None
    template_id: str | None = None

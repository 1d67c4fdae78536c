"""Workout template schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from liftlog.core.enums import WorkoutType
from liftlog.schemas.workout import new_id


class TemplateExercise(BaseModel):
    exercise_id: str
    target_sets: int | None = Field(None, gt=0)
    target_reps: int | None = Field(None, gt=0)
    target_weight: float | None = Field(None, ge=0)
    rest_seconds: int | None = Field(None, ge=0)
    order_index: int = 0


class WorkoutTemplate(BaseModel):
    """Saved workout structure. Prebuilt ones live in the catalog, custom ones in the store."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    workout_type: WorkoutType = WorkoutType.STRENGTH
    exercises: list[TemplateExercise] = []
    estimated_duration_minutes: int | None = None
    difficulty: int = Field(3, ge=1, le=5)
    tags: list[str] = []
    is_custom: bool = True
    created_at: datetime


class WorkoutTemplateCreateFromSession(BaseModel):
    """Create a template from a finished session (session_id + name)."""

    name: str = Field(..., min_length=1, max_length=255)
    session_id: str

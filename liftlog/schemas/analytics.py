"""Progress analytics schemas (computed, never persisted)."""

from datetime import date, datetime

from pydantic import BaseModel

from liftlog.core.enums import OneRMFormula


class StrengthProgress(BaseModel):
    exercise_id: str
    exercise_name: str
    current: float
    previous: float | None = None
    change: float = 0.0
    improvement_percent: float = 0.0
    achieved_at: datetime


class VolumePoint(BaseModel):
    session_id: str
    date: datetime
    total_volume: float
    per_exercise_volume: dict[str, float]


class FrequencyMetrics(BaseModel):
    workouts_per_week: int
    average_session_duration: float  # minutes
    consistency: float  # [0, 100]


class PerformanceMetrics(BaseModel):
    average_rest_time: float  # seconds
    set_completion_rate: float  # percent, may exceed 100
    completed_sets: int
    planned_sets: int


class ProgressMetrics(BaseModel):
    strength_progress: list[StrengthProgress]
    volume_progress: list[VolumePoint]
    frequency: FrequencyMetrics
    performance: PerformanceMetrics


class OneRMPoint(BaseModel):
    date: datetime
    weight: float
    reps: int
    estimated_1rm: float


class OneRMProgression(BaseModel):
    exercise_id: str
    formula: OneRMFormula
    points: list[OneRMPoint]


class StreakStats(BaseModel):
    current_streak: int
    longest_streak: int
    last_workout_date: date | None = None


class WorkoutStats(BaseModel):
    days: int
    total_workouts: int
    total_duration_minutes: int
    total_sets: int
    total_reps: int
    total_volume: float
    average_workout_duration: float

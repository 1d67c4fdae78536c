"""Workout template - save and reload workout structure."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, Enum, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from liftlog.core.enums import WorkoutType
from liftlog.db.base import Base, UTCDateTime


class WorkoutTemplateRow(Base):
    """Custom template (name + ordered exercises with targets). Prebuilt ones live in the catalog."""

    __tablename__ = "workout_templates"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    workout_type: Mapped[WorkoutType] = mapped_column(
        Enum(WorkoutType), default=WorkoutType.STRENGTH, nullable=False
    )
    # [{"exercise_id": "squat", "target_sets": 4, "target_reps": 5, "rest_seconds": 180, "order_index": 0}]
    exercises: Mapped[list] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), default=list, nullable=False
    )
    estimated_duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    difficulty: Mapped[int] = mapped_column(Integer, default=3, nullable=False)
    tags: Mapped[list] = mapped_column(JSON().with_variant(JSONB(), "postgresql"), default=list, nullable=False)
    is_custom: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

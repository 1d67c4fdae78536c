"""Workout session row. Exercises and sets are stored as one JSON document per session."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Enum, Float, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from liftlog.core.enums import WorkoutType
from liftlog.db.base import Base, UTCDateTime


class WorkoutSessionRow(Base):
    """A single workout session. ended_at is NULL while the session is active.

    exercises: [{"exercise_id": "bench-press", "sets": [{"reps": 8, "weight": 135, ...}], ...}]
    Written whole on every put so a session is never partially persisted.
    """

    __tablename__ = "sessions"
    __table_args__ = (
        Index("ix_sessions_started_at", "started_at"),
        Index("ix_sessions_ended_at", "ended_at"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    workout_type: Mapped[WorkoutType] = mapped_column(
        Enum(WorkoutType), default=WorkoutType.STRENGTH, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    started_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    ended_at: Mapped[datetime | None] = mapped_column(UTCDateTime, nullable=True)
    duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)  # set on end
    total_volume: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    template_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    exercises: Mapped[list] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), default=list, nullable=False
    )

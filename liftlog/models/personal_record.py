"""Personal record rows (append-only)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Enum, Float, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from liftlog.core.constants import MAX_EXERCISE_ID_LENGTH
from liftlog.core.enums import PRType
from liftlog.db.base import Base, UTCDateTime


class PersonalRecordRow(Base):
    """One qualifying record. Prior rows are never updated or deleted."""

    __tablename__ = "personal_records"
    __table_args__ = (
        Index("ix_personal_records_exercise_type", "exercise_id", "record_type"),
        Index("ix_personal_records_achieved_at", "achieved_at"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    exercise_id: Mapped[str] = mapped_column(String(MAX_EXERCISE_ID_LENGTH), nullable=False)
    record_type: Mapped[PRType] = mapped_column(Enum(PRType), nullable=False)  # max_weight, max_reps, max_volume
    value: Mapped[float] = mapped_column(Float, nullable=False)
    achieved_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    session_id: Mapped[str] = mapped_column(String(32), nullable=False, index=True)

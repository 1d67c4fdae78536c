"""Initial schema: sessions, personal_records, workout_templates.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

workout_type = sa.Enum("STRENGTH", "CARDIO", "HYBRID", "FLEXIBILITY", "SPORTS", name="workouttype")
pr_type = sa.Enum("MAX_WEIGHT", "MAX_REPS", "MAX_VOLUME", name="prtype")


def _json() -> sa.types.TypeEngine:
    return sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "sessions",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("workout_type", workout_type, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ended_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("duration_minutes", sa.Integer(), nullable=True),
        sa.Column("total_volume", sa.Float(), nullable=False),
        sa.Column("template_id", sa.String(length=64), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("exercises", _json(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_sessions_started_at", "sessions", ["started_at"], unique=False)
    op.create_index("ix_sessions_ended_at", "sessions", ["ended_at"], unique=False)

    op.create_table(
        "personal_records",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("exercise_id", sa.String(length=64), nullable=False),
        sa.Column("record_type", pr_type, nullable=False),
        sa.Column("value", sa.Float(), nullable=False),
        sa.Column("achieved_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("session_id", sa.String(length=32), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_personal_records_exercise_type",
        "personal_records",
        ["exercise_id", "record_type"],
        unique=False,
    )
    op.create_index("ix_personal_records_achieved_at", "personal_records", ["achieved_at"], unique=False)
    op.create_index(op.f("ix_personal_records_session_id"), "personal_records", ["session_id"], unique=False)

    op.create_table(
        "workout_templates",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("workout_type", workout_type, nullable=False),
        sa.Column("exercises", _json(), nullable=False),
        sa.Column("estimated_duration_minutes", sa.Integer(), nullable=True),
        sa.Column("difficulty", sa.Integer(), nullable=False),
        sa.Column("tags", _json(), nullable=False),
        sa.Column("is_custom", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_workout_templates_name"), "workout_templates", ["name"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_workout_templates_name"), table_name="workout_templates")
    op.drop_table("workout_templates")
    op.drop_index(op.f("ix_personal_records_session_id"), table_name="personal_records")
    op.drop_index("ix_personal_records_achieved_at", table_name="personal_records")
    op.drop_index("ix_personal_records_exercise_type", table_name="personal_records")
    op.drop_table("personal_records")
    op.drop_index("ix_sessions_ended_at", table_name="sessions")
    op.drop_index("ix_sessions_started_at", table_name="sessions")
    op.drop_table("sessions")
    pr_type.drop(op.get_bind(), checkfirst=True)
    workout_type.drop(op.get_bind(), checkfirst=True)

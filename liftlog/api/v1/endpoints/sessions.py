"""Live session endpoints: start/end, log sets, navigate exercises, context snapshot."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends

from liftlog.api.deps import get_engine
from liftlog.schemas.context import WorkoutContext
from liftlog.schemas.workout import (
    ExerciseAdd,
    ExerciseSelect,
    Session,
    SessionExercise,
    SessionStart,
    SessionSummary,
    SetLogCreate,
    SetRecord,
    VoiceSetLog,
)
from liftlog.services.engine import WorkoutEngine

router = APIRouter()


@router.post("", response_model=Session, status_code=201)
async def start_session(
    payload: SessionStart,
    engine: WorkoutEngine = Depends(get_engine),
):
    """Start a session, optionally expanded from a template. 409 if one is already active."""
    return await engine.lifecycle.start_session(
        template_id=payload.template_id,
        name=payload.name,
        workout_type=payload.workout_type,
    )


@router.get("", response_model=list[SessionSummary])
async def list_sessions(
    engine: WorkoutEngine = Depends(get_engine),
    from_date: datetime | None = None,
    to_date: datetime | None = None,
):
    """List sessions (without sets) by start time, optionally filtered by date range."""
    sessions = await engine.lifecycle.list_sessions(from_date, to_date)
    return [SessionSummary.model_validate(s, from_attributes=True) for s in sessions]


@router.get("/active", response_model=Session | None)
async def get_active_session(engine: WorkoutEngine = Depends(get_engine)):
    return engine.lifecycle.active_session()


@router.get("/context", response_model=WorkoutContext)
async def get_context(engine: WorkoutEngine = Depends(get_engine)):
    """Point-in-time snapshot for voice and coaching consumers."""
    return engine.lifecycle.context()


@router.post("/active/end", response_model=Session)
async def end_session(engine: WorkoutEngine = Depends(get_engine)):
    """Finalize the active session: duration, volume, record catch-up. 404 if none is active."""
    return await engine.lifecycle.end_session()


@router.post("/active/sets", response_model=SetRecord, status_code=201)
async def log_set(
    payload: SetLogCreate,
    engine: WorkoutEngine = Depends(get_engine),
):
    """Log a completed set. Auto-detects records and starts the rest timer per preferences."""
    return await engine.sets.log_set(
        payload.exercise_id,
        payload.reps,
        payload.weight,
        notes=payload.notes,
        difficulty=payload.difficulty,
        rest_seconds=payload.rest_seconds,
    )


@router.post("/active/voice", response_model=SetRecord, status_code=201)
async def log_voice_set(
    payload: VoiceSetLog,
    engine: WorkoutEngine = Depends(get_engine),
):
    """Log a set from structured voice-parser output. 422 if any field is unresolved."""
    return await engine.sets.log_voice_payload(payload)


@router.post("/active/exercises", response_model=SessionExercise, status_code=201)
async def add_exercise(
    payload: ExerciseAdd,
    engine: WorkoutEngine = Depends(get_engine),
):
    return await engine.lifecycle.add_exercise(payload.exercise_id)


@router.post("/active/next", response_model=SessionExercise | None)
async def next_exercise(engine: WorkoutEngine = Depends(get_engine)):
    return engine.lifecycle.next_exercise()


@router.post("/active/previous", response_model=SessionExercise | None)
async def previous_exercise(engine: WorkoutEngine = Depends(get_engine)):
    return engine.lifecycle.previous_exercise()


@router.post("/active/select", response_model=SessionExercise)
async def select_exercise(
    payload: ExerciseSelect,
    engine: WorkoutEngine = Depends(get_engine),
):
    return engine.lifecycle.go_to_exercise(payload.index)


@router.get("/{session_id}", response_model=Session)
async def get_session(
    session_id: str,
    engine: WorkoutEngine = Depends(get_engine),
):
    """Get a session with all exercises and sets."""
    return await engine.lifecycle.get_session(session_id)


@router.delete("/{session_id}", status_code=204)
async def delete_session(
    session_id: str,
    engine: WorkoutEngine = Depends(get_engine),
):
    """Delete a finished session. Personal records it produced are kept."""
    await engine.lifecycle.delete_session(session_id)
    return None

"""Workout templates: prebuilt (catalog) and custom (saved from a session)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from liftlog.api.deps import get_engine
from liftlog.db.store import TEMPLATES
from liftlog.schemas.template import TemplateExercise, WorkoutTemplate, WorkoutTemplateCreateFromSession
from liftlog.services.engine import WorkoutEngine

router = APIRouter()


@router.get("", response_model=list[WorkoutTemplate])
async def list_templates(engine: WorkoutEngine = Depends(get_engine)):
    """Prebuilt templates first, then custom ones (newest first)."""
    custom = await engine.store.query_by_range(TEMPLATES, "created_at")
    return engine.catalog.get_templates() + list(reversed(custom))


@router.post("/from-session", response_model=WorkoutTemplate, status_code=201)
async def create_template_from_session(
    payload: WorkoutTemplateCreateFromSession,
    engine: WorkoutEngine = Depends(get_engine),
):
    """Save a session as a template (exercise order preserved, targets taken from what was done)."""
    session = await engine.lifecycle.get_session(payload.session_id)
    exercises = []
    for ex in sorted(session.exercises, key=lambda e: e.order_index):
        if not ex.sets:
            continue
        exercises.append(
            TemplateExercise(
                exercise_id=ex.exercise_id,
                target_sets=len(ex.sets),
                target_reps=ex.sets[-1].reps,
                target_weight=max(s.weight for s in ex.sets),
                rest_seconds=ex.rest_seconds,
                order_index=len(exercises),
            )
        )
    template = WorkoutTemplate(
        name=payload.name,
        workout_type=session.workout_type,
        exercises=exercises,
        estimated_duration_minutes=session.duration_minutes,
        is_custom=True,
        created_at=engine.clock(),
    )
    await engine.store.put(TEMPLATES, template)
    return template


@router.get("/{template_id}", response_model=WorkoutTemplate)
async def get_template(
    template_id: str,
    engine: WorkoutEngine = Depends(get_engine),
):
    """Get a template with its exercises."""
    template = engine.catalog.get_template_by_id(template_id)
    if template is None:
        template = await engine.store.get(TEMPLATES, template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return template

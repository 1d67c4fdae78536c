"""Reference catalog lookups."""

from fastapi import APIRouter, Depends, HTTPException

from liftlog.api.deps import get_engine
from liftlog.core.enums import EquipmentType, ExerciseCategory, MuscleGroup
from liftlog.schemas.exercise import Exercise
from liftlog.services.engine import WorkoutEngine

router = APIRouter()


@router.get("", response_model=list[Exercise])
async def list_exercises(
    q: str | None = None,
    category: ExerciseCategory | None = None,
    muscle_group: MuscleGroup | None = None,
    equipment: EquipmentType | None = None,
    engine: WorkoutEngine = Depends(get_engine),
):
    """List catalog exercises, optionally filtered by search term, category, muscle or equipment."""
    catalog = engine.catalog
    exercises = catalog.search_exercises(q) if q else catalog.list_exercises()
    if category is not None:
        exercises = [e for e in exercises if e.category == category]
    if muscle_group is not None:
        ids = {e.id for e in catalog.get_exercises_by_muscle_group(muscle_group)}
        exercises = [e for e in exercises if e.id in ids]
    if equipment is not None:
        exercises = [e for e in exercises if equipment in e.equipment]
    return sorted(exercises, key=lambda e: e.name)


@router.get("/{exercise_id}", response_model=Exercise)
async def get_exercise(
    exercise_id: str,
    engine: WorkoutEngine = Depends(get_engine),
):
    exercise = engine.catalog.get_exercise_by_id(exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise

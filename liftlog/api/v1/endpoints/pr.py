"""Personal record history and current bests."""

from fastapi import APIRouter, Depends

from liftlog.api.deps import get_engine
from liftlog.core.enums import PRType
from liftlog.schemas.record import PersonalRecord
from liftlog.services.engine import WorkoutEngine

router = APIRouter()


@router.get("", response_model=list[PersonalRecord])
async def list_records(
    exercise_id: str | None = None,
    record_type: PRType | None = None,
    engine: WorkoutEngine = Depends(get_engine),
):
    """Append-only record history, oldest first."""
    return await engine.records.records(exercise_id=exercise_id, record_type=record_type)


@router.get("/current/{exercise_id}", response_model=dict[PRType, PersonalRecord | None])
async def current_records(
    exercise_id: str,
    engine: WorkoutEngine = Depends(get_engine),
):
    """Current best per record type for one exercise (null where none exists yet)."""
    return {t: await engine.records.current_best(exercise_id, t) for t in PRType}

"""Rest timer endpoints."""

from fastapi import APIRouter, Depends

from liftlog.api.deps import get_engine
from liftlog.schemas.timer import TimerSnapshot, TimerStart
from liftlog.services.engine import WorkoutEngine

router = APIRouter()


@router.get("", response_model=TimerSnapshot)
async def get_timer(engine: WorkoutEngine = Depends(get_engine)):
    return engine.rest_timer.snapshot()


@router.post("/start", response_model=TimerSnapshot)
async def start_timer(
    payload: TimerStart,
    engine: WorkoutEngine = Depends(get_engine),
):
    """(Re)start the countdown. Defaults to the preferred rest time."""
    seconds = payload.seconds or engine.preferences.default_rest_time_seconds
    return engine.rest_timer.start(seconds)


@router.post("/stop", response_model=TimerSnapshot)
async def stop_timer(engine: WorkoutEngine = Depends(get_engine)):
    return engine.rest_timer.stop()

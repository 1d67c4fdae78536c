"""Progress analytics: strength, volume, frequency, performance, 1RM, streaks."""

from fastapi import APIRouter, Depends, Query

from liftlog.api.deps import get_engine
from liftlog.core.constants import STATS_WINDOW_DAYS
from liftlog.core.enums import OneRMFormula
from liftlog.schemas.analytics import (
    FrequencyMetrics,
    OneRMProgression,
    PerformanceMetrics,
    ProgressMetrics,
    StreakStats,
    StrengthProgress,
    VolumePoint,
    WorkoutStats,
)
from liftlog.services.engine import WorkoutEngine

router = APIRouter()


@router.get("/progress", response_model=ProgressMetrics)
async def progress(engine: WorkoutEngine = Depends(get_engine)):
    """Full progress snapshot, recomputed on every request."""
    return await engine.analytics.progress_metrics()


@router.get("/strength", response_model=list[StrengthProgress])
async def strength(engine: WorkoutEngine = Depends(get_engine)):
    return await engine.analytics.strength_progress()


@router.get("/volume", response_model=list[VolumePoint])
async def volume(engine: WorkoutEngine = Depends(get_engine)):
    return await engine.analytics.volume_progress()


@router.get("/frequency", response_model=FrequencyMetrics)
async def frequency(engine: WorkoutEngine = Depends(get_engine)):
    return await engine.analytics.frequency_metrics()


@router.get("/performance", response_model=PerformanceMetrics)
async def performance(engine: WorkoutEngine = Depends(get_engine)):
    return await engine.analytics.performance_metrics()


@router.get("/streak", response_model=StreakStats)
async def streak(engine: WorkoutEngine = Depends(get_engine)):
    """Current workout streak (consecutive days), longest streak and last workout date."""
    return await engine.analytics.streaks()


@router.get("/stats", response_model=WorkoutStats)
async def stats(
    days: int = Query(STATS_WINDOW_DAYS, ge=1, le=3650),
    engine: WorkoutEngine = Depends(get_engine),
):
    return await engine.analytics.workout_stats(days)


@router.get("/one-rm/{exercise_id}", response_model=OneRMProgression)
async def one_rm_prediction(
    exercise_id: str,
    formula: OneRMFormula = OneRMFormula.BRZYCKI,
    engine: WorkoutEngine = Depends(get_engine),
):
    """Estimated 1-Rep Max over time for an exercise. formula: brzycki | epley."""
    return await engine.analytics.one_rep_max_progression(exercise_id, formula)

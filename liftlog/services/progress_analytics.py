"""Progress analytics: strength, volume, frequency, performance, 1RM, streaks.

Read-only and recomputed on every call over all stored sessions and records;
this is a personal dataset of modest size, so everything is aggregated in
memory.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from datetime import date, datetime, timedelta
from math import sqrt
from statistics import fmean, pvariance

from liftlog.core.catalog import ReferenceCatalog
from liftlog.core.constants import (
    CONSISTENCY_MAX,
    CONSISTENCY_STDDEV_FACTOR,
    DEFAULT_TARGET_SETS,
    FREQUENCY_WINDOW_DAYS,
    STATS_WINDOW_DAYS,
    STREAK_LOOKBACK_DAYS,
)
from liftlog.core.enums import OneRMFormula, PRType
from liftlog.db.store import PERSONAL_RECORDS, SESSIONS, Store
from liftlog.schemas.analytics import (
    FrequencyMetrics,
    OneRMPoint,
    OneRMProgression,
    PerformanceMetrics,
    ProgressMetrics,
    StreakStats,
    StrengthProgress,
    VolumePoint,
    WorkoutStats,
)
from liftlog.schemas.record import PersonalRecord
from liftlog.schemas.workout import Session


def _brzycki_1rm(weight: float, reps: int) -> float:
    """1RM = weight * (36 / (37 - reps))."""
    if reps <= 0:
        return 0.0
    if reps >= 37:
        return weight * 1.1  # extrapolate
    return weight * (36 / (37 - reps))


def _epley_1rm(weight: float, reps: int) -> float:
    """1RM = weight * (1 + reps/30)."""
    if reps <= 0:
        return 0.0
    return weight * (1 + reps / 30)


def estimate_one_rep_max(weight: float, reps: int, formula: OneRMFormula = OneRMFormula.BRZYCKI) -> float:
    fn = _brzycki_1rm if formula == OneRMFormula.BRZYCKI else _epley_1rm
    return fn(weight, reps)


def consistency_score(start_times: list[datetime]) -> float:
    """[0, 100] from the spread of calendar-day gaps between consecutive sessions.

    consistency = clamp(100 - sqrt(variance(gaps)) * 10, 0, 100); fewer than two
    sessions cannot show irregularity and score 100.
    """
    if len(start_times) < 2:
        return CONSISTENCY_MAX
    days = sorted(t.date() for t in start_times)
    gaps = [(b - a).days for a, b in zip(days, days[1:])]
    score = CONSISTENCY_MAX - sqrt(pvariance(gaps)) * CONSISTENCY_STDDEV_FACTOR
    return max(0.0, min(CONSISTENCY_MAX, score))


def strength_progress(records: list[PersonalRecord], catalog: ReferenceCatalog | None = None) -> list[StrengthProgress]:
    """Latest max-weight record per exercise vs the one before it."""
    by_exercise: dict[str, list[PersonalRecord]] = defaultdict(list)
    for r in records:
        if r.record_type == PRType.MAX_WEIGHT:
            by_exercise[r.exercise_id].append(r)

    out: list[StrengthProgress] = []
    for exercise_id, rows in sorted(by_exercise.items()):
        rows.sort(key=lambda r: (r.achieved_at, r.value))
        latest = rows[-1]
        previous = rows[-2] if len(rows) > 1 else None
        change = latest.value - previous.value if previous else 0.0
        improvement = (change / previous.value) * 100 if previous and previous.value else 0.0
        exercise = catalog.get_exercise_by_id(exercise_id) if catalog else None
        out.append(
            StrengthProgress(
                exercise_id=exercise_id,
                exercise_name=exercise.name if exercise else exercise_id,
                current=latest.value,
                previous=previous.value if previous else None,
                change=round(change, 2),
                improvement_percent=round(improvement, 2),
                achieved_at=latest.achieved_at,
            )
        )
    return out


def volume_progress(sessions: list[Session]) -> list[VolumePoint]:
    points = []
    for s in sorted(sessions, key=lambda s: s.started_at):
        per_exercise: dict[str, float] = defaultdict(float)
        for ex in s.exercises:
            per_exercise[ex.exercise_id] += ex.volume
        points.append(
            VolumePoint(
                session_id=s.id,
                date=s.started_at,
                total_volume=s.compute_volume(),
                per_exercise_volume=dict(per_exercise),
            )
        )
    return points


def frequency_metrics(sessions: list[Session], now: datetime) -> FrequencyMetrics:
    window_start = now - timedelta(days=FREQUENCY_WINDOW_DAYS)
    recent = [s for s in sessions if window_start <= s.started_at <= now]
    durations = [s.duration_minutes for s in sessions if s.duration_minutes is not None]
    return FrequencyMetrics(
        workouts_per_week=len(recent),
        average_session_duration=round(fmean(durations), 2) if durations else 0.0,
        consistency=round(consistency_score([s.started_at for s in sessions]), 2),
    )


def performance_metrics(sessions: list[Session]) -> PerformanceMetrics:
    rests: list[int] = []
    completed = 0
    planned = 0
    for s in sessions:
        for ex in s.exercises:
            planned += ex.target_sets if ex.target_sets is not None else DEFAULT_TARGET_SETS
            completed += len(ex.sets)
            rests.extend(st.rest_seconds for st in ex.sets if st.rest_seconds is not None)
    # Not clamped: over 100 means the plan was exceeded
    rate = (completed / planned) * 100 if planned else 0.0
    return PerformanceMetrics(
        average_rest_time=round(fmean(rests), 2) if rests else 0.0,
        set_completion_rate=round(rate, 2),
        completed_sets=completed,
        planned_sets=planned,
    )


def streaks(workout_dates: list[date], today: date) -> StreakStats:
    """Current streak (consecutive days ending today or yesterday) and longest ever."""
    days = sorted(set(workout_dates), reverse=True)
    if not days:
        return StreakStats(current_streak=0, longest_streak=0, last_workout_date=None)

    last_workout = days[0]
    current = 0
    if last_workout >= today - timedelta(days=1):
        current = 1
        for i in range(1, len(days)):
            if days[i] == days[i - 1] - timedelta(days=1):
                current += 1
            else:
                break

    longest = 1
    run = 1
    for i in range(1, len(days)):
        if days[i] == days[i - 1] - timedelta(days=1):
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return StreakStats(current_streak=current, longest_streak=longest, last_workout_date=last_workout)


class ProgressAnalytics:
    def __init__(self, store: Store, catalog: ReferenceCatalog, clock: Callable[[], datetime]):
        self._store = store
        self._catalog = catalog
        self._clock = clock

    async def _sessions(self, start: datetime | None = None) -> list[Session]:
        return await self._store.query_by_range(SESSIONS, "started_at", start, None)

    async def _records(self) -> list[PersonalRecord]:
        return await self._store.query_by_range(PERSONAL_RECORDS, "achieved_at")

    async def strength_progress(self) -> list[StrengthProgress]:
        return strength_progress(await self._records(), self._catalog)

    async def volume_progress(self) -> list[VolumePoint]:
        return volume_progress(await self._sessions())

    async def frequency_metrics(self) -> FrequencyMetrics:
        return frequency_metrics(await self._sessions(), self._clock())

    async def performance_metrics(self) -> PerformanceMetrics:
        return performance_metrics(await self._sessions())

    async def progress_metrics(self) -> ProgressMetrics:
        sessions = await self._sessions()
        records = await self._records()
        return ProgressMetrics(
            strength_progress=strength_progress(records, self._catalog),
            volume_progress=volume_progress(sessions),
            frequency=frequency_metrics(sessions, self._clock()),
            performance=performance_metrics(sessions),
        )

    async def one_rep_max_progression(
        self,
        exercise_id: str,
        formula: OneRMFormula = OneRMFormula.BRZYCKI,
    ) -> OneRMProgression:
        """Estimated 1-rep max for every set of the exercise, in completion order."""
        points = []
        for s in await self._sessions():
            ex = s.find_exercise(exercise_id)
            if ex is None:
                continue
            for st in ex.sets:
                if st.weight <= 0:
                    continue
                points.append(
                    OneRMPoint(
                        date=st.completed_at,
                        weight=st.weight,
                        reps=st.reps,
                        estimated_1rm=round(estimate_one_rep_max(st.weight, st.reps, formula), 2),
                    )
                )
        points.sort(key=lambda p: p.date)
        return OneRMProgression(exercise_id=exercise_id, formula=formula, points=points)

    async def streaks(self) -> StreakStats:
        now = self._clock()
        sessions = await self._sessions(now - timedelta(days=STREAK_LOOKBACK_DAYS))
        return streaks([s.started_at.date() for s in sessions], now.date())

    async def workout_stats(self, days: int = STATS_WINDOW_DAYS) -> WorkoutStats:
        """Totals over the trailing window."""
        sessions = await self._sessions(self._clock() - timedelta(days=days))
        durations = [s.duration_minutes or 0 for s in sessions]
        total = len(sessions)
        return WorkoutStats(
            days=days,
            total_workouts=total,
            total_duration_minutes=sum(durations),
            total_sets=sum(s.total_sets for s in sessions),
            total_reps=sum(s.total_reps for s in sessions),
            total_volume=round(sum(s.compute_volume() for s in sessions), 2),
            average_workout_duration=round(sum(durations) / total, 2) if total else 0.0,
        )

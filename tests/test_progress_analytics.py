from datetime import date, datetime, timedelta, timezone

import pytest

from liftlog.core.enums import OneRMFormula, PRType
from liftlog.schemas.record import PersonalRecord
from liftlog.schemas.workout import Session, SessionExercise, SetRecord
from liftlog.services.progress_analytics import (
    consistency_score,
    estimate_one_rep_max,
    frequency_metrics,
    performance_metrics,
    strength_progress,
    streaks,
)

T0 = datetime(2026, 10, 1, 8, 0, tzinfo=timezone.utc)


def session_on(day_offset, sets=(), target_sets=None, duration=None):
    started = T0 + timedelta(days=day_offset)
    ex = SessionExercise(
        exercise_id="squat",
        exercise_name="Back Squat",
        target_sets=target_sets,
        sets=[
            SetRecord(weight=w, reps=r, rest_seconds=rest, completed_at=started)
            for w, r, rest in sets
        ],
    )
    return Session(
        name="Legs",
        created_at=started,
        started_at=started,
        ended_at=started + timedelta(hours=1),
        duration_minutes=duration,
        exercises=[ex],
    )


def test_consistency_single_session_is_perfect():
    assert consistency_score([T0]) == 100
    assert consistency_score([]) == 100


def test_consistency_regular_gaps_is_perfect():
    assert consistency_score([T0 + timedelta(days=2 * i) for i in range(6)]) == 100


def test_consistency_uses_gap_spread():
    # gaps 1 and 20 days: stddev 9.5
    times = [T0, T0 + timedelta(days=1), T0 + timedelta(days=21)]
    assert consistency_score(times) == pytest.approx(5.0)


@pytest.mark.parametrize(
    "offsets",
    [[0, 1], [0, 1, 40], [0, 0, 0], [0, 3, 4, 90, 91, 200], [0, 100, 101, 102]],
)
def test_consistency_always_in_range(offsets):
    score = consistency_score([T0 + timedelta(days=d) for d in offsets])
    assert 0 <= score <= 100


def test_strength_progress_compares_latest_two():
    records = [
        PersonalRecord(exercise_id="squat", record_type=PRType.MAX_WEIGHT, value=v, achieved_at=T0 + timedelta(days=i), session_id="s")
        for i, v in enumerate([180, 200, 220])
    ]
    records.append(
        PersonalRecord(exercise_id="squat", record_type=PRType.MAX_REPS, value=12, achieved_at=T0, session_id="s")
    )
    [progress] = strength_progress(records)
    assert progress.current == 220
    assert progress.previous == 200
    assert progress.change == 20
    assert progress.improvement_percent == 10.0


def test_strength_progress_single_record():
    record = PersonalRecord(exercise_id="squat", record_type=PRType.MAX_WEIGHT, value=200, achieved_at=T0, session_id="s")
    [progress] = strength_progress([record])
    assert progress.previous is None
    assert progress.improvement_percent == 0


def test_frequency_metrics():
    sessions = [session_on(d, duration=m) for d, m in ((0, 40), (10, 60), (12, 50))]
    now = T0 + timedelta(days=13)
    metrics = frequency_metrics(sessions, now)
    assert metrics.workouts_per_week == 2
    assert metrics.average_session_duration == 50
    assert 0 <= metrics.consistency <= 100


def test_performance_metrics():
    sessions = [
        session_on(0, sets=((100, 5, None), (100, 5, 60)), target_sets=4),
        session_on(2, sets=((100, 5, 90), (100, 5, None), (100, 5, None))),
    ]
    metrics = performance_metrics(sessions)
    assert metrics.planned_sets == 7
    assert metrics.completed_sets == 5
    assert metrics.set_completion_rate == pytest.approx(71.43)
    assert metrics.average_rest_time == 75


def test_completion_rate_can_exceed_100():
    metrics = performance_metrics([session_on(0, sets=((100, 5, None),) * 5, target_sets=3)])
    assert metrics.set_completion_rate == pytest.approx(166.67)


def test_one_rep_max_formulas():
    assert estimate_one_rep_max(100, 5) == pytest.approx(112.5)
    assert estimate_one_rep_max(100, 5, OneRMFormula.EPLEY) == pytest.approx(116.667, rel=1e-4)
    assert estimate_one_rep_max(100, 0) == 0


def test_streaks():
    today = date(2026, 10, 18)
    days = [today, today - timedelta(days=1), today - timedelta(days=2), date(2026, 10, 10), date(2026, 10, 9)]
    stats = streaks(days, today)
    assert stats.current_streak == 3
    assert stats.longest_streak == 3
    assert stats.last_workout_date == today


def test_streak_broken_when_last_workout_is_old():
    today = date(2026, 10, 18)
    stats = streaks([date(2026, 10, 15), date(2026, 10, 14), date(2026, 10, 14)], today)
    assert stats.current_streak == 0
    assert stats.longest_streak == 2


def test_streak_empty():
    stats = streaks([], date(2026, 10, 18))
    assert stats.current_streak == 0
    assert stats.last_workout_date is None


async def test_engine_analytics_over_store(engine, clock):
    await engine.lifecycle.start_session()
    await engine.sets.log_set("squat", 5, 200)
    clock.advance(minutes=30)
    await engine.lifecycle.end_session()

    clock.advance(days=1)
    await engine.lifecycle.start_session()
    await engine.sets.log_set("squat", 5, 220)
    await engine.sets.log_set("squat", 5, 220)
    clock.advance(minutes=50)
    await engine.lifecycle.end_session()

    volume = await engine.analytics.volume_progress()
    assert [p.total_volume for p in volume] == [1000, 2200]
    assert volume[1].per_exercise_volume == {"squat": 2200}

    [strength] = await engine.analytics.strength_progress()
    assert strength.exercise_name == "Back Squat"
    assert strength.improvement_percent == 10.0

    one_rm = await engine.analytics.one_rep_max_progression("squat")
    assert len(one_rm.points) == 3
    assert one_rm.points[0].estimated_1rm == 225

    stats = await engine.analytics.workout_stats(30)
    assert stats.total_workouts == 2
    assert stats.total_sets == 3
    assert stats.total_reps == 15
    assert stats.total_volume == 3200
    assert stats.total_duration_minutes == 80

    streak = await engine.analytics.streaks()
    assert streak.current_streak == 2

    progress = await engine.analytics.progress_metrics()
    assert progress.frequency.workouts_per_week == 2
    assert progress.performance.completed_sets == 3

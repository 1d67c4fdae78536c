import asyncio
from datetime import datetime, timezone

import pytest

from liftlog.core.catalog import EXERCISES, ReferenceCatalog
from liftlog.core.exceptions import ConflictError, NotFoundError
from liftlog.db.store import SESSIONS
from liftlog.schemas.template import TemplateExercise, WorkoutTemplate
from liftlog.services.engine import WorkoutEngine


async def test_second_start_conflicts(engine):
    first = await engine.lifecycle.start_session(name="Morning")
    with pytest.raises(ConflictError):
        await engine.lifecycle.start_session(name="Again")
    assert engine.lifecycle.active_session().id == first.id


async def test_start_persists_open_session(engine, store):
    session = await engine.lifecycle.start_session()
    stored = await store.get(SESSIONS, session.id)
    assert stored.ended_at is None
    assert stored.name == "Custom Workout"


async def test_start_from_template_copies_targets(engine):
    session = await engine.lifecycle.start_session(template_id="upper-body-strength")
    assert session.template_id == "upper-body-strength"
    assert session.name == "Upper Body Strength"
    assert [ex.exercise_id for ex in session.exercises] == [
        "bench-press",
        "pull-up",
        "overhead-press",
        "dumbbell-curl",
        "tricep-dip",
    ]
    bench = session.exercises[0]
    assert bench.exercise_name == "Bench Press"
    assert bench.target_sets == 4
    assert bench.rest_seconds == 180
    assert bench.sets == []
    assert engine.lifecycle.current_exercise().exercise_id == "bench-press"


async def test_unknown_template_is_not_found(engine):
    with pytest.raises(NotFoundError):
        await engine.lifecycle.start_session(template_id="nope")
    assert not engine.lifecycle.has_active


async def test_template_skips_unknown_exercises(store, clock):
    template = WorkoutTemplate(
        id="mixed",
        name="Mixed",
        exercises=[
            TemplateExercise(exercise_id="gone", order_index=0),
            TemplateExercise(exercise_id="squat", order_index=1),
        ],
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    workout_engine = WorkoutEngine(store, catalog=ReferenceCatalog(EXERCISES, [template]), clock=clock)
    session = await workout_engine.lifecycle.start_session(template_id="mixed")
    assert [ex.exercise_id for ex in session.exercises] == ["squat"]
    assert session.exercises[0].order_index == 0
    await workout_engine.shutdown()


async def test_end_session_finalizes(engine, clock, store):
    session = await engine.lifecycle.start_session()
    await engine.sets.log_set("squat", 5, 200)
    clock.advance(minutes=45)
    ended = await engine.lifecycle.end_session()

    assert ended.id == session.id
    assert ended.ended_at == clock.now
    assert ended.duration_minutes == 45
    assert ended.total_volume == 1000
    assert not engine.lifecycle.has_active
    assert engine.rest_timer.state.value == "idle"
    assert (await store.get(SESSIONS, session.id)).ended_at == clock.now


async def test_end_without_active_is_not_found(engine):
    with pytest.raises(NotFoundError):
        await engine.lifecycle.end_session()


async def test_start_after_end_is_allowed(engine):
    await engine.lifecycle.start_session()
    await engine.lifecycle.end_session()
    second = await engine.lifecycle.start_session()
    assert engine.lifecycle.active_session().id == second.id


async def test_observers_notified_in_order_and_survive_failures(engine):
    calls = []

    def broken(context):
        calls.append("broken")
        raise RuntimeError("boom")

    engine.lifecycle.subscribe(broken)
    engine.lifecycle.subscribe(lambda context: calls.append(("ok", context.is_recording)))

    await engine.lifecycle.start_session()
    assert calls == ["broken", ("ok", True)]

    calls.clear()
    await engine.lifecycle.end_session()
    assert calls == ["broken", ("ok", False)]


async def test_restore_active_after_restart(engine, store, clock):
    session = await engine.lifecycle.start_session()
    await engine.sets.log_set("bench-press", 8, 135)
    await engine.shutdown()

    restarted = WorkoutEngine(store, clock=clock)
    await restarted.startup()
    assert restarted.lifecycle.has_active
    assert restarted.lifecycle.active_session().id == session.id
    assert restarted.lifecycle.current_exercise().exercise_id == "bench-press"
    with pytest.raises(ConflictError):
        await restarted.lifecycle.start_session()
    await restarted.shutdown()


async def test_delete_session(engine, store):
    active = await engine.lifecycle.start_session()
    with pytest.raises(ConflictError):
        await engine.lifecycle.delete_session(active.id)
    await engine.lifecycle.end_session()

    await engine.lifecycle.delete_session(active.id)
    assert await store.get(SESSIONS, active.id) is None
    with pytest.raises(NotFoundError):
        await engine.lifecycle.delete_session(active.id)


async def test_add_exercise_and_navigation(engine):
    await engine.lifecycle.start_session()
    with pytest.raises(NotFoundError):
        await engine.lifecycle.add_exercise("not-in-catalog")

    await engine.lifecycle.add_exercise("squat")
    await engine.lifecycle.add_exercise("deadlift")
    assert engine.lifecycle.current_exercise().exercise_id == "deadlift"

    assert engine.lifecycle.previous_exercise().exercise_id == "squat"
    assert engine.lifecycle.previous_exercise().exercise_id == "squat"
    assert engine.lifecycle.next_exercise().exercise_id == "deadlift"
    assert engine.lifecycle.next_exercise() is None
    assert engine.lifecycle.go_to_exercise(0).exercise_id == "squat"
    with pytest.raises(NotFoundError):
        engine.lifecycle.go_to_exercise(5)

    # Re-adding selects instead of duplicating
    await engine.lifecycle.add_exercise("deadlift")
    assert len(engine.lifecycle.active_session().exercises) == 2
    assert engine.lifecycle.current_exercise().exercise_id == "deadlift"


async def test_context_is_a_copy(engine, clock):
    await engine.lifecycle.start_session(template_id="lower-body-power")
    await engine.sets.log_set("squat", 5, 225)
    clock.advance(seconds=30)

    context = engine.lifecycle.context()
    assert context.is_recording
    assert context.current_exercise.exercise_id == "squat"
    assert context.current_set == 1
    assert context.total_sets == 1
    assert context.workout_duration_seconds == 30
    assert context.is_resting
    assert context.last_personal_record is not None

    await engine.sets.log_set("squat", 5, 235)
    assert context.total_sets == 1
    assert len(context.active_workout.exercises[0].sets) == 1


async def test_list_sessions_by_range(engine, clock):
    await engine.lifecycle.start_session()
    first_start = clock.now
    await engine.lifecycle.end_session()
    clock.advance(days=2)
    await engine.lifecycle.start_session()
    await engine.lifecycle.end_session()

    assert len(await engine.lifecycle.list_sessions()) == 2
    only_first = await engine.lifecycle.list_sessions(end=first_start)
    assert len(only_first) == 1


async def test_unsubscribed_observer_is_not_called(engine):
    seen = []
    observer = seen.append
    engine.lifecycle.subscribe(observer)
    await engine.lifecycle.start_session()
    engine.lifecycle.unsubscribe(observer)
    await engine.lifecycle.end_session()
    assert len(seen) == 1


async def test_failed_end_keeps_session_active(engine, store, monkeypatch):
    session = await engine.lifecycle.start_session()
    await engine.sets.log_set("squat", 5, 200)

    real_put = store.put

    async def failing_put(collection, record):
        if collection == SESSIONS:
            raise RuntimeError("store unavailable")
        await real_put(collection, record)

    monkeypatch.setattr(store, "put", failing_put)
    seen = []
    engine.lifecycle.subscribe(seen.append)

    with pytest.raises(RuntimeError):
        await engine.lifecycle.end_session()

    assert seen == []
    active = engine.lifecycle.active_session()
    assert active.id == session.id
    assert active.ended_at is None
    assert (await store.get(SESSIONS, session.id)).ended_at is None

    monkeypatch.setattr(store, "put", real_put)
    ended = await engine.lifecycle.end_session()
    assert ended.ended_at is not None


async def test_end_session_stops_duration_ticks(store, clock):
    workout_engine = WorkoutEngine(store, clock=clock, duration_tick_seconds=0.01)
    ticks = []
    workout_engine.lifecycle.subscribe(lambda context: ticks.append(context.is_recording))

    await workout_engine.lifecycle.start_session()
    await asyncio.sleep(0.05)
    assert ticks.count(True) > 1

    await workout_engine.lifecycle.end_session()
    count = len(ticks)
    assert ticks[-1] is False
    await asyncio.sleep(0.05)
    assert len(ticks) == count
    await workout_engine.shutdown()

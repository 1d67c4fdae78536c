from datetime import datetime, timedelta, timezone

import pytest

from liftlog.core.enums import PRType
from liftlog.db.store import PERSONAL_RECORDS, SESSIONS, TEMPLATES
from liftlog.schemas.record import PersonalRecord
from liftlog.schemas.workout import Session, SessionExercise, SetRecord

T0 = datetime(2026, 10, 1, 8, 0, tzinfo=timezone.utc)


def make_session(started_at, ended=True, sets=((100.0, 10),)):
    ex = SessionExercise(
        exercise_id="bench-press",
        exercise_name="Bench Press",
        sets=[SetRecord(weight=w, reps=r, completed_at=started_at) for w, r in sets],
    )
    return Session(
        name="Push",
        created_at=started_at,
        started_at=started_at,
        ended_at=started_at + timedelta(hours=1) if ended else None,
        exercises=[ex],
    )


async def test_put_get_roundtrip_keeps_nested_sets(store):
    session = make_session(T0, sets=((100.0, 10), (120.0, 8)))
    await store.put(SESSIONS, session)

    loaded = await store.get(SESSIONS, session.id)
    assert loaded.id == session.id
    assert loaded.started_at == T0
    assert loaded.started_at.tzinfo is not None
    assert not loaded.is_active
    assert [(s.weight, s.reps) for s in loaded.exercises[0].sets] == [(100.0, 10), (120.0, 8)]
    assert loaded.exercises[0].sets[0].completed_at == T0


async def test_put_replaces_record_with_same_id(store):
    session = make_session(T0)
    await store.put(SESSIONS, session)
    session.name = "Renamed"
    await store.put(SESSIONS, session)

    assert (await store.get(SESSIONS, session.id)).name == "Renamed"
    assert await store.count(SESSIONS) == 1


async def test_get_missing_returns_none(store):
    assert await store.get(SESSIONS, "missing") is None


async def test_query_by_range_is_inclusive_and_ordered(store):
    sessions = [make_session(T0 + timedelta(days=d)) for d in (3, 0, 1, 2)]
    for s in sessions:
        await store.put(SESSIONS, s)

    rows = await store.query_by_range(SESSIONS, "started_at", T0 + timedelta(days=1), T0 + timedelta(days=2))
    assert [r.started_at for r in rows] == [T0 + timedelta(days=1), T0 + timedelta(days=2)]

    everything = await store.query_by_range(SESSIONS, "started_at")
    assert [r.started_at for r in everything] == [T0 + timedelta(days=d) for d in range(4)]


async def test_find_matches_null(store):
    open_session = make_session(T0, ended=False)
    await store.put(SESSIONS, open_session)
    await store.put(SESSIONS, make_session(T0 - timedelta(days=1)))

    found = await store.find(SESSIONS, ended_at=None)
    assert [s.id for s in found] == [open_session.id]


async def test_find_by_enum_field(store):
    for record_type in (PRType.MAX_WEIGHT, PRType.MAX_REPS):
        await store.put(
            PERSONAL_RECORDS,
            PersonalRecord(
                exercise_id="squat",
                record_type=record_type,
                value=5.0,
                achieved_at=T0,
                session_id="s1",
            ),
        )
    rows = await store.find(PERSONAL_RECORDS, exercise_id="squat", record_type=PRType.MAX_REPS)
    assert len(rows) == 1
    assert rows[0].record_type is PRType.MAX_REPS


async def test_delete(store):
    session = make_session(T0)
    await store.put(SESSIONS, session)
    assert await store.delete(SESSIONS, session.id) is True
    assert await store.delete(SESSIONS, session.id) is False
    assert await store.get(SESSIONS, session.id) is None


async def test_unknown_collection_or_field(store):
    with pytest.raises(ValueError):
        await store.get("workouts", "x")
    with pytest.raises(ValueError):
        await store.query_by_range(SESSIONS, "nope")
    with pytest.raises(ValueError):
        await store.find(TEMPLATES, nope=1)


async def test_put_rejects_wrong_schema(store):
    with pytest.raises(TypeError):
        await store.put(PERSONAL_RECORDS, make_session(T0))


async def test_ping(store):
    await store.ping()

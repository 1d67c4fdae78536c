import asyncio

import pytest

from liftlog.core.enums import TimerState
from liftlog.core.exceptions import ValidationError
from liftlog.services.rest_timer import RestTimer


async def wait_for_idle(timer, timeout=2.0):
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while timer.state is not TimerState.IDLE and loop.time() < deadline:
        await asyncio.sleep(0.005)


async def test_countdown_notifies_each_second_then_idles():
    timer = RestTimer(tick_seconds=0.01)
    seen = []
    timer.subscribe(lambda snap: seen.append((snap.state, snap.remaining_seconds)))

    snapshot = timer.start(10)
    assert snapshot.state is TimerState.RUNNING
    assert snapshot.remaining_seconds == 10
    assert timer.is_running

    await asyncio.sleep(0.02)
    await wait_for_idle(timer)

    assert [remaining for _, remaining in seen] == [9, 8, 7, 6, 5, 4, 3, 2, 1, 0]
    assert all(state is TimerState.RUNNING for state, _ in seen[:-1])
    assert seen[-1][0] is TimerState.EXPIRED
    assert timer.state is TimerState.IDLE
    assert timer.remaining_seconds == 0


async def test_stop_is_immediate_and_final():
    timer = RestTimer(tick_seconds=0.01)
    seen = []
    timer.subscribe(lambda snap: seen.append(snap.remaining_seconds))

    timer.start(100)
    await asyncio.sleep(0.035)
    snapshot = timer.stop()
    assert snapshot.state is TimerState.IDLE
    assert snapshot.remaining_seconds == 0

    count = len(seen)
    assert seen[-1] == 0
    await asyncio.sleep(0.05)
    assert len(seen) == count


async def test_stop_when_idle_is_noop():
    timer = RestTimer(tick_seconds=0.01)
    seen = []
    timer.subscribe(seen.append)
    assert timer.stop().state is TimerState.IDLE
    assert seen == []


async def test_restart_replaces_countdown():
    timer = RestTimer(tick_seconds=0.01)
    timer.start(100)
    await asyncio.sleep(0.03)
    timer.start(50)
    assert timer.remaining_seconds == 50
    await asyncio.sleep(0.03)
    # Only one countdown is decrementing
    assert 30 <= timer.remaining_seconds < 50
    assert timer.snapshot().total_seconds == 50
    timer.stop()


async def test_superseded_countdown_never_ticks_again():
    timer = RestTimer(tick_seconds=0.01)
    seen = []
    timer.subscribe(lambda snap: seen.append(snap.remaining_seconds))

    timer.start(100)
    await asyncio.sleep(0.015)
    seen.clear()
    timer.start(3)
    await asyncio.sleep(0.01)
    await wait_for_idle(timer)
    assert seen == [2, 1, 0]

    seen.clear()
    timer.start(5)
    timer.stop()
    await asyncio.sleep(0.05)
    assert seen == [0]
    assert timer.state is TimerState.IDLE


async def test_invalid_duration():
    timer = RestTimer()
    with pytest.raises(ValidationError):
        timer.start(0)


async def test_failing_listener_does_not_stop_countdown():
    timer = RestTimer(tick_seconds=0.01)
    seen = []

    def broken(snap):
        raise RuntimeError("boom")

    timer.subscribe(broken)
    timer.subscribe(lambda snap: seen.append(snap.remaining_seconds))
    timer.start(3)
    await asyncio.sleep(0.02)
    await wait_for_idle(timer)
    assert seen == [2, 1, 0]


async def test_unsubscribe():
    timer = RestTimer(tick_seconds=0.01)
    seen = []
    timer.subscribe(seen.append)
    timer.unsubscribe(seen.append)
    timer.start(2)
    await asyncio.sleep(0.01)
    await wait_for_idle(timer)
    assert seen == []

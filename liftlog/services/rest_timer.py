"""Rest timer: a single application-wide cancellable countdown.

States: idle -> running -> expired -> idle. start(10) notifies 9, 8, ..., 0
(the zero notification carries state=expired) and then settles in idle.
stop() is unconditional and idempotent. The timer knows nothing about
exercises; the session lifecycle only force-stops it when a session ends.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from liftlog.core.enums import TimerState
from liftlog.core.exceptions import ValidationError
from liftlog.schemas.timer import TimerSnapshot

logger = logging.getLogger(__name__)

TimerListener = Callable[[TimerSnapshot], None]


class RestTimer:
    def __init__(self, tick_seconds: float = 1.0):
        self._tick_seconds = tick_seconds
        self._state = TimerState.IDLE
        self._remaining = 0
        self._total = 0
        self._task: asyncio.Task | None = None
        # Bumped on every start/stop; a tick from an older countdown is ignored
        self._generation = 0
        self._listeners: list[TimerListener] = []

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def is_running(self) -> bool:
        return self._state is TimerState.RUNNING

    def snapshot(self) -> TimerSnapshot:
        return TimerSnapshot(state=self._state, remaining_seconds=self._remaining, total_seconds=self._total)

    def subscribe(self, listener: TimerListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: TimerListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def start(self, seconds: int) -> TimerSnapshot:
        """(Re)start the countdown. Must be called from within the running event loop."""
        if seconds <= 0:
            raise ValidationError("Rest time must be a positive number of seconds")
        self._cancel_task()
        self._generation += 1
        self._state = TimerState.RUNNING
        self._remaining = int(seconds)
        self._total = int(seconds)
        self._task = asyncio.get_running_loop().create_task(self._run(self._generation))
        logger.debug("Rest timer started for %ss", seconds)
        return self.snapshot()

    def stop(self) -> TimerSnapshot:
        """Cancel any countdown and reset to idle/0. Safe in any state."""
        was_running = self._state is TimerState.RUNNING
        self._cancel_task()
        self._generation += 1
        self._state = TimerState.IDLE
        self._remaining = 0
        self._total = 0
        if was_running:
            logger.debug("Rest timer stopped")
            self._notify()
        return self.snapshot()

    def _cancel_task(self) -> None:
        task, self._task = self._task, None
        if task is not None and not task.done() and task is not _current_task():
            task.cancel()

    async def _run(self, generation: int) -> None:
        while True:
            await asyncio.sleep(self._tick_seconds)
            if not self._tick(generation):
                return

    def _tick(self, generation: int) -> bool:
        """Advance one second. Returns False once the countdown is over or stale."""
        if generation != self._generation or self._state is not TimerState.RUNNING:
            return False
        self._remaining -= 1
        if self._remaining > 0:
            self._notify()
            return True
        self._remaining = 0
        self._state = TimerState.EXPIRED
        self._notify()
        if generation == self._generation and self._state is TimerState.EXPIRED:
            self._state = TimerState.IDLE
            self._total = 0
            self._task = None
        logger.debug("Rest timer expired")
        return False

    def _notify(self) -> None:
        snap = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                logger.exception("Rest timer listener failed")


def _current_task() -> asyncio.Task | None:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None

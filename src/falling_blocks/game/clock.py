from __future__ import annotations

import itertools
import logging
from typing import Callable, List, Optional


logger = logging.getLogger(__name__)


class ScheduledTask:
    """Handle for a repeating callback armed on a ManualScheduler."""

    def __init__(self, scheduler: "ManualScheduler", interval_ms: int, callback: Callable[[], None],
                 due_ms: int, seq: int) -> None:
        self.scheduler = scheduler
        self.interval_ms = interval_ms
        self.callback = callback
        self.due_ms = due_ms
        self.seq = seq
        self.cancelled = False

    def cancel(self) -> None:
        if not self.cancelled:
            self.cancelled = True
            self.scheduler._discard(self)


class ManualScheduler:
    """Single-threaded virtual-time scheduler.

    Time only moves when the owner calls ``advance``; due callbacks fire in
    order of due time, then arming order. A callback may cancel its own task
    or arm new ones; tasks armed mid-advance fire if they fall due within
    the same window.
    """

    def __init__(self) -> None:
        self.now_ms = 0
        self._tasks: List[ScheduledTask] = []
        self._seq = itertools.count()

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive, got {interval_ms}")
        task = ScheduledTask(self, int(interval_ms), callback, self.now_ms + int(interval_ms), next(self._seq))
        self._tasks.append(task)
        return task

    def _discard(self, task: ScheduledTask) -> None:
        if task in self._tasks:
            self._tasks.remove(task)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def advance(self, elapsed_ms: int) -> None:
        target = self.now_ms + int(elapsed_ms)
        while True:
            due = [t for t in self._tasks if t.due_ms <= target]
            if not due:
                break
            task = min(due, key=lambda t: (t.due_ms, t.seq))
            self.now_ms = task.due_ms
            task.due_ms += task.interval_ms
            task.callback()
        self.now_ms = target


class GameClock:
    """Periodic gravity timer.

    At most one task is armed at a time; ``start`` always cancels the
    previous handle before arming a new one.
    """

    def __init__(self, scheduler: ManualScheduler, on_tick: Callable[[], None]) -> None:
        self.scheduler = scheduler
        self.on_tick = on_tick
        self.interval_ms: Optional[int] = None
        self._handle: Optional[ScheduledTask] = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self, interval_ms: int) -> None:
        self.stop()
        self._handle = self.scheduler.call_every(interval_ms, self.on_tick)
        self.interval_ms = interval_ms
        logger.debug("clock armed at %dms", interval_ms)

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            logger.debug("clock stopped")

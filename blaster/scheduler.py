"""
Cooperative periodic task scheduler
===================================
All timed behaviour of a round (shooter motion, firing, bullet flight,
target spawning and wandering, the clock, the termination poll) runs as
tasks on one logical thread, driven by a virtual millisecond clock.

The driver (arcade window, gym env, tests) calls ``advance(dt_ms)``; every
task whose due time falls inside the window fires in due-time order, ties
broken by scheduling order. Tasks may schedule or cancel other tasks,
including themselves, from inside their callback.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Callable, List, Optional, Tuple


class Task:
    """Handle for a scheduled callback"""

    def __init__(self, scheduler: "Scheduler", callback: Callable[[], None],
                 period: Optional[float], name: str = ""):
        self._scheduler = scheduler
        self.callback = callback
        self.period = period
        self.name = name or getattr(callback, "__name__", "task")
        self.due = 0.0
        self.cancelled = False

    @property
    def active(self) -> bool:
        return not self.cancelled

    def cancel(self):
        """Stop the task. Safe to call more than once."""
        if self.cancelled:
            return
        self.cancelled = True
        self._scheduler._forget(self)

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else f"due={self.due:g}"
        return f"<Task {self.name} period={self.period} {state}>"


class Scheduler:
    """Virtual-time scheduler with millisecond resolution"""

    def __init__(self):
        self.now = 0.0
        self._queue: List[Tuple[float, int, Task]] = []
        self._seq = itertools.count()
        self._tasks: dict = {}

    # ----------------------------
    # Scheduling
    # ----------------------------

    def every(self, period: float, callback: Callable[[], None],
              name: str = "", delay: Optional[float] = None) -> Task:
        """Run ``callback`` every ``period`` ms, first after ``delay`` (defaults to one period)"""
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")
        task = Task(self, callback, period, name)
        self._push(task, self.now + (period if delay is None else delay))
        return task

    def after(self, delay: float, callback: Callable[[], None], name: str = "") -> Task:
        """Run ``callback`` once after ``delay`` ms"""
        task = Task(self, callback, None, name)
        self._push(task, self.now + max(0.0, delay))
        return task

    def cancel_all(self):
        for task in list(self._tasks.values()):
            task.cancel()
        self._queue.clear()

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks.values())

    # ----------------------------
    # Driving
    # ----------------------------

    def advance(self, dt: float):
        """Advance the clock by ``dt`` ms, firing every task that comes due"""
        target = self.now + dt
        while self._queue and self._queue[0][0] <= target:
            due, _, task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            self.now = due
            if task.period is None:
                task.cancelled = True
                self._forget(task)
            else:
                self._push(task, due + task.period)
            task.callback()
        self.now = target

    # ----------------------------
    # Internals
    # ----------------------------

    def _push(self, task: Task, due: float):
        task.due = due
        self._tasks[id(task)] = task
        heapq.heappush(self._queue, (due, next(self._seq), task))

    def _forget(self, task: Task):
        self._tasks.pop(id(task), None)

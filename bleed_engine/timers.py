"""
timers.py – periodic callback queue driven by the fixed-step loop.

Callers ask for "run ``callback`` every ``period`` seconds" and get back a
:class:`TimerHandle`. The queue owns no threads: time only moves when
:meth:`TimerQueue.advance` is called, normally once per engine tick through
:class:`TimerSystem`.
"""
from __future__ import annotations

import itertools
import logging
from typing import Any, Callable, List, Tuple

from . import SchedulerError

logger = logging.getLogger(__name__)

NS_PER_S = 1_000_000_000


class TimerHandle:
    """Handle to one scheduled callback. ``stop()`` is safe to call repeatedly."""

    __slots__ = ("id", "period_ns", "callback", "params", "repeat", "due_ns", "running")

    def __init__(
        self,
        id: int,
        period_ns: int,
        callback: Callable[..., Any],
        params: Tuple[Any, ...],
        repeat: bool,
        due_ns: int,
    ) -> None:
        self.id = id
        self.period_ns = period_ns
        self.callback = callback
        self.params = params
        self.repeat = repeat
        self.due_ns = due_ns
        self.running = True

    def stop(self) -> None:
        self.running = False

    def __repr__(self) -> str:
        state = "running" if self.running else "stopped"
        return f"<TimerHandle #{self.id} every {self.period_ns}ns {state}>"


class TimerQueue:
    """Cooperative periodic-task scheduler measured in nanoseconds."""

    def __init__(self) -> None:
        self.now_ns = 0
        self._timers: List[TimerHandle] = []
        self._ids = itertools.count(1)

    def schedule_periodic(
        self,
        period: float,
        callback: Callable[..., Any],
        repeat: bool = True,
        params: Tuple[Any, ...] = (),
    ) -> TimerHandle:
        """Run ``callback(*params)`` after ``period`` seconds, and every period after if ``repeat``."""
        period_ns = int(round(period * NS_PER_S))
        if period_ns <= 0:
            raise SchedulerError(f"timer period must be positive, got {period!r}")
        handle = TimerHandle(
            next(self._ids), period_ns, callback, tuple(params), repeat, self.now_ns + period_ns
        )
        self._timers.append(handle)
        logger.debug("scheduled %r", handle)
        return handle

    def cancel(self, handle: TimerHandle | None) -> None:
        """Stop ``handle``; unknown, stopped or ``None`` handles are ignored."""
        if handle is None:
            return
        handle.stop()

    def advance(self, dt_ns: int) -> int:
        """Move the clock forward and fire every callback that came due. Returns the fire count."""
        self.now_ns += dt_ns
        fired = 0
        # snapshot: timers scheduled by a callback wait for the next advance
        for handle in list(self._timers):
            while handle.running and handle.due_ns <= self.now_ns:
                if handle.repeat:
                    handle.due_ns += handle.period_ns
                else:
                    handle.stop()
                handle.callback(*handle.params)
                fired += 1
        self._timers = [h for h in self._timers if h.running]
        return fired

    @property
    def pending(self) -> int:
        return sum(1 for h in self._timers if h.running)


class TimerSystem:
    """Adapts :class:`TimerQueue` to the fixed-step system call signature."""

    priority = 100  # after gameplay systems have produced this tick's wounds

    def __call__(self, world, rng, tick: int, dt_ns: int) -> None:
        world.timers.advance(dt_ns)

"""Timer abstraction for the reveal loops.

All delayed work (reveal ticks, settle delays, typewriter ticks, the
thinking pause before a dispatch lands) goes through a clock's
``call_later``. ``ManualClock`` keeps a virtual timeline that tests step
explicitly; ``RealtimeClock`` drains the same queue against wall time.
"""

from __future__ import annotations

import heapq
import itertools
import time
from typing import Callable, List, Optional, Tuple


class Timer:
    """Handle for a scheduled callback."""

    def __init__(self, deadline: float, fn: Callable[[], None]):
        self.deadline = deadline
        self.fn = fn
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualClock:
    """Single virtual timeline. Nothing runs until ``advance`` is called."""

    def __init__(self, start: float = 0.0):
        self._now = start
        self._queue: List[Tuple[float, int, Timer]] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return sum(1 for _, _, t in self._queue if not t.cancelled)

    def call_later(self, delay: float, fn: Callable[[], None]) -> Timer:
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        timer = Timer(self._now + delay, fn)
        heapq.heappush(self._queue, (timer.deadline, next(self._seq), timer))
        return timer

    def _pop_due(self, until: float) -> Optional[Timer]:
        while self._queue and self._queue[0][0] <= until:
            _, _, timer = heapq.heappop(self._queue)
            if not timer.cancelled:
                return timer
        return None

    def advance(self, seconds: float) -> int:
        """Move time forward, firing every callback due inside the window.

        Callbacks scheduled by callbacks run too if their deadline falls
        inside the window. Returns the number of callbacks fired.
        """
        target = self._now + seconds
        fired = 0
        while True:
            timer = self._pop_due(target)
            if timer is None:
                break
            self._now = max(self._now, timer.deadline)
            timer.fn()
            fired += 1
        self._now = target
        return fired

    def next_deadline(self) -> Optional[float]:
        for deadline, _, timer in sorted(self._queue):
            if not timer.cancelled:
                return deadline
        return None

    def run_until_idle(self, limit: int = 100_000) -> int:
        """Fire callbacks in deadline order until the queue is empty."""
        fired = 0
        while fired < limit:
            timer = self._pop_due(float("inf"))
            if timer is None:
                return fired
            self._now = max(self._now, timer.deadline)
            timer.fn()
            fired += 1
        raise RuntimeError(f"clock still busy after {limit} callbacks")


class RealtimeClock(ManualClock):
    """Same queue, but time is the process's monotonic clock.

    ``run_pending`` sleeps until the next deadline and fires it; the CLI
    calls it in its render loop.
    """

    def __init__(self):
        super().__init__(start=time.monotonic())

    @property
    def now(self) -> float:
        return time.monotonic()

    def call_later(self, delay: float, fn: Callable[[], None]) -> Timer:
        self._now = time.monotonic()
        return super().call_later(delay, fn)

    def run_pending(self, max_wait: float = 0.05) -> int:
        deadline = self.next_deadline()
        if deadline is None:
            return 0
        wait = deadline - time.monotonic()
        if wait > 0:
            time.sleep(min(wait, max_wait))
        return self.advance(max(0.0, time.monotonic() - self._now))

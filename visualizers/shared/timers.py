"""Cooperative timers advanced by a scene's update(dt).

Nothing here runs on its own thread: the owning scene calls
``Scheduler.advance`` once per frame and due callbacks fire inline.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

log = logging.getLogger(__name__)


class TimerHandle:
    def __init__(self, callback: Callable[[], None], due_ms: Optional[float], seq: int, label: str = ""):
        self.callback = callback
        self.due_ms = due_ms  # None => next frame
        self.seq = seq
        self.label = label
        self.cancelled = False
        self.fired = False

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> bool:
        """Disarm the timer. Returns False if it already fired or was cancelled."""
        if not self.active:
            return False
        self.cancelled = True
        log.debug("cancelled timer %s", self.label or self.seq)
        return True

    def __repr__(self):
        state = "active" if self.active else ("fired" if self.fired else "cancelled")
        return f"<TimerHandle {self.label or self.seq} due={self.due_ms} {state}>"


class Scheduler:
    """Timer queue measured in milliseconds of game time."""

    def __init__(self):
        self.now_ms = 0.0
        self._seq = 0
        self._timers: List[TimerHandle] = []
        self._frame: List[TimerHandle] = []

    def _next_seq(self) -> int:
        self._seq += 1
        return self._seq

    def call_later(self, delay_ms: float, callback: Callable[[], None], label: str = "") -> TimerHandle:
        handle = TimerHandle(callback, self.now_ms + max(0.0, delay_ms), self._next_seq(), label)
        self._timers.append(handle)
        return handle

    def call_next_frame(self, callback: Callable[[], None], label: str = "") -> TimerHandle:
        """Run ``callback`` at the start of the next ``advance``."""
        handle = TimerHandle(callback, None, self._next_seq(), label)
        self._frame.append(handle)
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for h in self._timers + self._frame if h.active)

    def advance(self, dt_ms: float) -> int:
        """Move the clock forward and fire what is due. Returns the fire count."""
        fired = 0
        frame, self._frame = self._frame, []
        for handle in frame:
            if handle.active:
                handle.fired = True
                handle.callback()
                fired += 1

        self.now_ms += max(0.0, dt_ms)
        # Callbacks may arm new timers; keep draining until nothing is due.
        while True:
            due = [h for h in self._timers if h.active and h.due_ms <= self.now_ms]
            if not due:
                break
            due.sort(key=lambda h: (h.due_ms, h.seq))
            handle = due[0]
            handle.fired = True
            handle.callback()
            fired += 1
        self._timers = [h for h in self._timers if h.active]
        return fired

    def cancel_all(self):
        for handle in self._timers + self._frame:
            handle.cancel()
        self._timers = []
        self._frame = []

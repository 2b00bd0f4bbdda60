"""Timed, eased walk of the son across the bridge."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from visualizers.shared.timers import Scheduler, TimerHandle

from .config import BridgeConfig

log = logging.getLogger(__name__)


def cubic_bezier(x1: float, y1: float, x2: float, y2: float) -> Callable[[float], float]:
    """CSS-style timing function: maps elapsed fraction to progress (may overshoot 1)."""

    def _axis(p1: float, p2: float, s: float) -> float:
        inv = 1.0 - s
        return 3 * inv * inv * s * p1 + 3 * inv * s * s * p2 + s * s * s

    def ease(t: float) -> float:
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        lo, hi = 0.0, 1.0
        s = t
        for _ in range(40):
            s = (lo + hi) / 2
            x = _axis(x1, x2, s)
            if abs(x - t) < 1e-6:
                break
            if x < t:
                lo = s
            else:
                hi = s
        return _axis(y1, y2, s)

    return ease


class CrossingAnimator:
    """Moves the son from his stack to the father's over a fixed duration."""

    def __init__(self, scheduler: Scheduler, config: Optional[BridgeConfig] = None):
        self.scheduler = scheduler
        self.config = config or BridgeConfig()
        self.ease = cubic_bezier(*self.config.easing)
        self._frame_handle: Optional[TimerHandle] = None
        self._done_handle: Optional[TimerHandle] = None
        self._on_arrive: Optional[Callable[[], None]] = None
        self.reset()

    def reset(self):
        self.walking = False
        self.arrived = False
        self.moving = False
        self.start_left = 0.0
        self.end_left = 0.0
        self.y_offset = 0.0
        self._move_started_ms = 0.0

    @property
    def traveler_hidden(self) -> bool:
        """The son's home avatar stays hidden from the first step until a reset."""
        return self.walking or self.arrived

    def begin(self, start_left: float, end_left: float, y_offset: float, on_arrive: Callable[[], None] = None):
        self.cancel()
        self.walking = True
        self.start_left = start_left
        self.end_left = end_left
        self.y_offset = y_offset
        self._on_arrive = on_arrive
        # Draw one frame at the start anchor before the transition kicks in.
        self._frame_handle = self.scheduler.call_next_frame(self._start_moving, label="crossing-frame")
        self._done_handle = self.scheduler.call_later(
            self.config.crossing_duration_ms, self._arrive, label="crossing-done"
        )
        log.debug("walking %.1f -> %.1f at offset %.1f", start_left, end_left, y_offset)

    def _start_moving(self):
        self.moving = True
        self._move_started_ms = self.scheduler.now_ms

    def _arrive(self):
        self.walking = False
        self.moving = False
        self.arrived = True
        callback, self._on_arrive = self._on_arrive, None
        if callback:
            callback()

    def cancel(self) -> bool:
        """Drop pending frame/completion timers and return to rest."""
        cancelled = False
        for handle in (self._frame_handle, self._done_handle):
            if handle is not None and handle.cancel():
                cancelled = True
        self._frame_handle = self._done_handle = None
        self._on_arrive = None
        self.reset()
        return cancelled

    @property
    def progress(self) -> float:
        if self.arrived:
            return 1.0
        if not self.moving:
            return 0.0
        elapsed = self.scheduler.now_ms - self._move_started_ms
        return min(1.0, max(0.0, elapsed / self.config.crossing_duration_ms))

    @property
    def current_left(self) -> float:
        if self.arrived:
            return self.end_left
        return self.start_left + (self.end_left - self.start_left) * self.ease(self.progress)

    def resting_position(self, feet_bottom: float) -> Tuple[float, float]:
        """(left, bottom) of the arrived son relative to the father's section."""
        return float(self.config.final_stand_offset), feet_bottom + self.config.final_stand_delta

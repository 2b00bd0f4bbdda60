"""Shared helpers for the visualizer scenes."""

from .timers import Scheduler, TimerHandle

__all__ = [
    "Scheduler",
    "TimerHandle",
]

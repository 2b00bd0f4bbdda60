"""
round.py
--------
One "find every factor" round: a worked example, a practice grid where
the learner toggles candidates 1..n, and a completion phase reached a
short while after a correct check.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from visualizers.shared.arithmetic import factors, is_block_size
from visualizers.shared.timers import Scheduler, TimerHandle

log = logging.getLogger(__name__)

DEFAULT_NUMBERS = (12, 8, 15, 18, 24)
MAX_NUMBER = 60  # the candidate grid has one tile per number up to n
COMPLETE_DELAY_MS = 2000


class Phase(str, Enum):
    EXAMPLE = "example"
    PRACTICE = "practice"
    COMPLETE = "complete"


@dataclass(frozen=True)
class FactorCheck:
    passed: bool
    missing: Tuple[int, ...] = ()
    extra: Tuple[int, ...] = ()

    @property
    def message(self) -> str:
        if self.passed:
            return "Perfect! You found all the factors correctly!"
        parts = ["Not quite right."]
        if self.missing:
            parts.append(f"Missing factors: {', '.join(map(str, self.missing))}.")
        if self.extra:
            parts.append(f"These aren't factors: {', '.join(map(str, self.extra))}.")
        return " ".join(parts)


def group_description(number: int, factor: int) -> str:
    if number % factor:
        return f"{number} blocks do not split into groups of {factor}"
    return f"{factor} groups of {number // factor} blocks = {number} total blocks"


class FactorRound:
    def __init__(self, number: int, scheduler: Optional[Scheduler] = None, complete_delay_ms: float = COMPLETE_DELAY_MS):
        if not is_block_size(number):
            raise ValueError(f"number must be a positive integer, got {number!r}")
        self.number = number
        self.correct = tuple(factors(number))
        self.scheduler = scheduler or Scheduler()
        self.complete_delay_ms = complete_delay_ms
        self.phase = Phase.EXAMPLE
        self.selected: List[int] = []
        self.last_check: Optional[FactorCheck] = None
        self._complete_handle: Optional[TimerHandle] = None

    @property
    def candidates(self) -> range:
        return range(1, self.number + 1)

    @property
    def completing(self) -> bool:
        return self._complete_handle is not None and self._complete_handle.active

    @property
    def feedback(self) -> str:
        return self.last_check.message if self.last_check else ""

    def start_practice(self) -> bool:
        if self.phase is not Phase.EXAMPLE:
            return False
        self.phase = Phase.PRACTICE
        return True

    def toggle(self, candidate: int) -> bool:
        if self.phase is not Phase.PRACTICE or self.completing:
            return False
        if candidate not in self.candidates:
            return False
        if candidate in self.selected:
            self.selected.remove(candidate)
        else:
            self.selected.append(candidate)
        return True

    @property
    def can_check(self) -> bool:
        return self.phase is Phase.PRACTICE and bool(self.selected) and not self.completing

    def check(self) -> Optional[FactorCheck]:
        if not self.can_check:
            return None
        chosen = set(self.selected)
        missing = tuple(f for f in self.correct if f not in chosen)
        extra = tuple(sorted(chosen.difference(self.correct)))
        result = FactorCheck(passed=not missing and not extra, missing=missing, extra=extra)
        self.last_check = result
        log.info("factors of %d: %s", self.number, "pass" if result.passed else "fail")
        if result.passed:
            self._complete_handle = self.scheduler.call_later(self.complete_delay_ms, self._complete, label="factor-complete")
        return result

    def _complete(self):
        self._complete_handle = None
        self.phase = Phase.COMPLETE

    def cancel(self):
        if self._complete_handle is not None:
            self._complete_handle.cancel()
            self._complete_handle = None

"""
round.py
--------
Side-by-side multiples of two numbers, revealed one at a time until both
lists share a value. Once the common multiple shows up the learner has a
fixed time to answer; running out counts as a wrong answer.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from visualizers.shared.arithmetic import blocks_to_meet, first_common_multiple, is_block_size, multiples
from visualizers.shared.timers import Scheduler, TimerHandle

log = logging.getLogger(__name__)

DEFAULT_PAIRS = ((4, 6), (3, 5), (6, 8), (2, 7), (9, 12))
MAX_NUMBER = 50
MIN_SLOTS = 8
ANSWER_TIME_MS = 30000


class MultiplesRound:
    def __init__(
        self,
        a: int,
        b: int,
        scheduler: Optional[Scheduler] = None,
        on_answer: Optional[Callable[[bool], None]] = None,
        answer_time_ms: float = ANSWER_TIME_MS,
    ):
        if not (is_block_size(a) and is_block_size(b)):
            raise ValueError(f"need two positive integers, got {a!r} and {b!r}")
        self.numbers = (a, b)
        self.scheduler = scheduler or Scheduler()
        self.on_answer = on_answer
        self.answer_time_ms = answer_time_ms
        self.target = first_common_multiple(a, b)
        self.meet_steps = blocks_to_meet(a, b)
        self.steps = [0, 0]
        self.selected = ""
        self.result: Optional[bool] = None
        self.timed_out = False
        self._deadline: Optional[TimerHandle] = None

    # -----------------------------------------------------
    #   Revealing
    # -----------------------------------------------------
    @property
    def found(self) -> bool:
        return self.steps[0] >= self.meet_steps[0] and self.steps[1] >= self.meet_steps[1]

    def latest(self, side: int) -> int:
        return self.steps[side] * self.numbers[side]

    def reveal_next(self) -> bool:
        """Show the next multiple on whichever side is behind (both on the first step)."""
        if self.found or self.result is not None:
            return False
        if self.steps == [0, 0]:
            self.steps = [1, 1]
        elif self.latest(0) < self.latest(1):
            self.steps[0] += 1
        else:
            self.steps[1] += 1
        if self.found:
            log.debug("common multiple %d reached after %s steps", self.target, self.steps)
            self._deadline = self.scheduler.call_later(self.answer_time_ms, self._time_up, label="answer-deadline")
        return True

    def slots(self, side: int) -> List[Tuple[int, bool]]:
        """(value, visible) for every tile in one column; hidden tiles pad to MIN_SLOTS."""
        steps = self.steps[side]
        values = multiples(self.numbers[side], max(steps, MIN_SLOTS))
        return [(value, i < steps) for i, value in enumerate(values)]

    def is_common(self, value: int) -> bool:
        return self.found and value == self.target

    @property
    def time_left_ms(self) -> Optional[float]:
        if self._deadline is None or not self._deadline.active:
            return None
        return max(0.0, self._deadline.due_ms - self.scheduler.now_ms)

    # -----------------------------------------------------
    #   Answering
    # -----------------------------------------------------
    @property
    def can_answer(self) -> bool:
        return self.steps[0] > 0 and self.steps[1] > 0 and self.result is None

    def select(self, side: int, index: int) -> bool:
        if not self.can_answer:
            return False
        slots = self.slots(side)
        if not 0 <= index < len(slots) or not slots[index][1]:
            return False
        self.selected = str(slots[index][0])
        return True

    def submit(self, text: Optional[str] = None) -> Optional[bool]:
        """Check ``text`` (or the selected tile) against the LCM; None when not accepted."""
        if not self.can_answer:
            return None
        text = (self.selected if text is None else text).strip()
        if not text:
            return None
        self.selected = text
        try:
            passed = int(text) == self.target
        except ValueError:
            passed = False
        self._settle(passed)
        return passed

    def _time_up(self):
        self._deadline = None
        if self.result is None:
            self.timed_out = True
            self._settle(False)

    def _settle(self, passed: bool):
        self.result = passed
        if self._deadline is not None:
            self._deadline.cancel()
            self._deadline = None
        log.info("LCM of %d and %d: %s", *self.numbers, "pass" if passed else "fail")
        if self.on_answer:
            self.on_answer(passed)

    @property
    def message(self) -> str:
        if self.result is None:
            return ""
        if self.result:
            return "Success! The LCM is correct!"
        if self.timed_out:
            return f"Time is up. The LCM was {self.target}."
        return f"Incorrect. The correct LCM is {self.target}."

    def cancel(self):
        if self._deadline is not None:
            self._deadline.cancel()
            self._deadline = None

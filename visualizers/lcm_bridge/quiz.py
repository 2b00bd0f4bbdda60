"""Ordered LCM questions that drive block sizes and resets."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from visualizers.shared.arithmetic import is_block_size, lcm

log = logging.getLogger(__name__)

DEFAULT_PAIRS = ((2, 3), (4, 6), (3, 5), (6, 8), (4, 10))


class QuestionDeck:
    """
    Ordered LCM questions with one submission each.

    ``question_token`` and ``submit_token`` are what the bridge engine
    watches: the first changes when the current question changes, the second
    on every accepted submission.
    """

    def __init__(self, pairs: Sequence[Tuple[int, int]] = DEFAULT_PAIRS, on_answer: Optional[Callable[[bool], None]] = None):
        pairs = [tuple(p) for p in pairs]
        if not pairs:
            raise ValueError("need at least one question")
        for a, b in pairs:
            if not (is_block_size(a) and is_block_size(b)):
                raise ValueError(f"question numbers must be positive integers, got {(a, b)!r}")
        self.pairs = pairs
        self.on_answer = on_answer
        self.index = 0
        self.answers: List[Optional[str]] = [None] * len(pairs)
        self.results: List[Optional[bool]] = [None] * len(pairs)
        self.submit_token = 0

    @property
    def current(self) -> Tuple[int, int]:
        return self.pairs[self.index]

    @property
    def correct_answer(self) -> int:
        return lcm(*self.current)

    @property
    def question_token(self) -> int:
        return self.index

    @property
    def answered(self) -> bool:
        return self.results[self.index] is not None

    @property
    def finished(self) -> bool:
        return all(r is not None for r in self.results)

    def go_to(self, index: int) -> bool:
        if not 0 <= index < len(self.pairs) or index == self.index:
            return False
        self.index = index
        return True

    def next(self) -> bool:
        return self.go_to(self.index + 1)

    def prev(self) -> bool:
        return self.go_to(self.index - 1)

    def submit(self, text: str) -> Optional[bool]:
        """Check an answer for the current question; None if already answered or blank."""
        if self.answered:
            return None
        text = (text or "").strip()
        if not text:
            return None
        try:
            passed = int(text) == self.correct_answer
        except ValueError:
            passed = False
        self.answers[self.index] = text
        self.results[self.index] = passed
        self.submit_token += 1
        log.info("question %d: %s -> %s", self.index + 1, text, "pass" if passed else "fail")
        if self.on_answer:
            self.on_answer(passed)
        return passed

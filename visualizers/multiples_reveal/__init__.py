"""Multiples grid: reveal both sequences until they meet at the LCM."""

from .round import ANSWER_TIME_MS, DEFAULT_PAIRS, MAX_NUMBER, MultiplesRound

__all__ = [
    "ANSWER_TIME_MS",
    "DEFAULT_PAIRS",
    "MAX_NUMBER",
    "MultiplesRound",
]

"""Factor-finding grid: pick every number that divides n evenly."""

from .round import DEFAULT_NUMBERS, MAX_NUMBER, FactorCheck, FactorRound, Phase, group_description

__all__ = [
    "DEFAULT_NUMBERS",
    "MAX_NUMBER",
    "FactorCheck",
    "FactorRound",
    "Phase",
    "group_description",
]

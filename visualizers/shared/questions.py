"""Command-line question lists: ``4x6,3x5`` pairs and ``12,18`` numbers."""

from __future__ import annotations

from typing import List, Optional, Tuple

from .arithmetic import is_block_size


def parse_pairs(text: str, limit: Optional[int] = None) -> List[Tuple[int, int]]:
    """Parse ``"4x6,3x5"`` into [(4, 6), (3, 5)]."""
    pairs = []
    for chunk in text.split(","):
        chunk = chunk.strip().lower()
        if not chunk:
            continue
        try:
            a, b = (int(part) for part in chunk.split("x"))
        except ValueError:
            raise ValueError(f"bad pair {chunk!r}, expected AxB") from None
        if not (is_block_size(a) and is_block_size(b)):
            raise ValueError(f"bad pair {chunk!r}, both numbers must be positive")
        if limit is not None and max(a, b) > limit:
            raise ValueError(f"bad pair {chunk!r}, numbers go up to {limit}")
        pairs.append((a, b))
    if not pairs:
        raise ValueError("no pairs given")
    return pairs


def parse_numbers(text: str, limit: Optional[int] = None) -> List[int]:
    """Parse ``"12, 18"`` into [12, 18]."""
    numbers = []
    for chunk in text.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            n = int(chunk)
        except ValueError:
            raise ValueError(f"bad number {chunk!r}") from None
        if not is_block_size(n):
            raise ValueError(f"bad number {chunk!r}, must be positive")
        if limit is not None and n > limit:
            raise ValueError(f"bad number {chunk!r}, numbers go up to {limit}")
        numbers.append(n)
    if not numbers:
        raise ValueError("no numbers given")
    return numbers

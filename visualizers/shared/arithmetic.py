"""Number helpers shared by the stacks, the multiples grid and the factor grid."""

from __future__ import annotations

from typing import Iterable, List, Tuple


def is_block_size(value) -> bool:
    """True for positive ints (bools are not block sizes)."""
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def total(blocks: Iterable[int]) -> int:
    return sum(blocks)


def blocks_height(blocks: Iterable[int], scale: int) -> int:
    return total(blocks) * scale


def visual_blocks_height(blocks, scale: int, gap: int) -> int:
    """On-screen height: raw height plus the gap between adjacent blocks."""
    blocks = list(blocks)
    return blocks_height(blocks, scale) + max(0, len(blocks) - 1) * gap


def gcd(a: int, b: int) -> int:
    while b:
        a, b = b, a % b
    return abs(a)


def lcm(a: int, b: int) -> int:
    if a == 0 or b == 0:
        return 0
    return abs(a * b) // gcd(a, b)


def factors(n: int) -> List[int]:
    """All positive divisors of ``n`` in ascending order."""
    if n <= 0:
        raise ValueError(f"factors() needs a positive integer, got {n}")
    small, large = [], []
    i = 1
    while i * i <= n:
        if n % i == 0:
            small.append(i)
            if i != n // i:
                large.append(n // i)
        i += 1
    return small + large[::-1]


def multiples(n: int, count: int) -> List[int]:
    return [n * i for i in range(1, count + 1)]


def first_common_multiple(a: int, b: int) -> int:
    """Walk upward from max(a, b) until both divide; same answer as lcm()."""
    if not (is_block_size(a) and is_block_size(b)):
        raise ValueError(f"need two positive integers, got {a!r} and {b!r}")
    candidate = max(a, b)
    while candidate % a or candidate % b:
        candidate += 1
    return candidate


def blocks_to_meet(a: int, b: int) -> Tuple[int, int]:
    """How many blocks of size a and of size b stack to the LCM height."""
    target = lcm(a, b)
    return target // a, target // b

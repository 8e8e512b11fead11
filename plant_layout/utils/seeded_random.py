"""Seeded deterministic randomness.

Mulberry32 generator and a 32-bit string hash, written with explicit
``& 0xFFFFFFFF`` masking so every intermediate matches 32-bit wraparound
arithmetic. Sequences are identical to the browser implementation for the
same seed, so plant data generated here reproduces the same numbers there.

Same seed -> same sequence, always. Never seed from the clock.
"""

from typing import Sequence, TypeVar

T = TypeVar("T")

MASK32 = 0xFFFFFFFF


def _to_int32(value: int) -> int:
    value &= MASK32
    return value - 0x100000000 if value & 0x80000000 else value


def _imul(a: int, b: int) -> int:
    """32-bit multiply with wraparound (unsigned result)."""
    return ((a & MASK32) * (b & MASK32)) & MASK32


def hash_string(text: str) -> int:
    """Java-style ``h * 31 + c`` hash folded to a positive 32-bit seed.

    Characters are taken as UTF-16 code units, so characters outside the
    BMP contribute their surrogate pair.

    Args:
        text: Seed material (e.g., plant or unit name); None/empty allowed

    Returns:
        Positive integer seed (never 0)
    """
    data = (text or "").encode("utf-16-le", "surrogatepass")
    h = 0
    for i in range(0, len(data), 2):
        unit = int.from_bytes(data[i:i + 2], "little")
        h = _to_int32((h << 5) - h + unit)
    return abs(h) or 1


class Mulberry32:
    """Mulberry32 pseudo-random generator (32-bit state)."""

    def __init__(self, seed: int):
        self.state = seed & MASK32

    def next_uint32(self) -> int:
        self.state = (self.state + 0x6D2B79F5) & MASK32
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK32
        return (t ^ (t >> 14)) & MASK32

    def random(self) -> float:
        """Float in [0, 1)."""
        return self.next_uint32() / 4294967296

    def randint(self, low: int, high: int) -> int:
        """Integer in [low, high] inclusive."""
        if high < low:
            low, high = high, low
        return low + int(self.random() * (high - low + 1))

    def sample_weighted(self, items: Sequence[T], weights: Sequence[float]) -> T:
        """Pick one item with probability proportional to its weight."""
        total = sum(weights)
        if not items or total <= 0:
            raise ValueError("Weighted sample needs items with positive total weight")
        target = self.random() * total
        running = 0.0
        for item, weight in zip(items, weights):
            running += weight
            if target < running:
                return item
        return items[-1]

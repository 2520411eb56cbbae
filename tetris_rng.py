
"""Seeded generator and 7-bag randomizer module"""
import time
from typing import Callable, List

from tetris_piece import TETROMINO_TYPES

MASK32 = 0xFFFFFFFF


def wallclock_seed() -> int:
    return int(time.time() * 1000) & MASK32


def _imul(a: int, b: int) -> int:
    return (a * b) & MASK32


def mulberry32(seed: int) -> Callable[[], float]:
    """Return a generator of floats in [0, 1) following Mulberry32.

    All arithmetic is done on unsigned 32-bit words, so the sequence matches
    the common JavaScript version (``Math.imul`` / ``>>>``) for the same seed.
    """
    state = seed & MASK32

    def rand() -> float:
        nonlocal state
        state = (state + 0x6D2B79F5) & MASK32
        a = state
        t = _imul(a ^ (a >> 15), 1 | a)
        t ^= (t + _imul(t ^ (t >> 7), 61 | t)) & MASK32
        return (t ^ (t >> 14)) / 4294967296

    return rand


class BagRandomizer:
    """Hands out piece types so that every 7 draws hold each type once."""

    def __init__(self, generator: Callable[[], float]):
        self.generator = generator
        self.bag: List[str] = []

    @classmethod
    def seeded(cls, seed: int) -> "BagRandomizer":
        return cls(mulberry32(seed))

    def _refill(self):
        bag = list(TETROMINO_TYPES)
        for i in range(len(bag) - 1, 0, -1):
            j = int(self.generator() * (i + 1))
            bag[i], bag[j] = bag[j], bag[i]
        self.bag = bag

    def next(self) -> str:
        if not self.bag:
            self._refill()
        return self.bag.pop()

    def peek_bag(self) -> List[str]:
        return list(self.bag)

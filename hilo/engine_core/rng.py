"""
Random sources supplied by the caller.

The engine never touches global random state: whoever starts a session
passes something with next_int(low, high).
"""

from __future__ import annotations
import random
from typing import Iterable, Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Anything that can draw an integer in [low, high]."""

    def next_int(self, low: int, high: int) -> int:
        ...


class SeededRandom:
    """RandomSource backed by a private random.Random."""

    def __init__(self, seed: int | None = None):
        self.seed = seed
        self._random = random.Random(seed)

    def next_int(self, low: int, high: int) -> int:
        return self._random.randint(low, high)


class ScriptedRandom:
    """
    RandomSource that replays fixed values, for tests and demos.

    Values are clamped into the requested bounds; the last value repeats
    once the script runs out.
    """

    def __init__(self, values: Iterable[int]):
        self._values = list(values)
        if not self._values:
            raise ValueError("ScriptedRandom needs at least one value")
        self._index = 0

    def next_int(self, low: int, high: int) -> int:
        value = self._values[min(self._index, len(self._values) - 1)]
        self._index += 1
        return max(low, min(high, value))

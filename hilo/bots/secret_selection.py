"""
Secret Selection - How a hider picks its number.

Only the uniform draw is load-bearing. ProbeAvoidingSecretStrategy is
difficulty flavor: it stays away from the numbers a binary-search guesser
tries first, so games against it run a little longer.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..engine_core.number_range import NumberRange
from ..engine_core.outcome import MAX_NUMBER, MIN_NUMBER
from ..engine_core.rng import RandomSource


class SecretSelectionStrategy(ABC):
    """Interface for choosing a hider's secret."""

    name: str = "secret_strategy"

    @abstractmethod
    def choose(self, rng: RandomSource) -> int:
        """Draw a secret in [MIN_NUMBER, MAX_NUMBER] using rng."""


class UniformSecretStrategy(SecretSelectionStrategy):
    """Plain uniform draw."""

    name = "uniform"

    def choose(self, rng: RandomSource) -> int:
        return rng.next_int(MIN_NUMBER, MAX_NUMBER)


@dataclass
class ProbeAvoidingSecretStrategy(SecretSelectionStrategy):
    """
    Pick uniformly among numbers a binary search would not probe early.

    depth is how many levels of the search tree to avoid: depth 1 skips 50,
    depth 2 also skips 25 and 75, and so on.
    """
    depth: int = 3
    name: str = "avoid_probes"

    def __post_init__(self):
        if self.depth < 0:
            raise ValueError(f"depth must be non-negative, got {self.depth}")

    def probes(self) -> set[int]:
        found: set[int] = set()
        frontier = [NumberRange.full()]
        for _ in range(self.depth):
            next_frontier = []
            for current in frontier:
                mid = (current.min + current.max) // 2
                found.add(mid)
                if current.min <= mid - 1:
                    next_frontier.append(NumberRange(current.min, mid - 1))
                if mid + 1 <= current.max:
                    next_frontier.append(NumberRange(mid + 1, current.max))
            frontier = next_frontier
        return found

    def choose(self, rng: RandomSource) -> int:
        excluded = self.probes()
        candidates = [n for n in range(MIN_NUMBER, MAX_NUMBER + 1) if n not in excluded]
        return candidates[rng.next_int(0, len(candidates) - 1)]


SECRET_STRATEGIES: dict[str, type[SecretSelectionStrategy]] = {
    UniformSecretStrategy.name: UniformSecretStrategy,
    "avoid_probes": ProbeAvoidingSecretStrategy,
}


def get_secret_strategy(name: str) -> SecretSelectionStrategy:
    """Instantiate a registered strategy by name."""
    try:
        return SECRET_STRATEGIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown secret strategy {name!r}; choose from {sorted(SECRET_STRATEGIES)}"
        )

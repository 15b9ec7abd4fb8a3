"""
Guess Strategy - Picks the guesser's next number from the current range.
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from .errors import InvalidInputError, Result
from .number_range import NumberRange


class GuessStrategy(ABC):
    """Interface for choosing the next guess."""

    name: str = "strategy"

    @abstractmethod
    def next_guess(self, current: NumberRange) -> Result[int]:
        """Return the next guess inside current."""


class BinarySearchStrategy(GuessStrategy):
    """
    Guess the floor midpoint of the range.

    Memoryless: the guess depends only on the range. A singleton range
    forces its only value, after which anything but Correct is a
    contradiction.
    """

    name = "binary_search"

    def next_guess(self, current: NumberRange) -> Result[int]:
        if not isinstance(current, NumberRange) or not current.is_valid:
            return Result.failure(
                InvalidInputError(f"Cannot guess from invalid range {current}", value=current)
            )
        if current.is_singleton:
            return Result.success(current.min)
        return Result.success((current.min + current.max) // 2)


def next_guess(current: NumberRange) -> Result[int]:
    """Binary-search guess for current."""
    return BinarySearchStrategy().next_guess(current)

"""
Number Range - The closed interval of secrets still consistent with feedback.

Design principles:
- Immutable: narrowing returns a new NumberRange
- Checked construction goes through make_range()
- Contradictions are returned as errors, never coerced into a valid range

Narrowing order is fixed: narrow -> check -> clamp to [1, 100] -> re-check.
"""

from __future__ import annotations
from dataclasses import dataclass

from .errors import ContradictionError, InvalidInputError, Result
from .outcome import MAX_NUMBER, MIN_NUMBER, Outcome, is_integer, validate_number


@dataclass(frozen=True)
class NumberRange:
    """A closed integer interval [min, max]."""
    min: int = MIN_NUMBER
    max: int = MAX_NUMBER

    @classmethod
    def full(cls) -> NumberRange:
        """The starting range [1, 100]."""
        return cls(MIN_NUMBER, MAX_NUMBER)

    @property
    def is_valid(self) -> bool:
        return (
            is_integer(self.min)
            and is_integer(self.max)
            and MIN_NUMBER <= self.min <= self.max <= MAX_NUMBER
        )

    @property
    def is_singleton(self) -> bool:
        return self.min == self.max

    @property
    def size(self) -> int:
        """Number of candidate secrets left."""
        return max(0, self.max - self.min + 1)

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max

    def to_list(self) -> list[int]:
        return [self.min, self.max]

    def __str__(self) -> str:
        return f"[{self.min}, {self.max}]"


def make_range(low: int, high: int) -> Result[NumberRange]:
    """
    Build a valid NumberRange.

    Bounds outside [1, 100] are clamped. Fails with ContradictionError when
    low > high, before or after clamping.
    """
    for name, bound in (("min", low), ("max", high)):
        if not is_integer(bound):
            return Result.failure(
                InvalidInputError(f"range {name} must be an integer, got {bound!r}", value=bound)
            )

    if low > high:
        return Result.failure(
            ContradictionError(f"Empty range [{low}, {high}]", attempted=(low, high))
        )

    clamped_low = max(MIN_NUMBER, low)
    clamped_high = min(MAX_NUMBER, high)
    if clamped_low > clamped_high:
        return Result.failure(
            ContradictionError(
                f"Range [{low}, {high}] lies outside [{MIN_NUMBER}, {MAX_NUMBER}]",
                attempted=(clamped_low, clamped_high),
            )
        )
    return Result.success(NumberRange(clamped_low, clamped_high))


def narrow(current: NumberRange, last_guess: int, outcome: Outcome) -> Result[NumberRange]:
    """
    Apply an outcome for last_guess to the current range.

    HIGHER keeps (last_guess, max], LOWER keeps [min, last_guess),
    CORRECT pins the range to last_guess. Bounds come from the guess alone,
    so feedback about a guess outside the range can move the interval.
    """
    error = validate_number(last_guess, "guess")
    if error:
        return Result.failure(error)
    if not current.is_valid:
        return Result.failure(
            InvalidInputError(f"Cannot narrow invalid range {current}", value=current)
        )
    if not isinstance(outcome, Outcome):
        return Result.failure(InvalidInputError(f"Unknown outcome {outcome!r}", value=outcome))

    if outcome == Outcome.HIGHER:
        new_min, new_max = last_guess + 1, current.max
    elif outcome == Outcome.LOWER:
        new_min, new_max = current.min, last_guess - 1
    else:
        new_min = new_max = last_guess

    if new_min > new_max:
        return Result.failure(_contradiction(current, last_guess, outcome, new_min, new_max))

    clamped_min = max(MIN_NUMBER, new_min)
    clamped_max = min(MAX_NUMBER, new_max)
    if clamped_min > clamped_max:
        return Result.failure(
            _contradiction(current, last_guess, outcome, clamped_min, clamped_max)
        )

    return Result.success(NumberRange(clamped_min, clamped_max))


def is_singleton(current: NumberRange) -> bool:
    return current.is_singleton


def _contradiction(
    current: NumberRange,
    guess: int,
    outcome: Outcome,
    new_min: int,
    new_max: int,
) -> ContradictionError:
    return ContradictionError(
        f"Logical inconsistency: feedback {outcome.value!r} for guess {guess} "
        f"leaves no number in {current} (attempted [{new_min}, {new_max}])",
        prior_range=current,
        guess=guess,
        outcome=outcome,
        attempted=(new_min, new_max),
    )

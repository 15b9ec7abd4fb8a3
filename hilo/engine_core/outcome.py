"""
Guess Outcome - Pure comparison of a guess against the secret.

All Higher/Lower/Correct decisions in the engine go through compare(),
which is also where the [1, 100] integer domain is enforced.
"""

from __future__ import annotations
import math
import re
from enum import Enum
from typing import Any

from .errors import InvalidInputError, Result


MIN_NUMBER = 1
MAX_NUMBER = 100

_NUMBER_RE = re.compile(r"^-?\d*\.?\d+$")


class Outcome(str, Enum):
    """What the hider answers about a guess."""
    LOWER = "lower"  # secret < guess
    HIGHER = "higher"  # secret > guess
    CORRECT = "correct"

    @property
    def label(self) -> str:
        return self.value.capitalize()


def is_integer(value: Any) -> bool:
    # bool is an int subclass but never a valid number here
    return isinstance(value, int) and not isinstance(value, bool)


def validate_number(value: Any, name: str = "guess") -> InvalidInputError | None:
    """
    Check that value is an integer in [MIN_NUMBER, MAX_NUMBER].

    Returns the error, or None when valid.
    """
    if not is_integer(value):
        return InvalidInputError(f"{name} must be an integer, got {value!r}", value=value)
    if not MIN_NUMBER <= value <= MAX_NUMBER:
        return InvalidInputError(
            f"{name} must be between {MIN_NUMBER} and {MAX_NUMBER}, got {value}",
            value=value,
        )
    return None


def compare(guess: int, secret: int) -> Result[Outcome]:
    """
    Compare a guess with the secret.

    Returns Result with the Outcome, or InvalidInputError if either
    argument is outside the integer domain.
    """
    error = validate_number(guess, "guess") or validate_number(secret, "secret")
    if error:
        return Result.failure(error)

    if guess == secret:
        return Result.success(Outcome.CORRECT)
    if guess < secret:
        return Result.success(Outcome.HIGHER)
    return Result.success(Outcome.LOWER)


def parse_number(value: Any) -> int | None:
    """
    Parse user-entered text into an integer.

    Accepts ints, and strings like "42", " 42 " or "42.7" (floored).
    Returns None for anything else. Front ends use this before handing
    a number to the engine; the engine itself never coerces.
    """
    if is_integer(value):
        return value
    if isinstance(value, float):
        return int(value // 1) if math.isfinite(value) else None
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text or not _NUMBER_RE.match(text):
        return None
    return int(float(text) // 1)

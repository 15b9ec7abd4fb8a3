"""
Engine Core - Pure range-narrowing logic for the guessing game.

The engine:
1. Compares guesses with the secret (compare)
2. Interprets free-text feedback (interpret)
3. Narrows the candidate range (narrow)
4. Picks the next binary-search guess (next_guess)

Nothing here keeps state between calls; GameSession owns the state.
"""

from .errors import (
    ErrorCode,
    HiloError,
    InvalidInputError,
    ContradictionError,
    UnclearFeedbackError,
    InvalidStateError,
    SessionBusyError,
    Result,
    RESTART_HINT,
)
from .outcome import Outcome, compare, parse_number, validate_number, MIN_NUMBER, MAX_NUMBER
from .number_range import NumberRange, make_range, narrow, is_singleton
from .narrower import (
    FeedbackInterpreter,
    KeywordInterpreter,
    RangeNarrower,
    Unclear,
    interpret,
)
from .strategy import GuessStrategy, BinarySearchStrategy, next_guess
from .rng import RandomSource, SeededRandom, ScriptedRandom

__all__ = [
    "ErrorCode",
    "HiloError",
    "InvalidInputError",
    "ContradictionError",
    "UnclearFeedbackError",
    "InvalidStateError",
    "SessionBusyError",
    "Result",
    "RESTART_HINT",
    "Outcome",
    "compare",
    "parse_number",
    "validate_number",
    "MIN_NUMBER",
    "MAX_NUMBER",
    "NumberRange",
    "make_range",
    "narrow",
    "is_singleton",
    "FeedbackInterpreter",
    "KeywordInterpreter",
    "RangeNarrower",
    "Unclear",
    "interpret",
    "GuessStrategy",
    "BinarySearchStrategy",
    "next_guess",
    "RandomSource",
    "SeededRandom",
    "ScriptedRandom",
]

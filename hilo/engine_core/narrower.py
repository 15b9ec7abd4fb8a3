"""
Range Narrower - Turns feedback (an Outcome or free text) into a new range.

Free text goes through a FeedbackInterpreter. The only implementation is a
fixed keyword table; it is an interface so another classifier can replace it
without touching GameSession.

Ambiguous text is never guessed at: it comes back as Unclear and the caller
re-prompts.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Union

from .errors import Result, UnclearFeedbackError
from .number_range import NumberRange, narrow
from .outcome import Outcome


@dataclass(frozen=True)
class Unclear:
    """Feedback text that matched nothing."""
    text: str


Interpretation = Union[Outcome, Unclear]


# (keyword, excluded superstring) pairs, checked in order
CORRECT_KEYWORDS: tuple[tuple[str, str | None], ...] = (
    ("correct", None),
    ("right", None),
    ("you got it", None),
    ("got it", None),
    ("yes", None),
    ("bingo", None),
    ("exactly", None),
    ("perfect", None),
    ("bull's eye", None),
    ("bullseye", None),
)

HIGHER_KEYWORDS: tuple[tuple[str, str | None], ...] = (
    ("higher", None),
    ("go higher", None),
    ("bigger", None),
    ("too low", None),
    ("low", "lower"),
    ("too small", None),
    ("small", "smaller"),
    ("up", None),
    ("more", None),
    ("increase", None),
)

LOWER_KEYWORDS: tuple[tuple[str, str | None], ...] = (
    ("lower", None),
    ("go lower", None),
    ("smaller", None),
    ("too high", None),
    ("too big", None),
    ("high", "higher"),
    ("big", "bigger"),
    ("down", None),
    ("less", None),
    ("decrease", None),
)

SHORTHANDS = {
    "h": Outcome.HIGHER,
    "l": Outcome.LOWER,
    "c": Outcome.CORRECT,
}


class FeedbackInterpreter(ABC):
    """Classifies free-text feedback."""

    @abstractmethod
    def interpret(self, text: str) -> Interpretation:
        """Return the Outcome the text means, or Unclear."""


class KeywordInterpreter(FeedbackInterpreter):
    """
    Case-insensitive substring match over a fixed keyword table.

    Correct is checked first, then Higher, then Lower; the first match wins.
    """

    def __init__(self):
        self._table: list[tuple[Outcome, tuple[tuple[str, str | None], ...]]] = [
            (Outcome.CORRECT, CORRECT_KEYWORDS),
            (Outcome.HIGHER, HIGHER_KEYWORDS),
            (Outcome.LOWER, LOWER_KEYWORDS),
        ]

    def interpret(self, text: str) -> Interpretation:
        normalized = str(text).lower().strip()
        if not normalized:
            return Unclear(text=str(text))

        for outcome, keywords in self._table:
            if any(_matches(normalized, kw, excluded) for kw, excluded in keywords):
                return outcome

        if normalized in SHORTHANDS:
            return SHORTHANDS[normalized]
        return Unclear(text=str(text))


def _matches(text: str, keyword: str, excluded: str | None) -> bool:
    if keyword not in text:
        return False
    return excluded is None or excluded not in text


_DEFAULT_INTERPRETER = KeywordInterpreter()


def interpret(text: str) -> Interpretation:
    """Classify feedback text with the default keyword table."""
    return _DEFAULT_INTERPRETER.interpret(text)


@dataclass
class RangeNarrower:
    """Applies feedback to a range."""
    interpreter: FeedbackInterpreter = field(default_factory=KeywordInterpreter)

    def to_outcome(self, feedback: Outcome | str) -> Result[Outcome]:
        """
        Resolve feedback into an Outcome.

        Outcome values pass straight through. Text is interpreted;
        Unclear becomes an UnclearFeedbackError failure.
        """
        if isinstance(feedback, Outcome):
            return Result.success(feedback)

        interpretation = self.interpreter.interpret(feedback)
        if isinstance(interpretation, Unclear):
            return Result.failure(UnclearFeedbackError(interpretation.text))
        return Result.success(interpretation)

    def apply(
        self,
        current: NumberRange,
        last_guess: int,
        feedback: Outcome | str,
    ) -> Result[NumberRange]:
        """Narrow current by feedback about last_guess."""
        resolved = self.to_outcome(feedback)
        if not resolved.ok:
            return Result.failure(resolved.error)
        return narrow(current, last_guess, resolved.value)

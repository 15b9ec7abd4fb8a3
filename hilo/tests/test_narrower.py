"""
Tests for free-text feedback interpretation and RangeNarrower.
"""

import pytest

from ..engine_core import (
    FeedbackInterpreter,
    KeywordInterpreter,
    NumberRange,
    Outcome,
    RangeNarrower,
    Unclear,
    interpret,
)
from ..engine_core.errors import ErrorCode


class TestKeywordTable:
    """Correct is checked first, then Higher, then Lower."""

    @pytest.mark.parametrize("text", [
        "correct", "Right!", "you got it", "yes", "Bingo", "exactly", "perfect", "bullseye",
    ])
    def test_correct(self, text):
        assert interpret(text) == Outcome.CORRECT

    @pytest.mark.parametrize("text", [
        "higher", "Go higher", "bigger", "too low", "TOO LOW!", "small", "up", "more", "increase",
    ])
    def test_higher(self, text):
        assert interpret(text) == Outcome.HIGHER

    @pytest.mark.parametrize("text", [
        "lower", "go lower", "smaller", "too high", "too big", "high", "big", "down", "less",
        "decrease",
    ])
    def test_lower(self, text):
        assert interpret(text) == Outcome.LOWER

    def test_lower_is_not_read_as_low(self):
        # "low" means go higher, but only when "lower" is absent
        assert interpret("lower") == Outcome.LOWER
        assert interpret("low") == Outcome.HIGHER

    def test_higher_is_not_read_as_high(self):
        assert interpret("higher") == Outcome.HIGHER
        assert interpret("high") == Outcome.LOWER

    def test_correct_wins_over_direction(self):
        assert interpret("you got it, no need to go higher") == Outcome.CORRECT

    @pytest.mark.parametrize("text, expected", [
        ("h", Outcome.HIGHER),
        ("L", Outcome.LOWER),
        (" c ", Outcome.CORRECT),
    ])
    def test_shorthands(self, text, expected):
        assert interpret(text) == expected

    @pytest.mark.parametrize("text", ["banana", "maybe", "", "   ", "hl"])
    def test_unclear(self, text):
        result = interpret(text)
        assert isinstance(result, Unclear)
        assert result.text == text


class TestRangeNarrower:

    def test_outcome_passes_through(self):
        result = RangeNarrower().to_outcome(Outcome.LOWER)
        assert result.value == Outcome.LOWER

    def test_unclear_is_soft_failure(self):
        result = RangeNarrower().to_outcome("purple")
        assert not result.ok
        assert result.error.code == ErrorCode.UNCLEAR_FEEDBACK
        assert result.error.recoverable
        assert "purple" in result.error.message

    def test_apply_text(self):
        result = RangeNarrower().apply(NumberRange.full(), 50, "too low")
        assert result.value == NumberRange(51, 100)

    def test_apply_contradiction(self):
        result = RangeNarrower().apply(NumberRange(50, 50), 50, "go lower")
        assert result.error.code == ErrorCode.CONTRADICTION

    def test_custom_interpreter(self):
        class AlwaysCorrect(FeedbackInterpreter):
            def interpret(self, text):
                return Outcome.CORRECT

        narrower = RangeNarrower(interpreter=AlwaysCorrect())
        assert narrower.apply(NumberRange.full(), 42, "whatever").value == NumberRange(42, 42)

    def test_default_interpreter_type(self):
        assert isinstance(RangeNarrower().interpreter, KeywordInterpreter)

"""
Tests for range construction and narrowing.

Tests:
- Each outcome narrows to the right interval
- Contradictions are reported, never coerced
- Clamping to [1, 100]
"""

import pytest

from ..engine_core import (
    ContradictionError,
    InvalidInputError,
    NumberRange,
    Outcome,
    compare,
    is_singleton,
    make_range,
    narrow,
)


class TestNumberRange:

    def test_full_range(self):
        full = NumberRange.full()
        assert (full.min, full.max) == (1, 100)
        assert full.size == 100
        assert full.is_valid
        assert not full.is_singleton

    def test_singleton(self):
        assert is_singleton(NumberRange(7, 7))
        assert NumberRange(7, 7).size == 1

    def test_str_and_list(self):
        assert str(NumberRange(13, 24)) == "[13, 24]"
        assert NumberRange(13, 24).to_list() == [13, 24]

    def test_invalid_ranges(self):
        assert not NumberRange(5, 3).is_valid
        assert not NumberRange(0, 10).is_valid
        assert NumberRange(5, 3).size == 0

    def test_immutable(self):
        current = NumberRange.full()
        with pytest.raises(Exception):
            current.min = 5


class TestMakeRange:

    def test_clamps_to_domain(self):
        result = make_range(-10, 150)
        assert result.ok
        assert result.value == NumberRange(1, 100)

    def test_low_above_high(self):
        result = make_range(10, 5)
        assert isinstance(result.error, ContradictionError)
        assert result.error.attempted == (10, 5)

    def test_empty_after_clamp(self):
        result = make_range(150, 200)
        assert isinstance(result.error, ContradictionError)

    def test_non_integer_bound(self):
        result = make_range(1.5, 10)
        assert isinstance(result.error, InvalidInputError)


class TestNarrow:
    """Narrowing order: narrow, check, clamp, re-check."""

    @pytest.mark.parametrize("outcome, expected", [
        (Outcome.HIGHER, NumberRange(51, 100)),
        (Outcome.LOWER, NumberRange(1, 49)),
        (Outcome.CORRECT, NumberRange(50, 50)),
    ])
    def test_each_outcome(self, outcome, expected):
        result = narrow(NumberRange.full(), 50, outcome)
        assert result.ok
        assert result.value == expected

    def test_narrowing_returns_new_range(self):
        current = NumberRange.full()
        narrow(current, 50, Outcome.HIGHER)
        assert current == NumberRange(1, 100)

    def test_higher_at_top_is_contradiction(self):
        result = narrow(NumberRange(100, 100), 100, Outcome.HIGHER)
        assert not result.ok
        error = result.error
        assert isinstance(error, ContradictionError)
        assert not error.recoverable
        assert error.prior_range == NumberRange(100, 100)
        assert error.guess == 100
        assert error.outcome == Outcome.HIGHER

    def test_lower_at_bottom_is_contradiction(self):
        result = narrow(NumberRange(1, 1), 1, Outcome.LOWER)
        assert isinstance(result.error, ContradictionError)

    def test_singleton_wrong_direction(self):
        result = narrow(NumberRange(50, 50), 50, Outcome.HIGHER)
        assert isinstance(result.error, ContradictionError)
        assert result.error.attempted == (51, 50)

    def test_bounds_come_from_the_guess(self):
        result = narrow(NumberRange(51, 100), 30, Outcome.HIGHER)
        assert result.value == NumberRange(31, 100)

    def test_guess_outside_range_can_contradict(self):
        result = narrow(NumberRange(51, 100), 30, Outcome.LOWER)
        assert isinstance(result.error, ContradictionError)

    def test_inconsistent_sequence_is_contradiction(self):
        first = narrow(NumberRange(10, 20), 15, Outcome.HIGHER)
        assert first.value == NumberRange(16, 20)
        second = narrow(first.value, 12, Outcome.LOWER)
        assert isinstance(second.error, ContradictionError)
        assert second.error.prior_range == NumberRange(16, 20)
        assert second.error.attempted == (16, 11)

    def test_correct_pins_to_guess(self):
        result = narrow(NumberRange(51, 100), 30, Outcome.CORRECT)
        assert result.value == NumberRange(30, 30)

    @pytest.mark.parametrize("guess", [0, 101, 2.5])
    def test_invalid_guess(self, guess):
        result = narrow(NumberRange.full(), guess, Outcome.HIGHER)
        assert isinstance(result.error, InvalidInputError)

    def test_invalid_current_range(self):
        result = narrow(NumberRange(60, 40), 50, Outcome.HIGHER)
        assert isinstance(result.error, InvalidInputError)

    def test_unknown_outcome(self):
        result = narrow(NumberRange.full(), 50, "sideways")
        assert isinstance(result.error, InvalidInputError)

    def test_contradiction_details(self):
        error = narrow(NumberRange(50, 50), 50, Outcome.LOWER).error
        data = error.to_dict()
        assert data["error_code"] == "CONTRADICTION"
        assert data["details"]["prior_range"] == [50, 50]
        assert data["details"]["outcome"] == "lower"
        assert "restart" in data["details"]["suggestion"]


class TestNarrowingKeepsSecret:
    """Truthful feedback never loses the secret and always makes progress."""

    @pytest.mark.parametrize("secret", [1, 2, 23, 50, 51, 99, 100])
    def test_secret_survives(self, secret):
        current = NumberRange.full()
        for guess in range(1, 101, 3):
            if not current.contains(guess):
                continue
            outcome = compare(guess, secret).value
            narrowed = narrow(current, guess, outcome).value
            assert narrowed.contains(secret)
            if not current.is_singleton:
                assert narrowed.size < current.size
            current = narrowed

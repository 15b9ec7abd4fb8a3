"""
Tests for API Pydantic schemas.
"""

import pytest
from pydantic import ValidationError

from ..api.schemas import (
    CreateSessionRequest,
    ErrorResponse,
    FeedbackRequest,
    RangeInfo,
    TurnInfo,
)
from ..engine_core import NumberRange, Outcome
from ..engine_core.errors import ErrorCode
from ..session import Role


class TestPydanticSchemas:

    def test_create_defaults(self):
        request = CreateSessionRequest()
        assert request.role == Role.GUESSER
        assert request.max_guesses is None

    def test_create_from_json_values(self):
        request = CreateSessionRequest.model_validate({"role": "hider", "seed": 3})
        assert request.role == Role.HIDER

    @pytest.mark.parametrize("value", [0, 101])
    def test_max_guesses_bounds(self, value):
        with pytest.raises(ValidationError):
            CreateSessionRequest(max_guesses=value)

    def test_feedback_needs_outcome_or_text(self):
        with pytest.raises(ValidationError):
            FeedbackRequest()
        with pytest.raises(ValidationError):
            FeedbackRequest(text="   ")

    def test_feedback_outcome_from_string(self):
        assert FeedbackRequest(outcome="lower").outcome == Outcome.LOWER

    def test_range_from_attributes(self):
        info = RangeInfo.model_validate(NumberRange(3, 9))
        assert (info.min, info.max) == (3, 9)

    def test_turn_info_payloads(self):
        guess = TurnInfo(turn_number=1, actor="guesser", kind="guess", payload=50)
        answer = TurnInfo(turn_number=1, actor="hider", kind="outcome", payload="lower")
        assert guess.payload == 50
        assert answer.actor == Role.HIDER

    def test_error_response_serializes_code(self):
        data = ErrorResponse(error="nope", error_code=ErrorCode.SESSION_BUSY).model_dump(mode="json")
        assert data["error_code"] == "SESSION_BUSY"
        assert data["api_version"] == "v1"

"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a UI and the engine.

Error Codes:
- INVALID_INPUT: Guess or secret outside 1..100; re-prompt
- UNCLEAR_FEEDBACK: Feedback text not understood; re-prompt
- INVALID_STATE: Move on a finished session, or the wrong kind of move
- SESSION_BUSY: Another request is advancing the same session
- SESSION_NOT_FOUND: Session does not exist or has been ended

A contradiction is not an error response: the move is recorded, the game
ends, and the TurnResponse carries error_code CONTRADICTION with restart
guidance.
"""

from typing import Optional, Any, Union
from pydantic import BaseModel, Field, model_validator

from ..engine_core.errors import ErrorCode
from ..engine_core.outcome import Outcome
from ..session.game_session import FinishReason, SessionStatus
from ..session.turn import Role


# =============================================================================
# Shared Models
# =============================================================================

class RangeInfo(BaseModel):
    """Current candidate interval."""
    min: int
    max: int

    model_config = {"from_attributes": True}


class TurnInfo(BaseModel):
    """One transcript entry."""
    turn_number: int
    actor: Role
    kind: str = Field(description="guess, outcome or text")
    payload: Union[int, str]
    resulting_range: Optional[list[int]] = None
    message: str = ""
    revealed_secret: Optional[int] = None
    timestamp: float = 0.0


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create and start a game session."""
    role: Role = Field(
        Role.GUESSER,
        description="Role the engine plays: 'hider' keeps a secret, 'guesser' guesses yours",
    )
    max_guesses: Optional[int] = Field(None, ge=1, le=100, description="Guess limit")
    seed: Optional[int] = Field(None, description="Seed for a reproducible secret")
    secret: Optional[int] = Field(None, description="Fixed secret for a hider session")
    secret_strategy: Optional[str] = Field(
        None, description="How the hider picks its secret: uniform, avoid_probes"
    )


class GuessRequest(BaseModel):
    """A guess against a hider session."""
    guess: int = Field(..., description="Guessed number, 1..100")


class FeedbackRequest(BaseModel):
    """The answer to the engine's last guess. Give outcome or text."""
    outcome: Optional[Outcome] = Field(None, description="higher, lower or correct")
    text: Optional[str] = Field(None, description="Free text such as 'too low'")

    @model_validator(mode="after")
    def _one_of(self):
        if self.outcome is None and not (self.text and self.text.strip()):
            raise ValueError("Either outcome or text is required")
        return self


class SelfPlayRequest(BaseModel):
    """Request a headless self-play game."""
    secret: Optional[int] = Field(None, description="Fixed secret; random if omitted")
    max_guesses: Optional[int] = Field(None, ge=1, le=100)
    seed: Optional[int] = Field(None, description="Seed for the random secret")
    secret_strategy: Optional[str] = None


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class SessionResponse(BaseModel):
    """Session status. The secret appears only after the game."""
    session_id: str
    role: Role
    status: SessionStatus
    finish_reason: Optional[FinishReason] = None
    range: RangeInfo
    last_guess: Optional[int] = None
    guess_count: int = 0
    max_guesses: int = 10
    remaining_guesses: int = 0
    revealed_secret: Optional[int] = None
    efficiency: Optional[str] = None
    message: Optional[str] = None
    created_at: float = 0.0
    api_version: str = "v1"


class TurnResponse(BaseModel):
    """Response after a guess or feedback."""
    session_id: str
    success: bool
    status: SessionStatus
    finish_reason: Optional[FinishReason] = None
    guess: Optional[int] = None
    outcome: Optional[Outcome] = None
    next_guess: Optional[int] = Field(None, description="Engine's next guess (guesser sessions)")
    range: Optional[RangeInfo] = None
    guess_count: int = 0
    new_turns: list[TurnInfo] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    message: str = ""
    error_code: Optional[ErrorCode] = None
    revealed_secret: Optional[int] = None
    api_version: str = "v1"


class TranscriptResponse(BaseModel):
    """Full ordered transcript of a session."""
    session_id: str
    turns: list[TurnInfo]
    count: int


class SelfPlayResponse(BaseModel):
    """A complete self-play game."""
    session_id: str
    secret: int
    total_guesses: int
    result: FinishReason
    efficiency: str
    guesses: list[int]
    transcript: list[TurnInfo]
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str

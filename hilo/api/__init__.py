"""
API Module - HTTP interface for game UIs.

A UI:
1. Creates a session, choosing the role the engine plays
2. Sends guesses, or answers the engine's guesses
3. Reads the transcript to render the conversation
4. Optionally asks for a complete self-play game

All state is session-scoped and in memory.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    GuessRequest,
    FeedbackRequest,
    SelfPlayRequest,
    # Responses
    SessionResponse,
    TurnResponse,
    TranscriptResponse,
    SelfPlayResponse,
    ErrorResponse,
    # Shared
    RangeInfo,
    TurnInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "GuessRequest",
    "FeedbackRequest",
    "SelfPlayRequest",
    # Responses
    "SessionResponse",
    "TurnResponse",
    "TranscriptResponse",
    "SelfPlayResponse",
    "ErrorResponse",
    # Shared
    "RangeInfo",
    "TurnInfo",
    # Service
    "APIService",
    "create_app",
]

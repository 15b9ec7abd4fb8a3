"""
Session Module - Stateful games built on the pure engine core.

A session represents one play-through:
- Started with the role the engine plays
- Advanced one synchronous call per external event
- Finished on a correct guess, a contradiction, or a timeout

SelfPlayRunner plays both roles headlessly; SessionManager keeps the
in-memory registry the API serves from.
"""

from .turn import Role, Turn
from .game_session import (
    GameSession,
    SessionStatus,
    FinishReason,
    TurnResult,
    HiderView,
    GuesserView,
)
from .self_play import SelfPlayRunner, SelfPlayResult
from .manager import SessionManager, ManagedSession

__all__ = [
    "Role",
    "Turn",
    "GameSession",
    "SessionStatus",
    "FinishReason",
    "TurnResult",
    "HiderView",
    "GuesserView",
    "SelfPlayRunner",
    "SelfPlayResult",
    "SessionManager",
    "ManagedSession",
]

"""
API Service - Business logic layer between the HTTP app and the engine.

The service:
1. Translates requests into session calls
2. Serializes moves on a session through SessionManager.claim()
3. Maps engine errors onto ErrorResponse

This layer is framework-agnostic; every method returns a pydantic model.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .schemas import (
    CreateSessionRequest,
    GuessRequest,
    FeedbackRequest,
    SelfPlayRequest,
    ErrorResponse,
    SessionResponse,
    TurnResponse,
    TranscriptResponse,
    SelfPlayResponse,
    RangeInfo,
    TurnInfo,
)
from ..bots.secret_selection import get_secret_strategy
from ..config import GameConfig
from ..engine_core.errors import ErrorCode, HiloError, RESTART_HINT
from ..engine_core.rng import SeededRandom
from ..session import GameSession, SelfPlayRunner, SessionManager, Turn, TurnResult
from ..session.game_session import FinishReason


log = logging.getLogger("hilo.api")


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()
        session = service.create_session(CreateSessionRequest(role="hider", seed=1))
        turn = service.submit_guess(session.session_id, GuessRequest(guess=50))
    """
    config: GameConfig = field(default_factory=GameConfig)
    session_manager: SessionManager | None = None

    def __post_init__(self):
        if self.session_manager is None:
            self.session_manager = SessionManager(config=self.config)

    def create_session(self, request: CreateSessionRequest) -> SessionResponse | ErrorResponse:
        """Create and start a session."""
        try:
            strategy = (
                get_secret_strategy(request.secret_strategy)
                if request.secret_strategy else None
            )
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.VALIDATION_ERROR)

        managed = self.session_manager.create_session(
            request.role,
            rng=SeededRandom(request.seed),
            max_guesses=request.max_guesses,
            secret=request.secret,
            secret_strategy=strategy,
        )
        if not managed.start_result.success:
            return self._error(managed.start_result.error)

        return self._session_to_response(managed.session, message=managed.start_result.message)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """Get session status."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def submit_guess(self, session_id: str, request: GuessRequest) -> TurnResponse | ErrorResponse:
        """Guess against a session where the engine hides."""
        return self._advance(session_id, lambda session: session.submit_guess(request.guess))

    def submit_feedback(
        self,
        session_id: str,
        request: FeedbackRequest,
    ) -> TurnResponse | ErrorResponse:
        """Answer the engine's guess in a session where the engine guesses."""
        feedback = request.outcome if request.outcome is not None else request.text
        return self._advance(session_id, lambda session: session.submit_feedback(feedback))

    def get_transcript(self, session_id: str) -> TranscriptResponse | ErrorResponse:
        """Get the ordered transcript."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        turns = [self._turn_info(turn) for turn in session.transcript]
        return TranscriptResponse(session_id=session_id, turns=turns, count=len(turns))

    def end_session(self, session_id: str) -> bool:
        """End a session. Returns False if it did not exist."""
        return self.session_manager.end_session(session_id)

    def list_sessions(self, active_only: bool = False) -> list[str]:
        """List session IDs."""
        return self.session_manager.list_sessions(active_only=active_only)

    def self_play(self, request: SelfPlayRequest) -> SelfPlayResponse | ErrorResponse:
        """Run a complete self-play game."""
        try:
            strategy = get_secret_strategy(request.secret_strategy or self.config.secret_strategy)
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.VALIDATION_ERROR)

        runner = SelfPlayRunner(config=self.config)
        try:
            result = runner.run(
                secret=request.secret,
                rng=SeededRandom(request.seed),
                max_guesses=request.max_guesses,
                secret_strategy=strategy,
            )
        except HiloError as e:
            return self._error(e)

        return SelfPlayResponse(
            session_id=result.session_id,
            secret=result.secret,
            total_guesses=result.total_guesses,
            result=result.finish_reason,
            efficiency=result.efficiency,
            guesses=result.guesses,
            transcript=[self._turn_info(turn) for turn in result.transcript],
        )

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _advance(self, session_id: str, move) -> TurnResponse | ErrorResponse:
        """Apply one move under the session's in-flight guard."""
        try:
            with self.session_manager.claim(session_id) as session:
                if session is None:
                    return self._not_found(session_id)
                result = move(session)
        except HiloError as e:
            log.info("Rejected move on %s: %s", session_id, e.message)
            return self._error(e)

        if not result.success and not result.finished:
            return self._error(result.error)
        return self._turn_to_response(session, result)

    def _turn_to_response(self, session: GameSession, result: TurnResult) -> TurnResponse:
        contradiction = result.finish_reason == FinishReason.CONTRADICTION
        return TurnResponse(
            session_id=session.session_id,
            success=result.success,
            status=result.status,
            finish_reason=result.finish_reason,
            guess=result.guess,
            outcome=result.outcome,
            next_guess=result.next_guess,
            range=RangeInfo.model_validate(result.range) if result.range else None,
            guess_count=session.guess_count,
            new_turns=[self._turn_info(turn) for turn in result.new_turns],
            warnings=result.warnings,
            message=RESTART_HINT if contradiction else result.message,
            error_code=result.error.code if result.error else None,
            revealed_secret=session.revealed_secret,
        )

    def _session_to_response(self, session: GameSession, message: str | None = None) -> SessionResponse:
        snapshot = session.snapshot()
        return SessionResponse(
            session_id=session.session_id,
            role=session.role,
            status=session.status,
            finish_reason=session.finish_reason,
            range=RangeInfo.model_validate(session.range),
            last_guess=session.last_guess,
            guess_count=session.guess_count,
            max_guesses=session.max_guesses,
            remaining_guesses=session.remaining_guesses,
            revealed_secret=session.revealed_secret,
            efficiency=snapshot["efficiency"],
            message=message,
            created_at=session.created_at,
        )

    @staticmethod
    def _turn_info(turn: Turn) -> TurnInfo:
        return TurnInfo(**turn.to_dict())

    @staticmethod
    def _error(error: HiloError) -> ErrorResponse:
        data = error.to_dict()
        return ErrorResponse(
            error=data["error"],
            error_code=error.code,
            details=data.get("details"),
        )

    @staticmethod
    def _not_found(session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

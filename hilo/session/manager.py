"""
Session Manager - Creates and tracks game sessions.

Sessions are in-memory only:
- Created when a player starts a game
- Advanced one event at a time through claim()
- Dropped when ended, or swept once finished and stale

claim() is the single in-flight guard: a second caller trying to advance
the same session while the first is still inside gets SessionBusyError
instead of interleaving moves.
"""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator
import logging
import threading
import time

from ..bots.secret_selection import SecretSelectionStrategy, get_secret_strategy
from ..config import GameConfig
from ..engine_core.errors import SessionBusyError
from ..engine_core.rng import RandomSource, SeededRandom
from .game_session import GameSession, TurnResult
from .turn import Role


log = logging.getLogger("hilo.session_manager")


@dataclass
class ManagedSession:
    """A session plus its bookkeeping."""
    session: GameSession
    created_at: float
    start_result: TurnResult
    lock: threading.Lock = field(default_factory=threading.Lock)

    @property
    def session_id(self) -> str:
        return self.session.session_id


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create and start sessions
    - Serialize advancement of each session
    - Clean up ended sessions
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config or GameConfig()
        self._clock = clock
        self._sessions: dict[str, ManagedSession] = {}
        self._registry_lock = threading.Lock()

    def create_session(
        self,
        role: Role | str,
        rng: RandomSource | None = None,
        max_guesses: int | None = None,
        secret: int | None = None,
        secret_strategy: SecretSelectionStrategy | None = None,
    ) -> ManagedSession:
        """
        Create and start a new session where the engine plays `role`.

        Args:
            role: Role the engine plays
            rng: Random source for the hider's secret (a fresh SeededRandom if omitted)
            max_guesses: Override of the configured guess limit
            secret: Fixed secret for a hider session
            secret_strategy: Override of the configured secret strategy

        Returns:
            The started session. If the secret was invalid the start result
            carries the error and the session is not registered.
        """
        config = self.config.with_max_guesses(max_guesses)
        session = GameSession(config=config, clock=self._clock)
        strategy = secret_strategy or get_secret_strategy(config.secret_strategy)

        result = session.start(
            role,
            rng=rng or SeededRandom(),
            secret=secret,
            secret_strategy=strategy,
        )
        managed = ManagedSession(
            session=session,
            created_at=self._clock(),
            start_result=result,
        )
        if result.success:
            with self._registry_lock:
                self._sessions[session.session_id] = managed
            log.info("Created session %s (engine plays %s)", session.session_id, session.role.value)
        return managed

    def get_session(self, session_id: str) -> GameSession | None:
        """Get a session by ID."""
        managed = self._sessions.get(session_id)
        return managed.session if managed else None

    @contextmanager
    def claim(self, session_id: str) -> Iterator[GameSession | None]:
        """
        Hold exclusive rights to advance a session.

        Yields None for an unknown session. Raises SessionBusyError if
        another caller holds the claim.
        """
        managed = self._sessions.get(session_id)
        if managed is None:
            yield None
            return

        if not managed.lock.acquire(blocking=False):
            raise SessionBusyError(f"Session {session_id} is already being advanced")
        try:
            yield managed.session
        finally:
            managed.lock.release()

    def end_session(self, session_id: str) -> bool:
        """
        End a session and forget it.

        Returns False if no such session existed.
        """
        with self._registry_lock:
            managed = self._sessions.pop(session_id, None)
        if managed:
            log.info("Ended session %s", session_id)
        return managed is not None

    def list_sessions(self, active_only: bool = False) -> list[str]:
        """List session IDs, optionally only those still being played."""
        return [
            sid for sid, managed in self._sessions.items()
            if not active_only or managed.session.is_playing
        ]

    def cleanup_finished(self, max_age_seconds: float = 3600) -> list[str]:
        """
        Drop finished sessions older than max_age_seconds.

        Returns the IDs removed.
        """
        now = self._clock()
        stale = [
            sid for sid, managed in self._sessions.items()
            if managed.session.is_finished and now - managed.created_at > max_age_seconds
        ]
        for session_id in stale:
            self.end_session(session_id)
        return stale

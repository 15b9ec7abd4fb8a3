"""
Self-Play - The engine plays both roles to produce a full game trace.

The runner starts a HIDER session (so the session owns the secret) and
plays the guesser itself with a GuessStrategy over the session's range.
Everything is synchronous; a fixed secret always gives the same transcript.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable
import logging
import time

from ..config import GameConfig
from ..engine_core.rng import RandomSource
from ..engine_core.strategy import BinarySearchStrategy, GuessStrategy
from ..bots.secret_selection import SecretSelectionStrategy
from .game_session import FinishReason, GameSession
from .turn import Role, Turn


log = logging.getLogger("hilo.self_play")


@dataclass
class SelfPlayResult:
    """Everything a renderer needs to replay a self-play game."""
    session_id: str
    secret: int
    transcript: list[Turn]
    total_guesses: int
    finish_reason: FinishReason
    efficiency: str
    guesses: list[int] = field(default_factory=list)

    @property
    def won(self) -> bool:
        return self.finish_reason == FinishReason.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "secret": self.secret,
            "total_guesses": self.total_guesses,
            "result": self.finish_reason.value,
            "efficiency": self.efficiency,
            "guesses": list(self.guesses),
            "transcript": [turn.to_dict() for turn in self.transcript],
        }


class SelfPlayRunner:
    """
    Drives one GameSession to the end without outside input.

    Usage:
        result = SelfPlayRunner().run(secret=23)
        result.guesses  # [50, 25, 12, 18, 21, 23]
    """

    def __init__(
        self,
        strategy: GuessStrategy | None = None,
        config: GameConfig | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.strategy = strategy or BinarySearchStrategy()
        self.config = config or GameConfig()
        self.clock = clock

    def run(
        self,
        secret: int | None = None,
        rng: RandomSource | None = None,
        max_guesses: int | None = None,
        secret_strategy: SecretSelectionStrategy | None = None,
    ) -> SelfPlayResult:
        """
        Play a full game.

        Either secret or rng must be given. max_guesses overrides the
        runner's config for this game only.

        Raises InvalidInputError if secret is outside [1, 100].
        """
        config = self.config.with_max_guesses(max_guesses)
        session = GameSession(config=config, strategy=self.strategy, clock=self.clock)

        started = session.start(Role.HIDER, rng=rng, secret=secret, secret_strategy=secret_strategy)
        if not started.success:
            raise started.error

        guesses = []
        while session.is_playing:
            guess = self.strategy.next_guess(session.range).unwrap()
            guesses.append(guess)
            session.submit_guess(guess)

        secret = session.revealed_secret
        log.info(
            "Self-play for %d finished: %s in %d guesses",
            secret, session.finish_reason.value, session.guess_count,
        )
        return SelfPlayResult(
            session_id=session.session_id,
            secret=secret,
            transcript=list(session.transcript),
            total_guesses=session.guess_count,
            finish_reason=session.finish_reason,
            efficiency=(
                config.grade_efficiency(session.guess_count)
                if session.finish_reason == FinishReason.SUCCESS else "failed"
            ),
            guesses=guesses,
        )

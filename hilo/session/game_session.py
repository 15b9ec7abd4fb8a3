"""
Game Session - The state machine for one game.

LIFECYCLE:
    IDLE --start(role)--> PLAYING --(correct | contradiction | timeout)--> FINISHED

The role passed to start() is the role the engine plays:

- HIDER: the engine holds the secret. An external guesser (a human, or
  SelfPlayRunner) calls submit_guess() and the session answers.
- GUESSER: the engine guesses with a GuessStrategy. An external hider calls
  submit_feedback() with an Outcome or free text and the session replies
  with its next guess.

Bad input (an out-of-domain guess, unclear text) comes back as a failed
TurnResult and leaves the session untouched. A contradiction ends the game
with FinishReason.CONTRADICTION; recovery is a new game, never automatic.
Any call on a session that is not PLAYING, or in the wrong role, raises
InvalidStateError.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable
import logging
import time
import uuid

from ..bots.secret_selection import SecretSelectionStrategy
from ..config import GameConfig
from ..engine_core.errors import (
    RESTART_HINT,
    HiloError,
    InvalidStateError,
)
from ..engine_core.narrower import RangeNarrower
from ..engine_core.number_range import NumberRange, narrow
from ..engine_core.outcome import Outcome, compare, validate_number
from ..engine_core.rng import RandomSource
from ..engine_core.strategy import BinarySearchStrategy, GuessStrategy
from .turn import Payload, Role, Turn


log = logging.getLogger("hilo.session")


class SessionStatus(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    FINISHED = "finished"


class FinishReason(str, Enum):
    """Why a FINISHED session ended."""
    SUCCESS = "success"
    CONTRADICTION = "contradiction"
    TIMEOUT = "timeout"


HIDER_REPLIES = {
    Outcome.CORRECT: "Correct! Congratulations, you guessed it!",
    Outcome.HIGHER: "Too low! Guess higher!",
    Outcome.LOWER: "Too high! Guess lower!",
}


@dataclass
class TurnResult:
    """
    Result of one call into the session.

    On failure nothing in the session changed unless the status says the
    game just finished (a contradiction).
    """
    success: bool
    status: SessionStatus
    finish_reason: FinishReason | None = None
    guess: int | None = None
    outcome: Outcome | None = None
    next_guess: int | None = None
    range: NumberRange | None = None
    new_turns: list[Turn] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    message: str = ""
    error: HiloError | None = None

    @property
    def error_code(self) -> str | None:
        return self.error.code.value if self.error else None

    @property
    def finished(self) -> bool:
        return self.status == SessionStatus.FINISHED


@dataclass(frozen=True)
class HiderView:
    """What the hider side may see."""
    secret: int | None
    last_guess: int | None
    guess_count: int
    status: SessionStatus


@dataclass(frozen=True)
class GuesserView:
    """What the guesser side may see. The secret appears only after the game."""
    range: NumberRange
    last_guess: int | None
    guess_count: int
    status: SessionStatus
    revealed_secret: int | None = None


class GameSession:
    """
    One game of higher/lower over [1, 100].

    Usage:
        session = GameSession(config=GameConfig(max_guesses=10))
        session.start(Role.HIDER, rng=SeededRandom(7))
        result = session.submit_guess(50)
        result.outcome  # Outcome.HIGHER, LOWER or CORRECT
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        strategy: GuessStrategy | None = None,
        narrower: RangeNarrower | None = None,
        clock: Callable[[], float] = time.time,
        session_id: str | None = None,
    ):
        self.session_id = session_id or str(uuid.uuid4())
        self.config = config or GameConfig()
        self.strategy = strategy or BinarySearchStrategy()
        self.narrower = narrower or RangeNarrower()
        self.created_at = clock()
        self._clock = clock

        self._role: Role | None = None
        self._secret: int | None = None
        self._status = SessionStatus.IDLE
        self._finish_reason: FinishReason | None = None
        self._range = NumberRange.full()
        self._last_guess: int | None = None
        self._guess_count = 0
        self._transcript: list[Turn] = []

    # =========================================================================
    # State accessors
    # =========================================================================

    @property
    def role(self) -> Role | None:
        return self._role

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def finish_reason(self) -> FinishReason | None:
        return self._finish_reason

    @property
    def range(self) -> NumberRange:
        return self._range

    @property
    def last_guess(self) -> int | None:
        return self._last_guess

    @property
    def guess_count(self) -> int:
        return self._guess_count

    @property
    def max_guesses(self) -> int:
        return self.config.max_guesses

    @property
    def remaining_guesses(self) -> int:
        return max(0, self.config.max_guesses - self._guess_count)

    @property
    def transcript(self) -> tuple[Turn, ...]:
        return tuple(self._transcript)

    @property
    def is_playing(self) -> bool:
        return self._status == SessionStatus.PLAYING

    @property
    def is_finished(self) -> bool:
        return self._status == SessionStatus.FINISHED

    @property
    def revealed_secret(self) -> int | None:
        """The secret, once the game is over and it is known."""
        return self._secret if self.is_finished else None

    def view_for(self, role: Role) -> HiderView | GuesserView:
        """Role-scoped view of the session."""
        if role == Role.HIDER:
            return HiderView(
                secret=self._secret,
                last_guess=self._last_guess,
                guess_count=self._guess_count,
                status=self._status,
            )
        return GuesserView(
            range=self._range,
            last_guess=self._last_guess,
            guess_count=self._guess_count,
            status=self._status,
            revealed_secret=self.revealed_secret,
        )

    def snapshot(self) -> dict[str, Any]:
        """Summary for status displays. Never includes a hidden secret."""
        return {
            "session_id": self.session_id,
            "role": self._role.value if self._role else None,
            "status": self._status.value,
            "finish_reason": self._finish_reason.value if self._finish_reason else None,
            "range": self._range.to_list(),
            "last_guess": self._last_guess,
            "guess_count": self._guess_count,
            "max_guesses": self.config.max_guesses,
            "remaining_guesses": self.remaining_guesses,
            "revealed_secret": self.revealed_secret,
            "efficiency": (
                self.config.grade_efficiency(self._guess_count)
                if self._finish_reason == FinishReason.SUCCESS else None
            ),
        }

    # =========================================================================
    # Transitions
    # =========================================================================

    def start(
        self,
        role: Role | str,
        rng: RandomSource | None = None,
        secret: int | None = None,
        secret_strategy: SecretSelectionStrategy | None = None,
    ) -> TurnResult:
        """
        IDLE -> PLAYING.

        A HIDER session takes its secret from `secret` if given, else from
        secret_strategy(rng), else rng.next_int(1, 100). A GUESSER session
        makes its first guess immediately.
        """
        if self._status != SessionStatus.IDLE:
            raise InvalidStateError(f"Session already {self._status.value}")
        role = Role(role)

        if role == Role.HIDER:
            if secret is None:
                if rng is None:
                    raise ValueError("A hider session needs an rng or an explicit secret")
                secret = secret_strategy.choose(rng) if secret_strategy else rng.next_int(1, 100)
            error = validate_number(secret, "secret")
            if error:
                return TurnResult(success=False, status=self._status, error=error, message=error.message)

        self._role = role
        self._secret = secret if role == Role.HIDER else None
        self._status = SessionStatus.PLAYING
        self._range = NumberRange.full()
        self._guess_count = 0
        self._transcript = []
        log.info("Session %s started, engine plays %s", self.session_id, role.value)

        if role == Role.HIDER:
            turn = self._append(
                0, Role.HIDER,
                "I've chosen a secret number between 1 and 100, start guessing!",
                resulting_range=self._range,
            )
            return TurnResult(
                success=True,
                status=self._status,
                range=self._range,
                new_turns=[turn],
                message=turn.message,
            )

        first = self.strategy.next_guess(self._range).unwrap()
        self._last_guess = first
        turn = self._append(
            1, Role.GUESSER, first,
            resulting_range=self._range,
            message=f"My current guessing range is {self._range}. I guess {first}.",
        )
        return TurnResult(
            success=True,
            status=self._status,
            next_guess=first,
            range=self._range,
            new_turns=[turn],
            message=turn.message,
        )

    def submit_guess(self, guess: int) -> TurnResult:
        """
        An external guesser guesses; the engine (HIDER) answers.

        A guess outside the current range is accepted and flagged.
        """
        self._require_playing(Role.HIDER)

        error = validate_number(guess, "guess")
        if error:
            return TurnResult(success=False, status=self._status, error=error, message=error.message)

        warnings = []
        if not self._range.contains(guess):
            warnings.append(f"Guess {guess} is outside the current range {self._range}")
            log.warning("Session %s: %s", self.session_id, warnings[-1])

        outcome = compare(guess, self._secret).unwrap()
        self._guess_count += 1
        self._last_guess = guess
        round_number = self._guess_count

        turns = [
            self._append(
                round_number, Role.GUESSER, guess,
                resulting_range=self._range,
                message=f"My guess is {guess}.",
            )
        ]
        result = self._answer(round_number, guess, outcome, turns)
        result.warnings = warnings
        return result

    def submit_feedback(self, feedback: Outcome | str) -> TurnResult:
        """
        An external hider answers the engine's last guess (GUESSER role).

        feedback is an Outcome or free text. Unclear text fails softly and
        leaves the session as it was; the caller should ask again.
        """
        self._require_playing(Role.GUESSER)

        resolved = self.narrower.to_outcome(feedback)
        if not resolved.ok:
            return TurnResult(
                success=False,
                status=self._status,
                guess=self._last_guess,
                range=self._range,
                error=resolved.error,
                message=resolved.error.message,
            )

        outcome = resolved.value
        guess = self._last_guess
        self._guess_count += 1
        round_number = self._guess_count

        result = self._answer(round_number, guess, outcome, [])
        if result.finished:
            if result.finish_reason == FinishReason.SUCCESS:
                result.message = f"The number is {guess}! I won with {self._guess_count} guesses."
            return result

        upcoming = self.strategy.next_guess(self._range).unwrap()
        self._last_guess = upcoming
        if self._range.is_singleton:
            text = f"Based on your feedback, the number must be {upcoming}. I guess {upcoming}."
        else:
            text = (
                f"Got it, need to go {outcome.value}. "
                f"My current range is {self._range}. I guess {upcoming}."
            )
        result.new_turns.append(
            self._append(
                round_number + 1, Role.GUESSER, upcoming,
                resulting_range=self._range,
                message=text,
            )
        )
        result.next_guess = upcoming
        result.message = text
        return result

    # =========================================================================
    # Helpers
    # =========================================================================

    def _answer(
        self,
        round_number: int,
        guess: int,
        outcome: Outcome,
        turns: list[Turn],
    ) -> TurnResult:
        """Record the hider's answer, narrow, and check for the end of the game."""
        narrowed = narrow(self._range, guess, outcome)

        if not narrowed.ok:
            error = narrowed.error
            turns.append(self._append(round_number, Role.HIDER, outcome, message=HIDER_REPLIES[outcome]))
            self._finish(FinishReason.CONTRADICTION)
            log.warning("Session %s: %s", self.session_id, error.message)
            return TurnResult(
                success=False,
                status=self._status,
                finish_reason=self._finish_reason,
                guess=guess,
                outcome=outcome,
                range=self._range,
                new_turns=turns,
                error=error,
                message=RESTART_HINT,
            )

        self._range = narrowed.value
        log.debug(
            "Session %s round %d: guess %d -> %s, range %s",
            self.session_id, round_number, guess, outcome.value, self._range,
        )

        if outcome == Outcome.CORRECT:
            if self._secret is None:
                self._secret = guess
            self._finish(FinishReason.SUCCESS)
            turns.append(
                self._append(
                    round_number, Role.HIDER, outcome,
                    resulting_range=self._range,
                    message=HIDER_REPLIES[outcome],
                    revealed_secret=self._secret,
                )
            )
        else:
            turns.append(
                self._append(
                    round_number, Role.HIDER, outcome,
                    resulting_range=self._range,
                    message=HIDER_REPLIES[outcome],
                )
            )
            if self._guess_count >= self.config.max_guesses:
                self._finish(FinishReason.TIMEOUT)
                if self._secret is not None:
                    text = f"You have run out of guesses. The secret number was {self._secret}."
                else:
                    text = f"Out of guesses after {self._guess_count} tries."
                turns.append(
                    self._append(
                        round_number + 1, Role.HIDER, text,
                        resulting_range=self._range,
                        revealed_secret=self._secret,
                    )
                )

        return TurnResult(
            success=True,
            status=self._status,
            finish_reason=self._finish_reason,
            guess=guess,
            outcome=outcome,
            range=self._range,
            new_turns=turns,
            message=turns[-1].message,
        )

    def _require_playing(self, engine_role: Role):
        if self._status != SessionStatus.PLAYING:
            raise InvalidStateError(
                f"Session {self.session_id} is {self._status.value}; no moves allowed"
            )
        if self._role != engine_role:
            raise InvalidStateError(
                f"This call needs the engine to play {engine_role.value}, "
                f"but it plays {self._role.value}"
            )

    def _finish(self, reason: FinishReason):
        self._status = SessionStatus.FINISHED
        self._finish_reason = reason
        log.info(
            "Session %s finished: %s after %d guesses",
            self.session_id, reason.value, self._guess_count,
        )

    def _append(
        self,
        turn_number: int,
        actor: Role,
        payload: Payload,
        resulting_range: NumberRange | None = None,
        message: str | None = None,
        revealed_secret: int | None = None,
    ) -> Turn:
        turn = Turn(
            turn_number=turn_number,
            actor=actor,
            payload=payload,
            resulting_range=resulting_range,
            message=message if message is not None else str(payload),
            revealed_secret=revealed_secret,
            timestamp=self._clock(),
        )
        self._transcript.append(turn)
        return turn

"""
Errors and Results - Typed failures for the game engine.

Pure engine functions never raise for bad input. They return a Result:
- Result.success(value) when the operation worked
- Result.failure(error) carrying one of the errors below

The caller (usually GameSession) decides whether a failure is terminal
(ContradictionError) or recoverable (InvalidInputError, UnclearFeedbackError).

Only misuse of a session (InvalidStateError, SessionBusyError) is raised.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar, TYPE_CHECKING

if TYPE_CHECKING:
    from .number_range import NumberRange
    from .outcome import Outcome


T = TypeVar("T")


class ErrorCode(str, Enum):
    """Machine-readable error codes, shared with the API layer."""
    INVALID_INPUT = "INVALID_INPUT"
    CONTRADICTION = "CONTRADICTION"
    UNCLEAR_FEEDBACK = "UNCLEAR_FEEDBACK"
    INVALID_STATE = "INVALID_STATE"
    SESSION_BUSY = "SESSION_BUSY"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


RESTART_HINT = "Logical inconsistency in the feedback. Please restart the game."


class HiloError(Exception):
    """Base class for all engine errors."""
    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def recoverable(self) -> bool:
        """Whether the caller can retry with different input."""
        return True

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "error_code": self.code.value}


class InvalidInputError(HiloError):
    """A guess, secret or bound outside [1, 100] or not an integer."""
    code = ErrorCode.INVALID_INPUT

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class ContradictionError(HiloError):
    """
    Narrowing produced an empty range.

    The accumulated feedback cannot correspond to any single secret.
    Terminal for a session: the only recovery is a new game.
    """
    code = ErrorCode.CONTRADICTION

    def __init__(
        self,
        message: str,
        prior_range: NumberRange | None = None,
        guess: int | None = None,
        outcome: Outcome | None = None,
        attempted: tuple[int, int] | None = None,
    ):
        super().__init__(message)
        self.prior_range = prior_range
        self.guess = guess
        self.outcome = outcome
        self.attempted = attempted

    @property
    def recoverable(self) -> bool:
        return False

    @property
    def suggestion(self) -> str:
        return RESTART_HINT

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["details"] = {
            "prior_range": (
                [self.prior_range.min, self.prior_range.max]
                if self.prior_range else None
            ),
            "guess": self.guess,
            "outcome": self.outcome.value if self.outcome else None,
            "attempted_range": list(self.attempted) if self.attempted else None,
            "suggestion": self.suggestion,
        }
        return data


class UnclearFeedbackError(HiloError):
    """Free-text feedback matched no keyword. The caller should re-prompt."""
    code = ErrorCode.UNCLEAR_FEEDBACK

    def __init__(self, text: str):
        super().__init__(
            f"Could not understand feedback {text!r}. "
            "Please answer 'higher', 'lower' or 'correct'."
        )
        self.text = text


class InvalidStateError(HiloError):
    """A transition was attempted that the session's state does not allow."""
    code = ErrorCode.INVALID_STATE


class SessionBusyError(HiloError):
    """Another caller is already advancing this session."""
    code = ErrorCode.SESSION_BUSY


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a pure engine operation.

    Exactly one of value/error is meaningful, depending on ok.
    """
    ok: bool
    value: T | None = None
    error: HiloError | None = None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        """Create a success result."""
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: HiloError) -> Result[T]:
        """Create a failure result."""
        return cls(ok=False, error=error)

    def unwrap(self) -> T:
        """Return the value, or raise the carried error."""
        if not self.ok:
            raise self.error
        return self.value

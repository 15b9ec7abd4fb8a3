"""
Turns - The append-only transcript records of a game.

A round produces two turns sharing a turn_number: the guesser's guess and
the hider's answer. Hider sessions also open with a setup turn 0, and a
timed-out game closes with a turn that reveals the secret.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from ..engine_core.number_range import NumberRange
from ..engine_core.outcome import Outcome


class Role(str, Enum):
    """Who holds the secret, and who guesses."""
    HIDER = "hider"
    GUESSER = "guesser"

    @property
    def opponent(self) -> Role:
        return Role.GUESSER if self == Role.HIDER else Role.HIDER


Payload = Union[int, Outcome, str]


@dataclass(frozen=True)
class Turn:
    """
    One entry of the transcript.

    Timestamps are excluded from equality so that replays of the same game
    compare equal.
    """
    turn_number: int
    actor: Role
    payload: Payload
    resulting_range: NumberRange | None = None
    message: str = ""
    revealed_secret: int | None = None
    timestamp: float = field(default=0.0, compare=False)

    @property
    def kind(self) -> str:
        if isinstance(self.payload, Outcome):
            return "outcome"
        if isinstance(self.payload, int):
            return "guess"
        return "text"

    def to_dict(self) -> dict[str, Any]:
        """Plain record for renderers and JSON."""
        payload = self.payload.value if isinstance(self.payload, Outcome) else self.payload
        return {
            "turn_number": self.turn_number,
            "actor": self.actor.value,
            "kind": self.kind,
            "payload": payload,
            "resulting_range": (
                self.resulting_range.to_list() if self.resulting_range else None
            ),
            "message": self.message,
            "revealed_secret": self.revealed_secret,
            "timestamp": self.timestamp,
        }

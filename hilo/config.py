"""
Configuration for game sessions.

Defaults can be overridden from the environment:
    HILO_MAX_GUESSES       guesses allowed before a game times out (default 10)
    HILO_SECRET_STRATEGY   how a hider picks its secret (default "uniform")
"""

from __future__ import annotations
from dataclasses import dataclass, replace
import os
from typing import Mapping

from .bots.secret_selection import SECRET_STRATEGIES


DEFAULT_MAX_GUESSES = 10

EFFICIENCY_EXCELLENT = "excellent"
EFFICIENCY_GOOD = "good"
EFFICIENCY_POOR = "needs improvement"


@dataclass(frozen=True)
class GameConfig:
    """Knobs for a single game."""
    max_guesses: int = DEFAULT_MAX_GUESSES
    excellent_threshold: int = 7
    good_threshold: int = 10
    secret_strategy: str = "uniform"

    def __post_init__(self):
        if isinstance(self.max_guesses, bool) or not isinstance(self.max_guesses, int):
            raise ValueError(f"max_guesses must be an integer, got {self.max_guesses!r}")
        if self.max_guesses < 1:
            raise ValueError(f"max_guesses must be at least 1, got {self.max_guesses}")
        if self.excellent_threshold > self.good_threshold:
            raise ValueError("excellent_threshold cannot exceed good_threshold")
        if self.secret_strategy not in SECRET_STRATEGIES:
            raise ValueError(
                f"Unknown secret strategy {self.secret_strategy!r}; "
                f"choose from {sorted(SECRET_STRATEGIES)}"
            )

    def with_max_guesses(self, max_guesses: int | None) -> GameConfig:
        """Return a copy with a different guess limit (None keeps this one)."""
        if max_guesses is None:
            return self
        return replace(self, max_guesses=max_guesses)

    def grade_efficiency(self, guess_count: int) -> str:
        """Grade a finished game by how many guesses it took."""
        if guess_count <= self.excellent_threshold:
            return EFFICIENCY_EXCELLENT
        if guess_count <= self.good_threshold:
            return EFFICIENCY_GOOD
        return EFFICIENCY_POOR


def _get_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def load_config(environ: Mapping[str, str] | None = None) -> GameConfig:
    """Build a GameConfig from environment variables."""
    env = os.environ if environ is None else environ
    return GameConfig(
        max_guesses=_get_int(env, "HILO_MAX_GUESSES", DEFAULT_MAX_GUESSES),
        secret_strategy=env.get("HILO_SECRET_STRATEGY", "uniform"),
    )

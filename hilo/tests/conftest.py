"""
Pytest fixtures for Hilo tests.
"""

import pytest

from ..config import GameConfig
from ..engine_core.rng import ScriptedRandom
from ..session import GameSession, Role, SessionManager
from ..api.service import APIService


class FakeClock:
    """Deterministic clock; advance() moves time forward."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep developer environment variables out of the tests."""
    monkeypatch.delenv("HILO_MAX_GUESSES", raising=False)
    monkeypatch.delenv("HILO_SECRET_STRATEGY", raising=False)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config() -> GameConfig:
    return GameConfig()


@pytest.fixture
def hider_session(config, clock) -> GameSession:
    """Session where the engine hides 23."""
    session = GameSession(config=config, clock=clock)
    session.start(Role.HIDER, secret=23)
    return session


@pytest.fixture
def guesser_session(config, clock) -> GameSession:
    """Session where the engine guesses; its first guess is 50."""
    session = GameSession(config=config, clock=clock)
    session.start(Role.GUESSER)
    return session


@pytest.fixture
def scripted_rng():
    return ScriptedRandom([42])


@pytest.fixture
def manager(config, clock) -> SessionManager:
    return SessionManager(config=config, clock=clock)


@pytest.fixture
def service(config) -> APIService:
    """Create a fresh API service."""
    return APIService(config=config)

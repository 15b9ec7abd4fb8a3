"""
Tests for the in-memory session registry.
"""

import pytest

from ..engine_core import SessionBusyError, ScriptedRandom
from ..session import Role, SessionManager


class TestSessionManager:

    def test_create_and_get(self, manager):
        managed = manager.create_session(Role.HIDER, secret=23)
        assert managed.start_result.success
        assert manager.get_session(managed.session_id) is managed.session

    def test_failed_start_is_not_registered(self, manager):
        managed = manager.create_session(Role.HIDER, secret=500)
        assert not managed.start_result.success
        assert manager.list_sessions() == []

    def test_rng_picks_secret(self, manager):
        managed = manager.create_session(Role.HIDER, rng=ScriptedRandom([12]))
        assert managed.session.view_for(Role.HIDER).secret == 12

    def test_max_guesses_override(self, manager):
        managed = manager.create_session(Role.GUESSER, max_guesses=4)
        assert managed.session.max_guesses == 4
        assert manager.config.max_guesses == 10

    def test_claim_unknown_yields_none(self, manager):
        with manager.claim("missing") as session:
            assert session is None

    def test_claim_is_exclusive(self, manager):
        managed = manager.create_session(Role.GUESSER)
        with manager.claim(managed.session_id) as session:
            assert session is managed.session
            with pytest.raises(SessionBusyError):
                with manager.claim(managed.session_id):
                    pass

    def test_claim_released_after_use(self, manager):
        managed = manager.create_session(Role.GUESSER)
        with manager.claim(managed.session_id):
            pass
        with manager.claim(managed.session_id) as session:
            assert session is not None

    def test_claim_released_on_error(self, manager):
        managed = manager.create_session(Role.GUESSER)
        with pytest.raises(RuntimeError):
            with manager.claim(managed.session_id):
                raise RuntimeError("boom")
        with manager.claim(managed.session_id) as session:
            assert session is not None

    def test_end_session(self, manager):
        managed = manager.create_session(Role.GUESSER)
        assert manager.end_session(managed.session_id)
        assert not manager.end_session(managed.session_id)
        assert manager.get_session(managed.session_id) is None

    def test_list_active_only(self, manager):
        playing = manager.create_session(Role.HIDER, secret=23)
        done = manager.create_session(Role.HIDER, secret=50)
        done.session.submit_guess(50)
        assert set(manager.list_sessions()) == {playing.session_id, done.session_id}
        assert manager.list_sessions(active_only=True) == [playing.session_id]

    def test_cleanup_finished(self, manager, clock):
        playing = manager.create_session(Role.HIDER, secret=23)
        done = manager.create_session(Role.HIDER, secret=50)
        done.session.submit_guess(50)

        assert manager.cleanup_finished(max_age_seconds=60) == []
        clock.advance(120)
        assert manager.cleanup_finished(max_age_seconds=60) == [done.session_id]
        assert manager.list_sessions() == [playing.session_id]

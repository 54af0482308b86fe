"""
Tests for session storage and the session manager.

Tests:
- In-memory and JSON file stores
- Server-side transitions by game id
- Failed transitions leave the stored game unchanged
- Per-game serialization under concurrent submissions
"""

import json
import threading

import pytest

from .conftest import first_card
from ..engine_core.state import Card, GameSession
from ..errors import (
    CardNotInHand,
    CorruptSession,
    InvalidInput,
    RoundIncomplete,
    SessionNotFound,
)
from ..session import InMemorySessionStore, JsonFileSessionStore, SessionManager


@pytest.fixture(params=["memory", "file"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemorySessionStore()
    return JsonFileSessionStore(tmp_path / "games")


class TestSessionStore:
    """Tests shared by both store implementations."""

    def test_save_and_load(self, store, two_player_session):
        store.save(two_player_session)
        loaded = store.load(two_player_session.game_id)

        assert loaded == two_player_session
        assert loaded is not two_player_session

    def test_load_missing(self, store):
        with pytest.raises(SessionNotFound):
            store.load("nonexistent")

    def test_exists_list_delete(self, store, two_player_session):
        game_id = two_player_session.game_id
        assert not store.exists(game_id)

        store.save(two_player_session)
        assert store.exists(game_id)
        assert store.list_ids() == [game_id]

        assert store.delete(game_id)
        assert not store.delete(game_id)
        assert store.list_ids() == []

    def test_last_write_wins(self, store, reducer, two_player_session):
        store.save(two_player_session)
        updated = reducer.add_player(two_player_session, "carol")
        store.save(updated)

        assert len(store.load(updated.game_id).players) == 3

    def test_stored_copy_is_isolated(self, store, two_player_session):
        store.save(two_player_session)
        two_player_session.players[0].hand.clear()

        loaded = store.load(two_player_session.game_id)
        assert len(loaded.players[0].hand) == 7


class TestJsonFileSessionStore:
    """File-specific behavior."""

    def test_writes_wire_format(self, tmp_path, two_player_session):
        store = JsonFileSessionStore(tmp_path)
        store.save(two_player_session)

        path = tmp_path / f"{two_player_session.game_id}.json"
        data = json.loads(path.read_text(encoding="utf-8"))

        assert data["gameId"] == two_player_session.game_id
        assert set(data) >= {"deck", "blackCardDeck", "currentBlackCard", "players", "roundPool"}
        assert data["players"][0]["winningPile"] == []

    def test_path_like_ids_are_not_found(self, tmp_path):
        store = JsonFileSessionStore(tmp_path)
        with pytest.raises(SessionNotFound):
            store.load("../etc/passwd")
        assert not store.exists("no.such.game")
        assert store.delete("../etc/passwd") is False

    def test_save_rejects_path_like_ids(self, tmp_path, two_player_session):
        store = JsonFileSessionStore(tmp_path)
        bad = two_player_session._copy_with(game_id="../escape")
        with pytest.raises(InvalidInput):
            store.save(bad)
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.parametrize("content", ["{not json", "[1, 2]", '{"deck": []}'])
    def test_corrupt_file_raises_corrupt_session(self, tmp_path, content):
        store = JsonFileSessionStore(tmp_path)
        (tmp_path / "broken.json").write_text(content, encoding="utf-8")

        with pytest.raises(CorruptSession) as exc_info:
            store.load("broken")
        assert exc_info.value.game_id == "broken"
        assert store.exists("broken")


class TestSessionManager:
    """Tests for transitions through the manager."""

    def test_start_game_is_stored(self, manager):
        session = manager.start_game(["alice", "bob"])
        assert manager.get_game(session.game_id) == session
        assert manager.list_games() == [session.game_id]

    def test_full_round(self, manager):
        session = manager.start_game(["alice", "bob"])
        game_id = session.game_id

        manager.submit_card(game_id, "alice", first_card(session, "alice"))
        bob_card = first_card(session, "bob")
        manager.submit_card(game_id, "bob", bob_card)
        judged = manager.judge_round(game_id, bob_card)

        stored = manager.get_game(game_id)
        assert stored == judged
        assert stored.get_player("bob").winning_pile == [bob_card]
        assert stored.round_pool == []

    def test_add_player(self, manager):
        session = manager.start_game(["alice"])
        manager.add_player(session.game_id, "bob")

        assert len(manager.get_game(session.game_id).players) == 2

    def test_unknown_game(self, manager):
        with pytest.raises(SessionNotFound):
            manager.get_game("nonexistent")
        with pytest.raises(SessionNotFound):
            manager.add_player("nonexistent", "bob")

    def test_unknown_games_leave_no_locks(self, manager):
        """Requests for ids that were never stored do not grow the lock map."""
        card = Card("x", "x")
        for i in range(500):
            with pytest.raises(SessionNotFound):
                manager.add_player(f"nope{i}", "bob")
            with pytest.raises(SessionNotFound):
                manager.submit_card(f"nope{i}", "bob", card)
            with pytest.raises(SessionNotFound):
                manager.judge_round(f"nope{i}", card)
            assert manager.end_game(f"nope{i}") is False

        assert manager._locks == {}

    def test_ended_game_lock_is_released(self, manager):
        session = manager.start_game(["alice"])
        manager.end_game(session.game_id)

        with pytest.raises(SessionNotFound):
            manager.add_player(session.game_id, "bob")
        assert session.game_id not in manager._locks

    def test_failed_transition_leaves_store_unchanged(self, manager):
        session = manager.start_game(["alice", "bob"])
        before = manager.get_game(session.game_id).to_dict()

        with pytest.raises(CardNotInHand):
            manager.submit_card(session.game_id, "alice", Card("nope", "nope"))
        with pytest.raises(RoundIncomplete):
            manager.judge_round(session.game_id, first_card(session, "alice"))

        assert manager.get_game(session.game_id).to_dict() == before

    def test_end_game(self, manager):
        session = manager.start_game(["alice"])
        assert manager.end_game(session.game_id)
        with pytest.raises(SessionNotFound):
            manager.get_game(session.game_id)

    def test_concurrent_submissions_are_serialized(self, catalog, reducer):
        manager = SessionManager(catalog, reducer=reducer)
        players = ["p1", "p2", "p3", "p4"]
        session = manager.start_game(players)
        barrier = threading.Barrier(len(players))
        errors: list[Exception] = []

        def play(player: str):
            barrier.wait()
            try:
                manager.submit_card(session.game_id, player, first_card(session, player))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=play, args=(p,)) for p in players]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        stored = manager.get_game(session.game_id)
        assert sorted(e.player for e in stored.round_pool) == players
        assert all(len(p.hand) == 6 for p in stored.players)


def test_session_round_trip_through_dict(submitted_session):
    restored = GameSession.from_dict(submitted_session.to_dict())
    assert restored == submitted_session


def test_from_dict_rejects_malformed():
    with pytest.raises(InvalidInput):
        GameSession.from_dict({"deck": []})

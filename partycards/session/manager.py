"""
Session Manager - Runs transitions against stored game sessions.

LIFECYCLE:
1. start_game -> reducer builds a session -> store.save
2. join / submit / judge:
   - acquire the game's lock
   - load the authoritative snapshot from the store
   - apply one reducer transition
   - save the new snapshot
   - release the lock
3. get_game -> store.load (no lock, no mutation)

Clients never supply game state. Whatever they echo back is ignored;
the stored snapshot is the only source of truth.

A failed transition raises before anything is saved, so the stored
snapshot is unchanged.
"""

from __future__ import annotations
import logging
import threading
from contextlib import contextmanager
from typing import Callable, Iterator

from ..catalog import Catalog
from ..engine_core.reducer import SessionReducer
from ..engine_core.state import Card, GameSession
from ..errors import SessionNotFound
from .store import InMemorySessionStore, SessionStore

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Owns the store, the reducer and one lock per game id.

    Usage:
        manager = SessionManager(catalog=load_catalog())
        session = manager.start_game(["alice", "bob"])
        session = manager.submit_card(session.game_id, "alice", card)
    """

    def __init__(
        self,
        catalog: Catalog,
        store: SessionStore | None = None,
        reducer: SessionReducer | None = None,
    ):
        self.catalog = catalog
        self.store = store or InMemorySessionStore()
        self.reducer = reducer or SessionReducer()
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _exclusive(self, game_id: str) -> Iterator[None]:
        with self._locks_guard:
            lock = self._locks.setdefault(game_id, threading.Lock())
        with lock:
            yield

    def _forget_lock(self, game_id: str) -> None:
        with self._locks_guard:
            self._locks.pop(game_id, None)

    def _transition(
        self,
        game_id: str,
        apply: Callable[[GameSession], GameSession],
    ) -> GameSession:
        # Unknown ids never get a lock entry
        if not self.store.exists(game_id):
            raise SessionNotFound(game_id)
        with self._exclusive(game_id):
            try:
                session = self.store.load(game_id)
            except SessionNotFound:
                self._forget_lock(game_id)
                raise
            new_session = apply(session)
            self.store.save(new_session)
            return new_session

    def start_game(self, players: list[str]) -> GameSession:
        """Create, deal and store a new game."""
        session = self.reducer.create_session(players, self.catalog)
        with self._exclusive(session.game_id):
            self.store.save(session)
        logger.info(f"Started game {session.game_id} with {len(players)} players")
        return session

    def add_player(self, game_id: str, player: str) -> GameSession:
        session = self._transition(
            game_id, lambda s: self.reducer.add_player(s, player)
        )
        logger.info(f"Player {player} joined game {game_id}")
        return session

    def submit_card(self, game_id: str, player: str, card: Card) -> GameSession:
        session = self._transition(
            game_id, lambda s: self.reducer.submit_card(s, player, card)
        )
        logger.info(
            f"Player {player} submitted a card in game {game_id} "
            f"({len(session.round_pool)}/{session.num_players})"
        )
        return session

    def judge_round(self, game_id: str, winning_card: Card) -> GameSession:
        session = self._transition(
            game_id, lambda s: self.reducer.judge_round(s, winning_card)
        )
        logger.info(
            f"Judged round {session.round_number - 1} of game {game_id}; "
            f"scores: {session.scores()}"
        )
        if session.is_exhausted:
            logger.info(f"Game {game_id} has run out of prompt cards")
        return session

    def get_game(self, game_id: str) -> GameSession:
        """Read a stored game. Raises SessionNotFound."""
        return self.store.load(game_id)

    def end_game(self, game_id: str) -> bool:
        """Delete a stored game and forget its lock."""
        if not self.store.exists(game_id):
            return False
        with self._exclusive(game_id):
            removed = self.store.delete(game_id)
        self._forget_lock(game_id)
        if removed:
            logger.info(f"Ended game {game_id}")
        return removed

    def list_games(self) -> list[str]:
        return self.store.list_ids()

"""
Session Store - Persists game session snapshots by game id.

Two implementations:
- InMemorySessionStore: process-local dict, the default
- JsonFileSessionStore: one <game_id>.json file per game

The only guarantee is "retrievable by game id", last write wins.
"""

from __future__ import annotations
import json
import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path

from ..engine_core.state import GameSession
from ..errors import CorruptSession, InvalidInput, SessionNotFound

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]+$")


class SessionStore(ABC):
    """Abstract load/save interface keyed by game id."""

    @abstractmethod
    def load(self, game_id: str) -> GameSession:
        """Return the stored snapshot. Raises SessionNotFound."""

    @abstractmethod
    def save(self, session: GameSession) -> None:
        """Store the snapshot under session.game_id."""

    @abstractmethod
    def delete(self, game_id: str) -> bool:
        """Remove a snapshot. Returns False if there was none."""

    @abstractmethod
    def list_ids(self) -> list[str]:
        """Ids of all stored games."""

    def exists(self, game_id: str) -> bool:
        try:
            self.load(game_id)
        except SessionNotFound:
            return False
        return True


class InMemorySessionStore(SessionStore):
    """
    Keeps snapshots in a dict.

    Snapshots are stored as serialized dicts so a caller holding a
    returned GameSession can never alter what is stored.
    """

    def __init__(self):
        self._sessions: dict[str, dict] = {}

    def load(self, game_id: str) -> GameSession:
        data = self._sessions.get(game_id)
        if data is None:
            raise SessionNotFound(game_id)
        return GameSession.from_dict(data)

    def save(self, session: GameSession) -> None:
        self._sessions[session.game_id] = session.to_dict()

    def delete(self, game_id: str) -> bool:
        return self._sessions.pop(game_id, None) is not None

    def list_ids(self) -> list[str]:
        return list(self._sessions.keys())

    def exists(self, game_id: str) -> bool:
        return game_id in self._sessions


class JsonFileSessionStore(SessionStore):
    """
    File-based store.

    Usage:
        store = JsonFileSessionStore("./data")
        store.save(session)            # writes ./data/<game_id>.json
        session = store.load(game_id)
    """

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir).expanduser()
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, game_id: str) -> Path | None:
        """File for a game id, or None when the id cannot name a stored game."""
        if not _SAFE_ID.match(game_id or ""):
            return None
        return self.data_dir / f"{game_id}.json"

    def load(self, game_id: str) -> GameSession:
        path = self._path(game_id)
        if path is None or not path.exists():
            raise SessionNotFound(game_id)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            session = GameSession.from_dict(data)
        except (UnicodeDecodeError, json.JSONDecodeError, InvalidInput) as e:
            logger.error(f"Unreadable game file {path}: {e}")
            raise CorruptSession(game_id, str(e)) from e
        logger.debug(f"Loaded game {game_id} from {path}")
        return session

    def save(self, session: GameSession) -> None:
        path = self._path(session.game_id)
        if path is None:
            raise InvalidInput("Malformed game id", game_id=session.game_id)
        tmp_path = path.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(session.to_dict(), f, indent=2)
        tmp_path.replace(path)
        logger.debug(f"Saved game {session.game_id} to {path}")

    def delete(self, game_id: str) -> bool:
        path = self._path(game_id)
        if path is None or not path.exists():
            return False
        path.unlink()
        return True

    def exists(self, game_id: str) -> bool:
        path = self._path(game_id)
        return path is not None and path.exists()

    def list_ids(self) -> list[str]:
        return sorted(p.stem for p in self.data_dir.glob("*.json"))

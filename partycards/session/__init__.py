"""
Session Module - Stores game sessions and serializes access to them.

A session is one game, from the first deal until the store drops it:
- Created by start_game
- Loaded by game id for every transition
- Saved after every successful transition

At most one transition runs per game id at a time.
"""

from .manager import SessionManager
from .store import SessionStore, InMemorySessionStore, JsonFileSessionStore

__all__ = [
    "SessionManager",
    "SessionStore",
    "InMemorySessionStore",
    "JsonFileSessionStore",
]

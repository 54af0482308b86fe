"""
Engine Core - Game session state and round transitions.

The engine is the part that:
1. Builds and shuffles decks from a catalog
2. Holds the GameSession snapshot
3. Validates and applies transitions (join, submit, judge)
"""

from .state import Card, PlayerEntry, RoundEntry, GameSession
from .deck import DeckManager
from .reducer import SessionReducer, purge_submitted_cards, HAND_SIZE

__all__ = [
    "Card",
    "PlayerEntry",
    "RoundEntry",
    "GameSession",
    "DeckManager",
    "SessionReducer",
    "purge_submitted_cards",
    "HAND_SIZE",
]

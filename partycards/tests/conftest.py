"""
Pytest fixtures for PartyCards tests.
"""

import random

import pytest

from ..catalog import Catalog
from ..engine_core import Card, DeckManager, SessionReducer, GameSession
from ..session import SessionManager, InMemorySessionStore


def make_catalog(num_responses: int = 30, num_prompts: int = 4) -> Catalog:
    """Two packs splitting the requested card counts."""
    half_r = num_responses // 2
    half_p = num_prompts // 2
    return Catalog.from_data([
        {
            "name": "Alpha",
            "white": [{"text": f"Alpha answer {i}", "pack": "Alpha"} for i in range(half_r)],
            "black": [{"text": f"Alpha prompt {i}", "pack": "Alpha"} for i in range(half_p)],
        },
        {
            "name": "Beta",
            "white": [
                {"text": f"Beta answer {i}", "pack": "Beta"}
                for i in range(num_responses - half_r)
            ],
            "black": [
                {"text": f"Beta prompt {i}", "pack": "Beta"}
                for i in range(num_prompts - half_p)
            ],
        },
    ])


@pytest.fixture
def catalog() -> Catalog:
    """30 response cards, 4 prompts."""
    return make_catalog()


@pytest.fixture
def reducer() -> SessionReducer:
    """Reducer with a seeded deck manager."""
    return SessionReducer(decks=DeckManager(rng=random.Random(1234)))


@pytest.fixture
def two_player_session(reducer: SessionReducer, catalog: Catalog) -> GameSession:
    return reducer.create_session(["alice", "bob"], catalog)


@pytest.fixture
def submitted_session(reducer: SessionReducer, two_player_session: GameSession) -> GameSession:
    """Both players have played their first card."""
    session = two_player_session
    for entry in two_player_session.players:
        session = reducer.submit_card(session, entry.player, entry.hand[0])
    return session


@pytest.fixture
def manager(catalog: Catalog, reducer: SessionReducer) -> SessionManager:
    return SessionManager(catalog, store=InMemorySessionStore(), reducer=reducer)


def first_card(session: GameSession, player: str) -> Card:
    return session.get_player(player).hand[0]

"""
Reducer - The game session state machine.

The reducer is the single point of state transition.
Every operation follows the same shape:
- Validate preconditions against the current snapshot
- Raise a PartyCardsError if any fails (the snapshot is untouched)
- Otherwise build and return a new GameSession

Operations:
    create_session(players, catalog)   Shuffle, seed prompt, deal hands
    add_player(session, player)        Reshuffle remaining deck, deal a hand
    submit_card(session, player, card) Move a card from hand to round pool
    judge_round(session, winning_card) Award, discard, draw next prompt

Hands are never refilled after a round.
"""

from __future__ import annotations
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from .deck import DeckManager
from .state import Card, GameSession, PlayerEntry, RoundEntry, index_of
from ..errors import (
    AlreadySubmitted,
    CardNotInHand,
    CardNotInPool,
    InvalidInput,
    PlayerAlreadyJoined,
    PlayerNotFound,
    RoundIncomplete,
)

if TYPE_CHECKING:
    from ..catalog import Catalog

HAND_SIZE = 7


def _new_game_id() -> str:
    return str(uuid.uuid4())


def _check_player_id(player: object) -> str:
    if not isinstance(player, str) or not player.strip():
        raise InvalidInput("Player id must be a non-empty string", player=player)
    return player


def purge_submitted_cards(
    players: list[PlayerEntry],
    round_pool: list[RoundEntry],
) -> tuple[list[PlayerEntry], list[Card]]:
    """
    Remove pooled cards that are somehow still in their submitter's hand.

    Submitting already takes the card out of the hand, so normally this
    finds nothing. Returns (players, purged cards). An empty pool is a no-op.
    """
    purged: list[Card] = []
    by_id = {p.player: p for p in players}
    for entry in round_pool:
        owner = by_id.get(entry.player)
        if owner is not None and owner.has_card(entry.card):
            by_id[entry.player] = owner.without_card(entry.card)
            purged.append(entry.card)
    if not purged:
        return players, purged
    return [by_id[p.player] for p in players], purged


@dataclass
class SessionReducer:
    """
    Applies round transitions to game sessions.

    Stateless - all game state is in GameSession.
    The DeckManager supplies randomness.
    """
    decks: DeckManager = field(default_factory=DeckManager)
    hand_size: int = HAND_SIZE
    id_factory: Callable[[], str] = _new_game_id

    def create_session(self, players: list[str], catalog: Catalog) -> GameSession:
        """
        Start a new game.

        Args:
            players: Player ids in seating order (non-empty, unique)
            catalog: Cards to build the decks from

        Returns:
            GameSession with a prompt in play and a full hand per player

        Raises:
            InvalidInput: Empty, blank or duplicate player ids
            EmptyDeck: The catalog has no prompt cards
            InsufficientCards: Not enough response cards for every hand
        """
        if not players:
            raise InvalidInput("Players array is required and cannot be empty")
        seen: set[str] = set()
        for player in players:
            _check_player_id(player)
            if player in seen:
                raise PlayerAlreadyJoined(player)
            seen.add(player)

        response_deck, prompt_deck = self.decks.build_decks(catalog)
        response_deck = self.decks.shuffle(response_deck)
        prompt_deck = self.decks.shuffle(prompt_deck)

        current_prompt, prompt_deck = self.decks.draw_prompt(prompt_deck)

        # One shared draw order keeps every card in exactly one place
        entries = []
        for player in players:
            hand, response_deck = self.decks.deal(response_deck, self.hand_size)
            entries.append(PlayerEntry(player=player, hand=hand))

        return GameSession(
            game_id=self.id_factory(),
            response_deck=response_deck,
            prompt_deck=prompt_deck,
            current_prompt=current_prompt,
            players=entries,
        )

    def add_player(self, session: GameSession, player: str) -> GameSession:
        """
        Seat a new player and deal them a hand.

        The remaining response deck is reshuffled before dealing.
        Existing hands are untouched.

        Raises:
            InvalidInput: Blank id
            PlayerAlreadyJoined: The id is already seated
            InsufficientCards: Fewer than a full hand left in the deck
        """
        _check_player_id(player)
        if session.get_player(player) is not None:
            raise PlayerAlreadyJoined(player)

        deck = session.response_deck
        if deck:
            deck = self.decks.shuffle(deck)
        hand, deck = self.decks.deal(deck, self.hand_size)

        return session._copy_with(
            response_deck=deck,
            players=session.players + [PlayerEntry(player=player, hand=hand)],
        )

    def submit_card(self, session: GameSession, player: str, card: Card) -> GameSession:
        """
        Play a card from a player's hand into the round pool.

        Raises:
            PlayerNotFound: Unknown player id
            AlreadySubmitted: The player already has a card in the pool
            CardNotInHand: No card with this text and pack in the hand
        """
        entry = session.get_player(player)
        if entry is None:
            raise PlayerNotFound(player)
        if session.has_submitted(player):
            raise AlreadySubmitted(player, session.round_number)
        if not entry.has_card(card):
            raise CardNotInHand(player, card.text, card.pack)

        new_session = session.with_player(entry.without_card(card))
        return new_session._copy_with(
            round_pool=session.round_pool + [RoundEntry(player=player, card=card)],
        )

    def judge_round(self, session: GameSession, winning_card: Card) -> GameSession:
        """
        Resolve the round in favour of `winning_card`.

        - The winning card goes to its submitter's winning pile
        - Every other pooled card goes to the discard pile
        - The round pool is cleared
        - The next prompt is drawn; None once the prompt deck is empty

        Raises:
            RoundIncomplete: Not every player has submitted
            CardNotInPool: No pooled card matches `winning_card`
            PlayerNotFound: The submitter is no longer seated
        """
        pool = session.round_pool
        if len(pool) != len(session.players):
            raise RoundIncomplete(submitted=len(pool), expected=len(session.players))

        pool_cards = [e.card for e in pool]
        win_idx = index_of(pool_cards, winning_card)
        if win_idx == -1:
            raise CardNotInPool(winning_card.text, winning_card.pack)

        winning_entry = pool[win_idx]
        winner = session.get_player(winning_entry.player)
        if winner is None:
            raise PlayerNotFound(winning_entry.player)

        new_session = session.with_player(winner.with_win(winning_entry.card))
        discard = session.discard_pile + [
            e.card for i, e in enumerate(pool) if i != win_idx
        ]

        players, purged = purge_submitted_cards(new_session.players, pool)
        discard = discard + purged

        if session.prompt_deck:
            next_prompt, prompt_deck = self.decks.draw_prompt(session.prompt_deck)
        else:
            next_prompt, prompt_deck = None, []

        return new_session._copy_with(
            players=players,
            round_pool=[],
            discard_pile=discard,
            prompt_deck=prompt_deck,
            current_prompt=next_prompt,
            round_number=session.round_number + 1,
        )

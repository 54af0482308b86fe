"""
Game State - Cards, players and the game session aggregate.

Design principles:
- Immutable-friendly: transitions return a new GameSession
- Serializable: to_dict()/from_dict() use the wire field names
  (deck, blackCardDeck, currentBlackCard, ...) so stored snapshots
  and API payloads share one shape
- Cards are value objects: identity is the (text, pack) pair
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from ..errors import InvalidInput


@dataclass(frozen=True)
class Card:
    """A prompt or response card. Equal when text and pack are equal."""
    text: str
    pack: str

    def to_dict(self) -> dict[str, str]:
        return {"text": self.text, "pack": self.pack}

    @classmethod
    def from_dict(cls, data: Any) -> Card:
        if isinstance(data, Card):
            return data
        if not isinstance(data, dict) or "text" not in data or "pack" not in data:
            raise InvalidInput("Card must have 'text' and 'pack'", card=data)
        return cls(text=str(data["text"]), pack=str(data["pack"]))


def index_of(cards: list[Card], card: Card) -> int:
    """Index of the first card equal to `card`, or -1."""
    for i, c in enumerate(cards):
        if c == card:
            return i
    return -1


def without_first(cards: list[Card], card: Card) -> list[Card]:
    """Return a copy of `cards` with the first match removed."""
    idx = index_of(cards, card)
    if idx == -1:
        return list(cards)
    return cards[:idx] + cards[idx + 1:]


@dataclass
class PlayerEntry:
    """
    One seated player.

    hand: response cards in deal order
    winning_pile: response cards that won a round (score = size)
    """
    player: str
    hand: list[Card] = field(default_factory=list)
    winning_pile: list[Card] = field(default_factory=list)

    @property
    def score(self) -> int:
        return len(self.winning_pile)

    def has_card(self, card: Card) -> bool:
        return index_of(self.hand, card) != -1

    def without_card(self, card: Card) -> PlayerEntry:
        """Return new entry with the first matching card removed from the hand."""
        return PlayerEntry(
            player=self.player,
            hand=without_first(self.hand, card),
            winning_pile=list(self.winning_pile),
        )

    def with_win(self, card: Card) -> PlayerEntry:
        """Return new entry with card added to the winning pile."""
        return PlayerEntry(
            player=self.player,
            hand=list(self.hand),
            winning_pile=self.winning_pile + [card],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "player": self.player,
            "hand": [c.to_dict() for c in self.hand],
            "winningPile": [c.to_dict() for c in self.winning_pile],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlayerEntry:
        return cls(
            player=data["player"],
            hand=[Card.from_dict(c) for c in data.get("hand", [])],
            winning_pile=[Card.from_dict(c) for c in data.get("winningPile", [])],
        )


@dataclass(frozen=True)
class RoundEntry:
    """A submission waiting to be judged."""
    player: str
    card: Card

    def to_dict(self) -> dict[str, Any]:
        return {"player": self.player, "card": self.card.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RoundEntry:
        return cls(player=data["player"], card=Card.from_dict(data["card"]))


@dataclass
class GameSession:
    """
    Complete state of one game at a point in time.

    This is the canonical snapshot the state machine operates on.
    Transitions never mutate it; they build a new one via _copy_with().
    """
    game_id: str

    # Face-down decks
    response_deck: list[Card] = field(default_factory=list)  # front = next dealt
    prompt_deck: list[Card] = field(default_factory=list)  # end = next drawn

    # None only once the prompt deck is exhausted
    current_prompt: Card | None = None

    players: list[PlayerEntry] = field(default_factory=list)
    round_pool: list[RoundEntry] = field(default_factory=list)

    # Losing submissions of judged rounds
    discard_pile: list[Card] = field(default_factory=list)

    round_number: int = 1

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def is_round_complete(self) -> bool:
        return len(self.round_pool) == len(self.players)

    @property
    def is_exhausted(self) -> bool:
        """True once there is no prompt left to play against."""
        return self.current_prompt is None

    def get_player(self, player: str) -> PlayerEntry | None:
        """Get player entry by id."""
        for p in self.players:
            if p.player == player:
                return p
        return None

    def has_submitted(self, player: str) -> bool:
        return any(entry.player == player for entry in self.round_pool)

    def with_player(self, entry: PlayerEntry) -> GameSession:
        """Return new session with the entry replaced (matched by player id)."""
        new_players = [
            entry if p.player == entry.player else p
            for p in self.players
        ]
        return self._copy_with(players=new_players)

    def scores(self) -> dict[str, int]:
        return {p.player: p.score for p in self.players}

    def response_cards(self) -> Counter:
        """Multiset of every response card the session holds, wherever it is."""
        counts: Counter = Counter(self.response_deck)
        for p in self.players:
            counts.update(p.hand)
            counts.update(p.winning_pile)
        counts.update(entry.card for entry in self.round_pool)
        counts.update(self.discard_pile)
        return counts

    def _copy_with(self, **kwargs) -> GameSession:
        """Create a copy with some fields replaced."""
        return GameSession(
            game_id=kwargs.get("game_id", self.game_id),
            response_deck=kwargs.get("response_deck", self.response_deck),
            prompt_deck=kwargs.get("prompt_deck", self.prompt_deck),
            current_prompt=kwargs.get("current_prompt", self.current_prompt),
            players=kwargs.get("players", self.players),
            round_pool=kwargs.get("round_pool", self.round_pool),
            discard_pile=kwargs.get("discard_pile", self.discard_pile),
            round_number=kwargs.get("round_number", self.round_number),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the wire names."""
        return {
            "gameId": self.game_id,
            "deck": [c.to_dict() for c in self.response_deck],
            "blackCardDeck": [c.to_dict() for c in self.prompt_deck],
            "currentBlackCard": self.current_prompt.to_dict() if self.current_prompt else None,
            "players": [p.to_dict() for p in self.players],
            "roundPool": [e.to_dict() for e in self.round_pool],
            "discardPile": [c.to_dict() for c in self.discard_pile],
            "roundNumber": self.round_number,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameSession:
        try:
            current = data.get("currentBlackCard")
            return cls(
                game_id=data["gameId"],
                response_deck=[Card.from_dict(c) for c in data.get("deck", [])],
                prompt_deck=[Card.from_dict(c) for c in data.get("blackCardDeck", [])],
                current_prompt=Card.from_dict(current) if current else None,
                players=[PlayerEntry.from_dict(p) for p in data.get("players", [])],
                round_pool=[RoundEntry.from_dict(e) for e in data.get("roundPool", [])],
                discard_pile=[Card.from_dict(c) for c in data.get("discardPile", [])],
                round_number=int(data.get("roundNumber", 1)),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise InvalidInput(f"Malformed game session: {e}") from e

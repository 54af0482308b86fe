"""
Errors - Exception hierarchy for the game engine.

Every error is a local, synchronous validation failure. None of them is
retryable. Each carries:
- error_code: stable string used in API error bodies
- status_code: HTTP status the transport reports
- details: context (player, card, counts) for user-facing messages
"""

from __future__ import annotations
from typing import Any


class PartyCardsError(Exception):
    """Base exception for all PartyCards errors."""
    error_code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str, **details: Any):
        self.message = message
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details or None,
        }


class InvalidInput(PartyCardsError):
    """Missing or malformed input."""
    error_code = "INVALID_INPUT"
    status_code = 400


class PlayerAlreadyJoined(InvalidInput):
    """Raised when a player id is already seated in the game."""
    error_code = "PLAYER_ALREADY_JOINED"

    def __init__(self, player: str):
        self.player = player
        super().__init__(f"Player '{player}' has already joined this game", player=player)


class AlreadySubmitted(InvalidInput):
    """Raised when a player submits twice in the same round."""
    error_code = "ALREADY_SUBMITTED"

    def __init__(self, player: str, round_number: int):
        self.player = player
        self.round_number = round_number
        super().__init__(
            f"Player '{player}' already submitted a card in round {round_number}",
            player=player,
            round_number=round_number,
        )


class SessionNotFound(PartyCardsError):
    """No snapshot exists for a game id."""
    error_code = "SESSION_NOT_FOUND"
    status_code = 404

    def __init__(self, game_id: str):
        self.game_id = game_id
        super().__init__(f"Game {game_id} not found", game_id=game_id)


class PlayerNotFound(PartyCardsError):
    error_code = "PLAYER_NOT_FOUND"
    status_code = 400

    def __init__(self, player: str):
        self.player = player
        super().__init__(f"Player '{player}' not found", player=player)


class CardNotInHand(PartyCardsError):
    error_code = "CARD_NOT_IN_HAND"
    status_code = 400

    def __init__(self, player: str, text: str, pack: str):
        self.player = player
        super().__init__(
            f"Card not found in hand of player '{player}'",
            player=player,
            card={"text": text, "pack": pack},
        )


class CardNotInPool(PartyCardsError):
    error_code = "CARD_NOT_IN_POOL"
    status_code = 400

    def __init__(self, text: str, pack: str):
        super().__init__(
            "Winning card not found in round pool",
            card={"text": text, "pack": pack},
        )


class RoundIncomplete(PartyCardsError):
    error_code = "ROUND_INCOMPLETE"
    status_code = 400

    def __init__(self, submitted: int, expected: int):
        self.submitted = submitted
        self.expected = expected
        super().__init__(
            f"Not all players have played a card ({submitted}/{expected})",
            submitted=submitted,
            expected=expected,
        )


class InsufficientCards(PartyCardsError):
    error_code = "INSUFFICIENT_CARDS"
    status_code = 400

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Cannot deal {requested} cards, only {available} left in the deck",
            requested=requested,
            available=available,
        )


class EmptyDeck(PartyCardsError):
    error_code = "EMPTY_DECK"
    status_code = 400

    def __init__(self, deck_name: str = "prompt"):
        super().__init__(f"The {deck_name} deck is empty", deck=deck_name)


class CatalogError(PartyCardsError):
    """Raised when a card catalog file cannot be read or parsed."""
    error_code = "CATALOG_ERROR"
    status_code = 500


class CorruptSession(PartyCardsError):
    """Raised when a stored snapshot exists but cannot be read back."""
    error_code = "CORRUPT_SESSION"
    status_code = 500

    def __init__(self, game_id: str, reason: str):
        self.game_id = game_id
        super().__init__(f"Game {game_id} is stored but unreadable", game_id=game_id, reason=reason)


class ConfigError(PartyCardsError):
    """Raised when an environment setting has an unusable value."""
    error_code = "CONFIG_ERROR"
    status_code = 500

    def __init__(self, name: str, value: str, reason: str):
        super().__init__(f"Invalid {name}={value!r}: {reason}", name=name, value=value)

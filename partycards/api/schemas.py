"""
Pydantic Schemas for API - Request/response models for OpenAPI.

Field aliases keep the wire names existing game clients already use
(gameId, deck, blackCardDeck, currentBlackCard, winningPile, ...).
Both the alias and the Python name are accepted on input.

Join, play and judge requests may still carry the full game state the
old clients echo back (deck, players, roundPool, ...). Those fields are
accepted and ignored: the server reads the game from its own store.

Error Codes:
- VALIDATION_ERROR: Request body is missing fields or malformed
- INVALID_INPUT: Request is well-formed but not acceptable
- SESSION_NOT_FOUND: Game does not exist
- PLAYER_NOT_FOUND, PLAYER_ALREADY_JOINED, ALREADY_SUBMITTED
- CARD_NOT_IN_HAND, CARD_NOT_IN_POOL, ROUND_INCOMPLETE
- INSUFFICIENT_CARDS, EMPTY_DECK
- CATALOG_ERROR, CORRUPT_SESSION, CONFIG_ERROR: server-side data or setup problems
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Structured error codes."""
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
    PLAYER_ALREADY_JOINED = "PLAYER_ALREADY_JOINED"
    ALREADY_SUBMITTED = "ALREADY_SUBMITTED"
    CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
    CARD_NOT_IN_POOL = "CARD_NOT_IN_POOL"
    ROUND_INCOMPLETE = "ROUND_INCOMPLETE"
    INSUFFICIENT_CARDS = "INSUFFICIENT_CARDS"
    EMPTY_DECK = "EMPTY_DECK"
    CATALOG_ERROR = "CATALOG_ERROR"
    CORRUPT_SESSION = "CORRUPT_SESSION"
    CONFIG_ERROR = "CONFIG_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardSchema(BaseModel):
    """A prompt or response card."""
    text: str = Field(min_length=1)
    pack: str

    model_config = {"from_attributes": True}


class PlayerSchema(BaseModel):
    """A seated player with hand and winnings."""
    player: str
    hand: list[CardSchema] = Field(default_factory=list)
    winning_pile: list[CardSchema] = Field(default_factory=list, alias="winningPile")

    model_config = {"from_attributes": True, "populate_by_name": True}


class RoundEntrySchema(BaseModel):
    """A card submitted in the current round."""
    player: str
    card: CardSchema

    model_config = {"from_attributes": True}


# =============================================================================
# Request Models
# =============================================================================

class StartGameRequest(BaseModel):
    """Request to start a new game."""
    players: list[str] = Field(min_length=1, description="Player ids in seating order")


class _EchoedState(BaseModel):
    """Game state old clients send along. Accepted, never trusted."""
    deck: Optional[list[Any]] = None
    players: Optional[list[Any]] = None
    round_pool: Optional[list[Any]] = Field(None, alias="roundPool")
    black_card_deck: Optional[list[Any]] = Field(None, alias="blackCardDeck")
    current_black_card: Optional[Any] = Field(None, alias="currentBlackCard")

    model_config = {"populate_by_name": True, "extra": "ignore"}


class AddPlayerRequest(_EchoedState):
    """Request to seat a player in an existing game."""
    game_id: str = Field(min_length=1, alias="gameId")
    player: str = Field(min_length=1)


class PlayCardRequest(_EchoedState):
    """Request to play a card from a player's hand."""
    game_id: str = Field(min_length=1, alias="gameId")
    player: str = Field(min_length=1)
    card: CardSchema


class JudgeRoundRequest(_EchoedState):
    """Request to pick the winning card of the round."""
    game_id: str = Field(min_length=1, alias="gameId")
    winning_card: CardSchema = Field(alias="winningCard")


# =============================================================================
# Response Models
# =============================================================================

class GameStateResponse(BaseModel):
    """Full snapshot of one game."""
    game_id: str = Field(alias="gameId")
    deck: list[CardSchema] = Field(default_factory=list, description="Undealt response cards")
    black_card_deck: list[CardSchema] = Field(
        default_factory=list, alias="blackCardDeck", description="Undrawn prompt cards"
    )
    current_black_card: Optional[CardSchema] = Field(
        None, alias="currentBlackCard", description="Null once prompts run out"
    )
    players: list[PlayerSchema] = Field(default_factory=list)
    round_pool: list[RoundEntrySchema] = Field(default_factory=list, alias="roundPool")
    discard_pile: list[CardSchema] = Field(default_factory=list, alias="discardPile")
    round_number: int = Field(1, alias="roundNumber")
    scores: dict[str, int] = Field(default_factory=dict)

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None


class GameListResponse(BaseModel):
    games: list[str]
    count: int


class HealthResponse(BaseModel):
    status: str = "healthy"
    version: str
    env: str
    packs: list[str] = Field(default_factory=list)

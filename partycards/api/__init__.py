"""
API Module - HTTP interface for game clients.

Exposes the engine via REST API. A client:
1. Starts a game with a list of player ids
2. Seats late players
3. Plays one card per player per round
4. Submits the judge's pick

All game state lives server-side, looked up by gameId.
"""

from .schemas import (
    # Requests
    StartGameRequest,
    AddPlayerRequest,
    PlayCardRequest,
    JudgeRoundRequest,
    # Responses
    GameStateResponse,
    ErrorResponse,
    ErrorCode,
    # Shared
    CardSchema,
    PlayerSchema,
    RoundEntrySchema,
)
from .service import APIService
from .app import create_app, build_service

__all__ = [
    # Requests
    "StartGameRequest",
    "AddPlayerRequest",
    "PlayCardRequest",
    "JudgeRoundRequest",
    # Responses
    "GameStateResponse",
    "ErrorResponse",
    "ErrorCode",
    # Shared
    "CardSchema",
    "PlayerSchema",
    "RoundEntrySchema",
    # Service
    "APIService",
    "create_app",
    "build_service",
]

"""
API Service - Business logic layer between the API and the engine.

The service:
1. Translates API requests to SessionManager calls
2. Converts GameSession snapshots to response models

This layer is framework-agnostic. Engine errors (PartyCardsError)
propagate to the caller; the FastAPI app maps them to status codes.
"""

from __future__ import annotations
from dataclasses import dataclass

from .schemas import (
    StartGameRequest,
    AddPlayerRequest,
    PlayCardRequest,
    JudgeRoundRequest,
    GameStateResponse,
    CardSchema,
)
from ..engine_core.state import Card, GameSession
from ..session import SessionManager


def to_card(card: CardSchema) -> Card:
    return Card(text=card.text, pack=card.pack)


def session_to_response(session: GameSession) -> GameStateResponse:
    data = session.to_dict()
    data["scores"] = session.scores()
    return GameStateResponse.model_validate(data)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService(session_manager=SessionManager(catalog))

        state = service.start_game(StartGameRequest(players=["a", "b"]))
        state = service.play_card(PlayCardRequest(gameId=state.game_id, ...))
    """
    session_manager: SessionManager

    def start_game(self, request: StartGameRequest) -> GameStateResponse:
        session = self.session_manager.start_game(request.players)
        return session_to_response(session)

    def add_player(self, request: AddPlayerRequest) -> GameStateResponse:
        session = self.session_manager.add_player(request.game_id, request.player)
        return session_to_response(session)

    def play_card(self, request: PlayCardRequest) -> GameStateResponse:
        session = self.session_manager.submit_card(
            request.game_id, request.player, to_card(request.card)
        )
        return session_to_response(session)

    def judge_round(self, request: JudgeRoundRequest) -> GameStateResponse:
        session = self.session_manager.judge_round(
            request.game_id, to_card(request.winning_card)
        )
        return session_to_response(session)

    def get_game_state(self, game_id: str) -> GameStateResponse:
        return session_to_response(self.session_manager.get_game(game_id))

    def end_game(self, game_id: str) -> bool:
        return self.session_manager.end_game(game_id)

    def list_games(self) -> list[str]:
        return self.session_manager.list_games()

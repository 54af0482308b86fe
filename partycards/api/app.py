"""
FastAPI Application - REST API for game clients.

Endpoints:
    POST   /api/game/start-game        Start a game and deal hands
    POST   /api/game/add-player        Seat a player in a running game
    POST   /api/game/play-card         Play a card into the round pool
    POST   /api/game/judge-round       Pick the winning card of the round
    GET    /api/game/state/{game_id}   Get a game snapshot
    DELETE /api/game/{game_id}         Drop a game
    GET    /api/game                   List stored games
    GET    /api/health                 Health check

Every game is read from the server-side store by gameId. Game state
echoed in request bodies is ignored.

All error responses share the ErrorResponse body. Request validation
failures are reported as 400 VALIDATION_ERROR.
"""

from typing import Optional
import logging

from .. import __version__
from ..config import Settings
from ..errors import PartyCardsError

logger = logging.getLogger(__name__)


def create_app(service=None, settings: Optional[Settings] = None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (built from settings if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI
        from fastapi.exceptions import RequestValidationError
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .schemas import (
        StartGameRequest,
        AddPlayerRequest,
        PlayCardRequest,
        JudgeRoundRequest,
        GameStateResponse,
        ErrorResponse,
        ErrorCode,
        GameListResponse,
        HealthResponse,
    )

    settings = settings or Settings.from_env()
    api_service = service or build_service(settings)

    app = FastAPI(
        title="PartyCards API",
        description="""
Party card game sessions: deal hands, play cards against a prompt,
judge each round.

## Round Flow

1. `POST /start-game` with the player ids
2. Each player `POST /play-card` with one card from their hand
3. Once every player has played, `POST /judge-round` with the winning card
4. The next prompt is in `currentBlackCard` (null once prompts run out)

## Error Codes

| Code | Status | Description |
|------|--------|-------------|
| `VALIDATION_ERROR` | 400 | Missing or malformed fields |
| `SESSION_NOT_FOUND` | 404 | Game does not exist |
| `PLAYER_NOT_FOUND` | 400 | Player is not in the game |
| `PLAYER_ALREADY_JOINED` | 400 | Player id already seated |
| `ALREADY_SUBMITTED` | 400 | Player already played this round |
| `CARD_NOT_IN_HAND` | 400 | Card is not in the player's hand |
| `CARD_NOT_IN_POOL` | 400 | Winning card was not played this round |
| `ROUND_INCOMPLETE` | 400 | Not every player has played |
| `INSUFFICIENT_CARDS` | 400 | Deck cannot fill a hand |
| `EMPTY_DECK` | 400 | No prompt cards to start with |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.service = api_service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(PartyCardsError)
    async def handle_game_error(request, exc: PartyCardsError) -> JSONResponse:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.error_code} {exc.message}")
        return make_error_response(
            ErrorCode(exc.error_code),
            exc.message,
            status_code=exc.status_code,
            details=exc.details or None,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request, exc: RequestValidationError) -> JSONResponse:
        fields = [
            ".".join(str(p) for p in err["loc"] if p != "body") or "body"
            for err in exc.errors()
        ]
        logger.warning(f"{request.method} {request.url.path} invalid fields: {fields}")
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Missing or invalid fields: " + ", ".join(fields),
            details={"fields": fields},
        )

    error_responses = {
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse, "description": "Game not found"},
    }

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/game/start-game",
        response_model=GameStateResponse,
        responses={400: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Start a new game",
    )
    def start_game(body: StartGameRequest) -> GameStateResponse:
        """Shuffle the decks, draw the first prompt and deal every player a hand."""
        return api_service.start_game(body)

    @app.post(
        "/api/game/add-player",
        response_model=GameStateResponse,
        responses=error_responses,
        tags=["Game"],
        summary="Seat a player in a running game",
    )
    def add_player(body: AddPlayerRequest) -> GameStateResponse:
        """Reshuffle the remaining deck and deal the new player a hand."""
        return api_service.add_player(body)

    @app.post(
        "/api/game/play-card",
        response_model=GameStateResponse,
        responses=error_responses,
        tags=["Game"],
        summary="Play a card into the round pool",
    )
    def play_card(body: PlayCardRequest) -> GameStateResponse:
        return api_service.play_card(body)

    @app.post(
        "/api/game/judge-round",
        response_model=GameStateResponse,
        responses=error_responses,
        tags=["Game"],
        summary="Pick the winning card of the round",
    )
    def judge_round(body: JudgeRoundRequest) -> GameStateResponse:
        """
        Award the winning card, discard the rest and draw the next prompt.

        Every player must have played a card first.
        """
        return api_service.judge_round(body)

    @app.get(
        "/api/game/state/{game_id}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get a game snapshot",
    )
    def get_game_state(game_id: str) -> GameStateResponse:
        return api_service.get_game_state(game_id)

    @app.delete(
        "/api/game/{game_id}",
        tags=["Game"],
        summary="Drop a game",
    )
    def end_game(game_id: str) -> dict:
        return {"success": api_service.end_game(game_id), "gameId": game_id}

    @app.get(
        "/api/game",
        response_model=GameListResponse,
        tags=["Game"],
        summary="List stored games",
    )
    def list_games() -> GameListResponse:
        games = api_service.list_games()
        return GameListResponse(games=games, count=len(games))

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/api/health", response_model=HealthResponse, tags=["System"])
    def health() -> HealthResponse:
        return HealthResponse(
            version=__version__,
            env=settings.env,
            packs=api_service.session_manager.catalog.pack_names(),
        )

    return app


def build_service(settings: Settings):
    """Wire catalog, store and reducer from settings."""
    from .service import APIService
    from ..catalog import load_catalog
    from ..engine_core import DeckManager, SessionReducer
    from ..session import SessionManager, InMemorySessionStore, JsonFileSessionStore

    catalog = load_catalog(settings.catalog_path)
    store = (
        JsonFileSessionStore(settings.data_dir)
        if settings.data_dir
        else InMemorySessionStore()
    )
    reducer = SessionReducer(decks=DeckManager(), hand_size=settings.hand_size)
    return APIService(session_manager=SessionManager(catalog, store=store, reducer=reducer))

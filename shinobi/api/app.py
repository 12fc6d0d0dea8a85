"""
FastAPI Application - REST API for a clash client.

Endpoints:
    GET    /api/health                         Health check
    GET    /api/v1/characters                  Character roster
    POST   /api/v1/games                       Start a game
    GET    /api/v1/games                       List games
    GET    /api/v1/games/{id}                  Get game snapshot
    DELETE /api/v1/games/{id}                  Delete game
    POST   /api/v1/games/{id}/play             Play a card from hand
    POST   /api/v1/games/{id}/respond          Answer (or decline) a response window
    POST   /api/v1/games/{id}/discard          Confirm the discard phase
    POST   /api/v1/games/{id}/ultimate         Trigger the human's ultimate
    POST   /api/v1/games/{id}/end-play         End the play phase

Every accepted command runs automatic steps and AI turns until the
human must act again; the response is the resulting snapshot.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .schemas import (
    CharacterListResponse,
    CreateGameRequest,
    DiscardRequest,
    EndGameResponse,
    EndPlayRequest,
    ErrorCode,
    ErrorResponse,
    GameListResponse,
    GameStateResponse,
    HealthResponse,
    PlayCardRequest,
    RespondRequest,
    UltimateRequest,
)
from .service import APIService
from .. import __version__

# Environment configuration
SHINOBI_ENV = os.getenv("SHINOBI_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

STATUS_FOR_ERROR = {
    ErrorCode.GAME_NOT_FOUND: 404,
    ErrorCode.INTERNAL_ERROR: 500,
}


def create_app(service: APIService | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates one from the
            environment if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Shinobi Clash Engine API",
        description="""
Five-seat ninja card battle: one human against four AI opponents.

## Flow

1. `POST /api/v1/games` with a `character_id`
2. Act whenever `status` is `your_turn`: play cards, answer windows,
   discard, use the ultimate or end the play phase
3. Each response already includes every AI move made in between

## Error Codes

| Code | Description |
|------|-------------|
| `ILLEGAL_ACTION` | The rules refused the command (`details.reason`) |
| `GAME_NOT_FOUND` | Game does not exist |
| `UNKNOWN_CHARACTER` | Character id not in the roster |
        """,
        version=__version__,
        docs_url="/api/docs" if SHINOBI_ENV != "production" else None,
        redoc_url="/api/redoc" if SHINOBI_ENV != "production" else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService.from_env()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(response: ErrorResponse) -> JSONResponse:
        """Wrap an ErrorResponse with its HTTP status."""
        return JSONResponse(
            status_code=STATUS_FOR_ERROR.get(response.error_code, 400),
            content=response.model_dump(mode="json"),
        )

    def respond(response) -> Union[GameStateResponse, JSONResponse]:
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    error_responses = {
        400: {"model": ErrorResponse, "description": "Illegal action or unknown character"},
        404: {"model": ErrorResponse, "description": "Game not found"},
    }

    # =========================================================================
    # Catalog
    # =========================================================================

    @app.get(
        "/api/v1/characters",
        response_model=CharacterListResponse,
        tags=["Catalog"],
        summary="List playable characters",
    )
    async def list_characters() -> CharacterListResponse:
        return api_service.list_characters()

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameStateResponse,
        responses={400: error_responses[400]},
        tags=["Games"],
        summary="Start a new game",
    )
    async def create_game(request: CreateGameRequest) -> Union[GameStateResponse, JSONResponse]:
        """
        Start a new game and run it until the human must act.

        Pass `seed` for a reproducible deal.
        """
        return respond(api_service.start_game(request.character_id, request.seed, request.all_ai))

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List games",
    )
    async def list_games() -> GameListResponse:
        return api_service.list_games()

    @app.get(
        "/api/v1/games/{game_id}",
        response_model=GameStateResponse,
        responses={404: error_responses[404]},
        tags=["Games"],
        summary="Get game snapshot",
    )
    async def get_game(game_id: str) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.get_game(game_id))

    @app.delete(
        "/api/v1/games/{game_id}",
        response_model=EndGameResponse,
        tags=["Games"],
        summary="Delete a game",
    )
    async def end_game(game_id: str) -> EndGameResponse:
        """Delete a game and release its state."""
        success = api_service.end_game(game_id)
        return EndGameResponse(success=success, game_id=game_id)

    # =========================================================================
    # Command Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games/{game_id}/play",
        response_model=GameStateResponse,
        responses=error_responses,
        tags=["Commands"],
        summary="Play a card from hand",
    )
    async def play_card(game_id: str, request: PlayCardRequest) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.play_card(
            game_id, request.player_id, request.card_id, request.target_id,
        ))

    @app.post(
        "/api/v1/games/{game_id}/respond",
        response_model=GameStateResponse,
        responses=error_responses,
        tags=["Commands"],
        summary="Answer or decline a response window",
    )
    async def respond_to_window(game_id: str, request: RespondRequest) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.respond_to_window(game_id, request.player_id, request.card_id))

    @app.post(
        "/api/v1/games/{game_id}/discard",
        response_model=GameStateResponse,
        responses=error_responses,
        tags=["Commands"],
        summary="Confirm the discard phase",
    )
    async def confirm_discard(game_id: str, request: DiscardRequest) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.confirm_discard(game_id, request.player_id, request.card_ids))

    @app.post(
        "/api/v1/games/{game_id}/ultimate",
        response_model=GameStateResponse,
        responses=error_responses,
        tags=["Commands"],
        summary="Trigger the ultimate",
    )
    async def trigger_ultimate(game_id: str, request: UltimateRequest) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.trigger_ultimate(game_id, request.player_id, request.target_id))

    @app.post(
        "/api/v1/games/{game_id}/end-play",
        response_model=GameStateResponse,
        responses=error_responses,
        tags=["Commands"],
        summary="End the play phase",
    )
    async def end_play_phase(
        game_id: str,
        request: Optional[EndPlayRequest] = None,
    ) -> Union[GameStateResponse, JSONResponse]:
        player_id = request.player_id if request else "human"
        return respond(api_service.end_play_phase(game_id, player_id))

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/api/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="shinobi-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Shinobi Clash Engine API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/api/health",
        }

    return app


# For running directly: uvicorn shinobi.api.app:app
app = create_app()

"""
API Module - Client interface.

Exposes the engine via a REST API. A client:
1. Lists the roster and starts a game with a character
2. Sends the human's commands
3. Receives a snapshot after the AI seats have moved

All state is session-scoped. No persistent user accounts required.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    PlayCardRequest,
    RespondRequest,
    DiscardRequest,
    UltimateRequest,
    EndPlayRequest,
    # Responses
    GameStateResponse,
    CharacterListResponse,
    GameListResponse,
    EndGameResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    PlayerInfo,
    CardInfo,
    CharacterInfo,
    PendingInfo,
    # Enums
    ErrorCode,
    GameStatus,
)
from .service import APIService

__all__ = [
    "CreateGameRequest",
    "PlayCardRequest",
    "RespondRequest",
    "DiscardRequest",
    "UltimateRequest",
    "EndPlayRequest",
    "GameStateResponse",
    "CharacterListResponse",
    "GameListResponse",
    "EndGameResponse",
    "ErrorResponse",
    "HealthResponse",
    "PlayerInfo",
    "CardInfo",
    "CharacterInfo",
    "PendingInfo",
    "ErrorCode",
    "GameStatus",
    "APIService",
]

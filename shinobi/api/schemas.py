"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between a client UI and the engine.
All responses include explicit types for OpenAPI schema generation.

Error Codes:
- ILLEGAL_ACTION: The engine refused the command (see details.reason)
- GAME_NOT_FOUND: Game does not exist or has been deleted
- UNKNOWN_CHARACTER: Character id is not in the roster
- VALIDATION_ERROR: Request body failed validation
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class GameStatus(str, Enum):
    """Game status values."""
    ACTIVE = "active"
    YOUR_TURN = "your_turn"
    GAME_OVER = "game_over"
    STALLED = "stalled"


class ErrorCode(str, Enum):
    """Structured error codes."""
    ILLEGAL_ACTION = "ILLEGAL_ACTION"
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    UNKNOWN_CHARACTER = "UNKNOWN_CHARACTER"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """A card instance as shown to the client."""
    instance_id: str
    card_id: str
    name: str
    kind: str
    suit: str
    rank: int
    description: str = ""
    attack_range: Optional[int] = None


class EquipmentInfo(BaseModel):
    weapon: Optional[CardInfo] = None
    armor: Optional[CardInfo] = None
    offense_mount: Optional[CardInfo] = None
    defense_mount: Optional[CardInfo] = None


class SkillInfo(BaseModel):
    name: str
    description: str
    is_passive: bool = False
    is_ultimate: bool = False


class CharacterInfo(BaseModel):
    """A roster entry."""
    character_id: str
    name: str
    max_hp: int
    skills: list[SkillInfo] = Field(default_factory=list)
    ultimate_condition: Optional[str] = Field(None, description="When the ultimate may be used")
    ultimate_needs_target: bool = False


class PlayerInfo(BaseModel):
    """
    A seat as shown to the human.

    `hand` is only filled for the human seat; AI hands are counts.
    """
    player_id: str
    character_id: str
    character_name: str
    is_ai: bool
    hp: int
    max_hp: int
    is_alive: bool
    is_current_turn: bool = False
    hand_count: int = 0
    hand: Optional[list[CardInfo]] = None
    equipment: EquipmentInfo = Field(default_factory=EquipmentInfo)
    attacks_played: int = 0
    skipped_turn: bool = False
    ultimate_cooldown: int = 0
    ultimate_ready: bool = False
    distance_from_human: Optional[int] = None
    in_human_attack_range: bool = False


class PendingInfo(BaseModel):
    """The pending response window or judgement, if any."""
    kind: str = Field(description="response or judgement")
    source_id: str
    target_id: Optional[str] = Field(None, description="None means every other player")
    card: CardInfo
    demanded: Optional[str] = Field(None, description="Card kind the responder must play")
    step: Optional[str] = Field(None, description="Judgement step: reveal or draw")


class LogEntryInfo(BaseModel):
    sequence: int
    text: str
    kind: str


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to start a new game."""
    character_id: str = Field(..., description="Character for the human seat")
    seed: Optional[int] = Field(None, description="Seed for reproducible games")
    all_ai: bool = Field(False, description="Let a bot play the human seat too")


class PlayCardRequest(BaseModel):
    card_id: str = Field(..., description="Instance id of the card in hand")
    target_id: Optional[str] = Field(None, description="Target player for targeted cards")
    player_id: str = Field("human", description="Acting seat")


class RespondRequest(BaseModel):
    card_id: Optional[str] = Field(None, description="Response card instance id; null declines")
    player_id: str = Field("human", description="Responding seat")


class DiscardRequest(BaseModel):
    card_ids: list[str] = Field(..., description="Exactly the required number of card instance ids")
    player_id: str = Field("human", description="Discarding seat")


class UltimateRequest(BaseModel):
    target_id: Optional[str] = Field(None, description="Target player for targeted ultimates")
    player_id: str = Field("human", description="Acting seat")


class EndPlayRequest(BaseModel):
    player_id: str = Field("human", description="Acting seat")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Complete game snapshot from the human seat's point of view."""
    game_id: str
    status: GameStatus
    turn_number: int
    phase: str
    current_player_id: str
    acting_player_id: Optional[str] = None
    players: list[PlayerInfo] = Field(default_factory=list)
    pending: Optional[PendingInfo] = None
    discard_required: int = 0
    draw_pile_count: int = 0
    discard_pile_count: int = 0
    winner_id: Optional[str] = None
    logs: list[LogEntryInfo] = Field(default_factory=list)

    # What ran since the previous snapshot
    actions: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    api_version: str = "v1"


class CharacterListResponse(BaseModel):
    characters: list[CharacterInfo]
    count: int


class GameListResponse(BaseModel):
    """Response listing games in memory."""
    games: list[str]
    count: int


class EndGameResponse(BaseModel):
    """Response after deleting a game."""
    success: bool
    game_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str

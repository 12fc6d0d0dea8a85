"""
Action System - Commands, payloads, and results.

Actions represent:
1. Player commands (play a card, respond, discard, ultimate, end play)
2. The ADVANCE system action that runs automatic steps

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    # Player commands
    PLAY_CARD = "play_card"
    RESPOND = "respond"  # card_id None means decline
    CONFIRM_DISCARD = "confirm_discard"
    TRIGGER_ULTIMATE = "trigger_ultimate"
    END_PLAY_PHASE = "end_play_phase"

    # System actions
    ADVANCE = "advance"  # START/DRAW/END phases and judgement steps


class ErrorCode:
    """Failure codes carried by ActionResult.error_code."""
    GAME_OVER = "GAME_OVER"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    WRONG_PHASE = "WRONG_PHASE"
    PENDING_ACTION = "PENDING_ACTION"
    CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
    INVALID_TARGET = "INVALID_TARGET"
    ATTACK_CAP = "ATTACK_CAP"
    NOT_PLAYABLE = "NOT_PLAYABLE"
    WRONG_CARD_KIND = "WRONG_CARD_KIND"
    DISCARD_COUNT = "DISCARD_COUNT"
    ULTIMATE_UNAVAILABLE = "ULTIMATE_UNAVAILABLE"
    NO_PENDING = "NO_PENDING"
    UNKNOWN_PLAYER = "UNKNOWN_PLAYER"
    HANDLER_ERROR = "HANDLER_ERROR"
    NO_HANDLER = "NO_HANDLER"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields; validation happens
    in the reducer.
    """
    player_id: str | None = None
    card_id: str | None = None  # card instance id
    target_player_id: str | None = None
    card_ids: list[str] = field(default_factory=list)  # for discards


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Actions are validated before application and applied atomically
    by the reducer.
    """
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @property
    def player_id(self) -> str | None:
        return self.payload.player_id

    @classmethod
    def play_card(cls, player_id: str, card_id: str, target_id: str | None = None) -> Action:
        """Factory for playing a card from hand."""
        return cls(
            action_type=ActionType.PLAY_CARD,
            payload=ActionPayload(player_id=player_id, card_id=card_id, target_player_id=target_id),
        )

    @classmethod
    def respond(cls, player_id: str, card_id: str | None = None) -> Action:
        """Factory for answering a response window (None declines)."""
        return cls(
            action_type=ActionType.RESPOND,
            payload=ActionPayload(player_id=player_id, card_id=card_id),
        )

    @classmethod
    def decline(cls, player_id: str) -> Action:
        return cls.respond(player_id, None)

    @classmethod
    def confirm_discard(cls, player_id: str, card_ids: list[str]) -> Action:
        return cls(
            action_type=ActionType.CONFIRM_DISCARD,
            payload=ActionPayload(player_id=player_id, card_ids=list(card_ids)),
        )

    @classmethod
    def trigger_ultimate(cls, player_id: str, target_id: str | None = None) -> Action:
        return cls(
            action_type=ActionType.TRIGGER_ULTIMATE,
            payload=ActionPayload(player_id=player_id, target_player_id=target_id),
        )

    @classmethod
    def end_play_phase(cls, player_id: str) -> Action:
        return cls(
            action_type=ActionType.END_PLAY_PHASE,
            payload=ActionPayload(player_id=player_id),
        )

    @classmethod
    def advance(cls) -> Action:
        """Factory for the system step action."""
        return cls(action_type=ActionType.ADVANCE)

    def describe(self) -> str:
        parts = [self.action_type.value]
        if self.payload.player_id:
            parts.append(self.payload.player_id)
        if self.payload.card_id:
            parts.append(self.payload.card_id)
        if self.payload.target_player_id:
            parts.append(f"-> {self.payload.target_player_id}")
        if self.payload.card_ids:
            parts.append(",".join(self.payload.card_ids))
        return " ".join(parts)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Errors (if failed)
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(cls, state: Any) -> ActionResult:
        """Create a success result with new state."""
        return cls(success=True, new_state=state)

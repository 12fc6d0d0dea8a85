"""
Engine Core - Deterministic clash state management and card resolution.

The engine is the runtime that:
1. Holds the GameState (seeded RNG included)
2. Runs the turn-phase state machine
3. Generates legal actions
4. Applies actions via the reducer
5. Resolves response windows, judgements, card effects and ultimates
"""

from .state import GameState, PlayerState, PlayingCard, Zone, Phase, LogKind
from .rules import GameRules
from .action import Action, ActionType, ActionPayload, ActionResult, ErrorCode
from .reducer import Reducer, apply_action
from .action_generator import ActionGenerator, legal_actions
from .deck import DeckExhausted
from .invariants import InvariantViolation, check_invariants

__all__ = [
    "GameState",
    "PlayerState",
    "PlayingCard",
    "Zone",
    "Phase",
    "LogKind",
    "GameRules",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "ErrorCode",
    "Reducer",
    "apply_action",
    "ActionGenerator",
    "legal_actions",
    "DeckExhausted",
    "InvariantViolation",
    "check_invariants",
]

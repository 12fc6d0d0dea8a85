"""
Bot Policy - How a seat picks its next action.

Every moment a seat has to act (its play phase, a response window
aimed at it, a forced discard) looks the same to a policy: a snapshot
plus the actions the generator says are legal for that seat.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
import random
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.state import GameState


@dataclass
class BotDecision:
    """The chosen action plus a short reason for the loop's diagnostics."""
    action: Action
    explanation: str = ""
    confidence: float = 1.0
    evaluated_actions: int = 0


class BotPolicy(ABC):
    """
    Base class for seat controllers.

    Implementations should pick from `legal_actions`; the game loop
    falls back to the first legal action when they do not.
    """

    @abstractmethod
    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        ...

    def _require_choices(self, legal_actions: list[Action]) -> None:
        if not legal_actions:
            raise ValueError("No legal actions available")


class RandomPolicy(BotPolicy):
    """
    Uniform choice among the legal actions, from its own seeded RNG.

    Drives the fuzz tests: any sequence it produces must be accepted
    by the reducer.
    """

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        self._require_choices(legal_actions)
        action = self.rng.choice(legal_actions)
        return BotDecision(
            action=action,
            explanation=f"Random pick for {state.acting_player_id or 'system'}",
            confidence=1.0 / len(legal_actions),
            evaluated_actions=len(legal_actions),
        )


class FirstLegalPolicy(BotPolicy):
    """Always the first generated action (plays cards in hand order, ends play last)."""

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        self._require_choices(legal_actions)
        return BotDecision(action=legal_actions[0], explanation="First legal action")

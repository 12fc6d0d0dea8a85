"""
Game Rules - Tunable constants of the rules engine.

Defaults reproduce the standard five-player game. Every field can be
overridden from the environment with a SHINOBI_ prefix, e.g.
SHINOBI_ATTACK_CAP=3 or SHINOBI_CHECK_INVARIANTS=false.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
import os


_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class GameRules:
    num_players: int = 5

    # Opening hands
    human_initial_hand: int = 6
    ai_initial_hand: int = 5

    # Draw phase (the AI draws fewer cards on purpose)
    human_draw_count: int = 3
    ai_draw_count: int = 2

    # Play phase
    attack_cap: int = 2

    # End phase: hand limit is hp (+ bonus for the human)
    human_hand_limit_bonus: int = 1

    ultimate_cooldown: int = 10
    log_limit: int = 12

    # Decline a response window for the human when they hold no matching card
    auto_decline_without_card: bool = True

    # Run invariant checks after every accepted command
    check_invariants: bool = True

    @classmethod
    def from_env(cls, prefix: str = "SHINOBI_") -> GameRules:
        """Build rules from defaults overridden by environment variables."""
        overrides = {}
        for f in fields(cls):
            raw = os.getenv(prefix + f.name.upper())
            if raw is None:
                continue
            if f.type in ("bool", bool):
                overrides[f.name] = raw.strip().lower() in _TRUE_VALUES
            else:
                overrides[f.name] = int(raw)
        return cls(**overrides)

    def draw_count(self, is_ai: bool) -> int:
        return self.ai_draw_count if is_ai else self.human_draw_count

    def initial_hand(self, is_ai: bool) -> int:
        return self.ai_initial_hand if is_ai else self.human_initial_hand

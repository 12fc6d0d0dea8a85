"""
Invariants - Conditions that only an engine bug can break.

Illegal commands are refused by the reducer with an ActionResult
failure. The checks here are different: they describe states that must
never be reachable at all, so they raise instead of returning.
"""

from __future__ import annotations
from collections import Counter
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .state import GameState


class InvariantViolation(AssertionError):
    """The engine reached a state the rules make impossible."""


def check_card_conservation(state: GameState) -> None:
    ids = state.all_card_ids()
    counts = Counter(ids)
    duplicated = sorted(i for i, n in counts.items() if n > 1)
    if duplicated:
        raise InvariantViolation(f"Cards in two places at once: {duplicated[:5]}")

    seen = set(counts)
    if seen != state.universe:
        missing = sorted(state.universe - seen)
        extra = sorted(seen - state.universe)
        raise InvariantViolation(
            f"Card universe changed: missing={missing[:5]} extra={extra[:5]}"
        )


def check_hp_bounds(state: GameState) -> None:
    for p in state.players:
        if not 0 <= p.hp <= p.max_hp:
            raise InvariantViolation(f"{p.player_id} hp {p.hp} outside [0, {p.max_hp}]")


def check_phase_consistency(state: GameState) -> None:
    from .state import Phase

    if state.pending is not None and state.phase != Phase.PLAY:
        raise InvariantViolation(f"Pending action during {state.phase.value}")
    if state.discard_required and state.phase != Phase.DISCARD:
        raise InvariantViolation(f"discard_required set during {state.phase.value}")
    if state.is_over:
        return
    if not state.current_player.is_alive and state.pending is None:
        raise InvariantViolation(
            f"Turn index {state.current_player_idx} points at an eliminated seat"
        )


def check_invariants(state: GameState) -> None:
    """Raise InvariantViolation if the state is impossible."""
    check_card_conservation(state)
    check_hp_bounds(state)
    check_phase_consistency(state)

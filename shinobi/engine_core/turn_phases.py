"""
Turn Phases - START, DRAW, END and DISCARD for the active player.

START, DRAW and END are system phases: they run when an ADVANCE action
reaches the reducer. PLAY and DISCARD wait for the active player.
"""

from __future__ import annotations
from typing import Callable, TYPE_CHECKING

from .effect_resolver import discard_from_hand, draw_cards, heal, lowest_value_cards
from .invariants import InvariantViolation
from .state import LogKind, Phase

if TYPE_CHECKING:
    from .state import GameState, PlayerState, PlayingCard


def draw_count(state: GameState, player: PlayerState) -> int:
    count = state.rules.draw_count(player.is_ai)
    passives = player.character.passives
    if passives.low_hp_draw_bonus and player.hp <= passives.low_hp_threshold:
        count += passives.low_hp_draw_bonus
    return count


def hand_limit(state: GameState, player: PlayerState) -> int:
    if player.is_human:
        return player.hp + state.rules.human_hand_limit_bonus
    return player.hp


def run_start(state: GameState) -> None:
    player = state.current_player
    player.flags.ultimate_cooldown = max(0, player.flags.ultimate_cooldown - 1)
    player.attacks_played = 0
    state.log(f"Turn {state.turn_number}: {player.name}'s turn.")

    if player.skipped_turn:
        player.skipped_turn = False
        state.log(f"{player.name} is trapped and skips this turn!", LogKind.IMPORTANT)
        state.phase = Phase.END
        return
    state.phase = Phase.DRAW


def run_draw(state: GameState) -> None:
    player = state.current_player
    draw_cards(state, player, draw_count(state, player))
    state.phase = Phase.PLAY


def end_play(state: GameState) -> None:
    state.phase = Phase.END


def run_end(state: GameState) -> None:
    player = state.current_player

    if player.character.passives.end_turn_recovery and player.is_wounded:
        state.log(f"{player.name} channels healing chakra.", LogKind.SKILL)
        heal(state, player, 1)
        if not player.hand.is_empty:
            discard_from_hand(state, player, lowest_value_cards(player, 1))

    excess = player.hand.count - hand_limit(state, player)
    if excess > 0:
        state.phase = Phase.DISCARD
        state.discard_required = excess
        state.log(f"{player.name} must discard {excess} card{'s' if excess != 1 else ''}.")
        return
    advance_turn(state)


def confirm_discard(state: GameState, cards: list[PlayingCard]) -> None:
    player = state.current_player
    discard_from_hand(state, player, cards)
    state.log(f"{player.name} discarded {len(cards)} card{'s' if len(cards) != 1 else ''}.")
    state.discard_required = 0
    advance_turn(state)


def next_alive_seat(state: GameState, from_idx: int) -> int:
    """Next alive seat clockwise; the scan is bounded by the seat count."""
    n = state.num_players
    for step in range(1, n + 1):
        idx = (from_idx + step) % n
        if state.players[idx].is_alive:
            return idx
    raise InvariantViolation("No alive seat to pass the turn to")


def advance_turn(state: GameState) -> None:
    state.current_player_idx = next_alive_seat(state, state.current_player_idx)
    state.turn_number += 1
    state.discard_required = 0
    state.phase = Phase.START


PHASE_STEPS: dict[Phase, Callable[[GameState], None]] = {
    Phase.START: run_start,
    Phase.DRAW: run_draw,
    Phase.END: run_end,
}


def run_system_phase(state: GameState) -> None:
    step = PHASE_STEPS.get(state.phase)
    if step is None:
        raise ValueError(f"{state.phase.value} is not a system phase")
    step(state)

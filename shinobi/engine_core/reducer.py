"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- (state, action) -> new_state: the input state is never touched
- Validates before applying; a rejected action carries no state
- Settles the result (game over, eliminated active player) every time
- Delegates card effects to the effect resolver and windows to pending
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Callable

from . import pending, turn_phases
from .action import Action, ActionResult, ActionType, ErrorCode
from .definitions import CardKind, RESPONSE_ONLY_KINDS
from .effect_resolver import equip, execute_ultimate, resolve_card_effect, ultimate_error
from .invariants import InvariantViolation, check_invariants
from .state import GameState, Judgement, LogKind, Phase, PlayerState, ResponseWindow
from .targeting import target_error

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state (rules and RNG included) is in GameState.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with the new state or an error code.
        InvariantViolation is never converted: it propagates.
        """
        rejection = self._validate_action(state, action)
        if rejection:
            message, code = rejection
            logger.debug("Rejected %s: %s", action.describe(), message)
            return ActionResult.failure(message, error_code=code)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=ErrorCode.NO_HANDLER,
            )

        new_state = state.clone()
        try:
            handler(new_state, action)
            self._settle(new_state)
        except InvariantViolation:
            raise
        except Exception as e:
            logger.warning("Handler for %s failed: %s", action.describe(), e)
            return ActionResult.failure(str(e), error_code=ErrorCode.HANDLER_ERROR)

        if new_state.rules.check_invariants:
            check_invariants(new_state)
        logger.debug("Applied %s -> %s", action.describe(), new_state.phase.value)
        return ActionResult.success_with_state(new_state)

    # =========================================================================
    # Validation
    # =========================================================================

    def _validate_action(self, state: GameState, action: Action) -> tuple[str, str] | None:
        """
        Validate that an action is legal in the current state.

        Returns (message, error code) if invalid, None if valid.
        """
        if state.is_over:
            return "Game is over - no actions allowed", ErrorCode.GAME_OVER

        if action.action_type == ActionType.ADVANCE:
            if state.acting_player_id is not None:
                return f"Waiting for {state.acting_player_id} to act", ErrorCode.WRONG_PHASE
            return None

        player = state.get_player(action.player_id) if action.player_id else None
        if player is None:
            return f"Unknown player: {action.player_id}", ErrorCode.UNKNOWN_PLAYER

        validators = {
            ActionType.PLAY_CARD: self._validate_play,
            ActionType.RESPOND: self._validate_respond,
            ActionType.CONFIRM_DISCARD: self._validate_discard,
            ActionType.TRIGGER_ULTIMATE: self._validate_ultimate,
            ActionType.END_PLAY_PHASE: self._validate_end_play,
        }
        validator = validators.get(action.action_type)
        if validator is None:
            return None
        return validator(state, player, action)

    def _own_play_phase(self, state: GameState, player: PlayerState) -> tuple[str, str] | None:
        if state.current_player.player_id != player.player_id:
            return f"Not {player.player_id}'s turn", ErrorCode.NOT_YOUR_TURN
        if state.phase != Phase.PLAY:
            return f"Cannot do that during the {state.phase.value} phase", ErrorCode.WRONG_PHASE
        if state.pending is not None:
            return "Resolve the pending action first", ErrorCode.PENDING_ACTION
        return None

    def _validate_play(self, state: GameState, player: PlayerState, action: Action) -> tuple[str, str] | None:
        error = self._own_play_phase(state, player)
        if error:
            return error

        card = player.hand.find(action.payload.card_id or "")
        if card is None:
            return f"Card {action.payload.card_id} is not in hand", ErrorCode.CARD_NOT_IN_HAND
        if card.kind in RESPONSE_ONLY_KINDS:
            return f"{card.name} can only be played as a response", ErrorCode.NOT_PLAYABLE
        if card.kind == CardKind.ATTACK and player.attacks_played >= state.rules.attack_cap:
            return (
                f"Already played {player.attacks_played} attack cards this turn",
                ErrorCode.ATTACK_CAP,
            )
        if card.kind.needs_target:
            target_id = action.payload.target_player_id
            target = state.get_player(target_id) if target_id else None
            reason = target_error(state, player, target, card)
            if reason:
                return reason, ErrorCode.INVALID_TARGET
        return None

    def _validate_respond(self, state: GameState, player: PlayerState, action: Action) -> tuple[str, str] | None:
        window = state.pending
        if not isinstance(window, ResponseWindow):
            return "There is nothing to respond to", ErrorCode.NO_PENDING
        if window.responder_id != player.player_id:
            return f"Waiting for {window.responder_id} to respond", ErrorCode.NOT_YOUR_TURN

        card_id = action.payload.card_id
        if card_id is None:
            return None
        card = player.hand.find(card_id)
        if card is None:
            return f"Card {card_id} is not in hand", ErrorCode.CARD_NOT_IN_HAND
        if card.kind != window.demanded:
            return (
                f"{card.name} cannot answer this; {window.demanded.value} required",
                ErrorCode.WRONG_CARD_KIND,
            )
        return None

    def _validate_discard(self, state: GameState, player: PlayerState, action: Action) -> tuple[str, str] | None:
        if state.current_player.player_id != player.player_id:
            return f"Not {player.player_id}'s turn", ErrorCode.NOT_YOUR_TURN
        if state.phase != Phase.DISCARD:
            return "No discard is required now", ErrorCode.WRONG_PHASE

        card_ids = action.payload.card_ids
        if len(set(card_ids)) != len(card_ids) or len(card_ids) != state.discard_required:
            return (
                f"Must discard exactly {state.discard_required} distinct cards",
                ErrorCode.DISCARD_COUNT,
            )
        missing = [cid for cid in card_ids if player.hand.find(cid) is None]
        if missing:
            return f"Cards not in hand: {missing}", ErrorCode.CARD_NOT_IN_HAND
        return None

    def _validate_ultimate(self, state: GameState, player: PlayerState, action: Action) -> tuple[str, str] | None:
        reason = ultimate_error(state, player)
        if reason:
            return reason, ErrorCode.ULTIMATE_UNAVAILABLE
        if player.character.ultimate.needs_target:
            target_id = action.payload.target_player_id
            target = state.get_player(target_id) if target_id else None
            if target is None or not target.is_alive or target.player_id == player.player_id:
                return "Choose a living opponent as the target", ErrorCode.INVALID_TARGET
        return None

    def _validate_end_play(self, state: GameState, player: PlayerState, action: Action) -> tuple[str, str] | None:
        return self._own_play_phase(state, player)

    # =========================================================================
    # Handlers
    # =========================================================================

    def _get_handler(self, action_type: ActionType) -> Callable | None:
        """Get the handler function for an action type."""
        handlers = {
            ActionType.PLAY_CARD: self._handle_play_card,
            ActionType.RESPOND: self._handle_respond,
            ActionType.CONFIRM_DISCARD: self._handle_confirm_discard,
            ActionType.TRIGGER_ULTIMATE: self._handle_trigger_ultimate,
            ActionType.END_PLAY_PHASE: self._handle_end_play_phase,
            ActionType.ADVANCE: self._handle_advance,
        }
        return handlers.get(action_type)

    def _handle_play_card(self, state: GameState, action: Action) -> None:
        player = state.get_player(action.player_id)
        card = player.hand.find(action.payload.card_id)
        target_id = action.payload.target_player_id
        target = state.get_player(target_id) if card.kind.needs_target else None

        player.hand = player.hand.remove(card)
        if card.kind.is_equipment:
            equip(state, player, card)
            return

        state.discard_pile = state.discard_pile.add(card)
        if card.kind == CardKind.ATTACK:
            player.attacks_played += 1

        if pending.opens_window(card.kind):
            pending.open_window_for_card(state, player, target, card)
        else:
            state.log(f"{player.name} used {card.name}.")
            resolve_card_effect(state, player, None, card)

    def _handle_respond(self, state: GameState, action: Action) -> None:
        if action.payload.card_id is None:
            pending.decline(state)
            return
        responder = state.get_player(action.player_id)
        pending.accept(state, responder.hand.find(action.payload.card_id))

    def _handle_confirm_discard(self, state: GameState, action: Action) -> None:
        player = state.get_player(action.player_id)
        cards = [player.hand.find(cid) for cid in action.payload.card_ids]
        turn_phases.confirm_discard(state, cards)

    def _handle_trigger_ultimate(self, state: GameState, action: Action) -> None:
        player = state.get_player(action.player_id)
        target = None
        if player.character.ultimate.needs_target:
            target = state.get_player(action.payload.target_player_id)
        execute_ultimate(state, player, target)

    def _handle_end_play_phase(self, state: GameState, action: Action) -> None:
        turn_phases.end_play(state)

    def _handle_advance(self, state: GameState, action: Action) -> None:
        if isinstance(state.pending, Judgement):
            pending.advance_judgement(state)
        else:
            turn_phases.run_system_phase(state)

    # =========================================================================
    # Settlement
    # =========================================================================

    def _settle(self, state: GameState) -> None:
        """Check for a winner and move past an eliminated active player."""
        alive = state.alive_players()
        if len(alive) <= 1:
            state.phase = Phase.GAME_OVER
            state.pending = None
            state.discard_required = 0
            state.winner_id = alive[0].player_id if alive else None
            if alive:
                state.log(f"Game over! {alive[0].name} is the last one standing.", LogKind.IMPORTANT)
            else:
                state.log("Game over! Nobody survived.", LogKind.IMPORTANT)
            logger.info("Game %s over, winner=%s", state.game_id, state.winner_id)
            return

        if not state.current_player.is_alive and state.pending is None:
            turn_phases.advance_turn(state)


# Module-level convenience function
_default_reducer = Reducer()


def apply_action(state: GameState, action: Action) -> ActionResult:
    """
    Apply an action to a game state.

    Convenience function that uses a shared stateless reducer.
    """
    return _default_reducer.apply(state, action)

"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. Bots to enumerate possible moves
2. The game loop to decide whether the human can answer a window
3. Tests (every generated action must be accepted by the reducer)

Design: Generates Action objects, not just action types.
This ensures all generated actions are fully specified.
"""

from __future__ import annotations
from dataclasses import dataclass
from itertools import combinations, islice

from .action import Action
from .definitions import CardKind, RESPONSE_ONLY_KINDS
from .effect_resolver import ultimate_available
from .state import GameState, Phase, PlayerState, ResponseWindow
from .targeting import legal_targets

# Discard combinations grow fast; enumerating a prefix is enough for bots
MAX_DISCARD_OPTIONS = 64


@dataclass
class ActionGenerator:
    """
    Generates legal actions for whoever must act next.
    """
    max_discard_options: int = MAX_DISCARD_OPTIONS

    def generate(self, state: GameState) -> list[Action]:
        """
        Generate all legal actions for the acting player.

        Returns [Action.advance()] when the next step is automatic and
        an empty list when the game is over.
        """
        if state.is_over:
            return []

        if isinstance(state.pending, ResponseWindow):
            return self._generate_responses(state, state.get_player(state.pending.responder_id))

        acting = state.acting_player_id
        if acting is None:
            return [Action.advance()]

        player = state.get_player(acting)
        if state.phase == Phase.DISCARD:
            return self._generate_discards(state, player)
        return self._generate_play_actions(state, player)

    def _generate_responses(self, state: GameState, player: PlayerState) -> list[Action]:
        """One action per matching card, plus declining."""
        demanded = state.pending.demanded
        actions = [
            Action.respond(player.player_id, card.instance_id)
            for card in player.hand.cards
            if card.kind == demanded
        ]
        actions.append(Action.decline(player.player_id))
        return actions

    def _generate_discards(self, state: GameState, player: PlayerState) -> list[Action]:
        ids = [c.instance_id for c in player.hand.cards]
        combos = islice(combinations(ids, state.discard_required), self.max_discard_options)
        return [Action.confirm_discard(player.player_id, list(combo)) for combo in combos]

    def _generate_play_actions(self, state: GameState, player: PlayerState) -> list[Action]:
        actions = []
        pid = player.player_id

        for card in player.hand.cards:
            if card.kind in RESPONSE_ONLY_KINDS:
                continue
            if card.kind == CardKind.ATTACK and player.attacks_played >= state.rules.attack_cap:
                continue
            if card.kind.needs_target:
                for target in legal_targets(state, player, card):
                    actions.append(Action.play_card(pid, card.instance_id, target.player_id))
            else:
                actions.append(Action.play_card(pid, card.instance_id))

        if ultimate_available(state, player):
            if player.character.ultimate.needs_target:
                for target in state.alive_players():
                    if target.player_id != pid:
                        actions.append(Action.trigger_ultimate(pid, target.player_id))
            else:
                actions.append(Action.trigger_ultimate(pid))

        actions.append(Action.end_play_phase(pid))
        return actions


_default_generator = ActionGenerator()


def legal_actions(state: GameState) -> list[Action]:
    """Convenience function using a shared generator."""
    return _default_generator.generate(state)

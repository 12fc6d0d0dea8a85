"""
Ninja Bot - Rule-based opponent for Ninja Clash.

The bot plays by exactly the same rules as the human: every decision
is an ordinary Action that goes through the reducer.

Play phase priority (first applicable wins):
1. Emergency: hp <= 2 -> heal, else a draw card
2. Equip the first equipment card held
3. Skip-turn scroll on the biggest threat
4. Attack the biggest threat in range (under the attack cap)
5. Damage scroll or duel on the biggest threat
6. Steal from the first adjacent opponent with cards
7. Discard scroll on the biggest threat with cards
8. AoE, then draw, then heal if wounded
9. End the play phase

The bot does NOT:
- Look ahead or simulate outcomes
- Use ultimates (human seat only)
- Hold dodges back: it always answers a window when it can
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..engine_core.action import Action
from ..engine_core.definitions import CardKind
from ..engine_core.effect_resolver import lowest_value_cards
from ..engine_core.state import Phase, ResponseWindow
from ..engine_core.targeting import distance, legal_targets
from .evaluator import ThreatEvaluator
from .policy import BotDecision, BotPolicy

if TYPE_CHECKING:
    from ..engine_core.state import GameState, PlayerState, PlayingCard


EMERGENCY_HP = 2


@dataclass
class HeuristicBot(BotPolicy):
    """
    Priority-list bot.

    Usage:
        bot = HeuristicBot()
        action = bot.decide(state.get_player("ai1"), state)
    """
    evaluator: ThreatEvaluator = field(default_factory=ThreatEvaluator)

    def select_action(
        self,
        state: GameState,
        legal_actions: list[Action],
    ) -> BotDecision:
        if not legal_actions:
            raise ValueError("No legal actions available")

        acting = state.acting_player_id
        player = state.get_player(acting) if acting else None
        if player is None:
            return BotDecision(action=legal_actions[0], explanation="System step")

        action = self.decide(player, state)
        if action not in legal_actions:
            return BotDecision(
                action=action,
                explanation="Heuristic choice outside the generated list",
                confidence=0.5,
                evaluated_actions=len(legal_actions),
            )
        return BotDecision(
            action=action,
            explanation=f"Heuristic: {action.action_type.value}",
            evaluated_actions=len(legal_actions),
        )

    def decide(self, player: PlayerState, state: GameState) -> Action:
        """Deterministic decision for the given seat and snapshot."""
        window = state.pending
        if isinstance(window, ResponseWindow) and window.responder_id == player.player_id:
            return self.select_response(player, window)
        if state.phase == Phase.DISCARD:
            return self.select_discard(player, state)
        return self.select_play(player, state)

    def select_response(self, player: PlayerState, window: ResponseWindow) -> Action:
        card = player.hand.first_of_kind(window.demanded)
        if card is not None:
            return Action.respond(player.player_id, card.instance_id)
        return Action.decline(player.player_id)

    def select_discard(self, player: PlayerState, state: GameState) -> Action:
        cards = lowest_value_cards(player, state.discard_required)
        return Action.confirm_discard(player.player_id, [c.instance_id for c in cards])

    def select_play(self, player: PlayerState, state: GameState) -> Action:
        pid = player.player_id
        hand = player.hand
        opponents = [p for p in state.players if p.is_alive and p.player_id != pid]

        def play(card: PlayingCard, target: PlayerState | None = None) -> Action:
            return Action.play_card(pid, card.instance_id, target.player_id if target else None)

        # 1. Emergency
        if player.hp <= EMERGENCY_HP:
            card = hand.first_of_kind(CardKind.HEAL) or hand.first_of_kind(CardKind.DRAW)
            if card:
                return play(card)

        # 2. Equipment
        for card in hand.cards:
            if card.kind.is_equipment:
                return play(card)

        # 3. Control
        card = hand.first_of_kind(CardKind.SKIP_TURN)
        if card and opponents:
            return play(card, self.evaluator.best_target(player, opponents))

        # 4. Attack
        card = hand.first_of_kind(CardKind.ATTACK)
        if card and player.attacks_played < state.rules.attack_cap:
            target = self.evaluator.best_target(player, legal_targets(state, player, card))
            if target:
                return play(card, target)

        # 5. Damage scrolls
        for card in hand.cards:
            if card.kind in (CardKind.DAMAGE_SCROLL, CardKind.DUEL) and opponents:
                return play(card, self.evaluator.best_target(player, opponents))

        # 6. Steal
        card = hand.first_of_kind(CardKind.STEAL_SCROLL)
        if card:
            for other in opponents:
                if distance(player, other, state.players) <= 1 and other.has_cards():
                    return play(card, other)

        # 7. Dismantle
        card = hand.first_of_kind(CardKind.DISCARD_SCROLL)
        if card:
            target = self.evaluator.best_target(player, [p for p in opponents if p.has_cards()])
            if target:
                return play(card, target)

        # 8. AoE, draw, top-up heal
        card = hand.first_of_kind(CardKind.AOE) or hand.first_of_kind(CardKind.DRAW)
        if card:
            return play(card)
        card = hand.first_of_kind(CardKind.HEAL)
        if card and player.is_wounded:
            return play(card)

        return Action.end_play_phase(pid)

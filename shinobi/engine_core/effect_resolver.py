"""
Effect Resolver - Applies card effects and ultimates to a working state.

This module handles:
- Damage, including the one-time revive and elimination
- Healing (always clamped to max hp)
- The single primitive each resolved card carries
- Equipping, stealing and discarding opponents' cards
- Ultimates, interpreted step by step from their EffectStep lists

Every function here mutates the working copy the reducer hands it.
Nothing in this module validates commands; that is the reducer's job.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, TYPE_CHECKING

from . import deck
from .definitions import (
    CardKind, ConditionKind, ActivationCondition, EffectStep, Primitive, Selector,
    keep_value,
)
from .state import LogKind, Phase, SLOT_FOR_KIND, Zone
from .targeting import blocks_elemental

if TYPE_CHECKING:
    from .state import GameState, PlayerState, PlayingCard


SCROLL_DRAW_COUNT = 2


def apply_damage(
    state: GameState,
    target: PlayerState,
    amount: int,
    source: PlayerState | None = None,
) -> int:
    """
    Deal damage, clamping hp at zero.

    A player reaching zero either revives (once, to 1 hp) or is
    eliminated; an eliminated player's hand and equipment are discarded.
    Returns the hp actually lost.
    """
    if amount <= 0 or not target.is_alive:
        return 0

    before = target.hp
    target.hp = max(0, target.hp - amount)
    lost = before - target.hp
    by = f" from {source.name}" if source and source.player_id != target.player_id else ""
    state.log(f"{target.name} took {lost} damage{by}.", LogKind.DAMAGE)

    if target.hp == 0:
        passives = target.character.passives
        if passives.revive_once and not target.flags.revive_used:
            target.flags.revive_used = True
            target.hp = 1
            state.log(f"{target.name} cheated death and revived with 1 hp!", LogKind.SKILL)
        else:
            eliminate(state, target)
    return lost


def eliminate(state: GameState, player: PlayerState) -> None:
    dropped = player.hand.cards + player.equipment.clear()
    player.hand = Zone(name=player.hand.name)
    deck.discard(state, dropped)
    player.skipped_turn = False
    state.log(f"{player.name} has been defeated!", LogKind.IMPORTANT)


def heal(state: GameState, player: PlayerState, amount: int) -> int:
    """Restore hp up to max. Returns hp actually restored."""
    if amount <= 0 or not player.is_alive:
        return 0
    before = player.hp
    player.hp = min(player.max_hp, player.hp + amount)
    restored = player.hp - before
    if restored:
        state.log(f"{player.name} recovered {restored} hp.", LogKind.HEAL)
    else:
        state.log(f"{player.name} is already at full health.", LogKind.HEAL)
    return restored


def draw_cards(state: GameState, player: PlayerState, count: int) -> None:
    if count <= 0:
        return
    deck.draw_into_hand(state, player.player_id, count)
    state.log(f"{player.name} drew {count} card{'s' if count != 1 else ''}.")


def discard_from_hand(state: GameState, player: PlayerState, cards: list[PlayingCard]) -> None:
    for card in cards:
        player.hand = player.hand.remove(card)
    deck.discard(state, cards)


def lowest_value_cards(player: PlayerState, count: int) -> list[PlayingCard]:
    """The `count` cards the player least wants to keep, stable by hand order."""
    ranked = sorted(player.hand.cards, key=lambda c: keep_value(c.kind))
    return ranked[:count]


def equip(state: GameState, player: PlayerState, card: PlayingCard) -> None:
    """Put an equipment card (already out of hand) into its slot."""
    slot = SLOT_FOR_KIND[card.kind]
    previous = player.equipment.set(slot, card)
    if previous is not None:
        deck.discard(state, [previous])
        state.log(f"{player.name} replaced {previous.name} with {card.name}.")
    else:
        state.log(f"{player.name} equipped {card.name}.")


def take_random_card(state: GameState, target: PlayerState) -> PlayingCard | None:
    """Remove one card chosen uniformly from the target's hand and equipment."""
    pool = target.all_cards()
    if not pool:
        return None
    card = state.rng.choice(pool)
    if target.hand.find(card.instance_id):
        target.hand = target.hand.remove(card)
    else:
        target.equipment.remove(card.instance_id)
    return card


def scroll_damage(
    state: GameState, source: PlayerState, target: PlayerState, base: int = 1, bonus: bool = True,
) -> None:
    """Jutsu damage. Only single-target scrolls carry the caster's bonus."""
    if blocks_elemental(source, target):
        state.log(f"{target.name}'s armor absorbed the jutsu!", LogKind.SKILL)
        return
    amount = base + (source.character.passives.scroll_damage_bonus if bonus else 0)
    apply_damage(state, target, amount, source)


# =============================================================================
# Card effects
# =============================================================================

def _effect_heal(state: GameState, source: PlayerState, target: PlayerState | None, card: PlayingCard) -> None:
    heal(state, source, 1 + source.character.passives.heal_bonus)


def _effect_draw(state: GameState, source: PlayerState, target: PlayerState | None, card: PlayingCard) -> None:
    draw_cards(state, source, SCROLL_DRAW_COUNT)


def _effect_skip(state: GameState, source: PlayerState, target: PlayerState | None, card: PlayingCard) -> None:
    target.skipped_turn = True
    state.log(f"{target.name} is trapped and will skip their next turn!", LogKind.IMPORTANT)


def _effect_steal(state: GameState, source: PlayerState, target: PlayerState | None, card: PlayingCard) -> None:
    taken = take_random_card(state, target)
    if taken is None:
        state.log(f"{target.name} had nothing to take.")
        return
    source.hand = source.hand.add(taken)
    state.log(f"{source.name} took a card from {target.name}.")


def _effect_dismantle(state: GameState, source: PlayerState, target: PlayerState | None, card: PlayingCard) -> None:
    taken = take_random_card(state, target)
    if taken is None:
        state.log(f"{target.name} had nothing to discard.")
        return
    deck.discard(state, [taken])
    state.log(f"{source.name} destroyed {target.name}'s {taken.name}.")


def _effect_scroll_damage(state: GameState, source: PlayerState, target: PlayerState | None, card: PlayingCard) -> None:
    scroll_damage(state, source, target)


def _effect_aoe(state: GameState, source: PlayerState, target: PlayerState | None, card: PlayingCard) -> None:
    for victim in state.players:
        if victim.player_id != source.player_id and victim.is_alive:
            scroll_damage(state, source, victim, bonus=False)


CARD_EFFECTS: dict[CardKind, Callable] = {
    CardKind.HEAL: _effect_heal,
    CardKind.DRAW: _effect_draw,
    CardKind.SKIP_TURN: _effect_skip,
    CardKind.STEAL_SCROLL: _effect_steal,
    CardKind.DISCARD_SCROLL: _effect_dismantle,
    CardKind.DAMAGE_SCROLL: _effect_scroll_damage,
    CardKind.AOE: _effect_aoe,
}


def resolve_card_effect(
    state: GameState,
    source: PlayerState,
    target: PlayerState | None,
    card: PlayingCard,
) -> None:
    """Apply the one primitive a resolved card carries."""
    effect = CARD_EFFECTS.get(card.kind)
    if effect is None:
        raise ValueError(f"{card.name} has no resolvable effect")
    if target is not None and not target.is_alive:
        state.log(f"{card.name} fizzled: {target.name} is already down.")
        return
    effect(state, source, target, card)


# =============================================================================
# Ultimates
# =============================================================================

def condition_met(player: PlayerState, condition: ActivationCondition) -> bool:
    kind = condition.kind
    if kind == ConditionKind.HP_AT_MOST:
        return player.hp <= condition.threshold
    if kind == ConditionKind.HAND_AT_LEAST:
        return player.hand.count >= condition.threshold
    if kind == ConditionKind.HAS_WEAPON:
        return player.equipment.weapon is not None
    if kind == ConditionKind.HAS_ARMOR:
        return player.equipment.armor is not None
    if kind == ConditionKind.WOUNDED:
        return player.is_wounded
    return True


def ultimate_error(state: GameState, player: PlayerState) -> str | None:
    """Why the player cannot trigger their ultimate right now, or None."""
    ultimate = player.character.ultimate
    if ultimate is None:
        return f"{player.name} has no ultimate"
    if player.is_ai:
        return "Ultimates are only available to the human seat"
    if state.current_player.player_id != player.player_id or state.phase != Phase.PLAY:
        return "Ultimates can only be used in your own play phase"
    if state.pending is not None:
        return "Resolve the pending action first"
    if player.flags.ultimate_cooldown > 0:
        return f"Ultimate on cooldown for {player.flags.ultimate_cooldown} more turns"
    if not condition_met(player, ultimate.condition):
        return f"Condition not met: {ultimate.condition.describe()}"
    if ultimate.needs_target and not any(
        p.is_alive and p.player_id != player.player_id for p in state.players
    ):
        return "No opponent to target"
    return None


def ultimate_available(state: GameState, player: PlayerState) -> bool:
    return ultimate_error(state, player) is None


@dataclass
class UltimateExecutor:
    """
    Interprets an ultimate's steps against a working state.

    Selectors are evaluated per step, so players eliminated by an
    earlier step drop out of OTHERS/ALL automatically.
    """
    state: GameState
    user: PlayerState
    target: PlayerState | None = None

    def run(self) -> None:
        ultimate = self.user.character.ultimate
        self.user.flags.ultimate_cooldown = self.state.rules.ultimate_cooldown
        self.user.flags.ultimate_used = True
        self.state.log(f"{self.user.name} unleashed {ultimate.name}!", LogKind.SKILL)

        for step in ultimate.steps:
            handler = self._handlers()[step.primitive]
            for player in self._select(step):
                if step.only_if_alive and not player.is_alive:
                    continue
                handler(player, step)

    def _select(self, step: EffectStep) -> list[PlayerState]:
        if step.selector == Selector.SELF:
            return [self.user]
        if step.selector == Selector.TARGET:
            return [self.target] if self.target is not None else []
        alive = [p for p in self.state.players if p.is_alive]
        if step.selector == Selector.OTHERS:
            return [p for p in alive if p.player_id != self.user.player_id]
        return alive

    def _handlers(self) -> dict[Primitive, Callable]:
        return {
            Primitive.DAMAGE: self._damage,
            Primitive.HEAL: self._heal,
            Primitive.HEAL_FULL: self._heal_full,
            Primitive.DRAW: self._draw,
            Primitive.DRAW_UP_TO: self._draw_up_to,
            Primitive.SKIP_TURN: self._skip,
            Primitive.STRIP_EQUIPMENT: self._strip,
            Primitive.FORCE_DISCARD: self._force_discard,
        }

    def _damage(self, player: PlayerState, step: EffectStep) -> None:
        if player.is_alive:
            apply_damage(self.state, player, step.amount, self.user)

    def _heal(self, player: PlayerState, step: EffectStep) -> None:
        heal(self.state, player, step.amount)

    def _heal_full(self, player: PlayerState, step: EffectStep) -> None:
        heal(self.state, player, player.max_hp - player.hp)

    def _draw(self, player: PlayerState, step: EffectStep) -> None:
        if player.is_alive:
            draw_cards(self.state, player, step.amount)

    def _draw_up_to(self, player: PlayerState, step: EffectStep) -> None:
        if player.is_alive:
            draw_cards(self.state, player, step.amount - player.hand.count)

    def _skip(self, player: PlayerState, step: EffectStep) -> None:
        if player.is_alive:
            _effect_skip(self.state, self.user, player, None)

    def _strip(self, player: PlayerState, step: EffectStep) -> None:
        stripped = player.equipment.clear()
        if stripped:
            deck.discard(self.state, stripped)
            self.state.log(f"{player.name} lost all equipment!", LogKind.IMPORTANT)

    def _force_discard(self, player: PlayerState, step: EffectStep) -> None:
        cards = lowest_value_cards(player, step.amount)
        if cards:
            discard_from_hand(self.state, player, cards)
            self.state.log(f"{player.name} was forced to discard {len(cards)} card(s).")


def execute_ultimate(state: GameState, user: PlayerState, target: PlayerState | None = None) -> None:
    UltimateExecutor(state=state, user=user, target=target).run()

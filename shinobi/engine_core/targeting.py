"""
Targeting - Distance, attack range, immunity and legal targets.

Seats form a circle of the alive players only: eliminated seats are
removed from the circle, not zeroed in place.

can_target() is the single rule table for "may this card be aimed at
that player"; the reducer, the action generator and the bots all use it.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .definitions import CardKind

if TYPE_CHECKING:
    from .state import GameState, PlayerState, PlayingCard


# Armor id -> suits of attack cards it blocks
ATTACK_IMMUNE_ARMOR = "vest"
# Armor id that blocks judgement-gated scroll damage
ELEMENTAL_IMMUNE_ARMOR = "susanoo"

UNREACHABLE = 999


def alive_players(state: GameState) -> list[PlayerState]:
    return [p for p in state.players if p.is_alive]


def distance(source: PlayerState, target: PlayerState, players: list[PlayerState]) -> int:
    """Distance from source to target around the alive circle, after modifiers."""
    alive = [p for p in players if p.is_alive]
    ids = [p.player_id for p in alive]
    if source.player_id not in ids or target.player_id not in ids:
        return UNREACHABLE

    n = len(alive)
    if n == 2:
        return 1
    if source.character.passives.fixed_distance_one:
        return 1

    raw = abs(ids.index(source.player_id) - ids.index(target.player_id))
    dist = min(raw, n - raw)

    dist += source.character.passives.distance_out_modifier
    if source.equipment.offense_mount:
        dist -= 1
    if n > 2:
        dist += target.character.passives.distance_in_modifier
    if target.equipment.defense_mount:
        dist += 1
    return max(1, dist)


def attack_range(player: PlayerState) -> int:
    weapon = player.equipment.weapon
    reach = weapon.definition.attack_range if weapon and weapon.definition.attack_range else 1
    return reach + player.character.passives.attack_range_bonus


def is_immune(source: PlayerState, target: PlayerState, card: PlayingCard | None) -> bool:
    """Armor immunity to attack cards (black suits), unless the source pierces it."""
    if source.character.passives.pierces_immunity:
        return False
    armor = target.equipment.armor
    if card is None or card.kind != CardKind.ATTACK or armor is None:
        return False
    return armor.card_id == ATTACK_IMMUNE_ARMOR and card.suit.is_black


def blocks_elemental(source: PlayerState, target: PlayerState) -> bool:
    if source.character.passives.pierces_immunity:
        return False
    armor = target.equipment.armor
    return armor is not None and armor.card_id == ELEMENTAL_IMMUNE_ARMOR


def target_error(
    state: GameState,
    source: PlayerState,
    target: PlayerState | None,
    card: PlayingCard,
) -> str | None:
    """
    Why `card` cannot be aimed at `target`, or None when it can.
    """
    if target is None:
        return "Target not found"
    if not target.is_alive:
        return f"{target.name} has been eliminated"
    if target.player_id == source.player_id:
        return "Cannot target yourself"

    kind = card.kind
    if kind == CardKind.ATTACK:
        if distance(source, target, state.players) > attack_range(source):
            return f"{target.name} is out of attack range"
        if is_immune(source, target, card):
            return f"{target.name} is immune to this {card.name}"
    elif kind == CardKind.STEAL_SCROLL:
        if distance(source, target, state.players) > 1:
            return f"{target.name} is not adjacent"
        if not target.has_cards():
            return f"{target.name} has nothing to take"
    elif kind == CardKind.DISCARD_SCROLL:
        if not target.has_cards():
            return f"{target.name} has nothing to discard"
    return None


def can_target(state: GameState, source: PlayerState, target: PlayerState, card: PlayingCard) -> bool:
    return target_error(state, source, target, card) is None


def legal_targets(state: GameState, source: PlayerState, card: PlayingCard) -> list[PlayerState]:
    """Opponents `card` may be aimed at, in seat order."""
    return [
        p for p in state.players
        if p.player_id != source.player_id and can_target(state, source, p, card)
    ]

"""
Definitions - Immutable catalog types shared by the engine and the games.

Card and character definitions are loaded once and never mutated.
Runtime objects (PlayingCard, PlayerState) reference them.

The ultimate registry is data, not code: each ultimate is an ordered
list of EffectSteps (primitive + amount + selector) that the effect
resolver interprets. Adding a character never touches the resolver.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


class CardKind(Enum):
    """What a card does when played."""
    ATTACK = "attack"
    DODGE = "dodge"
    HEAL = "heal"
    DRAW = "draw"
    AOE = "aoe"
    DAMAGE_SCROLL = "damage_scroll"
    DISCARD_SCROLL = "discard_scroll"
    STEAL_SCROLL = "steal_scroll"
    DUEL = "duel"
    NEGATE = "negate"
    SKIP_TURN = "skip_turn"
    EQUIP_WEAPON = "equip_weapon"
    EQUIP_ARMOR = "equip_armor"
    EQUIP_OFFENSE_MOUNT = "equip_offense_mount"
    EQUIP_DEFENSE_MOUNT = "equip_defense_mount"

    @property
    def is_equipment(self) -> bool:
        return self in EQUIPMENT_KINDS

    @property
    def needs_target(self) -> bool:
        return self in TARGETED_KINDS


EQUIPMENT_KINDS = frozenset({
    CardKind.EQUIP_WEAPON,
    CardKind.EQUIP_ARMOR,
    CardKind.EQUIP_OFFENSE_MOUNT,
    CardKind.EQUIP_DEFENSE_MOUNT,
})

TARGETED_KINDS = frozenset({
    CardKind.ATTACK,
    CardKind.DUEL,
    CardKind.DAMAGE_SCROLL,
    CardKind.STEAL_SCROLL,
    CardKind.DISCARD_SCROLL,
    CardKind.SKIP_TURN,
})

# Only playable as a response inside a window
RESPONSE_ONLY_KINDS = frozenset({CardKind.DODGE, CardKind.NEGATE})


class Suit(Enum):
    SPADE = "spade"
    HEART = "heart"
    CLUB = "club"
    DIAMOND = "diamond"

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEART, Suit.DIAMOND)

    @property
    def is_black(self) -> bool:
        return not self.is_red


class JudgementRule(Enum):
    """Success predicate evaluated on a judgement reveal."""
    RED_SUIT = "red_suit"
    BLACK_SUIT = "black_suit"

    def succeeds(self, suit: Suit) -> bool:
        if self == JudgementRule.RED_SUIT:
            return suit.is_red
        return suit.is_black


@dataclass(frozen=True)
class CardDefinition:
    """
    Static definition of a card.

    attack_range is only set for weapons. judgement is set for scrolls
    whose effect is gated by a judgement reveal.
    """
    id: str
    name: str
    kind: CardKind
    description: str = ""
    attack_range: int | None = None
    judgement: JudgementRule | None = None

    def __deepcopy__(self, memo):
        # Immutable: state clones share definitions
        return self


class UltimateKind(Enum):
    """How an ultimate picks its targets (drives the UI prompt)."""
    TARGET = "target"
    SELF = "self"
    AOE = "aoe"
    GLOBAL = "global"


class ConditionKind(Enum):
    """Activation predicates for ultimates."""
    HP_AT_MOST = "hp_at_most"
    HAND_AT_LEAST = "hand_at_least"
    HAS_WEAPON = "has_weapon"
    HAS_ARMOR = "has_armor"
    WOUNDED = "wounded"
    ALWAYS = "always"


@dataclass(frozen=True)
class ActivationCondition:
    kind: ConditionKind
    threshold: int = 0

    def describe(self) -> str:
        labels = {
            ConditionKind.HP_AT_MOST: f"hp <= {self.threshold}",
            ConditionKind.HAND_AT_LEAST: f"hand >= {self.threshold}",
            ConditionKind.HAS_WEAPON: "weapon equipped",
            ConditionKind.HAS_ARMOR: "armor equipped",
            ConditionKind.WOUNDED: "wounded",
            ConditionKind.ALWAYS: "always",
        }
        return labels[self.kind]


class Primitive(Enum):
    """Effect primitives an ultimate is composed of."""
    DAMAGE = "damage"
    HEAL = "heal"
    HEAL_FULL = "heal_full"
    DRAW = "draw"
    DRAW_UP_TO = "draw_up_to"
    SKIP_TURN = "skip_turn"
    STRIP_EQUIPMENT = "strip_equipment"
    FORCE_DISCARD = "force_discard"


class Selector(Enum):
    """Who an effect step applies to."""
    TARGET = "target"
    SELF = "self"
    OTHERS = "others"  # every other alive player
    ALL = "all"  # every alive player, self included


@dataclass(frozen=True)
class EffectStep:
    primitive: Primitive
    selector: Selector
    amount: int = 0
    # Skip the step when the selected player was eliminated by an earlier step
    only_if_alive: bool = False


@dataclass(frozen=True)
class UltimateDefinition:
    name: str
    kind: UltimateKind
    condition: ActivationCondition
    steps: tuple[EffectStep, ...]
    description: str = ""

    @property
    def needs_target(self) -> bool:
        return self.kind == UltimateKind.TARGET


@dataclass(frozen=True)
class PassiveTraits:
    """
    Closed set of passive modifiers the engine understands.

    Zero/False/None means "no such passive".
    """
    low_hp_draw_bonus: int = 0
    low_hp_threshold: int = 0
    pierces_immunity: bool = False
    attack_range_bonus: int = 0
    distance_out_modifier: int = 0  # applied when this character measures distance
    fixed_distance_one: bool = False
    distance_in_modifier: int = 0  # applied when others measure distance to this character
    heal_bonus: int = 0
    scroll_damage_bonus: int = 0
    attack_damage_bonus: int = 0
    starting_armor: str | None = None  # card id equipped at setup
    opening_damage: int = 0  # dealt to every other player at setup (floor 1 hp)
    end_turn_recovery: bool = False
    revive_once: bool = False


@dataclass(frozen=True)
class Skill:
    name: str
    description: str
    is_passive: bool = False
    is_ultimate: bool = False


@dataclass(frozen=True)
class CharacterDefinition:
    id: str
    name: str
    max_hp: int
    skills: tuple[Skill, ...] = ()
    passives: PassiveTraits = field(default_factory=PassiveTraits)
    ultimate: UltimateDefinition | None = None

    def __deepcopy__(self, memo):
        return self


# How much a holder wants to keep a card; the lowest goes first on forced discards
KEEP_VALUE: dict[CardKind, int] = {
    CardKind.HEAL: 10,
    CardKind.DODGE: 8,
    CardKind.EQUIP_WEAPON: 6,
    CardKind.EQUIP_ARMOR: 6,
    CardKind.EQUIP_OFFENSE_MOUNT: 6,
    CardKind.EQUIP_DEFENSE_MOUNT: 6,
    CardKind.ATTACK: 5,
}


def keep_value(kind: CardKind) -> int:
    return KEEP_VALUE.get(kind, 1)

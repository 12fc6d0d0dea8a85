"""
Ninja Clash Characters - Roster, passives and ultimates.

Each character carries:
- Max hp
- Passive traits (read by targeting, the phase machine and effects)
- One ultimate: activation condition + ordered effect steps

ULTIMATES is the registry the effect resolver reads. It is keyed by
character id so the resolver never branches on character identity.
"""

from ...engine_core.definitions import (
    ActivationCondition,
    CharacterDefinition,
    ConditionKind,
    EffectStep,
    PassiveTraits,
    Primitive,
    Selector,
    Skill,
    UltimateDefinition,
    UltimateKind,
)


def _ultimate(
    name: str,
    kind: UltimateKind,
    condition: ActivationCondition,
    *steps: EffectStep,
    description: str = "",
) -> UltimateDefinition:
    return UltimateDefinition(
        name=name,
        kind=kind,
        condition=condition,
        steps=tuple(steps),
        description=description,
    )


def _character(
    id: str,
    name: str,
    max_hp: int,
    passive: Skill,
    ultimate: UltimateDefinition,
    passives: PassiveTraits | None = None,
) -> CharacterDefinition:
    ultimate_skill = Skill(
        name=ultimate.name,
        description=ultimate.description,
        is_ultimate=True,
    )
    return CharacterDefinition(
        id=id,
        name=name,
        max_hp=max_hp,
        skills=(passive, ultimate_skill),
        passives=passives or PassiveTraits(),
        ultimate=ultimate,
    )


# ============================================================================
# Roster
# ============================================================================

NARUTO = _character(
    "naruto", "Naruto Uzumaki", 4,
    Skill("Nine-Tails Rampage", "Locked: with hp <= 2, draw 1 extra card in the draw phase.", is_passive=True),
    _ultimate(
        "Rasenshuriken", UltimateKind.TARGET,
        ActivationCondition(ConditionKind.HP_AT_MOST, 2),
        EffectStep(Primitive.DAMAGE, Selector.TARGET, 2),
        description="Deal 2 damage to one player.",
    ),
    PassiveTraits(low_hp_draw_bonus=1, low_hp_threshold=2),
)

SASUKE = _character(
    "sasuke", "Sasuke Uchiha", 3,
    Skill("Chidori", "Locked: your Rasengans ignore armor; attack range +1.", is_passive=True),
    _ultimate(
        "Indra's Arrow", UltimateKind.AOE,
        ActivationCondition(ConditionKind.HAND_AT_LEAST, 3),
        EffectStep(Primitive.DAMAGE, Selector.OTHERS, 1),
        description="Deal 1 lightning damage to every other player.",
    ),
    PassiveTraits(pierces_immunity=True, attack_range_bonus=1),
)

KAKASHI = _character(
    "kakashi", "Kakashi Hatake", 4,
    Skill("Kamui", "Locked: your distance to others is always -1.", is_passive=True),
    _ultimate(
        "Lightning Blade: Twin", UltimateKind.TARGET,
        ActivationCondition(ConditionKind.HAS_WEAPON),
        EffectStep(Primitive.DAMAGE, Selector.TARGET, 1),
        EffectStep(Primitive.STRIP_EQUIPMENT, Selector.TARGET, only_if_alive=True),
        description="Deal 1 damage to one player and discard their equipment.",
    ),
    PassiveTraits(distance_out_modifier=-1),
)

SAKURA = _character(
    "sakura", "Sakura Haruno", 4,
    Skill("Hundred Healings", "Locked: at the end of your turn, if wounded, recover 1 hp and discard 1 card.", is_passive=True),
    _ultimate(
        "Creation Rebirth", UltimateKind.SELF,
        ActivationCondition(ConditionKind.WOUNDED),
        EffectStep(Primitive.HEAL_FULL, Selector.SELF),
        description="Recover to full hp.",
    ),
    PassiveTraits(end_turn_recovery=True),
)

GAARA = _character(
    "gaara", "Gaara", 5,
    Skill("Absolute Defense", "Locked: start the game with a Jonin Vest equipped.", is_passive=True),
    _ultimate(
        "Sand Waterfall Funeral", UltimateKind.TARGET,
        ActivationCondition(ConditionKind.HAS_ARMOR),
        EffectStep(Primitive.SKIP_TURN, Selector.TARGET),
        EffectStep(Primitive.DAMAGE, Selector.TARGET, 1),
        description="One player skips their next turn and takes 1 damage.",
    ),
    PassiveTraits(starting_armor="vest"),
)

ITACHI = _character(
    "itachi", "Itachi Uchiha", 3,
    Skill("Amaterasu", "Locked: your Great Fireball deals +1 damage.", is_passive=True),
    _ultimate(
        "Totsuka Blade", UltimateKind.TARGET,
        ActivationCondition(ConditionKind.HP_AT_MOST, 2),
        EffectStep(Primitive.DAMAGE, Selector.TARGET, 2),
        description="Deal 2 damage to one player.",
    ),
    PassiveTraits(scroll_damage_bonus=1),
)

TSUNADE = _character(
    "tsunade", "Tsunade", 5,
    Skill("Strength of a Hundred", "Locked: your Medical Pill recovers +1 hp.", is_passive=True),
    _ultimate(
        "Mitotic Regeneration", UltimateKind.SELF,
        ActivationCondition(ConditionKind.HP_AT_MOST, 3),
        EffectStep(Primitive.DRAW, Selector.SELF, 2),
        EffectStep(Primitive.HEAL, Selector.SELF, 2),
        description="Draw 2 cards and recover 2 hp.",
    ),
    PassiveTraits(heal_bonus=1),
)

JIRAIYA = _character(
    "jiraiya", "Jiraiya", 4,
    Skill("Sage Mode", "Lore only: the engine applies no Sage Mode effect.", is_passive=True),
    _ultimate(
        "Goemon", UltimateKind.AOE,
        ActivationCondition(ConditionKind.HAND_AT_LEAST, 3),
        EffectStep(Primitive.DAMAGE, Selector.OTHERS, 1),
        description="Deal 1 fire damage to every other player.",
    ),
)

OROCHIMARU = _character(
    "orochimaru", "Orochimaru", 3,
    Skill("Reanimation", "Limited: the first time you would be eliminated, recover to 1 hp instead.", is_passive=True),
    _ultimate(
        "Eight Branches", UltimateKind.SELF,
        ActivationCondition(ConditionKind.HP_AT_MOST, 1),
        EffectStep(Primitive.DRAW_UP_TO, Selector.SELF, 5),
        EffectStep(Primitive.HEAL, Selector.SELF, 1),
        description="Refill your hand to 5 cards and recover 1 hp.",
    ),
    PassiveTraits(revive_once=True),
)

PAIN = _character(
    "pain", "Pain", 5,
    Skill("Almighty Push", "Locked: others' distance to you is +1.", is_passive=True),
    _ultimate(
        "Planetary Devastation", UltimateKind.GLOBAL,
        ActivationCondition(ConditionKind.HP_AT_MOST, 3),
        EffectStep(Primitive.FORCE_DISCARD, Selector.OTHERS, 2),
        description="Every other player discards 2 cards.",
    ),
    PassiveTraits(distance_in_modifier=1),
)

MADARA = _character(
    "madara", "Madara Uchiha", 4,
    Skill("Infinite Tsukuyomi", "Locked: at the start of the game every other player takes 1 damage.", is_passive=True),
    _ultimate(
        "Tengai Shinsei", UltimateKind.GLOBAL,
        ActivationCondition(ConditionKind.HP_AT_MOST, 2),
        EffectStep(Primitive.DAMAGE, Selector.ALL, 1),
        EffectStep(Primitive.DRAW, Selector.SELF, 3, only_if_alive=True),
        description="Deal 1 damage to every player, then draw 3 cards.",
    ),
    PassiveTraits(opening_damage=1),
)

MINATO = _character(
    "minato", "Minato Namikaze", 3,
    Skill("Flying Thunder God", "Locked: your distance to others is always 1.", is_passive=True),
    _ultimate(
        "Yellow Flash", UltimateKind.TARGET,
        ActivationCondition(ConditionKind.HAND_AT_LEAST, 3),
        EffectStep(Primitive.DAMAGE, Selector.TARGET, 2),
        description="Deal 2 damage to one player; it cannot be evaded.",
    ),
    PassiveTraits(fixed_distance_one=True),
)


CHARACTERS: list[CharacterDefinition] = [
    NARUTO,
    SASUKE,
    KAKASHI,
    SAKURA,
    GAARA,
    ITACHI,
    TSUNADE,
    JIRAIYA,
    OROCHIMARU,
    PAIN,
    MADARA,
    MINATO,
]

ULTIMATES: dict[str, UltimateDefinition] = {
    character.id: character.ultimate
    for character in CHARACTERS
    if character.ultimate is not None
}

_BY_ID = {character.id: character for character in CHARACTERS}


def get_character(character_id: str) -> CharacterDefinition | None:
    """Look up a character by ID."""
    return _BY_ID.get(character_id)

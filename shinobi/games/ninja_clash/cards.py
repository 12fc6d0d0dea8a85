"""
Ninja Clash Cards - Card library and deck composition.

Card structure:
- Kind (what the card does)
- Optional attack range (weapons)
- Optional judgement rule (scrolls gated by a reveal)

Suit and rank are not part of the definition; they are assigned to each
instance when the deck is generated.
"""

from ...engine_core.definitions import CardDefinition, CardKind, JudgementRule


# ============================================================================
# Basic Cards
# ============================================================================

RASENGAN = CardDefinition(
    id="atk",
    name="Rasengan",
    kind=CardKind.ATTACK,
    description="Basic. Deal 1 damage to a player within attack range.",
)

SUBSTITUTION = CardDefinition(
    id="dodge",
    name="Substitution Jutsu",
    kind=CardKind.DODGE,
    description="Basic. Evade an attack.",
)

MEDICAL_PILL = CardDefinition(
    id="heal",
    name="Medical Pill",
    kind=CardKind.HEAL,
    description="Basic. Recover 1 hp.",
)

# ============================================================================
# Scrolls
# ============================================================================

SHADOW_CLONE = CardDefinition(
    id="draw",
    name="Shadow Clone",
    kind=CardKind.DRAW,
    description="Scroll. Draw two cards.",
)

FIREBALL = CardDefinition(
    id="fireball",
    name="Great Fireball",
    kind=CardKind.DAMAGE_SCROLL,
    description="Scroll. Judgement: on a red suit deal 1 fire damage.",
    judgement=JudgementRule.RED_SUIT,
)

CHIDORI_CURRENT = CardDefinition(
    id="chidori",
    name="Chidori Current",
    kind=CardKind.AOE,
    description="Scroll. Judgement: on a black suit deal 1 lightning damage to every other player.",
    judgement=JudgementRule.BLACK_SUIT,
)

LIGHTNING_DUEL = CardDefinition(
    id="duel",
    name="Lightning Duel",
    kind=CardKind.DUEL,
    description="Scroll. Duel: alternate Rasengans, the first side that cannot takes 1 damage.",
)

SHURIKEN_THROW = CardDefinition(
    id="steal",
    name="Shuriken Throw",
    kind=CardKind.STEAL_SCROLL,
    description="Scroll. Distance 1: take one card from a player.",
)

DEEP_FOREST = CardDefinition(
    id="dismantle",
    name="Deep Forest Emergence",
    kind=CardKind.DISCARD_SCROLL,
    description="Scroll. Discard one card of a player.",
)

TSUKUYOMI = CardDefinition(
    id="tsukuyomi",
    name="Tsukuyomi",
    kind=CardKind.SKIP_TURN,
    description="Scroll. The target skips their next turn.",
)

COUNTER_RASENGAN = CardDefinition(
    id="negate",
    name="Counter Rasengan",
    kind=CardKind.NEGATE,
    description="Scroll. Cancel a scroll aimed at you.",
)

# ============================================================================
# Equipment
# ============================================================================

JONIN_VEST = CardDefinition(
    id="vest",
    name="Jonin Vest",
    kind=CardKind.EQUIP_ARMOR,
    description="Armor. Immune to black Rasengans.",
)

SUSANOO = CardDefinition(
    id="susanoo",
    name="Susanoo",
    kind=CardKind.EQUIP_ARMOR,
    description="Armor. Immune to elemental scroll damage.",
)

KUNAI = CardDefinition(
    id="kunai",
    name="Tactical Kunai",
    kind=CardKind.EQUIP_WEAPON,
    description="Weapon. Range 2.",
    attack_range=2,
)

KUSANAGI = CardDefinition(
    id="kusanagi",
    name="Kusanagi Sword",
    kind=CardKind.EQUIP_WEAPON,
    description="Weapon. Range 3.",
    attack_range=3,
)

FUMA_SHURIKEN = CardDefinition(
    id="shuriken_large",
    name="Fuma Shuriken",
    kind=CardKind.EQUIP_WEAPON,
    description="Weapon. Range 4.",
    attack_range=4,
)

AKAMARU = CardDefinition(
    id="akamaru",
    name="Akamaru",
    kind=CardKind.EQUIP_OFFENSE_MOUNT,
    description="Offense mount. -1 to your distance to others.",
)

GAMABUNTA = CardDefinition(
    id="gamabunta",
    name="Gamabunta",
    kind=CardKind.EQUIP_DEFENSE_MOUNT,
    description="Defense mount. +1 to others' distance to you.",
)


# ============================================================================
# Card Collection
# ============================================================================

CARD_LIBRARY: list[CardDefinition] = [
    RASENGAN,
    SUBSTITUTION,
    MEDICAL_PILL,
    SHADOW_CLONE,
    FIREBALL,
    CHIDORI_CURRENT,
    LIGHTNING_DUEL,
    SHURIKEN_THROW,
    DEEP_FOREST,
    TSUKUYOMI,
    COUNTER_RASENGAN,
    JONIN_VEST,
    SUSANOO,
    KUNAI,
    KUSANAGI,
    FUMA_SHURIKEN,
    AKAMARU,
    GAMABUNTA,
]

# Copies of each card in a freshly generated deck (126 cards)
DECK_COMPOSITION: dict[str, int] = {
    "atk": 24,
    "dodge": 24,
    "heal": 16,
    "draw": 12,
    "fireball": 6,
    "chidori": 3,
    "duel": 4,
    "steal": 6,
    "dismantle": 6,
    "tsukuyomi": 3,
    "negate": 7,
    "vest": 3,
    "susanoo": 2,
    "kunai": 2,
    "kusanagi": 1,
    "shuriken_large": 1,
    "akamaru": 3,
    "gamabunta": 3,
}

_BY_ID = {card.id: card for card in CARD_LIBRARY}


def get_card_by_id(card_id: str) -> CardDefinition | None:
    """Look up a card definition by ID."""
    return _BY_ID.get(card_id)


def deck_size() -> int:
    return sum(DECK_COMPOSITION.values())

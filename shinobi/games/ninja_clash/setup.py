"""
Ninja Clash Setup - Creates the initial game state.

This module handles:
- Generating the deck (random suit and rank per instance)
- Seating the human at seat 0 and four AI characters after it
- Opening hands
- Opening passives (starting armor, opening damage)

The returned state is at turn 1, START phase, seat 0 to act.
"""

from __future__ import annotations
import random

from ...engine_core.deck import SUITS, build_deck, draw
from ...engine_core.definitions import CharacterDefinition
from ...engine_core.rules import GameRules
from ...engine_core.state import GameState, LogKind, Phase, PlayerState, PlayingCard, Zone
from .cards import CARD_LIBRARY, DECK_COMPOSITION, get_card_by_id
from .characters import CHARACTERS, get_character

HUMAN_ID = "human"


class UnknownCharacter(ValueError):
    """No character with that id exists in the roster."""


def setup_game(
    character_id: str,
    random_seed: int | None = None,
    rules: GameRules | None = None,
    ai_character_ids: list[str] | None = None,
) -> GameState:
    """
    Set up a new clash.

    Args:
        character_id: Character for the human seat
        random_seed: Seed for the game RNG (a fresh one is picked if None)
        rules: Rules override (defaults to GameRules())
        ai_character_ids: Fixed characters for the AI seats instead of a
            random draw from the rest of the roster

    Returns:
        Initial GameState ready for the first ADVANCE
    """
    rules = rules or GameRules()
    human_character = get_character(character_id)
    if human_character is None:
        raise UnknownCharacter(f"Unknown character: {character_id}")

    seed = random_seed if random_seed is not None else random.randrange(2**31)
    rng = random.Random(seed)

    ai_characters = _pick_ai_characters(human_character, rules, rng, ai_character_ids)
    players = [_create_player(HUMAN_ID, human_character, is_ai=False)]
    for seat, character in enumerate(ai_characters, start=1):
        players.append(_create_player(f"ai{seat}", character, is_ai=True))

    library = {card.id: card for card in CARD_LIBRARY}
    state = GameState(
        game_id=f"clash_{seed}",
        rules=rules,
        phase=Phase.START,
        players=players,
        draw_pile=Zone(name="draw_pile", cards=build_deck(DECK_COMPOSITION, library, rng)),
        random_seed=seed,
        rng=rng,
    )

    _deal_initial_hands(state)
    _equip_starting_armor(state)
    state.universe = frozenset(state.all_card_ids())

    state.log("The clash begins!", LogKind.IMPORTANT)
    _apply_opening_damage(state)
    return state


def _pick_ai_characters(
    human: CharacterDefinition,
    rules: GameRules,
    rng: random.Random,
    fixed_ids: list[str] | None,
) -> list[CharacterDefinition]:
    seats = rules.num_players - 1
    if fixed_ids is not None:
        if len(fixed_ids) != seats:
            raise ValueError(f"Need exactly {seats} AI characters, got {len(fixed_ids)}")
        chosen = []
        for cid in fixed_ids:
            character = get_character(cid)
            if character is None:
                raise UnknownCharacter(f"Unknown character: {cid}")
            chosen.append(character)
        return chosen

    pool = [c for c in CHARACTERS if c.id != human.id]
    return rng.sample(pool, seats)


def _create_player(player_id: str, character: CharacterDefinition, is_ai: bool) -> PlayerState:
    return PlayerState(
        player_id=player_id,
        is_ai=is_ai,
        character=character,
        hp=character.max_hp,
        max_hp=character.max_hp,
    )


def _deal_initial_hands(state: GameState) -> None:
    for player in state.players:
        cards = draw(state, state.rules.initial_hand(player.is_ai))
        player.hand = player.hand.add_many(cards)


def _equip_starting_armor(state: GameState) -> None:
    """Starting armor is an extra instance outside the deck composition."""
    for player in state.players:
        armor_id = player.character.passives.starting_armor
        if not armor_id:
            continue
        definition = get_card_by_id(armor_id)
        card = PlayingCard(
            definition=definition,
            instance_id=f"{armor_id}-start-{player.player_id}",
            suit=state.rng.choice(SUITS),
            rank=state.rng.randint(1, 13),
        )
        player.equipment.armor = card


def _apply_opening_damage(state: GameState) -> None:
    for source in state.players:
        amount = source.character.passives.opening_damage
        if not amount:
            continue
        state.log(f"{source.name}'s presence crushes the battlefield!", LogKind.SKILL)
        for other in state.players:
            if other.player_id != source.player_id:
                other.hp = max(1, other.hp - amount)

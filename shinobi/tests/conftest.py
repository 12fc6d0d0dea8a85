"""
Pytest fixtures for Shinobi tests.

Most rule tests build small hand-made states instead of dealing a full
game, so every card in play is known up front.
"""

import random

import pytest

from ..engine_core.definitions import Suit
from ..engine_core.rules import GameRules
from ..engine_core.state import GameState, Phase, PlayerState, PlayingCard, Zone
from ..games.ninja_clash.cards import get_card_by_id
from ..games.ninja_clash.characters import get_character
from ..games.ninja_clash.setup import setup_game

PLAYER_IDS = ["human", "ai1", "ai2", "ai3", "ai4"]

_counter = {"n": 0}


def make_card(card_id: str, suit: Suit = Suit.HEART, rank: int = 7) -> PlayingCard:
    """A fresh card instance with a unique id."""
    _counter["n"] += 1
    return PlayingCard(
        definition=get_card_by_id(card_id),
        instance_id=f"{card_id}-t{_counter['n']}",
        suit=suit,
        rank=rank,
    )


def make_player(player_id: str, character="jiraiya", hp: int | None = None, hand=None) -> PlayerState:
    if isinstance(character, str):
        character = get_character(character)
    player = PlayerState(
        player_id=player_id,
        is_ai=player_id != "human",
        character=character,
        hp=character.max_hp if hp is None else hp,
        max_hp=character.max_hp,
    )
    if hand:
        player.hand = Zone(name="hand", cards=list(hand))
    return player


def make_state(
    characters=None,
    hands=None,
    hp=None,
    phase: Phase = Phase.PLAY,
    current: int = 0,
    draw_pile=None,
    discard_pile=None,
    rules: GameRules | None = None,
    seed: int = 1,
) -> GameState:
    """
    Five seats of plain characters in the PLAY phase of seat 0.

    characters/hands/hp are dicts keyed by player id. The draw pile
    defaults to 30 attack cards so draws never run dry.
    """
    characters = characters or {}
    hands = hands or {}
    hp = hp or {}
    players = [
        make_player(pid, characters.get(pid, "jiraiya"), hp.get(pid), hands.get(pid))
        for pid in PLAYER_IDS
    ]
    if draw_pile is None:
        draw_pile = [make_card("atk") for _ in range(30)]
    state = GameState(
        game_id="test_game",
        rules=rules or GameRules(),
        phase=phase,
        current_player_idx=current,
        players=players,
        draw_pile=Zone(name="draw_pile", cards=list(draw_pile)),
        discard_pile=Zone(name="discard_pile", cards=list(discard_pile or [])),
        random_seed=seed,
        rng=random.Random(seed),
    )
    refresh_universe(state)
    return state


def refresh_universe(state: GameState) -> GameState:
    """Recompute the card universe after editing a state by hand."""
    state.universe = frozenset(state.all_card_ids())
    return state


@pytest.fixture
def seeded_state() -> GameState:
    """A fully dealt game with fixed characters and seed."""
    return setup_game(
        "naruto",
        random_seed=42,
        ai_character_ids=["sakura", "tsunade", "jiraiya", "pain"],
    )


@pytest.fixture
def play_state() -> GameState:
    """Seat 0 in its play phase holding one attack and one heal."""
    return make_state(hands={
        "human": [make_card("atk"), make_card("heal")],
        "ai1": [make_card("dodge")],
    })

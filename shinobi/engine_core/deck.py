"""
Deck Manager - Draw pile lifecycle.

The draw pile is replenished from the discard pile when it runs short.
Cards are never created or destroyed here: every function moves cards
between the piles of the working state it is given.
"""

from __future__ import annotations
import random
from typing import TYPE_CHECKING

from .definitions import CardDefinition, Suit
from .state import LogKind, PlayingCard, Zone

if TYPE_CHECKING:
    from .state import GameState


SUITS = [Suit.SPADE, Suit.HEART, Suit.CLUB, Suit.DIAMOND]


class DeckExhausted(Exception):
    """Draw and discard piles together cannot satisfy a draw."""


def build_deck(
    composition: dict[str, int],
    library: dict[str, CardDefinition],
    rng: random.Random,
) -> list[PlayingCard]:
    """
    Instantiate and shuffle a deck.

    Each instance gets a random suit and rank (1-13); instance ids are
    stable for a given composition: "{card_id}-{copy}".
    """
    cards = []
    for card_id, copies in composition.items():
        definition = library[card_id]
        for copy in range(copies):
            cards.append(PlayingCard(
                definition=definition,
                instance_id=f"{card_id}-{copy}",
                suit=rng.choice(SUITS),
                rank=rng.randint(1, 13),
            ))
    rng.shuffle(cards)
    return cards


def reshuffle(state: GameState) -> None:
    """Merge the discard pile into the draw pile and shuffle both."""
    combined = state.draw_pile.cards + state.discard_pile.cards
    state.rng.shuffle(combined)
    state.draw_pile = Zone(name=state.draw_pile.name, cards=combined)
    state.discard_pile = Zone(name=state.discard_pile.name)
    state.log("The draw pile ran out and was reshuffled!", LogKind.IMPORTANT)


def draw(state: GameState, count: int) -> list[PlayingCard]:
    """
    Take `count` cards off the top of the draw pile.

    Reshuffles the discard pile in when the draw pile is short.
    The caller decides where the drawn cards go.
    """
    if count <= 0:
        return []
    if state.draw_pile.count < count:
        if state.draw_pile.count + state.discard_pile.count < count:
            raise DeckExhausted(
                f"Cannot draw {count}: {state.draw_pile.count} in draw pile, "
                f"{state.discard_pile.count} in discard pile"
            )
        reshuffle(state)

    drawn = state.draw_pile.cards[:count]
    state.draw_pile = Zone(name=state.draw_pile.name, cards=state.draw_pile.cards[count:])
    return drawn


def draw_into_hand(state: GameState, player_id: str, count: int) -> list[PlayingCard]:
    player = state.get_player(player_id)
    drawn = draw(state, count)
    player.hand = player.hand.add_many(drawn)
    return drawn


def discard(state: GameState, cards: list[PlayingCard]) -> None:
    """Put cards on the discard pile."""
    if cards:
        state.discard_pile = state.discard_pile.add_many(cards)

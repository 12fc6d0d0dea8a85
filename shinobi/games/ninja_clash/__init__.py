"""
Ninja Clash - The five-seat shinobi battle.

One human and four AI ninja fight until one is left standing.
Key mechanics:
- Attacks are limited by distance around the table and by weapon range
- Scrolls can be negated; fire and lightning jutsu need a judgement
- Every character has a passive and a once-in-a-while ultimate

This module contains:
- Card definitions and the 126-card deck composition
- The character roster
- Game setup
"""

from .cards import CARD_LIBRARY, DECK_COMPOSITION, get_card_by_id
from .characters import CHARACTERS, ULTIMATES, get_character
from .setup import setup_game

__all__ = [
    "CARD_LIBRARY",
    "DECK_COMPOSITION",
    "get_card_by_id",
    "CHARACTERS",
    "ULTIMATES",
    "get_character",
    "setup_game",
]

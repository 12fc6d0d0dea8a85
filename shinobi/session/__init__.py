"""
Session Module - Manages ephemeral clash sessions.

A session represents one play-through:
- Created when a client starts a game
- Holds the current game state and the bots for the AI seats
- Driven by the GameLoop between human commands
- Dropped when the game ends or the client deletes it

Sessions are EPHEMERAL: no persistence to a database.
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopState, TurnResult

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopState",
    "TurnResult",
]

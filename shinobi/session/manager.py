"""
Session Manager - Creates and manages clash sessions.

LIFECYCLE:
1. Client starts a game with a character (and optionally a seed)
2. An in-memory session is created: game state plus one bot per AI seat
3. During the game the GameLoop applies the human's commands and
   drives automatic steps and AI turns in between
4. The game ends or the client deletes it: the session is dropped

PERSISTENCE RULES:
- NO database: sessions live in this process only
- A session is fully described by its GameState (seeded RNG included)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import time
from typing import Any
import uuid

from ..bots import BotPolicy, HeuristicBot
from ..engine_core.rules import GameRules
from ..engine_core.state import GameState
from ..games.ninja_clash.setup import HUMAN_ID, setup_game

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    WAITING_HUMAN = "waiting_human"  # The human must act
    GAME_OVER = "game_over"  # Game completed
    ABANDONED = "abandoned"  # Deleted before the end


@dataclass
class Session:
    """
    One clash held in memory: the canonical GameState, the bots that
    play its AI seats (every seat in all-AI mode) and bookkeeping.
    """
    session_id: str
    created_at: float
    game_state: GameState

    state: SessionState = SessionState.ACTIVE
    bots: dict[str, BotPolicy] = field(default_factory=dict)
    human_player_id: str = HUMAN_ID

    # Accepted commands and system steps so far
    actions_applied: int = 0

    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        """Still being played (not finished or deleted)."""
        return self.state in {SessionState.ACTIVE, SessionState.WAITING_HUMAN}

    def is_human_turn(self) -> bool:
        """Check if the human seat must act next."""
        if self.human_player_id in self.bots:
            return False
        return self.game_state.acting_player_id == self.human_player_id


class SessionManager:
    """
    Registry of the clashes this process is hosting, keyed by uuid.

    Sessions vanish with the process; a seed in the metadata is enough
    to replay the deal.
    """

    def __init__(self, rules: GameRules | None = None):
        self.rules = rules
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        character_id: str,
        seed: int | None = None,
        rules: GameRules | None = None,
        all_ai: bool = False,
        ai_character_ids: list[str] | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            character_id: Character for the human seat
            seed: Seed for the game RNG
            rules: Rules for this game (defaults to the manager's)
            all_ai: Put a bot on the human seat too (headless simulation)
            ai_character_ids: Fixed characters for the AI seats

        Returns:
            New Session, not yet advanced past the initial state

        Raises:
            UnknownCharacter: if a character id is not in the roster
        """
        game_state = setup_game(
            character_id,
            random_seed=seed,
            rules=rules or self.rules,
            ai_character_ids=ai_character_ids,
        )
        session_id = str(uuid.uuid4())
        game_state.game_id = session_id

        bots: dict[str, BotPolicy] = {}
        for player in game_state.players:
            if player.is_ai or all_ai:
                bots[player.player_id] = HeuristicBot()

        session = Session(
            session_id=session_id,
            created_at=time.time(),
            game_state=game_state,
            bots=bots,
            metadata={"seed": game_state.random_seed, "all_ai": all_ai},
        )
        self._sessions[session_id] = session
        logger.info(
            "Created session %s (character=%s, seed=%s, all_ai=%s)",
            session_id, character_id, game_state.random_seed, all_ai,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and drop it from memory.

        Returns False if no such session exists.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        if reason == "completed" and session.game_state.is_over:
            session.state = SessionState.GAME_OVER
        else:
            session.state = SessionState.ABANDONED
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_sessions(self) -> list[Session]:
        return list(self._sessions.values())

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Drop finished sessions older than max_age.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            sid for sid, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds and not session.is_active()
        ]
        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)

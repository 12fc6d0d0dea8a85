"""
Game Loop - Drives a session between human commands.

The loop repeatedly asks "who acts now?":
1. Nobody (system step) -> apply ADVANCE
2. A bot seat -> ask the bot, apply its action
3. The human -> auto-decline a window they cannot answer, else stop

Delays are not modelled: a headless loop runs every automatic step
back to back.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import TYPE_CHECKING

from ..engine_core.action import Action
from ..engine_core.action_generator import legal_actions
from ..engine_core.reducer import apply_action
from ..engine_core.state import ResponseWindow

if TYPE_CHECKING:
    from .manager import Session

logger = logging.getLogger(__name__)

# Safety limit on steps per run() call
DEFAULT_MAX_STEPS = 20000


class LoopState(Enum):
    """State of the game loop."""
    RUNNING = "running"
    WAITING_HUMAN = "waiting_human"
    GAME_OVER = "game_over"
    STALLED = "stalled"  # step limit reached


@dataclass
class TurnResult:
    """
    Result of running the loop or submitting a command.
    """
    success: bool
    loop_state: LoopState

    # Descriptions of the actions applied, in order
    actions: list[str] = field(default_factory=list)

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    error_code: str | None = None

    winner: str | None = None

    @property
    def steps(self) -> int:
        return len(self.actions)


class GameLoop:
    """
    The main game loop driver.

    Usage:
        loop = GameLoop(session)
        result = loop.run()  # up to the human's first decision

        result = loop.submit(Action.end_play_phase("human"))
        if not result.success:
            show_error(result.errors)
    """

    def __init__(self, session: Session, max_steps: int = DEFAULT_MAX_STEPS):
        self.session = session
        self.max_steps = max_steps
        self.state = LoopState.RUNNING

    def submit(self, action: Action) -> TurnResult:
        """
        Apply a human command, then run until the human must act again.
        """
        result = apply_action(self.session.game_state, action)
        if not result.success:
            return TurnResult(
                success=False,
                loop_state=self.state,
                errors=[result.error or "Action rejected"],
                error_code=result.error_code,
            )

        self._accept(result.new_state)
        turn = self.run()
        turn.actions.insert(0, action.describe())
        return turn

    def run(self) -> TurnResult:
        """
        Run automatic steps and bot turns until the human must act,
        the game ends, or the step limit is hit.
        """
        from .manager import SessionState

        actions: list[str] = []
        warnings: list[str] = []

        for _ in range(self.max_steps):
            game_state = self.session.game_state
            if game_state.is_over:
                self.state = LoopState.GAME_OVER
                self.session.state = SessionState.GAME_OVER
                return TurnResult(
                    success=True,
                    loop_state=self.state,
                    actions=actions,
                    warnings=warnings,
                    winner=game_state.winner_id,
                )

            acting = game_state.acting_player_id
            if acting is None:
                action = Action.advance()
            elif acting in self.session.bots:
                action = self._bot_action(acting, warnings)
            else:
                action = self._auto_decline(acting)
                if action is None:
                    self.state = LoopState.WAITING_HUMAN
                    self.session.state = SessionState.WAITING_HUMAN
                    return TurnResult(
                        success=True,
                        loop_state=self.state,
                        actions=actions,
                        warnings=warnings,
                    )

            result = apply_action(game_state, action)
            if not result.success:
                logger.error("Loop step %s rejected: %s", action.describe(), result.error)
                return TurnResult(
                    success=False,
                    loop_state=self.state,
                    actions=actions,
                    errors=[result.error or "Step rejected"],
                    error_code=result.error_code,
                    warnings=warnings,
                )
            self._accept(result.new_state)
            actions.append(action.describe())

        logger.warning(
            "Session %s hit the step limit (%d)", self.session.session_id, self.max_steps,
        )
        self.state = LoopState.STALLED
        return TurnResult(
            success=True,
            loop_state=self.state,
            actions=actions,
            warnings=warnings + [f"Stopped after {self.max_steps} steps"],
        )

    def _accept(self, new_state) -> None:
        from .manager import SessionState

        self.session.game_state = new_state
        self.session.actions_applied += 1
        self.session.state = SessionState.ACTIVE
        self.state = LoopState.RUNNING

    def _bot_action(self, player_id: str, warnings: list[str]) -> Action:
        """
        Ask the seat's bot; fall back to the first legal action when
        the bot picks something the reducer would refuse.
        """
        game_state = self.session.game_state
        legal = legal_actions(game_state)
        decision = self.session.bots[player_id].select_action(game_state, legal)
        if decision.action in legal:
            return decision.action

        probe = apply_action(game_state, decision.action)
        if probe.success:
            return decision.action

        message = f"{player_id} tried {decision.action.describe()}: {probe.error}"
        logger.warning("Bot action rejected, using fallback. %s", message)
        warnings.append(message)
        return legal[0]

    def _auto_decline(self, player_id: str) -> Action | None:
        """Decline for the human when they cannot answer the window."""
        game_state = self.session.game_state
        window = game_state.pending
        if not isinstance(window, ResponseWindow) or not game_state.rules.auto_decline_without_card:
            return None
        player = game_state.get_player(player_id)
        if player.hand.first_of_kind(window.demanded) is not None:
            return None
        return Action.decline(player_id)

"""
API Service - Business logic layer between API and engine.

The service:
1. Translates requests to engine Actions
2. Manages sessions and their game loops
3. Formats snapshots from the human seat's point of view

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
Methods return a response model, or an ErrorResponse on failure.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .schemas import (
    CardInfo,
    CharacterInfo,
    CharacterListResponse,
    EquipmentInfo,
    ErrorCode,
    ErrorResponse,
    GameListResponse,
    GameStateResponse,
    GameStatus,
    LogEntryInfo,
    PendingInfo,
    PlayerInfo,
    SkillInfo,
)
from ..engine_core.action import Action
from ..engine_core.definitions import CharacterDefinition
from ..engine_core.effect_resolver import ultimate_available
from ..engine_core.rules import GameRules
from ..engine_core.state import GameState, Judgement, PlayerState, PlayingCard, ResponseWindow
from ..engine_core.targeting import attack_range, distance
from ..games.ninja_clash.characters import CHARACTERS
from ..games.ninja_clash.setup import UnknownCharacter
from ..session import GameLoop, LoopState, Session, SessionManager, TurnResult

logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        state = service.start_game("naruto", seed=7)
        hand = state.players[0].hand
        state = service.play_card(state.game_id, "human", hand[0].instance_id, "ai1")
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # Game loops per session
    _game_loops: dict[str, GameLoop] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> APIService:
        return cls(session_manager=SessionManager(rules=GameRules.from_env()))

    # =========================================================================
    # Catalog
    # =========================================================================

    def list_characters(self) -> CharacterListResponse:
        characters = [self._character_info(c) for c in CHARACTERS]
        return CharacterListResponse(characters=characters, count=len(characters))

    # =========================================================================
    # Game lifecycle
    # =========================================================================

    def start_game(
        self,
        character_id: str,
        seed: int | None = None,
        all_ai: bool = False,
    ) -> GameStateResponse | ErrorResponse:
        """
        Start a new game and run it up to the human's first decision.
        """
        try:
            session = self.session_manager.create_session(character_id, seed=seed, all_ai=all_ai)
        except UnknownCharacter as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.UNKNOWN_CHARACTER,
                details={"character_id": character_id},
            )

        game_loop = GameLoop(session)
        self._game_loops[session.session_id] = game_loop
        turn = game_loop.run()
        return self._build_game_state(session, turn)

    def get_game(self, game_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(game_id)
        if not session:
            return self._not_found(game_id)
        return self._build_game_state(session)

    def list_games(self) -> GameListResponse:
        games = [s.session_id for s in self.session_manager.list_sessions()]
        return GameListResponse(games=games, count=len(games))

    def end_game(self, game_id: str) -> bool:
        """Delete a game. Returns False if it did not exist."""
        self._game_loops.pop(game_id, None)
        return self.session_manager.end_session(game_id, reason="user_ended")

    # =========================================================================
    # Commands
    # =========================================================================

    def play_card(
        self,
        game_id: str,
        player_id: str,
        card_id: str,
        target_id: str | None = None,
    ) -> GameStateResponse | ErrorResponse:
        return self._submit(game_id, Action.play_card(player_id, card_id, target_id))

    def respond_to_window(
        self,
        game_id: str,
        player_id: str,
        card_id: str | None = None,
    ) -> GameStateResponse | ErrorResponse:
        return self._submit(game_id, Action.respond(player_id, card_id))

    def confirm_discard(
        self,
        game_id: str,
        player_id: str,
        card_ids: list[str],
    ) -> GameStateResponse | ErrorResponse:
        return self._submit(game_id, Action.confirm_discard(player_id, card_ids))

    def trigger_ultimate(
        self,
        game_id: str,
        player_id: str,
        target_id: str | None = None,
    ) -> GameStateResponse | ErrorResponse:
        return self._submit(game_id, Action.trigger_ultimate(player_id, target_id))

    def end_play_phase(self, game_id: str, player_id: str) -> GameStateResponse | ErrorResponse:
        return self._submit(game_id, Action.end_play_phase(player_id))

    def _submit(self, game_id: str, action: Action) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(game_id)
        if not session:
            return self._not_found(game_id)

        game_loop = self._game_loops.setdefault(game_id, GameLoop(session))
        turn = game_loop.submit(action)
        if not turn.success:
            logger.debug("Game %s refused %s: %s", game_id, action.describe(), turn.errors)
            return ErrorResponse(
                error="; ".join(turn.errors) or "Action rejected",
                error_code=ErrorCode.ILLEGAL_ACTION,
                details={"reason": turn.error_code, "action": action.action_type.value},
            )
        return self._build_game_state(session, turn)

    # =========================================================================
    # Formatting
    # =========================================================================

    def _not_found(self, game_id: str) -> ErrorResponse:
        return ErrorResponse(
            error="Game not found",
            error_code=ErrorCode.GAME_NOT_FOUND,
            details={"game_id": game_id},
        )

    def _status(self, session: Session, turn: TurnResult | None) -> GameStatus:
        if session.game_state.is_over:
            return GameStatus.GAME_OVER
        if turn is not None and turn.loop_state == LoopState.STALLED:
            return GameStatus.STALLED
        if session.is_human_turn():
            return GameStatus.YOUR_TURN
        return GameStatus.ACTIVE

    def _build_game_state(self, session: Session, turn: TurnResult | None = None) -> GameStateResponse:
        state = session.game_state
        human = state.get_player(session.human_player_id)
        return GameStateResponse(
            game_id=session.session_id,
            status=self._status(session, turn),
            turn_number=state.turn_number,
            phase=state.phase.value,
            current_player_id=state.current_player.player_id,
            acting_player_id=state.acting_player_id,
            players=[self._player_info(state, p, human) for p in state.players],
            pending=self._pending_info(state),
            discard_required=state.discard_required,
            draw_pile_count=state.draw_pile.count,
            discard_pile_count=state.discard_pile.count,
            winner_id=state.winner_id,
            logs=[
                LogEntryInfo(sequence=e.sequence, text=e.text, kind=e.kind.value)
                for e in state.logs
            ],
            actions=turn.actions if turn else [],
            warnings=turn.warnings if turn else [],
        )

    def _player_info(self, state: GameState, player: PlayerState, human: PlayerState) -> PlayerInfo:
        is_human = player.player_id == human.player_id
        info = PlayerInfo(
            player_id=player.player_id,
            character_id=player.character.id,
            character_name=player.name,
            is_ai=player.is_ai,
            hp=player.hp,
            max_hp=player.max_hp,
            is_alive=player.is_alive,
            is_current_turn=state.current_player.player_id == player.player_id,
            hand_count=player.hand.count,
            hand=[self._card_info(c) for c in player.hand.cards] if is_human else None,
            equipment=EquipmentInfo(
                weapon=self._card_info(player.equipment.weapon),
                armor=self._card_info(player.equipment.armor),
                offense_mount=self._card_info(player.equipment.offense_mount),
                defense_mount=self._card_info(player.equipment.defense_mount),
            ),
            attacks_played=player.attacks_played,
            skipped_turn=player.skipped_turn,
            ultimate_cooldown=player.flags.ultimate_cooldown,
            ultimate_ready=ultimate_available(state, player),
        )
        if not is_human and player.is_alive and human.is_alive:
            dist = distance(human, player, state.players)
            info.distance_from_human = dist
            info.in_human_attack_range = dist <= attack_range(human)
        return info

    def _pending_info(self, state: GameState) -> PendingInfo | None:
        pending = state.pending
        if isinstance(pending, ResponseWindow):
            return PendingInfo(
                kind="response",
                source_id=pending.source_id,
                target_id=pending.target_id,
                card=self._card_info(pending.card),
                demanded=pending.demanded.value,
            )
        if isinstance(pending, Judgement):
            return PendingInfo(
                kind="judgement",
                source_id=pending.source_id,
                target_id=pending.target_id,
                card=self._card_info(pending.card),
                step=pending.step.value,
            )
        return None

    def _card_info(self, card: PlayingCard | None) -> CardInfo | None:
        if card is None:
            return None
        return CardInfo(
            instance_id=card.instance_id,
            card_id=card.card_id,
            name=card.name,
            kind=card.kind.value,
            suit=card.suit.value,
            rank=card.rank,
            description=card.definition.description,
            attack_range=card.definition.attack_range,
        )

    def _character_info(self, character: CharacterDefinition) -> CharacterInfo:
        ultimate = character.ultimate
        return CharacterInfo(
            character_id=character.id,
            name=character.name,
            max_hp=character.max_hp,
            skills=[
                SkillInfo(
                    name=s.name,
                    description=s.description,
                    is_passive=s.is_passive,
                    is_ultimate=s.is_ultimate,
                )
                for s in character.skills
            ],
            ultimate_condition=ultimate.condition.describe() if ultimate else None,
            ultimate_needs_target=ultimate.needs_target if ultimate else False,
        )

"""
Tests for API Pydantic schemas.

Validates that:
- Request models apply their defaults
- Error responses are properly structured
- Snapshots serialize to plain JSON
"""

import pytest
from pydantic import ValidationError


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_create_game_request(self):
        """Only the character is required."""
        from shinobi.api.schemas import CreateGameRequest

        request = CreateGameRequest(character_id="naruto")
        assert request.seed is None
        assert request.all_ai is False

        with pytest.raises(ValidationError):
            CreateGameRequest()

    def test_command_requests_default_to_human(self):
        from shinobi.api.schemas import DiscardRequest, PlayCardRequest, RespondRequest

        assert PlayCardRequest(card_id="atk-0").player_id == "human"
        assert RespondRequest().card_id is None
        assert DiscardRequest(card_ids=["atk-0"]).player_id == "human"

    def test_error_response(self):
        """ErrorResponse carries a machine-readable code."""
        from shinobi.api.schemas import ErrorCode, ErrorResponse

        response = ErrorResponse(
            error="Not your turn",
            error_code=ErrorCode.ILLEGAL_ACTION,
            details={"reason": "NOT_YOUR_TURN"},
        )

        data = response.model_dump(mode="json")
        assert data["error_code"] == "ILLEGAL_ACTION"
        assert data["details"]["reason"] == "NOT_YOUR_TURN"
        assert data["api_version"] == "v1"

    def test_game_state_response(self):
        from shinobi.api.schemas import (
            CardInfo, GameStateResponse, GameStatus, PendingInfo, PlayerInfo,
        )

        card = CardInfo(instance_id="atk-3", card_id="atk", name="Rasengan", kind="attack", suit="spade", rank=4)
        response = GameStateResponse(
            game_id="g1",
            status=GameStatus.YOUR_TURN,
            turn_number=2,
            phase="play",
            current_player_id="ai1",
            acting_player_id="human",
            players=[PlayerInfo(
                player_id="human", character_id="naruto", character_name="Naruto Uzumaki",
                is_ai=False, hp=3, max_hp=4, is_alive=True,
            )],
            pending=PendingInfo(kind="response", source_id="ai1", target_id="human", card=card, demanded="dodge"),
        )

        data = response.model_dump(mode="json")
        assert data["status"] == "your_turn"
        assert data["pending"]["card"]["suit"] == "spade"
        assert data["players"][0]["hand"] is None
        assert data["players"][0]["equipment"]["weapon"] is None
        assert data["actions"] == []

    def test_error_codes(self):
        from shinobi.api.schemas import ErrorCode

        assert {c.value for c in ErrorCode} == {
            "ILLEGAL_ACTION", "GAME_NOT_FOUND", "UNKNOWN_CHARACTER", "VALIDATION_ERROR", "INTERNAL_ERROR",
        }

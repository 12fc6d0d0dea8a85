"""
Tests for rule configuration and the catalogs.
"""

from dataclasses import fields

from ..engine_core.action import ActionPayload
from ..engine_core.definitions import CardKind, PassiveTraits
from ..engine_core.rules import GameRules
from ..games.ninja_clash.cards import CARD_LIBRARY, DECK_COMPOSITION
from ..games.ninja_clash.characters import CHARACTERS, ULTIMATES, get_character


class TestGameRules:
    """Tests for GameRules defaults and overrides."""

    def test_defaults(self):
        rules = GameRules()
        assert rules.draw_count(is_ai=False) == 3
        assert rules.draw_count(is_ai=True) == 2
        assert rules.initial_hand(is_ai=False) == 6
        assert rules.initial_hand(is_ai=True) == 5
        assert rules.attack_cap == 2
        assert rules.ultimate_cooldown == 10

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SHINOBI_ATTACK_CAP", "3")
        monkeypatch.setenv("SHINOBI_CHECK_INVARIANTS", "false")

        rules = GameRules.from_env()

        assert rules.attack_cap == 3
        assert rules.check_invariants is False
        assert rules.log_limit == 12

    def test_from_env_custom_prefix(self, monkeypatch):
        monkeypatch.setenv("CLASH_LOG_LIMIT", "20")
        assert GameRules.from_env(prefix="CLASH_").log_limit == 20


class TestCatalogs:
    """Tests for the card library and roster."""

    def test_every_composed_card_exists(self):
        ids = {card.id for card in CARD_LIBRARY}
        assert set(DECK_COMPOSITION) <= ids

    def test_weapons_have_range(self):
        for card in CARD_LIBRARY:
            if card.kind == CardKind.EQUIP_WEAPON:
                assert card.attack_range and card.attack_range >= 2

    def test_judgement_scrolls(self):
        gated = {card.id for card in CARD_LIBRARY if card.judgement is not None}
        assert gated == {"fireball", "chidori"}

    def test_roster(self):
        assert len(CHARACTERS) == 12
        assert len({c.id for c in CHARACTERS}) == 12
        assert set(ULTIMATES) == {c.id for c in CHARACTERS}
        assert get_character("nobody") is None

    def test_every_character_has_passive_and_ultimate_skill(self):
        for character in CHARACTERS:
            assert any(s.is_passive for s in character.skills)
            assert any(s.is_ultimate for s in character.skills)

    def test_inert_passive_says_so(self):
        """Jiraiya's Sage Mode has no engine hook, and its text admits it."""
        jiraiya = get_character("jiraiya")
        sage_mode = next(s for s in jiraiya.skills if s.name == "Sage Mode")
        assert jiraiya.passives == PassiveTraits()
        assert "no" in sage_mode.description and "effect" in sage_mode.description


class TestActionPayload:
    """Tests for the payload shape commands carry."""

    def test_payload_fields(self):
        assert [f.name for f in fields(ActionPayload)] == [
            "player_id", "card_id", "target_player_id", "card_ids",
        ]

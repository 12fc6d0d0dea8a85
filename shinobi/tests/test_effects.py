"""
Tests for card effects, elimination and ultimates.
"""

from ..engine_core.action import Action, ErrorCode
from ..engine_core.effect_resolver import apply_damage, heal, lowest_value_cards
from ..engine_core.reducer import apply_action
from ..engine_core.state import Phase
from .conftest import make_card, make_state, refresh_universe


def apply_ok(state, action):
    result = apply_action(state, action)
    assert result.success, result.error
    return result.new_state


class TestDamageAndHealing:
    """Tests for hp changes."""

    def test_heal_is_clamped(self):
        state = make_state(hp={"human": 3})
        restored = heal(state, state.human, 5)
        assert restored == 1
        assert state.human.hp == 4

    def test_heal_bonus(self):
        """Tsunade's pills recover two."""
        pill = make_card("heal")
        state = make_state(characters={"human": "tsunade"}, hp={"human": 2}, hands={"human": [pill]})

        state = apply_ok(state, Action.play_card("human", pill.instance_id))

        assert state.human.hp == 4

    def test_heal_at_full_hp_still_spends_the_card(self):
        pill = make_card("heal")
        state = make_state(hands={"human": [pill]})

        state = apply_ok(state, Action.play_card("human", pill.instance_id))

        assert state.human.hp == 4
        assert state.discard_pile.find(pill.instance_id) is not None

    def test_damage_clamps_at_zero(self):
        state = make_state(hp={"ai1": 1})
        lost = apply_damage(state, state.players[1], 3)
        assert lost == 1
        assert state.players[1].hp == 0

    def test_elimination_discards_everything(self):
        held = [make_card("heal"), make_card("dodge")]
        weapon = make_card("kunai")
        state = make_state(hp={"ai1": 1}, hands={"ai1": held})
        state.players[1].equipment.weapon = weapon
        refresh_universe(state)

        apply_damage(state, state.players[1], 1)

        victim = state.players[1]
        assert not victim.is_alive
        assert victim.hand.is_empty
        assert victim.equipment.is_empty
        for card in held + [weapon]:
            assert state.discard_pile.find(card.instance_id) is not None

    def test_revive_once(self):
        """Orochimaru survives the first lethal hit with 1 hp."""
        state = make_state(characters={"ai1": "orochimaru"}, hp={"ai1": 1})
        snake = state.players[1]

        apply_damage(state, snake, 2)
        assert snake.hp == 1
        assert snake.flags.revive_used

        apply_damage(state, snake, 1)
        assert not snake.is_alive


class TestCardEffects:
    """Tests for equipment and scrolls."""

    def test_equip_replaces_previous(self):
        old, new = make_card("kunai"), make_card("kusanagi")
        state = make_state(hands={"human": [new]})
        state.human.equipment.weapon = old
        refresh_universe(state)

        state = apply_ok(state, Action.play_card("human", new.instance_id))

        assert state.human.equipment.weapon == new
        assert state.discard_pile.find(old.instance_id) is not None
        assert state.discard_pile.find(new.instance_id) is None

    def test_draw_scroll(self):
        scroll = make_card("draw")
        state = make_state(hands={"human": [scroll]})
        state = apply_ok(state, Action.play_card("human", scroll.instance_id))
        assert state.human.hand.count == 2

    def test_dismantle_can_hit_equipment(self):
        scroll = make_card("dismantle")
        weapon = make_card("kunai")
        state = make_state(hands={"human": [scroll]})
        state.players[2].equipment.weapon = weapon
        refresh_universe(state)

        state = apply_ok(state, Action.play_card("human", scroll.instance_id, "ai2"))
        state = apply_ok(state, Action.decline("ai2"))

        assert state.players[2].equipment.weapon is None
        assert state.discard_pile.find(weapon.instance_id) is not None

    def test_lowest_value_cards(self):
        cards = [make_card("heal"), make_card("draw"), make_card("atk"), make_card("dodge")]
        state = make_state(hands={"human": cards})

        chosen = lowest_value_cards(state.human, 2)

        assert [c.card_id for c in chosen] == ["draw", "atk"]

    def test_end_turn_recovery(self):
        """Sakura heals 1 and drops her least useful card at END."""
        scroll, pill = make_card("draw"), make_card("heal")
        state = make_state(
            characters={"human": "sakura"}, hp={"human": 2}, phase=Phase.END,
            hands={"human": [scroll, pill]},
        )

        state = apply_ok(state, Action.advance())

        assert state.human.hp == 3
        assert [c.instance_id for c in state.human.hand.cards] == [pill.instance_id]
        assert state.current_player_idx == 1


class TestUltimates:
    """Tests for the human's ultimate."""

    def test_targeted_ultimate(self):
        state = make_state(characters={"human": "naruto"}, hp={"human": 2})

        state = apply_ok(state, Action.trigger_ultimate("human", "ai1"))

        assert state.players[1].hp == 2
        assert state.human.flags.ultimate_cooldown == 10
        assert state.human.flags.ultimate_used

    def test_condition_not_met(self):
        state = make_state(characters={"human": "naruto"}, hp={"human": 3})
        result = apply_action(state, Action.trigger_ultimate("human", "ai1"))
        assert result.error_code == ErrorCode.ULTIMATE_UNAVAILABLE

    def test_on_cooldown(self):
        state = make_state(characters={"human": "naruto"}, hp={"human": 2})
        state.human.flags.ultimate_cooldown = 4
        result = apply_action(state, Action.trigger_ultimate("human", "ai1"))
        assert result.error_code == ErrorCode.ULTIMATE_UNAVAILABLE

    def test_cooldown_ticks_at_start(self):
        state = make_state(characters={"human": "naruto"}, phase=Phase.START)
        state.human.flags.ultimate_cooldown = 1
        state = apply_ok(state, Action.advance())
        assert state.human.flags.ultimate_cooldown == 0

    def test_ai_seats_have_no_ultimate(self):
        state = make_state(characters={"ai1": "naruto"}, hp={"ai1": 2}, current=1)
        result = apply_action(state, Action.trigger_ultimate("ai1", "human"))
        assert result.error_code == ErrorCode.ULTIMATE_UNAVAILABLE

    def test_targeted_ultimate_needs_target(self):
        state = make_state(characters={"human": "naruto"}, hp={"human": 2})
        result = apply_action(state, Action.trigger_ultimate("human"))
        assert result.error_code == ErrorCode.INVALID_TARGET

    def test_strip_equipment(self):
        state = make_state(characters={"human": "kakashi"})
        state.human.equipment.weapon = make_card("kunai")
        state.players[1].equipment.armor = make_card("vest")
        refresh_universe(state)

        state = apply_ok(state, Action.trigger_ultimate("human", "ai1"))

        assert state.players[1].hp == 3
        assert state.players[1].equipment.is_empty

    def test_force_discard_takes_lowest_cards(self):
        pill = make_card("heal")
        state = make_state(
            characters={"human": "pain"}, hp={"human": 3},
            hands={"ai1": [pill, make_card("atk"), make_card("draw")]},
        )

        state = apply_ok(state, Action.trigger_ultimate("human"))

        assert [c.instance_id for c in state.players[1].hand.cards] == [pill.instance_id]

    def test_self_ultimate(self):
        state = make_state(characters={"human": "tsunade"}, hp={"human": 3})

        state = apply_ok(state, Action.trigger_ultimate("human"))

        assert state.human.hp == 5
        assert state.human.hand.count == 2

    def test_draw_up_to(self):
        state = make_state(
            characters={"human": "orochimaru"}, hp={"human": 1},
            hands={"human": [make_card("heal")]},
        )

        state = apply_ok(state, Action.trigger_ultimate("human"))

        assert state.human.hand.count == 5
        assert state.human.hp == 2

    def test_self_damaging_ultimate_can_eliminate_user(self):
        """Madara at 1 hp falls to his own jutsu and skips the draw."""
        state = make_state(characters={"human": "madara"}, hp={"human": 1})

        state = apply_ok(state, Action.trigger_ultimate("human"))

        assert not state.human.is_alive
        assert state.human.hand.is_empty
        assert all(p.hp == 3 for p in state.players[1:])
        assert state.current_player_idx == 1
        assert state.phase == Phase.START

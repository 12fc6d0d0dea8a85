"""
Tests for response windows, duels and judgements.

Tests:
- Attack windows: dodge or take damage
- Negate windows on scrolls
- Duel alternation
- Two-step judgements driven by ADVANCE
"""

import copy
import random
from dataclasses import replace

from ..engine_core.action import Action, ErrorCode
from ..engine_core.definitions import CardKind, PassiveTraits
from ..engine_core.pending import JUDGEMENT_SUITS
from ..engine_core.reducer import apply_action
from ..engine_core.state import FollowUp, Judgement, JudgementStep, LogKind, ResponseWindow
from ..games.ninja_clash.characters import get_character
from .conftest import make_card, make_state


def apply_ok(state, action):
    result = apply_action(state, action)
    assert result.success, result.error
    return result.new_state


def predict_judgement(state):
    """The suit the next judgement draw will reveal."""
    rng = copy.deepcopy(state.rng)
    return rng.choice(JUDGEMENT_SUITS)


def rig_judgement(state, red):
    """Reseed the game RNG so the next judgement draw comes up red or black."""
    for seed in range(100):
        rng = random.Random(seed)
        if copy.deepcopy(rng).choice(JUDGEMENT_SUITS).is_red == red:
            state.rng = rng
            return state
    raise AssertionError("no seed found")


class TestAttackWindow:
    """Tests for attacks."""

    def test_attack_opens_dodge_window(self, play_state):
        attack = play_state.human.hand.cards[0]

        state = apply_ok(play_state, Action.play_card("human", attack.instance_id, "ai1"))

        window = state.pending
        assert isinstance(window, ResponseWindow)
        assert window.demanded == CardKind.DODGE
        assert window.on_no_response == FollowUp.DAMAGE
        assert state.acting_player_id == "ai1"
        # played cards hit the discard pile straight away
        assert state.discard_pile.find(attack.instance_id) is not None

    def test_decline_takes_one_damage(self, play_state):
        attack = play_state.human.hand.cards[0]
        state = apply_ok(play_state, Action.play_card("human", attack.instance_id, "ai1"))

        state = apply_ok(state, Action.decline("ai1"))

        assert state.players[1].hp == 3
        assert state.pending is None
        assert any(e.kind == LogKind.DAMAGE for e in state.logs)

    def test_attack_damage_bonus(self):
        """A character with an attack bonus hits for two."""
        brawler = replace(
            get_character("jiraiya"), id="brawler", passives=PassiveTraits(attack_damage_bonus=1),
        )
        attack = make_card("atk")
        state = make_state(characters={"human": brawler}, hands={"human": [attack]})

        state = apply_ok(state, Action.play_card("human", attack.instance_id, "ai1"))
        assert state.pending.damage == 2
        state = apply_ok(state, Action.decline("ai1"))

        assert state.players[1].hp == 2

    def test_dodge_cancels_attack(self, play_state):
        attack = play_state.human.hand.cards[0]
        dodge = play_state.players[1].hand.cards[0]
        state = apply_ok(play_state, Action.play_card("human", attack.instance_id, "ai1"))

        state = apply_ok(state, Action.respond("ai1", dodge.instance_id))

        assert state.players[1].hp == 4
        assert state.pending is None
        assert state.players[1].hand.is_empty
        assert state.discard_pile.find(dodge.instance_id) is not None

    def test_wrong_response_kind(self):
        attack = make_card("atk")
        heal = make_card("heal")
        state = make_state(hands={"human": [attack], "ai1": [heal]})
        state = apply_ok(state, Action.play_card("human", attack.instance_id, "ai1"))

        result = apply_action(state, Action.respond("ai1", heal.instance_id))

        assert result.error_code == ErrorCode.WRONG_CARD_KIND

    def test_only_the_responder_may_answer(self, play_state):
        attack = play_state.human.hand.cards[0]
        state = apply_ok(play_state, Action.play_card("human", attack.instance_id, "ai1"))

        result = apply_action(state, Action.decline("human"))

        assert result.error_code == ErrorCode.NOT_YOUR_TURN


class TestNegateWindow:
    """Tests for scrolls that can be negated."""

    def test_negated_steal_takes_nothing(self):
        steal, negate = make_card("steal"), make_card("negate")
        state = make_state(hands={"human": [steal], "ai1": [negate, make_card("heal")]})

        state = apply_ok(state, Action.play_card("human", steal.instance_id, "ai1"))
        state = apply_ok(state, Action.respond("ai1", negate.instance_id))

        assert state.human.hand.is_empty
        assert state.players[1].hand.count == 1

    def test_steal_resolves_on_decline(self):
        steal = make_card("steal")
        loot = make_card("heal")
        state = make_state(hands={"human": [steal], "ai1": [loot]})

        state = apply_ok(state, Action.play_card("human", steal.instance_id, "ai1"))
        state = apply_ok(state, Action.decline("ai1"))

        assert state.human.hand.find(loot.instance_id) is not None
        assert state.players[1].hand.is_empty

    def test_skip_turn_resolves(self):
        scroll = make_card("tsukuyomi")
        state = make_state(hands={"human": [scroll]})

        state = apply_ok(state, Action.play_card("human", scroll.instance_id, "ai3"))
        state = apply_ok(state, Action.decline("ai3"))

        assert state.players[3].skipped_turn


class TestDuel:
    """Tests for duel alternation."""

    def test_duel_alternates_until_someone_cannot_answer(self):
        duel = make_card("duel")
        human_attack, ai_attack = make_card("atk"), make_card("atk")
        state = make_state(hands={"human": [duel, human_attack], "ai1": [ai_attack]})

        state = apply_ok(state, Action.play_card("human", duel.instance_id, "ai1"))
        assert state.pending.demanded == CardKind.NEGATE
        state = apply_ok(state, Action.decline("ai1"))

        # round 1: ai1 must answer with an attack
        assert state.pending.demanded == CardKind.ATTACK
        assert state.acting_player_id == "ai1"
        state = apply_ok(state, Action.respond("ai1", ai_attack.instance_id))

        # round 2: back to the human
        assert state.acting_player_id == "human"
        state = apply_ok(state, Action.respond("human", human_attack.instance_id))

        # round 3: ai1 has nothing left
        assert state.acting_player_id == "ai1"
        state = apply_ok(state, Action.decline("ai1"))

        assert state.pending is None
        assert state.players[1].hp == 3
        assert state.human.hp == 4
        # duel attacks do not count toward the cap
        assert state.human.attacks_played == 0


class TestJudgement:
    """Tests for judgement-gated scrolls."""

    def _fireball_judgement(self):
        fireball = make_card("fireball")
        state = make_state(hands={"human": [fireball]})
        state = apply_ok(state, Action.play_card("human", fireball.instance_id, "ai2"))
        state = apply_ok(state, Action.decline("ai2"))
        return state

    def test_declined_scroll_starts_judgement(self):
        state = self._fireball_judgement()

        assert isinstance(state.pending, Judgement)
        assert state.pending.step == JudgementStep.REVEAL
        assert state.acting_player_id is None

    def test_judgement_takes_two_advances(self):
        state = self._fireball_judgement()

        state = apply_ok(state, Action.advance())
        assert state.pending.step == JudgementStep.DRAW

        suit = predict_judgement(state)
        state = apply_ok(state, Action.advance())

        assert state.pending is None
        expected_hp = 3 if suit.is_red else 4
        assert state.players[2].hp == expected_hp
        assert any(e.kind == LogKind.JUDGEMENT for e in state.logs)

    def test_judgement_is_seeded(self):
        """Same state, same reveal."""
        first = apply_ok(apply_ok(self._fireball_judgement(), Action.advance()), Action.advance())
        second = apply_ok(apply_ok(self._fireball_judgement(), Action.advance()), Action.advance())
        assert first.logs[-1].text == second.logs[-1].text
        assert first.players[2].hp == second.players[2].hp

    def test_aoe_hits_every_other_player_on_black(self):
        chidori = make_card("chidori")
        state = make_state(hands={"human": [chidori]})

        state = apply_ok(state, Action.play_card("human", chidori.instance_id))
        assert isinstance(state.pending, Judgement)
        assert state.pending.target_id is None

        state = apply_ok(state, Action.advance())
        suit = predict_judgement(state)
        state = apply_ok(state, Action.advance())

        expected = 3 if suit.is_black else 4
        assert [p.hp for p in state.players[1:]] == [expected] * 4
        assert state.human.hp == 4

    def test_susanoo_absorbs_scroll_damage(self):
        fireball = make_card("fireball")
        state = make_state(hands={"human": [fireball]})
        state.players[2].equipment.armor = make_card("susanoo")
        state.universe = frozenset(state.all_card_ids())

        state = apply_ok(state, Action.play_card("human", fireball.instance_id, "ai2"))
        state = apply_ok(state, Action.decline("ai2"))
        state = apply_ok(state, Action.advance())
        state = apply_ok(state, Action.advance())

        assert state.players[2].hp == 4

    def test_fireball_scroll_bonus(self):
        """Itachi's fireball hits for 2."""
        fireball = make_card("fireball")
        state = make_state(characters={"human": "itachi"}, hands={"human": [fireball]})

        state = apply_ok(state, Action.play_card("human", fireball.instance_id, "ai2"))
        state = apply_ok(state, Action.decline("ai2"))
        state = apply_ok(state, Action.advance())
        state = apply_ok(rig_judgement(state, red=True), Action.advance())

        assert state.players[2].hp == 2
        assert [p.hp for p in state.players if p.player_id != "ai2"] == [3, 4, 4, 4]

    def test_aoe_ignores_scroll_bonus(self):
        chidori = make_card("chidori")
        state = make_state(characters={"human": "itachi"}, hands={"human": [chidori]})

        state = apply_ok(state, Action.play_card("human", chidori.instance_id))
        state = apply_ok(state, Action.advance())
        state = apply_ok(rig_judgement(state, red=False), Action.advance())

        assert [p.hp for p in state.players[1:]] == [3, 3, 3, 3]
        assert state.human.hp == 3

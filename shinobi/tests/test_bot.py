"""
Tests for bot action selection and legality.

Tests:
- Threat scoring
- Heuristic priorities (emergency, equipment, attack, end play)
- Responses and discards
- Baseline policies only pick legal actions
"""

import pytest

from ..bots import FirstLegalPolicy, HeuristicBot, RandomPolicy, ThreatEvaluator
from ..engine_core.action import Action, ActionType
from ..engine_core.action_generator import legal_actions
from ..engine_core.reducer import apply_action
from ..engine_core.state import Phase
from .conftest import make_card, make_state, refresh_universe


def ai_turn(**kwargs):
    """ai1's play phase."""
    return make_state(current=1, **kwargs)


class TestThreatEvaluator:
    """Tests for target scoring."""

    def test_finishing_blow_dominates(self):
        state = make_state(hp={"ai2": 1, "ai3": 2})
        evaluator = ThreatEvaluator()
        attacker = state.players[1]

        ranked = evaluator.rank(attacker, [state.players[3], state.players[2]])

        assert ranked[0].player_id == "ai2"

    def test_human_draws_less_aggro(self):
        state = make_state()
        evaluator = ThreatEvaluator()
        attacker = state.players[1]
        assert evaluator.threat_score(attacker, state.human) < \
               evaluator.threat_score(attacker, state.players[2])

    def test_armor_lowers_threat_unless_pierced(self):
        state = make_state(characters={"ai2": "sasuke"})
        state.players[3].equipment.armor = make_card("vest")
        evaluator = ThreatEvaluator()

        plain = evaluator.threat_score(state.players[1], state.players[3])
        piercing = evaluator.threat_score(state.players[2], state.players[3])

        assert plain == -15.0
        assert piercing == 0.0

    def test_ties_keep_seat_order(self):
        state = make_state()
        evaluator = ThreatEvaluator()
        best = evaluator.best_target(state.players[1], [state.players[2], state.players[3]])
        assert best.player_id == "ai2"

    def test_no_candidates(self):
        state = make_state()
        assert ThreatEvaluator().best_target(state.players[1], []) is None


class TestHeuristicBot:
    """Tests for the priority list."""

    def test_emergency_heal(self):
        """At 2 hp a heal beats an attack."""
        pill, attack = make_card("heal"), make_card("atk")
        state = ai_turn(hp={"ai1": 2}, hands={"ai1": [attack, pill]})

        action = HeuristicBot().decide(state.players[1], state)

        assert action == Action.play_card("ai1", pill.instance_id)

    def test_equips_before_attacking(self):
        weapon, attack = make_card("kunai"), make_card("atk")
        state = ai_turn(hands={"ai1": [attack, weapon]})

        action = HeuristicBot().decide(state.players[1], state)

        assert action.payload.card_id == weapon.instance_id

    def test_attacks_best_target_in_range(self):
        attack = make_card("atk")
        state = ai_turn(hp={"ai2": 1}, hands={"ai1": [attack]})

        action = HeuristicBot().decide(state.players[1], state)

        assert action == Action.play_card("ai1", attack.instance_id, "ai2")

    def test_respects_attack_cap(self):
        attack = make_card("atk")
        state = ai_turn(hands={"ai1": [attack]})
        state.players[1].attacks_played = 2

        action = HeuristicBot().decide(state.players[1], state)

        assert action.action_type == ActionType.END_PLAY_PHASE

    def test_ends_play_with_nothing_useful(self):
        state = ai_turn(hands={"ai1": [make_card("dodge")]})
        action = HeuristicBot().decide(state.players[1], state)
        assert action == Action.end_play_phase("ai1")

    def test_answers_with_dodge(self):
        attack, dodge = make_card("atk"), make_card("dodge")
        state = make_state(hands={"human": [attack], "ai1": [dodge]})
        state = apply_action(state, Action.play_card("human", attack.instance_id, "ai1")).new_state

        action = HeuristicBot().decide(state.players[1], state)

        assert action == Action.respond("ai1", dodge.instance_id)

    def test_declines_without_answer(self):
        attack = make_card("atk")
        state = make_state(hands={"human": [attack], "ai1": [make_card("heal")]})
        state = apply_action(state, Action.play_card("human", attack.instance_id, "ai1")).new_state

        action = HeuristicBot().decide(state.players[1], state)

        assert action == Action.decline("ai1")

    def test_discards_lowest_value(self):
        hand = [make_card("heal"), make_card("dodge"), make_card("draw"), make_card("atk"), make_card("heal")]
        state = ai_turn(phase=Phase.DISCARD, hp={"ai1": 3}, hands={"ai1": hand})
        state.discard_required = 2

        action = HeuristicBot().decide(state.players[1], state)

        assert action.action_type == ActionType.CONFIRM_DISCARD
        assert action.payload.card_ids == [hand[2].instance_id, hand[3].instance_id]

    def test_select_action_returns_legal_choice(self):
        attack = make_card("atk")
        state = ai_turn(hands={"ai1": [attack]})
        legal = legal_actions(state)

        decision = HeuristicBot().select_action(state, legal)

        assert decision.action in legal

    def test_steal_only_adjacent(self):
        steal = make_card("steal")
        state = ai_turn(hands={"ai1": [steal], "ai3": [make_card("heal")], "ai2": [make_card("atk")]})

        action = HeuristicBot().decide(state.players[1], state)

        assert action == Action.play_card("ai1", steal.instance_id, "ai2")


class TestBaselinePolicies:
    """Tests for RandomPolicy and FirstLegalPolicy."""

    def test_random_policy_selects_legal(self, play_state):
        legal = legal_actions(play_state)
        bot = RandomPolicy(seed=42)
        for _ in range(10):
            assert bot.select_action(play_state, legal).action in legal

    def test_random_policy_is_seeded(self, play_state):
        legal = legal_actions(play_state)
        first = [RandomPolicy(seed=3).select_action(play_state, legal).action for _ in range(3)]
        second = [RandomPolicy(seed=3).select_action(play_state, legal).action for _ in range(3)]
        assert first == second

    def test_first_legal(self, play_state):
        legal = legal_actions(play_state)
        assert FirstLegalPolicy().select_action(play_state, legal).action == legal[0]

    def test_empty_legal_list(self, play_state):
        with pytest.raises(ValueError):
            RandomPolicy(seed=1).select_action(play_state, [])

    def test_equipped_state_still_legal(self):
        state = ai_turn(hands={"ai1": [make_card("atk")]})
        state.players[1].equipment.weapon = make_card("kunai")
        refresh_universe(state)
        legal = legal_actions(state)
        targets = {a.payload.target_player_id for a in legal if a.action_type == ActionType.PLAY_CARD}
        assert targets == {"human", "ai2", "ai3", "ai4"}

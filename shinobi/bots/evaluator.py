"""
Threat Evaluator - Scores opponents for bot targeting.

The evaluator ranks opponents by how attractive they are as targets:
- Nearly dead opponents are finishing targets
- Wounded opponents and big hands are threats
- Armor and defense mounts make a target less attractive
- The human seat draws less aggro

Weights can be adjusted to create different play styles.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..engine_core.definitions import keep_value

if TYPE_CHECKING:
    from ..engine_core.state import PlayerState, PlayingCard


@dataclass
class ThreatWeights:
    """
    Weights for the threat score.

    Higher values = more attractive target.
    """
    finishing_blow: float = 50.0  # target at 1 hp
    missing_hp: float = 5.0  # per missing hp otherwise
    hand_size: float = 2.0  # per card in hand
    armor: float = -15.0  # unless the attacker pierces armor
    defense_mount: float = -5.0
    human_seat: float = -15.0


class ThreatEvaluator:
    """
    Evaluates opponents from an attacker's point of view.
    """

    def __init__(self, weights: ThreatWeights | None = None):
        self.weights = weights or ThreatWeights()

    def threat_score(self, attacker: PlayerState, target: PlayerState) -> float:
        w = self.weights
        score = 0.0
        if target.hp == 1:
            score += w.finishing_blow
        else:
            score += (target.max_hp - target.hp) * w.missing_hp
        score += target.hand.count * w.hand_size
        if target.equipment.armor and not attacker.character.passives.pierces_immunity:
            score += w.armor
        if target.equipment.defense_mount:
            score += w.defense_mount
        if target.is_human:
            score += w.human_seat
        return score

    def rank(self, attacker: PlayerState, candidates: list[PlayerState]) -> list[PlayerState]:
        """Highest threat first; ties keep seat order."""
        return sorted(candidates, key=lambda t: -self.threat_score(attacker, t))

    def best_target(self, attacker: PlayerState, candidates: list[PlayerState]) -> PlayerState | None:
        ranked = self.rank(attacker, candidates)
        return ranked[0] if ranked else None


def card_value(card: PlayingCard) -> int:
    """How much a bot wants to keep a card (heal 10 ... other 1)."""
    return keep_value(card.kind)

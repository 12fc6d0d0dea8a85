"""
Bots module - AI opponents.

Provides:
- BotPolicy: Interface for bot decision-making
- ThreatEvaluator: Ranks opponents as targets
- HeuristicBot: The priority-list Ninja Clash opponent
- RandomPolicy / FirstLegalPolicy: Baselines for testing
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy
from .evaluator import ThreatEvaluator, ThreatWeights, card_value
from .ninja_bot import HeuristicBot

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "ThreatEvaluator",
    "ThreatWeights",
    "card_value",
    "HeuristicBot",
]

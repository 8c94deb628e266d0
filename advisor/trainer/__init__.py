"""Practice quiz bookkeeping."""

from advisor.trainer.scenarios import Scenario, generate_scenario
from advisor.trainer.stats import DecisionLog, GameStats

__all__ = [
    "Scenario",
    "generate_scenario",
    "DecisionLog",
    "GameStats",
]

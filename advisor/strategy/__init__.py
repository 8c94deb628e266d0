"""Strategy tables, resolution and decision scoring."""

from advisor.hand import classify_hand, evaluate_hand
from advisor.strategy.rules import RuleSet
from advisor.strategy.tables import StrategyCode, TableSet, lookup_code, select_tables
from advisor.strategy.basic import (
    Action,
    adjust_for_legality,
    legal_actions,
    recommend,
    resolve_by_rule,
)
from advisor.strategy.explain import explain
from advisor.strategy.decision import Decision, decide
from advisor.strategy.engine import BasicStrategy

__all__ = [
    "RuleSet",
    "StrategyCode",
    "TableSet",
    "Action",
    "Decision",
    "BasicStrategy",
    "evaluate_hand",
    "classify_hand",
    "lookup_code",
    "select_tables",
    "resolve_by_rule",
    "recommend",
    "legal_actions",
    "adjust_for_legality",
    "explain",
    "decide",
]

"""Basic strategy actions and rule-driven resolution of table codes."""

from enum import Enum, auto

from advisor.cards import Card
from advisor.hand import Hand, HandType, classify_hand
from advisor.strategy.rules import RuleSet
from advisor.strategy.tables import StrategyCode, lookup_code


class Action(Enum):
    """Possible player actions."""

    HIT = auto()
    STAND = auto()
    DOUBLE = auto()
    SPLIT = auto()
    SURRENDER = auto()

    def __str__(self) -> str:
        return self.name

    @property
    def label(self) -> str:
        """Return the display label, e.g. 'Double'."""
        return self.name.title()


def resolve_by_rule(code: StrategyCode, rules: RuleSet) -> Action:
    """
    Resolve a table code into a concrete action under the rules.

    Only rule flags are consulted. Whether the hand can still double,
    split or surrender is decided later by adjust_for_legality.
    """
    if code == StrategyCode.HIT:
        return Action.HIT
    if code == StrategyCode.STAND:
        return Action.STAND
    if code in (StrategyCode.DOUBLE_OR_HIT, StrategyCode.DOUBLE_OR_STAND):
        return Action.DOUBLE
    if code in (StrategyCode.SPLIT, StrategyCode.SPLIT_OR_DOUBLE):
        return Action.SPLIT
    if code == StrategyCode.SPLIT_IF_DAS_OR_HIT:
        return Action.SPLIT if rules.double_after_split else Action.HIT
    if code == StrategyCode.SURRENDER_OR_HIT:
        return Action.SURRENDER if rules.late_surrender else Action.HIT
    if code == StrategyCode.SURRENDER_OR_STAND:
        return Action.SURRENDER if rules.late_surrender else Action.STAND
    if code == StrategyCode.SURRENDER_OR_SPLIT:
        return Action.SURRENDER if rules.late_surrender else Action.SPLIT
    return Action.HIT


def recommend(hand: Hand, dealer_upcard: Card, rules: RuleSet) -> Action:
    """Return the basic strategy action for a hand against an upcard."""
    return resolve_by_rule(lookup_code(hand, dealer_upcard, rules), rules)


def legal_actions(hand: Hand, rules: RuleSet) -> frozenset[Action]:
    """
    Return the actions available on this hand.

    Hit and stand are always allowed. Double and surrender need exactly
    two cards (surrender also needs the rule), split needs a two-card pair.
    """
    actions = {Action.HIT, Action.STAND}
    if len(hand) == 2:
        actions.add(Action.DOUBLE)
        if classify_hand(hand) == HandType.PAIR:
            actions.add(Action.SPLIT)
        if rules.late_surrender:
            actions.add(Action.SURRENDER)
    return frozenset(actions)


def adjust_for_legality(action: Action, legal: frozenset[Action]) -> Action:
    """Fall back to hit when the recommended action is not available."""
    return action if action in legal else Action.HIT

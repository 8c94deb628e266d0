"""Rule-bound basic strategy advisor."""

from advisor.cards import Card, Rank
from advisor.hand import Hand, HandType
from advisor.strategy.basic import Action, legal_actions, recommend
from advisor.strategy.decision import Decision, decide
from advisor.strategy.explain import explain
from advisor.strategy.rules import RuleSet
from advisor.strategy.tables import StrategyCode, TableSet, lookup_code, select_tables


class BasicStrategy:
    """
    Basic strategy advisor for one rule set.

    Tables are shared module constants, so creating many instances is
    cheap and instances may be used from any number of callers.
    """

    def __init__(self, rules: RuleSet | None = None) -> None:
        """
        Initialize basic strategy for given rules.

        Args:
            rules: Rule set to advise for. Uses default if None.
        """
        self.rules = rules or RuleSet()

    @property
    def tables(self) -> TableSet:
        """Return the table set selected by the rules."""
        return select_tables(self.rules)

    def code(self, hand: Hand, dealer_upcard: Card) -> StrategyCode:
        """Return the raw table code for a hand."""
        return lookup_code(hand, dealer_upcard, self.rules)

    def recommend(self, hand: Hand, dealer_upcard: Card) -> Action:
        """Return the recommended action."""
        return recommend(hand, dealer_upcard, self.rules)

    def legal_actions(self, hand: Hand) -> frozenset[Action]:
        """Return the actions available on a hand."""
        return legal_actions(hand, self.rules)

    def explain(self, hand: Hand, dealer_upcard: Card, action: Action) -> str:
        """Explain an action for a hand."""
        return explain(hand, dealer_upcard, action)

    def decide(self, hand: Hand, dealer_upcard: Card, chosen_action: Action) -> Decision:
        """Score a chosen action."""
        return decide(hand, dealer_upcard, chosen_action, self.rules)

    def chart(self, hand_type: HandType) -> dict[str, list[str]]:
        """
        Return one table as rows of code strings for display.

        Row labels are the hard or soft total, or the pair rank.
        """
        tables = self.tables
        if hand_type == HandType.PAIR:
            rows = tables.pairs.items()
        elif hand_type == HandType.SOFT:
            rows = tables.soft.items()
        else:
            rows = tables.hard.items()

        chart: dict[str, list[str]] = {}
        for key, row in rows:
            label = str(key) if not isinstance(key, Rank) else key.value
            chart[label] = [code.value for code in row]
        return chart

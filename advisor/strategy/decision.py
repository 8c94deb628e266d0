"""Scoring a player's action against basic strategy."""

from dataclasses import dataclass

from advisor.cards import Card, Rank
from advisor.hand import Hand, evaluate_hand
from advisor.strategy.basic import Action, adjust_for_legality, legal_actions, recommend
from advisor.strategy.explain import explain
from advisor.strategy.rules import RuleSet


@dataclass(frozen=True)
class Decision:
    """Verdict for a single player decision."""

    chosen_action: Action
    correct_action: Action
    was_correct: bool
    explanation: str
    hand_total: int
    dealer_upcard_rank: Rank


def decide(
    hand: Hand,
    dealer_upcard: Card,
    chosen_action: Action,
    rules: RuleSet,
) -> Decision:
    """
    Score a chosen action against basic strategy.

    When the table recommends an action this hand cannot take (doubling
    a three-card hand, for instance) the correct action becomes hit. The
    explanation still describes the table recommendation.

    Args:
        hand: The player's hand
        dealer_upcard: The dealer's visible card
        chosen_action: The action the player took
        rules: Table rules in force

    Returns:
        The decision verdict
    """
    recommended = recommend(hand, dealer_upcard, rules)
    correct = adjust_for_legality(recommended, legal_actions(hand, rules))

    return Decision(
        chosen_action=chosen_action,
        correct_action=correct,
        was_correct=chosen_action == correct,
        explanation=explain(hand, dealer_upcard, recommended),
        hand_total=evaluate_hand(hand).total,
        dealer_upcard_rank=dealer_upcard.rank,
    )

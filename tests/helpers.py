"""Hand building helpers shared by the test modules."""

from advisor.cards import Card, Rank, Suit
from advisor.hand import Hand
from advisor.strategy import RuleSet


def make_hand(*ranks: Rank) -> Hand:
    """Build a hand from ranks, cycling through the suits."""
    suits = list(Suit)
    return Hand(tuple(Card(rank, suits[i % len(suits)]) for i, rank in enumerate(ranks)))


def upcard(rank: Rank) -> Card:
    """A dealer upcard of the given rank."""
    return Card(rank, Suit.CLUBS)


ALL_RULE_COMBINATIONS = [
    RuleSet(dealer_hits_soft_17=h17, double_after_split=das, late_surrender=ls)
    for h17 in (False, True)
    for das in (False, True)
    for ls in (False, True)
]

DEALER_RANKS = [
    Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE, Rank.SIX,
    Rank.SEVEN, Rank.EIGHT, Rank.NINE, Rank.TEN, Rank.ACE,
]

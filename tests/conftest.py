"""Pytest fixtures for strategy advisor tests."""

import pytest
from random import Random

from advisor.cards import Card, InfiniteShoe, Rank, Suit
from advisor.hand import Hand
from advisor.strategy import BasicStrategy, RuleSet


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def shoe(rng):
    """An infinite shoe with a seeded generator."""
    return InfiniteShoe(rng=rng)


@pytest.fixture
def empty_hand():
    """An empty player hand."""
    return Hand()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return Hand.of(Card(Rank.ACE, Suit.SPADES), Card(Rank.KING, Suit.HEARTS))


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return Hand.of(Card(Rank.ACE, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS))


@pytest.fixture
def hard_16_hand():
    """A hard 16 hand (10-6)."""
    return Hand.of(Card(Rank.TEN, Suit.SPADES), Card(Rank.SIX, Suit.HEARTS))


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return Hand.of(Card(Rank.EIGHT, Suit.SPADES), Card(Rank.EIGHT, Suit.HEARTS))


@pytest.fixture
def pair_aces_hand():
    """A pair of aces hand."""
    return Hand.of(Card(Rank.ACE, Suit.HEARTS), Card(Rank.ACE, Suit.DIAMONDS))


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return Hand.of(
        Card(Rank.TEN, Suit.SPADES),
        Card(Rank.SIX, Suit.HEARTS),
        Card(Rank.KING, Suit.CLUBS),
    )


@pytest.fixture
def rules():
    """Default ruleset (S17, DAS, late surrender)."""
    return RuleSet()


@pytest.fixture
def no_surrender_rules():
    """S17 rules without late surrender."""
    return RuleSet(late_surrender=False)


@pytest.fixture
def h17_rules():
    """Dealer hits soft 17."""
    return RuleSet(dealer_hits_soft_17=True)


@pytest.fixture
def basic_strategy(rules):
    """Basic strategy for default rules."""
    return BasicStrategy(rules)

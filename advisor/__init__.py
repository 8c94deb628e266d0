"""Blackjack basic strategy advisor - 100% UI-agnostic."""

from advisor.cards import Card, InfiniteShoe, Rank, Suit
from advisor.hand import Hand, HandType, HandValue

__all__ = [
    "Card",
    "InfiniteShoe",
    "Rank",
    "Suit",
    "Hand",
    "HandType",
    "HandValue",
]

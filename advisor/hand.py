"""Hand evaluation and classification for blackjack."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from advisor.cards import Card


class HandType(Enum):
    """Strategy category of a hand."""

    PAIR = "pair"
    SOFT = "soft"
    HARD = "hard"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class HandValue:
    """Best total of a hand and whether an ace still counts as 11."""

    total: int
    is_soft: bool


def evaluate_hand(hand: "Hand | Iterable[Card]") -> HandValue:
    """
    Calculate the best value of a hand.

    Every ace starts at 11 and is demoted to 1, one at a time, while the
    total is over 21. The hand is soft if any ace is left at 11, so a
    busted hand is always hard. An empty hand evaluates to a hard 0.
    """
    total = 0
    soft_aces = 0

    for card in hand:
        if card.is_ace:
            soft_aces += 1
        total += card.value

    # Reduce aces from 11 to 1 as needed
    while total > 21 and soft_aces > 0:
        total -= 10
        soft_aces -= 1

    return HandValue(total=total, is_soft=soft_aces > 0)


def classify_hand(hand: "Hand | Iterable[Card]") -> HandType:
    """
    Classify a hand as a pair, soft or hard.

    A pair is exactly two cards of equal blackjack value, so any two
    ten-value cards qualify; pairs win over soft. A hand is soft when one
    ace can count as 11 without busting, which matches evaluate_hand.
    """
    cards = tuple(hand)

    if len(cards) == 2 and cards[0].value == cards[1].value:
        return HandType.PAIR

    if any(card.is_ace for card in cards):
        hard_total = sum(1 if card.is_ace else card.value for card in cards)
        if hard_total + 10 <= 21:
            return HandType.SOFT

    return HandType.HARD


@dataclass(frozen=True, slots=True)
class Hand:
    """An immutable, ordered blackjack hand."""

    cards: tuple[Card, ...] = ()

    @classmethod
    def of(cls, *cards: Card) -> "Hand":
        """Create a hand from the given cards."""
        return cls(tuple(cards))

    @classmethod
    def from_string(cls, s: str) -> "Hand":
        """Create a hand from space separated cards, e.g. 'A♠ 6♥'."""
        return cls(tuple(Card.from_string(part) for part in s.split()))

    def with_card(self, card: Card) -> "Hand":
        """Return a new hand with the card appended."""
        return Hand(self.cards + (card,))

    @property
    def value(self) -> int:
        """Return the best total."""
        return evaluate_hand(self).total

    @property
    def is_soft(self) -> bool:
        """Check if an ace is still counted as 11."""
        return evaluate_hand(self).is_soft

    @property
    def hand_type(self) -> HandType:
        """Return the strategy category of the hand."""
        return classify_hand(self)

    @property
    def is_pair(self) -> bool:
        """Check if the hand is a two-card pair."""
        return self.hand_type == HandType.PAIR

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is a natural blackjack (21 with 2 cards)."""
        return len(self.cards) == 2 and self.value == 21

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > 21

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        result = evaluate_hand(self)
        value_str = f"({result.total})"
        if result.is_soft:
            value_str = f"(soft {result.total})"
        if self.is_blackjack:
            value_str = "(BLACKJACK)"
        if result.total > 21:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"

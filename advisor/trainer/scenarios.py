"""Random quiz scenarios drawn from an infinite shoe."""

from dataclasses import dataclass
from random import Random

from advisor.cards import Card, InfiniteShoe, Rank, Suit
from advisor.hand import Hand

SOFT_CHANCE = 0.25

# Hard totals are weighted towards the interesting decisions (9-17)
HARD_TOTAL_WEIGHTS: dict[int, int] = {
    5: 1, 6: 1, 7: 1, 8: 2,
    9: 3, 10: 4, 11: 4, 12: 4,
    13: 3, 14: 3, 15: 4, 16: 4,
    17: 3, 18: 2, 19: 1, 20: 1,
}

TEN_VALUE_RANKS = (Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING)


@dataclass(frozen=True)
class Scenario:
    """A quiz question: the player's hand and the dealer upcard."""

    player_hand: Hand
    dealer_upcard: Card


def _card_with_value(value: int, rng: Random) -> Card:
    """Draw a card worth the given value (1 and 11 are aces)."""
    if value in (1, 11):
        rank = Rank.ACE
    elif value == 10:
        rank = rng.choice(TEN_VALUE_RANKS)
    else:
        rank = Rank(str(value))
    return Card(rank, rng.choice(list(Suit)))


def _pair_hand(rng: Random) -> Hand:
    """Two cards of one rank in different suits."""
    rank = rng.choice(list(Rank))
    first, second = rng.sample(list(Suit), 2)
    return Hand.of(Card(rank, first), Card(rank, second))


def _soft_hand(rng: Random) -> Hand:
    """An ace with a 2-9 in random order. A,10 is blackjack and never asked."""
    ace = Card(Rank.ACE, rng.choice(list(Suit)))
    other = _card_with_value(rng.randint(2, 9), rng)
    if rng.random() < 0.5:
        return Hand.of(ace, other)
    return Hand.of(other, ace)


def _hard_hand(total: int, rng: Random) -> Hand:
    """Two non-ace cards adding up to the total."""
    low = max(2, total - 10)
    high = min(10, total - 2)
    first = rng.randint(low, high)
    return Hand.of(_card_with_value(first, rng), _card_with_value(total - first, rng))


def _weighted_hard_total(rng: Random) -> int:
    totals = list(HARD_TOTAL_WEIGHTS)
    return rng.choices(totals, weights=[HARD_TOTAL_WEIGHTS[t] for t in totals])[0]


def generate_scenario(
    rng: Random | None = None,
    pair_chance: float = 0.25,
) -> Scenario:
    """
    Generate a random scenario for the quiz.

    Args:
        rng: Random number generator
        pair_chance: Probability of dealing a pair (0.0-0.75). Soft hands
            take the next 25%, hard hands the rest.

    Returns:
        A two-card player hand and a uniformly drawn dealer upcard
    """
    if not 0.0 <= pair_chance <= 1.0 - SOFT_CHANCE:
        raise ValueError(f"pair_chance must be between 0 and {1.0 - SOFT_CHANCE}")

    rng = rng or Random()
    roll = rng.random()

    if roll < pair_chance:
        hand = _pair_hand(rng)
    elif roll < pair_chance + SOFT_CHANCE:
        hand = _soft_hand(rng)
    else:
        hand = _hard_hand(_weighted_hard_total(rng), rng)

    return Scenario(player_hand=hand, dealer_upcard=InfiniteShoe(rng).draw())

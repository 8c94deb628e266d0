"""Basic strategy tables for blackjack."""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from advisor.cards import Card, Rank
from advisor.hand import Hand, HandType, classify_hand, evaluate_hand
from advisor.strategy.rules import RuleSet


class StrategyCode(Enum):
    """Table cell codes. Resolved against the rules before reaching callers."""

    HIT = "H"
    STAND = "S"
    DOUBLE_OR_HIT = "D"
    DOUBLE_OR_STAND = "Ds"
    SPLIT = "P"
    SPLIT_IF_DAS_OR_HIT = "Ph"
    SPLIT_OR_DOUBLE = "Pd"
    SURRENDER_OR_HIT = "Rh"
    SURRENDER_OR_STAND = "Rs"
    SURRENDER_OR_SPLIT = "Rp"

    def __str__(self) -> str:
        return self.value


# Dealer upcard columns: 2, 3, 4, 5, 6, 7, 8, 9, 10, A
DEALER_COLUMNS: tuple[str, ...] = ("2", "3", "4", "5", "6", "7", "8", "9", "10", "A")

HARD_RANGE = (5, 20)
SOFT_RANGE = (13, 21)

Row = tuple[StrategyCode, ...]

H = StrategyCode.HIT
S = StrategyCode.STAND
D = StrategyCode.DOUBLE_OR_HIT
Ds = StrategyCode.DOUBLE_OR_STAND
P = StrategyCode.SPLIT
Ph = StrategyCode.SPLIT_IF_DAS_OR_HIT
Rh = StrategyCode.SURRENDER_OR_HIT
Rs = StrategyCode.SURRENDER_OR_STAND
Rp = StrategyCode.SURRENDER_OR_SPLIT

#                  2   3   4   5   6   7   8   9   10  A
_HARD_S17: dict[int, Row] = {
    5: (H, H, H, H, H, H, H, H, H, H),
    6: (H, H, H, H, H, H, H, H, H, H),
    7: (H, H, H, H, H, H, H, H, H, H),
    8: (H, H, H, H, H, H, H, H, H, H),
    9: (H, D, D, D, D, H, H, H, H, H),
    10: (D, D, D, D, D, D, D, D, H, H),
    11: (D, D, D, D, D, D, D, D, D, D),
    12: (H, H, S, S, S, H, H, H, H, H),
    13: (S, S, S, S, S, H, H, H, H, H),
    14: (S, S, S, S, S, H, H, H, H, H),
    15: (S, S, S, S, S, H, H, H, Rh, Rh),
    16: (S, S, S, S, S, H, H, Rh, Rh, Rh),
    17: (S, S, S, S, S, S, S, S, S, Rs),
    18: (S, S, S, S, S, S, S, S, S, S),
    19: (S, S, S, S, S, S, S, S, S, S),
    20: (S, S, S, S, S, S, S, S, S, S),
}

_SOFT_S17: dict[int, Row] = {
    13: (H, H, H, D, D, H, H, H, H, H),  # A,2
    14: (H, H, H, D, D, H, H, H, H, H),  # A,3
    15: (H, H, D, D, D, H, H, H, H, H),  # A,4
    16: (H, H, D, D, D, H, H, H, H, H),  # A,5
    17: (H, D, D, D, D, H, H, H, H, H),  # A,6
    18: (Ds, Ds, Ds, Ds, Ds, S, S, H, H, H),  # A,7
    19: (S, S, S, S, Ds, S, S, S, S, S),  # A,8
    20: (S, S, S, S, S, S, S, S, S, S),  # A,9
    21: (S, S, S, S, S, S, S, S, S, S),  # A,10
}

_PAIRS_S17_DAS: dict[Rank, Row] = {
    Rank.TWO: (Ph, Ph, P, P, P, P, H, H, H, H),
    Rank.THREE: (Ph, Ph, P, P, P, P, H, H, H, H),
    Rank.FOUR: (H, H, H, Ph, Ph, H, H, H, H, H),
    Rank.FIVE: (D, D, D, D, D, D, D, D, H, H),  # never split 5s
    Rank.SIX: (Ph, P, P, P, P, H, H, H, H, H),
    Rank.SEVEN: (P, P, P, P, P, P, H, H, H, H),
    Rank.EIGHT: (P, P, P, P, P, P, P, P, P, Rp),
    Rank.NINE: (P, P, P, P, P, S, P, P, S, S),
    Rank.TEN: (S, S, S, S, S, S, S, S, S, S),  # never split 10s
    Rank.JACK: (S, S, S, S, S, S, S, S, S, S),
    Rank.QUEEN: (S, S, S, S, S, S, S, S, S, S),
    Rank.KING: (S, S, S, S, S, S, S, S, S, S),
    Rank.ACE: (P, P, P, P, P, P, P, P, P, P),  # always split aces
}

# Variants are stored as (row key, dealer column) -> code overrides of a base table.
_HARD_H17_OVERRIDES: dict[tuple[int, str], StrategyCode] = {}

_SOFT_H17_OVERRIDES: dict[tuple[int, str], StrategyCode] = {
    (18, "A"): S,
}

_PAIRS_NO_DAS_OVERRIDES: dict[tuple[Rank, str], StrategyCode] = {
    (Rank.TWO, "2"): H,
    (Rank.TWO, "3"): H,
    (Rank.THREE, "2"): H,
    (Rank.THREE, "3"): H,
    (Rank.FOUR, "5"): H,
    (Rank.FOUR, "6"): H,
    (Rank.SIX, "2"): H,
}

_PAIRS_H17_OVERRIDES: dict[tuple[Rank, str], StrategyCode] = {
    (Rank.EIGHT, "A"): Rp,
}


def _apply_overrides(base: Mapping, overrides: Mapping) -> Mapping:
    """Materialize a read-only copy of a base table with overridden cells."""
    table = {key: list(row) for key, row in base.items()}
    for (key, column), code in overrides.items():
        table[key][DEALER_COLUMNS.index(column)] = code
    return MappingProxyType({key: tuple(row) for key, row in table.items()})


@dataclass(frozen=True)
class TableSet:
    """The hard, soft and pair tables in force for one rule combination."""

    name: str
    hard: Mapping[int, Row]
    soft: Mapping[int, Row]
    pairs: Mapping[Rank, Row]


HARD_S17 = _apply_overrides(_HARD_S17, {})
HARD_H17 = _apply_overrides(_HARD_S17, _HARD_H17_OVERRIDES)
SOFT_S17 = _apply_overrides(_SOFT_S17, {})
SOFT_H17 = _apply_overrides(_SOFT_S17, _SOFT_H17_OVERRIDES)
PAIRS_S17_DAS = _apply_overrides(_PAIRS_S17_DAS, {})
PAIRS_S17_NO_DAS = _apply_overrides(_PAIRS_S17_DAS, _PAIRS_NO_DAS_OVERRIDES)
PAIRS_H17_DAS = _apply_overrides(PAIRS_S17_DAS, _PAIRS_H17_OVERRIDES)
PAIRS_H17_NO_DAS = _apply_overrides(PAIRS_S17_NO_DAS, _PAIRS_H17_OVERRIDES)

# Keyed by (dealer_hits_soft_17, double_after_split)
TABLE_SETS: Mapping[tuple[bool, bool], TableSet] = MappingProxyType({
    (False, True): TableSet("S17 DAS", HARD_S17, SOFT_S17, PAIRS_S17_DAS),
    (False, False): TableSet("S17 no DAS", HARD_S17, SOFT_S17, PAIRS_S17_NO_DAS),
    (True, True): TableSet("H17 DAS", HARD_H17, SOFT_H17, PAIRS_H17_DAS),
    (True, False): TableSet("H17 no DAS", HARD_H17, SOFT_H17, PAIRS_H17_NO_DAS),
})


def select_tables(rules: RuleSet) -> TableSet:
    """Return the table set for the given rules."""
    return TABLE_SETS[(rules.dealer_hits_soft_17, rules.double_after_split)]


def dealer_column(upcard: Card | Rank) -> int:
    """Return the table column for a dealer upcard (10, J, Q, K share one)."""
    rank = upcard.rank if isinstance(upcard, Card) else upcard
    if rank.is_ace:
        return DEALER_COLUMNS.index("A")
    return DEALER_COLUMNS.index(str(rank.blackjack_value))


def lookup_code(hand: Hand, dealer_upcard: Card, rules: RuleSet) -> StrategyCode:
    """
    Find the table code for a hand against a dealer upcard.

    Two-card pairs use the pair table keyed by the first card's rank.
    Otherwise a soft hand uses the soft table and falls back to hit when
    its total is off the chart; everything else uses the hard table with
    the total clamped into range.
    """
    tables = select_tables(rules)
    column = dealer_column(dealer_upcard)

    if classify_hand(hand) == HandType.PAIR and len(hand) == 2:
        row = tables.pairs.get(hand.cards[0].rank)
        return row[column] if row else StrategyCode.HIT

    result = evaluate_hand(hand)
    if result.is_soft:
        low, high = SOFT_RANGE
        if not low <= result.total <= high:
            return StrategyCode.HIT
        row = tables.soft.get(result.total)
        return row[column] if row else StrategyCode.HIT

    low, high = HARD_RANGE
    row = tables.hard.get(min(high, max(low, result.total)))
    return row[column] if row else StrategyCode.HIT

"""Blackjack rule variations."""

from dataclasses import dataclass

SUPPORTED_DECK_COUNTS = (1, 2, 4, 6, 8)


@dataclass(frozen=True)
class RuleSet:
    """
    Blackjack table rules configuration.

    Only the dealer soft-17 rule selects between table variants; double
    after split and late surrender decide how table codes resolve. Deck
    count and peeking are informational and never change a recommendation.
    """

    # Dealer rules
    dealer_hits_soft_17: bool = False  # H17 vs S17

    # Double down rules
    double_after_split: bool = True  # DAS

    # Surrender rules
    late_surrender: bool = True

    # Deck configuration
    num_decks: int = 6

    # Peek rules (dealer checks for blackjack)
    dealer_peeks: bool = True

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.num_decks not in SUPPORTED_DECK_COUNTS:
            raise ValueError(
                f"num_decks must be one of {SUPPORTED_DECK_COUNTS}, got {self.num_decks}"
            )

    def describe(self) -> str:
        """Return the dealer rule as printed on the table felt."""
        if self.dealer_hits_soft_17:
            return "DEALER MUST HIT SOFT 17"
        return "DEALER MUST STAND ON ALL 17"

    @classmethod
    def vegas_strip(cls) -> "RuleSet":
        """Standard Vegas Strip rules."""
        return cls(
            dealer_hits_soft_17=False,
            double_after_split=True,
            late_surrender=True,
            num_decks=6,
        )

    @classmethod
    def downtown_vegas(cls) -> "RuleSet":
        """Downtown Las Vegas rules (typically H17)."""
        return cls(
            dealer_hits_soft_17=True,
            double_after_split=True,
            late_surrender=True,
            num_decks=6,
        )

    @classmethod
    def single_deck(cls) -> "RuleSet":
        """Single deck rules."""
        return cls(
            dealer_hits_soft_17=True,
            double_after_split=False,
            late_surrender=False,
            num_decks=1,
        )

    @classmethod
    def european(cls) -> "RuleSet":
        """European no-hole-card rules."""
        return cls(
            dealer_hits_soft_17=False,
            double_after_split=True,
            late_surrender=False,
            num_decks=6,
            dealer_peeks=False,
        )

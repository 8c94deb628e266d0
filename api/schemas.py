"""Pydantic schemas for API requests and responses."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from advisor.cards import Card, Rank, Suit
from advisor.hand import Hand
from advisor.strategy import RuleSet

RankName = Literal["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]
SuitName = Literal["hearts", "diamonds", "clubs", "spades"]
ActionName = Literal["HIT", "STAND", "DOUBLE", "SPLIT", "SURRENDER"]


class CardModel(BaseModel):
    """Card representation."""

    rank: RankName
    suit: SuitName

    def to_card(self) -> Card:
        """Convert to an engine card."""
        return Card(Rank(self.rank), Suit(self.suit))

    @classmethod
    def from_card(cls, card: Card) -> "CardModel":
        """Build from an engine card."""
        return cls(rank=card.rank.value, suit=card.suit.value)


class RulesModel(BaseModel):
    """Table rules."""

    model_config = ConfigDict(from_attributes=True)

    dealer_hits_soft_17: bool = False
    double_after_split: bool = True
    late_surrender: bool = True
    num_decks: Literal[1, 2, 4, 6, 8] = 6
    dealer_peeks: bool = True

    def to_rules(self) -> RuleSet:
        """Convert to an engine rule set."""
        return RuleSet(
            dealer_hits_soft_17=self.dealer_hits_soft_17,
            double_after_split=self.double_after_split,
            late_surrender=self.late_surrender,
            num_decks=self.num_decks,
            dealer_peeks=self.dealer_peeks,
        )


def cards_to_hand(cards: list[CardModel]) -> Hand:
    """Build an engine hand from request cards."""
    return Hand(tuple(c.to_card() for c in cards))


# Strategy schemas
class EvaluateRequest(BaseModel):
    """Request to evaluate a hand."""

    cards: list[CardModel] = Field(..., min_length=1)


class EvaluateResponse(BaseModel):
    """Hand evaluation result."""

    total: int
    is_soft: bool
    hand_type: Literal["pair", "soft", "hard"]


class RecommendRequest(BaseModel):
    """Request for the basic strategy action."""

    player_cards: list[CardModel] = Field(..., min_length=1)
    dealer_upcard: CardModel
    rules: RulesModel = Field(default_factory=RulesModel)


class RecommendResponse(BaseModel):
    """Recommended action with context."""

    action: ActionName
    code: str
    hand_type: Literal["pair", "soft", "hard"]
    total: int
    is_soft: bool
    legal_actions: list[ActionName]
    explanation: str


class DecideRequest(BaseModel):
    """Request to score a chosen action."""

    player_cards: list[CardModel] = Field(..., min_length=1)
    dealer_upcard: CardModel
    chosen_action: ActionName
    rules: RulesModel = Field(default_factory=RulesModel)


class DecisionResponse(BaseModel):
    """Decision verdict."""

    chosen_action: ActionName
    correct_action: ActionName
    was_correct: bool
    explanation: str
    hand_total: int
    dealer_upcard_rank: RankName


class ChartResponse(BaseModel):
    """Strategy tables as rows of codes, columns 2-10 then A."""

    name: str
    dealer_columns: list[str]
    hard: dict[str, list[str]]
    soft: dict[str, list[str]]
    pairs: dict[str, list[str]]


# Training schemas
class NewSessionRequest(BaseModel):
    """Request to start a practice session."""

    rules: RulesModel | None = None


class NewSessionResponse(BaseModel):
    """A new practice session."""

    session_id: str
    rules: RulesModel


class ScenarioResponse(BaseModel):
    """A quiz question."""

    player_cards: list[CardModel]
    dealer_upcard: CardModel
    player_total: int
    is_soft: bool
    legal_actions: list[ActionName]
    rules_banner: str


class AnswerRequest(BaseModel):
    """The player's answer to the pending scenario."""

    action: ActionName


class StatsResponse(BaseModel):
    """Running practice statistics."""

    correct: int
    wrong: int
    current_streak: int
    best_streak: int
    hands_played: int
    accuracy: int


class AnswerResponse(BaseModel):
    """Verdict for an answer plus the updated statistics."""

    decision: DecisionResponse
    stats: StatsResponse
    log_summary: str

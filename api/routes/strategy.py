"""Strategy advice API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Query

from api.schemas import (
    ChartResponse,
    DecideRequest,
    DecisionResponse,
    EvaluateRequest,
    EvaluateResponse,
    RecommendRequest,
    RecommendResponse,
    cards_to_hand,
)
from advisor.hand import HandType, classify_hand, evaluate_hand
from advisor.strategy import Action, BasicStrategy, Decision, RuleSet
from advisor.strategy.tables import DEALER_COLUMNS

router = APIRouter()


def action_names(actions: frozenset[Action]) -> list[str]:
    """List action names in enum order."""
    return [action.name for action in Action if action in actions]


def decision_response(decision: Decision) -> DecisionResponse:
    """Convert a decision verdict to its response schema."""
    return DecisionResponse(
        chosen_action=decision.chosen_action.name,
        correct_action=decision.correct_action.name,
        was_correct=decision.was_correct,
        explanation=decision.explanation,
        hand_total=decision.hand_total,
        dealer_upcard_rank=decision.dealer_upcard_rank.value,
    )


@router.post("/evaluate")
async def evaluate(request: EvaluateRequest) -> EvaluateResponse:
    """Evaluate a hand's total, softness and category."""
    hand = cards_to_hand(request.cards)
    result = evaluate_hand(hand)
    return EvaluateResponse(
        total=result.total,
        is_soft=result.is_soft,
        hand_type=classify_hand(hand).value,
    )


@router.post("/recommend")
async def recommend(request: RecommendRequest) -> RecommendResponse:
    """Get the basic strategy action for a hand."""
    strategy = BasicStrategy(request.rules.to_rules())
    hand = cards_to_hand(request.player_cards)
    upcard = request.dealer_upcard.to_card()

    action = strategy.recommend(hand, upcard)
    result = evaluate_hand(hand)

    return RecommendResponse(
        action=action.name,
        code=strategy.code(hand, upcard).value,
        hand_type=classify_hand(hand).value,
        total=result.total,
        is_soft=result.is_soft,
        legal_actions=action_names(strategy.legal_actions(hand)),
        explanation=strategy.explain(hand, upcard, action),
    )


@router.post("/decide")
async def decide(request: DecideRequest) -> DecisionResponse:
    """Score a chosen action against basic strategy."""
    strategy = BasicStrategy(request.rules.to_rules())
    decision = strategy.decide(
        cards_to_hand(request.player_cards),
        request.dealer_upcard.to_card(),
        Action[request.chosen_action],
    )
    return decision_response(decision)


@router.get("/chart")
async def chart(
    dealer_hits_soft_17: Annotated[bool, Query()] = False,
    double_after_split: Annotated[bool, Query()] = True,
    late_surrender: Annotated[bool, Query()] = True,
) -> ChartResponse:
    """Get the strategy tables in force for the given rules."""
    strategy = BasicStrategy(
        RuleSet(
            dealer_hits_soft_17=dealer_hits_soft_17,
            double_after_split=double_after_split,
            late_surrender=late_surrender,
        )
    )
    return ChartResponse(
        name=strategy.tables.name,
        dealer_columns=list(DEALER_COLUMNS),
        hard=strategy.chart(HandType.HARD),
        soft=strategy.chart(HandType.SOFT),
        pairs=strategy.chart(HandType.PAIR),
    )

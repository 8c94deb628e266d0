"""Practice quiz API endpoints."""

import logging
from random import Random
from typing import Annotated, Any

from fastapi import APIRouter, Header, HTTPException

from api.routes.strategy import action_names, decision_response
from api.schemas import (
    AnswerRequest,
    AnswerResponse,
    CardModel,
    NewSessionRequest,
    NewSessionResponse,
    RulesModel,
    ScenarioResponse,
    StatsResponse,
)
from api.session import (
    SESSION_KEY_DECISIONS,
    SESSION_KEY_RULES,
    SESSION_KEY_SCENARIO,
    SESSION_KEY_STATS,
    create_session,
    deserialize_decision,
    deserialize_rules,
    deserialize_scenario,
    get_session,
    serialize_decision,
    serialize_scenario,
    update_session,
)
from advisor.hand import evaluate_hand
from advisor.strategy import Action, BasicStrategy
from advisor.trainer import DecisionLog, GameStats, generate_scenario
from config import config

logger = logging.getLogger(__name__)

router = APIRouter()


async def load_session(session_id: str) -> dict[str, Any]:
    """Load session data or fail with 404."""
    data = await get_session(session_id)
    if data is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return data


def stats_response(stats: GameStats) -> StatsResponse:
    """Convert statistics to their response schema."""
    return StatsResponse(
        correct=stats.correct,
        wrong=stats.wrong,
        current_streak=stats.current_streak,
        best_streak=stats.best_streak,
        hands_played=stats.hands_played,
        accuracy=stats.accuracy,
    )


@router.post("/new")
async def new_session(request: NewSessionRequest | None = None) -> NewSessionResponse:
    """Start a practice session."""
    rules = (
        request.rules.to_rules()
        if request is not None and request.rules is not None
        else config.trainer.default_rules()
    )
    session_id = await create_session(rules)
    return NewSessionResponse(session_id=session_id, rules=RulesModel.model_validate(rules))


@router.post("/scenario")
async def scenario(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> ScenarioResponse:
    """Deal a new quiz question and keep it as the pending one."""
    data = await load_session(session_id)
    rules = deserialize_rules(data[SESSION_KEY_RULES])

    question = generate_scenario(Random(), pair_chance=config.trainer.pair_chance)
    data[SESSION_KEY_SCENARIO] = serialize_scenario(question)
    await update_session(session_id, data)

    result = evaluate_hand(question.player_hand)
    return ScenarioResponse(
        player_cards=[CardModel.from_card(c) for c in question.player_hand],
        dealer_upcard=CardModel.from_card(question.dealer_upcard),
        player_total=result.total,
        is_soft=result.is_soft,
        legal_actions=action_names(BasicStrategy(rules).legal_actions(question.player_hand)),
        rules_banner=rules.describe(),
    )


@router.post("/answer")
async def answer(
    request: AnswerRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> AnswerResponse:
    """Score the answer to the pending question and update statistics."""
    data = await load_session(session_id)
    if data.get(SESSION_KEY_SCENARIO) is None:
        raise HTTPException(status_code=409, detail="No scenario pending")

    question = deserialize_scenario(data[SESSION_KEY_SCENARIO])
    strategy = BasicStrategy(deserialize_rules(data[SESSION_KEY_RULES]))
    decision = strategy.decide(
        question.player_hand,
        question.dealer_upcard,
        Action[request.action],
    )
    logger.debug(
        "Answer %s for %s vs %s, correct action %s",
        decision.chosen_action,
        question.player_hand,
        question.dealer_upcard,
        decision.correct_action,
    )

    stats = GameStats.from_dict(data[SESSION_KEY_STATS]).record_decision(decision).record_hand()

    log = DecisionLog(
        limit=config.trainer.decision_log_limit,
        entries=[deserialize_decision(d) for d in data.get(SESSION_KEY_DECISIONS, [])],
    )
    log.add(decision)

    data[SESSION_KEY_STATS] = stats.to_dict()
    data[SESSION_KEY_DECISIONS] = [serialize_decision(d) for d in log]
    data[SESSION_KEY_SCENARIO] = None
    await update_session(session_id, data)

    return AnswerResponse(
        decision=decision_response(decision),
        stats=stats_response(stats),
        log_summary=log.summary(),
    )

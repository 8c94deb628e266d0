"""Practice statistics and persisted settings endpoints."""

from typing import Annotated

from fastapi import APIRouter, Header

from api.routes.strategy import decision_response
from api.routes.training import load_session, stats_response
from api.schemas import DecisionResponse, RulesModel, StatsResponse
from api.session import (
    SESSION_KEY_DECISIONS,
    SESSION_KEY_RULES,
    SESSION_KEY_SCENARIO,
    SESSION_KEY_STATS,
    deserialize_decision,
    deserialize_rules,
    serialize_rules,
    update_session,
)
from advisor.trainer import GameStats

router = APIRouter()


@router.get("")
async def get_stats(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> StatsResponse:
    """Get the session's running statistics."""
    data = await load_session(session_id)
    return stats_response(GameStats.from_dict(data[SESSION_KEY_STATS]))


@router.post("/reset")
async def reset_stats(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> StatsResponse:
    """Reset statistics and the decision history."""
    data = await load_session(session_id)
    stats = GameStats()
    data[SESSION_KEY_STATS] = stats.to_dict()
    data[SESSION_KEY_DECISIONS] = []
    await update_session(session_id, data)
    return stats_response(stats)


@router.get("/decisions")
async def get_decisions(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> list[DecisionResponse]:
    """Get the recent decisions, oldest first."""
    data = await load_session(session_id)
    return [
        decision_response(deserialize_decision(d))
        for d in data.get(SESSION_KEY_DECISIONS, [])
    ]


@router.get("/rules")
async def get_rules(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> RulesModel:
    """Get the session's table rules."""
    data = await load_session(session_id)
    return RulesModel.model_validate(deserialize_rules(data[SESSION_KEY_RULES]))


@router.put("/rules")
async def update_rules(
    request: RulesModel,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> RulesModel:
    """Change the session's table rules. A pending question is discarded."""
    data = await load_session(session_id)
    data[SESSION_KEY_RULES] = serialize_rules(request.to_rules())
    data[SESSION_KEY_SCENARIO] = None
    await update_session(session_id, data)
    return request

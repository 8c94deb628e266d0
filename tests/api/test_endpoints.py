"""Tests for API endpoints."""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from advisor.cards import Card, Rank, Suit
from advisor.hand import Hand
from advisor.strategy import Action, BasicStrategy, RuleSet
from api.main import app
from api.session import InMemorySessionStore, set_session_store


@pytest_asyncio.fixture
async def client():
    """Create test client."""
    set_session_store(InMemorySessionStore())
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    set_session_store(None)


async def new_session(client, **rules):
    body = {"rules": rules} if rules else None
    response = await client.post("/api/training/new", json=body)
    assert response.status_code == 200
    return response.json()["session_id"]


def card_json(rank, suit="spades"):
    return {"rank": rank, "suit": suit}


def scenario_hand(data):
    """Rebuild the dealt hand and upcard from a scenario response."""
    cards = [Card(Rank(c["rank"]), Suit(c["suit"])) for c in data["player_cards"]]
    upcard = data["dealer_upcard"]
    return Hand(tuple(cards)), Card(Rank(upcard["rank"]), Suit(upcard["suit"]))


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


class TestStrategyEndpoints:
    """Tests for the stateless strategy endpoints."""

    @pytest.mark.asyncio
    async def test_evaluate(self, client):
        """Test hand evaluation."""
        response = await client.post(
            "/api/strategy/evaluate",
            json={"cards": [card_json("A"), card_json("6", "hearts")]},
        )
        assert response.status_code == 200
        assert response.json() == {"total": 17, "is_soft": True, "hand_type": "soft"}

    @pytest.mark.asyncio
    async def test_evaluate_multi_ace_hand(self, client):
        """Test that A-A-9 is reported soft by both fields."""
        response = await client.post(
            "/api/strategy/evaluate",
            json={"cards": [card_json("A"), card_json("A", "hearts"), card_json("9", "clubs")]},
        )
        assert response.json() == {"total": 21, "is_soft": True, "hand_type": "soft"}

    @pytest.mark.asyncio
    async def test_evaluate_rejects_empty_hand(self, client):
        """Test that an empty card list fails validation."""
        response = await client.post("/api/strategy/evaluate", json={"cards": []})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_evaluate_rejects_bad_rank(self, client):
        """Test that unknown ranks fail validation."""
        response = await client.post(
            "/api/strategy/evaluate", json={"cards": [card_json("1")]}
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_recommend_surrender(self, client):
        """Test 16 vs 10 with default rules."""
        response = await client.post(
            "/api/strategy/recommend",
            json={
                "player_cards": [card_json("10"), card_json("6", "hearts")],
                "dealer_upcard": card_json("K", "clubs"),
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["action"] == "SURRENDER"
        assert data["code"] == "Rh"
        assert data["hand_type"] == "hard"
        assert data["total"] == 16
        assert data["legal_actions"] == ["HIT", "STAND", "DOUBLE", "SURRENDER"]
        assert data["explanation"] == "Hard 16 vs 10 → Surrender if allowed, else hit."

    @pytest.mark.asyncio
    async def test_recommend_with_rules(self, client):
        """Test that request rules change the answer."""
        response = await client.post(
            "/api/strategy/recommend",
            json={
                "player_cards": [card_json("A"), card_json("7", "hearts")],
                "dealer_upcard": card_json("A", "clubs"),
                "rules": {"dealer_hits_soft_17": True},
            },
        )
        assert response.json()["action"] == "STAND"

    @pytest.mark.asyncio
    async def test_recommend_rejects_bad_deck_count(self, client):
        """Test that unsupported deck counts fail validation."""
        response = await client.post(
            "/api/strategy/recommend",
            json={
                "player_cards": [card_json("8"), card_json("8", "hearts")],
                "dealer_upcard": card_json("6", "clubs"),
                "rules": {"num_decks": 3},
            },
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_decide(self, client):
        """Test scoring a wrong answer."""
        response = await client.post(
            "/api/strategy/decide",
            json={
                "player_cards": [card_json("8"), card_json("8", "hearts")],
                "dealer_upcard": card_json("10", "clubs"),
                "chosen_action": "STAND",
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["was_correct"] is False
        assert data["correct_action"] == "SPLIT"
        assert data["explanation"] == "Always split 8s."
        assert data["hand_total"] == 16
        assert data["dealer_upcard_rank"] == "10"

    @pytest.mark.asyncio
    async def test_decide_rejects_unknown_action(self, client):
        """Test that only the five actions are accepted."""
        response = await client.post(
            "/api/strategy/decide",
            json={
                "player_cards": [card_json("8")],
                "dealer_upcard": card_json("10", "clubs"),
                "chosen_action": "INSURANCE",
            },
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_chart(self, client):
        """Test the chart for H17 without DAS."""
        response = await client.get(
            "/api/strategy/chart",
            params={"dealer_hits_soft_17": "true", "double_after_split": "false"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "H17 no DAS"
        assert data["dealer_columns"] == ["2", "3", "4", "5", "6", "7", "8", "9", "10", "A"]
        assert data["soft"]["18"][-1] == "S"
        assert "Ph" not in {code for row in data["pairs"].values() for code in row}
        assert len(data["hard"]) == 16


class TestTrainingEndpoints:
    """Tests for the practice quiz flow."""

    @pytest.mark.asyncio
    async def test_new_session_default_rules(self, client):
        """Test that sessions start with the configured rules."""
        response = await client.post("/api/training/new")
        assert response.status_code == 200
        data = response.json()
        assert "session_id" in data
        assert data["rules"]["num_decks"] == 6

    @pytest.mark.asyncio
    async def test_new_session_custom_rules(self, client):
        """Test starting with custom rules."""
        response = await client.post(
            "/api/training/new", json={"rules": {"late_surrender": False, "num_decks": 2}}
        )
        rules = response.json()["rules"]
        assert rules["late_surrender"] is False
        assert rules["num_decks"] == 2

    @pytest.mark.asyncio
    async def test_scenario(self, client):
        """Test dealing a question."""
        session_id = await new_session(client)
        response = await client.post(
            "/api/training/scenario", headers={"X-Session-ID": session_id}
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data["player_cards"]) == 2
        assert {"HIT", "STAND"} <= set(data["legal_actions"])
        assert data["rules_banner"] == "DEALER MUST STAND ON ALL 17"

    @pytest.mark.asyncio
    async def test_correct_answer_flow(self, client):
        """Test answering correctly updates stats and history."""
        session_id = await new_session(client)
        headers = {"X-Session-ID": session_id}

        scenario = (await client.post("/api/training/scenario", headers=headers)).json()
        hand, upcard = scenario_hand(scenario)
        correct = BasicStrategy(RuleSet()).decide(hand, upcard, Action.HIT).correct_action

        response = await client.post(
            "/api/training/answer", json={"action": correct.name}, headers=headers
        )
        assert response.status_code == 200
        data = response.json()
        assert data["decision"]["was_correct"] is True
        assert data["stats"]["correct"] == 1
        assert data["stats"]["current_streak"] == 1
        assert data["stats"]["hands_played"] == 1
        assert data["stats"]["accuracy"] == 100
        assert data["log_summary"] == "1/1"

    @pytest.mark.asyncio
    async def test_answer_clears_pending_scenario(self, client):
        """Test that a question can only be answered once."""
        session_id = await new_session(client)
        headers = {"X-Session-ID": session_id}
        await client.post("/api/training/scenario", headers=headers)

        first = await client.post("/api/training/answer", json={"action": "HIT"}, headers=headers)
        second = await client.post("/api/training/answer", json={"action": "HIT"}, headers=headers)
        assert first.status_code == 200
        assert second.status_code == 409

    @pytest.mark.asyncio
    async def test_answer_without_scenario(self, client):
        """Test answering before any question is dealt."""
        session_id = await new_session(client)
        response = await client.post(
            "/api/training/answer",
            json={"action": "STAND"},
            headers={"X-Session-ID": session_id},
        )
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_unknown_session(self, client):
        """Test that unknown or forged sessions are not found."""
        response = await client.post(
            "/api/training/scenario", headers={"X-Session-ID": "not-a-session"}
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_missing_session_header(self, client):
        """Test that the session header is required."""
        response = await client.post("/api/training/scenario")
        assert response.status_code == 422


class TestStatsEndpoints:
    """Tests for statistics and session settings."""

    @pytest.mark.asyncio
    async def test_stats_and_decisions(self, client):
        """Test reading stats and the decision history."""
        session_id = await new_session(client)
        headers = {"X-Session-ID": session_id}
        for _ in range(3):
            await client.post("/api/training/scenario", headers=headers)
            await client.post("/api/training/answer", json={"action": "STAND"}, headers=headers)

        stats = (await client.get("/api/stats", headers=headers)).json()
        assert stats["correct"] + stats["wrong"] == 3
        assert stats["hands_played"] == 3

        decisions = (await client.get("/api/stats/decisions", headers=headers)).json()
        assert len(decisions) == 3
        assert all(d["chosen_action"] == "STAND" for d in decisions)
        assert sum(d["was_correct"] for d in decisions) == stats["correct"]

    @pytest.mark.asyncio
    async def test_reset(self, client):
        """Test resetting stats and history."""
        session_id = await new_session(client)
        headers = {"X-Session-ID": session_id}
        await client.post("/api/training/scenario", headers=headers)
        await client.post("/api/training/answer", json={"action": "HIT"}, headers=headers)

        response = await client.post("/api/stats/reset", headers=headers)
        assert response.status_code == 200
        assert response.json()["hands_played"] == 0
        assert (await client.get("/api/stats/decisions", headers=headers)).json() == []

    @pytest.mark.asyncio
    async def test_update_rules(self, client):
        """Test changing rules drops the pending question."""
        session_id = await new_session(client)
        headers = {"X-Session-ID": session_id}
        await client.post("/api/training/scenario", headers=headers)

        response = await client.put(
            "/api/stats/rules",
            json={"dealer_hits_soft_17": True, "late_surrender": False},
            headers=headers,
        )
        assert response.status_code == 200

        rules = (await client.get("/api/stats/rules", headers=headers)).json()
        assert rules["dealer_hits_soft_17"] is True
        assert rules["late_surrender"] is False

        scenario = (await client.post("/api/training/scenario", headers=headers)).json()
        assert scenario["rules_banner"] == "DEALER MUST HIT SOFT 17"

        answer = await client.post("/api/training/answer", json={"action": "HIT"}, headers=headers)
        assert answer.status_code == 200

    @pytest.mark.asyncio
    async def test_update_rules_clears_scenario(self, client):
        """Test that a question dealt under old rules cannot be answered."""
        session_id = await new_session(client)
        headers = {"X-Session-ID": session_id}
        await client.post("/api/training/scenario", headers=headers)
        await client.put("/api/stats/rules", json={}, headers=headers)

        response = await client.post(
            "/api/training/answer", json={"action": "HIT"}, headers=headers
        )
        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_stats_unknown_session(self, client):
        """Test stats for a missing session."""
        response = await client.get("/api/stats", headers={"X-Session-ID": "missing"})
        assert response.status_code == 404

"""Practice session storage with Redis backend and in-memory fallback."""

import json
import logging
import time
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any
from uuid import uuid4

import redis.asyncio as redis
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from advisor.cards import Card, Rank, Suit
from advisor.hand import Hand
from advisor.strategy import Action, Decision, RuleSet
from advisor.trainer import GameStats, Scenario
from config import config

logger = logging.getLogger(__name__)

# Session data keys
SESSION_KEY_RULES = "rules"
SESSION_KEY_STATS = "stats"
SESSION_KEY_SCENARIO = "scenario"
SESSION_KEY_DECISIONS = "decisions"
SESSION_KEY_CREATED_AT = "created_at"
SESSION_KEY_LAST_ACTIVITY = "last_activity"


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._serializer = URLSafeTimedSerializer(secret_key or config.security.secret_key)

    def sign(self, session_id: str) -> str:
        """Create a signed token from a session ID."""
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify and extract session_id from a signed token.

        Args:
            token: The signed token to verify
            max_age: Maximum age in seconds (defaults to session_ttl)

        Returns:
            The session ID if valid, None otherwise
        """
        try:
            return self._serializer.loads(token, max_age=max_age or config.session_ttl)
        except (BadSignature, SignatureExpired):
            return None


_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


class SessionStore(ABC):
    """Abstract session store keyed by signed session token."""

    @abstractmethod
    async def get(self, session_id: str) -> dict[str, Any] | None:
        """Get session data."""
        ...

    @abstractmethod
    async def set(self, session_id: str, data: dict[str, Any], ttl: int | None = None) -> None:
        """Set session data."""
        ...

    @abstractmethod
    async def delete(self, session_id: str) -> None:
        """Delete session."""
        ...

    async def exists(self, session_id: str) -> bool:
        """Check if session exists."""
        return await self.get(session_id) is not None


class InMemorySessionStore(SessionStore):
    """In-memory session store for local development and tests."""

    def __init__(self) -> None:
        self._sessions: dict[str, tuple[dict[str, Any], datetime]] = {}

    async def get(self, session_id: str) -> dict[str, Any] | None:
        """Get session data, dropping it if expired."""
        if session_id not in self._sessions:
            return None

        data, expiry = self._sessions[session_id]
        if expiry < datetime.now():
            await self.delete(session_id)
            return None
        return data

    async def set(self, session_id: str, data: dict[str, Any], ttl: int | None = None) -> None:
        """Set session data."""
        expiry = datetime.now() + timedelta(seconds=ttl or config.session_ttl)
        self._sessions[session_id] = (data, expiry)

    async def delete(self, session_id: str) -> None:
        """Delete session."""
        self._sessions.pop(session_id, None)

    async def cleanup_expired(self) -> int:
        """Remove expired sessions and return how many were removed."""
        now = datetime.now()
        expired = [sid for sid, (_, expiry) in self._sessions.items() if expiry < now]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)


class RedisSessionStore(SessionStore):
    """Redis-backed session store."""

    def __init__(self, redis_client: redis.Redis) -> None:
        self._redis = redis_client
        self._prefix = "strategy-advisor:session:"

    def _key(self, session_id: str) -> str:
        return f"{self._prefix}{session_id}"

    async def get(self, session_id: str) -> dict[str, Any] | None:
        """Get session data."""
        data = await self._redis.get(self._key(session_id))
        if data is None:
            return None
        return json.loads(data)

    async def set(self, session_id: str, data: dict[str, Any], ttl: int | None = None) -> None:
        """Set session data."""
        await self._redis.setex(self._key(session_id), ttl or config.session_ttl, json.dumps(data))

    async def delete(self, session_id: str) -> None:
        """Delete session."""
        await self._redis.delete(self._key(session_id))

    async def exists(self, session_id: str) -> bool:
        """Check if session exists."""
        return await self._redis.exists(self._key(session_id)) > 0


_session_store: SessionStore | None = None


async def get_session_store() -> SessionStore:
    """Get or create the session store."""
    global _session_store

    if _session_store is not None:
        return _session_store

    if config.redis.enabled:
        client = redis.from_url(config.redis.url)
        try:
            await client.ping()
        except redis.RedisError as exc:
            logger.warning("Redis unavailable at %s, using in-memory sessions: %s", config.redis.url, exc)
            await client.aclose()
        else:
            _session_store = RedisSessionStore(client)
            return _session_store

    _session_store = InMemorySessionStore()
    return _session_store


def set_session_store(store: SessionStore | None) -> None:
    """Replace the session store (None resets to lazy selection)."""
    global _session_store
    _session_store = store


# Serialization
def serialize_card(card: Card) -> dict[str, str]:
    """Serialize a card to a dict."""
    return {"rank": card.rank.value, "suit": card.suit.value}


def deserialize_card(data: dict[str, str]) -> Card:
    """Deserialize a card from a dict."""
    return Card(Rank(data["rank"]), Suit(data["suit"]))


def serialize_rules(rules: RuleSet) -> dict[str, Any]:
    """Serialize a rule set."""
    return {
        "dealer_hits_soft_17": rules.dealer_hits_soft_17,
        "double_after_split": rules.double_after_split,
        "late_surrender": rules.late_surrender,
        "num_decks": rules.num_decks,
        "dealer_peeks": rules.dealer_peeks,
    }


def deserialize_rules(data: dict[str, Any]) -> RuleSet:
    """Deserialize a rule set."""
    return RuleSet(
        dealer_hits_soft_17=data["dealer_hits_soft_17"],
        double_after_split=data["double_after_split"],
        late_surrender=data["late_surrender"],
        num_decks=data["num_decks"],
        dealer_peeks=data["dealer_peeks"],
    )


def serialize_scenario(scenario: Scenario) -> dict[str, Any]:
    """Serialize a pending quiz scenario."""
    return {
        "player_cards": [serialize_card(c) for c in scenario.player_hand],
        "dealer_upcard": serialize_card(scenario.dealer_upcard),
    }


def deserialize_scenario(data: dict[str, Any]) -> Scenario:
    """Deserialize a pending quiz scenario."""
    return Scenario(
        player_hand=Hand(tuple(deserialize_card(c) for c in data["player_cards"])),
        dealer_upcard=deserialize_card(data["dealer_upcard"]),
    )


def serialize_decision(decision: Decision) -> dict[str, Any]:
    """Serialize a decision verdict."""
    return {
        "chosen_action": decision.chosen_action.name,
        "correct_action": decision.correct_action.name,
        "was_correct": decision.was_correct,
        "explanation": decision.explanation,
        "hand_total": decision.hand_total,
        "dealer_upcard_rank": decision.dealer_upcard_rank.value,
    }


def deserialize_decision(data: dict[str, Any]) -> Decision:
    """Deserialize a decision verdict."""
    return Decision(
        chosen_action=Action[data["chosen_action"]],
        correct_action=Action[data["correct_action"]],
        was_correct=data["was_correct"],
        explanation=data["explanation"],
        hand_total=data["hand_total"],
        dealer_upcard_rank=Rank(data["dealer_upcard_rank"]),
    )


# Session helpers
def new_session_data(rules: RuleSet | None = None) -> dict[str, Any]:
    """Build the data a fresh practice session starts with."""
    now = int(time.time())
    return {
        SESSION_KEY_RULES: serialize_rules(rules or config.trainer.default_rules()),
        SESSION_KEY_STATS: GameStats().to_dict(),
        SESSION_KEY_SCENARIO: None,
        SESSION_KEY_DECISIONS: [],
        SESSION_KEY_CREATED_AT: now,
        SESSION_KEY_LAST_ACTIVITY: now,
    }


async def create_session(rules: RuleSet | None = None) -> str:
    """Create a new practice session and return its signed id."""
    store = await get_session_store()
    session_id = get_session_signer().sign(str(uuid4()))
    await store.set(session_id, new_session_data(rules))
    return session_id


async def get_session(session_id: str) -> dict[str, Any] | None:
    """Get session data, or None for unknown, expired or forged ids."""
    if extract_session_id(session_id) is None:
        return None
    store = await get_session_store()
    return await store.get(session_id)


async def update_session(session_id: str, data: dict[str, Any]) -> None:
    """Store session data and bump its activity timestamp."""
    data[SESSION_KEY_LAST_ACTIVITY] = int(time.time())
    store = await get_session_store()
    await store.set(session_id, data)


def extract_session_id(token: str) -> str | None:
    """
    Extract the raw session ID from a signed token.

    Args:
        token: The signed session token

    Returns:
        The raw session ID if valid, None otherwise
    """
    return get_session_signer().unsign(token)

"""Configuration management with environment variable support."""

import os
import secrets
from dataclasses import dataclass, field

from advisor.strategy.rules import SUPPORTED_DECK_COUNTS, RuleSet
from advisor.trainer.scenarios import SOFT_CHANCE


def _env_flag(name: str, default: str) -> bool:
    """Read a boolean environment variable."""
    return os.getenv(name, default).lower() == "true"


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limiting configuration."""

    enabled: bool = field(default_factory=lambda: _env_flag("RATE_LIMIT_ENABLED", "true"))
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "120"))
    )


@dataclass(frozen=True)
class SecurityConfig:
    """Security configuration."""

    secret_key: str = field(
        default_factory=lambda: os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
    )


@dataclass(frozen=True)
class RedisConfig:
    """Redis connection configuration."""

    enabled: bool = field(default_factory=lambda: _env_flag("REDIS_ENABLED", "false"))
    host: str = field(default_factory=lambda: os.getenv("REDIS_HOST", "localhost"))
    port: int = field(default_factory=lambda: int(os.getenv("REDIS_PORT", "6379")))
    db: int = field(default_factory=lambda: int(os.getenv("REDIS_DB", "0")))
    password: str | None = field(default_factory=lambda: os.getenv("REDIS_PASSWORD"))

    @property
    def url(self) -> str:
        """Build Redis connection URL."""
        auth = f":{self.password}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"


@dataclass(frozen=True)
class TrainerConfig:
    """Defaults for new practice sessions."""

    dealer_hits_soft_17: bool = field(default_factory=lambda: _env_flag("DEFAULT_H17", "false"))
    double_after_split: bool = field(default_factory=lambda: _env_flag("DEFAULT_DAS", "true"))
    late_surrender: bool = field(
        default_factory=lambda: _env_flag("DEFAULT_SURRENDER", "true")
    )
    num_decks: int = field(default_factory=lambda: int(os.getenv("DEFAULT_DECKS", "6")))
    pair_chance: float = field(
        default_factory=lambda: float(os.getenv("PAIR_CHANCE", "0.25"))
    )
    decision_log_limit: int = field(
        default_factory=lambda: int(os.getenv("DECISION_LOG_LIMIT", "50"))
    )

    def __post_init__(self) -> None:
        """Validate quiz settings."""
        if self.num_decks not in SUPPORTED_DECK_COUNTS:
            raise ValueError(
                f"DEFAULT_DECKS must be one of {SUPPORTED_DECK_COUNTS}, got {self.num_decks}"
            )
        if not 0.0 <= self.pair_chance <= 1.0 - SOFT_CHANCE:
            raise ValueError(f"PAIR_CHANCE must be between 0 and {1.0 - SOFT_CHANCE}")
        if self.decision_log_limit < 1:
            raise ValueError("DECISION_LOG_LIMIT must be at least 1")

    def default_rules(self) -> RuleSet:
        """Build the rule set new sessions start with."""
        return RuleSet(
            dealer_hits_soft_17=self.dealer_hits_soft_17,
            double_after_split=self.double_after_split,
            late_surrender=self.late_surrender,
            num_decks=self.num_decks,
        )


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: _env_flag("DEBUG", "false"))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    session_ttl: int = 3600  # Session timeout in seconds

    redis: RedisConfig = field(default_factory=RedisConfig)
    trainer: TrainerConfig = field(default_factory=TrainerConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)


# Global configuration instance
config = AppConfig()

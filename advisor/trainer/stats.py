"""Running quiz statistics and the per-hand decision log."""

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Iterator

from advisor.strategy.decision import Decision


@dataclass(frozen=True)
class GameStats:
    """Statistics for a practice session. Every update returns a new record."""

    correct: int = 0
    wrong: int = 0
    current_streak: int = 0
    best_streak: int = 0
    hands_played: int = 0

    @property
    def decisions(self) -> int:
        """Return the number of scored decisions."""
        return self.correct + self.wrong

    @property
    def accuracy(self) -> int:
        """Return the share of correct decisions as a whole percentage."""
        if self.decisions == 0:
            return 0
        return round(self.correct / self.decisions * 100)

    def record_decision(self, decision: Decision) -> "GameStats":
        """Count a decision, extending or breaking the streak."""
        if decision.was_correct:
            streak = self.current_streak + 1
            return replace(
                self,
                correct=self.correct + 1,
                current_streak=streak,
                best_streak=max(self.best_streak, streak),
            )
        return replace(self, wrong=self.wrong + 1, current_streak=0)

    def record_hand(self) -> "GameStats":
        """Count a finished hand."""
        return replace(self, hands_played=self.hands_played + 1)

    def to_dict(self) -> dict[str, int]:
        """Serialize for session storage."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GameStats":
        """Deserialize from session storage, ignoring unknown keys."""
        return cls(
            correct=data.get("correct", 0),
            wrong=data.get("wrong", 0),
            current_streak=data.get("current_streak", 0),
            best_streak=data.get("best_streak", 0),
            hands_played=data.get("hands_played", 0),
        )


@dataclass
class DecisionLog:
    """
    Recent decisions, oldest first.

    Once the limit is reached the oldest entries are dropped.
    """

    limit: int = 50
    entries: list[Decision] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.limit < 1:
            raise ValueError("limit must be at least 1")

    def add(self, decision: Decision) -> None:
        """Append a decision."""
        self.entries.append(decision)
        if len(self.entries) > self.limit:
            del self.entries[: len(self.entries) - self.limit]

    def clear(self) -> None:
        """Forget all decisions."""
        self.entries.clear()

    @property
    def correct_count(self) -> int:
        """Return the number of correct decisions."""
        return sum(1 for entry in self.entries if entry.was_correct)

    @property
    def mistakes(self) -> list[Decision]:
        """Return the incorrect decisions."""
        return [entry for entry in self.entries if not entry.was_correct]

    def summary(self) -> str:
        """Return the score as 'correct/total'."""
        return f"{self.correct_count}/{len(self.entries)}"

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Decision]:
        return iter(self.entries)

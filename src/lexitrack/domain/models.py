"""
Domain models for review scheduling and personal difficulty.

These are pure data structures with no I/O or external dependencies.
Every snapshot is immutable; updates always produce a new instance.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .clock import parse_timestamp
from .constants import DEFAULT_DICTIONARY_SCORE, DEFAULT_EASE_FACTOR


class ReviewGrade(str, Enum):
    """
    Learner's self-assessed recall after a flashcard interaction.

    Ordered by implied recall quality: forgot < hard < good < easy.
    """

    FORGOT = "forgot"
    HARD = "hard"
    GOOD = "good"
    EASY = "easy"

    @property
    def quality(self) -> int:
        """SM-2 quality value (0-5 scale)."""
        return _QUALITY[self]

    @property
    def is_correct(self) -> bool:
        return self is not ReviewGrade.FORGOT

    def __lt__(self, other):
        if not isinstance(other, ReviewGrade):
            return NotImplemented
        return self.quality < other.quality

    def __le__(self, other):
        if not isinstance(other, ReviewGrade):
            return NotImplemented
        return self.quality <= other.quality

    def __gt__(self, other):
        if not isinstance(other, ReviewGrade):
            return NotImplemented
        return self.quality > other.quality

    def __ge__(self, other):
        if not isinstance(other, ReviewGrade):
            return NotImplemented
        return self.quality >= other.quality


_QUALITY = {
    ReviewGrade.FORGOT: 0,
    ReviewGrade.HARD: 3,
    ReviewGrade.GOOD: 4,
    ReviewGrade.EASY: 5,
}


class WordState(str, Enum):
    """Lifecycle label derived from scheduling state."""

    NEW = "new"
    LEARNING = "learning"
    STABILIZING = "stabilizing"
    MASTERED = "mastered"
    DECAYING = "decaying"


class TrendDirection(str, Enum):
    EASIER = "easier"
    HARDER = "harder"
    STABLE = "stable"


@dataclass(frozen=True)
class SchedulingState:
    """
    SM-2 scheduling state for one learner+item pair.

    Attributes:
        ease_factor: Interval growth multiplier, never below 1.3.
        interval_days: Days until the next review.
        repetitions: Consecutive successful reviews since the last lapse.
            None means the item has never been reviewed.
        next_review_at: When the item becomes due (UTC).
        last_grade: Most recent grade, None if never reviewed.
    """

    ease_factor: float = DEFAULT_EASE_FACTOR
    interval_days: int = 0
    repetitions: int | None = None
    next_review_at: datetime | None = None
    last_grade: ReviewGrade | None = None

    @property
    def reviewed(self) -> bool:
        return self.repetitions is not None or self.last_grade is not None

    @classmethod
    def from_record(cls, record: dict[str, Any] | None) -> "SchedulingState":
        """
        Build from a caller row (snake_case keys as produced by to_record).

        Missing keys fall back to the never-reviewed defaults. Values are
        taken as-is; range checks happen in the validation layer.
        """
        if not record:
            return cls()
        last = record.get("last_result", record.get("last_grade"))
        ease = record.get("ease_factor")
        return cls(
            ease_factor=DEFAULT_EASE_FACTOR if ease is None else float(ease),
            interval_days=int(record.get("interval_days") or 0),
            repetitions=(
                None if record.get("repetitions") is None else int(record["repetitions"])
            ),
            next_review_at=parse_timestamp(
                record.get("next_review", record.get("next_review_at"))
            ),
            last_grade=_grade_or_raw(last),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "ease_factor": self.ease_factor,
            "interval_days": self.interval_days,
            "repetitions": self.repetitions,
            "next_review": self.next_review_at.isoformat() if self.next_review_at else None,
            "last_result": self.last_grade.value if self.last_grade else None,
        }


@dataclass(frozen=True)
class PersonalCounters:
    """Lifetime correct/wrong answer totals. Never reset."""

    correct_count: int = 0
    wrong_count: int = 0

    @property
    def total(self) -> int:
        return self.correct_count + self.wrong_count

    @classmethod
    def from_record(cls, record: dict[str, Any] | None) -> "PersonalCounters":
        if not record:
            return cls()
        return cls(
            correct_count=int(record.get("correct_count") or 0),
            wrong_count=int(record.get("wrong_count") or 0),
        )

    def to_record(self) -> dict[str, Any]:
        return {"correct_count": self.correct_count, "wrong_count": self.wrong_count}


@dataclass(frozen=True)
class ReviewOutcome:
    """A single past answer. History sequences are most-recent-first."""

    correct: bool


@dataclass(frozen=True)
class FullProgress:
    """
    Complete per-item progress snapshot produced by one review.

    This is the record the caller upserts keyed by (learner, item).
    """

    state: SchedulingState
    counters: PersonalCounters
    word_state: WordState
    personal_score: int
    trend: TrendDirection

    def to_record(self) -> dict[str, Any]:
        """Flat, JSON-ready row."""
        return {
            **self.state.to_record(),
            **self.counters.to_record(),
            "personal_score": self.personal_score,
            "word_state": self.word_state.value,
            "trend_direction": self.trend.value,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "FullProgress":
        return cls(
            state=SchedulingState.from_record(record),
            counters=PersonalCounters.from_record(record),
            word_state=WordState(record.get("word_state") or WordState.NEW.value),
            personal_score=int(record.get("personal_score") or 0),
            trend=TrendDirection(record.get("trend_direction") or TrendDirection.STABLE.value),
        )


@dataclass(frozen=True)
class QueueItem:
    """
    One row of the caller's dictionary+progress join, used for queue building.

    `payload` is opaque caller data carried through untouched.
    """

    item_id: str
    state: SchedulingState = field(default_factory=SchedulingState)
    dictionary_score: int = DEFAULT_DICTIONARY_SCORE
    payload: Any = None


def _grade_or_raw(value: Any) -> Any:
    # Unknown strings pass through so the validation layer can decide
    # between coercion and rejection.
    if value is None or isinstance(value, ReviewGrade):
        return value
    try:
        return ReviewGrade(str(value).lower())
    except ValueError:
        return value

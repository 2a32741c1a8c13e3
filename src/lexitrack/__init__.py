"""lexitrack: SM-2 review scheduling with personal difficulty tracking."""

from lexitrack.application import (
    apply_review,
    apply_review_strict,
    build_daily_plan,
    build_practice_queue,
    classify,
    due_filter,
    next_schedule,
    personal_score,
    review_order,
    trend,
)
from lexitrack.domain import (
    FullProgress,
    PersonalCounters,
    QueueItem,
    ReviewGrade,
    ReviewOutcome,
    SchedulingState,
    TrendDirection,
    WordState,
)

VERSION = "0.1.0"

__all__ = [
    "VERSION",
    "apply_review",
    "apply_review_strict",
    "build_daily_plan",
    "build_practice_queue",
    "classify",
    "due_filter",
    "next_schedule",
    "personal_score",
    "review_order",
    "trend",
    "FullProgress",
    "PersonalCounters",
    "QueueItem",
    "ReviewGrade",
    "ReviewOutcome",
    "SchedulingState",
    "TrendDirection",
    "WordState",
]

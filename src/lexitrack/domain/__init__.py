# Domain Package
from .errors import (
    InvalidGradeError,
    InvalidScoreError,
    InvalidStateError,
    LexitrackError,
    ValidationError,
)
from .models import (
    FullProgress,
    PersonalCounters,
    QueueItem,
    ReviewGrade,
    ReviewOutcome,
    SchedulingState,
    TrendDirection,
    WordState,
)
from .ports import ProgressRepository

__all__ = [
    "FullProgress",
    "PersonalCounters",
    "QueueItem",
    "ReviewGrade",
    "ReviewOutcome",
    "SchedulingState",
    "TrendDirection",
    "WordState",
    "ProgressRepository",
    "LexitrackError",
    "ValidationError",
    "InvalidGradeError",
    "InvalidStateError",
    "InvalidScoreError",
]

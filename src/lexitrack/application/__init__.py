# Application Package
from .classifier import classify
from .daily_plan import DailyPlan, PlanEntry, build_daily_plan
from .personal_score import ScoreBreakdown, personal_score, score_breakdown
from .progress import (
    apply_review,
    apply_review_strict,
    build_practice_queue,
    due_filter,
    review_order,
)
from .scheduler import next_schedule
from .session import ReviewSession
from .trend import trend

__all__ = [
    "next_schedule",
    "classify",
    "personal_score",
    "score_breakdown",
    "ScoreBreakdown",
    "trend",
    "apply_review",
    "apply_review_strict",
    "due_filter",
    "review_order",
    "build_practice_queue",
    "build_daily_plan",
    "DailyPlan",
    "PlanEntry",
    "ReviewSession",
]

"""
Word lifecycle classifier.

A decision table over the current scheduling state, recomputed from
scratch on every call. The previous label never influences the result.
"""

from datetime import datetime

from lexitrack.domain.clock import days_between, resolve_now
from lexitrack.domain.constants import (
    DECAY_MIN_REPETITIONS,
    DECAY_OVERDUE_DAYS,
    MASTERED_MIN_EASE,
    MASTERED_MIN_INTERVAL,
    MASTERED_MIN_REPETITIONS,
    STABILIZING_MIN_REPETITIONS,
)
from lexitrack.domain.models import ReviewGrade, SchedulingState, WordState


def classify(state: SchedulingState, *, now: datetime | None = None) -> WordState:
    """
    Map scheduling state onto a lifecycle label. First matching rule wins:

    1. never reviewed, or 0 repetitions          -> new
    2. strong item whose last grade was forgot  -> decaying
    3. 4+ repetitions and >14 days overdue      -> decaying
    4. 5+ reps, ease >= 2.3, interval >= 21d     -> mastered
    5. 3+ repetitions                            -> stabilizing
    6. otherwise                                 -> learning

    A reset item (after forgot) is `new` again, even if it was mastered before.
    """
    reps = state.repetitions
    if reps is None or reps == 0:
        return WordState.NEW

    ease = state.ease_factor
    strong = reps >= MASTERED_MIN_REPETITIONS and ease >= MASTERED_MIN_EASE

    # Only reachable on snapshots not produced by the scheduler, which
    # always resets repetitions on forgot.
    if strong and state.last_grade is ReviewGrade.FORGOT:
        return WordState.DECAYING

    if reps >= DECAY_MIN_REPETITIONS and state.next_review_at is not None:
        overdue = days_between(resolve_now(now), state.next_review_at)
        if overdue > DECAY_OVERDUE_DAYS:
            return WordState.DECAYING

    if strong and state.interval_days >= MASTERED_MIN_INTERVAL:
        return WordState.MASTERED

    if reps >= STABILIZING_MIN_REPETITIONS:
        return WordState.STABILIZING

    return WordState.LEARNING

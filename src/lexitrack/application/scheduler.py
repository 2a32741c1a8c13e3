"""
SM-2 scheduler.

Decides WHEN an item is reviewed next. Pure computation, no I/O; the only
time dependency is the injected `now`.
"""

import logging
from datetime import datetime, timedelta

from lexitrack.domain.clock import resolve_now
from lexitrack.domain.constants import (
    FIRST_INTERVAL_DAYS,
    MAX_QUALITY,
    MIN_EASE_FACTOR,
    PASSING_QUALITY,
    SECOND_INTERVAL_DAYS,
)
from lexitrack.domain.models import ReviewGrade, SchedulingState

from .utils.numeric import round_half_up

logger = logging.getLogger(__name__)


def next_schedule(
    state: SchedulingState,
    grade: ReviewGrade,
    *,
    now: datetime | None = None,
) -> SchedulingState:
    """
    Compute the scheduling state after answering with `grade`.

    - forgot resets repetitions and makes the item due again today.
    - Successful answers step through 1 day, 6 days, then interval * ease.
    - Ease moves by the SM-2 delta for the grade, floored at 1.3.

    Args:
        state: Prior state. A never-reviewed state counts as 0 repetitions.
        grade: The learner's answer.
        now: Injected clock; defaults to the current UTC time.

    Returns:
        A new SchedulingState; `state` is not modified.
    """
    now = resolve_now(now)
    q = grade.quality
    repetitions = state.repetitions or 0
    interval = state.interval_days
    ease = state.ease_factor

    if q < PASSING_QUALITY:
        repetitions = 0
        interval = 0
    else:
        if repetitions == 0:
            interval = FIRST_INTERVAL_DAYS
        elif repetitions == 1:
            interval = SECOND_INTERVAL_DAYS
        else:
            interval = round_half_up(interval * ease)
        repetitions += 1

    miss = MAX_QUALITY - q
    ease = max(MIN_EASE_FACTOR, ease + (0.1 - miss * (0.08 + miss * 0.02)))
    # Stored with two decimals
    ease = max(MIN_EASE_FACTOR, round(ease, 2))

    logger.debug(
        f"{grade.value}: reps={repetitions} interval={interval}d ease={ease}"
    )

    return SchedulingState(
        ease_factor=ease,
        interval_days=interval,
        repetitions=repetitions,
        next_review_at=now + timedelta(days=interval),
        last_grade=grade,
    )

"""
Progress updater: the composition root for one answered review.

Runs scheduler -> counters -> classifier -> personal score -> trend and
returns the complete snapshot the caller persists. Also provides the pure
collection helpers used to build a practice queue.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any, TypeVar

from lexitrack.domain.clock import as_utc, resolve_now
from lexitrack.domain.models import (
    FullProgress,
    PersonalCounters,
    QueueItem,
    ReviewGrade,
    ReviewOutcome,
    SchedulingState,
)

from .classifier import classify
from .personal_score import personal_score
from .scheduler import next_schedule
from .trend import trend
from .validation import (
    coerce_counters,
    coerce_dictionary_score,
    coerce_state,
    parse_grade,
    validate_counters,
    validate_dictionary_score,
    validate_state,
)

logger = logging.getLogger(__name__)

Item = TypeVar("Item", QueueItem, SchedulingState)


def apply_review(
    prev_state: SchedulingState | None,
    prev_counters: PersonalCounters | None,
    grade: ReviewGrade | str,
    dictionary_score: int,
    recent_history: Sequence[Any] | None = None,
    *,
    now: datetime | None = None,
) -> FullProgress:
    """
    Apply one answered review and return the full updated progress.

    Malformed input is coerced to the nearest valid value (unknown grade
    counts as forgot). Use `apply_review_strict` to reject it instead.

    Args:
        prev_state: Last persisted scheduling state, None for a new item.
        prev_counters: Last persisted counters, None for a new item.
        grade: The learner's answer.
        dictionary_score: Context-free difficulty of the item (0-100).
        recent_history: Previous outcomes, most recent first, excluding this answer.
            None means no earlier outcomes.
        now: Injected clock; defaults to the current UTC time.

    Returns:
        FullProgress computed entirely from the post-review state.
    """
    return _apply(
        coerce_state(prev_state),
        coerce_counters(prev_counters),
        parse_grade(grade),
        coerce_dictionary_score(dictionary_score),
        recent_history,
        resolve_now(now),
    )


def apply_review_strict(
    prev_state: SchedulingState | None,
    prev_counters: PersonalCounters | None,
    grade: ReviewGrade | str,
    dictionary_score: int,
    recent_history: Sequence[Any] | None = None,
    *,
    now: datetime | None = None,
) -> FullProgress:
    """
    Validating variant of `apply_review`.

    Raises:
        ValidationError: If any input is outside its documented domain.
    """
    return _apply(
        validate_state(prev_state or SchedulingState()),
        validate_counters(prev_counters or PersonalCounters()),
        parse_grade(grade, strict=True),
        validate_dictionary_score(dictionary_score),
        recent_history,
        resolve_now(now),
    )


def _apply(
    state: SchedulingState,
    counters: PersonalCounters,
    grade: ReviewGrade,
    dictionary_score: int,
    recent_history: Sequence[Any] | None,
    now: datetime,
) -> FullProgress:
    new_state = next_schedule(state, grade, now=now)

    correct = grade.is_correct
    new_counters = PersonalCounters(
        correct_count=counters.correct_count + (1 if correct else 0),
        wrong_count=counters.wrong_count + (0 if correct else 1),
    )

    # Classification and scoring must see the post-review state.
    word_state = classify(new_state, now=now)
    score = personal_score(dictionary_score, new_counters, new_state, now=now)
    direction = trend([ReviewOutcome(correct), *(recent_history or ())])

    logger.debug(
        f"Review {grade.value}: state={word_state.value} score={score} trend={direction.value}"
    )

    return FullProgress(
        state=new_state,
        counters=new_counters,
        word_state=word_state,
        personal_score=score,
        trend=direction,
    )


def _state_of(item: QueueItem | SchedulingState) -> SchedulingState:
    return item.state if isinstance(item, QueueItem) else item


def due_filter(items: Iterable[Item], *, now: datetime | None = None) -> list[Item]:
    """Items never scheduled or with next_review_at <= now, in input order."""
    now = resolve_now(now)
    due = []
    for item in items:
        next_at = _state_of(item).next_review_at
        if next_at is None or as_utc(next_at) <= now:
            due.append(item)
    return due


def _review_priority(item: QueueItem | SchedulingState) -> tuple[int, int, float]:
    state = _state_of(item)
    forgot = 0 if state.last_grade is ReviewGrade.FORGOT else 1
    unseen = 0 if not state.repetitions else 1
    # Unscheduled sorts as the earliest possible time.
    when = as_utc(state.next_review_at).timestamp() if state.next_review_at else float("-inf")
    return (forgot, unseen, when)


def review_order(items: Iterable[Item]) -> list[Item]:
    """
    Order items for a practice session.

    Forgotten items first, then never-reviewed ones, then by ascending
    next_review_at. Python's sort is stable, so ties keep input order.
    """
    return sorted(items, key=_review_priority)


def build_practice_queue(
    items: Iterable[Item],
    *,
    now: datetime | None = None,
    limit: int | None = None,
) -> list[Item]:
    """Due items in review order, optionally capped at `limit`."""
    queue = review_order(due_filter(items, now=now))
    if limit is not None:
        queue = queue[: max(0, limit)]
    return queue

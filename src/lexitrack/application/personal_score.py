"""
Personal difficulty calculator.

Adjusts the context-free dictionary difficulty of a word by what this
learner's own history says about it:

    personal = dictionary - familiarity_bonus + mistake_penalty + decay_penalty

This is a pure computation module with no I/O.
"""

import math
from dataclasses import dataclass
from datetime import datetime

from lexitrack.domain.clock import days_between, resolve_now
from lexitrack.domain.constants import (
    DECAY_PENALTY_MAX,
    DECAY_PENALTY_WEIGHT,
    FAMILIARITY_BONUS_MAX,
    FAMILIARITY_BONUS_WEIGHT,
    MISTAKE_PENALTY_MAX,
    SCORE_MAX,
    SCORE_MIN,
)
from lexitrack.domain.models import PersonalCounters, SchedulingState

from .utils.numeric import clamp, round_half_up


@dataclass(frozen=True)
class ScoreBreakdown:
    """
    Personal score with its individual components, for display.
    """

    dictionary_score: int
    familiarity_bonus: int
    mistake_penalty: int
    decay_penalty: int
    personal_score: int

    @property
    def adjusted(self) -> bool:
        """False while the score is still the untouched dictionary value."""
        return (self.familiarity_bonus, self.mistake_penalty, self.decay_penalty) != (0, 0, 0)


def score_breakdown(
    dictionary_score: int,
    counters: PersonalCounters,
    state: SchedulingState,
    *,
    now: datetime | None = None,
) -> ScoreBreakdown:
    """
    Compute the personal score and each adjustment that went into it.

    Until the learner has at least one answer on record, the dictionary
    score is returned unchanged.
    """
    base = int(clamp(dictionary_score, SCORE_MIN, SCORE_MAX))

    if state.repetitions is None or counters.total == 0:
        return ScoreBreakdown(base, 0, 0, 0, base)

    bonus = _familiarity_bonus(counters.correct_count, state.repetitions)
    penalty = _mistake_penalty(counters.wrong_count, counters.total)
    decay = _decay_penalty(state.next_review_at, resolve_now(now))

    personal = int(clamp(base - bonus + penalty + decay, SCORE_MIN, SCORE_MAX))
    return ScoreBreakdown(base, bonus, penalty, decay, personal)


def personal_score(
    dictionary_score: int,
    counters: PersonalCounters,
    state: SchedulingState,
    *,
    now: datetime | None = None,
) -> int:
    """Personal difficulty in [0, 100]; 0 = trivial, 100 = very hard for this learner."""
    return score_breakdown(dictionary_score, counters, state, now=now).personal_score


def _familiarity_bonus(correct_count: int, repetitions: int) -> int:
    """Logarithmic, saturating reward for successful exposures."""
    exposures = max(correct_count, repetitions)
    raw = math.log2(exposures + 1) * FAMILIARITY_BONUS_WEIGHT
    return min(FAMILIARITY_BONUS_MAX, round_half_up(raw))


def _mistake_penalty(wrong_count: int, total: int) -> int:
    """Linear in lifetime error rate; 100% wrong gives the full penalty."""
    if total <= 0:
        return 0
    return min(MISTAKE_PENALTY_MAX, round_half_up(wrong_count / total * MISTAKE_PENALTY_MAX))


def _decay_penalty(next_review_at: datetime | None, now: datetime) -> int:
    if next_review_at is None:
        return 0
    overdue = days_between(now, next_review_at)
    if overdue <= 0:
        return 0
    raw = math.log2(overdue + 1) * DECAY_PENALTY_WEIGHT
    return min(DECAY_PENALTY_MAX, round_half_up(raw))

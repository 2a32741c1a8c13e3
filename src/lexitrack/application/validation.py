"""
Boundary checks for caller-supplied input.

Two flavours:
- coerce_* : lenient. Malformed values are replaced by the nearest valid
  default and a warning is logged. Used by the default entry points, whose
  callers are interactive sessions that cannot recover from an exception.
- validate_* : strict. Raise a ValidationError subclass instead.
"""

import logging
import math
from dataclasses import replace
from typing import Any

from lexitrack.domain.constants import (
    DEFAULT_DICTIONARY_SCORE,
    DEFAULT_EASE_FACTOR,
    MIN_EASE_FACTOR,
    SCORE_MAX,
    SCORE_MIN,
)
from lexitrack.domain.errors import InvalidGradeError, InvalidScoreError, InvalidStateError
from lexitrack.domain.models import PersonalCounters, ReviewGrade, SchedulingState

from .utils.numeric import clamp, round_half_up

logger = logging.getLogger(__name__)


def parse_grade(value: Any, strict: bool = False) -> ReviewGrade:
    """
    Turn a caller value into a ReviewGrade.

    Accepts ReviewGrade members and case-insensitive names. Unknown values
    map to FORGOT unless `strict` is set.
    """
    if isinstance(value, ReviewGrade):
        return value
    if isinstance(value, str):
        try:
            return ReviewGrade(value.strip().lower())
        except ValueError:
            pass
    if strict:
        raise InvalidGradeError(f"Unknown review grade: {value!r}")
    logger.warning(f"Unknown review grade {value!r}, treating as 'forgot'")
    return ReviewGrade.FORGOT


def coerce_state(state: SchedulingState | None) -> SchedulingState:
    """Clamp a scheduling state into its valid domain."""
    if state is None:
        return SchedulingState()

    changes: dict[str, Any] = {}

    ease = state.ease_factor
    if ease is None or not isinstance(ease, (int, float)) or not math.isfinite(ease):
        logger.warning(f"Invalid ease factor {ease!r}, using {DEFAULT_EASE_FACTOR}")
        changes["ease_factor"] = DEFAULT_EASE_FACTOR
    elif ease < MIN_EASE_FACTOR:
        logger.warning(f"Ease factor {ease} below floor, clamping to {MIN_EASE_FACTOR}")
        changes["ease_factor"] = MIN_EASE_FACTOR

    if state.interval_days is None or state.interval_days < 0:
        logger.warning(f"Invalid interval {state.interval_days!r}, using 0")
        changes["interval_days"] = 0

    if state.repetitions is not None and state.repetitions < 0:
        logger.warning(f"Negative repetitions {state.repetitions}, using 0")
        changes["repetitions"] = 0

    if state.last_grade is not None and not isinstance(state.last_grade, ReviewGrade):
        changes["last_grade"] = parse_grade(state.last_grade)

    return replace(state, **changes) if changes else state


def coerce_counters(counters: PersonalCounters | None) -> PersonalCounters:
    if counters is None:
        return PersonalCounters()
    correct = counters.correct_count or 0
    wrong = counters.wrong_count or 0
    if correct < 0 or wrong < 0:
        logger.warning(f"Negative counters ({correct}, {wrong}), clamping to 0")
        return PersonalCounters(correct_count=max(0, correct), wrong_count=max(0, wrong))
    return counters


def coerce_dictionary_score(score: Any) -> int:
    if score is None:
        return DEFAULT_DICTIONARY_SCORE
    try:
        value = float(score)
    except (TypeError, ValueError):
        logger.warning(f"Invalid dictionary score {score!r}, using {DEFAULT_DICTIONARY_SCORE}")
        return DEFAULT_DICTIONARY_SCORE
    if not math.isfinite(value):
        logger.warning(f"Invalid dictionary score {score!r}, using {DEFAULT_DICTIONARY_SCORE}")
        return DEFAULT_DICTIONARY_SCORE
    if value < SCORE_MIN or value > SCORE_MAX:
        logger.warning(f"Dictionary score {score} outside [0, 100], clamping")
    return round_half_up(clamp(value, SCORE_MIN, SCORE_MAX))


def validate_state(state: SchedulingState) -> SchedulingState:
    """
    Raise InvalidStateError unless `state` satisfies every invariant.

    Returns the state unchanged so calls can be chained.
    """
    ease = state.ease_factor
    if not isinstance(ease, (int, float)) or not math.isfinite(ease):
        raise InvalidStateError(f"ease_factor must be a finite number, got {ease!r}")
    if ease < MIN_EASE_FACTOR:
        raise InvalidStateError(f"ease_factor must be >= {MIN_EASE_FACTOR}, got {ease}")
    if not isinstance(state.interval_days, int) or state.interval_days < 0:
        raise InvalidStateError(f"interval_days must be >= 0, got {state.interval_days!r}")
    if state.repetitions is not None and (
        not isinstance(state.repetitions, int) or state.repetitions < 0
    ):
        raise InvalidStateError(f"repetitions must be >= 0, got {state.repetitions!r}")
    if state.last_grade is not None and not isinstance(state.last_grade, ReviewGrade):
        raise InvalidStateError(f"Unknown last grade: {state.last_grade!r}")
    if state.last_grade is ReviewGrade.FORGOT and state.repetitions:
        raise InvalidStateError("repetitions must be 0 after a 'forgot' grade")
    return state


def validate_counters(counters: PersonalCounters) -> PersonalCounters:
    if counters.correct_count < 0 or counters.wrong_count < 0:
        raise InvalidStateError(
            f"Counters must be non-negative, got "
            f"({counters.correct_count}, {counters.wrong_count})"
        )
    return counters


def validate_dictionary_score(score: Any) -> int:
    if isinstance(score, bool) or not isinstance(score, int):
        raise InvalidScoreError(f"Dictionary score must be an integer, got {score!r}")
    if score < SCORE_MIN or score > SCORE_MAX:
        raise InvalidScoreError(f"Dictionary score must be in [0, 100], got {score}")
    return score

"""Short-horizon trend detection over recent answers."""

from collections.abc import Mapping, Sequence
from typing import Any

from lexitrack.domain.constants import TREND_DEADBAND, TREND_MIN_HISTORY, TREND_WINDOW
from lexitrack.domain.models import ReviewOutcome, TrendDirection


def outcome_value(entry: Any) -> bool:
    """
    Read correctness from a history entry.

    Accepts ReviewOutcome, plain bools, and mappings with a `correct`
    (or legacy `result`) key.
    """
    if isinstance(entry, ReviewOutcome):
        return entry.correct
    if isinstance(entry, Mapping):
        return bool(entry.get("correct", entry.get("result", False)))
    return bool(entry)


def trend(history: Sequence[Any]) -> TrendDirection:
    """
    Compare the last 3 answers against the 3 before them.

    `history` is most-recent-first. Fewer than 4 entries is not enough
    signal and yields STABLE. A ±0.2 deadband absorbs noise from the
    small windows.
    """
    if not history or len(history) < TREND_MIN_HISTORY:
        return TrendDirection.STABLE

    values = [1.0 if outcome_value(e) else 0.0 for e in history[: TREND_WINDOW * 2]]
    last = values[:TREND_WINDOW]
    prev = values[TREND_WINDOW:]
    if not prev:
        return TrendDirection.STABLE

    delta = sum(last) / len(last) - sum(prev) / len(prev)
    if delta > TREND_DEADBAND:
        return TrendDirection.EASIER
    if delta < -TREND_DEADBAND:
        return TrendDirection.HARDER
    return TrendDirection.STABLE

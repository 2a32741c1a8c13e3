"""
Daily plan builder.

Builds the "today" list for a learner from their whole collection:
1. Due items first, most overdue first (unscheduled ones lead)
2. Then never-reviewed items, easiest (lowest dictionary score) first
3. Capped at the daily target

Items scheduled for the future are left out.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from lexitrack.domain.clock import as_utc, days_between, resolve_now
from lexitrack.domain.constants import DEFAULT_DAILY_PLAN_SIZE
from lexitrack.domain.models import QueueItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanEntry:
    item_id: str
    order_index: int
    is_new: bool
    overdue_days: float = 0.0


@dataclass
class DailyPlan:
    """Result of plan building."""

    entries: list[PlanEntry] = field(default_factory=list)
    due_count: int = 0  # Due items included
    new_count: int = 0  # New items included
    skipped_future: int = 0  # Reviewed items not yet due

    @property
    def item_ids(self) -> list[str]:
        return [e.item_id for e in self.entries]


def build_daily_plan(
    items: Iterable[QueueItem],
    target_count: int = DEFAULT_DAILY_PLAN_SIZE,
    *,
    now: datetime | None = None,
) -> DailyPlan:
    """
    Select and order today's items.

    Args:
        items: Every item in the learner's collection (duplicates by item_id
            are dropped, first occurrence wins).
        target_count: Maximum plan size.
        now: Injected clock; defaults to the current UTC time.

    Returns:
        DailyPlan with entries in study order.
    """
    now = resolve_now(now)

    seen: set[str] = set()
    due: list[tuple[QueueItem, float]] = []
    new: list[QueueItem] = []
    skipped = 0

    for item in items:
        if item.item_id in seen:
            continue
        seen.add(item.item_id)

        state = item.state
        if not state.reviewed:
            new.append(item)
        elif state.next_review_at is None or as_utc(state.next_review_at) <= now:
            if state.next_review_at is None:
                # Unscheduled counts as due since forever
                overdue = float("inf")
            else:
                overdue = days_between(now, state.next_review_at)
            due.append((item, overdue))
        else:
            skipped += 1

    due.sort(key=lambda pair: pair[1], reverse=True)
    new.sort(key=lambda it: it.dictionary_score)

    limit = max(0, min(target_count, len(seen)))
    entries: list[PlanEntry] = []

    for item, overdue in due:
        if len(entries) >= limit:
            break
        entries.append(PlanEntry(item.item_id, len(entries), False, overdue))
    due_count = len(entries)

    for item in new:
        if len(entries) >= limit:
            break
        entries.append(PlanEntry(item.item_id, len(entries), True))

    logger.debug(
        f"Daily plan: {len(entries)}/{limit} "
        f"({due_count} due, {len(entries) - due_count} new, {skipped} not yet due)"
    )

    return DailyPlan(
        entries=entries,
        due_count=due_count,
        new_count=len(entries) - due_count,
        skipped_future=skipped,
    )

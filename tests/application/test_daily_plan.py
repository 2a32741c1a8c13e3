import pytest

from lexitrack.application.daily_plan import build_daily_plan
from lexitrack.domain.models import QueueItem, ReviewGrade, SchedulingState


@pytest.fixture
def collection(days):
    return [
        QueueItem("due-1", SchedulingState(repetitions=2, next_review_at=days(-1),
                                           last_grade=ReviewGrade.GOOD), 40),
        QueueItem("new-hard", dictionary_score=70),
        QueueItem("due-5", SchedulingState(repetitions=1, next_review_at=days(-5),
                                           last_grade=ReviewGrade.HARD), 60),
        QueueItem("future", SchedulingState(repetitions=3, next_review_at=days(4),
                                            last_grade=ReviewGrade.EASY), 10),
        QueueItem("new-easy", dictionary_score=20),
    ]


def test_due_by_most_overdue_then_easiest_new(now, collection):
    plan = build_daily_plan(collection, 10, now=now)

    assert plan.item_ids == ["due-5", "due-1", "new-easy", "new-hard"]
    assert plan.due_count == 2
    assert plan.new_count == 2
    assert plan.skipped_future == 1
    assert [e.order_index for e in plan.entries] == [0, 1, 2, 3]
    assert plan.entries[0].overdue_days == pytest.approx(5.0)
    assert [e.is_new for e in plan.entries] == [False, False, True, True]


def test_capped_at_target(now, collection):
    plan = build_daily_plan(collection, 3, now=now)
    assert plan.item_ids == ["due-5", "due-1", "new-easy"]
    assert (plan.due_count, plan.new_count) == (2, 1)


def test_due_items_can_fill_the_whole_plan(now, collection):
    plan = build_daily_plan(collection, 1, now=now)
    assert plan.item_ids == ["due-5"]
    assert plan.new_count == 0


def test_zero_target(now, collection):
    assert build_daily_plan(collection, 0, now=now).entries == []


def test_duplicate_ids_use_first_occurrence(now):
    items = [QueueItem("w", dictionary_score=30), QueueItem("w", dictionary_score=5)]
    plan = build_daily_plan(items, 5, now=now)
    assert plan.item_ids == ["w"]


def test_new_ties_keep_input_order(now):
    items = [QueueItem(name, dictionary_score=50) for name in "abc"]
    assert build_daily_plan(items, now=now).item_ids == ["a", "b", "c"]


def test_empty(now):
    plan = build_daily_plan([], 20, now=now)
    assert plan.entries == []
    assert plan.due_count == plan.new_count == 0


def test_unscheduled_reviewed_item_is_most_overdue(now, collection):
    lost = QueueItem("lost", SchedulingState(repetitions=2, last_grade=ReviewGrade.GOOD), 50)
    plan = build_daily_plan([*collection, lost], 10, now=now)

    assert plan.item_ids[:3] == ["lost", "due-5", "due-1"]
    assert plan.entries[0].overdue_days == float("inf")
    assert plan.due_count == 3

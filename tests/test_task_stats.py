# tests/test_task_stats.py

from __future__ import annotations

from datetime import date

from task_tracker.tasks.task_models import Priority, Status
from task_tracker.tasks.task_stats import (
    compute_statistics,
    is_due_within,
    is_overdue,
    sort_key,
)

from .fakes import TODAY


def test_empty_snapshot_has_zero_completion_rate() -> None:
    stats = compute_statistics([], today=TODAY, due_next_week=0)
    assert stats.total_tasks == 0
    assert stats.completion_rate == 0.0


def test_completion_rate_keeps_fraction(make_task) -> None:
    tasks = [
        make_task("a", status=Status.COMPLETED),
        make_task("b"),
        make_task("c"),
    ]
    stats = compute_statistics(tasks, today=TODAY, due_next_week=0)
    assert stats.completed_tasks == 1
    assert abs(stats.completion_rate - 100.0 / 3) < 1e-9


def test_completed_task_past_due_is_never_overdue(make_task) -> None:
    done = make_task(due_date=date(2023, 12, 20), status=Status.COMPLETED)
    open_ = make_task(due_date=date(2023, 12, 20), status=Status.IN_PROGRESS)
    assert not is_overdue(done, TODAY)
    assert is_overdue(open_, TODAY)
    assert not is_overdue(make_task(due_date=TODAY), TODAY)


def test_due_window_is_inclusive(make_task) -> None:
    assert is_due_within(make_task(due_date=TODAY), TODAY, 7)
    assert is_due_within(make_task(due_date=date(2024, 1, 8)), TODAY, 7)
    assert not is_due_within(make_task(due_date=date(2024, 1, 9)), TODAY, 7)
    assert not is_due_within(make_task(due_date=date(2023, 12, 31)), TODAY, 7)
    assert is_due_within(make_task(due_date=date.max), TODAY, 3_000_000)


def test_counts_and_as_dict(make_task) -> None:
    tasks = [
        make_task("today", due_date=TODAY, priority=Priority.HIGH, status=Status.COMPLETED),
        make_task("late", due_date=date(2023, 12, 30), priority=Priority.HIGH),
        make_task("soon", due_date=date(2024, 1, 5), priority=Priority.LOW),
    ]
    stats = compute_statistics(tasks, today=TODAY, due_next_week=2)

    assert stats.as_dict() == {
        "totalTasks": 3,
        "completedTasks": 1,
        "completionRate": 100.0 / 3,
        "dueTodayTasks": 1,
        "overdueTasks": 1,
        "dueNextWeekTasks": 2,
        "highPriorityTasks": 2,
    }


def test_sort_key_matches_store_ordering_rules(make_task) -> None:
    tasks = [
        make_task("h", priority=Priority.HIGH).with_changes(id=1),
        make_task("l", priority=Priority.LOW).with_changes(id=2),
        make_task("m", priority=Priority.MEDIUM).with_changes(id=3),
    ]
    key = sort_key("Priority")
    assert key is not None
    assert [t.title for t in sorted(tasks, key=key)] == ["l", "m", "h"]
    assert sort_key("due_date") is not None
    assert sort_key("colour") is None

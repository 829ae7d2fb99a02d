# src/task_tracker/tasks/task_stats.py

from __future__ import annotations

"""
Derived views over a task snapshot.

Everything here is a pure function of its arguments: no state, no caching,
and "today" is always passed in by the caller.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date
from typing import Any

from .task_models import Priority, Status, Task
from .task_store import normalize_sort_field, window_end


@dataclass(frozen=True, slots=True)
class TaskStatistics:
    total_tasks: int
    completed_tasks: int
    completion_rate: float
    due_today_tasks: int
    overdue_tasks: int
    due_next_week_tasks: int
    high_priority_tasks: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "totalTasks": self.total_tasks,
            "completedTasks": self.completed_tasks,
            "completionRate": self.completion_rate,
            "dueTodayTasks": self.due_today_tasks,
            "overdueTasks": self.overdue_tasks,
            "dueNextWeekTasks": self.due_next_week_tasks,
            "highPriorityTasks": self.high_priority_tasks,
        }


def is_overdue(task: Task, today: date) -> bool:
    """Past due and not completed. A completed task is never overdue."""
    return task.due_date < today and task.status != Status.COMPLETED


def is_due_within(task: Task, today: date, days: int) -> bool:
    return today <= task.due_date <= window_end(today, days)


def completion_rate(completed: int, total: int) -> float:
    """Percentage of completed tasks; 0.0 for an empty set."""
    if total == 0:
        return 0.0
    return completed * 100.0 / total


def compute_statistics(
    tasks: Iterable[Task],
    *,
    today: date,
    due_next_week: int,
) -> TaskStatistics:
    """
    Count the snapshot in a single pass.

    due_next_week comes from a separate due-window query made by the caller.
    """
    total = completed = due_today = overdue = high = 0
    for t in tasks:
        total += 1
        if t.status == Status.COMPLETED:
            completed += 1
        if t.due_date == today:
            due_today += 1
        if is_overdue(t, today):
            overdue += 1
        if t.priority == Priority.HIGH:
            high += 1

    return TaskStatistics(
        total_tasks=total,
        completed_tasks=completed,
        completion_rate=completion_rate(completed, total),
        due_today_tasks=due_today,
        overdue_tasks=overdue,
        due_next_week_tasks=int(due_next_week),
        high_priority_tasks=high,
    )


_SORT_KEYS: dict[str, Callable[[Task], Any]] = {
    "duedate": lambda t: (t.due_date, t.id or 0),
    "priority": lambda t: (t.priority.rank, t.id or 0),
    "status": lambda t: (t.status.rank, t.id or 0),
    "title": lambda t: (t.title, t.id or 0),
}


def sort_key(field: str) -> Callable[[Task], Any] | None:
    """
    In-memory equivalent of TaskStore.sorted_by ordering.

    Returns None for an unrecognized field.
    """
    return _SORT_KEYS.get(normalize_sort_field(field))

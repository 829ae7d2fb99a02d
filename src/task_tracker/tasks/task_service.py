# src/task_tracker/tasks/task_service.py

from __future__ import annotations

import logging
from datetime import date

from ..core.ports import Clock, TaskRepo
from .task_models import Priority, Status, Task
from .task_stats import TaskStatistics, compute_statistics

logger = logging.getLogger(__name__)

NEXT_WEEK_DAYS = 7


class TaskService:
    """
    Application-facing task operations.

    Mostly a pass-through to the repository; the only computed view is
    get_task_statistics().
    """

    def __init__(self, repo: TaskRepo, *, clock: Clock = date.today) -> None:
        self._repo = repo
        self._clock = clock

    def today(self) -> date:
        return self._clock()

    def create_task(
        self,
        title: str,
        description: str,
        due_date: date,
        priority: Priority,
        status: Status,
        category: str | None = None,
    ) -> int:
        task = Task(
            title=title,
            description=description,
            due_date=due_date,
            priority=priority,
            status=status,
            category=category,
        )
        return self._repo.create(task)

    def get_all_tasks(self) -> list[Task]:
        return self._repo.get_all()

    def get_task_by_id(self, task_id: int) -> Task | None:
        return self._repo.get_by_id(task_id)

    def update_task(self, task: Task) -> bool:
        return self._repo.update(task)

    def delete_task(self, task_id: int) -> bool:
        return self._repo.delete(task_id)

    def search_tasks(self, keyword: str) -> list[Task]:
        return self._repo.search(keyword)

    def get_tasks_by_category(self, category: str) -> list[Task]:
        return self._repo.filter_by_category(category)

    def get_tasks_sorted_by(self, sort_field: str) -> list[Task]:
        return self._repo.sorted_by(sort_field)

    def get_tasks_due_within(self, days: int) -> list[Task]:
        return self._repo.due_within_days(days, today=self.today())

    def get_tasks_due_next_week(self) -> list[Task]:
        return self.get_tasks_due_within(NEXT_WEEK_DAYS)

    def get_task_statistics(self) -> TaskStatistics:
        """
        Summary counts over all tasks.

        The snapshot and the next-week window are two reads that share one "today".
        A StorageError from either read fails the whole call.
        """
        today = self.today()
        snapshot = self._repo.get_all()
        due_next_week = len(self._repo.due_within_days(NEXT_WEEK_DAYS, today=today))
        stats = compute_statistics(snapshot, today=today, due_next_week=due_next_week)
        logger.debug("Statistics computed today=%s %s", today, stats)
        return stats

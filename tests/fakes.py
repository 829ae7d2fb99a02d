# tests/fakes.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from task_tracker.tasks.task_errors import StorageError
from task_tracker.tasks.task_models import Task
from task_tracker.tasks.task_stats import is_due_within, sort_key

TODAY = date(2024, 1, 1)


class FakeTaskRepo:
    """
    In-memory TaskRepo used for service unit tests.

    Keeps the service tests about aggregation logic rather than SQL.
    Set fail_due_window=True to simulate a failing window query.
    """

    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self.tasks: dict[int, Task] = {}
        self._next_id = 1
        self.fail_due_window = False
        self.window_calls: list[tuple[int, date | None]] = []
        for t in tasks:
            self.create(t)

    def create(self, task: Task) -> int:
        task_id = self._next_id
        self._next_id += 1
        self.tasks[task_id] = task.with_changes(id=task_id)
        return task_id

    def get_all(self) -> list[Task]:
        return list(self.tasks.values())

    def get_by_id(self, task_id: int) -> Task | None:
        return self.tasks.get(task_id)

    def update(self, task: Task) -> bool:
        if task.id is None:
            raise ValueError("task id is required for update")
        if task.id not in self.tasks:
            return False
        self.tasks[task.id] = task
        return True

    def delete(self, task_id: int) -> bool:
        return self.tasks.pop(task_id, None) is not None

    def search(self, keyword: str) -> list[Task]:
        k = keyword.lower()
        return [
            t
            for t in self.tasks.values()
            if k in t.title.lower()
            or k in t.description.lower()
            or (t.category is not None and k in t.category.lower())
        ]

    def filter_by_category(self, category: str) -> list[Task]:
        return [t for t in self.tasks.values() if t.category == category]

    def sorted_by(self, field: str) -> list[Task]:
        key = sort_key(field)
        tasks = list(self.tasks.values())
        return sorted(tasks, key=key) if key else tasks

    def due_within_days(self, days: int, today: date | None = None) -> list[Task]:
        self.window_calls.append((days, today))
        if self.fail_due_window:
            raise StorageError("window query failed")
        start = today or date.today()
        return [t for t in self.tasks.values() if is_due_within(t, start, days)]


@dataclass
class ScriptedPrompt:
    """
    Stand-in for input(): returns queued answers in order, records prompts.

    Raises EOFError when the script runs out, like input() at end of stdin.
    """

    answers: list[str]
    prompts: list[str] = field(default_factory=list)

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


@dataclass
class Recorder:
    """Collects emitted/printed lines."""

    lines: list[str] = field(default_factory=list)

    def __call__(self, text: str) -> None:
        self.lines.append(text)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The service depends on Protocols instead of concrete implementations.
This keeps storage swappable and makes testing easier.
"""

from collections.abc import Callable
from datetime import date
from typing import Protocol

from ..tasks.task_models import Task

Clock = Callable[[], date]
# Returns "today"; injected so date windows are testable.

Prompt = Callable[[str], str]
# Shell-side input: shows a prompt, returns the raw answer line.


class TaskRepo(Protocol):
    # CRUD
    def create(self, task: Task) -> int: ...
    def get_all(self) -> list[Task]: ...
    def get_by_id(self, task_id: int) -> Task | None: ...
    def update(self, task: Task) -> bool: ...
    def delete(self, task_id: int) -> bool: ...

    # Queries
    def search(self, keyword: str) -> list[Task]: ...
    def filter_by_category(self, category: str) -> list[Task]: ...
    def sorted_by(self, field: str) -> list[Task]: ...
    def due_within_days(self, days: int, today: date | None = None) -> list[Task]: ...

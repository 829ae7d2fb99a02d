# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from task_tracker.core.state import AppState
from task_tracker.tasks.task_models import Priority, Status, Task
from task_tracker.tasks.task_service import TaskService
from task_tracker.tasks.task_store import TaskStore

from .fakes import TODAY


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the command handlers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="Task Manager",
        log_level="WARNING",
        data_dir=tmp_path,
        db_url=f"sqlite:///{tmp_path / 'tasks.sqlite3'}",
        db_user="tasks",
        db_password="tasks",
        db_path=tmp_path / "tasks.sqlite3",
    )

@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.db_path)

@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """
    AppState wired with a real SQLite store and a fixed clock (2024-01-01).

    NOTE: We keep the real store here because its SQL is part of what we test.
    """
    return AppState(settings=settings, tasks=TaskService(store, clock=lambda: TODAY))

@pytest.fixture()
def make_task():
    def _make(
        title: str = "Write report",
        *,
        description: str = "",
        due_date: date = TODAY,
        priority: Priority = Priority.MEDIUM,
        status: Status = Status.TODO,
        category: str | None = None,
    ) -> Task:
        return Task(
            title=title,
            description=description,
            due_date=due_date,
            priority=priority,
            status=status,
            category=category,
        )

    return _make

# src/task_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_service import TaskService


@dataclass
class AppState:
    # Store Settings on the state for easy access in command handlers.
    settings: object

    tasks: TaskService

    # Cleared by the exit command; the console loop stops when it is False.
    running: bool = True

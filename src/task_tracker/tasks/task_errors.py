# src/task_tracker/tasks/task_errors.py

"""
Error taxonomy for the task subsystem.

"Not found" is deliberately absent: lookups return None / False instead of raising.
"""

from __future__ import annotations


class TaskTrackerError(Exception):
    """Base class for errors reported to the user by the shell."""


class ValidationError(TaskTrackerError, ValueError):
    """Empty required field, malformed date or unrecognized enum text."""


class StorageError(TaskTrackerError):
    """Connection failure, constraint violation or unusable database settings."""

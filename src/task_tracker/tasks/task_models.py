# src/task_tracker/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import StrEnum
from typing import Any

from .task_errors import ValidationError

DATE_FORMAT = "%Y-%m-%d"
DATE_FORMAT_HINT = "yyyy-MM-dd (e.g., 2023-12-31)"
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")

TITLE_MAX_LEN = 100
CATEGORY_MAX_LEN = 50


class _OrderedEnum(StrEnum):
    """StrEnum whose declaration order is meaningful (used for sorting)."""

    @property
    def rank(self) -> int:
        return list(type(self)).index(self)

    @classmethod
    def options(cls) -> str:
        return ", ".join(m.value for m in cls)

    @classmethod
    def from_db(cls, raw: str):
        # Rows are guarded by CHECK constraints, so anything else is a broken database.
        return cls(raw)


class Priority(_OrderedEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @classmethod
    def parse(cls, text: str) -> Priority:
        """Strict, case-insensitive parse of user input."""
        key = (text or "").strip().upper()
        try:
            return cls(key)
        except ValueError:
            raise ValidationError(f"Invalid priority. Options are: {cls.options()}") from None


class Status(_OrderedEnum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"

    @classmethod
    def parse(cls, text: str) -> Status:
        """
        Strict, case-insensitive parse of user input.

        Spaces are accepted in place of underscores ("in progress").
        """
        key = (text or "").strip().upper().replace(" ", "_")
        try:
            return cls(key)
        except ValueError:
            raise ValidationError(f"Invalid status. Options are: {cls.options()}") from None


def parse_due_date(text: str) -> date:
    raw = (text or "").strip()
    # strptime alone would also take unpadded "2024-1-5".
    if not _DATE_RE.fullmatch(raw):
        raise ValidationError(f"Invalid date format. Please use {DATE_FORMAT_HINT}")
    try:
        return datetime.strptime(raw, DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Invalid date format. Please use {DATE_FORMAT_HINT}") from None


def format_due_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


@dataclass(frozen=True, slots=True)
class Task:
    """
    A single trackable work item.

    id is None until the task has been stored; storage assigns it and it never
    changes afterwards. Updates replace the whole record, see with_changes().
    """

    title: str
    description: str
    due_date: date
    priority: Priority
    status: Status
    category: str | None = None
    id: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.title, str) or not self.title.strip():
            raise ValidationError("Title cannot be empty")
        if not isinstance(self.priority, Priority):
            raise ValidationError(f"Invalid priority. Options are: {Priority.options()}")
        if not isinstance(self.status, Status):
            raise ValidationError(f"Invalid status. Options are: {Status.options()}")
        # datetime is a date subclass but carries a time component.
        if not isinstance(self.due_date, date) or isinstance(self.due_date, datetime):
            raise ValidationError(f"Invalid due date. Please use {DATE_FORMAT_HINT}")
        if self.description is None:
            object.__setattr__(self, "description", "")

    def with_changes(self, **fields: Any) -> Task:
        return replace(self, **fields)

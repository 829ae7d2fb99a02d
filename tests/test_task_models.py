# tests/test_task_models.py

from __future__ import annotations

from datetime import date, datetime

import pytest

from task_tracker.tasks.task_errors import ValidationError
from task_tracker.tasks.task_models import (
    Priority,
    Status,
    Task,
    format_due_date,
    parse_due_date,
)


def test_enum_rank_follows_declaration_order() -> None:
    assert [p.rank for p in (Priority.LOW, Priority.MEDIUM, Priority.HIGH)] == [0, 1, 2]
    assert Status.TODO.rank < Status.IN_PROGRESS.rank < Status.COMPLETED.rank


def test_parse_is_case_insensitive_and_accepts_spaces_for_status() -> None:
    assert Priority.parse(" high ") is Priority.HIGH
    assert Status.parse("in progress") is Status.IN_PROGRESS
    assert Status.parse("Completed") is Status.COMPLETED


@pytest.mark.parametrize("raw", ["", "urgent", "HIGHEST"])
def test_priority_parse_rejects_unknown_text(raw: str) -> None:
    with pytest.raises(ValidationError, match="LOW, MEDIUM, HIGH"):
        Priority.parse(raw)


def test_status_parse_rejects_unknown_text() -> None:
    with pytest.raises(ValidationError, match="TODO, IN_PROGRESS, COMPLETED"):
        Status.parse("done")


def test_due_date_round_trip_format() -> None:
    d = parse_due_date("2023-12-31")
    assert d == date(2023, 12, 31)
    assert format_due_date(d) == "2023-12-31"


@pytest.mark.parametrize(
    "raw", ["31-12-2023", "2023/12/31", "2023-02-30", "tomorrow", "2024-1-5", "2024-01-5"]
)
def test_parse_due_date_rejects_malformed_input(raw: str) -> None:
    with pytest.raises(ValidationError, match="yyyy-MM-dd"):
        parse_due_date(raw)


def test_task_rejects_blank_title(make_task) -> None:
    with pytest.raises(ValidationError, match="Title cannot be empty"):
        make_task("   ")


def test_task_rejects_raw_strings_for_enums() -> None:
    with pytest.raises(ValidationError):
        Task(
            title="x",
            description="",
            due_date=date(2024, 1, 1),
            priority="HIGH",  # type: ignore[arg-type]
            status=Status.TODO,
        )


def test_task_rejects_datetime_due_date() -> None:
    with pytest.raises(ValidationError):
        Task(
            title="x",
            description="",
            due_date=datetime(2024, 1, 1, 9, 30),
            priority=Priority.LOW,
            status=Status.TODO,
        )


def test_new_task_has_no_id_and_with_changes_replaces_fields(make_task) -> None:
    task = make_task("Pay rent", category="home")
    assert task.id is None

    changed = task.with_changes(status=Status.COMPLETED, category=None)
    assert changed.status is Status.COMPLETED
    assert changed.category is None
    assert changed.title == "Pay rent"
    # value semantics: the original is untouched
    assert task.status is Status.TODO
    assert task.category == "home"

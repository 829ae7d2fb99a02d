# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import logging
import sqlite3
from datetime import date, timedelta
from pathlib import Path
from typing import Any

from .task_errors import StorageError
from .task_models import CATEGORY_MAX_LEN, TITLE_MAX_LEN, Priority, Status, Task

logger = logging.getLogger(__name__)


def _rank_case(column: str, enum_cls: type[Priority] | type[Status]) -> str:
    """ORDER BY expression sorting an enum column by declaration order."""
    whens = " ".join(f"WHEN '{m.value}' THEN {m.rank}" for m in enum_cls)
    return f"CASE {column} {whens} END"


# Normalized field name -> ORDER BY clause. Ties break by id so results are stable.
_ORDER_BY: dict[str, str] = {
    "duedate": "due_date ASC, id ASC",
    "priority": f"{_rank_case('priority', Priority)} ASC, id ASC",
    "status": f"{_rank_case('status', Status)} ASC, id ASC",
    "title": "title ASC, id ASC",
}

SORT_FIELDS: tuple[str, ...] = tuple(_ORDER_BY)


def normalize_sort_field(field: str) -> str:
    """'dueDate', 'due_date' and 'due-date' all map to 'duedate'."""
    return (field or "").strip().lower().replace("_", "").replace("-", "")


SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1


def fits_sqlite_int(value: int) -> bool:
    return SQLITE_INT_MIN <= value <= SQLITE_INT_MAX


def window_end(start: date, days: int) -> date:
    """Last day of an inclusive [start, start + days] window, capped at date.max."""
    try:
        return start + timedelta(days=int(days))
    except OverflowError:
        return date.max


def _escape_like(keyword: str) -> str:
    return keyword.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class TaskStore:
    """
    SQLite task store.

    One table, created if missing. Column limits and enum domains are CHECK
    constraints, so the engine itself rejects invalid rows.

    Each method opens its own SQLite connection and commits before returning;
    there is no transaction spanning several calls.
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._ensure_schema()
        except (OSError, sqlite3.Error) as e:
            logger.error("TaskStore init failed db=%s: %s", self._db_path, e)
            raise StorageError(f"Cannot open task database {self._db_path}: {e}") from e
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        priorities = ", ".join(f"'{p.value}'" for p in Priority)
        statuses = ", ".join(f"'{s.value}'" for s in Status)

        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                f"""
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL
                        CHECK (length(trim(title)) > 0 AND length(title) <= {TITLE_MAX_LEN}),
                    description TEXT NOT NULL DEFAULT '',
                    due_date TEXT NOT NULL,
                    priority TEXT NOT NULL CHECK (priority IN ({priorities})),
                    status TEXT NOT NULL CHECK (status IN ({statuses})),
                    category TEXT
                        CHECK (category IS NULL OR length(category) <= {CATEGORY_MAX_LEN})
                )
                """
            )
            cur.execute("CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks(due_date)")
            conn.commit()
        finally:
            conn.close()

    def _query(self, sql: str, params: tuple[Any, ...] = ()) -> list[Task]:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(sql, params)
            return [self._row_to_task(r) for r in cur.fetchall()]
        except sqlite3.Error as e:
            logger.exception("Task query failed")
            raise StorageError(f"Failed to read tasks: {e}") from e
        finally:
            conn.close()

    def _execute(self, sql: str, params: tuple[Any, ...], action: str) -> tuple[int, int | None]:
        """Run one write statement; returns (rowcount, lastrowid)."""
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(sql, params)
            conn.commit()
            return cur.rowcount, cur.lastrowid
        except sqlite3.IntegrityError as e:
            logger.info("Task %s rejected by constraint: %s", action, e)
            raise StorageError(f"Failed to {action} task: {e}") from e
        except sqlite3.Error as e:
            logger.exception("Task %s failed", action)
            raise StorageError(f"Failed to {action} task: {e}") from e
        finally:
            conn.close()

    @staticmethod
    def _task_params(task: Task) -> tuple[Any, ...]:
        return (
            task.title,
            task.description,
            task.due_date.isoformat(),
            task.priority.value,
            task.status.value,
            task.category,
        )

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            title=str(row["title"]),
            description=str(row["description"] or ""),
            due_date=date.fromisoformat(row["due_date"]),
            priority=Priority.from_db(row["priority"]),
            status=Status.from_db(row["status"]),
            category=row["category"],
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        except sqlite3.Error as e:
            raise StorageError(f"Failed to count tasks: {e}") from e
        finally:
            conn.close()

    def create(self, task: Task) -> int:
        if task.id is not None:
            raise ValueError("task is already stored (id is set)")

        _, rowid = self._execute(
            """
            INSERT INTO tasks(title, description, due_date, priority, status, category)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            self._task_params(task),
            "create",
        )
        if rowid is None:
            raise StorageError("SQLite did not return lastrowid for tasks insert")
        task_id = int(rowid)
        logger.debug(
            "Task added id=%s due=%s priority=%s status=%s",
            task_id,
            task.due_date,
            task.priority.value,
            task.status.value,
        )
        return task_id

    def get_all(self) -> list[Task]:
        return self._query("SELECT * FROM tasks")

    def get_by_id(self, task_id: int) -> Task | None:
        if not fits_sqlite_int(int(task_id)):
            return None
        rows = self._query("SELECT * FROM tasks WHERE id = ?", (int(task_id),))
        return rows[0] if rows else None

    def update(self, task: Task) -> bool:
        """Replace every column of the row identified by task.id."""
        if task.id is None:
            raise ValueError("task id is required for update")
        if not fits_sqlite_int(int(task.id)):
            return False

        rowcount, _ = self._execute(
            """
            UPDATE tasks
            SET title = ?, description = ?, due_date = ?,
                priority = ?, status = ?, category = ?
            WHERE id = ?
            """,
            (*self._task_params(task), int(task.id)),
            "update",
        )
        updated = rowcount == 1
        logger.debug("Task update id=%s matched=%s", task.id, updated)
        return updated

    def delete(self, task_id: int) -> bool:
        # No stored row can carry an id outside SQLite's INTEGER range.
        if not fits_sqlite_int(int(task_id)):
            return False
        rowcount, _ = self._execute("DELETE FROM tasks WHERE id = ?", (int(task_id),), "delete")
        deleted = rowcount == 1
        logger.debug("Task delete id=%s matched=%s", task_id, deleted)
        return deleted

    def search(self, keyword: str) -> list[Task]:
        """
        Substring match on title, description or category (OR).

        LIKE is case-insensitive for ASCII in SQLite; wildcards in keyword are literal.
        """
        pattern = f"%{_escape_like(keyword)}%"
        return self._query(
            """
            SELECT *
            FROM tasks
            WHERE title LIKE ? ESCAPE '\\'
               OR description LIKE ? ESCAPE '\\'
               OR (category IS NOT NULL AND category LIKE ? ESCAPE '\\')
            """,
            (pattern, pattern, pattern),
        )

    def filter_by_category(self, category: str) -> list[Task]:
        return self._query("SELECT * FROM tasks WHERE category = ?", (category,))

    def sorted_by(self, field: str) -> list[Task]:
        """
        All tasks ordered by dueDate, priority, status or title.

        An unrecognized field returns every task unordered instead of failing.
        """
        order_by = _ORDER_BY.get(normalize_sort_field(field))
        if order_by is None:
            logger.debug("Unknown sort field %r, returning unordered tasks", field)
            return self.get_all()
        return self._query(f"SELECT * FROM tasks ORDER BY {order_by}")

    def due_within_days(self, days: int, today: date | None = None) -> list[Task]:
        """Tasks due in the inclusive window [today, today + days]."""
        if days < 0:
            raise ValueError("days must be >= 0")
        start = today or date.today()
        end = window_end(start, days)
        # ISO dates compare correctly as text.
        return self._query(
            """
            SELECT *
            FROM tasks
            WHERE due_date >= ? AND due_date <= ?
            ORDER BY due_date ASC, id ASC
            """,
            (start.isoformat(), end.isoformat()),
        )

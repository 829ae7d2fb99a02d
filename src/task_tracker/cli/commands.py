# src/task_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.ports import Prompt
from ..core.state import AppState
from ..tasks.task_errors import ValidationError
from ..tasks.task_models import (
    DATE_FORMAT_HINT,
    Priority,
    Status,
    Task,
    format_due_date,
    parse_due_date,
)
from ..tasks.task_service import NEXT_WEEK_DAYS
from ..tasks.task_store import SORT_FIELDS, fits_sqlite_int

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], Prompt, CommandEmitter], str]

logger = logging.getLogger(__name__)

UNKNOWN_COMMAND = "Unknown command. Type 'help' to see available commands."


class CommandRegistry:
    """
    Word-command registry used by the console connector (add, list, help, ...).

    Handlers receive the words after the command name, a prompt for follow-up
    questions and an emitter for intermediate notices; they return the final reply.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def names(self) -> list[str]:
        return list(self._help)

    def handle(
        self,
        state: AppState,
        line: str,
        ask: Prompt,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a line like "view 3".
        Returns a reply string, or None for an empty line.
        """
        parts = line.split()
        if not parts:
            return None

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return UNKNOWN_COMMAND

        logger.debug("Command %s args=%s", name, args)
        return handler(state, args, ask, emit or (lambda _text: None))

    def build_help(self) -> str:
        width = max((len(n) for n in self._help), default=0)
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  {name.ljust(width)} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- formatting ----

_ROW_FORMAT = "| {:<4} | {:<25} | {:<10} | {:<8} | {:<12} | {:<10} |"


def format_task_table(tasks: list[Task]) -> str:
    lines = [
        _ROW_FORMAT.format("ID", "Title", "Due Date", "Priority", "Status", "Category"),
        "-" * 80,
    ]
    for t in tasks:
        lines.append(
            _ROW_FORMAT.format(
                str(t.id),
                t.title[:25],
                format_due_date(t.due_date),
                t.priority.value,
                t.status.value,
                (t.category or "-")[:10],
            )
        )
    return "\n".join(lines)


def format_task_details(task: Task) -> str:
    return "\n".join(
        [
            f"=== Task {task.id} ===",
            f"Title: {task.title}",
            f"Description: {task.description}",
            f"Due Date: {format_due_date(task.due_date)}",
            f"Priority: {task.priority.value}",
            f"Status: {task.status.value}",
            f"Category: {task.category or 'None'}",
        ]
    )


# ---- input helpers ----


def _arg_or_ask(args: list[str], ask: Prompt, prompt: str) -> str:
    if args:
        return " ".join(args).strip()
    return ask(prompt).strip()


def _parse_id(raw: str) -> int | None:
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    return value if fits_sqlite_int(value) else None


# ---- commands ----


def cmd_help(state: AppState, args: list[str], ask: Prompt, emit: CommandEmitter) -> str:
    return "\n".join(
        [
            f"=== {getattr(state.settings, 'app_name', 'Task Manager')} Help ===",
            "This application allows you to manage your tasks.",
            "",
            registry.build_help(),
            "",
            f"Date format: {DATE_FORMAT_HINT}",
            f"Priority levels: {Priority.options()}",
            f"Status options: {Status.options()}",
        ]
    )


def cmd_add(state: AppState, args: list[str], ask: Prompt, emit: CommandEmitter) -> str:
    """
    Create a task. The first invalid answer aborts the whole command.

    Empty answers default: due date -> today, priority -> MEDIUM, status -> TODO.
    """
    title = _arg_or_ask(args, ask, "Title: ")
    if not title:
        return "Title cannot be empty"

    description = ask("Description: ").strip()

    raw_date = ask("Due Date (yyyy-MM-dd): ").strip()
    if raw_date:
        due_date = parse_due_date(raw_date)
    else:
        emit("Using today's date")
        due_date = state.tasks.today()

    raw_priority = ask(f"Priority ({Priority.options()}): ").strip()
    if raw_priority:
        priority = Priority.parse(raw_priority)
    else:
        emit(f"Using default priority: {Priority.MEDIUM.value}")
        priority = Priority.MEDIUM

    raw_status = ask(f"Status ({Status.options()}): ").strip()
    if raw_status:
        status = Status.parse(raw_status)
    else:
        emit(f"Using default status: {Status.TODO.value}")
        status = Status.TODO

    category = ask("Category (optional): ").strip() or None

    task_id = state.tasks.create_task(title, description, due_date, priority, status, category)
    logger.info("Task created id=%s", task_id)
    return f"Task created with ID: {task_id}"


def cmd_list(state: AppState, args: list[str], ask: Prompt, emit: CommandEmitter) -> str:
    tasks = state.tasks.get_all_tasks()
    if not tasks:
        return "No tasks found"
    return "=== All Tasks ===\n" + format_task_table(tasks)


def cmd_view(state: AppState, args: list[str], ask: Prompt, emit: CommandEmitter) -> str:
    task_id = _parse_id(_arg_or_ask(args, ask, "Enter task ID: "))
    if task_id is None:
        return "Invalid ID"

    task = state.tasks.get_task_by_id(task_id)
    if task is None:
        return "Task not found"
    return format_task_details(task)


def cmd_edit(state: AppState, args: list[str], ask: Prompt, emit: CommandEmitter) -> str:
    """
    Replace a task field by field. Enter keeps the current value.

    Unlike add, an invalid date/priority/status keeps the previous value
    instead of aborting. Category "none" clears it.
    """
    task_id = _parse_id(_arg_or_ask(args, ask, "Enter task ID to edit: "))
    if task_id is None:
        return "Invalid ID"

    existing = state.tasks.get_task_by_id(task_id)
    if existing is None:
        return "Task not found"

    emit(f"=== Edit Task {task_id} ===\n(Press Enter to keep current value)")

    title = ask(f"Title [{existing.title}]: ").strip() or existing.title
    description = ask(f"Description [{existing.description}]: ").strip() or existing.description

    due_date = existing.due_date
    raw_date = ask(f"Due Date [{format_due_date(existing.due_date)}] (yyyy-MM-dd): ").strip()
    if raw_date:
        try:
            due_date = parse_due_date(raw_date)
        except ValidationError:
            emit("Invalid date, keeping current value")

    priority = existing.priority
    raw_priority = ask(f"Priority [{existing.priority.value}] ({Priority.options()}): ").strip()
    if raw_priority:
        try:
            priority = Priority.parse(raw_priority)
        except ValidationError:
            emit("Invalid priority, keeping current value")

    status = existing.status
    raw_status = ask(f"Status [{existing.status.value}] ({Status.options()}): ").strip()
    if raw_status:
        try:
            status = Status.parse(raw_status)
        except ValidationError:
            emit("Invalid status, keeping current value")

    raw_category = ask(f"Category [{existing.category or 'None'}]: ").strip()
    if not raw_category:
        category = existing.category
    elif raw_category.lower() == "none":
        category = None
    else:
        category = raw_category

    updated = existing.with_changes(
        title=title,
        description=description,
        due_date=due_date,
        priority=priority,
        status=status,
        category=category,
    )
    if state.tasks.update_task(updated):
        return "Task updated successfully"
    return "Failed to update task"


def cmd_delete(state: AppState, args: list[str], ask: Prompt, emit: CommandEmitter) -> str:
    task_id = _parse_id(_arg_or_ask(args, ask, "Enter task ID to delete: "))
    if task_id is None:
        return "Invalid ID"

    confirmation = ask(f"Are you sure you want to delete task {task_id}? (yes/no): ")
    if confirmation.strip().lower() not in ("yes", "y"):
        return "Deletion cancelled"

    if state.tasks.delete_task(task_id):
        return "Task deleted successfully"
    return "Failed to delete task. Task may not exist."


def cmd_search(state: AppState, args: list[str], ask: Prompt, emit: CommandEmitter) -> str:
    keyword = _arg_or_ask(args, ask, "Enter search keyword: ")
    if not keyword:
        return "Search keyword cannot be empty"

    tasks = state.tasks.search_tasks(keyword)
    if not tasks:
        return f"No tasks found for keyword: {keyword}"
    return f"Search results for: {keyword}\n" + format_task_table(tasks)


def cmd_sort(state: AppState, args: list[str], ask: Prompt, emit: CommandEmitter) -> str:
    fields = ", ".join(SORT_FIELDS)
    field = _arg_or_ask(args, ask, f"Sort by ({fields}): ").lower()

    # The store falls back to unordered results; the shell is stricter.
    if field not in SORT_FIELDS:
        return "Invalid sort field"

    tasks = state.tasks.get_tasks_sorted_by(field)
    if not tasks:
        return "No tasks found"
    return f"Tasks sorted by {field}:\n" + format_task_table(tasks)


def cmd_stats(state: AppState, args: list[str], ask: Prompt, emit: CommandEmitter) -> str:
    stats = state.tasks.get_task_statistics()
    return "\n".join(
        [
            "=== Task Statistics ===",
            f"Total tasks: {stats.total_tasks}",
            f"Completed tasks: {stats.completed_tasks}",
            f"Completion rate: {stats.completion_rate:.1f}%",
            f"Tasks due today: {stats.due_today_tasks}",
            f"Overdue tasks: {stats.overdue_tasks}",
            f"Tasks due in next week: {stats.due_next_week_tasks}",
            f"High priority tasks: {stats.high_priority_tasks}",
        ]
    )


def cmd_upcoming(state: AppState, args: list[str], ask: Prompt, emit: CommandEmitter) -> str:
    """
    upcoming       -> tasks due in the next 7 days (inclusive of today)
    upcoming <n>   -> tasks due in the next n days
    """
    days = NEXT_WEEK_DAYS
    if args:
        parsed = _parse_id(args[0])
        if parsed is None or parsed < 0:
            return "Usage: upcoming [days]"
        days = parsed

    tasks = state.tasks.get_tasks_due_within(days)
    if not tasks:
        return f"No tasks due in the next {days} days"
    return f"=== Tasks Due in Next {days} Days ===\n" + format_task_table(tasks)


def cmd_category(state: AppState, args: list[str], ask: Prompt, emit: CommandEmitter) -> str:
    category = _arg_or_ask(args, ask, "Enter category: ")
    if not category:
        return "Category cannot be empty"

    tasks = state.tasks.get_tasks_by_category(category)
    if not tasks:
        return f"No tasks in category: {category}"
    return f"Tasks in category: {category}\n" + format_task_table(tasks)


def cmd_exit(state: AppState, args: list[str], ask: Prompt, emit: CommandEmitter) -> str:
    state.running = False
    return "Goodbye!"


registry.register("add", cmd_add, help_text="Add a new task.")
registry.register("list", cmd_list, help_text="List all tasks.", aliases=["ls"])
registry.register("view", cmd_view, help_text="View task details: view [id].")
registry.register("edit", cmd_edit, help_text="Edit a task: edit [id].")
registry.register("delete", cmd_delete, help_text="Delete a task: delete [id].", aliases=["rm"])
registry.register("search", cmd_search, help_text="Search title/description/category: search [keyword].")
registry.register("sort", cmd_sort, help_text="Sort tasks: sort [duedate|priority|status|title].")
registry.register("stats", cmd_stats, help_text="Show task statistics.")
registry.register("upcoming", cmd_upcoming, help_text="Tasks due in the next 7 days: upcoming [days].")
registry.register("category", cmd_category, help_text="Tasks in a category: category [name].")
registry.register("help", cmd_help, help_text="Show help.", aliases=["h", "?"])
registry.register("exit", cmd_exit, help_text="Exit the application.", aliases=["quit"])

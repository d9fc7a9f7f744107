# src/todo_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from ..core.state import AppState
from ..tasks.task_models import Task
from ..tasks.task_service import TaskValidationError

CommandHandler = Callable[[AppState, str], str]

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "|"


class CommandRegistry:
    """Simple slash-command registry used by the console loop (/help, /add, ...)."""

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

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        name, _, rest = line[1:].strip().partition(" ")
        if not name:
            return "Empty command. Use /help to list available commands."

        handler = self._handlers.get(name.lower())
        if not handler:
            return f"Unknown command: /{name.lower()}. Use /help to list available commands."

        try:
            return handler(state, rest.strip())
        except Exception:
            logger.exception("Command handler crashed: /%s", name)
            return "Internal error while handling a command."

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def _parse_id(arg: str) -> int | None:
    token = arg.split(maxsplit=1)[0] if arg.strip() else ""
    try:
        return int(token)
    except ValueError:
        return None


def _split_fields(text: str) -> tuple[str, str | None]:
    """'title | description' -> ('title', 'description'); no separator -> (text, None)."""
    if FIELD_SEPARATOR not in text:
        return text.strip(), None
    left, _, right = text.partition(FIELD_SEPARATOR)
    return left.strip(), right.strip()


def _format_list(header: str, tasks: Iterable[Task], empty: str) -> str:
    items = [str(t) for t in tasks]
    if not items:
        return empty
    return "\n".join([header, *items])


_INVALID_ID = "Invalid input! Please enter a number."


# ---- handlers ----


def cmd_help(state: AppState, arg: str) -> str:
    return registry.build_help()


def cmd_add(state: AppState, arg: str) -> str:
    """/add <title> [| <description>]"""
    title, description = _split_fields(arg)
    try:
        task = state.service.add_task(title, description)
    except TaskValidationError as e:
        return f"Error: {e}"
    return f"Task added successfully (ID={task.id})."


def cmd_delete(state: AppState, arg: str) -> str:
    task_id = _parse_id(arg)
    if task_id is None:
        return _INVALID_ID
    if state.service.delete_task(task_id):
        return "Success: Task deleted."
    return f"Error: Task with ID {task_id} not found."


def cmd_show(state: AppState, arg: str) -> str:
    task_id = _parse_id(arg)
    if task_id is None:
        return _INVALID_ID
    task = state.service.get_task_by_id(task_id)
    if task is None:
        return f"Error: Task with ID {task_id} not found."
    return f"Task Found: {task}"


def cmd_edit(state: AppState, arg: str) -> str:
    """
    /edit <id> <title> [| <description>]

    Leave a part empty to keep the current value, e.g. "/edit 3 | new description".
    """
    task_id = _parse_id(arg)
    if task_id is None:
        return _INVALID_ID
    parts = arg.split(maxsplit=1)
    title, description = _split_fields(parts[1] if len(parts) > 1 else "")
    if state.service.update_task_details(task_id, title, description):
        return "Task updated successfully."
    return f"Error: Task with ID {task_id} not found."


def cmd_done(state: AppState, arg: str) -> str:
    task_id = _parse_id(arg)
    if task_id is None:
        return _INVALID_ID
    if state.service.mark_task_as_done(task_id):
        return "Status updated."
    return f"Warning: Task with ID {task_id} not found."


def cmd_search(state: AppState, arg: str) -> str:
    results = state.service.search_tasks(arg)
    if not results:
        return f"No tasks found matching: {arg}"
    return _format_list(f"Found {len(results)} tasks:", results, "")


def cmd_list(state: AppState, arg: str) -> str:
    return _format_list("--- All Tasks ---", state.service.get_all_tasks(), "No tasks available.")


def cmd_sorted(state: AppState, arg: str) -> str:
    return _format_list(
        "--- Tasks Sorted by Status (NEW -> DONE) ---",
        state.service.get_tasks_sorted_by_status(),
        "No tasks available.",
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add <title> | <description>.", aliases=["a"])
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <id>.", aliases=["rm"])
registry.register("show", cmd_show, help_text="Show one task: /show <id>.", aliases=["get"])
registry.register(
    "edit",
    cmd_edit,
    help_text="Update details: /edit <id> <title> | <description> (empty part keeps current value).",
    aliases=["update"],
)
registry.register("done", cmd_done, help_text="Mark a task as DONE: /done <id>.")
registry.register("search", cmd_search, help_text="Search title/description: /search <text>.", aliases=["find"])
registry.register("list", cmd_list, help_text="List all tasks.", aliases=["ls"])
registry.register("sorted", cmd_sorted, help_text="List tasks sorted by status (NEW -> DONE).")

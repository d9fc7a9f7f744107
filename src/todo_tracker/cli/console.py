# src/todo_tracker/cli/console.py

from __future__ import annotations

import logging

from ..core.state import AppState
from .commands import registry as command_registry

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/exit", "/quit")


def _storage_warning(state: AppState, already_reported: OSError | None) -> str | None:
    """Warning text for a save error not reported yet; each failed save raises a new error."""
    err = state.task_store.last_save_error
    if err is None or err is already_reported:
        return None
    return f"Warning: changes are kept in memory but could not be saved to {state.task_store.path} ({err})."


def run_console_loop(state: AppState, *, read=input, write=print) -> None:
    """
    Read commands until /exit, EOF or Ctrl+C.

    `read` and `write` are injectable so the loop can be driven from tests.
    """
    app_name = str(getattr(state.settings, "app_name", "todo-tracker"))
    logger.info("Console started tasks=%s", state.task_store.count())
    write(f"Welcome to {app_name}! Use /help for commands. Use /exit to quit.")
    reported: OSError | None = None

    while True:
        try:
            line = read(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not line:
            continue

        if line.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            write("Exiting... Goodbye!")
            break

        response = command_registry.handle(state, line)
        if response is None:
            response = "Invalid option. Commands start with '/'; try /help."
        write(response)

        warning = _storage_warning(state, reported)
        if warning:
            write(warning)
        reported = state.task_store.last_save_error

    logger.info("Console finished.")

# src/todo_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- wires FileTaskStore -> TaskService into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_service import TaskService
from ..tasks.task_store import FileTaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    store = FileTaskStore(settings.tasks_file)
    state = AppState(
        settings=settings,
        task_store=store,
        service=TaskService(store),
    )
    logger.debug("State ready tasks_file=%s", settings.tasks_file)
    return state

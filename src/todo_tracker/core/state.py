# src/todo_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_service import TaskService
from ..tasks.task_store import FileTaskStore


@dataclass
class AppState:
    # Settings object (config.Settings or a test SimpleNamespace).
    settings: object

    task_store: FileTaskStore
    service: TaskService

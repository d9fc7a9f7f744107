# src/todo_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the service layer.

TaskService depends on this Protocol instead of FileTaskStore.
This keeps the storage swappable and makes testing easier.
"""

from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    """
    Task storage contract.

    - add assigns the id and returns the stored task
    - update/delete return False when no task has that id
    - get_by_id/list_all return copies; mutate them and call update()
    """

    def add(self, task: Task) -> Task: ...
    def update(self, task: Task) -> bool: ...
    def delete(self, task_id: int) -> bool: ...
    def get_by_id(self, task_id: int) -> Task | None: ...
    def list_all(self) -> list[Task]: ...

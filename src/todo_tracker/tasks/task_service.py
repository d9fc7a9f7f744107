# src/todo_tracker/tasks/task_service.py

from __future__ import annotations

import logging

from ..core.ports import TaskRepo
from .task_models import Task, TaskStatus, sort_key

logger = logging.getLogger(__name__)


class TaskValidationError(ValueError):
    """Input rejected before any state change (e.g. blank title)."""


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class TaskService:
    """
    Business rules on top of a TaskRepo.

    - titles are required; descriptions default to ""
    - the only status transition is mark_task_as_done (any -> DONE)
    - unknown ids are reported as False/None, never raised
    """

    def __init__(self, repo: TaskRepo) -> None:
        self._repo = repo

    def add_task(self, title: str | None, description: str | None = None) -> Task:
        if _is_blank(title):
            raise TaskValidationError("Task title cannot be empty.")
        task = self._repo.add(Task(title=title, description=description or ""))
        logger.info("Task created id=%s", task.id)
        return task

    def delete_task(self, task_id: int) -> bool:
        if self._repo.get_by_id(task_id) is None:
            return False
        self._repo.delete(task_id)
        logger.info("Task deleted id=%s", task_id)
        return True

    def get_all_tasks(self) -> list[Task]:
        return self._repo.list_all()

    def get_task_by_id(self, task_id: int) -> Task | None:
        return self._repo.get_by_id(task_id)

    def update_task_details(
        self,
        task_id: int,
        new_title: str | None,
        new_description: str | None,
    ) -> bool:
        """
        Update title and/or description. Blank or None input keeps the
        current value. Returns True whenever the task exists, even if
        nothing changed.
        """
        task = self._repo.get_by_id(task_id)
        if task is None:
            return False
        if not _is_blank(new_title):
            task.title = new_title
        if not _is_blank(new_description):
            task.description = new_description
        self._repo.update(task)
        logger.info("Task details updated id=%s", task_id)
        return True

    def mark_task_as_done(self, task_id: int) -> bool:
        task = self._repo.get_by_id(task_id)
        if task is None:
            return False
        task.status = TaskStatus.DONE
        self._repo.update(task)
        logger.info("Task marked done id=%s", task_id)
        return True

    def search_tasks(self, text: str | None) -> list[Task]:
        """Case-insensitive substring match on title or description. Blank text returns everything."""
        tasks = self._repo.list_all()
        if _is_blank(text):
            return tasks
        needle = text.lower()
        return [t for t in tasks if needle in t.title.lower() or needle in t.description.lower()]

    def get_tasks_sorted_by_status(self) -> list[Task]:
        # sorted() is stable: equal statuses keep listing order.
        return sorted(self._repo.list_all(), key=sort_key)

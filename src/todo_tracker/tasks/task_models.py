# src/todo_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    Notes:
    - the value is the exact name written to the tasks file
    - declaration order is the sort order (NEW < IN_PROGRESS < DONE);
      compare with `rank`, not with the string values
    """

    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"

    @property
    def rank(self) -> int:
        return _STATUS_ORDER.index(self)

    @classmethod
    def from_name(cls, raw: str) -> TaskStatus:
        """Exact-name lookup. Raises KeyError for anything else."""
        return cls[raw]


_STATUS_ORDER: tuple[TaskStatus, ...] = tuple(TaskStatus)


@dataclass(slots=True)
class Task:
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.NEW
    # 0 until the store assigns one.
    id: int = 0

    def __str__(self) -> str:
        return (
            f"Task [ID={self.id}, Title={self.title}, "
            f"Description={self.description}, Status={self.status.value}]"
        )


def sort_key(task: Task) -> int:
    return task.status.rank

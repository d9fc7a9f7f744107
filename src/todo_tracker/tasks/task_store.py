# src/todo_tracker/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import os
from dataclasses import replace
from pathlib import Path

from .task_codec import decode_tasks, encode_tasks, next_id_after
from .task_models import Task

logger = logging.getLogger(__name__)


class FileTaskStore:
    """
    File-backed task store.

    The whole collection lives in memory; the file is a mirror:
    - loaded once, at construction
    - rewritten in full after every add/update/delete (no append, no batching)

    Storage errors never propagate. They are logged and kept in
    `last_save_error` so callers can surface a warning.

    Thread-safety:
    - none; one process owns the file for its lifetime
    """

    def __init__(self, path: str | Path = "tasks.json") -> None:
        self._path = Path(path)
        self._tasks: list[Task] = []
        self._next_id = 1
        self.last_save_error: OSError | None = None
        self._load()
        logger.info("FileTaskStore ready path=%s total=%s next_id=%s", self._path, len(self._tasks), self._next_id)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def next_id(self) -> int:
        return self._next_id

    # ---- low-level helpers ----

    def _load(self) -> None:
        if not self._path.exists():
            logger.debug("No tasks file at %s; starting empty.", self._path)
            return
        try:
            content = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.exception("Failed to read tasks from %s; starting empty.", self._path)
            return

        loaded = decode_tasks(content)
        self._next_id = next_id_after(loaded)

        # Hand-edited files may carry id 0 or duplicates; keep ids unique and positive.
        seen: set[int] = set()
        for task in loaded:
            if task.id <= 0 or task.id in seen:
                old_id = task.id
                task.id = self._allocate_id()
                logger.warning("Task %r had invalid id=%s; reassigned id=%s", task.title, old_id, task.id)
            seen.add(task.id)

        self._tasks = loaded
        logger.debug("Loaded %d tasks from %s", len(loaded), self._path)

    def _save(self) -> bool:
        content = encode_tasks(self._tasks)
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(content, encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            self.last_save_error = e
            logger.exception("Failed to save tasks to %s", self._path)
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            return False
        self.last_save_error = None
        return True

    def _allocate_id(self) -> int:
        nid = self._next_id
        self._next_id += 1
        return nid

    def _index_of(self, task_id: int) -> int:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return -1

    # ---- public API ----

    def count(self) -> int:
        return len(self._tasks)

    def add(self, task: Task) -> Task:
        stored = replace(task, id=self._allocate_id())
        self._tasks.append(stored)
        self._save()
        logger.debug("Task added id=%s status=%s", stored.id, stored.status.value)
        return replace(stored)

    def update(self, task: Task) -> bool:
        """Replace the task with the same id in place. Returns False (and writes nothing) if missing."""
        idx = self._index_of(task.id)
        if idx < 0:
            logger.debug("Update skipped: no task id=%s", task.id)
            return False
        self._tasks[idx] = replace(task)
        self._save()
        logger.debug("Task updated id=%s status=%s", task.id, task.status.value)
        return True

    def delete(self, task_id: int) -> bool:
        """Remove every task with this id. The file is rewritten even if nothing matched."""
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        removed = before - len(self._tasks)
        self._save()
        logger.debug("Task delete id=%s removed=%s", task_id, removed)
        return removed > 0

    def get_by_id(self, task_id: int) -> Task | None:
        idx = self._index_of(task_id)
        return replace(self._tasks[idx]) if idx >= 0 else None

    def list_all(self) -> list[Task]:
        return [replace(t) for t in self._tasks]

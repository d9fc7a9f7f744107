# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_tracker.cli.bootstrap import create_initial_state
from todo_tracker.core.state import AppState
from todo_tracker.tasks.task_service import TaskService
from todo_tracker.tasks.task_store import FileTaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="todo-test",
        log_level="WARNING",
        log_dir=tmp_path / "logs",
        log_to_file=False,
        tasks_file=tmp_path / "tasks.json",
    )


@pytest.fixture()
def tasks_file(settings: SimpleNamespace) -> Path:
    return settings.tasks_file


@pytest.fixture()
def store(tasks_file: Path) -> FileTaskStore:
    return FileTaskStore(tasks_file)


@pytest.fixture()
def service(store: FileTaskStore) -> TaskService:
    return TaskService(store)


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """AppState wired exactly like the CLI, but against a tmp tasks file."""
    return create_initial_state(settings=settings)

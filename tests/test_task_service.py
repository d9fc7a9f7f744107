# tests/test_task_service.py

from __future__ import annotations

from pathlib import Path

import pytest

from todo_tracker.tasks.task_codec import decode_tasks
from todo_tracker.tasks.task_models import Task, TaskStatus
from todo_tracker.tasks.task_service import TaskService, TaskValidationError
from todo_tracker.tasks.task_store import FileTaskStore

from .fakes import FakeTaskRepo


def test_add_task_creates_new_task(service: TaskService, tasks_file: Path) -> None:
    task = service.add_task("buy milk", "2 liters")
    assert task == Task(id=1, title="buy milk", description="2 liters", status=TaskStatus.NEW)
    assert decode_tasks(tasks_file.read_text(encoding="utf-8")) == [task]


def test_add_task_normalizes_missing_description(service: TaskService) -> None:
    assert service.add_task("title", None).description == ""
    assert service.add_task("title 2").description == ""


@pytest.mark.parametrize("title", [None, "", "   ", "\n\t"])
def test_add_task_rejects_blank_title(title) -> None:
    repo = FakeTaskRepo()
    service = TaskService(repo)
    with pytest.raises(TaskValidationError):
        service.add_task(title, "desc")
    # Rejected before any state change.
    assert repo.calls == []
    assert repo.tasks == []


def test_validation_error_is_a_value_error() -> None:
    assert issubclass(TaskValidationError, ValueError)


def test_ids_are_monotonic_across_deletes(service: TaskService) -> None:
    ids = [service.add_task(f"t{i}").id for i in range(4)]
    assert ids == [1, 2, 3, 4]
    assert service.delete_task(2) is True
    assert service.add_task("after delete").id == 5


def test_delete_task_reports_missing_id() -> None:
    repo = FakeTaskRepo([Task(id=1, title="a")])
    service = TaskService(repo)
    assert service.delete_task(7) is False
    assert ("delete", 7) not in repo.calls
    assert service.delete_task(1) is True
    assert service.get_task_by_id(1) is None


def test_get_task_by_id(service: TaskService) -> None:
    created = service.add_task("a", "b")
    assert service.get_task_by_id(created.id) == created
    assert service.get_task_by_id(999) is None


def test_update_blank_title_keeps_title(service: TaskService) -> None:
    task = service.add_task("original", "old desc")
    assert service.update_task_details(task.id, "   ", "new desc") is True
    updated = service.get_task_by_id(task.id)
    assert updated.title == "original"
    assert updated.description == "new desc"


def test_update_blank_description_keeps_description(service: TaskService) -> None:
    task = service.add_task("original", "old desc")
    assert service.update_task_details(task.id, "renamed", None) is True
    updated = service.get_task_by_id(task.id)
    assert updated.title == "renamed"
    assert updated.description == "old desc"


def test_update_with_nothing_to_change_still_returns_true() -> None:
    repo = FakeTaskRepo([Task(id=3, title="a", description="b")])
    service = TaskService(repo)
    assert service.update_task_details(3, "", "") is True
    assert repo.calls == [("update", 3)]
    assert repo.tasks == [Task(id=3, title="a", description="b")]


def test_update_missing_task_returns_false() -> None:
    repo = FakeTaskRepo()
    assert TaskService(repo).update_task_details(1, "x", "y") is False
    assert repo.calls == []


def test_mark_task_as_done_is_idempotent(service: TaskService) -> None:
    task = service.add_task("a")
    assert service.mark_task_as_done(task.id) is True
    assert service.mark_task_as_done(task.id) is True
    assert service.get_task_by_id(task.id).status is TaskStatus.DONE
    assert service.mark_task_as_done(404) is False


def test_mark_done_overwrites_any_status() -> None:
    repo = FakeTaskRepo([Task(id=1, title="a", status=TaskStatus.IN_PROGRESS)])
    assert TaskService(repo).mark_task_as_done(1) is True
    assert repo.tasks[0].status is TaskStatus.DONE


def test_search_is_case_insensitive(service: TaskService) -> None:
    service.add_task("buy milk")
    service.add_task("call mom", "about the MILKshake")
    service.add_task("walk dog")
    assert [t.title for t in service.search_tasks("MILK")] == ["buy milk", "call mom"]
    assert service.search_tasks("cat") == []


@pytest.mark.parametrize("text", [None, "", "   "])
def test_search_blank_returns_everything(service: TaskService, store: FileTaskStore, text) -> None:
    service.add_task("a")
    service.add_task("b", "c")
    assert service.search_tasks(text) == store.list_all()


def test_sorted_by_status_is_stable() -> None:
    repo = FakeTaskRepo(
        [
            Task(id=1, title="done", status=TaskStatus.DONE),
            Task(id=2, title="new-1", status=TaskStatus.NEW),
            Task(id=3, title="progress", status=TaskStatus.IN_PROGRESS),
            Task(id=4, title="new-2", status=TaskStatus.NEW),
        ]
    )
    ordered = TaskService(repo).get_tasks_sorted_by_status()
    assert [t.id for t in ordered] == [2, 4, 3, 1]
    # The underlying listing is untouched.
    assert [t.id for t in repo.list_all()] == [1, 2, 3, 4]


def test_get_all_tasks_keeps_insertion_order(service: TaskService) -> None:
    for title in ("c", "a", "b"):
        service.add_task(title)
    service.mark_task_as_done(1)
    assert [t.title for t in service.get_all_tasks()] == ["c", "a", "b"]


def test_status_order() -> None:
    assert [s.rank for s in TaskStatus] == [0, 1, 2]
    assert TaskStatus.from_name("IN_PROGRESS") is TaskStatus.IN_PROGRESS
    with pytest.raises(KeyError):
        TaskStatus.from_name("in_progress")

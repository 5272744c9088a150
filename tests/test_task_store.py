# tests/test_task_store.py

from __future__ import annotations

from datetime import date

import pytest

from month_planner.tasks.task_models import TaskDraft, TaskStatus
from month_planner.tasks.task_store import TaskStore

from .fakes import RecordingPersistence, SequentialIds, make_task


def test_create_assigns_ids_appends_and_persists(store: TaskStore, persistence: RecordingPersistence) -> None:
    a = store.create(TaskDraft(title="  Plan  ", start_date=date(2024, 5, 1), end_date=date(2024, 5, 3)))
    b = store.create(TaskDraft(title="Do", status=TaskStatus.REVIEW, start_date=date(2024, 5, 2)))

    assert (a.id, b.id) == ("t1", "t2")
    assert a.title == "Plan"
    assert b.end_date is None and b.effective_end == date(2024, 5, 2)
    assert [t.id for t in store.list_tasks()] == ["t1", "t2"]
    assert len(persistence.saves) == 2
    assert persistence.last_saved == store.list_tasks()


def test_create_requires_start_and_ordered_range(store: TaskStore, persistence: RecordingPersistence) -> None:
    with pytest.raises(ValueError):
        store.create(TaskDraft(title="no dates"))
    with pytest.raises(ValueError):
        store.create(TaskDraft(start_date=date(2024, 5, 3), end_date=date(2024, 5, 1)))
    assert store.count_tasks() == 0
    assert persistence.saves == []


def test_update_merges_fields(store: TaskStore, persistence: RecordingPersistence) -> None:
    t = store.create(TaskDraft(title="x", start_date=date(2024, 5, 1)))
    store.update(t.id, title="y", status="Completed", end_date=date(2024, 5, 4))

    got = store.get(t.id)
    assert got is not None
    assert (got.title, got.status, got.start_date, got.end_date) == (
        "y",
        TaskStatus.COMPLETED,
        date(2024, 5, 1),
        date(2024, 5, 4),
    )
    assert len(persistence.saves) == 2


def test_update_accepts_iso_strings_and_clearing_end(store: TaskStore) -> None:
    t = store.create(TaskDraft(start_date=date(2024, 5, 1), end_date=date(2024, 5, 2)))
    store.update(t.id, start_date="2024-06-01", end_date="2024-06-03")
    store.update(t.id, end_date=None)
    got = store.get(t.id)
    assert got is not None
    assert (got.start_date, got.end_date) == (date(2024, 6, 1), None)


def test_update_rejects_inverted_range_without_mutating(store: TaskStore) -> None:
    t = store.create(TaskDraft(start_date=date(2024, 5, 1), end_date=date(2024, 5, 2)))
    with pytest.raises(ValueError):
        store.update(t.id, end_date=date(2024, 4, 1))
    assert store.get(t.id) == t

    with pytest.raises(TypeError):
        store.update(t.id, color="red")


def test_update_and_delete_unknown_id_are_noops(store: TaskStore, persistence: RecordingPersistence) -> None:
    store.create(TaskDraft(start_date=date(2024, 5, 1)))
    saves = len(persistence.saves)

    store.update("missing", title="nope")
    store.delete("missing")

    assert store.count_tasks() == 1
    assert len(persistence.saves) == saves


def test_delete_removes_and_ids_are_never_reused(persistence: RecordingPersistence) -> None:
    ids = iter(["dup", "dup", "fresh"])
    store = TaskStore(persistence, id_generator=lambda: next(ids))

    t = store.create(TaskDraft(start_date=date(2024, 5, 1)))
    store.delete(t.id)
    assert store.get(t.id) is None

    again = store.create(TaskDraft(start_date=date(2024, 5, 1)))
    assert again.id == "fresh"


def test_loaded_ids_are_reserved() -> None:
    persistence = RecordingPersistence([make_task("t1", "2024-05-01")])
    store = TaskStore(persistence, id_generator=SequentialIds())
    assert store.create(TaskDraft(start_date=date(2024, 5, 2))).id == "t2"


def test_save_failure_keeps_in_memory_state() -> None:
    persistence = RecordingPersistence(fail_saves=True)
    store = TaskStore(persistence, id_generator=SequentialIds())

    t = store.create(TaskDraft(title="kept", start_date=date(2024, 5, 1)))
    assert store.get(t.id) == t


def test_reload_replaces_collection(persistence: RecordingPersistence, store: TaskStore) -> None:
    store.create(TaskDraft(start_date=date(2024, 5, 1)))
    persistence.initial = [make_task("x", "2024-01-01")]
    store.reload()
    assert [t.id for t in store.list_tasks()] == ["x"]

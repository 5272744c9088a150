# src/month_planner/tasks/task_store.py

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date
from typing import Any

from ..core.ports import IdGenerator, TaskPersistence
from .task_models import Task, TaskDraft, TaskStatus, parse_date

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"title", "status", "start_date", "end_date"})


def new_task_id() -> str:
    return uuid.uuid4().hex[:12]


class TaskStore:
    """
    Authoritative, insertion-ordered task collection.

    Every mutation is written through to the injected persistence
    collaborator. Updates and deletes of unknown ids are no-ops: the UI may
    still hold a reference to a task that an earlier interaction removed.
    """

    def __init__(
        self,
        persistence: TaskPersistence,
        *,
        id_generator: IdGenerator = new_task_id,
    ) -> None:
        self._persistence = persistence
        self._new_id = id_generator
        self._tasks: list[Task] = []
        self._issued_ids: set[str] = set()
        self.reload()
        logger.info("TaskStore ready total=%s", len(self._tasks))

    # ---- low-level helpers ----

    def _index_of(self, task_id: str) -> int | None:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        return None

    def _allocate_id(self) -> str:
        # Ids stay unique for the store's lifetime, deleted ones included.
        while True:
            task_id = self._new_id()
            if task_id and task_id not in self._issued_ids:
                self._issued_ids.add(task_id)
                return task_id

    def _persist(self) -> None:
        try:
            self._persistence.save(list(self._tasks))
        except Exception:
            logger.exception("Failed to persist %d tasks; in-memory state kept.", len(self._tasks))

    @staticmethod
    def _check_range(start: date, end: date | None) -> None:
        if end is not None and end < start:
            raise ValueError(f"end date {end} precedes start date {start}")

    # ---- queries ----

    def reload(self) -> None:
        """Replace the in-memory collection with what persistence holds."""
        self._tasks = list(self._persistence.load())
        self._issued_ids.update(t.id for t in self._tasks)

    def list_tasks(self) -> list[Task]:
        return list(self._tasks)

    def count_tasks(self) -> int:
        return len(self._tasks)

    def get(self, task_id: str) -> Task | None:
        idx = self._index_of(task_id)
        return None if idx is None else self._tasks[idx]

    # ---- mutations ----

    def create(self, draft: TaskDraft) -> Task:
        if draft.start_date is None:
            raise ValueError("start date is required")
        self._check_range(draft.start_date, draft.end_date)

        task = Task(
            id=self._allocate_id(),
            title=draft.title.strip(),
            status=TaskStatus.from_record(draft.status),
            start_date=draft.start_date,
            end_date=draft.end_date,
        )
        self._tasks.append(task)
        logger.debug(
            "Task created id=%s status=%s range=%s..%s",
            task.id,
            task.status.value,
            task.start_date,
            task.end_date,
        )
        self._persist()
        return task

    def update(self, task_id: str, **fields: Any) -> None:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise TypeError(f"unknown task fields: {', '.join(sorted(unknown))}")

        idx = self._index_of(task_id)
        if idx is None:
            logger.debug("Update ignored: no task id=%s", task_id)
            return

        changes: dict[str, Any] = {}
        if "title" in fields:
            changes["title"] = str(fields["title"] or "").strip()
        if "status" in fields:
            changes["status"] = TaskStatus.from_record(fields["status"])
        if "start_date" in fields:
            changes["start_date"] = parse_date(fields["start_date"])
        if "end_date" in fields:
            end_raw = fields["end_date"]
            changes["end_date"] = parse_date(end_raw) if end_raw else None

        updated = replace(self._tasks[idx], **changes)
        self._check_range(updated.start_date, updated.end_date)

        self._tasks[idx] = updated
        logger.debug("Task updated id=%s fields=%s", task_id, sorted(changes))
        self._persist()

    def delete(self, task_id: str) -> None:
        idx = self._index_of(task_id)
        if idx is None:
            logger.debug("Delete ignored: no task id=%s", task_id)
            return
        del self._tasks[idx]
        logger.debug("Task deleted id=%s", task_id)
        self._persist()

# src/month_planner/interaction/edit_form.py

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..tasks.task_models import Task, TaskDraft
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SaveDraft:
    draft: TaskDraft


@dataclass(frozen=True, slots=True)
class DeleteTask:
    task_id: str


@dataclass(frozen=True, slots=True)
class CancelEdit:
    pass


EditOutcome = SaveDraft | DeleteTask | CancelEdit


class AcceptEditForm:
    """Non-interactive form: saves every draft exactly as it was opened."""

    def edit(self, draft: TaskDraft) -> EditOutcome:
        return SaveDraft(draft)


def apply_edit_outcome(store: TaskStore, outcome: EditOutcome) -> Task | None:
    """
    Route what the edit form returned to the store.

    Save with an id updates, save without one creates. Returns the task as
    it is after the save, or None for delete/cancel. Raises ValueError for a
    draft the store rejects (missing start date, end before start).
    """
    match outcome:
        case SaveDraft(draft=draft) if draft.is_new:
            return store.create(draft)

        case SaveDraft(draft=draft):
            if draft.start_date is None:
                raise ValueError("start date is required")
            store.update(
                draft.id,
                title=draft.title,
                status=draft.status,
                start_date=draft.start_date,
                end_date=draft.end_date,
            )
            return store.get(draft.id)

        case DeleteTask(task_id=task_id):
            store.delete(task_id)
            return None

        case CancelEdit():
            logger.debug("Edit cancelled; nothing to apply.")
            return None

    raise TypeError(f"unsupported edit outcome: {outcome!r}")

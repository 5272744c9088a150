# src/month_planner/core/ports.py

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage and the edit form swappable and makes testing easier.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Protocol

if TYPE_CHECKING:
    from ..interaction.edit_form import EditOutcome
    from ..tasks.task_models import Task, TaskDraft


class TaskPersistence(Protocol):
    """
    Load/save of the whole task collection.

    load() must never raise for missing or corrupt data: it returns [] instead.
    save() is called after every mutation with the full current collection.
    """

    def load(self) -> list[Task]: ...
    def save(self, tasks: Iterable[Task]) -> None: ...


class IdGenerator(Protocol):
    """Produces new task ids; only uniqueness matters."""

    def __call__(self) -> str: ...


class EditForm(Protocol):
    """
    Edit-form collaborator.

    Receives a draft (existing task, or a new one with prefilled dates) and
    returns what the user decided: save, delete or cancel.
    """

    def edit(self, draft: TaskDraft) -> EditOutcome: ...

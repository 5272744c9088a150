# src/month_planner/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the persistence backend, TaskStore and InteractionController into AppState.
"""

from __future__ import annotations

import logging

from ..calendar.task_filter import TaskFilter
from ..config import get_settings
from ..core.ports import TaskPersistence
from ..core.state import AppState
from ..interaction.controller import InteractionController
from ..tasks.persistence import make_persistence
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, persistence: TaskPersistence | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and persistence injectable makes the app easier to test
    and avoids hidden global config reads. If settings is None, falls back to
    get_settings(); if persistence is None, the configured backend is used.
    """
    if settings is None:
        settings = get_settings()

    if persistence is None:
        _ensure_local_dirs(settings)
        persistence = make_persistence(settings)

    store = TaskStore(persistence)
    weeks = getattr(settings, "default_time_filter_weeks", None)

    state = AppState(
        settings=settings,
        task_store=store,
        controller=InteractionController(store),
        task_filter=TaskFilter(time_filter_weeks=weeks),
    )
    logger.info(
        "State ready backend=%s tasks=%d",
        getattr(settings, "storage_backend", "?"),
        store.count_tasks(),
    )
    return state

# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from month_planner.core.state import AppState
from month_planner.interaction.controller import InteractionController
from month_planner.tasks.task_store import TaskStore

from .fakes import RecordingPersistence, ScriptedEditForm, SequentialIds

TODAY = date(2024, 5, 15)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="month-planner-test",
        log_level="DEBUG",
        storage_backend="json",
        storage_key="monthPlannerTasks",
        data_dir=tmp_path,
        tasks_path=tmp_path / "tasks.json",
        tasks_db_path=tmp_path / "tasks.sqlite3",
        default_time_filter_weeks=None,
    )


@pytest.fixture()
def persistence() -> RecordingPersistence:
    return RecordingPersistence()


@pytest.fixture()
def store(persistence: RecordingPersistence) -> TaskStore:
    return TaskStore(persistence, id_generator=SequentialIds())


@pytest.fixture()
def controller(store: TaskStore) -> InteractionController:
    return InteractionController(store)


@pytest.fixture()
def edit_form() -> ScriptedEditForm:
    return ScriptedEditForm()


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    store: TaskStore,
    controller: InteractionController,
    edit_form: ScriptedEditForm,
) -> AppState:
    """
    AppState wired with deterministic fakes: recording persistence,
    sequential ids, a scripted edit form and a fixed clock.
    """
    return AppState(
        settings=settings,
        task_store=store,
        controller=controller,
        edit_form=edit_form,
        clock=lambda: TODAY,
    )

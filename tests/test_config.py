# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from month_planner.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PLANNER_APP_NAME",
        "PLANNER_STORAGE_BACKEND",
        "PLANNER_STORAGE_KEY",
        "PLANNER_DATA_DIR",
        "PLANNER_TASKS_PATH",
        "PLANNER_TASKS_DB_PATH",
        "PLANNER_TIME_FILTER_WEEKS",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()
    assert s.app_name == "month-planner"
    assert s.storage_backend == "json"
    assert s.storage_key == "monthPlannerTasks"
    assert s.tasks_path == Path(".local/month_planner") / "tasks.json"
    assert s.default_time_filter_weeks is None


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("PLANNER_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PLANNER_STORAGE_BACKEND", "SQLite")
    monkeypatch.setenv("PLANNER_TIME_FILTER_WEEKS", "2")
    monkeypatch.delenv("PLANNER_TASKS_DB_PATH", raising=False)

    s = Settings.from_env()
    assert s.storage_backend == "sqlite"
    assert s.tasks_db_path == tmp_path / "tasks.sqlite3"
    assert s.default_time_filter_weeks == 2


def test_invalid_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PLANNER_STORAGE_BACKEND", "redis")
    monkeypatch.setenv("PLANNER_TIME_FILTER_WEEKS", "soon")
    s = Settings.from_env()
    assert s.storage_backend == "json"
    assert s.default_time_filter_weeks is None

    monkeypatch.setenv("PLANNER_TIME_FILTER_WEEKS", "0")
    assert Settings.from_env().default_time_filter_weeks is None

# src/month_planner/tasks/persistence.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import sqlite3
import time
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .task_models import Task

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "monthPlannerTasks"


def records_to_tasks(data: Any, *, source: str) -> list[Task]:
    """
    Convert a decoded JSON value into tasks (best-effort).

    Anything that is not a list yields []; individual malformed records are
    skipped. Duplicate ids keep the first occurrence.
    """
    if not isinstance(data, list):
        logger.warning("Ignoring task data from %s: expected a list, got %s", source, type(data).__name__)
        return []

    out: list[Task] = []
    seen: set[str] = set()
    for idx, raw in enumerate(data):
        try:
            task = Task.from_record(raw)
        except ValueError as e:
            logger.warning("Skipping malformed task record #%d from %s: %s", idx, source, e)
            continue
        if task.id in seen:
            logger.warning("Skipping duplicate task id=%s from %s", task.id, source)
            continue
        seen.add(task.id)
        out.append(task)
    return out


def tasks_to_json(tasks: Iterable[Task]) -> str:
    return json.dumps([t.to_record() for t in tasks], ensure_ascii=False)


class InMemoryTaskPersistence:
    """Keeps the last saved collection in memory. Used by tests and `memory` backend."""

    def __init__(self, tasks: Iterable[Task] | None = None) -> None:
        self._payload = tasks_to_json(tasks or [])
        self.save_count = 0

    def load(self) -> list[Task]:
        try:
            return records_to_tasks(json.loads(self._payload), source="memory")
        except (ValueError, RecursionError):
            logger.exception("In-memory task payload is corrupt; starting empty.")
            return []

    def save(self, tasks: Iterable[Task]) -> None:
        self._payload = tasks_to_json(tasks)
        self.save_count += 1


class JsonFileTaskPersistence:
    """
    JSON file keyed by storage key: {"monthPlannerTasks": [record, ...]}.

    Other keys in the same file are preserved on save. Writes go through a
    temp file + os.replace so a crash never leaves a half-written file.
    """

    def __init__(self, path: str | Path, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._path = Path(path)
        self._key = key

    @property
    def path(self) -> Path:
        return self._path

    def _read_document(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        data = json.loads(self._path.read_text("utf-8"))
        return data if isinstance(data, dict) else {}

    def load(self) -> list[Task]:
        if not self._path.exists():
            return []
        try:
            doc = self._read_document()
        except (OSError, ValueError, RecursionError):
            logger.exception("Failed to read tasks from %s; starting empty.", self._path)
            return []
        if self._key not in doc:
            return []
        tasks = records_to_tasks(doc[self._key], source=str(self._path))
        logger.info("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        try:
            doc = self._read_document()
        except (OSError, ValueError, RecursionError):
            logger.warning("Existing %s is unreadable; overwriting it.", self._path)
            doc = {}
        doc[self._key] = [t.to_record() for t in tasks]

        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(doc, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)
        logger.debug("Saved %d tasks to %s", len(doc[self._key]), self._path)


class SqliteTaskPersistence:
    """
    SQLite key/value persistence: one JSON blob per storage key.

    The schema is created if missing. Each method opens its own connection.
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3", key: str = DEFAULT_STORAGE_KEY) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._key = key
        self._ensure_schema()

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.DatabaseError):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS task_collections (
                    key TEXT PRIMARY KEY,
                    payload TEXT NOT NULL DEFAULT '[]',
                    updated_at REAL NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    def load(self) -> list[Task]:
        try:
            conn = self._get_conn()
            try:
                row = conn.execute(
                    "SELECT payload FROM task_collections WHERE key = ?", (self._key,)
                ).fetchone()
            finally:
                conn.close()
        except sqlite3.Error:
            logger.exception("Failed to read tasks from %s; starting empty.", self._db_path)
            return []

        if row is None:
            return []
        try:
            data = json.loads(row["payload"])
        except (ValueError, RecursionError):
            logger.warning("Corrupt task payload for key=%s in %s; starting empty.", self._key, self._db_path)
            return []
        tasks = records_to_tasks(data, source=f"{self._db_path}:{self._key}")
        logger.info("Loaded %d tasks from %s key=%s", len(tasks), self._db_path, self._key)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        payload = tasks_to_json(tasks)
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO task_collections(key, payload, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET payload = excluded.payload,
                                               updated_at = excluded.updated_at
                """,
                (self._key, payload, time.time()),
            )
            conn.commit()
        finally:
            conn.close()


def make_persistence(settings) -> InMemoryTaskPersistence | JsonFileTaskPersistence | SqliteTaskPersistence:
    """Pick the persistence backend named by settings.storage_backend."""
    backend = str(getattr(settings, "storage_backend", "json")).lower()
    key = str(getattr(settings, "storage_key", DEFAULT_STORAGE_KEY))

    if backend == "memory":
        return InMemoryTaskPersistence()
    if backend == "sqlite":
        return SqliteTaskPersistence(settings.tasks_db_path, key=key)
    return JsonFileTaskPersistence(settings.tasks_path, key=key)

# src/month_planner/calendar/task_filter.py

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta

from ..tasks.task_models import ALL_STATUSES, Task, TaskStatus


@dataclass(frozen=True)
class TaskFilter:
    selected_statuses: frozenset[TaskStatus] = field(default_factory=lambda: frozenset(ALL_STATUSES))
    search_term: str = ""
    time_filter_weeks: int | None = None

    def __post_init__(self) -> None:
        if self.time_filter_weeks is not None and self.time_filter_weeks < 1:
            raise ValueError("time_filter_weeks must be >= 1 (or None for all time)")


def time_window(today: date, weeks: int) -> tuple[date, date]:
    """Half-open [start, end) window covering `weeks` weeks from today."""
    return today, today + timedelta(weeks=weeks)


def matches(task: Task, task_filter: TaskFilter, *, today: date) -> bool:
    if task.status not in task_filter.selected_statuses:
        return False

    term = task_filter.search_term.lower()
    if term and term not in task.title.lower():
        return False

    # Only the start date is checked: a long task that began before today
    # but is still running is outside the window.
    if task_filter.time_filter_weeks is not None:
        start, end = time_window(today, task_filter.time_filter_weeks)
        if not start <= task.start_date < end:
            return False

    return True


def filter_tasks(tasks: Iterable[Task], task_filter: TaskFilter, *, today: date) -> list[Task]:
    return [t for t in tasks if matches(t, task_filter, today=today)]


def toggle_status(task_filter: TaskFilter, status: TaskStatus) -> TaskFilter:
    selected = set(task_filter.selected_statuses)
    if status in selected:
        selected.discard(status)
    else:
        selected.add(status)
    return dataclasses.replace(task_filter, selected_statuses=frozenset(selected))


def with_search(task_filter: TaskFilter, term: str) -> TaskFilter:
    return dataclasses.replace(task_filter, search_term=term)


def with_time_filter(task_filter: TaskFilter, weeks: int | None) -> TaskFilter:
    return dataclasses.replace(task_filter, time_filter_weeks=weeks)

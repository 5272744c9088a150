# src/month_planner/calendar/view.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from ..tasks.task_models import Task
from .grid import CalendarWeek, build_month_grid, month_start
from .packing import pack_rows, row_count
from .projection import PositionedTask, project_week
from .task_filter import TaskFilter, filter_tasks


@dataclass(frozen=True, slots=True)
class WeekLayout:
    week: CalendarWeek
    placed: tuple[PositionedTask, ...]
    row_count: int


@dataclass(frozen=True, slots=True)
class MonthView:
    month: date
    tasks: tuple[Task, ...]
    weeks: tuple[WeekLayout, ...]


def layout_week(week: CalendarWeek, tasks: Iterable[Task]) -> WeekLayout:
    placed = pack_rows(project_week(week, tasks))
    return WeekLayout(week=week, placed=tuple(placed), row_count=row_count(placed))


def build_month_view(
    tasks: Iterable[Task],
    reference: date,
    task_filter: TaskFilter,
    *,
    today: date,
) -> MonthView:
    """store -> filter -> project (per week) -> pack (per week)."""
    visible = filter_tasks(tasks, task_filter, today=today)
    weeks = tuple(layout_week(w, visible) for w in build_month_grid(reference))
    return MonthView(month=month_start(reference), tasks=tuple(visible), weeks=weeks)

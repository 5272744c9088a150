# src/month_planner/calendar/projection.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..tasks.task_models import Task
from .grid import CalendarWeek


@dataclass(frozen=True, slots=True)
class PositionedTask:
    """
    A task clipped to one week.

    offset: column (0..6) where the clipped range starts
    length: number of columns covered, 1..7-offset
    row: visual row assigned by the packer (0 until packed)
    """

    task: Task
    offset: int
    length: int
    row: int = 0

    @property
    def end_offset(self) -> int:
        """Exclusive end column."""
        return self.offset + self.length

    def overlaps(self, other: PositionedTask) -> bool:
        return self.offset < other.end_offset and self.end_offset > other.offset


def intersects(task: Task, week: CalendarWeek) -> bool:
    return task.effective_end >= week.start and task.start_date <= week.end


def position_in_week(task: Task, week: CalendarWeek) -> PositionedTask:
    adjusted_start = max(task.start_date, week.start)
    adjusted_end = min(task.effective_end, week.end)
    offset = (adjusted_start - week.start).days
    length = (adjusted_end - adjusted_start).days + 1
    return PositionedTask(task=task, offset=offset, length=length)


def project_week(week: CalendarWeek, tasks: Iterable[Task]) -> list[PositionedTask]:
    """
    Clip every task that touches `week` and compute its offset/length.

    Sorted by offset; sorted() is stable so ties keep input order, which the
    row packer depends on for deterministic output.
    """
    positioned = [position_in_week(t, week) for t in tasks if intersects(t, week)]
    return sorted(positioned, key=lambda p: p.offset)

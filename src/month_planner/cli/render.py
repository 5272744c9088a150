# src/month_planner/cli/render.py

"""Plain-text month grid for the console front end."""

from __future__ import annotations

from datetime import date

from ..calendar.grid import WEEKDAY_HEADERS, CalendarWeek, is_in_month
from ..calendar.packing import rows_of
from ..calendar.projection import PositionedTask
from ..calendar.view import MonthView, WeekLayout
from ..interaction.controller import SelectionRange

CELL_WIDTH = 11


def _day_label(day: date, month: date, today: date, selection: SelectionRange | None) -> str:
    label = f"{day.day:2d}" if is_in_month(day, month) else f"({day.day})"
    if day == today:
        label += "*"
    if selection is not None and day in selection:
        label = f"[{label}]"
    return label.ljust(CELL_WIDTH)


def _bar(p: PositionedTask, week: CalendarWeek) -> str:
    width = p.length * CELL_WIDTH - 1
    # < and > mark a task that continues into the previous / next week.
    left = "<" if p.task.start_date < week.start else "["
    right = ">" if p.task.effective_end > week.end else "]"
    inner = f"{p.task.title or '(untitled)'} #{p.task.id}"
    inner = inner[: max(0, width - 2)].ljust(max(0, width - 2), "=")
    return f"{left}{inner}{right}"


def render_week(layout: WeekLayout, month: date, today: date, selection: SelectionRange | None) -> list[str]:
    lines = ["".join(_day_label(d, month, today, selection) for d in layout.week.days).rstrip()]
    for row in rows_of(layout.placed):
        line = [" "] * (CELL_WIDTH * 7)
        for p in row:
            start = p.offset * CELL_WIDTH
            bar = _bar(p, layout.week)
            line[start : start + len(bar)] = list(bar)
        lines.append("".join(line).rstrip())
    return lines


def render_month(view: MonthView, *, today: date, selection: SelectionRange | None = None) -> str:
    out = [view.month.strftime("%B %Y"), "".join(h.ljust(CELL_WIDTH) for h in WEEKDAY_HEADERS).rstrip()]
    out.append("-" * (CELL_WIDTH * 7))
    for layout in view.weeks:
        out.extend(render_week(layout, view.month, today, selection))
        out.append("-" * (CELL_WIDTH * 7))
    return "\n".join(out)


def render_task_line(task) -> str:
    end = f"..{task.end_date.isoformat()}" if task.end_date and task.end_date != task.start_date else ""
    return f"#{task.id} [{task.status.value}] {task.start_date.isoformat()}{end} {task.title}"

# src/month_planner/calendar/grid.py

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta

GRID_WEEKS = 6
DAYS_PER_WEEK = 7

# calendar module numbering: Monday == 0 ... Sunday == 6
_WEEK_STARTS_ON = calendar.SUNDAY

WEEKDAY_HEADERS: tuple[str, ...] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@dataclass(frozen=True, slots=True)
class CalendarWeek:
    days: tuple[date, ...]

    def __post_init__(self) -> None:
        if len(self.days) != DAYS_PER_WEEK:
            raise ValueError(f"a week has {DAYS_PER_WEEK} days, got {len(self.days)}")

    @property
    def start(self) -> date:
        return self.days[0]

    @property
    def end(self) -> date:
        return self.days[-1]

    def day_index(self, d: date) -> int:
        """Column of d in this week (0..6); d must fall inside the week."""
        idx = (d - self.start).days
        if not 0 <= idx < DAYS_PER_WEEK:
            raise ValueError(f"{d} is outside week {self.start}..{self.end}")
        return idx

    def __contains__(self, d: object) -> bool:
        return isinstance(d, date) and self.start <= d <= self.end


def month_start(d: date) -> date:
    return d.replace(day=1)


def shift_month(d: date, delta: int) -> date:
    """First day of the month `delta` months away from d's month."""
    month = d.month - 1 + delta
    year = d.year + month // 12
    month = month % 12 + 1
    return date(year, month, 1)


def is_in_month(day: date, reference: date) -> bool:
    return (day.year, day.month) == (reference.year, reference.month)


def build_month_grid(reference: date) -> list[CalendarWeek]:
    """
    Fixed 6-week grid for reference's month, weeks starting on Sunday.

    The first week holds the 1st of the month; months that need only 4 or 5
    weeks are padded forward with whole weeks so the grid is always 42 days.
    """
    cal = calendar.Calendar(firstweekday=_WEEK_STARTS_ON)
    rows = cal.monthdatescalendar(reference.year, reference.month)

    weeks = [CalendarWeek(tuple(row)) for row in rows]
    while len(weeks) < GRID_WEEKS:
        next_start = weeks[-1].end + timedelta(days=1)
        weeks.append(
            CalendarWeek(tuple(next_start + timedelta(days=i) for i in range(DAYS_PER_WEEK)))
        )
    return weeks


def grid_days(weeks: list[CalendarWeek]) -> list[date]:
    return [d for w in weeks for d in w.days]

# src/month_planner/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any, Mapping

DATE_FORMAT = "%Y-%m-%d"


class TaskStatus(StrEnum):
    """
    Task workflow status.

    Values are the exact strings used in stored records and drag payloads.
    """

    TO_DO = "To Do"
    IN_PROGRESS = "In Progress"
    REVIEW = "Review"
    COMPLETED = "Completed"

    @classmethod
    def from_record(cls, raw: str | None) -> TaskStatus:
        if not raw:
            return cls.TO_DO
        try:
            return cls(raw)
        except ValueError:
            return cls.TO_DO


ALL_STATUSES: tuple[TaskStatus, ...] = tuple(TaskStatus)


def parse_date(raw: Any) -> date:
    """Parse a 'YYYY-MM-DD' string. Raises ValueError on anything else."""
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        raise ValueError(f"expected YYYY-MM-DD string, got {type(raw).__name__}")
    return date.fromisoformat(raw.strip())


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    status: TaskStatus
    start_date: date
    end_date: date | None = None

    @property
    def effective_end(self) -> date:
        """End date with single-day tasks (no end_date) resolved to start_date."""
        return self.end_date if self.end_date is not None else self.start_date

    @property
    def duration_days(self) -> int:
        return max(0, (self.effective_end - self.start_date).days)

    def to_record(self) -> dict[str, str]:
        record = {
            "id": self.id,
            "title": self.title,
            "status": self.status.value,
            "startDate": format_date(self.start_date),
        }
        if self.end_date is not None:
            record["endDate"] = format_date(self.end_date)
        return record

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> Task:
        """
        Build a Task from a stored record.

        Raises ValueError if the record has no usable id or start date, or if
        its end date precedes its start date.
        """
        if not isinstance(raw, Mapping):
            raise ValueError("task record must be an object")

        task_id = raw.get("id")
        if not isinstance(task_id, str) or not task_id:
            raise ValueError("task record has no id")

        start = parse_date(raw.get("startDate"))
        end_raw = raw.get("endDate")
        end = parse_date(end_raw) if end_raw else None
        if end is not None and end < start:
            raise ValueError(f"task {task_id}: endDate {end} precedes startDate {start}")

        return cls(
            id=task_id,
            title=str(raw.get("title") or ""),
            status=TaskStatus.from_record(raw.get("status")),
            start_date=start,
            end_date=end,
        )


@dataclass(frozen=True, slots=True)
class TaskDraft:
    """
    What the edit form works on.

    id is None for a task that does not exist yet; dates may be missing
    while the form is being filled in.
    """

    id: str | None = None
    title: str = ""
    status: TaskStatus = TaskStatus.TO_DO
    start_date: date | None = None
    end_date: date | None = None

    @property
    def is_new(self) -> bool:
        return self.id is None

    @classmethod
    def from_task(cls, task: Task) -> TaskDraft:
        return cls(
            id=task.id,
            title=task.title,
            status=task.status,
            start_date=task.start_date,
            end_date=task.end_date,
        )

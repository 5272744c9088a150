# src/month_planner/core/state.py

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from ..calendar.grid import month_start, shift_month
from ..calendar.task_filter import TaskFilter
from ..calendar.view import MonthView, build_month_view
from ..interaction.controller import InteractionController
from ..interaction.edit_form import AcceptEditForm
from ..tasks.task_store import TaskStore
from .ports import EditForm


@dataclass
class AppState:
    """
    Everything the front end mutates: the store, the interaction mode,
    the displayed month and the active filters.
    """

    # Store Settings on the state for easy access in other modules.
    settings: Any

    task_store: TaskStore
    controller: InteractionController

    edit_form: EditForm = field(default_factory=AcceptEditForm)
    clock: Callable[[], date] = date.today
    current_month: date | None = None
    task_filter: TaskFilter = field(default_factory=TaskFilter)

    def __post_init__(self) -> None:
        if self.current_month is None:
            self.current_month = month_start(self.clock())

    def today(self) -> date:
        return self.clock()

    def view(self) -> MonthView:
        return build_month_view(
            self.task_store.list_tasks(),
            self.current_month,
            self.task_filter,
            today=self.clock(),
        )

    def prev_month(self) -> None:
        self.current_month = shift_month(self.current_month, -1)

    def next_month(self) -> None:
        self.current_month = shift_month(self.current_month, 1)

    def go_today(self) -> None:
        self.current_month = month_start(self.clock())

    def go_to(self, d: date) -> None:
        self.current_month = month_start(d)

# src/month_planner/interaction/controller.py

"""
Pointer interaction state machine.

Exactly one mode is active at a time and it is stored in a single field:

    Idle ──pointer_down_cell──▶ Selecting ──pointer_up──▶ Idle (+ create draft)
    Idle ──drag_start────────▶ Dragging  ──drop/drag_end──▶ Idle (+ move)
    any  ──resize_handle_down─▶ Resizing  ──pointer_up──▶ Idle (+ range updates)

Events are delivered in gesture order (down, enters, up). A gesture whose
closing event was lost (pointer released outside the window) is cleaned up
by the next pointer-down.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from enum import StrEnum

from ..tasks.task_models import TaskDraft, TaskStatus
from ..tasks.task_store import TaskStore
from .drag_payload import decode_payload, encode_payload

logger = logging.getLogger(__name__)


class ResizeEdge(StrEnum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True, slots=True)
class SelectionRange:
    start: date
    end: date

    def normalized(self) -> tuple[date, date]:
        return (self.start, self.end) if self.start <= self.end else (self.end, self.start)

    def __contains__(self, d: object) -> bool:
        lo, hi = self.normalized()
        return isinstance(d, date) and lo <= d <= hi


@dataclass(frozen=True, slots=True)
class ResizeState:
    task_id: str
    edge: ResizeEdge


@dataclass(frozen=True, slots=True)
class Idle:
    pass


@dataclass(frozen=True, slots=True)
class Selecting:
    selection: SelectionRange


@dataclass(frozen=True, slots=True)
class Dragging:
    task_id: str


@dataclass(frozen=True, slots=True)
class Resizing:
    resize: ResizeState


Mode = Idle | Selecting | Dragging | Resizing

IDLE = Idle()


def resize_range(start: date, end: date, edge: ResizeEdge, day: date) -> tuple[date, date]:
    """
    New (start, end) after dragging `edge` onto `day`; start <= end always holds.

    Left edge past the end collapses the task onto its end date. Right edge
    before the start moves the start there instead.
    """
    if edge is ResizeEdge.LEFT:
        new_start = day if day <= end else end
        return new_start, end

    if day >= start:
        return start, day
    new_start = day
    new_end = end if end >= new_start else new_start
    return new_start, new_end


class InteractionController:
    """Owns the interaction mode and writes task mutations through the store."""

    def __init__(self, store: TaskStore) -> None:
        self._store = store
        self._mode: Mode = IDLE

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def selection(self) -> SelectionRange | None:
        """Current selection for highlighting, or None when not selecting."""
        return self._mode.selection if isinstance(self._mode, Selecting) else None

    def _set_mode(self, mode: Mode) -> None:
        if mode != self._mode:
            logger.debug("Interaction mode %s -> %s", self._mode, mode)
        self._mode = mode

    def cancel(self) -> None:
        self._set_mode(IDLE)

    # ---- range selection ----

    def pointer_down_cell(self, day: date) -> None:
        match self._mode:
            case Resizing():
                # Resize lost its pointer-up. The press only clears it.
                logger.debug("Stale resize cleared by pointer-down on %s", day)
                self._set_mode(IDLE)
            case _:
                self._set_mode(Selecting(SelectionRange(start=day, end=day)))

    def pointer_enter_cell(self, day: date) -> None:
        match self._mode:
            case Selecting(selection=sel):
                self._set_mode(Selecting(SelectionRange(start=sel.start, end=day)))
            case Resizing(resize=rs):
                self._resize_step(rs, day)
            case _:
                pass

    def pointer_up(self) -> TaskDraft | None:
        """
        Close the current gesture.

        A selection commits as a new-task draft with its dates sorted; the
        caller hands it to the edit form. Resizing just ends (every step was
        already written).
        """
        match self._mode:
            case Selecting(selection=sel):
                start, end = sel.normalized()
                self._set_mode(IDLE)
                return TaskDraft(id=None, title="", status=TaskStatus.TO_DO, start_date=start, end_date=end)
            case Resizing():
                self._set_mode(IDLE)
        return None

    # ---- resize ----

    def resize_handle_down(self, task_id: str, edge: ResizeEdge | str) -> None:
        # Replaces any selection outright; the handle press is not a cell press.
        self._set_mode(Resizing(ResizeState(task_id=task_id, edge=ResizeEdge(edge))))

    def _resize_step(self, rs: ResizeState, day: date) -> None:
        task = self._store.get(rs.task_id)
        if task is None:
            logger.debug("Resize target id=%s vanished; ignoring step.", rs.task_id)
            return
        new_start, new_end = resize_range(task.start_date, task.effective_end, rs.edge, day)
        self._store.update(task.id, start_date=new_start, end_date=new_end)

    # ---- drag to move ----

    def drag_start(self, task_id: str) -> str | None:
        """Enter Dragging and return the payload for the transfer channel."""
        task = self._store.get(task_id)
        if task is None:
            logger.debug("drag_start on unknown id=%s", task_id)
            self._set_mode(IDLE)
            return None
        self._set_mode(Dragging(task_id=task_id))
        return encode_payload(task)

    def drag_end(self) -> None:
        if isinstance(self._mode, Dragging):
            self._set_mode(IDLE)

    def drop(self, day: date, payload: str | bytes | None) -> None:
        """
        Move the dragged task so it starts on `day`, keeping its duration.

        The duration comes from the payload snapshot taken at drag start, not
        from the live store. A missing or malformed payload drops nothing.
        """
        self._set_mode(IDLE)
        snapshot = decode_payload(payload)
        if snapshot is None:
            return
        new_end = day + timedelta(days=snapshot.duration_days)
        self._store.update(snapshot.id, start_date=day, end_date=new_end)

    # ---- edit form entry points ----

    def new_draft(self) -> TaskDraft:
        return TaskDraft()

    def edit_draft(self, task_id: str) -> TaskDraft | None:
        task = self._store.get(task_id)
        return None if task is None else TaskDraft.from_task(task)

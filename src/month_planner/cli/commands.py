# src/month_planner/cli/commands.py

from __future__ import annotations

import dataclasses
import inspect
import logging
from collections.abc import Callable
from datetime import date
from typing import cast

from ..calendar.task_filter import toggle_status, with_search, with_time_filter
from ..core.state import AppState
from ..interaction.controller import ResizeEdge
from ..interaction.edit_form import DeleteTask, apply_edit_outcome
from ..tasks.task_models import ALL_STATUSES, TaskDraft, TaskStatus, parse_date
from .render import render_month, render_task_line

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /show, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except ValueError as e:
            # Bad dates, invalid ranges, unknown statuses: user input errors.
            logger.debug("Command /%s rejected: %s", name, e)
            return f"Error: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----

_STATUS_ALIASES: dict[str, TaskStatus] = {
    "".join(ch for ch in s.value.lower() if ch.isalnum()): s for s in ALL_STATUSES
}
_STATUS_ALIASES.update({"done": TaskStatus.COMPLETED, "wip": TaskStatus.IN_PROGRESS})


def parse_status(raw: str) -> TaskStatus:
    key = "".join(ch for ch in raw.lower() if ch.isalnum())
    status = _STATUS_ALIASES.get(key)
    if status is None:
        names = ", ".join(s.value for s in ALL_STATUSES)
        raise ValueError(f"unknown status {raw!r} (expected one of: {names})")
    return status


def parse_month(raw: str) -> date:
    """Accept YYYY-MM or YYYY-MM-DD."""
    if len(raw) == 7:
        raw = f"{raw}-01"
    return parse_date(raw)


def _open_form(state: AppState, draft: TaskDraft) -> str:
    outcome = state.edit_form.edit(draft)
    if isinstance(outcome, DeleteTask) and draft.is_new:
        return "Nothing to delete: the task was never saved."
    task = apply_edit_outcome(state.task_store, outcome)
    if task is not None:
        return f"Saved: {render_task_line(task)}"
    if isinstance(outcome, DeleteTask):
        return f"Task #{outcome.task_id} deleted."
    return "Edit cancelled."


# ---- view / navigation ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_show(state: AppState, args: list[str]) -> str:
    return render_month(state.view(), today=state.today(), selection=state.controller.selection)


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = state.view().tasks
    if not tasks:
        return "No tasks match the current filters."
    return "\n".join(render_task_line(t) for t in tasks)


def cmd_prev(state: AppState, args: list[str]) -> str:
    state.prev_month()
    return cmd_show(state, [])


def cmd_next(state: AppState, args: list[str]) -> str:
    state.next_month()
    return cmd_show(state, [])


def cmd_today(state: AppState, args: list[str]) -> str:
    state.go_today()
    return cmd_show(state, [])


def cmd_goto(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /goto YYYY-MM"
    state.go_to(parse_month(args[0]))
    return cmd_show(state, [])


# ---- task mutations ----


def cmd_new(state: AppState, args: list[str]) -> str:
    """
    /new START [END] [title...]  -> open the edit form for a new task
    """
    if not args:
        return "Usage: /new START [END] [title...]"
    start = parse_date(args[0])
    end: date | None = None
    rest = args[1:]
    if rest:
        try:
            end = parse_date(rest[0])
            rest = rest[1:]
        except ValueError:
            pass
    draft = dataclasses.replace(
        state.controller.new_draft(), title=" ".join(rest), start_date=start, end_date=end
    )
    return _open_form(state, draft)


def cmd_select(state: AppState, args: list[str], emit: CommandEmitter | None) -> str:
    """
    /select FROM TO [title...]  -> press on FROM, drag to TO, release

    While the range is held, the month is emitted with it highlighted.
    """
    if len(args) < 2:
        return "Usage: /select FROM TO [title...]"
    first, last = parse_date(args[0]), parse_date(args[1])

    ctl = state.controller
    ctl.pointer_down_cell(first)
    ctl.pointer_enter_cell(last)
    if emit is not None and ctl.selection is not None:
        emit(render_month(state.view(), today=state.today(), selection=ctl.selection))
    draft = ctl.pointer_up()
    if draft is None:
        return "Selection was interrupted; nothing created."
    return _open_form(state, dataclasses.replace(draft, title=" ".join(args[2:])))


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit ID [field=value ...]  -> open the edit form for an existing task

    Fields: title, status, start, end (end=none clears the end date).
    """
    if not args:
        return "Usage: /edit ID [title=...] [status=...] [start=YYYY-MM-DD] [end=YYYY-MM-DD|none]"
    draft = state.controller.edit_draft(args[0])
    if draft is None:
        return f"No task #{args[0]}."

    changes: dict[str, object] = {}
    title_words: list[str] = []
    for token in args[1:]:
        key, sep, value = token.partition("=")
        key = key.lower()
        if not sep:
            title_words.append(token)
        elif key == "title":
            title_words.append(value)
        elif key == "status":
            changes["status"] = parse_status(value)
        elif key == "start":
            changes["start_date"] = parse_date(value)
        elif key == "end":
            changes["end_date"] = None if value.lower() in ("", "none") else parse_date(value)
        else:
            raise ValueError(f"unknown field {key!r}")
    if title_words:
        changes["title"] = " ".join(title_words)

    return _open_form(state, dataclasses.replace(draft, **changes))


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /delete ID"
    if state.task_store.get(args[0]) is None:
        return f"No task #{args[0]}."
    apply_edit_outcome(state.task_store, DeleteTask(args[0]))
    return f"Task #{args[0]} deleted."


def cmd_move(state: AppState, args: list[str]) -> str:
    """
    /move ID DATE  -> drag the task and drop it on DATE (duration kept)
    """
    if len(args) < 2:
        return "Usage: /move ID YYYY-MM-DD"
    day = parse_date(args[1])

    ctl = state.controller
    payload = ctl.drag_start(args[0])
    if payload is None:
        return f"No task #{args[0]}."
    ctl.drop(day, payload)
    return f"Moved: {render_task_line(state.task_store.get(args[0]))}"


def cmd_resize(state: AppState, args: list[str]) -> str:
    """
    /resize ID left|right DATE  -> drag one edge of the task onto DATE
    """
    if len(args) < 3:
        return "Usage: /resize ID left|right YYYY-MM-DD"
    task_id = args[0]
    edge = ResizeEdge(args[1].lower())
    day = parse_date(args[2])
    if state.task_store.get(task_id) is None:
        return f"No task #{task_id}."

    ctl = state.controller
    ctl.resize_handle_down(task_id, edge)
    ctl.pointer_enter_cell(day)
    ctl.pointer_up()
    return f"Resized: {render_task_line(state.task_store.get(task_id))}"


# ---- filters ----


def cmd_status(state: AppState, args: list[str]) -> str:
    """
    /status            -> show which statuses are visible
    /status NAME ...   -> toggle each named status
    """
    for raw in args:
        state.task_filter = toggle_status(state.task_filter, parse_status(raw))
    shown = [s.value for s in ALL_STATUSES if s in state.task_filter.selected_statuses]
    return f"Visible statuses: {', '.join(shown) if shown else '(none)'}"


def cmd_search(state: AppState, args: list[str]) -> str:
    term = " ".join(args)
    state.task_filter = with_search(state.task_filter, term)
    return f"Search: {term!r}" if term else "Search cleared."


def cmd_within(state: AppState, args: list[str]) -> str:
    """
    /within N    -> only tasks starting within the next N weeks
    /within off  -> all time
    """
    if not args or args[0].lower() in ("off", "all", "none"):
        state.task_filter = with_time_filter(state.task_filter, None)
        return "Time filter: all time."
    try:
        weeks = int(args[0])
    except ValueError:
        return "Usage: /within N | /within off"
    state.task_filter = with_time_filter(state.task_filter, weeks)
    return f"Time filter: within {weeks} week(s)."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("show", cmd_show, help_text="Show the current month.", aliases=["s"])
registry.register("list", cmd_list, help_text="List tasks matching the filters.", aliases=["ls"])
registry.register("prev", cmd_prev, help_text="Previous month.")
registry.register("next", cmd_next, help_text="Next month.")
registry.register("today", cmd_today, help_text="Jump to the current month.")
registry.register("goto", cmd_goto, help_text="Jump to a month: /goto YYYY-MM.")
registry.register("new", cmd_new, help_text="New task: /new START [END] [title...].")
registry.register("select", cmd_select, help_text="Select a date range to create a task: /select FROM TO [title...].")
registry.register("edit", cmd_edit, help_text="Edit a task: /edit ID [title=..] [status=..] [start=..] [end=..].")
registry.register("delete", cmd_delete, help_text="Delete a task: /delete ID.", aliases=["rm"])
registry.register("move", cmd_move, help_text="Drag a task to a new start date: /move ID DATE.")
registry.register("resize", cmd_resize, help_text="Drag a task edge: /resize ID left|right DATE.")
registry.register("status", cmd_status, help_text="Toggle status filters: /status todo review ...")
registry.register("search", cmd_search, help_text="Filter by title text: /search words (empty clears).")
registry.register("within", cmd_within, help_text="Time window: /within N (weeks) | /within off.")

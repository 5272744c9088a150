# src/month_planner/cli/console.py

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from datetime import datetime

from ..core.state import AppState
from ..interaction.edit_form import CancelEdit, DeleteTask, EditOutcome, SaveDraft
from ..tasks.task_models import TaskDraft, format_date, parse_date
from .commands import parse_status
from .commands import registry as command_registry

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts_block(text: str) -> None:
    ts = _ts_local()
    lines = text.splitlines() or [""]
    for i, line in enumerate(lines):
        # keep nice alignment for multi-line command output
        prefix = f"[{ts}] " if i == 0 else " " * (len(ts) + 3)
        print(prefix + line)


class ConsoleEditForm:
    """
    Prompt-driven edit form.

    Each field shows its current value; Enter keeps it. At the final prompt
    `s` saves, `c` cancels and `d` deletes (existing tasks only).
    """

    def __init__(self, input_fn: InputFn = input) -> None:
        self._input = input_fn

    def _ask(self, label: str, current: str) -> str:
        raw = self._input(f"  {label} [{current}]: ").strip()
        return raw or current

    def edit(self, draft: TaskDraft) -> EditOutcome:
        heading = "New Task" if draft.is_new else f"Edit Task #{draft.id}"
        print(f"  -- {heading} --")
        try:
            title = self._ask("Title", draft.title)
            status = parse_status(self._ask("Status", draft.status.value))
            start_raw = self._ask("Start date", format_date(draft.start_date) if draft.start_date else "")
            end_raw = self._ask("End date", format_date(draft.end_date) if draft.end_date else "")
            edited = dataclasses.replace(
                draft,
                title=title,
                status=status,
                start_date=parse_date(start_raw) if start_raw else None,
                end_date=parse_date(end_raw) if end_raw else None,
            )
        except ValueError as e:
            print(f"  Invalid input: {e}")
            return CancelEdit()
        except (EOFError, KeyboardInterrupt):
            print()
            return CancelEdit()

        choices = "[s]ave / [c]ancel" + ("" if draft.is_new else " / [d]elete")
        try:
            answer = self._input(f"  {choices}: ").strip().lower() or "s"
        except (EOFError, KeyboardInterrupt):
            print()
            return CancelEdit()

        if answer.startswith("d") and not draft.is_new:
            return DeleteTask(draft.id)
        if answer.startswith("s"):
            return SaveDraft(edited)
        return CancelEdit()


def run_console_loop(state: AppState) -> None:
    logger.info("Console started (tasks=%d).", state.task_store.count_tasks())
    print(f"[{_ts_local()}] [CONSOLE] Use /help for commands, /show for the month, /exit to quit.\n")

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            cmd_response = command_registry.handle(state, user_input, emit=_print_ts_block)
        except Exception:
            logger.exception("Command handler crashed.")
            cmd_response = "Internal error while handling a command."

        if cmd_response is None:
            cmd_response = "Commands start with '/'. Use /help to list them."
        _print_ts_block(cmd_response)

    # A gesture left open by an interrupted command must not survive the session.
    state.controller.cancel()
    logger.info("Console finished.")

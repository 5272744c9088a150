# tests/test_console.py

from __future__ import annotations

from datetime import date

import pytest

from month_planner.cli import console
from month_planner.cli.console import ConsoleEditForm, run_console_loop
from month_planner.core.state import AppState
from month_planner.interaction.edit_form import CancelEdit, DeleteTask, SaveDraft
from month_planner.tasks.task_models import TaskDraft, TaskStatus


def scripted(*answers: str):
    it = iter(answers)
    return lambda _prompt: next(it)


def test_form_keeps_defaults_and_saves() -> None:
    draft = TaskDraft(title="Plan", start_date=date(2024, 6, 3), end_date=date(2024, 6, 5))
    outcome = ConsoleEditForm(scripted("", "", "", "", "")).edit(draft)
    assert outcome == SaveDraft(draft)


def test_form_applies_edits() -> None:
    draft = TaskDraft(id="t1", title="Plan", start_date=date(2024, 6, 3))
    outcome = ConsoleEditForm(scripted("Ship it", "review", "2024-06-04", "2024-06-06", "s")).edit(draft)
    assert outcome == SaveDraft(
        TaskDraft(
            id="t1",
            title="Ship it",
            status=TaskStatus.REVIEW,
            start_date=date(2024, 6, 4),
            end_date=date(2024, 6, 6),
        )
    )


def test_form_delete_only_for_existing_tasks() -> None:
    existing = TaskDraft(id="t1", title="x", start_date=date(2024, 6, 3))
    assert ConsoleEditForm(scripted("", "", "", "", "d")).edit(existing) == DeleteTask("t1")

    fresh = TaskDraft(title="x", start_date=date(2024, 6, 3))
    assert ConsoleEditForm(scripted("", "", "", "", "d")).edit(fresh) == CancelEdit()


def test_form_cancels_on_bad_input_or_eof() -> None:
    draft = TaskDraft(title="x", start_date=date(2024, 6, 3))
    assert ConsoleEditForm(scripted("", "nonsense")).edit(draft) == CancelEdit()

    def eof(_prompt: str) -> str:
        raise EOFError

    assert ConsoleEditForm(eof).edit(draft) == CancelEdit()


def test_console_loop_runs_commands_until_exit(
    state: AppState, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    lines = iter(["", "hello", "/new 2024-05-20 Demo", "/list", "/exit", "/list"])
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(lines))

    run_console_loop(state)

    out = capsys.readouterr().out
    assert "Commands start with '/'" in out
    assert "Saved: #t1" in out
    assert "Demo" in out
    assert state.task_store.count_tasks() == 1
    # "/list" after "/exit" is never read.
    assert next(lines) == "/list"


def test_console_loop_survives_crashing_command(
    state: AppState, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def boom(state, args):
        raise RuntimeError("boom")

    console.command_registry.register("boom", boom, help_text="test only")
    lines = iter(["/boom"])

    def fake_input(_prompt: str = "") -> str:
        try:
            return next(lines)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)
    try:
        run_console_loop(state)
    finally:
        console.command_registry._handlers.pop("boom", None)
        console.command_registry._help.pop("boom", None)

    assert "Internal error while handling a command." in capsys.readouterr().out

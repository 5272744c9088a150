# tests/test_logging_setup.py

from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest

from month_planner.logging_setup import setup_logging


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        if h not in handlers:
            h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)


def test_console_filters_by_source_and_file_keeps_everything(
    tmp_path: Path, restore_root_logging
) -> None:
    console = io.StringIO()
    log_file = setup_logging(log_dir=tmp_path / "logs", console_level=logging.INFO, stream=console)

    logging.getLogger("month_planner.calendar").info("grid built")
    logging.getLogger("month_planner.calendar").debug("grid detail")
    logging.getLogger("py.warnings").warning("old api")
    logging.getLogger("py.warnings").info("quiet warning")
    logging.getLogger("somelib").warning("chatty library")
    logging.getLogger("somelib").error("library failed")
    for h in logging.getLogger().handlers:
        h.flush()

    shown = console.getvalue()
    assert "grid built" in shown
    assert "old api" in shown
    assert "library failed" in shown
    assert "grid detail" not in shown
    assert "quiet warning" not in shown
    assert "chatty library" not in shown

    assert log_file == tmp_path / "logs" / "month_planner.log"
    written = log_file.read_text("utf-8")
    for message in ("grid built", "grid detail", "chatty library", "quiet warning"):
        assert message in written


def test_setup_logging_replaces_previous_handlers(tmp_path: Path, restore_root_logging) -> None:
    setup_logging(log_dir=tmp_path, stream=io.StringIO())
    setup_logging(log_dir=tmp_path, stream=io.StringIO())
    assert len(logging.getLogger().handlers) == 2

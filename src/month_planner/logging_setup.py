# src/month_planner/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TextIO


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable while a month is on screen.

    month_planner records always pass (the handler level still applies).
    Captured `warnings.warn(...)` records ('py.warnings') pass at WARNING+,
    other libraries only at ERROR+.
    """

    def __init__(
        self,
        *,
        app_prefix: str = "month_planner",
        warnings_level: int = logging.WARNING,
        third_party_level: int = logging.ERROR,
    ) -> None:
        super().__init__()
        self._app_prefix = app_prefix
        self._warnings_level = warnings_level
        self._third_party_level = third_party_level

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == self._app_prefix or name.startswith(self._app_prefix + "."):
            return True
        if name == "py.warnings":
            return record.levelno >= self._warnings_level
        return record.levelno >= self._third_party_level


def setup_logging(
    *,
    log_dir: str | Path = ".local/month_planner",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    stream: TextIO | None = None,
) -> Path:
    """
    Install a filtered console handler and a full month_planner.log file handler
    on the root logger, replacing whatever was there. Returns the log file path.

    Call it once from the entrypoint, before the store loads tasks.
    """
    log_file = Path(log_dir) / "month_planner.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(stream or sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())

    logfile = logging.FileHandler(str(log_file), encoding="utf-8")
    logfile.setLevel(file_level)
    logfile.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(min(console_level, file_level))
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(console)
    root.addHandler(logfile)

    logging.captureWarnings(True)
    return log_file

# src/month_planner/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (loading tasks from the configured
backend), then runs the console loop in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..logging_setup import setup_logging
from .console import ConsoleEditForm, run_console_loop

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/month_planner")
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "month-planner"))

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)
    state.edit_form = ConsoleEditForm()

    try:
        run_console_loop(state)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
    finally:
        # Every mutation was already persisted by TaskStore.
        logger.info("Bye. tasks=%d", state.task_store.count_tasks())


if __name__ == "__main__":
    main()

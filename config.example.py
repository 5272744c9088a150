# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file,
see month_planner/config.py). This file lists every variable the app reads.
"""

ENV_VARS = {
    # App / logging
    "PLANNER_APP_NAME": "App display name (default: month-planner).",
    "PLANNER_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Storage
    "PLANNER_STORAGE_BACKEND": "Where tasks are kept: json | sqlite | memory (default: json).",
    "PLANNER_STORAGE_KEY": "Key the task collection is stored under (default: monthPlannerTasks).",
    # Paths (gitignored)
    "PLANNER_DATA_DIR": "Local data directory, also holds month_planner.log (default: .local/month_planner).",
    "PLANNER_TASKS_PATH": "JSON backend file (default: <data_dir>/tasks.json).",
    "PLANNER_TASKS_DB_PATH": "SQLite backend file (default: <data_dir>/tasks.sqlite3).",
    # Filters
    "PLANNER_TIME_FILTER_WEEKS": "Start with a 'within N weeks' filter (default: unset = all time).",
}

# src/month_planner/interaction/drag_payload.py

"""
Drag transfer channel encoding.

The payload is the task's full record as of drag start, so a drop can
preserve the duration the task had when the gesture began.
"""

from __future__ import annotations

import json
import logging

from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


def encode_payload(task: Task) -> str:
    return json.dumps(task.to_record(), ensure_ascii=False)


def decode_payload(raw: str | bytes | None) -> Task | None:
    """Return the snapshot task, or None if the payload is missing or malformed."""
    if not raw:
        return None
    try:
        return Task.from_record(json.loads(raw))
    except ValueError as e:
        logger.warning("Ignoring malformed drag payload: %s", e)
        return None

# src/month_planner/calendar/packing.py

from __future__ import annotations

import dataclasses
from collections.abc import Sequence

from .projection import PositionedTask


def pack_rows(positioned: Sequence[PositionedTask]) -> list[PositionedTask]:
    """
    Assign each task the lowest-indexed row where it overlaps nothing.

    Greedy first-fit over an explicit list of rows. Input is expected in
    project_week() order (by offset, stable); the result is returned in the
    same order with `row` filled in. For a fixed input order the assignment
    is deterministic.
    """
    rows: list[list[PositionedTask]] = []
    out: list[PositionedTask] = []

    for item in positioned:
        row_index = len(rows)
        for i, placed in enumerate(rows):
            if not any(item.overlaps(other) for other in placed):
                row_index = i
                break

        packed = dataclasses.replace(item, row=row_index)
        if row_index == len(rows):
            rows.append([])
        rows[row_index].append(packed)
        out.append(packed)

    return out


def row_count(packed: Sequence[PositionedTask]) -> int:
    return max((p.row for p in packed), default=-1) + 1


def rows_of(packed: Sequence[PositionedTask]) -> list[list[PositionedTask]]:
    """Group packed tasks by row, rows in index order, tasks by offset."""
    grouped: list[list[PositionedTask]] = [[] for _ in range(row_count(packed))]
    for p in packed:
        grouped[p.row].append(p)
    for row in grouped:
        row.sort(key=lambda p: p.offset)
    return grouped

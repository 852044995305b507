"""
Weekly timetable assembly (grid + axes + cell parser -> WeeklyCourseSlot list).

Walks the grid row by row, left to right. Every origin cell with text
becomes one slot: its own row gives the start time, the last row it spans
gives the end time, its column header gives the weekday.

A cell whose time rows or weekday column cannot be resolved is dropped
without any error. Slots that share a day and time are all kept.
"""

from __future__ import annotations

from typing import Callable, List, Set, Tuple

from mytimetable.axes import Axes
from mytimetable.grid import Grid
from mytimetable.model import CourseDescriptor, WeeklyCourseSlot
from mytimetable.parse import parse_cell


def assemble_slots(
    grid: Grid,
    axes: Axes,
    cell_parser: Callable[[str], CourseDescriptor] = parse_cell,
) -> List[WeeklyCourseSlot]:
    slots: List[WeeklyCourseSlot] = []
    consumed: Set[Tuple[int, int]] = set()

    for r in range(1, grid.height):
        for c in range(1, grid.width):
            cell = grid.cell(r, c)
            if cell is None or cell.is_placeholder or (r, c) in consumed or not cell.text:
                continue

            span = cell.row_span or 1
            for i in range(span):
                consumed.add((r + i, c))

            start = axes.time_of(r)
            end = axes.time_of(r + span - 1)
            day = axes.weekday_of(c)
            if start is None or end is None or day is None:
                continue

            slots.append(
                WeeklyCourseSlot(
                    descriptor=cell_parser(cell.text),
                    day_of_week=day,
                    start=start,
                    end=end,
                )
            )

    return slots

"""
Conflict detection between weekly course slots.

Two slots conflict when they fall on the same weekday, their week ranges
share at least one week, and their times overlap:
    start < other_end AND end > other_start

This is a report only; the importer keeps overlapping slots as they are.
"""

from __future__ import annotations

from mytimetable.model import WeeklyCourseSlot


def _time_to_minutes(hhmm: str) -> int:
    """
    Convert 'HH:MM' to minutes since midnight.
    Raises ValueError for invalid formats.
    """
    parts = hhmm.strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time format: {hhmm!r}")
    h = int(parts[0])
    m = int(parts[1])
    if not (0 <= h <= 23 and 0 <= m <= 59):
        raise ValueError(f"Invalid time value: {hhmm!r}")
    return h * 60 + m


def _overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    return a_start < b_end and a_end > b_start


def find_conflicts(slots: list[WeeklyCourseSlot]) -> list[tuple[WeeklyCourseSlot, WeeklyCourseSlot]]:
    """
    Find overlapping slot pairs (A,B), each pair appears once (i<j).
    """
    conflicts: list[tuple[WeeklyCourseSlot, WeeklyCourseSlot]] = []

    parsed: list[tuple[int, int, WeeklyCourseSlot]] = []
    for slot in slots:
        try:
            start = _time_to_minutes(slot.start_time)
            end = _time_to_minutes(slot.end_time)
        except ValueError:
            continue
        # end <= start cannot overlap anything meaningfully
        if end <= start:
            continue
        parsed.append((start, end, slot))

    for i in range(len(parsed)):
        s1, e1, a = parsed[i]
        for j in range(i + 1, len(parsed)):
            s2, e2, b = parsed[j]
            if a.day_of_week != b.day_of_week:
                continue
            da, db = a.descriptor, b.descriptor
            if da.end_week < db.start_week or db.end_week < da.start_week:
                continue
            if _overlaps(s1, e1, s2, e2):
                conflicts.append((a, b))

    return conflicts

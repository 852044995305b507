"""
Axis interpretation (grid -> row times and column weekdays).

Each data row carries its period's clock times ("08:00-09:40") in the time
column. Row 0 holds the weekday headers ("星期一", "周三", "Mon", ...) for
every column right of the time column.

Documents come in two shapes:
- time | Mon | Tue | ...              (time column 0)
- period | time | Mon | Tue | ...     (time column 1)
so the time column is the first of the two leading columns that actually
holds clock times.

Nothing here raises: a row or column that cannot be read maps to None,
and the assembler drops every cell that lands on such an axis.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional

from mytimetable.grid import Grid
from mytimetable.model import TimeRange


TIME_COLUMN_CANDIDATES = (0, 1)

_TIME_RE = re.compile(r"(\d{1,2})[:：](\d{2})")

# Order matters: the first glyph found in a header wins
WEEKDAY_GLYPHS = (
    ("一", 1),
    ("二", 2),
    ("三", 3),
    ("四", 4),
    ("五", 5),
    ("六", 6),
    ("日", 7),
    ("天", 7),
)

_EN_WEEKDAY_RE = re.compile(
    r"\b(monday|mon|tuesday|tues|tue|wednesday|wed|thursday|thurs|thur|thu|friday|fri|saturday|sat|sunday|sun)\b",
    re.IGNORECASE,
)
_EN_WEEKDAYS = {"mon": 1, "tue": 2, "wed": 3, "thu": 4, "fri": 5, "sat": 6, "sun": 7}


@dataclass(frozen=True)
class Axes:
    time_column: int
    times: Dict[int, Optional[TimeRange]]
    weekdays: Dict[int, Optional[int]]

    def time_of(self, row: int) -> Optional[TimeRange]:
        return self.times.get(row)

    def weekday_of(self, col: int) -> Optional[int]:
        return self.weekdays.get(col)


def _is_clock(hours: str, minutes: str) -> bool:
    return 0 <= int(hours) <= 23 and 0 <= int(minutes) <= 59


def parse_time_range(text: str) -> Optional[TimeRange]:
    """
    Find two HH:MM tokens in the text. Returns None if fewer than two are
    present or either one is not a clock time (24:00, 8:75, ...).
    """
    found = _TIME_RE.findall(text or "")
    if len(found) < 2:
        return None

    (h1, m1), (h2, m2) = found[0], found[1]
    if not (_is_clock(h1, m1) and _is_clock(h2, m2)):
        return None
    return TimeRange(start=f"{int(h1):02d}:{m1}", end=f"{int(h2):02d}:{m2}")


def parse_weekday(text: str) -> Optional[int]:
    """
    Map a header text to 1 (Monday) .. 7 (Sunday), or None.
    """
    text = text or ""
    for glyph, day in WEEKDAY_GLYPHS:
        if glyph in text:
            return day

    m = _EN_WEEKDAY_RE.search(text)
    if m:
        return _EN_WEEKDAYS[m.group(1).lower()[:3]]

    return None


def detect_time_column(grid: Grid) -> int:
    for col in TIME_COLUMN_CANDIDATES:
        if any(parse_time_range(grid.text(r, col)) for r in range(1, grid.height)):
            return col
    return TIME_COLUMN_CANDIDATES[0]


def interpret_axes(grid: Grid) -> Axes:
    time_col = detect_time_column(grid)

    times: Dict[int, Optional[TimeRange]] = {}
    for r in range(1, grid.height):
        times[r] = parse_time_range(grid.text(r, time_col))

    weekdays: Dict[int, Optional[int]] = {}
    for c in range(time_col + 1, grid.width):
        weekdays[c] = parse_weekday(grid.text(0, c))

    return Axes(time_column=time_col, times=times, weekdays=weekdays)

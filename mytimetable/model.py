"""
Central data model definitions used across the import pipeline.

This module defines the canonical shapes that flow between the stages so that:
- all stages share the same field names
- transient grid/axis values stay separate from the weekly slots and dated events
- the calendar store only ever receives CalendarEvent objects
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional


# Length of the semester window every import is expanded over
SEMESTER_WEEKS = 18


@dataclass(frozen=True)
class RawCell:
    """
    One cell as read from the markup table, before span resolution.
    """

    text: str
    row_span: int = 1
    col_span: int = 1


@dataclass(frozen=True)
class GridCell:
    """
    A resolved cell of the reconstructed grid.

    Only the top-left cell of a merged region has is_placeholder=False and
    carries the real row_span. Covered positions are placeholders (row_span 0).
    """

    text: str
    is_placeholder: bool
    row_span: int


@dataclass(frozen=True)
class TimeRange:
    start: str
    end: str


@dataclass(frozen=True)
class CourseDescriptor:
    course_name: str
    teacher: str = ""
    classroom: str = ""
    course_category: str = ""
    start_week: int = 1
    end_week: int = SEMESTER_WEEKS


@dataclass(frozen=True)
class WeeklyCourseSlot:
    """
    One recurring weekly occurrence of a course, before date expansion.
    """

    descriptor: CourseDescriptor
    day_of_week: int
    start: TimeRange
    end: TimeRange

    @property
    def start_time(self) -> str:
        return self.start.start

    @property
    def end_time(self) -> str:
        return self.end.end


@dataclass
class ImportCategory:
    id: int
    name: str
    color: str
    active: bool = True


@dataclass(frozen=True)
class Semester:
    """
    The detected semester: a human label, the raw anchor and the week-1 Monday.
    """

    label: str
    anchor: date
    first_monday: date


@dataclass
class CalendarEvent:
    """
    One concrete dated event handed to the calendar store.
    """

    id: int
    title: str
    start: datetime
    end: datetime
    description: str
    category_id: int
    category_color: str
    all_day: bool = False
    event_type: str = "calendar"


@dataclass
class ParseResult:
    success: bool
    schedule: List[WeeklyCourseSlot] = field(default_factory=list)
    message: Optional[str] = None


@dataclass(frozen=True)
class ImportResult:
    created_count: int
    semester_label: str
    semester_start_date: date

"""
Semester materialization (weekly slots -> dated calendar events).

Semester rule, applied to the import date:
- February .. July    -> Spring semester, anchored on March 1 of that year
- August .. January   -> Autumn semester, anchored on September 8
                         (January belongs to the previous year's autumn)

Week 1 starts on the Monday on or before the anchor. Every slot is then
repeated for each of the 18 weeks that fall inside its own week range.
"""

from __future__ import annotations

import time
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from mytimetable.model import SEMESTER_WEEKS, CalendarEvent, ImportCategory, Semester, WeeklyCourseSlot


SPRING_MONTHS = range(2, 8)
SPRING_ANCHOR = (3, 1)
AUTUMN_ANCHOR = (9, 8)

IMPORT_CATEGORY_NAME = "Course"
IMPORT_CATEGORY_COLOR = "#7209b7"


def detect_semester(today: date) -> Semester:
    """
    Pick the semester for an import happening on `today`.
    """
    if today.month in SPRING_MONTHS:
        anchor = date(today.year, *SPRING_ANCHOR)
        label = f"Spring {today.year}"
    else:
        year = today.year - 1 if today.month == 1 else today.year
        anchor = date(year, *AUTUMN_ANCHOR)
        label = f"Autumn {year}"

    return Semester(label=label, anchor=anchor, first_monday=monday_on_or_before(anchor))


def monday_on_or_before(d: date) -> date:
    # weekday(): Monday=0 .. Sunday=6, so Sunday goes back 6 days
    return d - timedelta(days=d.weekday())


def _at(d: date, hhmm: str) -> datetime:
    hours, minutes = hhmm.split(":")
    return datetime(d.year, d.month, d.day, int(hours), int(minutes))


def _description(slot: WeeklyCourseSlot, week_number: int) -> str:
    desc = slot.descriptor
    parts = [desc.course_category, desc.teacher, desc.classroom, f"week {week_number}"]
    return " ".join(p for p in parts if p)


def new_import_category(category_id: Optional[int] = None) -> ImportCategory:
    """
    The category every imported course event is tagged with.
    """
    cid = category_id if category_id is not None else int(time.time() * 1000)
    return ImportCategory(id=cid, name=IMPORT_CATEGORY_NAME, color=IMPORT_CATEGORY_COLOR, active=True)


def materialize(
    slots: Iterable[WeeklyCourseSlot],
    semester: Semester,
    category: ImportCategory,
    id_base: Optional[int] = None,
) -> List[CalendarEvent]:
    """
    Expand weekly slots into one CalendarEvent per in-range week.

    Event ids are id_base + running counter (id_base defaults to the current
    time in milliseconds), so they are unique within the batch.
    """
    slot_list = list(slots)
    base = id_base if id_base is not None else int(time.time() * 1000)

    events: List[CalendarEvent] = []
    for week in range(SEMESTER_WEEKS):
        week_number = week + 1
        for slot in slot_list:
            desc = slot.descriptor
            if not (desc.start_week <= week_number <= desc.end_week):
                continue

            day = semester.first_monday + timedelta(days=week * 7 + (slot.day_of_week - 1))
            events.append(
                CalendarEvent(
                    id=base + len(events),
                    title=desc.course_name,
                    start=_at(day, slot.start_time),
                    end=_at(day, slot.end_time),
                    description=_description(slot, week_number),
                    category_id=category.id,
                    category_color=category.color,
                )
            )

    return events

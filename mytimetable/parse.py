"""
Cell content parsing (free text of one timetable cell -> CourseDescriptor).

A cell usually looks like

    (必修)高等数学/王老师/中心校区-1号楼-(101)(1-8周)

but source documents vary a lot, so the text goes through an ordered chain
of small extractors. Each one either matches and returns a value, or
reports no match and leaves the text alone:

1. week range     "1-8周" / "3-5每周"      -> start/end week (default 1..18)
2. category       first "(...)" group       -> label, read from the original text
3. prefix         leading "...)" segment    -> dropped from the working copy
4. fields         name/teacher/...-room     -> name, teacher, classroom

If the fields pattern does not match, the whole cleaned text becomes the
course name and teacher/classroom/category stay empty.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

from mytimetable.model import SEMESTER_WEEKS, CourseDescriptor


_WEEK_RANGE_RE = re.compile(r"[(（]?\s*(\d+)\s*-\s*(\d+)\s*(?:周|每周)\s*[)）]?")
_WEEK_ONLY_RE = re.compile(r"^\s*\d+\s*-\s*\d+\s*(?:周|每周)\s*$")
_PAREN_GROUP_RE = re.compile(r"[(（]([^()（）]*)[)）]")
_PREFIX_RE = re.compile(r"^\s*[(（]?[^/()（）]{0,12}[)）]")
_EDGE_SLASH_RE = re.compile(r"^\s*/|/\s*$")
_FIELDS_RE = re.compile(
    r"^(?P<name>[^/]+)/(?P<teacher>[^/]*)/(?:.*/)?(?P<location>[^/]*-)(?P<room>[^/\-]+)$"
)


@dataclass(frozen=True)
class Extraction:
    """
    Tagged result of one extractor.

    matched=False means "no match": value is None and remainder is the input.
    """

    matched: bool
    value: Any = None
    remainder: str = ""


def _no_match(text: str) -> Extraction:
    return Extraction(matched=False, value=None, remainder=text)


# ---------------------------------------------------------------------------
# Extractors
# ---------------------------------------------------------------------------


def _clamp_week(n: int) -> int:
    return max(1, min(SEMESTER_WEEKS, n))


def extract_week_range(text: str) -> Extraction:
    """
    Find a "<start>-<end>周" token. The remainder has the token removed and
    stray leading/trailing slashes trimmed.
    """
    m = _WEEK_RANGE_RE.search(text)
    if not m:
        return _no_match(text)

    start = _clamp_week(int(m.group(1)))
    end = _clamp_week(int(m.group(2)))
    if start > end:
        start, end = end, start

    rest = (text[: m.start()] + text[m.end():]).strip()
    rest = _EDGE_SLASH_RE.sub("", rest).strip()
    return Extraction(matched=True, value=(start, end), remainder=rest)


def extract_category(text: str) -> Extraction:
    """
    First parenthesised label of the original text.

    Week-range groups and groups inside the location field (after the last
    slash) are not categories.
    """
    last_slash = text.rfind("/")
    for m in _PAREN_GROUP_RE.finditer(text):
        label = m.group(1).strip()
        if not label or _WEEK_ONLY_RE.match(label):
            continue
        if last_slash != -1 and m.start() > last_slash:
            continue
        return Extraction(matched=True, value=label, remainder=text)
    return _no_match(text)


def strip_prefix(text: str) -> Extraction:
    """
    Drop a short leading segment closed by ")" such as "(必修)" or "1)".
    """
    m = _PREFIX_RE.match(text)
    if not m:
        return _no_match(text)
    return Extraction(matched=True, value=m.group(0).strip(), remainder=text[m.end():].strip())


def _room_of(segment: str) -> str:
    segment = segment.strip()
    m = _PAREN_GROUP_RE.search(segment)
    if m and m.group(1).strip():
        return m.group(1).strip()
    return segment


def extract_fields(text: str) -> Extraction:
    """
    Split "name/teacher/[...]/location-...-room" into (name, teacher, room).
    """
    m = _FIELDS_RE.match(text.strip())
    if not m:
        return _no_match(text)

    name = m.group("name").strip()
    if not name:
        return _no_match(text)

    teacher = m.group("teacher").strip()
    room = _room_of(m.group("room"))
    return Extraction(matched=True, value=(name, teacher, room), remainder="")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_cell(text: str) -> CourseDescriptor:
    """
    Parse the text of one occupied timetable cell. Never raises.
    """
    original = (text or "").strip()

    weeks = extract_week_range(original)
    start_week, end_week = weeks.value if weeks.matched else (1, SEMESTER_WEEKS)
    working = weeks.remainder

    category = extract_category(original)

    prefix = strip_prefix(working)
    working = prefix.remainder or working

    fields = extract_fields(working)
    if fields.matched:
        name, teacher, room = fields.value
        return CourseDescriptor(
            course_name=name,
            teacher=teacher,
            classroom=room,
            course_category=category.value if category.matched else "",
            start_week=start_week,
            end_week=end_week,
        )

    return CourseDescriptor(
        course_name=working or original,
        start_week=start_week,
        end_week=end_week,
    )


def describe(descriptor: CourseDescriptor) -> Optional[str]:
    """
    One-line summary used by the CLI preview; None for a bare course name.
    """
    parts = [descriptor.course_category, descriptor.teacher, descriptor.classroom]
    parts = [p for p in parts if p]
    return " / ".join(parts) if parts else None

"""
Import orchestration (document -> calendar store).

Runs the stages in a straight line:

    Idle -> Converting -> TableLocated -> GridBuilt -> SlotsAssembled
         -> Materialized -> Done

Any stage may end the run in Failed(reason). Nothing is retried, and the
calendar store only ever sees one complete batch, after every stage
before it has succeeded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Protocol

from mytimetable.assemble import assemble_slots
from mytimetable.axes import interpret_axes
from mytimetable.convert import ConvertedDocument, convert_document
from mytimetable.errors import EmptyScheduleError, NoTableFound, TimetableImportError
from mytimetable.grid import build_grid, locate_table, read_table_rows
from mytimetable.model import (
    CalendarEvent,
    ImportCategory,
    ImportResult,
    ParseResult,
    WeeklyCourseSlot,
)
from mytimetable.semester import (
    IMPORT_CATEGORY_NAME,
    detect_semester,
    materialize,
    new_import_category,
)


class ImportState(Enum):
    IDLE = "idle"
    CONVERTING = "converting"
    TABLE_LOCATED = "table_located"
    GRID_BUILT = "grid_built"
    SLOTS_ASSEMBLED = "slots_assembled"
    MATERIALIZED = "materialized"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ImportTrace:
    """
    Records the states one run went through; `reason` is set on failure.
    """

    states: List[ImportState] = field(default_factory=lambda: [ImportState.IDLE])
    reason: Optional[str] = None

    @property
    def state(self) -> ImportState:
        return self.states[-1]

    def advance(self, state: ImportState) -> None:
        self.states.append(state)

    def fail(self, reason: str) -> None:
        self.reason = reason
        self.states.append(ImportState.FAILED)


class CalendarStore(Protocol):
    def find_category(self, name: str) -> Optional[ImportCategory]: ...

    def replace_imported(self, events: List[CalendarEvent], category: ImportCategory) -> None: ...


# ---------------------------------------------------------------------------
# Markup -> weekly slots
# ---------------------------------------------------------------------------


def build_schedule(markup: str, trace: Optional[ImportTrace] = None) -> List[WeeklyCourseSlot]:
    """
    Turn converted markup into weekly slots.

    Raises NoTableFound or EmptyScheduleError.
    """
    trace = trace if trace is not None else ImportTrace()

    table = locate_table(markup)
    if table is None:
        raise NoTableFound()
    trace.advance(ImportState.TABLE_LOCATED)

    grid = build_grid(read_table_rows(table))
    trace.advance(ImportState.GRID_BUILT)

    slots = assemble_slots(grid, interpret_axes(grid))
    if not slots:
        raise EmptyScheduleError()
    trace.advance(ImportState.SLOTS_ASSEMBLED)

    return slots


def parse_schedule(markup: str) -> ParseResult:
    """
    Result-object variant of build_schedule: failures become success=False.
    """
    try:
        return ParseResult(success=True, schedule=build_schedule(markup))
    except (NoTableFound, EmptyScheduleError) as e:
        return ParseResult(success=False, message=str(e))


# ---------------------------------------------------------------------------
# Full import
# ---------------------------------------------------------------------------


def import_schedule(
    path: str | Path,
    store: CalendarStore,
    today: Optional[date] = None,
    converter: Callable[[str | Path], ConvertedDocument] = convert_document,
    trace: Optional[ImportTrace] = None,
    id_base: Optional[int] = None,
) -> ImportResult:
    """
    Convert, parse and materialize one timetable document, then hand the
    events to the store as a single batch.

    Raises ConversionError, NoTableFound or EmptyScheduleError; the store is
    not touched in any of those cases.
    """
    trace = trace if trace is not None else ImportTrace()
    today = today if today is not None else date.today()

    try:
        trace.advance(ImportState.CONVERTING)
        doc = converter(path)

        slots = build_schedule(doc.markup, trace)

        existing = store.find_category(IMPORT_CATEGORY_NAME)
        category = new_import_category(existing.id if existing is not None else None)

        semester = detect_semester(today)
        events = materialize(slots, semester, category, id_base=id_base)
        trace.advance(ImportState.MATERIALIZED)
    except TimetableImportError as e:
        trace.fail(str(e))
        raise

    store.replace_imported(events, category)
    trace.advance(ImportState.DONE)

    return ImportResult(
        created_count=len(events),
        semester_label=semester.label,
        semester_start_date=semester.first_monday,
    )

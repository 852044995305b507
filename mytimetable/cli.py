"""
CLI (Command Line Interface).

Commands:

    mytimetable preview <file>            show the weekly timetable found in a document
    mytimetable conflicts <file>          list overlapping weekly courses
    mytimetable import <file>             materialize the semester into the calendar store
    mytimetable export <file.ics>         export stored course events to iCalendar

Supported documents: .docx (converted with mammoth) and .html/.htm.
"""

from __future__ import annotations

import argparse
from datetime import date, datetime
from pathlib import Path

from rich.console import Console
from rich.table import Table

from mytimetable.conflicts import find_conflicts
from mytimetable.convert import convert_document
from mytimetable.errors import TimetableImportError
from mytimetable.export_ics import export_events_to_ics
from mytimetable.importer import build_schedule, import_schedule
from mytimetable.model import WeeklyCourseSlot
from mytimetable.parse import describe
from mytimetable.semester import IMPORT_CATEGORY_NAME
from mytimetable.storage import CalendarStore


console = Console()

WEEKDAY_NAMES = {1: "Mon", 2: "Tue", 3: "Wed", 4: "Thu", 5: "Fri", 6: "Sat", 7: "Sun"}


def _parse_day(text: str) -> date:
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {text!r}, expected YYYY-MM-DD")


def _load_slots(path: str) -> list[WeeklyCourseSlot]:
    """
    Convert + parse a document. Raises TimetableImportError.
    """
    doc = convert_document(path)
    return build_schedule(doc.markup)


def _slot_label(slot: WeeklyCourseSlot) -> str:
    d = slot.descriptor
    return f"{WEEKDAY_NAMES.get(slot.day_of_week, '?')} {slot.start_time}-{slot.end_time} {d.course_name}"


def _cmd_preview(args: argparse.Namespace) -> int:
    """
    Print the weekly slots parsed from a document without touching the store.
    """
    try:
        slots = _load_slots(args.file)
    except TimetableImportError as e:
        console.print(f"[red]Import failed:[/red] {e}")
        return 1

    table = Table(title=f"Weekly timetable ({len(slots)} courses)")
    table.add_column("Day")
    table.add_column("Time")
    table.add_column("Course")
    table.add_column("Details")
    table.add_column("Weeks", justify="right")

    for slot in sorted(slots, key=lambda s: (s.day_of_week, s.start_time)):
        d = slot.descriptor
        table.add_row(
            WEEKDAY_NAMES.get(slot.day_of_week, "?"),
            f"{slot.start_time}-{slot.end_time}",
            d.course_name,
            describe(d) or "",
            f"{d.start_week}-{d.end_week}",
        )

    console.print(table)
    return 0


def _cmd_conflicts(args: argparse.Namespace) -> int:
    try:
        slots = _load_slots(args.file)
    except TimetableImportError as e:
        console.print(f"[red]Import failed:[/red] {e}")
        return 1

    confs = find_conflicts(slots)
    if not confs:
        console.print("No conflicts found.")
        return 0

    console.print(f"Conflicts found: {len(confs)}")
    for a, b in confs:
        console.print(f"- {_slot_label(a)}  <->  {_slot_label(b)}")
    return 0


def _cmd_import(args: argparse.Namespace) -> int:
    """
    Run the full import and replace previously imported course events.
    """
    store = CalendarStore(args.store)

    try:
        result = import_schedule(args.file, store, today=args.today)
    except TimetableImportError as e:
        console.print(f"[red]Import failed:[/red] {e}")
        return 1

    console.print(
        f"Created {result.created_count} course events for {result.semester_label} "
        f"(week 1 starts {result.semester_start_date.isoformat()}) in {store.path}"
    )
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    store = CalendarStore(args.store)

    category = store.find_category(IMPORT_CATEGORY_NAME)
    events = [ev for ev in store.load_events() if category is not None and ev.category_id == category.id]
    if not events:
        console.print("No imported course events to export.")
        return 0

    out_path = (args.out or "").strip()
    if not out_path:
        console.print("Please provide output .ics path.")
        return 1

    events.sort(key=lambda ev: ev.start)
    n = export_events_to_ics(events, out_path)
    console.print(f"Exported {n} events to: {out_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="mytimetable", description="Timetable document importer")
    sub = parser.add_subparsers(dest="command", required=True)

    p_preview = sub.add_parser("preview", help="Show the weekly timetable parsed from a document")
    p_preview.add_argument("file", type=str, help="Timetable document (.docx, .html)")

    p_conf = sub.add_parser("conflicts", help="List overlapping courses in a document")
    p_conf.add_argument("file", type=str, help="Timetable document (.docx, .html)")

    p_import = sub.add_parser("import", help="Import a document into the calendar store")
    p_import.add_argument("file", type=str, help="Timetable document (.docx, .html)")
    p_import.add_argument("--store", type=Path, default=None, help="Calendar store JSON file")
    p_import.add_argument(
        "--today", type=_parse_day, default=None, help="Import date used to pick the semester (YYYY-MM-DD)"
    )

    p_export = sub.add_parser("export", help="Export imported course events to .ics")
    p_export.add_argument("out", type=str, help="Output file path (e.g. out.ics)")
    p_export.add_argument("--store", type=Path, default=None, help="Calendar store JSON file")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "preview":
        raise SystemExit(_cmd_preview(args))
    if args.command == "conflicts":
        raise SystemExit(_cmd_conflicts(args))
    if args.command == "import":
        raise SystemExit(_cmd_import(args))
    if args.command == "export":
        raise SystemExit(_cmd_export(args))

    raise SystemExit(2)

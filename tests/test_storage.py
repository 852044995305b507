"""
Unit tests for the JSON calendar store.

Storage contract:
- missing/invalid file -> empty calendar
- replace_imported() find-or-creates the import category and normalises it
- previously imported events are replaced, other events are kept
"""

import json
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from mytimetable.model import CalendarEvent, ImportCategory
from mytimetable.storage import CalendarStore


def _event(eid: int, category_id: int, title: str = "高等数学") -> CalendarEvent:
    return CalendarEvent(
        id=eid,
        title=title,
        start=datetime(2026, 9, 7, 8, 0),
        end=datetime(2026, 9, 7, 9, 40),
        description="必修 王老师 101 week 1",
        category_id=category_id,
        category_color="#7209b7",
    )


class TestCalendarStore(unittest.TestCase):
    def test_missing_file_is_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            store = CalendarStore(Path(d) / "missing.json")
            self.assertEqual(store.load_events(), [])
            self.assertEqual(store.load_categories(), [])
            self.assertIsNone(store.find_category("Course"))

    def test_corrupt_file_is_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "calendar.json"
            p.write_text("{not json", encoding="utf-8")
            self.assertEqual(CalendarStore(p).load_events(), [])

    def test_replace_imported_creates_category_and_roundtrips_events(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "sub" / "calendar.json"
            store = CalendarStore(p)
            cat = ImportCategory(id=1, name="Course", color="#7209b7")

            store.replace_imported([_event(10, 1), _event(11, 1)], cat)

            self.assertEqual(store.find_category("Course"), cat)
            events = store.load_events()
            self.assertEqual([e.id for e in events], [10, 11])
            self.assertEqual(events[0], _event(10, 1))

            data = json.loads(p.read_text(encoding="utf-8"))
            self.assertEqual(data["events"][0]["start"], "2026-09-07T08:00")

    def test_reimport_replaces_only_imported_events(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "calendar.json"
            p.write_text(
                json.dumps(
                    {
                        "categories": [
                            {"id": 1, "name": "Course", "color": "#ffffff", "active": False},
                            {"id": 2, "name": "Personal", "color": "#00ff00", "active": True},
                        ],
                        "events": [
                            {"id": 5, "title": "old course", "start": "2026-03-02T08:00", "end": "2026-03-02T09:40",
                             "description": "", "category_id": 1, "category_color": "#ffffff"},
                            {"id": 6, "title": "dentist", "start": "2026-09-10T15:00", "end": "2026-09-10T16:00",
                             "description": "", "category_id": 2, "category_color": "#00ff00"},
                        ],
                    }
                ),
                encoding="utf-8",
            )
            store = CalendarStore(p)

            store.replace_imported([_event(20, 1, "英语")], ImportCategory(id=1, name="Course", color="#7209b7"))

            titles = sorted(e.title for e in store.load_events())
            self.assertEqual(titles, ["dentist", "英语"])

            course = store.find_category("Course")
            assert course is not None
            self.assertEqual((course.color, course.active), ("#7209b7", True))
            self.assertEqual(len(store.load_categories()), 2)


if __name__ == "__main__":
    unittest.main()

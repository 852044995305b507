"""
Persistent calendar store for imported course events.

This module manages the file:

    data/calendar.json

with the schema

    {"categories": [{"id", "name", "color", "active"}, ...],
     "events":     [{"id", "title", "start", "end", ...}, ...]}

Importing a timetable replaces every event of the import category in one
write, so an import either lands completely or not at all.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from mytimetable.model import CalendarEvent, ImportCategory


def _default_store_path() -> Path:
    """
    Return the default path of calendar.json inside the package.

    Using a function instead of a constant makes testing easier,
    because tests can pass their own path.
    """
    base_dir = Path(__file__).resolve().parent
    return base_dir / "data" / "calendar.json"


def _event_to_dict(ev: CalendarEvent) -> Dict[str, Any]:
    data = asdict(ev)
    data["start"] = ev.start.isoformat(timespec="minutes")
    data["end"] = ev.end.isoformat(timespec="minutes")
    return data


def _event_from_dict(data: Dict[str, Any]) -> Optional[CalendarEvent]:
    try:
        return CalendarEvent(
            id=int(data["id"]),
            title=str(data.get("title", "")),
            start=datetime.fromisoformat(str(data["start"])),
            end=datetime.fromisoformat(str(data["end"])),
            description=str(data.get("description", "")),
            category_id=int(data["category_id"]),
            category_color=str(data.get("category_color", "")),
            all_day=bool(data.get("all_day", False)),
            event_type=str(data.get("event_type", "calendar")),
        )
    except (KeyError, TypeError, ValueError):
        return None


def _category_from_dict(data: Dict[str, Any]) -> Optional[ImportCategory]:
    try:
        return ImportCategory(
            id=int(data["id"]),
            name=str(data["name"]),
            color=str(data.get("color", "")),
            active=bool(data.get("active", True)),
        )
    except (KeyError, TypeError, ValueError):
        return None


class CalendarStore:
    """
    JSON-file calendar store.

    A missing or corrupted file reads as an empty calendar; it is only
    rewritten by replace_imported().
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else _default_store_path()

    def _load(self) -> Dict[str, List[Dict[str, Any]]]:
        if not self.path.exists():
            return {"categories": [], "events": []}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError, UnicodeDecodeError):
            return {"categories": [], "events": []}

        if not isinstance(data, dict):
            return {"categories": [], "events": []}

        categories = data.get("categories", [])
        events = data.get("events", [])
        return {
            "categories": [c for c in categories if isinstance(c, dict)] if isinstance(categories, list) else [],
            "events": [e for e in events if isinstance(e, dict)] if isinstance(events, list) else [],
        }

    def load_categories(self) -> List[ImportCategory]:
        out: List[ImportCategory] = []
        for raw in self._load()["categories"]:
            cat = _category_from_dict(raw)
            if cat is not None:
                out.append(cat)
        return out

    def load_events(self) -> List[CalendarEvent]:
        out: List[CalendarEvent] = []
        for raw in self._load()["events"]:
            ev = _event_from_dict(raw)
            if ev is not None:
                out.append(ev)
        return out

    def find_category(self, name: str) -> Optional[ImportCategory]:
        for cat in self.load_categories():
            if cat.name == name:
                return cat
        return None

    def replace_imported(self, events: List[CalendarEvent], category: ImportCategory) -> None:
        """
        Find-or-create the import category, drop its previous events,
        insert the new batch and persist everything in one write.
        """
        data = self._load()

        categories = data["categories"]
        existing = next((c for c in categories if c.get("name") == category.name), None)
        if existing is None:
            existing = {"id": category.id, "name": category.name}
            categories.append(existing)
        existing["color"] = category.color
        existing["active"] = True
        category_id = existing["id"]

        kept = [e for e in data["events"] if e.get("category_id") != category_id]
        new_events = []
        for ev in events:
            d = _event_to_dict(ev)
            d["category_id"] = category_id
            d["category_color"] = category.color
            new_events.append(d)

        payload = {"categories": categories, "events": kept + new_events}

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")

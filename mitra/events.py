"""Calendar events: fixed Persian dates and Hijri events mapped for one year."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

EventMap = dict[tuple[int, int], list["Event"]]


def _require(data: dict[str, Any], key: str, kind: type) -> Any:
    if key not in data:
        raise ValueError(f"event is missing field {key!r}")
    value = data[key]
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ValueError(f"event field {key!r} has the wrong type")
    return value


def _optional_int(data: dict[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"event field {key!r} has the wrong type")
    return value


@dataclass(frozen=True)
class Event:
    """A single calendar event on a Shamsi month and day."""

    holiday: bool
    month: int
    day: int
    title: str
    hijri_month: int | None = None
    hijri_day: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Event:
        """Build an event from its JSON object; month and day default to 0."""
        if not isinstance(data, dict):
            raise ValueError("event must be a JSON object")
        return cls(
            holiday=_require(data, "holiday", bool),
            month=_require(data, "month", int) if "month" in data else 0,
            day=_require(data, "day", int) if "day" in data else 0,
            title=_require(data, "title", str),
            hijri_month=_optional_int(data, "hijri_month"),
            hijri_day=_optional_int(data, "hijri_day"),
        )


def _group(events: list[Event]) -> EventMap:
    grouped: EventMap = {}
    for event in events:
        grouped.setdefault((event.month, event.day), []).append(event)
    return grouped


def _event_list(data: dict[str, Any], key: str) -> list[Event]:
    items = data.get(key, [])
    if not isinstance(items, list):
        raise ValueError(f"{key!r} must be a list")
    return [Event.from_dict(item) for item in items]


@dataclass
class EventCalendar:
    """Event data keyed by (month, day).

    Fixed events apply every year; mapped Hijri events only apply in
    ``reference_year``. A reference year of 0 marks an empty calendar.
    """

    reference_year: int = 0
    fixed: EventMap = field(default_factory=dict)
    mapped: EventMap = field(default_factory=dict)

    @classmethod
    def from_json(cls, text: str) -> EventCalendar:
        """Load from JSON text; raises ValueError on malformed data."""
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("event data must be a JSON object")
        if "persian_reference_year" not in data:
            raise ValueError("event data is missing 'persian_reference_year'")
        reference_year = data["persian_reference_year"]
        if not isinstance(reference_year, int) or isinstance(reference_year, bool):
            raise ValueError("'persian_reference_year' must be an integer")
        fixed = [
            replace(event, hijri_month=None, hijri_day=None)
            for event in _event_list(data, "Persian Calendar")
        ]
        mapped = _event_list(data, "hijri_events_mapping")
        return cls(reference_year, _group(fixed), _group(mapped))

    @classmethod
    def from_file(cls, path: str | Path) -> EventCalendar:
        return cls.from_json(Path(path).read_text(encoding="utf-8"))

    @classmethod
    def empty(cls) -> EventCalendar:
        return cls()

    def events_for_date(self, year: int, month: int, day: int) -> list[Event]:
        """Fixed events, then mapped Hijri events if ``year`` is the reference year."""
        if self.reference_year == 0:
            return []
        key = (month, day)
        results = list(self.fixed.get(key, []))
        if year == self.reference_year:
            results.extend(self.mapped.get(key, []))
        return results

    def event_indicator(self, year: int, month: int, day: int) -> str | None:
        """'*' if any event is a holiday, '+' for other events, None for none."""
        events = self.events_for_date(year, month, day)
        if not events:
            return None
        return "*" if any(event.holiday for event in events) else "+"
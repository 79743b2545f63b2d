import json

import pytest

from mitra.events import Event, EventCalendar

SAMPLE = {
    "persian_reference_year": 1403,
    "Persian Calendar": [
        {"holiday": True, "month": 1, "day": 1, "title": "Nowruz", "hijri_month": 9, "hijri_day": 1},
        {"holiday": False, "month": 1, "day": 13, "title": "Nature Day"},
        {"holiday": False, "month": 1, "day": 1, "title": "Spring begins"},
    ],
    "hijri_events_mapping": [
        {"holiday": True, "month": 1, "day": 22, "title": "Mapped holiday", "hijri_month": 10, "hijri_day": 1},
        {"holiday": False, "month": 1, "day": 1, "title": "Mapped note", "hijri_month": 9, "hijri_day": 20},
    ],
}


@pytest.fixture
def calendar():
    return EventCalendar.from_json(json.dumps(SAMPLE))


def test_fixed_then_mapped_events_in_reference_year(calendar):
    titles = [e.title for e in calendar.events_for_date(1403, 1, 1)]
    assert titles == ["Nowruz", "Spring begins", "Mapped note"]


def test_mapped_events_only_in_reference_year(calendar):
    titles = [e.title for e in calendar.events_for_date(1404, 1, 1)]
    assert titles == ["Nowruz", "Spring begins"]
    assert calendar.events_for_date(1404, 1, 22) == []
    assert [e.title for e in calendar.events_for_date(1403, 1, 22)] == ["Mapped holiday"]


def test_fixed_events_lose_hijri_fields(calendar):
    nowruz = calendar.events_for_date(1403, 1, 1)[0]
    assert (nowruz.hijri_month, nowruz.hijri_day) == (None, None)
    mapped = calendar.events_for_date(1403, 1, 1)[-1]
    assert (mapped.hijri_month, mapped.hijri_day) == (9, 20)


def test_indicators(calendar):
    assert calendar.event_indicator(1403, 1, 1) == "*"
    assert calendar.event_indicator(1403, 1, 13) == "+"
    assert calendar.event_indicator(1403, 1, 22) == "*"
    assert calendar.event_indicator(1404, 1, 22) is None
    assert calendar.event_indicator(1403, 5, 5) is None


def test_empty_calendar_has_nothing():
    empty = EventCalendar.empty()
    assert empty.events_for_date(1403, 1, 1) == []
    assert empty.event_indicator(1403, 1, 1) is None


def test_reference_year_zero_disables_events():
    data = dict(SAMPLE, persian_reference_year=0)
    calendar = EventCalendar.from_json(json.dumps(data))
    assert calendar.events_for_date(0, 1, 1) == []


def test_missing_lists_default_to_empty():
    calendar = EventCalendar.from_json(json.dumps({"persian_reference_year": 1403}))
    assert calendar.reference_year == 1403
    assert calendar.events_for_date(1403, 1, 1) == []


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[]",
        json.dumps({"Persian Calendar": []}),
        json.dumps({"persian_reference_year": "1403"}),
        json.dumps({"persian_reference_year": 1403, "Persian Calendar": [{"month": 1, "day": 1}]}),
        json.dumps({"persian_reference_year": 1403, "hijri_events_mapping": {}}),
    ],
)
def test_malformed_data_raises(text):
    with pytest.raises(ValueError):
        EventCalendar.from_json(text)


def test_event_from_dict_defaults():
    event = Event.from_dict({"holiday": False, "title": "Untimed"})
    assert (event.month, event.day) == (0, 0)
    assert event.hijri_month is None


def test_event_from_dict_rejects_wrong_types():
    with pytest.raises(ValueError):
        Event.from_dict({"holiday": "yes", "title": "x"})
    with pytest.raises(ValueError):
        Event.from_dict({"holiday": True, "title": "x", "month": True})


def test_from_file(tmp_path):
    path = tmp_path / "events.json"
    path.write_text(json.dumps(SAMPLE, ensure_ascii=False), encoding="utf-8")
    calendar = EventCalendar.from_file(path)
    assert calendar.event_indicator(1403, 1, 13) == "+"
    assert calendar.reference_year == SAMPLE["persian_reference_year"]
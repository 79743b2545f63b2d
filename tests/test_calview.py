import re

import pytest

from mitra.calendar import MONTH_NAMES, ParsiDate
from mitra.calview import (
    month_lines,
    render_month,
    render_three_months,
    render_year,
)
from mitra.events import EventCalendar
from mitra.utils import CommandError

EVENTS_JSON = """
{
  "persian_reference_year": 1403,
  "Persian Calendar": [
    {"holiday": true, "month": 1, "day": 1, "title": "Nowruz"},
    {"holiday": false, "month": 1, "day": 2, "title": "Ordinary"}
  ],
  "hijri_events_mapping": [
    {"holiday": false, "month": 1, "day": 3, "title": "Mapped",
     "hijri_month": 9, "hijri_day": 1}
  ]
}
"""

OTHER_TODAY = ParsiDate(1300, 1, 1)


@pytest.fixture
def events():
    return EventCalendar.from_json(EVENTS_JSON)


def _day_numbers(lines):
    text = " ".join(lines[2:]).replace("\x1b[7m", " ").replace("\x1b[0m", " ")
    return [int(n) for n in re.findall(r"\d+", text)]


def test_invalid_month():
    assert month_lines(1403, 13, OTHER_TODAY) == ["Invalid Month: 13"]


def test_invalid_year_raises():
    with pytest.raises(CommandError):
        month_lines(0, 1, OTHER_TODAY)


def test_month_has_eight_lines_and_header():
    lines = month_lines(1403, 1, OTHER_TODAY)
    assert len(lines) == 8
    assert lines[0].strip() == f"{MONTH_NAMES[0]} 1403"
    assert len(lines[0]) == 27
    assert lines[1] == " Sat Sun Mon Tue Wed Thu Fri"


@pytest.mark.parametrize("year,month", [(1403, 1), (1403, 7), (1403, 12), (1404, 12)])
def test_all_days_listed_in_order(year, month):
    lines = month_lines(year, month, OTHER_TODAY)
    assert _day_numbers(lines) == list(range(1, ParsiDate.days_in_month(year, month) + 1))


def test_first_week_is_offset_by_weekday():
    lines = month_lines(1403, 1, OTHER_TODAY)
    offset = ParsiDate(1403, 1, 1).weekday_index() * 4
    assert lines[2].startswith(" " * offset + " 1")
    assert not lines[2].startswith(" " * (offset + 1) + " 1")


def test_week_lines_padded_to_width():
    lines = month_lines(1403, 2, OTHER_TODAY)
    assert all(len(line) >= 27 for line in lines[2:])


def test_today_is_highlighted():
    today = ParsiDate(1403, 1, 10)
    text = "\n".join(month_lines(1403, 1, today))
    assert "\x1b[7m10 \x1b[0m" in text
    assert text.count("\x1b[7m") == 1


def test_no_highlight_outside_current_month():
    text = "\n".join(month_lines(1403, 2, ParsiDate(1403, 1, 10)))
    assert "\x1b[7m" not in text


def test_event_indicators(events):
    lines = month_lines(1403, 1, OTHER_TODAY, events)
    text = "\n".join(lines)
    assert " 1*" in text
    assert " 2+" in text
    assert " 3+" in text


def test_mapped_events_only_in_reference_year(events):
    text = "\n".join(month_lines(1404, 1, OTHER_TODAY, events))
    assert " 1*" in text
    assert " 3+" not in text


def test_render_month_joins_lines(events):
    assert render_month(1403, 1, OTHER_TODAY, events) == "\n".join(
        month_lines(1403, 1, OTHER_TODAY, events)
    )


def test_three_months_around_today():
    today = ParsiDate(1403, 1, 15)
    lines = render_three_months(today).split("\n")
    assert len(lines) == 8
    assert f"{MONTH_NAMES[11]} 1402" in lines[0]
    assert f"{MONTH_NAMES[0]} 1403" in lines[0]
    assert f"{MONTH_NAMES[1]} 1403" in lines[0]
    previous = month_lines(1402, 12, today)
    assert lines[1].startswith(previous[1] + "  ")


def test_three_months_wraps_to_next_year():
    lines = render_three_months(ParsiDate(1403, 12, 5)).split("\n")
    assert f"{MONTH_NAMES[10]} 1403" in lines[0]
    assert f"{MONTH_NAMES[0]} 1404" in lines[0]


def test_render_year_layout():
    lines = render_year(1403, OTHER_TODAY).split("\n")
    assert lines[0].strip() == "1403"
    assert len(lines[0]) == 64
    assert len(lines) == 1 + 4 * 8 + 3
    text = "\n".join(lines)
    assert all(f"{name} 1403" in text for name in MONTH_NAMES)


def test_render_year_rows_separated_by_blank_lines():
    lines = render_year(1403, OTHER_TODAY).split("\n")
    assert lines[9] == ""
    assert lines[18] == ""
    assert lines[27] == ""
    assert f"{MONTH_NAMES[3]} 1403" in lines[10]


def test_render_year_invalid_raises():
    with pytest.raises(CommandError):
        render_year(0, OTHER_TODAY)
"""Text rendering of monthly Persian calendars."""

from __future__ import annotations

from mitra.calendar import DateError, ParsiDate
from mitra.events import EventCalendar
from mitra.utils import describe_error

DAY_WIDTH = 2
CELL_PADDING = 1
CELL_WIDTH = DAY_WIDTH + 1 + CELL_PADDING
TOTAL_WIDTH = 7 * CELL_WIDTH - CELL_PADDING
LINES_PER_MONTH = 8
WEEKDAY_HEADER = " Sat Sun Mon Tue Wed Thu Fri"
YEAR_TITLE_WIDTH = 64
COLUMN_GAP = "  "

_HIGHLIGHT_ON = "\x1b[7m"
_HIGHLIGHT_OFF = "\x1b[0m"


def _center(text: str, width: int) -> str:
    pad = max(0, width - len(text))
    left = pad // 2
    return " " * left + text + " " * (pad - left)


def month_lines(
    year: int, month: int, today: ParsiDate, events: EventCalendar | None = None
) -> list[str]:
    """Lines of one month's grid: header, weekday names, weeks, padded to 8."""
    if not 1 <= month <= 12:
        return [f"Invalid Month: {month}"]
    calendar = events if events is not None else EventCalendar.empty()
    try:
        first = ParsiDate(year, month, 1)
    except DateError as err:
        raise describe_error(err, f"creating date {year}-{month}-1") from err

    first_weekday = first.weekday_index()
    days = ParsiDate.days_in_month(year, month)
    lines = [_center(f"{first.format('%B')} {year}", TOTAL_WIDTH), WEEKDAY_HEADER]

    today_day = today.day if (today.year, today.month) == (year, month) else None
    current = " " * (first_weekday * CELL_WIDTH)
    for day in range(1, days + 1):
        indicator = calendar.event_indicator(year, month, day) or " "
        on, off = (_HIGHLIGHT_ON, _HIGHLIGHT_OFF) if day == today_day else ("", "")
        current += f"{on}{day:{DAY_WIDTH}d}{indicator}{off}" + " " * CELL_PADDING
        if (first_weekday + day - 1) % 7 == 6 or day == days:
            lines.append(current.rstrip().ljust(TOTAL_WIDTH))
            current = ""

    lines.extend(" " * TOTAL_WIDTH for _ in range(LINES_PER_MONTH - len(lines)))
    return lines


def render_month(
    year: int, month: int, today: ParsiDate, events: EventCalendar | None = None
) -> str:
    """One month's grid as text."""
    return "\n".join(month_lines(year, month, today, events))


def _side_by_side(blocks: list[list[str]]) -> list[str]:
    height = max(len(block) for block in blocks)
    blank = " " * 20
    return [
        COLUMN_GAP.join(block[i] if i < len(block) else blank for block in blocks)
        for i in range(height)
    ]


def render_three_months(today: ParsiDate, events: EventCalendar | None = None) -> str:
    """The previous, current and next month around ``today``, side by side."""
    year, month = today.year, today.month
    previous = (year - 1, 12) if month == 1 else (year, month - 1)
    following = (year + 1, 1) if month == 12 else (year, month + 1)
    blocks = [
        month_lines(y, m, today, events) for y, m in (previous, (year, month), following)
    ]
    return "\n".join(_side_by_side(blocks))


def render_year(year: int, today: ParsiDate, events: EventCalendar | None = None) -> str:
    """All twelve months of ``year`` in four rows of three."""
    months = [month_lines(year, m, today, events) for m in range(1, 13)]
    out = [_center(str(year), YEAR_TITLE_WIDTH)]
    rows = [months[start : start + 3] for start in range(0, 12, 3)]
    for index, row in enumerate(rows):
        out.extend(_side_by_side(row))
        if index < len(rows) - 1:
            out.append("")
    return "\n".join(out)
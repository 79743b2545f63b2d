"""The work behind each command; every handler returns the text to print."""

from __future__ import annotations

import datetime as _dt
from enum import Enum

from mitra.calendar import DateError, ErrorKind, ParsiDate, ParsiDateTime
from mitra.calview import render_month, render_three_months, render_year
from mitra.events import EventCalendar
from mitra.utils import (
    CommandError,
    describe_error,
    format_result,
    parse_input_datetime_or_date,
)

LEGEND = "*: Holiday  +: Other Event"
HOLIDAY_PREFIX = "[تعطیل] "
EVENT_PREFIX = "- "
NO_EVENTS = "  - No events found."

_UNIT_NAMES = ("days", "months", "years", "hours", "minutes", "seconds")
_GREGORIAN_DATETIME_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S", "%Y/%m/%d %H:%M:%S")
_GREGORIAN_DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d")


class FormatStyle(Enum):
    """Predefined output styles of the format command."""

    SHORT = "short"
    LONG = "long"
    ISO = "iso"


def _single_unit(values: dict[str, int | None], verb: str) -> tuple[str, int]:
    given = [(name, value) for name, value in values.items() if value is not None]
    if not given:
        raise CommandError(
            "Error: Please specify exactly one duration unit (--days, --months, --years, "
            f"--hours, --minutes, or --seconds) to {verb}."
        )
    if len(given) > 1:
        raise CommandError("Error: Please specify only one duration unit at a time.")
    return given[0]


def _shift(value: ParsiDateTime, unit: str, amount: int, context: str) -> ParsiDateTime:
    try:
        if unit == "days":
            return value.add_days(amount)
        if unit == "months":
            return value.add_months(amount)
        if unit == "years":
            return value.add_years(amount)
        try:
            delta = _dt.timedelta(**{unit: amount})
        except OverflowError:
            raise DateError(ErrorKind.ARITHMETIC_OVERFLOW) from None
        return value.add_duration(delta)
    except DateError as err:
        raise describe_error(err, context) from err


def _gregorian_text(value: _dt.datetime, with_time: bool) -> str:
    text = f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
    if with_time:
        text += f" {value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    return text


def _parse_with_context(text: str, context: str) -> tuple[ParsiDateTime, bool]:
    try:
        return parse_input_datetime_or_date(text)
    except CommandError as err:
        raise CommandError(f"{context}: {err}") from err


def handle_now(now: ParsiDateTime | None = None) -> str:
    """The current Persian date and time."""
    return str(now if now is not None else ParsiDateTime.now())


def handle_cal(
    month: int | None = None,
    year: int | None = None,
    three: bool = False,
    show_year: int | None = None,
    today: ParsiDate | None = None,
    events: EventCalendar | None = None,
) -> str:
    """A one-month, three-month or whole-year calendar followed by a legend."""
    today = today if today is not None else ParsiDate.today()
    if show_year is not None:
        body = render_year(show_year, today, events)
    elif three:
        body = render_three_months(today, events)
    else:
        if month is not None:
            if not 1 <= month <= 12:
                raise CommandError("Error: Month must be between 1 and 12.")
            target_year = year if year is not None else today.year
            target_month = month
        else:
            if year is not None:
                raise CommandError(
                    "Error: Year cannot be specified without a month in single month mode."
                )
            target_year, target_month = today.year, today.month
        body = render_month(target_year, target_month, today, events)
    return f"{body}\n\n{LEGEND}"


def handle_add(
    base: str,
    days: int | None = None,
    months: int | None = None,
    years: int | None = None,
    hours: int | None = None,
    minutes: int | None = None,
    seconds: int | None = None,
) -> str:
    """Add exactly one kind of duration to a date or datetime."""
    values = dict(zip(_UNIT_NAMES, (days, months, years, hours, minutes, seconds)))
    unit, amount = _single_unit(values, "add")
    value, was_datetime = parse_input_datetime_or_date(base)
    result = _shift(value, unit, amount, f"adding {unit}")
    return format_result(result, was_datetime)


def handle_sub(
    base: str,
    days: int | None = None,
    months: int | None = None,
    years: int | None = None,
    hours: int | None = None,
    minutes: int | None = None,
    seconds: int | None = None,
) -> str:
    """Subtract exactly one kind of non-negative duration from a date or datetime."""
    values = dict(zip(_UNIT_NAMES, (days, months, years, hours, minutes, seconds)))
    unit, amount = _single_unit(values, "subtract")
    if amount < 0:
        raise CommandError(f"Error: The value for --{unit} must be non-negative.")
    value, was_datetime = parse_input_datetime_or_date(base)
    result = _shift(value, unit, -amount, f"subtracting {unit}")
    return format_result(result, was_datetime)


def handle_format(
    text: str,
    style: FormatStyle | str | None = None,
    pattern: str | None = None,
) -> str:
    """Render a date or datetime in a named style or with a custom pattern."""
    if style is None and pattern is None:
        raise CommandError("Error: Please provide either --style or --pattern for formatting.")
    value, was_datetime = parse_input_datetime_or_date(text)
    if style is None:
        return value.format(pattern)
    style = FormatStyle(style)
    if style is FormatStyle.SHORT:
        return value.format("%Y/%m/%d %H:%M:%S") if was_datetime else value.date().format("short")
    if style is FormatStyle.LONG:
        return value.date().format("long")
    return value.format("%Y-%m-%dT%T") if was_datetime else value.date().format("iso")


def handle_diff(first: str, second: str) -> str:
    """The absolute number of days between two dates."""
    one, _ = _parse_with_context(first, f"Failed to parse first date/datetime: {first}")
    two, _ = _parse_with_context(second, f"Failed to parse second date/datetime: {second}")
    return f"Difference: {one.date().days_between(two.date())} days"


def handle_weekday(text: str) -> str:
    """The Persian weekday name of a date."""
    value, _ = _parse_with_context(text, f"Failed to parse date: {text}")
    return value.date().weekday()


def handle_to_gregorian(text: str) -> str:
    """The Gregorian equivalent of a Persian date or datetime."""
    value, was_datetime = _parse_with_context(
        text, f"Failed to parse Parsi date/datetime: {text}"
    )
    try:
        gregorian = value.to_gregorian()
    except DateError as err:
        raise describe_error(err, "converting to Gregorian") from err
    return _gregorian_text(gregorian, was_datetime)


def _parse_gregorian(text: str) -> tuple[_dt.datetime, bool]:
    for pattern in _GREGORIAN_DATETIME_FORMATS:
        try:
            return _dt.datetime.strptime(text, pattern), True
        except ValueError:
            continue
    for pattern in _GREGORIAN_DATE_FORMATS:
        try:
            return _dt.datetime.strptime(text, pattern), False
        except ValueError:
            continue
    raise CommandError(
        f"Could not parse Gregorian date/datetime '{text}'. Use formats like YYYY-MM-DD, "
        "YYYY-MM-DD HH:MM:SS, or YYYY-MM-DDTHH:MM:SS"
    )


def handle_from_gregorian(text: str) -> str:
    """The Persian equivalent of a Gregorian date or datetime."""
    gregorian, was_datetime = _parse_gregorian(text.strip())
    try:
        value = ParsiDateTime.from_gregorian(gregorian)
    except DateError as err:
        raise describe_error(err, "converting from Gregorian") from err
    return format_result(value, was_datetime)


def handle_is_leap(year: int) -> str:
    """'Yes' if the Persian year is a leap year, otherwise 'No'."""
    if year <= 0:
        raise CommandError("Error: Year must be a positive number.")
    return "Yes" if ParsiDate.is_leap_year(year) else "No"


def handle_info(text: str) -> str:
    """A report of facts about a date or datetime."""
    value, was_datetime = parse_input_datetime_or_date(text)
    date = value.date()
    lines = [
        f"Input Parsi Date/Time: {text}",
        "-------------------------",
        f" Parsed Date: {date}",
    ]
    if was_datetime:
        lines.append(f" Parsed Time: {value.hour:02d}:{value.minute:02d}:{value.second:02d}")
    lines.append(f" Weekday: {date.weekday()}")
    lines.append(f" Day of Year: {date.ordinal()}")
    days_in_month = ParsiDate.days_in_month(value.year, value.month)
    if days_in_month > 0:
        lines.append(f" Days in Current Month: {days_in_month}")
    else:
        lines.append(" Days in Current Month: N/A (Invalid Month?)")
    leap = "Yes" if ParsiDate.is_leap_year(value.year) else "No"
    lines.append(f" Is Leap Year: {leap}")
    try:
        gregorian = _gregorian_text(value.to_gregorian(), was_datetime)
        lines.append(f" Gregorian Equivalent: {gregorian}")
    except DateError as err:
        lines.append(f" Gregorian Equivalent: Error ({err})")
    lines.extend(
        [
            f" First Day of Month: {date.first_day_of_month()}",
            f" Last Day of Month: {date.last_day_of_month()}",
            f" First Day of Year: {date.first_day_of_year()}",
            f" Last Day of Year: {date.last_day_of_year()}",
        ]
    )
    return "\n".join(lines)


def handle_parse(text: str, pattern: str) -> str:
    """Parse with an explicit pattern; time specifiers make it a datetime."""
    expects_time = any(spec in pattern for spec in ("%H", "%M", "%S", "%T"))
    try:
        if expects_time:
            return f"Parsed DateTime: {ParsiDateTime.parse(text, pattern)}"
        return f"Parsed Date: {ParsiDate.parse(text, pattern)}"
    except DateError as err:
        kind = "datetime" if expects_time else "date"
        raise describe_error(err, f"parsing {kind} with explicit format") from err


def handle_events(text: str, events: EventCalendar | None = None) -> str:
    """The events on a date, holidays marked."""
    value, _ = _parse_with_context(text, f"Failed to parse date string: {text}")
    calendar = events if events is not None else EventCalendar.empty()
    lines = [f"Events for {value.format('%d %B')}:"]
    found = calendar.events_for_date(value.year, value.month, value.day)
    if not found:
        lines.append(NO_EVENTS)
    for event in found:
        prefix = HOLIDAY_PREFIX if event.holiday else EVENT_PREFIX
        lines.append(f"  {prefix}{event.title}")
    return "\n".join(lines)
"""Input parsing, result rendering and error messages shared by the commands."""

from __future__ import annotations

from mitra.calendar import DateError, ErrorKind, ParseErrorKind, ParsiDate, ParsiDateTime

DATETIME_FORMATS = (
    "%Y/%m/%d %H:%M:%S",
    "%Y-%m-%dT%T",
    "%Y-%m-%d %H:%M:%S",
)
DATE_FORMATS = (
    "%Y/%m/%d",
    "%Y-%m-%d",
)

_PARSE_MESSAGES = {
    ParseErrorKind.FORMAT_MISMATCH: (
        "input string does not match expected format or has extra characters"
    ),
    ParseErrorKind.INVALID_NUMBER: (
        "could not parse number, required digits mismatch, or value out of range"
    ),
    ParseErrorKind.INVALID_DATE_VALUE: (
        "parsed values form a logically invalid date "
        "(e.g., day 31 in Mehr, Esfand 30 in non-leap year)"
    ),
    ParseErrorKind.INVALID_TIME_VALUE: (
        "parsed values form a logically invalid time (e.g., hour 24, minute 60)"
    ),
    ParseErrorKind.UNSUPPORTED_SPECIFIER: (
        "format pattern contains specifier unsupported for parsing (e.g., %A, %j)"
    ),
    ParseErrorKind.INVALID_MONTH_NAME: "could not recognize Persian month name in input",
    ParseErrorKind.INVALID_WEEKDAY_NAME: "could not recognize Persian weekday name in input",
}

_KIND_MESSAGES = {
    ErrorKind.INVALID_DATE: "Operation resulted in an invalid date",
    ErrorKind.INVALID_TIME: "Operation resulted in an invalid time",
    ErrorKind.GREGORIAN_CONVERSION: (
        "Gregorian conversion failed. "
        "Input might be outside supported range (e.g., before 622 AD)"
    ),
    ErrorKind.ARITHMETIC_OVERFLOW: (
        "Date arithmetic resulted in overflow/underflow "
        "or went outside supported year range [1, 9999]"
    ),
    ErrorKind.INVALID_ORDINAL: "Invalid ordinal day number used",
}


class CommandError(Exception):
    """A user-facing failure of a command."""


def parse_input_datetime_or_date(text: str) -> tuple[ParsiDateTime, bool]:
    """Parse a date or datetime in one of the common layouts.

    Returns the value and whether the input carried a time of day; a plain
    date is taken at midnight.
    """
    trimmed = text.strip()
    for pattern in DATETIME_FORMATS:
        try:
            return ParsiDateTime.parse(trimmed, pattern), True
        except DateError:
            continue
    for pattern in DATE_FORMATS:
        try:
            date = ParsiDate.parse(trimmed, pattern)
        except DateError:
            continue
        return ParsiDateTime.from_date(date), False
    raise CommandError(
        f"Could not parse input '{trimmed}'. Expected common formats like YYYY/MM/DD, "
        "YYYY-MM-DD, YYYY/MM/DD HH:MM:SS, or YYYY-MM-DDTHH:MM:SS."
    )


def format_result(value: ParsiDateTime, was_datetime: bool) -> str:
    """The full datetime, or only its date when the input was a date."""
    return str(value) if was_datetime else str(value.date())


def describe_error(error: DateError, context: str) -> CommandError:
    """A readable error naming the operation that failed."""
    if error.kind is ErrorKind.PARSE_ERROR:
        detail = _PARSE_MESSAGES.get(error.parse_kind, str(error))
        base = f"Parse error: {detail}"
    else:
        base = _KIND_MESSAGES.get(error.kind, str(error))
    return CommandError(f"Error while {context}: {base}")
"""Persian (Jalali/Shamsi) calendar dates and datetimes.

Leap years follow the 33-year arithmetic cycle, and the calendar is anchored
so that 1403/01/01 falls on the Gregorian date 2024-03-20.
"""

from __future__ import annotations

import datetime as _dt
import re
from dataclasses import dataclass
from enum import Enum

MIN_YEAR = 1
MAX_YEAR = 9999

MONTH_NAMES = (
    "فروردین",
    "اردیبهشت",
    "خرداد",
    "تیر",
    "مرداد",
    "شهریور",
    "مهر",
    "آبان",
    "آذر",
    "دی",
    "بهمن",
    "اسفند",
)

# Index 0 is Saturday, the first day of the Persian week.
WEEKDAY_NAMES = (
    "شنبه",
    "یکشنبه",
    "دوشنبه",
    "سه\u200cشنبه",
    "چهارشنبه",
    "پنجشنبه",
    "جمعه",
)

_LEAP_REMAINDERS = frozenset({1, 5, 9, 13, 17, 22, 26, 30})
_CYCLE_YEARS = 33
_CYCLE_DAYS = _CYCLE_YEARS * 365 + len(_LEAP_REMAINDERS)
_SECONDS_PER_DAY = 86400

_NAMED_PATTERNS = {"short": "%Y/%m/%d", "long": "%-d %B %Y", "iso": "%Y-%m-%d"}


class ParseErrorKind(Enum):
    """Why a string could not be parsed against a pattern."""

    FORMAT_MISMATCH = "format_mismatch"
    INVALID_NUMBER = "invalid_number"
    INVALID_DATE_VALUE = "invalid_date_value"
    INVALID_TIME_VALUE = "invalid_time_value"
    UNSUPPORTED_SPECIFIER = "unsupported_specifier"
    INVALID_MONTH_NAME = "invalid_month_name"
    INVALID_WEEKDAY_NAME = "invalid_weekday_name"


class ErrorKind(Enum):
    """Category of a calendar error."""

    PARSE_ERROR = "parse_error"
    INVALID_DATE = "invalid_date"
    INVALID_TIME = "invalid_time"
    GREGORIAN_CONVERSION = "gregorian_conversion"
    ARITHMETIC_OVERFLOW = "arithmetic_overflow"
    INVALID_ORDINAL = "invalid_ordinal"


class DateError(ValueError):
    """Raised when a date cannot be built, converted, parsed or shifted."""

    def __init__(
        self,
        kind: ErrorKind,
        parse_kind: ParseErrorKind | None = None,
        message: str | None = None,
    ) -> None:
        self.kind = kind
        self.parse_kind = parse_kind
        if message is None:
            message = kind.value.replace("_", " ")
            if parse_kind is not None:
                message = f"{message}: {parse_kind.value.replace('_', ' ')}"
        super().__init__(message)


def _parse_error(kind: ParseErrorKind) -> DateError:
    return DateError(ErrorKind.PARSE_ERROR, kind)


def _is_leap(year: int) -> bool:
    return year % _CYCLE_YEARS in _LEAP_REMAINDERS


def _days_in_month(year: int, month: int) -> int:
    if not 1 <= month <= 12:
        return 0
    if month <= 6:
        return 31
    if month <= 11:
        return 30
    return 30 if _is_leap(year) else 29


def _days_before_year(year: int) -> int:
    cycles, rem = divmod(year - 1, _CYCLE_YEARS)
    leaps = cycles * len(_LEAP_REMAINDERS) + sum(1 for r in _LEAP_REMAINDERS if r <= rem)
    return (year - 1) * 365 + leaps


def _days_before_month(month: int) -> int:
    return (month - 1) * 31 if month <= 7 else 186 + (month - 7) * 30


_MAX_DAY_NUMBER = _days_before_year(MAX_YEAR + 1) - 1
_EPOCH_ORDINAL = _dt.date(2024, 3, 20).toordinal() - _days_before_year(1403)


def _from_day_number(number: int) -> tuple[int, int, int]:
    if not 0 <= number <= _MAX_DAY_NUMBER:
        raise DateError(ErrorKind.ARITHMETIC_OVERFLOW)
    cycles, rest = divmod(number, _CYCLE_DAYS)
    year = cycles * _CYCLE_YEARS + 1
    while rest >= (length := 366 if _is_leap(year) else 365):
        rest -= length
        year += 1
    month = 1
    while rest >= (length := _days_in_month(year, month)):
        rest -= length
        month += 1
    return year, month, rest + 1


def _validate_date(year: int, month: int, day: int) -> None:
    if not (MIN_YEAR <= year <= MAX_YEAR and 1 <= day <= _days_in_month(year, month)):
        raise DateError(ErrorKind.INVALID_DATE)


def _valid_time(hour: int, minute: int, second: int) -> bool:
    return 0 <= hour <= 23 and 0 <= minute <= 59 and 0 <= second <= 59


_FORMAT_SPECIFIER = re.compile(r"%-?.", re.DOTALL)


def _format(pattern: str, date: ParsiDate, time: tuple[int, int, int] | None) -> str:
    pattern = _NAMED_PATTERNS.get(pattern, pattern)

    def replace(match: re.Match[str]) -> str:
        piece = match.group()
        spec = piece[-1]
        if spec == "%":
            return "%"
        values = {
            "Y": f"{date.year:04d}",
            "m": f"{date.month:02d}",
            "d": f"{date.day:02d}",
            "B": MONTH_NAMES[date.month - 1],
            "A": date.weekday(),
            "j": f"{date.ordinal():03d}",
        }
        if time is not None:
            hour, minute, second = time
            values.update(
                H=f"{hour:02d}",
                M=f"{minute:02d}",
                S=f"{second:02d}",
                T=f"{hour:02d}:{minute:02d}:{second:02d}",
            )
        if spec not in values:
            return piece
        value = values[spec]
        if piece.startswith("%-") and value.isdigit():
            value = str(int(value))
        return value

    return _FORMAT_SPECIFIER.sub(replace, pattern)


_PARSE_PIECE = re.compile(r"%(.)|([^%]+)|%", re.DOTALL)
_NUMERIC_FIELDS = {"Y": ("year", 4), "m": ("month", 2), "d": ("day", 2)}
_TIME_FIELDS = {"H": ("hour", 2), "M": ("minute", 2), "S": ("second", 2)}
_MONTHS_LONGEST_FIRST = sorted(
    ((name, number) for number, name in enumerate(MONTH_NAMES, start=1)),
    key=lambda item: len(item[0]),
    reverse=True,
)


def _expect_literal(text: str, pos: int, literal: str) -> int:
    if not text.startswith(literal, pos):
        raise _parse_error(ParseErrorKind.FORMAT_MISMATCH)
    return pos + len(literal)


def _take_number(text: str, pos: int, width: int) -> tuple[int, int]:
    chunk = text[pos : pos + width]
    if len(chunk) != width or not (chunk.isascii() and chunk.isdigit()):
        raise _parse_error(ParseErrorKind.INVALID_NUMBER)
    return int(chunk), pos + width


def _take_month_name(text: str, pos: int) -> tuple[int, int]:
    for name, number in _MONTHS_LONGEST_FIRST:
        if text.startswith(name, pos):
            return number, pos + len(name)
    raise _parse_error(ParseErrorKind.INVALID_MONTH_NAME)


def _parse_fields(text: str, pattern: str, allow_time: bool) -> dict[str, int]:
    fields: dict[str, int] = {}
    numeric = dict(_NUMERIC_FIELDS)
    if allow_time:
        numeric.update(_TIME_FIELDS)
    pos = 0
    for match in _PARSE_PIECE.finditer(pattern):
        spec, literal = match.group(1), match.group(2)
        if spec is None:
            pos = _expect_literal(text, pos, literal if literal is not None else "%")
        elif spec == "%":
            pos = _expect_literal(text, pos, "%")
        elif spec in numeric:
            key, width = numeric[spec]
            fields[key], pos = _take_number(text, pos, width)
        elif spec == "T" and allow_time:
            fields["hour"], pos = _take_number(text, pos, 2)
            pos = _expect_literal(text, pos, ":")
            fields["minute"], pos = _take_number(text, pos, 2)
            pos = _expect_literal(text, pos, ":")
            fields["second"], pos = _take_number(text, pos, 2)
        elif spec == "B":
            fields["month"], pos = _take_month_name(text, pos)
        else:
            raise _parse_error(ParseErrorKind.UNSUPPORTED_SPECIFIER)
    if pos != len(text):
        raise _parse_error(ParseErrorKind.FORMAT_MISMATCH)
    if not {"year", "month", "day"} <= fields.keys():
        raise _parse_error(ParseErrorKind.FORMAT_MISMATCH)
    try:
        _validate_date(fields["year"], fields["month"], fields["day"])
    except DateError:
        raise _parse_error(ParseErrorKind.INVALID_DATE_VALUE) from None
    return fields


@dataclass(frozen=True, order=True)
class ParsiDate:
    """A valid date of the Persian calendar, years 1 to 9999."""

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        _validate_date(self.year, self.month, self.day)

    def __str__(self) -> str:
        return f"{self.year:04d}/{self.month:02d}/{self.day:02d}"

    @classmethod
    def today(cls) -> ParsiDate:
        """Today's date in the local time zone."""
        return cls.from_gregorian(_dt.date.today())

    @staticmethod
    def is_leap_year(year: int) -> bool:
        """Whether the Persian year has 366 days."""
        return _is_leap(year)

    @staticmethod
    def days_in_month(year: int, month: int) -> int:
        """Length of the month, or 0 for a month outside 1..12."""
        return _days_in_month(year, month)

    @classmethod
    def _from_day_number(cls, number: int) -> ParsiDate:
        return cls(*_from_day_number(number))

    def _day_number(self) -> int:
        return _days_before_year(self.year) + _days_before_month(self.month) + self.day - 1

    @classmethod
    def from_gregorian(cls, value: _dt.date) -> ParsiDate:
        """Convert a Gregorian date (or the date of a datetime)."""
        if isinstance(value, _dt.datetime):
            value = value.date()
        number = value.toordinal() - _EPOCH_ORDINAL
        if not 0 <= number <= _MAX_DAY_NUMBER:
            raise DateError(ErrorKind.GREGORIAN_CONVERSION)
        return cls._from_day_number(number)

    @classmethod
    def parse(cls, text: str, pattern: str) -> ParsiDate:
        """Parse ``text`` exactly against ``pattern`` (%Y %m %d %B %%)."""
        fields = _parse_fields(text, pattern, allow_time=False)
        return cls(fields["year"], fields["month"], fields["day"])

    def to_gregorian(self) -> _dt.date:
        """The equivalent Gregorian date."""
        try:
            return _dt.date.fromordinal(self._day_number() + _EPOCH_ORDINAL)
        except (ValueError, OverflowError):
            raise DateError(ErrorKind.GREGORIAN_CONVERSION) from None

    def weekday_index(self) -> int:
        """Day of the week, 0 for Saturday through 6 for Friday."""
        return (self._day_number() + _EPOCH_ORDINAL + 1) % 7

    def weekday(self) -> str:
        """Persian name of the day of the week."""
        return WEEKDAY_NAMES[self.weekday_index()]

    def ordinal(self) -> int:
        """Day of the year, starting at 1."""
        return _days_before_month(self.month) + self.day

    def first_day_of_month(self) -> ParsiDate:
        return ParsiDate(self.year, self.month, 1)

    def last_day_of_month(self) -> ParsiDate:
        return ParsiDate(self.year, self.month, _days_in_month(self.year, self.month))

    def first_day_of_year(self) -> ParsiDate:
        return ParsiDate(self.year, 1, 1)

    def last_day_of_year(self) -> ParsiDate:
        return ParsiDate(self.year, 12, _days_in_month(self.year, 12))

    def add_days(self, days: int) -> ParsiDate:
        return self._from_day_number(self._day_number() + days)

    def add_months(self, months: int) -> ParsiDate:
        """Shift by whole months, clamping the day to the target month's length."""
        year, month_index = divmod(self.year * 12 + self.month - 1 + months, 12)
        month = month_index + 1
        if not MIN_YEAR <= year <= MAX_YEAR:
            raise DateError(ErrorKind.ARITHMETIC_OVERFLOW)
        return ParsiDate(year, month, min(self.day, _days_in_month(year, month)))

    def add_years(self, years: int) -> ParsiDate:
        """Shift by whole years; Esfand 30 becomes Esfand 29 in a common year."""
        year = self.year + years
        if not MIN_YEAR <= year <= MAX_YEAR:
            raise DateError(ErrorKind.ARITHMETIC_OVERFLOW)
        return ParsiDate(year, self.month, min(self.day, _days_in_month(year, self.month)))

    def days_between(self, other: ParsiDate) -> int:
        """Absolute number of days between two dates."""
        return abs(self._day_number() - other._day_number())

    def format(self, pattern: str) -> str:
        """Render with a pattern or one of the names short, long and iso."""
        return _format(pattern, self, None)


@dataclass(frozen=True, order=True)
class ParsiDateTime:
    """A Persian calendar date with a time of day to the second."""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0

    def __post_init__(self) -> None:
        _validate_date(self.year, self.month, self.day)
        if not _valid_time(self.hour, self.minute, self.second):
            raise DateError(ErrorKind.INVALID_TIME)

    def __str__(self) -> str:
        return f"{self.date()} {self.hour:02d}:{self.minute:02d}:{self.second:02d}"

    @classmethod
    def now(cls) -> ParsiDateTime:
        """The current local date and time."""
        return cls.from_gregorian(_dt.datetime.now())

    @classmethod
    def from_date(
        cls, date: ParsiDate, hour: int = 0, minute: int = 0, second: int = 0
    ) -> ParsiDateTime:
        return cls(date.year, date.month, date.day, hour, minute, second)

    @classmethod
    def from_gregorian(cls, value: _dt.date) -> ParsiDateTime:
        """Convert a Gregorian datetime; a plain date is taken at midnight."""
        date = ParsiDate.from_gregorian(value)
        if isinstance(value, _dt.datetime):
            return cls.from_date(date, value.hour, value.minute, value.second)
        return cls.from_date(date)

    @classmethod
    def parse(cls, text: str, pattern: str) -> ParsiDateTime:
        """Parse ``text`` against ``pattern``; missing time fields are zero."""
        fields = _parse_fields(text, pattern, allow_time=True)
        hour, minute, second = (fields.get(k, 0) for k in ("hour", "minute", "second"))
        if not _valid_time(hour, minute, second):
            raise _parse_error(ParseErrorKind.INVALID_TIME_VALUE)
        return cls(fields["year"], fields["month"], fields["day"], hour, minute, second)

    def date(self) -> ParsiDate:
        return ParsiDate(self.year, self.month, self.day)

    def _time(self) -> tuple[int, int, int]:
        return self.hour, self.minute, self.second

    def _with_date(self, date: ParsiDate) -> ParsiDateTime:
        return self.from_date(date, *self._time())

    def to_gregorian(self) -> _dt.datetime:
        return _dt.datetime.combine(self.date().to_gregorian(), _dt.time(*self._time()))

    def add_days(self, days: int) -> ParsiDateTime:
        return self._with_date(self.date().add_days(days))

    def add_months(self, months: int) -> ParsiDateTime:
        return self._with_date(self.date().add_months(months))

    def add_years(self, years: int) -> ParsiDateTime:
        return self._with_date(self.date().add_years(years))

    def add_duration(self, delta: _dt.timedelta) -> ParsiDateTime:
        """Shift by an exact duration; sub-second parts are floored away."""
        seconds_of_day = self.hour * 3600 + self.minute * 60 + self.second
        total = (
            self.date()._day_number() * _SECONDS_PER_DAY
            + seconds_of_day
            + delta.days * _SECONDS_PER_DAY
            + delta.seconds
        )
        day_number, rest = divmod(total, _SECONDS_PER_DAY)
        date = ParsiDate._from_day_number(day_number)
        hour, rest = divmod(rest, 3600)
        minute, second = divmod(rest, 60)
        return self.from_date(date, hour, minute, second)

    def format(self, pattern: str) -> str:
        """Render with date and time specifiers (%H %M %S %T) or a named style."""
        return _format(pattern, self.date(), self._time())
"""Command-line interface for Persian (Jalali/Shamsi) date operations."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence

from mitra.calendar import DateError
from mitra.events import EventCalendar
from mitra.handlers import (
    FormatStyle,
    handle_add,
    handle_cal,
    handle_diff,
    handle_events,
    handle_format,
    handle_from_gregorian,
    handle_info,
    handle_is_leap,
    handle_now,
    handle_parse,
    handle_sub,
    handle_to_gregorian,
    handle_weekday,
)
from mitra.utils import CommandError

VERSION = "2.3.0"
_UNITS = ("days", "months", "years", "hours", "minutes", "seconds")
_DATE_HELP = (
    "date (YYYY/MM/DD or YYYY-MM-DD) or datetime "
    "(YYYY/MM/DD HH:MM:SS or YYYY-MM-DDTHH:MM:SS)"
)


def _non_negative(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"value must be non-negative: {text!r}")
    return value


def _add_units(parser: argparse.ArgumentParser, verb: str, kind: Callable[[str], int]) -> None:
    group = parser.add_mutually_exclusive_group()
    for unit in _UNITS:
        group.add_argument(f"--{unit}", type=kind, help=f"number of {unit} to {verb}")


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for every subcommand."""
    parser = argparse.ArgumentParser(
        prog="mitra",
        description="Mitra: A CLI tool for Persian (Jalali/Shamsi) date operations.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument(
        "--events-file",
        metavar="PATH",
        help="JSON file with calendar event data",
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    commands.add_parser("now", help="display the current Parsi date and time (default)")

    add = commands.add_parser("add", help="add a duration to a date/datetime")
    add.add_argument("base_datetime", help=f"base {_DATE_HELP}")
    _add_units(add, "add", int)

    sub = commands.add_parser("sub", help="subtract a duration from a date/datetime")
    sub.add_argument("base_datetime", help=f"base {_DATE_HELP}")
    _add_units(sub, "subtract", _non_negative)

    fmt = commands.add_parser("format", help="format a date/datetime")
    fmt.add_argument("datetime_string", help=_DATE_HELP)
    style_group = fmt.add_mutually_exclusive_group()
    style_group.add_argument(
        "--style",
        type=FormatStyle,
        choices=list(FormatStyle),
        metavar="{short,long,iso}",
        help="predefined format style",
    )
    style_group.add_argument("-p", "--pattern", help="custom format pattern")

    diff = commands.add_parser("diff", help="absolute difference in days")
    diff.add_argument("datetime1")
    diff.add_argument("datetime2")

    weekday = commands.add_parser("weekday", help="Persian weekday name of a date")
    weekday.add_argument("date_string")

    to_greg = commands.add_parser("to-gregorian", help="convert Parsi to Gregorian")
    to_greg.add_argument("parsi_datetime", help=_DATE_HELP)

    from_greg = commands.add_parser("from-gregorian", help="convert Gregorian to Parsi")
    from_greg.add_argument("gregorian_datetime")

    leap = commands.add_parser("is-leap", help="check whether a Parsi year is a leap year")
    leap.add_argument("year", type=int)

    info = commands.add_parser("info", help="detailed information about a date/datetime")
    info.add_argument("datetime_string", help=_DATE_HELP)

    parse = commands.add_parser("parse", help="parse a string with an explicit pattern")
    parse.add_argument("input_string")
    parse.add_argument("-p", "--pattern", required=True)

    cal = commands.add_parser("cal", help="display a monthly Parsi calendar")
    cal.add_argument("month", nargs="?", type=_non_negative, help="month (1-12)")
    cal.add_argument("year", nargs="?", type=int, help="year, e.g. 1403")
    cal.add_argument("-3", "--three", action="store_true", help="previous, current and next month")
    cal.add_argument(
        "-y", "--year", dest="show_year", type=int, metavar="YEAR", help="whole year"
    )

    events = commands.add_parser("events", help="list events for a date")
    events.add_argument("date_string")

    return parser


def _check_cal(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    if args.month is not None and (args.three or args.show_year is not None):
        parser.error("cal: a month cannot be combined with --three or --year")
    if args.year is not None and args.three:
        parser.error("cal: a year cannot be combined with --three")
    if args.three and args.show_year is not None:
        parser.error("cal: --three cannot be combined with --year")


def _units(args: argparse.Namespace) -> dict[str, int | None]:
    return {unit: getattr(args, unit) for unit in _UNITS}


def _dispatch(args: argparse.Namespace, events: EventCalendar) -> str:
    command = args.command
    if command is None or command == "now":
        return handle_now()
    if command == "add":
        return handle_add(args.base_datetime, **_units(args))
    if command == "sub":
        return handle_sub(args.base_datetime, **_units(args))
    if command == "format":
        return handle_format(args.datetime_string, args.style, args.pattern)
    if command == "diff":
        return handle_diff(args.datetime1, args.datetime2)
    if command == "weekday":
        return handle_weekday(args.date_string)
    if command == "to-gregorian":
        return handle_to_gregorian(args.parsi_datetime)
    if command == "from-gregorian":
        return handle_from_gregorian(args.gregorian_datetime)
    if command == "is-leap":
        return handle_is_leap(args.year)
    if command == "info":
        return handle_info(args.datetime_string)
    if command == "parse":
        return handle_parse(args.input_string, args.pattern)
    if command == "cal":
        return handle_cal(args.month, args.year, args.three, args.show_year, events=events)
    if command == "events":
        return handle_events(args.date_string, events)
    raise CommandError(f"Error: unknown command {command!r}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "cal":
        _check_cal(parser, args)
    try:
        events = (
            EventCalendar.from_file(args.events_file)
            if args.events_file
            else EventCalendar.empty()
        )
    except (OSError, ValueError) as err:
        print(f"Error: could not load event data: {err}", file=sys.stderr)
        return 1
    try:
        output = _dispatch(args, events)
    except (CommandError, DateError) as err:
        print(err, file=sys.stderr)
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
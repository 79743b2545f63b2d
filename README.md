# mitra

`mitra` is a command-line tool for Persian (Jalali/Shamsi) dates and times. It
converts to and from Gregorian, does date arithmetic, formats and parses dates,
prints monthly calendars with event markers and lists calendar events from a
JSON file that you supply.

Leap years follow the 33-year arithmetic cycle, and the calendar is anchored so
that 1403/01/01 is the Gregorian date 2024-03-20. Years 1 to 9999 are supported.

## Installation

```
pip install .
```

The package needs nothing outside the Python standard library.

## Usage

With no command, `mitra` prints the current Parsi date and time:

```
mitra
mitra now
mitra --version
```

Dates are written as `YYYY/MM/DD` or `YYYY-MM-DD`. Datetimes are written as
`YYYY/MM/DD HH:MM:SS`, `YYYY-MM-DD HH:MM:SS` or `YYYY-MM-DDTHH:MM:SS`. When the
input is a date, the result is printed as a date; when it is a datetime, the
result keeps its time.

Errors are printed to standard error and the command exits with status 1.

### Arithmetic

Exactly one of `--days`, `--months`, `--years`, `--hours`, `--minutes` or
`--seconds` must be given:

```
mitra add 1403/05/02 --days 10
mitra add "1403/05/02 10:30:00" --hours -3
mitra sub 1403/12/30 --years 1
mitra sub 1403-06-31 --months 1
```

`add` takes negative values; `sub` only takes non-negative ones. When shifting
by months or years would put the day past the end of the new month, it is set to
that month's last day (so Esfand 30 becomes Esfand 29 in a common year).

### Formatting and parsing

```
mitra format 1403/05/02 --style long
mitra format "1403/05/02 10:30:00" --style iso
mitra format 1403/05/02 --pattern "%A %d %B %Y"
mitra parse "1403-05-02 10:30" --pattern "%Y-%m-%d %H:%M"
```

`--style` is one of `short` (`1403/05/02`, with the time added for a datetime),
`long` (day, month name and year) and `iso` (`1403-05-02`, or
`1403-05-02T10:30:00` for a datetime). `--style` and `--pattern` cannot be
combined.

Format patterns understand `%Y`, `%m`, `%d`, `%B` (month name), `%A` (weekday
name), `%j` (day of year), `%H`, `%M`, `%S`, `%T` (`HH:MM:SS`) and `%%`. A `-`
after `%` drops leading zeros, as in `%-d`.

`parse` reads the input exactly against the pattern. Date patterns may use
`%Y`, `%m`, `%d`, `%B` and `%%`; if the pattern contains `%H`, `%M`, `%S` or
`%T`, the input is read as a datetime and missing time fields are zero.

### Conversion and information

```
mitra to-gregorian 1403/01/01        # 2024-03-20
mitra from-gregorian 2024-03-20      # 1403/01/01
mitra diff 1403/01/01 1403/12/30
mitra weekday 1403/01/01             # چهارشنبه
mitra is-leap 1403                   # Yes
mitra info "1403/05/02 10:30:00"
```

`from-gregorian` accepts `YYYY-MM-DD`, `YYYY/MM/DD`, `YYYY-MM-DD HH:MM:SS`,
`YYYY-MM-DDTHH:MM:SS` and `YYYY/MM/DD HH:MM:SS`. `diff` prints the absolute
number of days between the two dates. `info` shows the weekday, day of year,
length of the month, whether the year is a leap year, the Gregorian equivalent
and the first and last days of the month and year.

### Calendars

```
mitra cal
mitra cal 7
mitra cal 7 1403
mitra cal -3
mitra cal -y 1403
```

`cal` shows the current month, a given month (of the current year unless a year
is given), the previous, current and next month side by side (`-3`/`--three`),
or a whole year in four rows of three months (`-y`/`--year`). Today is shown in
reverse video. In the grid, `*` marks a holiday and `+` marks a day with other
events.

### Events

Event data is read from a JSON file given with `--events-file` before the
command:

```
mitra --events-file events.json events 1403/01/01
mitra --events-file events.json cal -y 1403
```

The file is an object of this shape:

```json
{
  "persian_reference_year": 1403,
  "Persian Calendar": [
    {"holiday": true, "month": 1, "day": 1, "title": "..."}
  ],
  "hijri_events_mapping": [
    {"holiday": false, "month": 3, "day": 5, "title": "...",
     "hijri_month": 9, "hijri_day": 15}
  ]
}
```

Events under `"Persian Calendar"` apply to their Shamsi month and day in every
year. Events under `"hijri_events_mapping"` apply only in
`persian_reference_year`. `events` lists the titles for a date, holidays first
marked with `[تعطیل]`.

## Using it from Python

`mitra.calendar` provides `ParsiDate` and `ParsiDateTime`, frozen dataclasses
with Gregorian conversion (`from_gregorian`, `to_gregorian`), parsing
(`parse`), formatting (`format`), arithmetic (`add_days`, `add_months`,
`add_years`, and `add_duration` for datetimes) and calendar facts (`weekday`,
`ordinal`, `days_in_month`, `is_leap_year`). Invalid dates and failed operations
raise `DateError`, a `ValueError`. `mitra.events.EventCalendar` loads event data
with `from_json` or `from_file`, and `mitra.handlers` holds one function per
command, each returning the text the command prints.

## What it does not do

No event data comes with the package. Without `--events-file`, `events` reports
that no events were found and calendars carry no `*` or `+` markers. Hijri
events are not computed; they appear only as mapped in the file, for its
reference year.

## Development

```
pip install -e ".[test]"
pytest
```
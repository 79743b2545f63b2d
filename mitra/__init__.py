"""Persian (Jalali/Shamsi) dates, calendars and events, with a command-line tool."""

__version__ = "2.3.0"

__all__ = ["calendar", "events", "utils", "calview", "handlers", "cli"]
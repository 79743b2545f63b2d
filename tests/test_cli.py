import json

import pytest

from mitra.calendar import ParsiDate
from mitra.cli import build_parser, main
from mitra.handlers import FormatStyle
from mitra.utils import parse_input_datetime_or_date


def run(capsys, *argv):
    code = main(list(argv))
    captured = capsys.readouterr()
    return code, captured.out, captured.err


def test_parser_reads_add_with_negative_days():
    args = build_parser().parse_args(["add", "1403/05/02", "--days", "-3"])
    assert args.command == "add"
    assert args.days == -3
    assert args.months is None


def test_parser_reads_format_style_enum():
    args = build_parser().parse_args(["format", "1403/05/02", "--style", "iso"])
    assert args.style is FormatStyle.ISO
    assert args.pattern is None


def test_parser_reads_cal_year_option():
    args = build_parser().parse_args(["cal", "-y", "1403"])
    assert args.show_year == 1403
    assert args.month is None
    assert args.three is False


def test_is_leap_yes(capsys):
    code, out, _ = run(capsys, "is-leap", "1403")
    assert code == 0
    assert out == "Yes\n"


def test_is_leap_rejects_non_positive(capsys):
    code, out, err = run(capsys, "is-leap", "0")
    assert code == 1
    assert out == ""
    assert "positive" in err


def test_add_then_sub_round_trip(capsys):
    code, out, _ = run(capsys, "add", "1403/12/25", "--days", "10")
    assert code == 0
    shifted = out.strip()
    code, out, _ = run(capsys, "sub", shifted, "--days", "10")
    assert code == 0
    assert out.strip() == "1403/12/25"


def test_add_hours_keeps_datetime_output(capsys):
    code, out, _ = run(capsys, "add", "1403/05/02 10:30:00", "--hours", "3")
    assert code == 0
    value, was_datetime = parse_input_datetime_or_date(out.strip())
    assert was_datetime is True
    assert (value.hour, value.minute) == (13, 30)


def test_add_two_units_is_usage_error():
    with pytest.raises(SystemExit) as info:
        main(["add", "1403/05/02", "--days", "1", "--months", "1"])
    assert info.value.code == 2


def test_add_without_unit_reports_error(capsys):
    code, _, err = run(capsys, "add", "1403/05/02")
    assert code == 1
    assert "exactly one duration unit" in err


def test_sub_negative_value_is_usage_error():
    with pytest.raises(SystemExit) as info:
        main(["sub", "1403/05/02", "--days", "-1"])
    assert info.value.code == 2


def test_to_gregorian_anchor(capsys):
    code, out, _ = run(capsys, "to-gregorian", "1403/01/01")
    assert code == 0
    assert out == "2024-03-20\n"


def test_gregorian_round_trip(capsys):
    code, out, _ = run(capsys, "to-gregorian", "1402/07/15 08:09:10")
    assert code == 0
    code, out, _ = run(capsys, "from-gregorian", out.strip())
    assert code == 0
    assert out.strip() == "1402/07/15 08:09:10"


def test_format_iso_style(capsys):
    code, out, _ = run(capsys, "format", "1403/05/02", "--style", "iso")
    assert code == 0
    assert out == "1403-05-02\n"


def test_format_style_and_pattern_conflict():
    with pytest.raises(SystemExit) as info:
        main(["format", "1403/05/02", "--style", "iso", "-p", "%Y"])
    assert info.value.code == 2


def test_weekday_matches_calendar(capsys):
    code, out, _ = run(capsys, "weekday", "1403-01-01")
    assert code == 0
    assert out.strip() == ParsiDate(1403, 1, 1).weekday()


def test_diff_is_symmetric(capsys):
    _, first, _ = run(capsys, "diff", "1403/01/01", "1403/02/01")
    _, second, _ = run(capsys, "diff", "1403/02/01", "1403/01/01")
    assert first == second
    assert first.startswith("Difference: ")


def test_diff_bad_input(capsys):
    code, out, err = run(capsys, "diff", "garbage", "1403/01/01")
    assert code == 1
    assert out == ""
    assert "Failed to parse first date/datetime: garbage" in err


def test_parse_command(capsys):
    code, out, _ = run(capsys, "parse", "1403/05/02", "-p", "%Y/%m/%d")
    assert code == 0
    assert out == "Parsed Date: 1403/05/02\n"


def test_default_command_prints_now(capsys):
    code, out, _ = run(capsys)
    assert code == 0
    _, was_datetime = parse_input_datetime_or_date(out.strip())
    assert was_datetime is True


def test_cal_month_conflicts_with_three():
    with pytest.raises(SystemExit) as info:
        main(["cal", "5", "-3"])
    assert info.value.code == 2


def test_cal_year_view_has_all_months_and_legend(capsys):
    code, out, _ = run(capsys, "cal", "-y", "1403")
    assert code == 0
    assert out.rstrip().endswith("*: Holiday  +: Other Event")
    assert out.count("1403") >= 13


def test_cal_invalid_month(capsys):
    code, _, err = run(capsys, "cal", "13", "1403")
    assert code == 1
    assert "Month must be between 1 and 12" in err


def test_events_from_file(capsys, tmp_path):
    path = tmp_path / "events.json"
    data = {
        "persian_reference_year": 1403,
        "Persian Calendar": [{"holiday": True, "month": 1, "day": 1, "title": "Nowruz"}],
    }
    path.write_text(json.dumps(data), encoding="utf-8")
    code, out, _ = run(capsys, "--events-file", str(path), "events", "1403/01/01")
    assert code == 0
    assert "  [تعطیل] Nowruz" in out.splitlines()


def test_events_without_data(capsys):
    code, out, _ = run(capsys, "events", "1403/01/01")
    assert code == 0
    assert out.splitlines()[-1] == "  - No events found."


def test_missing_events_file(capsys, tmp_path):
    code, _, err = run(capsys, "--events-file", str(tmp_path / "none.json"), "now")
    assert code == 1
    assert "could not load event data" in err
import pytest

from src.hrm_attendance.hrm_attendance.common.time_parser import normalize
from src.hrm_attendance.hrm_attendance.timesheet.calculator.overnight_calculator import OvernightWrapCalculator
from src.hrm_attendance.hrm_attendance.timesheet.duration import (
    WorkedDuration,
    duration,
    normalize_hours,
    worked_minutes,
)


def test_overnight_shift_wraps_past_midnight():
    worked = OvernightWrapCalculator().worked(normalize("22:00"), normalize("06:00"))

    assert worked == WorkedDuration(8, 0)
    assert worked.to_hhmm() == "8:00"
    assert worked.display() == "8.0 hrs"


def test_same_day_shift():
    assert duration(normalize("09:15"), normalize("17:45")) == WorkedDuration(8, 30)
    assert worked_minutes(540, 540) == 0


def test_missing_punch_gives_no_duration():
    calc = OvernightWrapCalculator()
    assert calc.worked(None, 600) is None
    assert calc.worked(540, None) is None


def test_worked_minutes_stays_within_a_day():
    for a in range(0, 1440, 37):
        for b in range(0, 1440, 41):
            assert 0 <= worked_minutes(a, b) < 1440


def test_decimal_and_empty_display():
    assert WorkedDuration(7, 20).to_decimal() == 7.3
    assert WorkedDuration(0, 0).display() == "—"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("8:30", WorkedDuration(8, 30)),
        (" 10:05 ", WorkedDuration(10, 5)),
        ("8:60", None),
        ("8.5", None),
        ("", None),
        (None, None),
        (8.5, None),
    ],
)
def test_parse_stored_hours(text, expected):
    assert WorkedDuration.parse(text) == expected


def test_normalize_hours_without_punch_out_is_placeholder():
    assert normalize_hours("8:00", "09:00", None) == "—"
    assert normalize_hours("8:00", "09:00", "") == "—"


def test_normalize_hours_trusts_stored_value():
    assert normalize_hours("7:45", "09:00", "18:00") == "7:45"
    assert normalize_hours("approx 8", "09:00", "18:00") == "approx 8"


def test_normalize_hours_recomputes_leaked_datetime_or_empty():
    leaked = "1899-12-30T08:00:00.000Z"
    assert normalize_hours(leaked, "09:00", "17:30") == "8.5 hrs"
    assert normalize_hours("", "22:00", "06:00") == "8.0 hrs"
    assert normalize_hours(None, 540, 1020) == "8.0 hrs"


def test_normalize_hours_without_punch_in():
    assert normalize_hours(None, None, "18:00") == "—"

from datetime import datetime, time, timedelta, timezone

import pytest

from src.hrm_attendance.hrm_attendance.common import time_parser


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("09:00", 540),
        ("9:05", 545),
        ("00:00", 0),
        ("23:59", 1439),
        ("17:30:45", 1050),
        ("  08:15 ", 495),
        ("2025-01-01T09:30:00", 570),
        ("2025-01-01T22:05", 1325),
    ],
)
def test_normalize_accepts_known_formats(raw, expected):
    assert time_parser.normalize(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [None, "", "   ", "24:00", "12:60", "9", "abc", "9:5", "12:30:61", "T", "2025-13-01T09:00", "-1:00", True, 540.0, [], {}],
)
def test_normalize_returns_none_for_unparseable_input(raw):
    assert time_parser.normalize(raw) is None


def test_normalize_accepts_driver_objects():
    assert time_parser.normalize(time(8, 30, 59)) == 510
    assert time_parser.normalize(datetime(2025, 1, 1, 18, 0)) == 1080
    assert time_parser.normalize(timedelta(hours=7, minutes=45)) == 465
    assert time_parser.normalize(timedelta(seconds=-5)) is None


def test_normalize_converts_aware_iso_to_local_time():
    aware = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)
    local = aware.astimezone()

    assert time_parser.normalize("2025-01-01T09:00:00.000Z") == local.hour * 60 + local.minute
    assert time_parser.normalize(aware) == local.hour * 60 + local.minute


def test_normalize_recovers_every_canonical_time():
    for h in range(24):
        for m in range(60):
            assert time_parser.normalize(f"{h:02d}:{m:02d}") == h * 60 + m


def test_canonical_output_parses_back_to_same_value():
    for minutes in (0, 59, 540, 725, 1439):
        assert time_parser.normalize(time_parser.to_canonical(minutes)) == minutes
        assert time_parser.parse_display(time_parser.to_display(minutes)) == minutes


@pytest.mark.parametrize(
    "minutes, expected",
    [(0, "12:00 AM"), (545, "9:05 AM"), (720, "12:00 PM"), (780, "1:00 PM"), (1439, "11:59 PM")],
)
def test_to_display_uses_twelve_hour_clock(minutes, expected):
    assert time_parser.to_display(minutes) == expected


def test_missing_time_renders_placeholder():
    assert time_parser.to_display(None) == "—"
    assert time_parser.to_canonical(None) == ""


def test_parse_display_rejects_invalid_hour():
    assert time_parser.parse_display("13:00 PM") is None
    assert time_parser.parse_display("0:30 AM") is None
    assert time_parser.parse_display("07:10") == 430

from datetime import date

import pytest

from src.hrm_attendance.hrm_attendance.attendance.model import AttendanceRecord
from src.hrm_attendance.hrm_attendance.common.time_parser import normalize
from src.hrm_attendance.hrm_attendance.core.enums import AttendanceStatus
from src.hrm_attendance.hrm_attendance.core.exceptions import ValidationError
from src.hrm_attendance.hrm_attendance.members.service import MemberService
from src.hrm_attendance.hrm_attendance.settings.service import PolicyService
from src.hrm_attendance.hrm_attendance.timesheet.service import TimesheetReportService

from conftest import InMemoryMembers, InMemorySettings


def _rec(day, member_id, punch_in, punch_out, status=None, override=None):
    return AttendanceRecord(
        work_date=date(2025, 1, day),
        member_id=member_id,
        punch_in=normalize(punch_in),
        punch_out=normalize(punch_out),
        status=status,
        status_override=override,
    )


@pytest.fixture
def report_service(attendance_repo, members):
    attendance_repo.save(
        [
            _rec(13, "M001", "09:00", "18:00", AttendanceStatus.ON_TIME),
            _rec(14, "M001", "09:30", "17:30"),
            _rec(15, "M001", None, None, AttendanceStatus.ABSENT),
            _rec(13, "M002", "22:00", "07:00", AttendanceStatus.LATE),
            _rec(14, "M002", None, None, AttendanceStatus.ABSENT, AttendanceStatus.ON_LEAVE),
            _rec(20, "M002", "09:00", "18:00", AttendanceStatus.ON_TIME),
        ]
    )
    return TimesheetReportService(
        attendance_repo,
        MemberService(InMemoryMembers(members)),
        PolicyService(InMemorySettings({"StartTime": "09:00", "LateGracePeriod": "10"})),
    )


def test_report_rows_within_range(report_service):
    data = report_service.build_report(start=date(2025, 1, 13), end=date(2025, 1, 17))

    assert [(r["work_date"], r["member_id"]) for r in data.rows] == [
        ("2025-01-13", "M001"),
        ("2025-01-13", "M002"),
        ("2025-01-14", "M001"),
        ("2025-01-14", "M002"),
        ("2025-01-15", "M001"),
    ]
    night = data.rows[1]
    assert night["worked_hours"] == "09:00"
    assert night["member_name"] == "Bob"
    assert night["department"] == "Sales"
    assert data.rows[2]["status"] == "Late"  # derived
    assert data.rows[3]["status"] == "On Leave"  # override
    assert data.rows[4]["punch_in"] == "-"


def test_report_summary_per_member(report_service):
    data = report_service.build_report(start=date(2025, 1, 13), end=date(2025, 1, 17))

    by_member = {s["member_id"]: s for s in data.summary}
    alice = by_member["M001"]
    assert (alice["days_present"], alice["days_late"], alice["days_absent"]) == (1, 1, 1)
    assert alice["total_hours"] == "17:00"
    assert alice["expected_days"] == 5
    assert alice["expected_hours"] == "40:00"

    bob = by_member["M002"]
    assert (bob["days_late"], bob["days_on_leave"]) == (1, 1)
    assert [s["member_id"] for s in data.summary] == ["M001", "M002"]


def test_report_for_single_member(report_service):
    data = report_service.build_report(start=date(2025, 1, 13), end=date(2025, 1, 31), member_id="M002")

    assert [r["work_date"] for r in data.rows] == ["2025-01-13", "2025-01-14", "2025-01-20"]
    assert data.summary[0]["total_minutes"] == 18 * 60


def test_report_rejects_inverted_range(report_service):
    with pytest.raises(ValidationError):
        report_service.build_report(start=date(2025, 1, 17), end=date(2025, 1, 13))


def test_report_summary_rates(report_service):
    data = report_service.build_report(start=date(2025, 1, 13), end=date(2025, 1, 17))

    by_member = {s["member_id"]: s for s in data.summary}
    alice = by_member["M001"]
    assert alice["avg_hours"] == 5.7
    assert alice["punctuality_rate"] == 33
    assert alice["attendance_rate"] == 67

    bob = by_member["M002"]
    assert bob["avg_hours"] == 4.5
    assert bob["punctuality_rate"] == 0
    assert bob["attendance_rate"] == 50


def test_report_for_member_without_records(report_service):
    data = report_service.build_report(start=date(2025, 1, 13), end=date(2025, 1, 17), member_id="M005")

    assert data.rows == []
    assert data.summary == []

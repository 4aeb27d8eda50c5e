from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common import time_parser
from ..core.enums import AttendanceStatus
from ..timesheet.duration import WorkedDuration


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): Bản ghi chấm công của một thành viên trong một ngày.

    ``punch_in``/``punch_out`` are minutes since midnight; ``status`` and
    ``hours_worked`` are derived unless ``status_override`` is set.
    """

    work_date: date
    member_id: str
    punch_in: Optional[int]
    punch_out: Optional[int]
    status: Optional[AttendanceStatus]
    hours_worked: Optional[WorkedDuration] = None
    comments: str = ""
    status_override: Optional[AttendanceStatus] = None
    member_name: Optional[str] = None
    department: Optional[str] = None

    @property
    def effective_status(self) -> Optional[AttendanceStatus]:
        return self.status_override or self.status


@dataclass(frozen=True)
class AttendanceRow:
    """Read-model phục vụ bảng chấm công theo ngày (đã định dạng cho UI)."""

    member_id: str
    member_name: str
    department: str
    work_date: date
    punch_in: Optional[int]
    punch_out: Optional[int]
    hours: str
    status: Optional[AttendanceStatus]
    comments: str = ""

    @property
    def punch_in_display(self) -> str:
        return time_parser.to_display(self.punch_in)

    @property
    def punch_out_display(self) -> str:
        return time_parser.to_display(self.punch_out)

    def to_dict(self) -> dict:
        return {
            "member_id": self.member_id,
            "member_name": self.member_name,
            "department": self.department,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "punch_in": time_parser.to_canonical(self.punch_in),
            "punch_out": time_parser.to_canonical(self.punch_out),
            "punch_in_display": self.punch_in_display,
            "punch_out_display": self.punch_out_display,
            "hours": self.hours,
            "status": self.status.value if self.status else None,
            "comments": self.comments,
        }


@dataclass(frozen=True)
class AttendanceSummary:
    total: int
    present: int
    late: int
    absent: int
    on_leave: int = 0
    half_day: int = 0

    @property
    def attendance_rate(self) -> int:
        """Percent of the roster that came in (on time or late)."""

        if self.total <= 0:
            return 0
        return round((self.present + self.late) / self.total * 100)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "late": self.late,
            "absent": self.absent,
            "on_leave": self.on_leave,
            "half_day": self.half_day,
            "attendance_rate": self.attendance_rate,
        }


@dataclass(frozen=True)
class MemberOption:
    """Lựa chọn thành viên cho form thêm chấm công (đơn lẻ/hàng loạt)."""

    member_id: str
    name: str
    department: Optional[str]
    already_marked: bool

    def to_dict(self) -> dict:
        return {
            "member_id": self.member_id,
            "name": self.name,
            "department": self.department or "N/A",
            "already_marked": self.already_marked,
        }

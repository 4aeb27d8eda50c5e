from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.factory import AttendanceStrategyFactory
from ..attendance.repository import AttendanceRepository
from ..common import time_parser
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..members.service import MemberService
from ..settings.service import PolicyService
from ..workcalendar.working_days import count_working_days
from .calculator.base import WorkedTimeCalculator
from .calculator.overnight_calculator import OvernightWrapCalculator


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


def _hhmm(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def _rates(s: dict) -> dict:
    """Per-member stats over the days that have a record (0 when there are none)."""

    days = (
        s["days_present"] + s["days_late"] + s["days_absent"] + s["days_on_leave"] + s["days_half_day"]
    )
    if days <= 0:
        return {"avg_hours": 0.0, "punctuality_rate": 0, "attendance_rate": 0}
    return {
        "avg_hours": round(s["total_minutes"] / 60 / days, 1),
        "punctuality_rate": round(s["days_present"] / days * 100),
        "attendance_rate": round((s["days_present"] + s["days_late"]) / days * 100),
    }


class TimesheetReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        members: MemberService,
        policies: PolicyService,
        *,
        calculator: Optional[WorkedTimeCalculator] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
    ):
        self._attendance = attendance
        self._members = members
        self._policies = policies
        self._calculator = calculator or OvernightWrapCalculator()
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def build_report(self, *, start: date, end: date, member_id: Optional[str] = None) -> ReportData:
        if end < start:
            raise ValidationError("End date must not be before start date")

        if member_id:
            records = [r for r in self._attendance.list_by_member(member_id) if start <= r.work_date <= end]
        else:
            records = list(self._attendance.list_range(start_date=start, end_date=end))
        records.sort(key=lambda r: (r.work_date, r.member_id))

        policy = self._policies.load_policy()
        roster = {m.member_id: m for m in self._members.list_active()}
        expected_days = count_working_days(start, end, policy.working_days)

        summary_map: dict[str, dict] = {}
        out_rows: list[dict] = []

        for r in records:
            status = r.effective_status or self._factory.decide(
                punch_in=r.punch_in, punch_out=r.punch_out, policy=policy
            ).status
            worked = self._calculator.worked(r.punch_in, r.punch_out)
            minutes = worked.total_minutes if worked else 0
            member = roster.get(r.member_id)
            name = r.member_name or (member.name if member else r.member_id)

            out_rows.append(
                {
                    "work_date": r.work_date.strftime("%Y-%m-%d"),
                    "member_id": r.member_id,
                    "member_name": name,
                    "department": (member.department if member else r.department) or "-",
                    "punch_in": time_parser.to_canonical(r.punch_in) or "-",
                    "punch_out": time_parser.to_canonical(r.punch_out) or "-",
                    "status": status.value,
                    "worked_hours": _hhmm(minutes),
                    "comments": r.comments or "",
                }
            )

            s = summary_map.get(r.member_id)
            if not s:
                s = {
                    "member_id": r.member_id,
                    "member_name": name,
                    "days_present": 0,
                    "days_late": 0,
                    "days_absent": 0,
                    "days_on_leave": 0,
                    "days_half_day": 0,
                    "total_minutes": 0,
                }
                summary_map[r.member_id] = s
            if status.is_present:
                s["days_present"] += 1
            elif status == AttendanceStatus.LATE:
                s["days_late"] += 1
            elif status == AttendanceStatus.ON_LEAVE:
                s["days_on_leave"] += 1
            elif status == AttendanceStatus.HALF_DAY:
                s["days_half_day"] += 1
            else:
                s["days_absent"] += 1
            s["total_minutes"] += minutes

        expected_minutes = int(round(expected_days * policy.working_hours_per_day * 60))
        summary = []
        for s in sorted(summary_map.values(), key=lambda x: x["total_minutes"], reverse=True):
            summary.append(
                {
                    **s,
                    **_rates(s),
                    "total_hours": _hhmm(int(s["total_minutes"])),
                    "expected_days": expected_days,
                    "expected_hours": _hhmm(expected_minutes),
                }
            )

        return ReportData(rows=out_rows, summary=summary)

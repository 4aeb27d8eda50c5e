from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..common import time_parser
from ..common.datetime_utils import coerce_date, format_iso_date
from ..core.enums import coerce_status
from ..gateway.connection import SheetsApiClient
from ..gateway.sheets_base import as_rows, normalize_sheet_time, text_or_none
from ..timesheet.duration import WorkedDuration
from .model import AttendanceRecord
from .repository import AttendanceRepository

log = logging.getLogger(__name__)


def record_from_row(r: Dict[str, Any]) -> Optional[AttendanceRecord]:
    work_date = coerce_date(r.get("date"))
    member_id = text_or_none(r.get("memberId"))
    if work_date is None or member_id is None:
        log.warning("Skipping attendance row without date/memberId: %r", r)
        return None

    return AttendanceRecord(
        work_date=work_date,
        member_id=member_id,
        punch_in=normalize_sheet_time(r.get("punchIn")),
        punch_out=normalize_sheet_time(r.get("punchOut")),
        status=coerce_status(r.get("status")),
        hours_worked=WorkedDuration.parse(r.get("hoursWorked")),
        comments=str(r.get("comments") or ""),
        status_override=coerce_status(r.get("statusOverride")),
        member_name=text_or_none(r.get("memberName")),
        department=text_or_none(r.get("department")),
    )


def record_to_row(record: AttendanceRecord) -> Dict[str, Any]:
    status = record.effective_status
    return {
        "date": format_iso_date(record.work_date),
        "memberId": record.member_id,
        "punchIn": time_parser.to_canonical(record.punch_in),
        "punchOut": time_parser.to_canonical(record.punch_out),
        "status": status.value if status else "",
        "hoursWorked": record.hours_worked.to_hhmm() if record.hours_worked else "",
        "comments": record.comments or "",
        "statusOverride": record.status_override.value if record.status_override else "",
    }


class SheetsAttendanceRepository(AttendanceRepository):
    def __init__(self, client: SheetsApiClient):
        self._client = client

    def _records(self, data) -> list[AttendanceRecord]:
        out = []
        for row in as_rows(data):
            rec = record_from_row(row)
            if rec is not None:
                out.append(rec)
        return out

    def list_by_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        return self._records(self._client.get("getAttendance", date=format_iso_date(work_date)))

    def list_range(self, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        data = self._client.get(
            "getAttendanceRange",
            startDate=format_iso_date(start_date),
            endDate=format_iso_date(end_date),
        )
        return self._records(data)

    def list_by_member(self, member_id: str) -> Sequence[AttendanceRecord]:
        return self._records(self._client.get("getAttendanceByMember", memberId=member_id))

    def save(self, records: Sequence[AttendanceRecord]) -> int:
        batch = [record_to_row(r) for r in records]
        if not batch:
            return 0
        data = self._client.post("saveAttendance", {"batch": batch})
        if isinstance(data, dict) and "processed" in data:
            return int(data["processed"])
        return len(batch)

    def delete(self, *, work_date: date, member_id: str) -> bool:
        data = self._client.post("deleteAttendance", {"date": format_iso_date(work_date), "memberId": member_id})
        # A successful envelope means the row is gone unless the store reports otherwise.
        if isinstance(data, dict):
            if "deleted" in data:
                return bool(data["deleted"])
            if "processed" in data:
                return int(data["processed"] or 0) > 0
        return True

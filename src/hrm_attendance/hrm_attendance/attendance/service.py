from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Callable, Iterable, Optional, Sequence

from ..common import time_parser
from ..common.datetime_utils import coerce_date, today_local
from ..common.validators import require_non_empty, require_selection
from ..core.enums import AttendanceStatus, EntryState, coerce_status
from ..core.exceptions import DomainError, PersistenceError, PolicyViolationError, ValidationError
from ..members.model import Member
from ..members.service import MemberService
from ..settings.model import Policy
from ..settings.service import PolicyService
from ..timesheet.calculator.base import WorkedTimeCalculator
from ..timesheet.calculator.overnight_calculator import OvernightWrapCalculator
from ..timesheet.duration import normalize_hours
from ..workcalendar.working_days import CalendarMonth, is_selectable, is_working_day, month_grid
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, AttendanceRow, AttendanceSummary, MemberOption
from .repository import AttendanceRepository

log = logging.getLogger(__name__)

_ALL = "all"


def _is_unset(value: Optional[str]) -> bool:
    return value is None or not str(value).strip() or str(value).strip().lower() == _ALL


class AttendanceViewService:
    """One admin view session over a single date.

    Holds the policy, the active roster and the records of the selected date,
    and exposes read-only derived views (summary, rows, pickers, calendar).
    Mutations go through the attendance repository; on failure the in-memory
    state is left untouched and the error propagates.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        members: MemberService,
        policies: PolicyService,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        calculator: WorkedTimeCalculator | None = None,
        today: Callable[[], date] | None = None,
    ):
        self._attendance = attendance
        self._members_service = members
        self._policies = policies
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._calculator = calculator or OvernightWrapCalculator()
        self._today = today or today_local

        self._loaded = False
        self._policy = Policy()
        self._members: tuple[Member, ...] = ()
        self._selected_date: date = self._today()
        self._records: tuple[AttendanceRecord, ...] = ()
        self._states: dict[str, EntryState] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def load(self, selected_date=None) -> None:
        """Load policy, roster and the records of ``selected_date`` (default: today)."""

        self._policy = self._policies.load_policy()
        self._members = tuple(self._members_service.list_active())
        self._selected_date = coerce_date(selected_date) or self._today()
        self._states = {}
        self._loaded = True
        self.reload_records()

    def reload_records(self) -> None:
        self._require_loaded()
        records = self._attendance.list_by_date(self._selected_date)
        self._records = tuple(self._hydrate(r) for r in records if r.work_date == self._selected_date)
        log.debug("Loaded %d attendance records for %s", len(self._records), self._selected_date)
        self._sync_states()

    def select_date(self, value) -> None:
        day = coerce_date(value)
        if day is None:
            raise ValidationError("Invalid date")
        if not is_selectable(day, self._today(), self._policy.working_days):
            raise PolicyViolationError("Date is not a working day or lies in the future")

        previous = (self._selected_date, self._records, dict(self._states))
        self._selected_date = day
        self._states = {}
        try:
            self.reload_records()
        except PersistenceError:
            self._selected_date, self._records, self._states = previous
            raise

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def policy(self) -> Policy:
        return self._policy

    @property
    def members(self) -> tuple[Member, ...]:
        return self._members

    @property
    def selected_date(self) -> date:
        return self._selected_date

    @property
    def records(self) -> tuple[AttendanceRecord, ...]:
        return self._records

    def record_for(self, member_id: str) -> Optional[AttendanceRecord]:
        member_id = str(member_id)
        for r in self._records:
            if r.member_id == member_id:
                return r
        return None

    def entry_state(self, member_id: str) -> EntryState:
        return self._states.get(str(member_id), EntryState.NOT_ENTERED)

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------
    def summary(self) -> AttendanceSummary:
        """Counts for the summary cards.

        Roster members without a record count as absent.
        """

        roster = {m.member_id for m in self._members}
        statuses = [r.effective_status for r in self._records if r.member_id in roster]

        present = sum(1 for s in statuses if s is not None and s.is_present)
        late = statuses.count(AttendanceStatus.LATE)
        on_leave = statuses.count(AttendanceStatus.ON_LEAVE)
        total = len(self._members)

        return AttendanceSummary(
            total=total,
            present=present,
            late=late,
            absent=total - (present + late + on_leave),
            on_leave=on_leave,
            half_day=statuses.count(AttendanceStatus.HALF_DAY),
        )

    def rows(
        self,
        *,
        department: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[AttendanceRow]:
        """Table rows after department, status and name filters (AND-composed)."""

        records: Iterable[AttendanceRecord] = self._records

        if not _is_unset(department):
            dept = str(department).strip()
            records = [r for r in records if dept in (self._department_of(r), r.department)]

        if not _is_unset(status):
            wanted = coerce_status(status)
            if wanted is None:
                return []
            records = [r for r in records if r.effective_status == wanted]

        if search and search.strip():
            query = search.strip().lower()
            records = [r for r in records if query in self._name_of(r).lower()]

        rows = [self._to_row(r) for r in records]
        rows.sort(key=lambda row: (row.member_name.casefold(), row.member_id))
        return rows

    def departments(self) -> list[str]:
        return MemberService.departments(self._members)

    def member_options(self) -> list[MemberOption]:
        """Roster for the add pickers; members with a record are flagged as marked."""

        marked = {r.member_id for r in self._records}
        return [
            MemberOption(
                member_id=m.member_id,
                name=m.name,
                department=m.department,
                already_marked=m.member_id in marked,
            )
            for m in self._members
        ]

    def eligible_members(self) -> list[Member]:
        marked = {r.member_id for r in self._records}
        return [m for m in self._members if m.member_id not in marked]

    def calendar(self, year: Optional[int] = None, month: Optional[int] = None) -> CalendarMonth:
        year = int(year or self._selected_date.year)
        month = int(month or self._selected_date.month)
        if not 1 <= month <= 12:
            raise ValidationError("Invalid month")
        return month_grid(
            year,
            month,
            today=self._today(),
            days=self._policy.working_days,
            selected=self._selected_date,
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def build_record(
        self,
        member_id: str,
        punch_in,
        punch_out,
        *,
        comments: str = "",
        status_override=None,
    ) -> AttendanceRecord:
        """Derive status and hours for one entry of the selected date."""

        member = self._require_member(member_id)
        in_minutes = time_parser.normalize(punch_in)
        out_minutes = time_parser.normalize(punch_out)
        override = coerce_status(status_override)

        decision = self._factory.decide(
            punch_in=in_minutes,
            punch_out=out_minutes,
            policy=self._policy,
            override=override,
        )
        return AttendanceRecord(
            work_date=self._selected_date,
            member_id=member.member_id,
            punch_in=in_minutes,
            punch_out=out_minutes,
            status=decision.status,
            hours_worked=self._calculator.worked(in_minutes, out_minutes),
            comments=(comments or "").strip(),
            status_override=override,
            member_name=member.name,
            department=member.department,
        )

    def add_single(
        self,
        member_id: str,
        punch_in,
        punch_out,
        *,
        comments: str = "",
        status_override=None,
    ) -> AttendanceRecord:
        self._ensure_entry_allowed()
        member_id = require_non_empty(member_id, "Please select a member")
        if self.record_for(member_id) is not None:
            raise ValidationError("Attendance already marked for this member")

        record = self.build_record(member_id, punch_in, punch_out, comments=comments, status_override=status_override)
        self._persist([record], EntryState.ENTERED)
        return record

    def add_bulk(self, member_ids: Sequence[str], punch_in, punch_out) -> list[AttendanceRecord]:
        self._ensure_entry_allowed()
        member_ids = require_selection(member_ids, "Please select at least one member")

        marked = [m for m in member_ids if self.record_for(m) is not None]
        if marked:
            raise ValidationError(f"Attendance already marked for: {', '.join(marked)}")

        batch = [self.build_record(m, punch_in, punch_out) for m in member_ids]
        self._persist(batch, EntryState.ENTERED)
        return batch

    def edit(
        self,
        member_id: str,
        punch_in,
        punch_out,
        *,
        comments: str = "",
        status_override=None,
    ) -> AttendanceRecord:
        if self.record_for(member_id) is None:
            raise ValidationError("Attendance record not found")

        record = self.build_record(member_id, punch_in, punch_out, comments=comments, status_override=status_override)
        self._persist([record], EntryState.EDITED)
        return record

    def delete(self, member_id: str) -> None:
        self._require_loaded()
        record = self.record_for(member_id)
        if record is None:
            raise ValidationError("Attendance record not found")

        try:
            deleted = self._attendance.delete(work_date=record.work_date, member_id=record.member_id)
        except PersistenceError as e:
            log.error("Failed to delete attendance %s/%s: %s", record.work_date, record.member_id, e)
            raise
        if not deleted:
            raise PersistenceError("Failed to delete attendance", code=404, endpoint="deleteAttendance")

        self._states[record.member_id] = EntryState.DELETED
        self.reload_records()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _require_loaded(self) -> None:
        if not self._loaded:
            raise DomainError("Attendance view is not loaded")

    def _require_member(self, member_id: str) -> Member:
        member = MemberService.find(self._members, member_id)
        if member is None:
            raise ValidationError("Member not found")
        return member

    def _ensure_entry_allowed(self) -> None:
        self._require_loaded()
        day = self._selected_date
        if not is_working_day(day, self._policy.working_days):
            raise PolicyViolationError("Cannot add attendance on a non-working day")
        if day > self._today():
            raise PolicyViolationError("Cannot add attendance for a future date")

    def _persist(self, records: list[AttendanceRecord], state: EntryState) -> None:
        try:
            self._attendance.save(records)
        except PersistenceError as e:
            log.error("Failed to save %d attendance record(s) for %s: %s", len(records), self._selected_date, e)
            raise

        for r in records:
            self._states[r.member_id] = state
        log.info("Saved %d attendance record(s) for %s", len(records), self._selected_date)
        self.reload_records()

    def _hydrate(self, record: AttendanceRecord) -> AttendanceRecord:
        if record.status is not None:
            return record
        decision = self._factory.decide(
            punch_in=record.punch_in,
            punch_out=record.punch_out,
            policy=self._policy,
            override=record.status_override,
        )
        return replace(record, status=decision.status)

    def _sync_states(self) -> None:
        with_record = {r.member_id for r in self._records}
        for member_id in with_record:
            if self._states.get(member_id) not in (EntryState.ENTERED, EntryState.EDITED):
                self._states[member_id] = EntryState.ENTERED
        for member_id, state in list(self._states.items()):
            if member_id not in with_record and state != EntryState.DELETED:
                self._states[member_id] = EntryState.NOT_ENTERED

    def _member_of(self, record: AttendanceRecord) -> Optional[Member]:
        return MemberService.find(self._members, record.member_id)

    def _name_of(self, record: AttendanceRecord) -> str:
        member = self._member_of(record)
        return record.member_name or (member.name if member else "") or ""

    def _department_of(self, record: AttendanceRecord) -> Optional[str]:
        member = self._member_of(record)
        return member.department if member else None

    def _to_row(self, record: AttendanceRecord) -> AttendanceRow:
        stored = record.hours_worked.to_hhmm() if record.hours_worked else None
        return AttendanceRow(
            member_id=record.member_id,
            member_name=self._name_of(record) or record.member_id,
            department=self._department_of(record) or record.department or "N/A",
            work_date=record.work_date,
            punch_in=record.punch_in,
            punch_out=record.punch_out,
            hours=normalize_hours(stored, record.punch_in, record.punch_out),
            status=record.effective_status,
            comments=record.comments,
        )

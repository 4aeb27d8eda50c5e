from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional

import pytest

from src.hrm_attendance.hrm_attendance.attendance.model import AttendanceRecord
from src.hrm_attendance.hrm_attendance.attendance.service import AttendanceViewService
from src.hrm_attendance.hrm_attendance.core.enums import MemberStatus
from src.hrm_attendance.hrm_attendance.core.exceptions import PersistenceError
from src.hrm_attendance.hrm_attendance.members.model import Member
from src.hrm_attendance.hrm_attendance.members.service import MemberService
from src.hrm_attendance.hrm_attendance.settings.service import PolicyService

# 2025-01-15 is a Wednesday.
TODAY = date(2025, 1, 15)


@dataclass
class InMemoryMembers:
    members: list[Member]

    def list_all(self):
        return list(self.members)


@dataclass
class InMemorySettings:
    settings: Optional[dict] = None
    fail: bool = False

    def get_settings(self):
        if self.fail:
            raise PersistenceError("Network error", code=0, endpoint="getSettings")
        return dict(self.settings or {})


class InMemoryAttendance:
    def __init__(self, records=()):
        self._by_key: dict[tuple[str, date], AttendanceRecord] = {}
        for r in records:
            self._by_key[(r.member_id, r.work_date)] = r
        self.fail_save = False
        self.fail_delete = False
        self.save_calls: list[list[AttendanceRecord]] = []
        self.delete_calls: list[tuple[date, str]] = []

    def list_by_date(self, work_date: date):
        return [r for (_, d), r in self._by_key.items() if d == work_date]

    def list_range(self, *, start_date: date, end_date: date):
        return [r for (_, d), r in self._by_key.items() if start_date <= d <= end_date]

    def list_by_member(self, member_id: str):
        return [r for (m, _), r in self._by_key.items() if m == member_id]

    def save(self, records):
        self.save_calls.append(list(records))
        if self.fail_save:
            raise PersistenceError("Server error. Please try again later.", code=500, endpoint="saveAttendance")
        for r in records:
            # The store keeps what it is sent, without display-only fields.
            self._by_key[(r.member_id, r.work_date)] = replace(r, member_name=None, department=None)
        return len(records)

    def delete(self, *, work_date: date, member_id: str) -> bool:
        self.delete_calls.append((work_date, member_id))
        if self.fail_delete:
            raise PersistenceError("Network error", code=0, endpoint="deleteAttendance")
        return self._by_key.pop((member_id, work_date), None) is not None


def make_members(n: int = 5) -> list[Member]:
    departments = ["Engineering", "Sales", "Engineering", "HR", "Sales"]
    names = ["Alice", "Bob", "Carol", "Dan", "Eve"]
    return [
        Member(member_id=f"M00{i + 1}", name=names[i % 5], department=departments[i % 5])
        for i in range(n)
    ]


@dataclass
class ViewFactory:
    attendance: InMemoryAttendance = field(default_factory=InMemoryAttendance)
    members: list[Member] = field(default_factory=make_members)
    settings: InMemorySettings = field(default_factory=lambda: InMemorySettings({"StartTime": "09:00", "LateGracePeriod": "10"}))
    today: date = TODAY

    def __call__(self, selected=TODAY) -> AttendanceViewService:
        view = AttendanceViewService(
            self.attendance,
            MemberService(InMemoryMembers(self.members)),
            PolicyService(self.settings),
            today=lambda: self.today,
        )
        view.load(selected)
        return view


@pytest.fixture
def fixed_today() -> date:
    return TODAY


@pytest.fixture
def members() -> list[Member]:
    return make_members()


@pytest.fixture
def inactive_member() -> Member:
    return Member(member_id="M099", name="Zed", department="Ops", status=MemberStatus.INACTIVE)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def view_factory(attendance_repo, members) -> ViewFactory:
    return ViewFactory(attendance=attendance_repo, members=members)

from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Attendance persistence collaborator.

    Implementations raise ``PersistenceError`` on transport/storage failures.
    """

    def list_by_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_range(self, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_member(self, member_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def save(self, records: Sequence[AttendanceRecord]) -> int:
        """Upsert by (member_id, work_date).

        Returns the number of processed records.
        """

        raise NotImplementedError

    def delete(self, *, work_date: date, member_id: str) -> bool:
        raise NotImplementedError

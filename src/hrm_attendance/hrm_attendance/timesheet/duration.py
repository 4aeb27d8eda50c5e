from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

from ..common import time_parser
from ..core.constants import EMPTY_PLACEHOLDER, MINUTES_PER_DAY

_HOURS_TEXT = re.compile(r"^(\d+):(\d{2})$")


@dataclass(frozen=True)
class WorkedDuration:
    """Thời lượng làm việc giữa hai lần chấm công."""

    hours: int
    minutes: int

    @classmethod
    def from_minutes(cls, total: int) -> "WorkedDuration":
        hours, minutes = divmod(int(total), 60)
        return cls(hours=hours, minutes=minutes)

    @classmethod
    def parse(cls, value: Any) -> Optional["WorkedDuration"]:
        """Read a stored ``H:MM`` value; anything else -> None."""

        if not isinstance(value, str):
            return None
        m = _HOURS_TEXT.match(value.strip())
        if not m or int(m.group(2)) > 59:
            return None
        return cls(hours=int(m.group(1)), minutes=int(m.group(2)))

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes

    def to_hhmm(self) -> str:
        return f"{self.hours}:{self.minutes:02d}"

    def to_decimal(self) -> float:
        return round(self.hours + self.minutes / 60, 1)

    def display(self) -> str:
        if self.total_minutes == 0:
            return EMPTY_PLACEHOLDER
        return f"{self.to_decimal():.1f} hrs"


def worked_minutes(punch_in: Optional[int], punch_out: Optional[int]) -> Optional[int]:
    """Minutes between two punches, wrapping past midnight."""

    if punch_in is None or punch_out is None:
        return None
    diff = int(punch_out) - int(punch_in)
    if diff < 0:
        diff += MINUTES_PER_DAY
    return diff


def duration(punch_in: Optional[int], punch_out: Optional[int]) -> Optional[WorkedDuration]:
    minutes = worked_minutes(punch_in, punch_out)
    if minutes is None:
        return None
    return WorkedDuration.from_minutes(minutes)


def _punch_minutes(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool):
        return value if 0 <= value < MINUTES_PER_DAY else None
    return time_parser.normalize(value)


def normalize_hours(stored: Any, punch_in: Any, punch_out: Any) -> str:
    """Display value for a stored ``hoursWorked`` cell.

    A stored ``H:MM`` is trusted as-is; empty cells and raw datetimes leaked
    by the spreadsheet are recomputed from the punches. Punches may be raw
    values or canonical minutes.
    """

    out_minutes = _punch_minutes(punch_out)
    if out_minutes is None:
        return EMPTY_PLACEHOLDER

    if isinstance(stored, str):
        text = stored.strip()
        if _HOURS_TEXT.match(text):
            return text
        if text and "T" not in text:
            return text

    worked = duration(_punch_minutes(punch_in), out_minutes)
    return worked.display() if worked else EMPTY_PLACEHOLDER

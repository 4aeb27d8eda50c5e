from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from ..common import time_parser
from ..core.constants import (
    DEFAULT_LATE_GRACE_MINUTES,
    DEFAULT_START_TIME,
    DEFAULT_WORKING_DAYS,
    DEFAULT_WORKING_HOURS_PER_DAY,
)
from ..workcalendar.working_days import DEFAULT_DAYS, format_working_days, parse_working_days

DEFAULT_SETTINGS: dict[str, str] = {
    "StartTime": DEFAULT_START_TIME,
    "LateGracePeriod": str(DEFAULT_LATE_GRACE_MINUTES),
    "WorkingDays": DEFAULT_WORKING_DAYS,
    "WorkingHoursPerDay": str(int(DEFAULT_WORKING_HOURS_PER_DAY)),
}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _non_negative_int(value: Any, default: int) -> int:
    """Leading integer of the cell (``"10 min"`` -> 10, ``"10.5"`` -> 10)."""

    m = _LEADING_INT.match(str(value))
    if not m:
        return default
    n = int(m.group(1))
    return n if n >= 0 else default


def _positive_float(value: Any, default: float) -> float:
    try:
        n = float(str(value).strip())
    except (TypeError, ValueError):
        return default
    return n if n > 0 else default


@dataclass(frozen=True)
class Policy:
    """Chính sách chấm công của công ty (chỉ đọc trong một phiên xem)."""

    start_time: int = 9 * 60
    late_grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES
    working_days: frozenset = field(default_factory=lambda: DEFAULT_DAYS)
    working_hours_per_day: float = DEFAULT_WORKING_HOURS_PER_DAY

    @property
    def grace_end(self) -> int:
        return self.start_time + self.late_grace_minutes

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any] | None) -> "Policy":
        """Build a policy from the settings sheet, falling back field by field."""

        merged = {**DEFAULT_SETTINGS, **{k: v for k, v in (settings or {}).items() if v not in (None, "")}}

        start = time_parser.normalize(merged["StartTime"])
        if start is None:
            start = time_parser.normalize(DEFAULT_START_TIME)

        return cls(
            start_time=start,
            late_grace_minutes=_non_negative_int(merged["LateGracePeriod"], DEFAULT_LATE_GRACE_MINUTES),
            working_days=parse_working_days(merged["WorkingDays"]),
            working_hours_per_day=_positive_float(merged["WorkingHoursPerDay"], DEFAULT_WORKING_HOURS_PER_DAY),
        )

    def to_dict(self) -> dict:
        return {
            "StartTime": time_parser.to_canonical(self.start_time),
            "LateGracePeriod": self.late_grace_minutes,
            "WorkingDays": format_working_days(self.working_days),
            "WorkingHoursPerDay": self.working_hours_per_day,
        }

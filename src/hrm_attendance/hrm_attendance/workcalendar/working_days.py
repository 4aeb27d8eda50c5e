"""Working-day calendar.

Company policy keeps its working days as free-form text (``"Mon|Wed|Fri"``,
``"monday, tuesday"``...). This module turns it into a weekday set and
decides which dates can take attendance entries.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from ..core.constants import DEFAULT_WORKING_DAYS
from ..core.enums import Weekday

_DELIMITERS = re.compile(r"[|,;\s]+")

_FULL_NAMES = {
    Weekday.MON: "monday",
    Weekday.TUE: "tuesday",
    Weekday.WED: "wednesday",
    Weekday.THU: "thursday",
    Weekday.FRI: "friday",
    Weekday.SAT: "saturday",
    Weekday.SUN: "sunday",
}

_MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

# Sunday-first, same as the console's date picker.
WEEK_HEADER = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def parse_day_token(token: str) -> Optional[Weekday]:
    """``"Mon"``, ``"monday"``, ``"TUES"`` -> Weekday; unknown -> None."""

    key = (token or "").strip().lower()
    if len(key) < 3:
        return None
    for day, full in _FULL_NAMES.items():
        if full.startswith(key):
            return day
    return None


def _parse(raw: Optional[str]) -> frozenset:
    tokens = _DELIMITERS.split(str(raw or ""))
    return frozenset(d for d in (parse_day_token(t) for t in tokens) if d is not None)


DEFAULT_DAYS: frozenset = _parse(DEFAULT_WORKING_DAYS)


def parse_working_days(raw: Optional[str]) -> frozenset:
    """Parse the configured working days; never returns an empty set."""

    if isinstance(raw, (set, frozenset, list, tuple)):
        raw = ",".join(str(x.short_name if isinstance(x, Weekday) else x) for x in raw)
    days = _parse(raw)
    return days or DEFAULT_DAYS


def format_working_days(days: Iterable[Weekday]) -> str:
    """Canonical settings text, in week order (``"Mon,Tue,Wed"``)."""

    return ",".join(d.short_name for d in sorted(set(days)))


def is_working_day(day: date, days: Iterable[Weekday]) -> bool:
    return Weekday(day.weekday()) in set(days)


def is_selectable(day: date, today: date, days: Iterable[Weekday]) -> bool:
    """A date takes entries iff it is a working day and not after today."""

    return is_working_day(day, days) and day <= today


def count_working_days(start: date, end: date, days: Iterable[Weekday]) -> int:
    if end < start:
        return 0
    days = set(days)
    total = 0
    current = start
    while current <= end:
        if Weekday(current.weekday()) in days:
            total += 1
        current += timedelta(days=1)
    return total


@dataclass(frozen=True)
class CalendarDay:
    day: date
    is_today: bool
    is_selected: bool
    is_future: bool
    is_working_day: bool

    @property
    def is_disabled(self) -> bool:
        return self.is_future or not self.is_working_day

    def to_dict(self) -> dict:
        return {
            "date": self.day.strftime("%Y-%m-%d"),
            "day": self.day.day,
            "is_today": self.is_today,
            "is_selected": self.is_selected,
            "is_future": self.is_future,
            "is_working_day": self.is_working_day,
            "is_disabled": self.is_disabled,
        }


@dataclass(frozen=True)
class CalendarMonth:
    year: int
    month: int
    leading_blanks: int
    days: tuple

    @property
    def title(self) -> str:
        return f"{_MONTH_NAMES[self.month - 1]} {self.year}"

    def selectable_dates(self) -> list[date]:
        return [d.day for d in self.days if not d.is_disabled]

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "year": self.year,
            "month": self.month,
            "week_header": list(WEEK_HEADER),
            "leading_blanks": self.leading_blanks,
            "days": [d.to_dict() for d in self.days],
        }


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``delta`` months forward (negative: backward)."""

    index = year * 12 + (month - 1) + int(delta)
    return index // 12, index % 12 + 1


def month_grid(
    year: int,
    month: int,
    *,
    today: date,
    days: Iterable[Weekday],
    selected: Optional[date] = None,
) -> CalendarMonth:
    days = set(days)
    _, days_in_month = calendar.monthrange(year, month)
    first = date(year, month, 1)
    # Sunday-first grid: Mon(0) -> 1 blank, Sun(6) -> 0 blanks.
    leading = (first.weekday() + 1) % 7

    cells = []
    for n in range(1, days_in_month + 1):
        d = date(year, month, n)
        cells.append(
            CalendarDay(
                day=d,
                is_today=d == today,
                is_selected=selected is not None and d == selected,
                is_future=d > today,
                is_working_day=Weekday(d.weekday()) in days,
            )
        )

    return CalendarMonth(year=year, month=month, leading_blanks=leading, days=tuple(cells))

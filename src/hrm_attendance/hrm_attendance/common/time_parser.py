"""Time-of-day normalization.

Times reach the console in several shapes because of spreadsheet
serialization: ``H:MM``, ``HH:MM:SS``, full ISO datetimes, or driver objects.
Everything is coalesced to minutes since midnight (``0..1439``); anything
unreadable becomes ``None`` ("no punch recorded").
"""

from __future__ import annotations

import re
from datetime import datetime, time, timedelta
from typing import Any, Optional

from ..core.constants import EMPTY_PLACEHOLDER, MINUTES_PER_DAY

_HH_MM = re.compile(r"^(\d{1,2}):(\d{2})$")
_HH_MM_SS = re.compile(r"^(\d{1,2}):(\d{2}):(\d{2})$")
_DISPLAY = re.compile(r"^(\d{1,2}):(\d{2})\s*([AaPp][Mm])$")


def _from_parts(hours: int, minutes: int) -> Optional[int]:
    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        return None
    return hours * 60 + minutes


def _from_iso(text: str) -> Optional[int]:
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        value = datetime.fromisoformat(text)
    except ValueError:
        return None

    if value.tzinfo is not None:
        value = value.astimezone()
    return value.hour * 60 + value.minute


def normalize(raw: Any) -> Optional[int]:
    """Normalize a raw punch value into minutes since midnight.

    Never raises; unparseable or out-of-range input returns ``None``.
    """

    if raw is None or isinstance(raw, bool):
        return None

    try:
        if isinstance(raw, datetime):
            if raw.tzinfo is not None:
                raw = raw.astimezone()
            return raw.hour * 60 + raw.minute
        if isinstance(raw, time):
            return raw.hour * 60 + raw.minute
        if isinstance(raw, timedelta):
            total_seconds = int(raw.total_seconds())
            if total_seconds < 0:
                return None
            return (total_seconds // 60) % MINUTES_PER_DAY
        if not isinstance(raw, str):
            return None

        text = raw.strip()
        if not text:
            return None

        m = _HH_MM.match(text) or _HH_MM_SS.match(text)
        if m:
            if m.lastindex == 3 and int(m.group(3)) > 59:
                return None
            return _from_parts(int(m.group(1)), int(m.group(2)))

        if "T" in text:
            return _from_iso(text)
    except (ValueError, OverflowError, OSError):
        return None

    return None


def to_canonical(minutes: Optional[int]) -> str:
    """Render ``HH:MM`` (empty string for ``None``)."""

    if minutes is None:
        return ""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def to_display(minutes: Optional[int]) -> str:
    """Render a 12-hour clock value such as ``9:05 AM``."""

    if minutes is None:
        return EMPTY_PLACEHOLDER

    hours, mins = divmod(int(minutes), 60)
    period = "PM" if hours >= 12 else "AM"
    display_hours = hours % 12 or 12
    return f"{display_hours}:{mins:02d} {period}"


def parse_display(text: Any) -> Optional[int]:
    """Inverse of :func:`to_display`; also accepts the canonical forms."""

    if not isinstance(text, str):
        return normalize(text)

    m = _DISPLAY.match(text.strip())
    if not m:
        return normalize(text)

    hours, minutes = int(m.group(1)), int(m.group(2))
    if not (1 <= hours <= 12):
        return None
    hours %= 12
    if m.group(3).upper() == "PM":
        hours += 12
    return _from_parts(hours, minutes)

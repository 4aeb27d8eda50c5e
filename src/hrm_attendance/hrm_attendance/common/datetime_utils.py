from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def coerce_date(value) -> Optional[date]:
    """Best-effort conversion of store/query values into a date.

    Accepts ``date``/``datetime`` objects, ``YYYY-MM-DD`` strings and ISO
    datetime strings (date part only). Returns ``None`` when nothing fits.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None
    try:
        return parse_iso_date(text[:10])
    except ValueError:
        return None


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()

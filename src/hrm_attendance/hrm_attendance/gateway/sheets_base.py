from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..common import time_parser


def as_rows(data: Any) -> List[Dict[str, Any]]:
    """Normalize a list-like API payload into a list of dicts."""

    if not data:
        return []
    if isinstance(data, dict):
        data = data.get("records") or data.get("items") or []
    return [r for r in data if isinstance(r, dict)]


def text_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def normalize_sheet_time(value: Any) -> Optional[int]:
    """Normalize spreadsheet TIME cells across serialization quirks.

    The web app can return a time cell as:
    - ``'09:00'`` / ``'9:00'``
    - ``'09:00:00'``
    - an ISO datetime (``'1899-12-30T09:00:00.000Z'``)
    """

    return time_parser.normalize(value)

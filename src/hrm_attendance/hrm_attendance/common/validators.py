from __future__ import annotations

from typing import Iterable

from ..core.exceptions import ValidationError


def require_non_empty(value, message: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(message)
    return str(value).strip()


def require_selection(values: Iterable, message: str) -> list[str]:
    """Non-blank ids, de-duplicated in their original order."""

    cleaned = [str(v).strip() for v in (values or []) if v is not None and str(v).strip()]
    if not cleaned:
        raise ValidationError(message)
    return list(dict.fromkeys(cleaned))

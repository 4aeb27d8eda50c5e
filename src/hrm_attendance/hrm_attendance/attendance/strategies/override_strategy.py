from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from ...settings.model import Policy
from .base import AttendanceStrategy, StatusDecision


class OverrideStrategy(AttendanceStrategy):
    """Admin-set status (leave, half day, ...) wins over the punches."""

    def __init__(self, status: AttendanceStatus):
        self._status = status

    def decide(self, *, punch_in: Optional[int], punch_out: Optional[int], policy: Policy) -> StatusDecision:
        return StatusDecision(status=self._status, note="override")

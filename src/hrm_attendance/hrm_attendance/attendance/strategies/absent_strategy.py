from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from ...settings.model import Policy
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """No punch-in recorded. A missing punch-out alone never lands here."""

    def decide(self, *, punch_in: Optional[int], punch_out: Optional[int], policy: Policy) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT)

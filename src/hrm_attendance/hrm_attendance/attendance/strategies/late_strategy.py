from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from ...settings.model import Policy
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Punch-in after start time + grace period."""

    def decide(self, *, punch_in: Optional[int], punch_out: Optional[int], policy: Policy) -> StatusDecision:
        late_by = (punch_in or 0) - policy.grace_end
        return StatusDecision(status=AttendanceStatus.LATE, note=f"{late_by} min after grace period")

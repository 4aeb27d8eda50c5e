from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from ...settings.model import Policy
from .base import AttendanceStrategy, StatusDecision


class OnTimeStrategy(AttendanceStrategy):
    """Punch-in within start time + grace period."""

    def decide(self, *, punch_in: Optional[int], punch_out: Optional[int], policy: Policy) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ON_TIME)

from __future__ import annotations

from typing import Optional

from ..duration import WorkedDuration, duration
from .base import WorkedTimeCalculator


class OvernightWrapCalculator(WorkedTimeCalculator):
    """Standard rule: out - in, plus one day when the shift crosses midnight."""

    def worked(self, punch_in: Optional[int], punch_out: Optional[int]) -> Optional[WorkedDuration]:
        return duration(punch_in, punch_out)

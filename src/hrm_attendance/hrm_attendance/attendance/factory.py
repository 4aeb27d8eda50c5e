from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..core.enums import AttendanceStatus, coerce_status
from ..settings.model import Policy
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy, StatusDecision
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy
from .strategies.override_strategy import OverrideStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    Rules, first match wins: override, missing punch-in, grace window.
    """

    def for_punches(
        self,
        *,
        punch_in: Optional[int],
        punch_out: Optional[int],
        policy: Policy,
        override: Any = None,
    ) -> AttendanceStrategy:
        status = coerce_status(override)
        if status is not None:
            return OverrideStrategy(status)

        if punch_in is None:
            return AbsentStrategy()

        if punch_in <= policy.grace_end:
            return OnTimeStrategy()
        return LateStrategy()

    def decide(
        self,
        *,
        punch_in: Optional[int],
        punch_out: Optional[int],
        policy: Policy,
        override: Any = None,
    ) -> StatusDecision:
        strategy = self.for_punches(punch_in=punch_in, punch_out=punch_out, policy=policy, override=override)
        return strategy.decide(punch_in=punch_in, punch_out=punch_out, policy=policy)


_default_factory = AttendanceStrategyFactory()


def classify(
    punch_in: Optional[int],
    punch_out: Optional[int],
    policy: Policy,
    override: Any = None,
) -> AttendanceStatus:
    """Derive the attendance status of one record."""

    return _default_factory.decide(punch_in=punch_in, punch_out=punch_out, policy=policy, override=override).status

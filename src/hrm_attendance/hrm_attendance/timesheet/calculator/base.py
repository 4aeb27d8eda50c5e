from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..duration import WorkedDuration


class WorkedTimeCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked time)."""

    @abstractmethod
    def worked(self, punch_in: Optional[int], punch_out: Optional[int]) -> Optional[WorkedDuration]:
        raise NotImplementedError

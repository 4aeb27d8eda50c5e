from __future__ import annotations

from typing import Mapping, Protocol


class SettingsRepository(Protocol):
    """Company settings provider (``StartTime``, ``LateGracePeriod``, ``WorkingDays``...)."""

    def get_settings(self) -> Mapping[str, str]:
        raise NotImplementedError

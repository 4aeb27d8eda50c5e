from __future__ import annotations

import logging

from ..core.exceptions import PersistenceError
from .model import Policy
from .repository import SettingsRepository

log = logging.getLogger(__name__)


class PolicyService:
    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def load_policy(self) -> Policy:
        """Current policy; defaults are used when the provider is unavailable."""

        try:
            raw = self._settings.get_settings()
        except PersistenceError as e:
            log.warning("Failed to load settings, using defaults: %s", e)
            return Policy.from_settings(None)

        policy = Policy.from_settings(raw)
        log.debug("Policy loaded: %s", policy.to_dict())
        return policy

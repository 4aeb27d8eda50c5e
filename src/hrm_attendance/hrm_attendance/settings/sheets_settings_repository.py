from __future__ import annotations

from typing import Mapping

from ..gateway.connection import SheetsApiClient
from .repository import SettingsRepository


class SheetsSettingsRepository(SettingsRepository):
    def __init__(self, client: SheetsApiClient):
        self._client = client

    def get_settings(self) -> Mapping[str, str]:
        data = self._client.get("getSettings") or {}
        if isinstance(data, list):
            # Key/value sheet rows: [{"key": "StartTime", "value": "09:00"}, ...]
            data = {str(r.get("key")): r.get("value") for r in data if isinstance(r, dict) and r.get("key")}
        return {str(k): "" if v is None else str(v) for k, v in dict(data).items()}

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import requests

from ..core.constants import DEFAULT_REQUEST_TIMEOUT
from ..core.exceptions import PersistenceError

log = logging.getLogger(__name__)

_STATUS_MESSAGES = {
    401: "Unauthorized. Please refresh and try again.",
    403: "Access forbidden. You do not have permission.",
    404: "Resource not found.",
    408: "Request timed out. Please check your connection and try again.",
    429: "Too many requests. Please wait and try again.",
}


@dataclass
class ApiConfig:
    url: str
    timeout: float = DEFAULT_REQUEST_TIMEOUT


class SheetsApiClient:
    """Singleton-like client for the spreadsheet web app.

    GET requests carry ``action`` plus query params; POST requests send the
    JSON body form-encoded as ``payload``. Every response is an envelope
    ``{"success": bool, "data": ..., "error": str, "code": int}``.
    """

    _instance: Optional["SheetsApiClient"] = None

    def __init__(self, config: ApiConfig, *, session: Optional[requests.Session] = None):
        self._config = config
        self._session = session or requests.Session()

    @classmethod
    def get_instance(cls, config: ApiConfig) -> "SheetsApiClient":
        if cls._instance is None:
            cls._instance = SheetsApiClient(config)
        return cls._instance

    def get(self, action: str, **params: Any) -> Any:
        query = {"action": action, **{k: v for k, v in params.items() if v is not None}}
        log.debug("GET %s %s", action, query)
        try:
            resp = self._session.get(self._config.url, params=query, timeout=self._config.timeout)
        except requests.RequestException as e:
            raise self._transport_error(action, e) from e
        return self._unwrap(action, resp)

    def post(self, action: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        payload = {"action": action, **(body or {})}
        log.debug("POST %s", action)
        try:
            resp = self._session.post(
                self._config.url,
                data={"payload": json.dumps(payload)},
                timeout=self._config.timeout,
            )
        except requests.RequestException as e:
            raise self._transport_error(action, e) from e
        return self._unwrap(action, resp)

    def _unwrap(self, action: str, resp: requests.Response) -> Any:
        try:
            body = resp.json()
        except ValueError:
            body = None

        if not resp.ok:
            message = _STATUS_MESSAGES.get(resp.status_code)
            if message is None:
                message = "Server error. Please try again later." if resp.status_code >= 500 else "An unexpected error occurred"
            if isinstance(body, dict) and body.get("error"):
                message = str(body["error"])
            log.error("API %s failed with HTTP %s: %s", action, resp.status_code, message)
            raise PersistenceError(message, code=resp.status_code, endpoint=action)

        if not isinstance(body, dict):
            log.error("API %s returned an unreadable response", action)
            raise PersistenceError("Failed to parse server response. Please try again.", code=422, endpoint=action)

        if not body.get("success"):
            message = str(body.get("error") or "Unknown error occurred")
            log.error("API %s rejected the request: %s", action, message)
            raise PersistenceError(message, code=int(body.get("code") or 400), endpoint=action)

        log.debug("Response from %s: %s", action, body.get("data"))
        return body.get("data")

    @staticmethod
    def _transport_error(action: str, error: requests.RequestException) -> PersistenceError:
        log.error("API %s transport error: %s", action, error)
        if isinstance(error, requests.Timeout):
            return PersistenceError(_STATUS_MESSAGES[408], code=408, endpoint=action)
        return PersistenceError("Network error. Please check your internet connection.", code=0, endpoint=action)

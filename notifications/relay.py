"""
notifications/relay.py — HTTP client for the push relay

Purpose
===============================================================================
The relay stores device push tokens and fans a message out to every stored
device. We only ever see subscriber counts and sent/failed tallies; token
internals stay on the relay's side.

Endpoints (JSON over HTTPS)
- POST   /api/store-token            (public)  {userId, fcmToken, userType?, subscribedAt?, userAgent?}
- POST   /api/send-push              (Bearer)  {title, message, priority} → {sent, failed}
- GET    /api/stats                  (Bearer)  → {subscriberCount}
- GET    /api/debug-tokens           (Bearer)  → token/platform listing
- DELETE /api/wipe-all-tokens        (Bearer)  → {success, deleted, total, timestamp, message}
- DELETE /api/remove-token/<userId>  (Bearer)  → 2xx on success

Error handling
- Every failure raises a PushRelayError subclass (see exceptions.py); nothing
  is retried here.
- A body that is not JSON (the relay's platform serves HTML error pages) is
  detected from the Content-Type header and reported as such instead of a
  raw parse error.
- subscriber_count() and remove_token() keep the lenient contract the admin
  panel relied on: 0 / False on failure, logged.
"""
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

import requests
from django.conf import settings

from .exceptions import (
    PushRelayError,
    RelayConfigurationError,
    RelayPermissionError,
    RelayRequestError,
    RelayResponseError,
    RelayUnavailable,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendResult:
    sent: int
    failed: int


@dataclass(frozen=True)
class WipeResult:
    success: bool
    deleted: int
    total: int
    timestamp: Optional[str]
    message: str


def as_int(value, default: int = 0) -> int:
    """Lenient count parsing for relay payloads: 5, "5", "5.0" all give 5."""
    if value is None or value == "":
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        logger.warning("Unparseable count from push relay: %r", value)
        return default


class PushRelayClient:
    def __init__(self, base_url: str, api_key: str = "", timeout: float = 10.0, session=None):
        self.base_url = (base_url or "").rstrip("/")
        self.api_key = api_key or ""
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls) -> "PushRelayClient":
        return cls(
            base_url=settings.PUSH_RELAY_URL,
            api_key=settings.PUSH_API_KEY,
            timeout=settings.PUSH_RELAY_TIMEOUT,
        )

    # ------------------------------------------------------------------ #
    # Transport                                                          #
    # ------------------------------------------------------------------ #
    def _send(self, method: str, path: str, *, auth: bool, json=None) -> requests.Response:
        if not self.base_url:
            raise RelayConfigurationError("PUSH_RELAY_URL is not set.")
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if auth:
            if not self.api_key:
                raise RelayConfigurationError("Push API key not available.")
            headers["Authorization"] = f"Bearer {self.api_key}"

        url = f"{self.base_url}{path}"
        try:
            return self.session.request(method, url, json=json, headers=headers, timeout=self.timeout)
        except requests.Timeout as exc:
            logger.warning("Push relay timed out: %s %s", method, path)
            raise RelayUnavailable(f"Push relay timed out after {self.timeout:g}s.") from exc
        except requests.RequestException as exc:
            logger.warning("Push relay unreachable: %s %s (%s)", method, path, exc)
            raise RelayUnavailable() from exc

    def _request(self, method: str, path: str, *, auth: bool = True, json=None) -> dict:
        response = self._send(method, path, auth=auth, json=json)
        status_code = response.status_code

        if status_code in (401, 403):
            logger.warning("Push relay refused %s %s with HTTP %s", method, path, status_code)
            raise RelayPermissionError(
                f"Push relay refused the request (HTTP {status_code}). Check PUSH_API_KEY.",
                upstream_status=status_code,
            )

        content_type = (response.headers.get("Content-Type") or "").lower()
        if "json" not in content_type:
            kind = "an HTML page" if "html" in content_type else f"'{content_type or 'no content type'}'"
            logger.error("Push relay returned %s for %s %s (HTTP %s)", kind, method, path, status_code)
            raise RelayResponseError(
                f"Push relay returned {kind} instead of JSON (HTTP {status_code}). "
                "The relay URL may be wrong or the relay is failing.",
                upstream_status=status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise RelayResponseError(
                f"Push relay sent malformed JSON (HTTP {status_code}).", upstream_status=status_code
            ) from exc

        if not isinstance(data, dict):
            data = {"data": data}

        if not response.ok or data.get("error"):
            message = data.get("error") or data.get("message") or f"HTTP {status_code}"
            logger.error("Push relay error on %s %s: %s", method, path, message)
            raise RelayRequestError(str(message), upstream_status=status_code)
        return data

    # ------------------------------------------------------------------ #
    # Operations                                                         #
    # ------------------------------------------------------------------ #
    def store_token(self, user_id: str, fcm_token: str, user_type=None, subscribed_at=None, user_agent=None) -> dict:
        payload = {"userId": user_id, "fcmToken": fcm_token}
        if user_type:
            payload["userType"] = user_type
        if subscribed_at:
            payload["subscribedAt"] = subscribed_at
        if user_agent:
            payload["userAgent"] = user_agent
        return self._request("POST", "/api/store-token", auth=False, json=payload)

    def send_push(self, title: str, message: str, priority: str = "normal") -> SendResult:
        data = self._request(
            "POST", "/api/send-push", json={"title": title, "message": message, "priority": priority}
        )
        return SendResult(sent=as_int(data.get("sent")), failed=as_int(data.get("failed")))

    def stats(self) -> dict:
        return self._request("GET", "/api/stats")

    def subscriber_count(self) -> int:
        try:
            return as_int(self.stats().get("subscriberCount"))
        except PushRelayError as exc:
            logger.warning("Failed to get subscriber count: %s", exc)
            return 0

    def debug_tokens(self) -> dict:
        return self._request("GET", "/api/debug-tokens")

    def wipe_all_tokens(self) -> WipeResult:
        data = self._request("DELETE", "/api/wipe-all-tokens")
        return WipeResult(
            success=bool(data.get("success")),
            deleted=as_int(data.get("deleted")),
            total=as_int(data.get("total")),
            timestamp=data.get("timestamp"),
            message=str(data.get("message") or ""),
        )

    def remove_token(self, user_id: str) -> bool:
        try:
            response = self._send("DELETE", f"/api/remove-token/{quote(str(user_id), safe='')}", auth=True)
        except PushRelayError as exc:
            logger.warning("Unsubscribe failed for %s: %s", user_id, exc)
            return False
        return response.ok

"""
notifications/background.py — push delivery decisions

Purpose
===============================================================================
Decide what happens to an incoming push payload and to a click on the
notification it produced. The handler returns typed messages
(notifications/messages.py); the browser side only executes them.

Rules
- Background delivery: duplicates inside the dedup window are dropped
  (returns None). Otherwise one SHOW_NOTIFICATION with a fixed tag, so a newer
  notification replaces the older one instead of stacking, and no renotify.
- Foreground delivery (page focused): an in-page banner, auto-dismissed after
  8 seconds.
- Click:
    action "dismiss"        → DISMISS
    a window on our host    → FOCUS_WINDOW (+ SHOW_ANNOUNCEMENT if the
                              notification carried an announcement)
    otherwise               → OPEN_WINDOW at the click URL, with
                              ?showAnnouncement=<id> when there is one

Payload shape (relay → browser)
    {"notification": {"title", "body"},
     "data": {"url", "priority", "timestamp", "announcement"}}
`data.announcement` arrives either as an object or as a JSON string.
"""
import json
import logging
import time
from typing import Iterable, Optional
from urllib.parse import urlsplit

from django.conf import settings

from announcements.deeplink import with_deep_link

from .dedup import DedupWindow, message_fingerprint
from .messages import Dismiss, FocusWindow, OpenWindow, ShowAnnouncement, ShowBanner, ShowNotification

logger = logging.getLogger(__name__)

NOTIFICATION_ICON = "/icons/icon-192.png"
NOTIFICATION_BADGE = "/icons/badge-72.png"
BANNER_TIMEOUT_SECONDS = 8


def _decode_announcement(value) -> Optional[dict]:
    if isinstance(value, dict):
        return value
    if isinstance(value, str) and value.strip():
        try:
            decoded = json.loads(value)
        except ValueError:
            logger.warning("Ignoring undecodable announcement data in push payload")
            return None
        return decoded if isinstance(decoded, dict) else None
    return None


def _section(payload, key) -> dict:
    value = (payload or {}).get(key)
    return value if isinstance(value, dict) else {}


class NotificationBackgroundHandler:
    def __init__(self, site_url: str, site_name: str, tag: str, dedup: Optional[DedupWindow] = None):
        self.site_url = site_url
        self.site_name = site_name
        self.tag = tag
        self.dedup = dedup or DedupWindow()

    @property
    def site_host(self) -> str:
        return (urlsplit(self.site_url).hostname or "").lower()

    def on_background_message(self, payload: dict, received_ms: Optional[int] = None) -> Optional[ShowNotification]:
        received_ms = int(time.time() * 1000) if received_ms is None else received_ms
        fingerprint = message_fingerprint(payload, received_ms)
        if self.dedup.seen(fingerprint):
            logger.info("Duplicate push ignored: %s", fingerprint)
            return None

        notification = _section(payload, "notification")
        data = _section(payload, "data")
        return ShowNotification(
            title=notification.get("title") or self.site_name,
            body=notification.get("body") or "New announcement available",
            icon=NOTIFICATION_ICON,
            badge=NOTIFICATION_BADGE,
            tag=self.tag,
            data={
                "click_action": data.get("url") or self.site_url,
                "priority": data.get("priority") or "normal",
                "timestamp": data.get("timestamp") or received_ms,
                "announcement": _decode_announcement(data.get("announcement")),
            },
        )

    def on_foreground_message(self, payload: dict) -> ShowBanner:
        notification = _section(payload, "notification")
        return ShowBanner(
            title=notification.get("title") or "New Announcement",
            body=notification.get("body") or f"You have a new message from {self.site_name}",
            timeout_seconds=BANNER_TIMEOUT_SECONDS,
        )

    def on_notification_click(self, action: Optional[str], data: Optional[dict], windows: Iterable[dict] = ()):
        if action == "dismiss":
            return Dismiss()

        data = data or {}
        announcement = _decode_announcement(data.get("announcement"))

        for window in windows or ():
            url = str((window or {}).get("url") or "")
            if (urlsplit(url).hostname or "").lower() == self.site_host:
                forwarded = ShowAnnouncement(announcement) if announcement else None
                return FocusWindow(window_id=str(window.get("id", "")), message=forwarded)

        target = data.get("click_action") or self.site_url
        if announcement and announcement.get("id") is not None:
            target = with_deep_link(target, announcement["id"])
        return OpenWindow(url=target)


_handler = None


def get_handler() -> NotificationBackgroundHandler:
    """Process-wide handler; the dedup window must outlive a single request."""
    global _handler
    if _handler is None:
        _handler = NotificationBackgroundHandler(
            site_url=settings.SITE_URL,
            site_name=settings.SITE_NAME,
            tag=settings.NOTIFICATION_TAG,
            dedup=DedupWindow(window_seconds=settings.PUSH_DEDUP_WINDOW_SECONDS),
        )
    return _handler


def reset_handler() -> None:
    global _handler
    _handler = None

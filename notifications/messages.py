"""
notifications/messages.py

Messages exchanged between the notification handler and the pages it talks
to. Each kind is a frozen dataclass with a fixed `type` tag; `to_dict()` is
the JSON shape posted to a page, `parse_message()` goes the other way.

Kinds
- SHOW_ANNOUNCEMENT  page must display this announcement now
- SHOW_NOTIFICATION  system notification to raise (background delivery)
- SHOW_BANNER        in-page banner (page focused when the push arrived)
- FOCUS_WINDOW       focus an open window, optionally forwarding a message
- OPEN_WINDOW        open a new window at url
- DISMISS            do nothing
"""
from dataclasses import asdict, dataclass, field
from typing import Optional, Tuple

SHOW_ANNOUNCEMENT = "SHOW_ANNOUNCEMENT"
SHOW_NOTIFICATION = "SHOW_NOTIFICATION"
SHOW_BANNER = "SHOW_BANNER"
FOCUS_WINDOW = "FOCUS_WINDOW"
OPEN_WINDOW = "OPEN_WINDOW"
DISMISS = "DISMISS"


class MessageError(ValueError):
    pass


@dataclass(frozen=True)
class NotificationAction:
    action: str
    title: str


DEFAULT_ACTIONS: Tuple[NotificationAction, ...] = (
    NotificationAction("view", "View"),
    NotificationAction("dismiss", "Dismiss"),
)


@dataclass(frozen=True)
class ShowAnnouncement:
    announcement: dict
    type: str = field(default=SHOW_ANNOUNCEMENT, init=False)

    def to_dict(self) -> dict:
        return {"type": self.type, "announcement": dict(self.announcement)}


@dataclass(frozen=True)
class ShowNotification:
    title: str
    body: str
    icon: str
    badge: str
    tag: str
    data: dict
    actions: Tuple[NotificationAction, ...] = DEFAULT_ACTIONS
    renotify: bool = False
    require_interaction: bool = False
    silent: bool = False
    type: str = field(default=SHOW_NOTIFICATION, init=False)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "title": self.title,
            "options": {
                "body": self.body,
                "icon": self.icon,
                "badge": self.badge,
                "tag": self.tag,
                "renotify": self.renotify,
                "requireInteraction": self.require_interaction,
                "silent": self.silent,
                "data": dict(self.data),
                "actions": [asdict(a) for a in self.actions],
            },
        }


@dataclass(frozen=True)
class ShowBanner:
    title: str
    body: str
    timeout_seconds: int = 8
    type: str = field(default=SHOW_BANNER, init=False)

    def to_dict(self) -> dict:
        return {"type": self.type, "title": self.title, "body": self.body, "timeoutSeconds": self.timeout_seconds}


@dataclass(frozen=True)
class FocusWindow:
    window_id: str
    message: Optional[ShowAnnouncement] = None
    type: str = field(default=FOCUS_WINDOW, init=False)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "windowId": self.window_id,
            "message": self.message.to_dict() if self.message else None,
        }


@dataclass(frozen=True)
class OpenWindow:
    url: str
    type: str = field(default=OPEN_WINDOW, init=False)

    def to_dict(self) -> dict:
        return {"type": self.type, "url": self.url}


@dataclass(frozen=True)
class Dismiss:
    type: str = field(default=DISMISS, init=False)

    def to_dict(self) -> dict:
        return {"type": self.type}


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------
def _require(data: dict, key: str, kind):
    value = data.get(key)
    if not isinstance(value, kind):
        raise MessageError(f"'{key}' is missing or has the wrong type.")
    return value


def _parse_show_announcement(data):
    return ShowAnnouncement(announcement=_require(data, "announcement", dict))


def _parse_show_notification(data):
    options = _require(data, "options", dict)
    actions = tuple(
        NotificationAction(str(a.get("action", "")), str(a.get("title", "")))
        for a in options.get("actions") or ()
        if isinstance(a, dict)
    )
    return ShowNotification(
        title=_require(data, "title", str),
        body=str(options.get("body", "")),
        icon=str(options.get("icon", "")),
        badge=str(options.get("badge", "")),
        tag=str(options.get("tag", "")),
        data=options.get("data") if isinstance(options.get("data"), dict) else {},
        actions=actions or DEFAULT_ACTIONS,
        renotify=bool(options.get("renotify", False)),
        require_interaction=bool(options.get("requireInteraction", False)),
        silent=bool(options.get("silent", False)),
    )


def _parse_show_banner(data):
    timeout = data.get("timeoutSeconds", 8)
    if not isinstance(timeout, int) or isinstance(timeout, bool):
        raise MessageError("'timeoutSeconds' must be an integer.")
    return ShowBanner(title=_require(data, "title", str), body=_require(data, "body", str), timeout_seconds=timeout)


def _parse_focus_window(data):
    inner = data.get("message")
    forwarded = None
    if inner is not None:
        if not isinstance(inner, dict) or inner.get("type") != SHOW_ANNOUNCEMENT:
            raise MessageError("A focused window can only be forwarded SHOW_ANNOUNCEMENT.")
        forwarded = _parse_show_announcement(inner)
    return FocusWindow(window_id=_require(data, "windowId", str), message=forwarded)


def _parse_open_window(data):
    return OpenWindow(url=_require(data, "url", str))


_PARSERS = {
    SHOW_ANNOUNCEMENT: _parse_show_announcement,
    SHOW_NOTIFICATION: _parse_show_notification,
    SHOW_BANNER: _parse_show_banner,
    FOCUS_WINDOW: _parse_focus_window,
    OPEN_WINDOW: _parse_open_window,
    DISMISS: lambda data: Dismiss(),
}


def parse_message(data):
    if not isinstance(data, dict):
        raise MessageError("Message must be a JSON object.")
    kind = data.get("type")
    parser = _PARSERS.get(kind)
    if parser is None:
        raise MessageError(f"Unknown message type: {kind!r}")
    return parser(data)

import json

import pytest

from notifications.background import NotificationBackgroundHandler
from notifications.dedup import DedupWindow, message_fingerprint
from notifications.messages import (
    Dismiss,
    FocusWindow,
    MessageError,
    OpenWindow,
    ShowAnnouncement,
    ShowBanner,
    ShowNotification,
    parse_message,
)


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def handler(clock):
    return NotificationBackgroundHandler(
        site_url="https://community.example.org/",
        site_name="Community Center",
        tag="site-announcement",
        dedup=DedupWindow(window_seconds=5.0, clock=clock),
    )


# -----------------------
# Dedup
# -----------------------
def test_fingerprint_prefers_sender_timestamp():
    assert message_fingerprint({"data": {"timestamp": "1700"}}, 5) == "1700"
    assert message_fingerprint({"notification": {"title": "Hi"}}, 5) == "Hi5"
    assert message_fingerprint({"data": "junk"}, 7) == "7"


def test_duplicate_inside_window_is_suppressed(clock):
    window = DedupWindow(window_seconds=5.0, clock=clock)
    assert window.seen("a") is False
    clock.now += 4.9
    assert window.seen("a") is True
    # a duplicate does not extend the window
    clock.now += 0.2
    assert window.seen("a") is False
    assert len(window) == 1


# -----------------------
# Background delivery
# -----------------------
def test_background_message_builds_notification(handler):
    payload = {
        "notification": {"title": "Road closure", "body": "Use the east gate"},
        "data": {"priority": "high", "timestamp": "1700000000000", "announcement": json.dumps({"id": 4, "title": "Road closure"})},
    }

    message = handler.on_background_message(payload, received_ms=1)

    assert isinstance(message, ShowNotification)
    assert message.title == "Road closure"
    assert message.tag == "site-announcement"
    assert (message.renotify, message.require_interaction, message.silent) == (False, False, False)
    assert message.data["click_action"] == "https://community.example.org/"
    assert message.data["priority"] == "high"
    assert message.data["announcement"] == {"id": 4, "title": "Road closure"}
    assert [a.action for a in message.actions] == ["view", "dismiss"]

    options = message.to_dict()["options"]
    assert options["requireInteraction"] is False
    assert options["icon"] == "/icons/icon-192.png"


def test_background_defaults(handler):
    message = handler.on_background_message({}, received_ms=42)
    assert message.title == "Community Center"
    assert message.body == "New announcement available"
    assert message.data["priority"] == "normal"
    assert message.data["timestamp"] == 42
    assert message.data["announcement"] is None


def test_same_payload_twice_shows_once(handler, clock):
    payload = {"data": {"timestamp": "abc"}}
    assert handler.on_background_message(payload, received_ms=1) is not None
    assert handler.on_background_message(payload, received_ms=2) is None
    clock.now += 6
    assert handler.on_background_message(payload, received_ms=3) is not None


def test_foreground_banner(handler):
    banner = handler.on_foreground_message({})
    assert isinstance(banner, ShowBanner)
    assert banner.title == "New Announcement"
    assert banner.body == "You have a new message from Community Center"
    assert banner.timeout_seconds == 8


# -----------------------
# Clicks
# -----------------------
def test_dismiss_does_nothing(handler):
    assert isinstance(handler.on_notification_click("dismiss", {"announcement": {"id": 1}}), Dismiss)


def test_click_focuses_open_site_window(handler):
    windows = [
        {"id": "w1", "url": "https://elsewhere.example/"},
        {"id": "w2", "url": "https://community.example.org/programs"},
    ]
    message = handler.on_notification_click("view", {"announcement": {"id": 9}}, windows)

    assert isinstance(message, FocusWindow)
    assert message.window_id == "w2"
    assert message.message == ShowAnnouncement({"id": 9})
    assert message.to_dict()["message"]["type"] == "SHOW_ANNOUNCEMENT"


def test_host_match_is_exact(handler):
    windows = [{"id": "w1", "url": "https://community.example.org.evil.test/"}]
    message = handler.on_notification_click(None, {}, windows)
    assert isinstance(message, OpenWindow)


def test_click_opens_deep_link_when_no_window(handler):
    data = {"click_action": "https://community.example.org/?lang=en", "announcement": json.dumps({"id": 12})}
    message = handler.on_notification_click("view", data, [])
    assert isinstance(message, OpenWindow)
    assert message.url == "https://community.example.org/?lang=en&showAnnouncement=12"


def test_click_without_announcement_opens_site(handler):
    message = handler.on_notification_click(None, None)
    assert message == OpenWindow("https://community.example.org/")


# -----------------------
# Message parsing
# -----------------------
def test_parse_round_trip_of_built_messages(handler):
    built = handler.on_background_message({"notification": {"title": "T"}}, received_ms=5)
    assert parse_message(built.to_dict()) == built
    assert parse_message({"type": "DISMISS"}) == Dismiss()


@pytest.mark.parametrize(
    "data",
    [
        None,
        {"type": "NOPE"},
        {"type": "SHOW_ANNOUNCEMENT"},
        {"type": "OPEN_WINDOW", "url": 3},
        {"type": "SHOW_BANNER", "title": "t", "body": "b", "timeoutSeconds": True},
        {"type": "FOCUS_WINDOW", "windowId": "w", "message": {"type": "DISMISS"}},
    ],
)
def test_parse_rejects_malformed(data):
    with pytest.raises(MessageError):
        parse_message(data)

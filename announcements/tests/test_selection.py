from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

from announcements.priority import PRIORITY_COLORS, Priority
from announcements.selection import order_by_priority, pick_for_bell, select_announcement, split_valid

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def rec(id, priority="low", age_minutes=0, expiry=None):
    return SimpleNamespace(
        id=id,
        priority=priority,
        created_at=NOW - timedelta(minutes=age_minutes),
        expiry_date=expiry,
    )


# -----------------------
# Priority
# -----------------------
def test_priority_weights_follow_declaration_order():
    assert Priority.LOW.weight < Priority.MEDIUM.weight < Priority.HIGH.weight


def test_priority_coerce_unknown_and_missing_to_low():
    assert Priority.coerce("HIGH") is Priority.HIGH
    assert Priority.coerce(" medium ") is Priority.MEDIUM
    assert Priority.coerce("urgent") is Priority.LOW
    assert Priority.coerce(None) is Priority.LOW
    assert Priority.coerce(Priority.HIGH) is Priority.HIGH


def test_priority_badge_and_color():
    assert Priority.HIGH.display_label == "EMERGENCY"
    assert Priority.MEDIUM.display_label == "ANNOUNCEMENT"
    assert Priority.LOW.display_label == "NOTIFICATION"
    assert Priority.HIGH.color == PRIORITY_COLORS[Priority.HIGH]


# -----------------------
# Selection
# -----------------------
def test_highest_priority_wins_over_newer_lower_priority():
    old_high = rec(1, "high", age_minutes=600)
    new_low = rec(2, "low", age_minutes=1)
    new_medium = rec(3, "medium", age_minutes=2)

    selection = select_announcement([new_low, old_high, new_medium], [], NOW)

    assert selection.current is old_high
    assert [a.id for a in selection.candidates] == [1, 3, 2]


def test_newer_wins_within_same_priority():
    older = rec(1, "medium", age_minutes=30)
    newer = rec(2, "medium", age_minutes=5)
    assert select_announcement([older, newer], [], NOW).current is newer


def test_expiry_is_strictly_before_now():
    at_now = rec(1, "high", expiry=NOW)
    past = rec(2, "high", expiry=NOW - timedelta(seconds=1))
    future = rec(3, "low", expiry=NOW + timedelta(days=1))

    valid, _ = split_valid([at_now, past, future], [], NOW)

    assert [a.id for a in valid] == [1, 3]


def test_closed_excluded_from_display_but_counted():
    high = rec(1, "high")
    low = rec(2, "low")

    selection = select_announcement([high, low], ["1"], NOW)

    assert selection.current is low
    assert selection.count == 2


def test_everything_closed_or_expired_shows_nothing():
    closed = rec(1, "high")
    expired = rec(2, "high", expiry=NOW - timedelta(days=1))

    selection = select_announcement([closed, expired], [1], NOW)

    assert selection.current is None
    assert selection.count == 1


def test_missing_created_at_sorts_as_oldest():
    undated = SimpleNamespace(id=1, priority="low", created_at=None, expiry_date=None)
    dated = rec(2, "low", age_minutes=60)
    assert [a.id for a in order_by_priority([undated, dated])] == [2, 1]


def test_unknown_priority_ranks_as_low():
    odd = rec(1, "urgent", age_minutes=0)
    medium = rec(2, "medium", age_minutes=100)
    assert select_announcement([odd, medium], [], NOW).current is medium


# -----------------------
# Bell
# -----------------------
def test_bell_prefers_current_announcement():
    high = rec(1, "high")
    low = rec(2, "low")
    assert pick_for_bell([high, low], current_id="2") is low


def test_bell_falls_back_to_highest_priority_including_closed():
    high = rec(1, "high")
    low = rec(2, "low")
    # closed-list is not consulted by the bell
    assert pick_for_bell([low, high], current_id=None) is high
    assert pick_for_bell([low, high], current_id=99) is high


def test_bell_with_nothing_available():
    assert pick_for_bell([], current_id=1) is None

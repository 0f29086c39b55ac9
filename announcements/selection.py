"""
announcements/selection.py

Which announcement a visitor sees, decided without touching the database.

Given the active announcements (already filtered on is_active by the query),
the visitor's closed-list and "now":

1) drop anything whose expiry_date is strictly before now
2) keep two lists: every valid announcement (feeds the bell count) and the
   valid ones this visitor has not closed (candidates for auto-display)
3) order candidates by priority (high > medium > low), newer first on ties
4) the first candidate, if any, is auto-displayed

Everything here accepts any object exposing `id`, `priority`, `created_at`
and `expiry_date`, so the functions work on model instances and plain
records alike.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone as dt_timezone
from typing import Iterable, List, Optional, Sequence, Tuple

from .priority import Priority

_EPOCH = datetime.min.replace(tzinfo=dt_timezone.utc)


@dataclass
class Selection:
    current: Optional[object] = None
    available: List[object] = field(default_factory=list)
    candidates: List[object] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.available)


def is_expired(announcement, now: datetime) -> bool:
    expiry = getattr(announcement, "expiry_date", None)
    return bool(expiry) and expiry < now


def _created(announcement) -> datetime:
    # A missing timestamp sorts as oldest instead of breaking the sort.
    return getattr(announcement, "created_at", None) or _EPOCH


def sort_key(announcement) -> Tuple[int, datetime]:
    return (Priority.coerce(getattr(announcement, "priority", None)).weight, _created(announcement))


def order_by_priority(announcements: Iterable) -> list:
    """Highest priority first; newer created_at wins within a priority."""
    return sorted(announcements, key=sort_key, reverse=True)


def split_valid(announcements: Iterable, closed_ids: Sequence[str], now: datetime) -> Tuple[list, list]:
    closed = {str(i) for i in closed_ids}
    valid, not_closed = [], []
    for item in announcements:
        if is_expired(item, now):
            continue
        valid.append(item)
        if str(item.id) not in closed:
            not_closed.append(item)
    return valid, not_closed


def select_announcement(announcements: Iterable, closed_ids: Sequence[str], now: datetime) -> Selection:
    valid, not_closed = split_valid(announcements, closed_ids, now)
    candidates = order_by_priority(not_closed)
    return Selection(
        current=candidates[0] if candidates else None,
        available=valid,
        candidates=candidates,
    )


def pick_for_bell(available: Sequence, current_id=None):
    """
    What the bell re-surfaces: the announcement already on the page when it
    is still valid, otherwise the best of every valid one. Closed
    announcements stay eligible here; only auto-display honours the closed-list.
    """
    if current_id is not None:
        for item in available:
            if str(item.id) == str(current_id):
                return item
    ordered = order_by_priority(available)
    return ordered[0] if ordered else None

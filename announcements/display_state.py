"""
announcements/display_state.py

Per-visitor display memory: which announcements this browser closed, which
one sits minimized as the floating button, and where that button was dragged.

Storage is any mutable mapping. In the API it is the visitor's Django session
(per browser, never shared, last write wins between tabs); tests pass a dict.
The key names match what the public site stored in localStorage so a visitor
moving between the two sees the same state.

State machine per announcement
    Hidden → Shown → Minimized ⇄ Shown → Closed
Closed is terminal for auto-display. Closing from Shown or Minimized clears
the minimized flag.
"""
from enum import Enum
from typing import MutableMapping, Optional

CLOSED_KEY = "closedAnnouncements"
POSITION_KEY = "floatingBtnPosition"
MAX_CLOSED = 20


def minimized_key(announcement_id) -> str:
    return f"announcement_{announcement_id}_minimized"


class DisplayPhase(str, Enum):
    HIDDEN = "hidden"
    SHOWN = "shown"
    MINIMIZED = "minimized"
    CLOSED = "closed"


class VisitorDisplayState:
    def __init__(self, store: MutableMapping):
        self.store = store

    # ---- closed-list -------------------------------------------------------
    def closed_ids(self) -> list:
        raw = self.store.get(CLOSED_KEY) or []
        if not isinstance(raw, list):
            return []
        return [str(i) for i in raw]

    def is_closed(self, announcement_id) -> bool:
        return str(announcement_id) in self.closed_ids()

    def close(self, announcement_id) -> DisplayPhase:
        key = str(announcement_id)
        closed = self.closed_ids()
        if key not in closed:
            closed.append(key)
            # oldest first out
            closed = closed[-MAX_CLOSED:]
            self.store[CLOSED_KEY] = closed
        self.store.pop(minimized_key(key), None)
        return DisplayPhase.CLOSED

    # ---- minimize / expand -------------------------------------------------
    def is_minimized(self, announcement_id) -> bool:
        return self.store.get(minimized_key(announcement_id)) is True

    def minimize(self, announcement_id) -> DisplayPhase:
        self.store[minimized_key(announcement_id)] = True
        return DisplayPhase.MINIMIZED

    def expand(self, announcement_id) -> DisplayPhase:
        self.store.pop(minimized_key(announcement_id), None)
        return DisplayPhase.SHOWN

    def phase(self, announcement_id) -> DisplayPhase:
        """Persisted phase only; Shown lives on the page, so unmarked ids read as Hidden."""
        if self.is_closed(announcement_id):
            return DisplayPhase.CLOSED
        if self.is_minimized(announcement_id):
            return DisplayPhase.MINIMIZED
        return DisplayPhase.HIDDEN

    # ---- floating button position -----------------------------------------
    def save_position(self, x: float, y: float) -> dict:
        position = {"x": float(x), "y": float(y)}
        self.store[POSITION_KEY] = position
        return position

    def position(self) -> Optional[dict]:
        saved = self.store.get(POSITION_KEY)
        if not isinstance(saved, dict) or "x" not in saved or "y" not in saved:
            return None
        return {"x": saved["x"], "y": saved["y"]}

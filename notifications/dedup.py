"""
notifications/dedup.py

Short-lived duplicate suppression for incoming push payloads. The relay can
deliver the same message twice within a few seconds; only the first one
raises a notification.

Entries expire lazily: every lookup drops what is past its deadline, so no
timer or background task is involved.
"""
import threading
import time


def message_fingerprint(payload: dict, received_ms: int) -> str:
    """data.timestamp when the sender set one, else title + arrival time."""
    data = (payload or {}).get("data")
    if not isinstance(data, dict):
        data = {}
    timestamp = data.get("timestamp")
    if timestamp:
        return str(timestamp)
    notification = (payload or {}).get("notification") or {}
    title = notification.get("title") or data.get("title") or ""
    return f"{title}{received_ms}"


class DedupWindow:
    def __init__(self, window_seconds: float = 5.0, clock=time.monotonic):
        self.window_seconds = window_seconds
        self.clock = clock
        self._expires = {}
        self._lock = threading.Lock()

    def _purge(self, now: float) -> None:
        for key in [k for k, deadline in self._expires.items() if deadline <= now]:
            del self._expires[key]

    def seen(self, fingerprint: str) -> bool:
        """True for a repeat inside the window; first sightings are recorded."""
        with self._lock:
            now = self.clock()
            self._purge(now)
            if fingerprint in self._expires:
                return True
            self._expires[fingerprint] = now + self.window_seconds
            return False

    def __len__(self):
        with self._lock:
            self._purge(self.clock())
            return len(self._expires)

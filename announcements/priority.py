"""
announcements/priority.py

One ordered priority enum shared by selection, badge rendering and
notification colors.

Notes
-----
- The total order comes from declaration order (low < medium < high), so
  `weight` is never spelled out as a second lookup table.
- Unknown or missing values coerce to LOW; records written by older clients
  without a priority still sort and render.
"""
from django.db import models


class Priority(models.TextChoices):
    LOW = "low", "Notification"
    MEDIUM = "medium", "Announcement"
    HIGH = "high", "Emergency"

    @property
    def weight(self) -> int:
        return list(type(self)).index(self) + 1

    @property
    def display_label(self) -> str:
        """Badge text: NOTIFICATION / ANNOUNCEMENT / EMERGENCY."""
        return str(self.label).upper()

    @property
    def color(self) -> str:
        return PRIORITY_COLORS[self]

    @classmethod
    def coerce(cls, value) -> "Priority":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.LOW


PRIORITY_COLORS = {
    Priority.HIGH: "linear-gradient(135deg, #e53e3e 0%, #c53030 100%)",
    Priority.MEDIUM: "linear-gradient(135deg, #f6ad55 0%, #ed8936 100%)",
    Priority.LOW: "linear-gradient(135deg, #667eea 0%, #764ba2 100%)",
}
